"""
Shared fixtures for pipeline tests.

The key pool is real (in a temp dir with a fake clock); the vision
converter is scripted so each test controls the outcome sequence.
"""

from unittest.mock import MagicMock

import pytest

from infra.keypool import CooldownRecorder, CredentialSelector
from pipeline.convert import RetryingPageProcessor


class ScriptedConverter:
    """Returns queued outcomes in order and records which key was used.

    Once the script runs out the last outcome repeats.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def convert(self, credential, page_image):
        self.calls.append(credential.id)
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


@pytest.fixture
def scripted():
    return ScriptedConverter


@pytest.fixture
def selector(key_store):
    return CredentialSelector(key_store)


@pytest.fixture
def cooldown(key_store):
    return CooldownRecorder(key_store)


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def make_processor(selector, cooldown, sleep):
    def factory(converter, **kwargs):
        return RetryingPageProcessor(selector, converter, cooldown, sleep=sleep, **kwargs)
    return factory
