"""
Pytest configuration for project root.

Ensures project modules can be imported in tests.
Provides global fixtures for the key pool and page images.
"""

import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


class FakeClock:
    """Manually advanced epoch clock for cooldown tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cipher():
    from infra.keypool import SecretCipher, generate_key
    return SecretCipher(generate_key())


@pytest.fixture
def key_store(cipher, clock, tmp_path):
    """CredentialStore persisted to a temp keys.json with a fake clock."""
    from infra.keypool import CredentialStore
    return CredentialStore(cipher, state_file=tmp_path / "keys.json", clock=clock)


@pytest.fixture
def page_image():
    from PIL import Image
    return Image.new('RGB', (120, 160), color='white')
