import logging
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from PIL import Image

from infra.errors import NoCredentialAvailable
from infra.keypool import CooldownRecorder, CredentialSelector, Provider
from infra.vision import PageConverter, OutcomeStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 6
DEFAULT_MAX_FAILURES = 3
DEFAULT_WAIT_SECONDS = 5.0


def error_placeholder(page_number: int, message: str) -> str:
    return f"\n\n> **Error processing Page {page_number}**: {message}\n\n"


@dataclass
class PageResult:
    page_number: int
    text: str
    attempts: int
    failed: bool = False
    error_message: Optional[str] = None


class RetryingPageProcessor:
    """
    Drives one page to a final text, rotating keys as needed.

    Two ceilings bound the loop: ``max_attempts`` conversion calls in total,
    and ``max_failures`` non-rate-limit failures. A rate limit puts the key on
    cooldown and retries immediately with the next key. When no key is
    eligible the processor waits ``wait_seconds`` once; if there is still no
    key, NoCredentialAvailable is raised and the whole document stops.

    Every other way out of the loop yields text: either the transcription or
    an inline error placeholder, so one bad page never sinks a document.
    """

    def __init__(
        self,
        selector: CredentialSelector,
        converters: Union[PageConverter, Mapping[Provider, PageConverter]],
        cooldown: CooldownRecorder,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_failures: int = DEFAULT_MAX_FAILURES,
        wait_seconds: float = DEFAULT_WAIT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        pipeline_logger=None,
    ):
        self.selector = selector
        self.converters = converters
        self.cooldown = cooldown
        self.max_attempts = max_attempts
        self.max_failures = max_failures
        self.wait_seconds = wait_seconds
        self.sleep = sleep
        self.pipeline_logger = pipeline_logger

    def converter_for(self, provider: Provider) -> PageConverter:
        if isinstance(self.converters, Mapping):
            try:
                return self.converters[provider]
            except KeyError:
                raise ValueError(f"No converter configured for provider '{provider.value}'")
        return self.converters

    def process_page(self, provider, page_number: int, page_image: Image.Image, pipeline_logger=None) -> str:
        return self.process(provider, page_number, page_image, pipeline_logger=pipeline_logger).text

    def process(self, provider, page_number: int, page_image: Image.Image, pipeline_logger=None) -> PageResult:
        """Run the retry loop for one page. ``pipeline_logger`` overrides the instance logger for this call."""
        provider = Provider.parse(provider)
        log = pipeline_logger if pipeline_logger is not None else self.pipeline_logger
        converter = self.converter_for(provider)

        attempts = 0
        failures = 0
        last_error = None

        while attempts < self.max_attempts:
            credential = self._acquire(provider, page_number, log)

            outcome = converter.convert(credential, page_image)
            attempts += 1

            if outcome.status == OutcomeStatus.SUCCESS:
                self._log(
                    log, 'info', f"Page {page_number} converted",
                    page=page_number, attempt=attempts, credential_id=credential.id,
                    status=outcome.status.value, duration_seconds=round(outcome.execution_time_seconds, 3),
                )
                return PageResult(page_number, outcome.text, attempts)

            last_error = outcome.error_message

            if outcome.status == OutcomeStatus.RATE_LIMITED:
                self.cooldown.mark_rate_limited(credential.id)
                self._log(
                    log, 'warning', f"Page {page_number} rate limited on {credential.label}",
                    page=page_number, attempt=attempts, credential_id=credential.id,
                    status=outcome.status.value,
                )
                continue

            failures += 1
            self._log(
                log, 'warning', f"Page {page_number} failed ({failures}/{self.max_failures})",
                page=page_number, attempt=attempts, credential_id=credential.id,
                status=outcome.status.value, error=last_error,
            )
            if failures >= self.max_failures:
                break

        message = last_error or "Unknown error occurred"
        self._log(
            log, 'error', f"Page {page_number} gave up after {attempts} attempt(s)",
            page=page_number, attempt=attempts, error=message,
        )
        return PageResult(
            page_number,
            error_placeholder(page_number, message),
            attempts,
            failed=True,
            error_message=message,
        )

    def _acquire(self, provider: Provider, page_number: int, log=None):
        credential = self.selector.select_next(provider)
        if credential is not None:
            return credential

        self._log(
            log, 'warning', f"No {provider.value} key available for page {page_number}, "
                       f"waiting {self.wait_seconds:.0f}s",
            page=page_number,
        )
        self.sleep(self.wait_seconds)

        credential = self.selector.select_next(provider)
        if credential is None:
            raise NoCredentialAvailable(provider.value)
        return credential

    def _log(self, pipeline_logger, level: str, message: str, **fields):
        if pipeline_logger is not None:
            getattr(pipeline_logger, level)(message, **fields)
        else:
            getattr(logger, level)(message)
