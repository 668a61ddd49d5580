"""
Tests for pipeline/convert/processor.py

Key behaviors to verify:
1. Success returns text on the first eligible key
2. Rate limits cool the key down and rotate immediately
3. Three hard failures end in a placeholder
4. Never more than six conversion calls per page
5. No key after one wait is fatal to the document
"""

from unittest.mock import MagicMock

import pytest

from infra.errors import NoCredentialAvailable
from infra.keypool import Provider
from infra.vision import PageOutcome
from pipeline.convert import PageResult, error_placeholder


def ok(text: str = "", **kwargs):
    return PageOutcome.succeeded(text, **kwargs)
limited = PageOutcome.limited


def failed(message="boom"):
    return PageOutcome.failed(message, status_code=500)


class TestSuccess:
    def test_first_attempt_success(self, key_store, make_processor, scripted, page_image, sleep):
        key_store.add("a", "glm")
        converter = scripted(ok("# Page one"))

        result = make_processor(converter).process("glm", 1, page_image)

        assert result == PageResult(1, "# Page one", attempts=1)
        assert sleep.call_count == 0

    def test_process_page_returns_text(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "glm")
        processor = make_processor(scripted(ok("hello")))

        assert processor.process_page(Provider.GLM, 1, page_image) == "hello"

    def test_empty_text_is_success(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "glm")

        result = make_processor(scripted(ok(""))).process("glm", 1, page_image)

        assert result.text == ""
        assert result.failed is False


class TestRateLimits:
    def test_rotates_to_next_key_without_sleeping(self, key_store, make_processor, scripted, page_image, sleep, clock):
        a = key_store.add("a", "glm")
        b = key_store.add("b", "glm")
        converter = scripted(limited(), ok("from B"))

        result = make_processor(converter).process("glm", 1, page_image)

        assert result.text == "from B"
        assert converter.calls == [a.id, b.id]
        assert key_store.get(a.id).cooldown_until == clock.now + 60
        assert key_store.get(b.id).cooldown_until is None
        assert sleep.call_count == 0

    def test_single_key_rate_limited_is_fatal_after_one_wait(self, key_store, make_processor, scripted, page_image, sleep):
        key_store.add("a", "glm")
        converter = scripted(limited())

        with pytest.raises(NoCredentialAvailable) as exc_info:
            make_processor(converter).process("glm", 1, page_image)

        assert exc_info.value.provider == "glm"
        assert "No available GLM API keys" in str(exc_info.value)
        sleep.assert_called_once_with(5.0)
        assert len(converter.calls) == 1

    def test_wait_then_key_recovers(self, key_store, make_processor, scripted, page_image, sleep, clock):
        a = key_store.add("a", "glm")
        converter = scripted(limited(), ok("after wait"))
        # The wait lets the cooldown run out
        sleep.side_effect = lambda seconds: clock.advance(60)

        result = make_processor(converter).process("glm", 1, page_image)

        assert result.text == "after wait"
        assert converter.calls == [a.id, a.id]
        sleep.assert_called_once_with(5.0)

    def test_only_rate_limits_exhaust_attempts(self, key_store, make_processor, scripted, page_image):
        for i in range(3):
            key_store.add(f"k{i}", "glm")
        converter = scripted(limited())
        # Keys never actually cool down, so only the attempt ceiling stops the loop
        key_store.set_cooldown = lambda credential_id, duration: None

        result = make_processor(converter).process("glm", 4, page_image)

        assert len(converter.calls) == 6
        assert result.failed is True
        assert result.attempts == 6
        assert result.text == error_placeholder(4, "Rate limit exceeded")


class TestFailures:
    def test_three_failures_yield_placeholder(self, key_store, make_processor, scripted, page_image, sleep):
        key_store.add("a", "glm")
        converter = scripted(failed("first"), failed("second"), failed("model overloaded"))

        result = make_processor(converter).process("glm", 2, page_image)

        assert len(converter.calls) == 3
        assert result.failed is True
        assert result.error_message == "model overloaded"
        assert result.text == "\n\n> **Error processing Page 2**: model overloaded\n\n"
        assert sleep.call_count == 0

    def test_failures_do_not_cool_keys_down(self, key_store, make_processor, scripted, page_image):
        a = key_store.add("a", "glm")

        make_processor(scripted(failed())).process("glm", 1, page_image)

        assert key_store.get(a.id).cooldown_until is None

    def test_failures_rotate_keys(self, key_store, make_processor, scripted, page_image):
        a = key_store.add("a", "glm")
        b = key_store.add("b", "glm")
        converter = scripted(failed(), ok("fine"))

        result = make_processor(converter).process("glm", 1, page_image)

        assert result.text == "fine"
        assert converter.calls == [a.id, b.id]

    def test_recovery_after_two_failures(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "glm")
        converter = scripted(failed(), failed(), ok("third time"))

        result = make_processor(converter).process("glm", 1, page_image)

        assert result == PageResult(1, "third time", attempts=3)


class TestAttemptCeiling:
    def test_alternating_outcomes_stop_at_six_attempts(self, key_store, make_processor, scripted, page_image):
        for i in range(6):
            key_store.add(f"k{i}", "glm")
        converter = scripted(limited(), failed("e1"), limited(), failed("e2"), limited(), limited(), ok("never"))

        result = make_processor(converter).process("glm", 1, page_image)

        assert len(converter.calls) == 6
        assert result.failed is True
        assert "never" not in result.text

    def test_custom_ceilings(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "glm")
        converter = scripted(failed())

        result = make_processor(converter, max_attempts=6, max_failures=1).process("glm", 1, page_image)

        assert len(converter.calls) == 1
        assert result.failed is True


class TestConverterRouting:
    def test_converter_mapping_by_provider(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "claude")
        glm = scripted(ok("glm"))
        claude = scripted(ok("claude"))

        processor = make_processor({Provider.GLM: glm, Provider.CLAUDE: claude})

        assert processor.process_page("claude", 1, page_image) == "claude"
        assert glm.calls == []

    def test_missing_converter_for_provider(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "openai")
        processor = make_processor({Provider.GLM: scripted(ok())})

        with pytest.raises(ValueError, match="openai"):
            processor.process("openai", 1, page_image)


class TestLogging:
    def test_call_logger_overrides_instance_logger(self, key_store, make_processor, scripted, page_image):
        cred = key_store.add("a", "glm")
        instance_logger = MagicMock()
        call_logger = MagicMock()

        processor = make_processor(scripted(ok("text")), pipeline_logger=instance_logger)
        processor.process("glm", 3, page_image, pipeline_logger=call_logger)

        instance_logger.info.assert_not_called()
        call_logger.info.assert_called_once()
        fields = call_logger.info.call_args.kwargs
        assert fields["page"] == 3
        assert fields["credential_id"] == cred.id

    def test_instance_logger_used_by_default(self, key_store, make_processor, scripted, page_image):
        key_store.add("a", "glm")
        instance_logger = MagicMock()

        make_processor(scripted(ok()), pipeline_logger=instance_logger).process("glm", 1, page_image)

        instance_logger.info.assert_called_once()
