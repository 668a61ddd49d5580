import logging
from typing import Dict, Any, Optional

import requests

from infra.errors import MalformedResponseError

logger = logging.getLogger(__name__)


def parse_openai_chat(result: Dict[str, Any], model: str) -> str:
    """Extract text from an OpenAI-compatible chat completion.

    An empty ``choices`` list or a null content field yields "".
    """
    try:
        choices = result['choices']
        if not choices:
            return ""
        content = choices[0]['message'].get('content')
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        _log_malformed(result, model, e)
        raise MalformedResponseError(
            f"Malformed API response: missing '{e.args[0] if e.args else 'expected key'}'"
        )

    if isinstance(content, list):
        # Some compatible endpoints return content parts
        content = "".join(part.get('text', '') for part in content if isinstance(part, dict))
    return content or ""


def parse_anthropic_messages(result: Dict[str, Any], model: str) -> str:
    try:
        blocks = result['content']
        texts = [block.get('text', '') for block in blocks if block.get('type') == 'text']
    except (KeyError, TypeError, AttributeError) as e:
        _log_malformed(result, model, e)
        raise MalformedResponseError(
            f"Malformed API response: missing '{e.args[0] if e.args else 'expected key'}'"
        )
    return "".join(texts)


def extract_error_message(response: requests.Response) -> str:
    """Best-effort message from a non-2xx response body."""
    fallback = f"API request failed with status {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return fallback

    message: Optional[str] = None
    if isinstance(data, dict):
        error = data.get('error')
        if isinstance(error, dict):
            message = error.get('message')
        elif isinstance(error, str):
            message = error
        if not message:
            message = data.get('message')

    return message or fallback


def _log_malformed(result: Any, model: str, error: Exception):
    response_keys = list(result.keys()) if isinstance(result, dict) else type(result).__name__
    logger.error(
        "Malformed API response (missing expected keys): model=%s error_type=%s error=%s response_keys=%s",
        model,
        type(error).__name__,
        error,
        response_keys,
    )
