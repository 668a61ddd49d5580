"""
Page converter: one page image + one credential -> one classified outcome.

Supports two request dialects, selected by ProviderConfig.type:
- openai-chat: GLM and OpenAI chat completions (Bearer auth, image_url data URI)
- anthropic-messages: Claude messages API (x-api-key, base64 image block)

Classification never raises:
    429                        -> RATE_LIMITED
    other non-2xx              -> FAILED (error.message from body, or status)
    2xx with bad JSON / shape  -> FAILED
    2xx                        -> SUCCESS ("" when the body has no content)
    transport errors           -> FAILED
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests
from PIL import Image

from infra.config.schemas import ProviderConfig, OPENAI_CHAT, ANTHROPIC_MESSAGES
from infra.errors import ConversionFailed
from infra.keypool.models import SelectedCredential
from .images import encode_jpeg_base64, to_data_url
from .outcome import PageOutcome
from .prompts import TRANSCRIPTION_PROMPT
from .response_parser import (
    parse_openai_chat,
    parse_anthropic_messages,
    extract_error_message,
)
from .transport import VisionTransport

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429


class PageConverter:
    def __init__(
        self,
        provider_config: ProviderConfig,
        transport: Optional[VisionTransport] = None,
        prompt: str = None,
    ):
        self.config = provider_config
        self.transport = transport or VisionTransport()
        self.prompt = prompt or TRANSCRIPTION_PROMPT

    def convert(self, credential: SelectedCredential, page_image: Image.Image) -> PageOutcome:
        start = time.time()

        try:
            url, headers, payload = self.build_request(credential, page_image)
            response = self.transport.post(url, headers, payload, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Vision request transport error: %s", e)
            return PageOutcome.failed(str(e) or type(e).__name__, execution_time_seconds=time.time() - start)

        outcome = self.classify(response)
        outcome.execution_time_seconds = time.time() - start
        return outcome

    def build_request(
        self,
        credential: SelectedCredential,
        page_image: Image.Image
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        media_type, image_b64 = encode_jpeg_base64(page_image, self.config.max_dimension)

        if self.config.type == ANTHROPIC_MESSAGES:
            headers, payload = self._anthropic_request(credential.secret, media_type, image_b64)
        elif self.config.type == OPENAI_CHAT:
            headers, payload = self._openai_request(credential.secret, media_type, image_b64)
        else:
            raise ValueError(f"Unsupported provider type: {self.config.type}")

        payload.update(self.config.extra)
        return self.config.resolved_endpoint(), headers, payload

    def classify(self, response: requests.Response) -> PageOutcome:
        status = response.status_code

        if status == RATE_LIMIT_STATUS:
            return PageOutcome.limited(status_code=status)

        if not 200 <= status < 300:
            message = extract_error_message(response)
            logger.error("Vision API error: status=%s message=%s", status, message)
            return PageOutcome.failed(message, status_code=status)

        try:
            result = response.json()
        except ValueError:
            return PageOutcome.failed(
                f"Invalid JSON in API response (status {status})",
                status_code=status
            )

        try:
            text = self._extract_text(result)
        except ConversionFailed as e:
            return PageOutcome.failed(str(e), status_code=status)

        return PageOutcome.succeeded(text, status_code=status)

    def _extract_text(self, result: Dict[str, Any]) -> str:
        if self.config.type == ANTHROPIC_MESSAGES:
            return parse_anthropic_messages(result, self.config.model)
        return parse_openai_chat(result, self.config.model)

    def _openai_request(self, api_key: str, media_type: str, image_b64: str):
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        payload = {
            "model": self.config.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self.prompt},
                        {"type": "image_url", "image_url": {"url": to_data_url(media_type, image_b64)}},
                    ]
                }
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "stream": False,
        }
        if self.config.top_p is not None:
            payload["top_p"] = self.config.top_p
        return headers, payload

    def _anthropic_request(self, api_key: str, media_type: str, image_b64: str):
        headers = {
            "content-type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.config.anthropic_version,
        }
        payload = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self.prompt},
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": image_b64,
                            },
                        },
                        {"type": "text", "text": "Convert this page to Markdown."},
                    ],
                }
            ],
        }
        if self.config.top_p is not None:
            payload["top_p"] = self.config.top_p
        return headers, payload
