#!/usr/bin/env python3
import logging
import threading
from typing import Dict, Any

import requests


class VisionTransport:
    """HTTP layer for vision endpoints.

    One requests.Session per thread, no adapter-level retries: every retry
    decision belongs to the page processor so it can rotate keys.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self._thread_local = threading.local()

    def get_session(self) -> requests.Session:
        if not hasattr(self._thread_local, 'session'):
            self._thread_local.session = self._create_session()
        return self._thread_local.session

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        adapter = requests.adapters.HTTPAdapter(
            pool_connections=1,
            pool_maxsize=1,
            max_retries=0
        )
        session.mount('https://', adapter)
        session.mount('http://', adapter)

        return session

    def post(
        self,
        url: str,
        headers: Dict[str, str],
        payload: Dict[str, Any],
        timeout: float = 120
    ) -> requests.Response:
        model = payload.get('model', 'unknown')
        self.logger.debug("Vision API request: url=%s model=%s timeout=%s", url, model, timeout)

        response = self.get_session().post(
            url,
            headers=headers,
            json=payload,
            timeout=timeout
        )

        self.logger.debug(
            "Vision API response: model=%s status_code=%s ok=%s",
            model,
            response.status_code,
            response.ok
        )
        return response
