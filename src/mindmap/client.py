"""
Mind map API client.

Fetches the entity/relationship payload for a matter. Every failure mode
(transport error, HTTP error status, ``success: false``, malformed body)
surfaces as MindMapFetchError carrying the server's message when it sent
one.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import API_BASE_URL, API_TOKEN, FETCH_ERROR_MESSAGE, HTTP_TIMEOUT
from .models import MindMapResponse

logger = logging.getLogger(__name__)


class MindMapFetchError(Exception):
    def __init__(self, message=FETCH_ERROR_MESSAGE, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_message(body):
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or FETCH_ERROR_MESSAGE
    return FETCH_ERROR_MESSAGE


class MindMapClient:
    def __init__(self, base_url=API_BASE_URL, token=API_TOKEN, timeout=HTTP_TIMEOUT, transport=None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self):
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path):
        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.warning("Timed out fetching %s", path)
            raise MindMapFetchError("Timed out loading mind map data") from exc
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", path, exc)
            raise MindMapFetchError(str(exc) or FETCH_ERROR_MESSAGE) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = _server_message(body)
            logger.warning("GET %s -> %d: %s", path, response.status_code, message)
            raise MindMapFetchError(message, response.status_code)
        return body

    def fetch(self, matter_id) -> MindMapResponse:
        """Fetch and validate the mind map payload for a matter."""
        body = self._get(f"/api/matters/{matter_id}/mind-map")
        try:
            result = MindMapResponse.model_validate(body)
        except ValidationError as exc:
            logger.warning("Malformed mind map payload for matter %s: %s", matter_id, exc)
            raise MindMapFetchError(FETCH_ERROR_MESSAGE) from exc

        if not result.success or result.data is None:
            raise MindMapFetchError(result.message or FETCH_ERROR_MESSAGE)
        return result

    def status(self, matter_id) -> dict:
        """Whether the server has mind map data for a matter."""
        return self._get(f"/api/matters/{matter_id}/mind-map/status")
