"""HTTP transport used by the Formulaic client.

The client only depends on the :class:`Transport` interface: send one
request, hand back the decoded JSON body, raise :class:`APIError` on failure.
:class:`HttpxTransport` is the built-in implementation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import httpx

from .exceptions import APIError, AuthenticationError, RateLimitError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract transport performing a single HTTP request."""

    @abstractmethod
    async def request(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send a request and return the parsed response body.

        Args:
            url: Absolute request URL.
            method: HTTP method (GET, POST, PATCH, DELETE).
            body: JSON-serialisable request body, if any.
            headers: Request headers.
            files: Multipart file fields (``{"file": (name, stream)}``).
                When given, ``body`` is sent as regular form fields.

        Returns:
            Decoded JSON body, raw text for non-JSON bodies, or None when
            the response has no content.

        Raises:
            APIError: On non-2xx responses or network failures.
        """

    async def aclose(self) -> None:
        """Release transport resources."""


class HttpxTransport(Transport):
    """Transport backed by :class:`httpx.AsyncClient`.

    No retries are attempted; ``timeout`` bounds each request.
    """

    def __init__(self, timeout: float = 30, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout), follow_redirects=True
        )

    async def request(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        kwargs: Dict[str, Any] = {"headers": dict(headers or {})}
        if files is not None:
            kwargs["files"] = files
            if body is not None:
                kwargs["data"] = body
        elif body is not None:
            kwargs["json"] = body

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise APIError(f"Request timed out after {self.timeout}s: {url}") from e
        except httpx.HTTPError as e:
            raise APIError(f"Network error for {url}: {e}") from e

        logger.debug("%s %s -> %s %s", method, url, response.status_code, response.reason_phrase)
        self._raise_for_status(response)
        return self._decode(response)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return

        message = f"{status} - {response.reason_phrase}"
        detail = _error_detail(response)
        if detail:
            message = f"{message}: {detail}"

        if status in (401, 403):
            raise AuthenticationError(message, status_code=status)
        if status == 429:
            raise RateLimitError(message, status_code=status)
        raise APIError(message, status_code=status)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_detail(response: httpx.Response) -> str:
    """Best-effort extraction of the server's error message."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] if response.text else ""
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if payload.get(key):
                return str(payload[key])
        return ""
    return str(payload)
