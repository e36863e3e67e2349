"""Async client for the Formulaic API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Type
from urllib.parse import quote

from .cache import CacheManager
from .config import DEFAULT_BASE_URL, Config
from .exceptions import (
    ChatCompletionError,
    CompletionError,
    FileDeleteError,
    FileFetchError,
    FilesFetchError,
    FileUpdateError,
    FileUploadError,
    FormulaCreateError,
    FormulaFetchError,
    FormulaicError,
    ModelsFetchError,
    OperationError,
    ScriptsFetchError,
    ValidationError,
)
from .files import as_file_source
from .models import CompletionData
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class FormulaicClient:
    """Client exposing one coroutine per Formulaic API resource.

    Formula lookups are cached per instance for ``cache_ttl`` seconds. Every
    failed remote call raises the operation's :class:`OperationError`
    subclass, whose message keeps the underlying failure text.

    Example::

        async with FormulaicClient("sk-...") as client:
            models = await client.get_models()
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        debug: bool = False,
        cache_ttl: float = 300,
        timeout: float = 30,
    ) -> None:
        if not api_key:
            raise ValidationError("API key is required")
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=timeout)
        self._debug = bool(debug)
        self._cache = CacheManager(ttl=cache_ttl)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_config(cls, config: Config, transport: Optional[Transport] = None) -> "FormulaicClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            transport=transport,
            debug=config.debug,
            cache_ttl=config.cache_ttl,
            timeout=config.timeout,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def cache(self) -> CacheManager:
        return self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------ #
    # Models and formulas
    # ------------------------------------------------------------------ #

    async def get_models(self) -> Any:
        """Return the models available to the account."""
        return await self._request(ModelsFetchError, "GET", "/api/models")

    async def get_formula(self, formula_id: str) -> Any:
        """Return a formula, served from the cache while it is fresh."""
        _require(formula_id, "Formula ID is required")

        cached = self._cache.get(formula_id)
        if cached is not None:
            self._trace("Cache hit for formula %s", formula_id)
            return cached

        formula = await self._request(
            FormulaFetchError, "GET", f"/api/recipes/{_segment(formula_id)}"
        )
        self._cache.set(formula_id, formula)
        return formula

    async def get_scripts(self, formula_id: str) -> Any:
        """Return the scripts of a formula."""
        _require(formula_id, "Formula ID is required")
        return await self._request(
            ScriptsFetchError, "GET", f"/api/recipes/{_segment(formula_id)}/scripts"
        )

    async def create_formula(self, data: Mapping[str, Any]) -> Any:
        """Create a formula from ``data`` (prompts, models, variables...)."""
        return await self._request(FormulaCreateError, "POST", "/api/recipes", body=dict(data))

    async def create_completion(
        self, formula_id: str, data: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Run a formula's script and return the resulting artifact.

        ``models`` and ``variables`` in ``data`` are sent as lists; missing or
        non-list values become empty lists.
        """
        _require(formula_id, "Formula ID is required")
        body = CompletionData.model_validate(dict(data or {})).to_body()

        try:
            formula = await self.get_formula(formula_id)
        except FormulaicError as e:
            raise CompletionError(e) from e
        script_id = formula.get("id") if isinstance(formula, dict) else None
        if not script_id:
            raise CompletionError(f"formula {formula_id} has no script id")

        self._trace("Sending completion for formula %s with data: %s", formula_id, body)
        return await self._request(
            CompletionError,
            "POST",
            f"/api/recipes/{_segment(formula_id)}/scripts/{_segment(script_id)}/artifacts",
            body=body,
        )

    # ------------------------------------------------------------------ #
    # Files
    # ------------------------------------------------------------------ #

    async def upload_file(self, formula_id: str, file: Any, file_name: str) -> Any:
        """Upload ``file`` (bytes or a path) to a formula as ``file_name``."""
        _require(formula_id, "Formula ID is required")
        source = as_file_source(file)

        # httpx writes the multipart Content-Type with its boundary
        headers = {k: v for k, v in self._headers.items() if k != "Content-Type"}
        try:
            stream = source.open()
        except OSError as e:
            raise FileUploadError(e) from e
        with stream:
            return await self._request(
                FileUploadError,
                "POST",
                f"/api/recipes/{_segment(formula_id)}/files",
                headers=headers,
                files={"file": (file_name, stream)},
            )

    async def get_files(self, formula_id: str) -> Any:
        _require(formula_id, "Formula ID is required")
        return await self._request(
            FilesFetchError, "GET", f"/api/recipes/{_segment(formula_id)}/files"
        )

    async def get_file(self, formula_id: str, file_id: str) -> Any:
        _require(formula_id, "Formula ID is required")
        _require(file_id, "File ID is required")
        return await self._request(
            FileFetchError,
            "GET",
            f"/api/recipes/{_segment(formula_id)}/files/{_segment(file_id)}",
        )

    async def update_file(self, formula_id: str, file_id: str, data: Mapping[str, Any]) -> Any:
        _require(formula_id, "Formula ID is required")
        _require(file_id, "File ID is required")
        return await self._request(
            FileUpdateError,
            "PATCH",
            f"/api/recipes/{_segment(formula_id)}/files/{_segment(file_id)}",
            body=dict(data),
        )

    async def delete_file(self, formula_id: str, file_id: str) -> Any:
        _require(formula_id, "Formula ID is required")
        _require(file_id, "File ID is required")
        return await self._request(
            FileDeleteError,
            "DELETE",
            f"/api/recipes/{_segment(formula_id)}/files/{_segment(file_id)}",
        )

    # ------------------------------------------------------------------ #
    # Chat
    # ------------------------------------------------------------------ #

    async def create_chat_completion(self, formula_id: str, messages: List[Any]) -> Any:
        """Send a chat conversation to a formula."""
        _require(formula_id, "Formula ID is required")
        if not isinstance(messages, list):
            raise ValidationError("Messages must be an array")
        return await self._request(
            ChatCompletionError, "POST", f"/api/recipes/{_segment(formula_id)}/chats", body=messages
        )

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "FormulaicClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        error_cls: Type[OperationError],
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        request_headers = self._headers if headers is None else headers
        self._trace("Sending %s request to: %s", method, url)

        try:
            result = await self._transport.request(
                url, method, body=body, headers=dict(request_headers), files=files
            )
        except Exception as e:
            self._trace("%s %s failed: %s", method, url, e)
            raise error_cls(e) from e

        self._trace("Response from %s: %s", url, _summarize(result))
        return result

    def _trace(self, msg: str, *args: Any) -> None:
        if self._debug:
            logger.debug(msg, *args)


def _require(value: Any, message: str) -> None:
    if not value:
        raise ValidationError(message)


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _summarize(result: Any) -> str:
    if isinstance(result, list):
        return f"list[{len(result)}]"
    if isinstance(result, dict):
        return f"object with keys {sorted(result)[:10]}"
    if result is None:
        return "empty body"
    return type(result).__name__
