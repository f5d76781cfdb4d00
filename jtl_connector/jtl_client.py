from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .cache import TTLCache
from .config import ConnectorSettings, EnvConfigStore
from .models import Item, StockAggregate, aggregate_stock


logger = logging.getLogger("jtl_connector.http")

REQUEST_TIMEOUT = 6.0
STOCK_PAGE_SIZE = 100  # no pagination: items with more stock rows are undercounted

# Process-wide cache shared by every client built with from_env()
_shared_cache = TTLCache()


def _redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if str(k).lower() == "authorization":
            redacted[k] = "[REDACTED]"
        else:
            redacted[k] = v
    return redacted


def _truncate(text: str, max_len: int = 1000) -> str:
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... [truncated]"


def item_cache_key(sku: str) -> str:
    return "jtl_item_" + hashlib.md5(sku.encode("utf-8")).hexdigest()


def stock_cache_key(item_id: int) -> str:
    return "jtl_stock_" + str(item_id)


class JtlClientError(Exception):
    """Represents an error when communicating with the JTL-Wawi API."""


class UpstreamError(JtlClientError):
    """Transport failure, error status, or unreadable body from the JTL API."""

    def __init__(self, message: str, *, path: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code


@dataclass
class JtlClient:
    """Async client for the JTL-Wawi REST API item and stock endpoints.

    Uses a per-request httpx.AsyncClient with a fixed timeout and no retries.
    Item and stock lookups go through the cache; their upstream failures are
    logged and returned as None. ConfigurationError from settings is not
    caught here.
    """

    settings: ConnectorSettings
    cache: TTLCache = field(default_factory=TTLCache)
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def from_env(cls) -> "JtlClient":
        """Create a client reading JTL_* environment variables.

        Credentials are validated per request, not here. All clients created
        this way share one process-wide cache.
        """
        return cls(settings=ConnectorSettings(EnvConfigStore()), cache=_shared_cache)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute one HTTP request against {base_url}/{path}."""
        credentials = self.settings.credentials()
        headers = credentials.headers()
        url = f"{credentials.base_url}/{path}"
        logger.debug(
            "HTTP %s %s params=%s headers=%s",
            method.upper(), url, kwargs.get("params"), _redact_headers(headers),
        )
        async with httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(REQUEST_TIMEOUT),
            transport=self.transport,
        ) as client:
            start = time.perf_counter()
            try:
                response = await client.request(method.upper(), url, **kwargs)
            except httpx.HTTPError as e:
                raise UpstreamError(
                    f"{method.upper()} {path} failed: {type(e).__name__}: {e}", path=path
                ) from e
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        logger.debug(
            "HTTP %s %s status=%s elapsed_ms=%.2f",
            method.upper(), path, response.status_code, elapsed_ms,
        )
        return response

    @staticmethod
    def _json_or_raise(response: httpx.Response, path: str) -> Any:
        if response.status_code >= 400:
            raise UpstreamError(
                f"{path} error: {response.status_code} {_truncate(response.text or '', 200)}",
                path=path,
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"{path} returned invalid JSON: {_truncate(response.text or '', 200)}",
                path=path,
                status_code=response.status_code,
            ) from e

    # ----------------------------- API methods -----------------------------

    async def health_check(self) -> Dict[str, Any]:
        """Perform a minimal uncached authenticated request to verify connectivity."""
        response = await self._request("get", "items", params={"pageSize": 1})
        data = self._json_or_raise(response, "items")
        items = data.get("items") if isinstance(data, dict) else None
        return {
            "ok": True,
            "status": response.status_code,
            "sample_count": len(items) if isinstance(items, list) else 0,
            "base_url": self.settings.base_url(),
        }

    async def get_item_by_sku(self, sku: str) -> Optional[Item]:
        """Fetch the first item matching sku, or None.

        Results, including None, are cached for the jtlTtl setting.
        """
        if not sku:
            raise JtlClientError("get_item_by_sku requires a non-empty sku")

        async def fetch() -> Optional[Item]:
            try:
                response = await self._request(
                    "get", "items", params={"searchKeyWord": sku, "pageSize": 1}
                )
                data = self._json_or_raise(response, "items")
            except UpstreamError as e:
                logger.error("JTL getItemBySku error sku=%s: %s", sku, e)
                return None

            items = data.get("items") if isinstance(data, dict) else None
            if not isinstance(items, list) or not items or not isinstance(items[0], dict):
                return None
            return Item.from_payload(items[0])

        return await self.cache.get_or_compute(
            item_cache_key(sku), self.settings.item_ttl(), fetch
        )

    async def get_stock_by_item_id(self, item_id: int) -> Optional[StockAggregate]:
        """Fetch and aggregate the stock rows of an item, or None.

        Only the first STOCK_PAGE_SIZE rows are read. Results, including
        None, are cached for the cacheTtl setting.
        """

        async def fetch() -> Optional[StockAggregate]:
            try:
                response = await self._request(
                    "get", "stocks", params={"kArtikel": item_id, "pageSize": STOCK_PAGE_SIZE}
                )
                data = self._json_or_raise(response, "stocks")
            except UpstreamError as e:
                logger.error("JTL getStockByItemId error itemId=%s: %s", item_id, e)
                return None

            rows = data.get("Items") if isinstance(data, dict) else None
            if not isinstance(rows, list):
                return None
            return aggregate_stock(rows)

        return await self.cache.get_or_compute(
            stock_cache_key(item_id), self.settings.stock_ttl(), fetch
        )
