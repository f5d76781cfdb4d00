"""Product detail page enrichment with live JTL stock data."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import ConnectorSettings
from .jtl_client import JtlClient

logger = logging.getLogger("jtl_connector.enrichment")

EXTENSION_KEY = "jtlData"


class EnrichmentState(str, enum.Enum):
    DISABLED = "disabled"
    CHECKED = "checked"
    ITEM_RESOLVED = "item_resolved"
    ITEM_MISSING = "item_missing"
    STOCK_RESOLVED = "stock_resolved"
    STOCK_MISSING = "stock_missing"
    ATTACHED = "attached"
    SKIPPED = "skipped"


@dataclass
class ProductContext:
    product_number: Optional[str] = None


@dataclass
class PageContext:
    """What the host hands over for one product page render."""

    product: Optional[ProductContext] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def add_extension(self, name: str, extension: Any) -> None:
        self.extensions[name] = extension

    def get_extension(self, name: str) -> Any:
        return self.extensions.get(name)


@dataclass(frozen=True)
class EnrichmentPayload:
    jtl_sku: Optional[str]
    jtl_item_id: Optional[int]
    stock: Optional[float]
    stock_by_wh: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jtlSku": self.jtl_sku,
            "jtlItemId": self.jtl_item_id,
            "stock": self.stock,
            "stockByWh": dict(self.stock_by_wh),
        }


class ProductPageEnricher:
    """Handler for the host's product-page-loaded hook.

    Never raises: any failure is logged as a warning and the page is left
    without the extension.
    """

    def __init__(self, client: JtlClient, settings: ConnectorSettings) -> None:
        self.client = client
        self.settings = settings

    async def on_product_page_loaded(self, page: PageContext) -> EnrichmentState:
        sku: Optional[str] = None
        try:
            if not self.settings.enabled_on_pdp():
                return EnrichmentState.DISABLED

            if page.product is not None:
                sku = page.product.product_number or ""
            if not sku:
                return EnrichmentState.SKIPPED
            logger.debug("sku=%s -> %s", sku, EnrichmentState.CHECKED.value)

            payload = await self._build_payload(sku)
            if payload is None:
                return EnrichmentState.ITEM_MISSING

            page.add_extension(EXTENSION_KEY, payload.to_dict())
            return EnrichmentState.ATTACHED
        except Exception as e:
            logger.warning("JTL PDP enrichment failed sku=%s: %s", sku, e)
            return EnrichmentState.SKIPPED

    async def _build_payload(self, sku: str) -> Optional[EnrichmentPayload]:
        item = await self.client.get_item_by_sku(sku)
        if item is None or item.id is None:
            logger.debug("sku=%s -> %s", sku, EnrichmentState.ITEM_MISSING.value)
            return None

        stock = await self.client.get_stock_by_item_id(item.id)
        logger.debug(
            "sku=%s item_id=%s -> %s",
            sku, item.id,
            (EnrichmentState.STOCK_RESOLVED if stock is not None else EnrichmentState.STOCK_MISSING).value,
        )

        return EnrichmentPayload(
            jtl_sku=item.sku,
            jtl_item_id=item.id,
            stock=stock.free if stock is not None else None,
            stock_by_wh=dict(stock.by_warehouse) if stock is not None else {},
        )
