"""Product detail page enrichment tool."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..enrichment import EXTENSION_KEY, PageContext, ProductContext, ProductPageEnricher
from ..jtl_client import JtlClient
from ..utils.logging import truncate

logger = logging.getLogger("jtl_connector.resources.product_page")


async def jtl_enrich_product_page(sku: str) -> Dict[str, Any]:
    """Run the product page enrichment for a SKU and return what a page would receive.

    Respects the enableOnPdp setting. Never fails: errors show up as
    state "skipped" with no extension.

    Returns:
    - state: disabled, skipped, item_missing or attached
    - extension: the jtlData payload (jtlSku, jtlItemId, stock, stockByWh) or null
    """
    logger.debug("Tool call: jtl_enrich_product_page(sku=%s)", sku)
    client = JtlClient.from_env()
    enricher = ProductPageEnricher(client, client.settings)

    page = PageContext(product=ProductContext(product_number=sku))
    state = await enricher.on_product_page_loaded(page)

    result = {
        "state": state.value,
        "extension": page.get_extension(EXTENSION_KEY),
    }
    logger.debug("Tool result: jtl_enrich_product_page -> %s", truncate(str(result)))
    return result
