"""Stock level tool."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..jtl_client import JtlClient, JtlClientError
from ..utils.logging import truncate
from ..utils.projection import project_dict

logger = logging.getLogger("jtl_connector.resources.stock")


async def jtl_get_stock(
    item_id: int | None = None,
    sku: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get aggregated stock for one item across all warehouses (cached).

    Free stock per row is QuantityTotal minus QuantityLockedForAvailability
    minus QuantityInPickingLists, floored at 0. Only the first 100 stock rows
    are read.

    Parameters:
    - item_id: JTL item id (preferred)
    - sku: Product number, resolved to an item id first when item_id is not given
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Available fields: item_id, sku, found, total, free, by_warehouse, raw
        Default returns: item_id, found, total, free, by_warehouse
    """
    logger.debug(
        "Tool call: jtl_get_stock(item_id=%s, sku=%s, fields=%s)",
        item_id, sku, fields,
    )
    if item_id is None and not sku:
        raise JtlClientError("jtl_get_stock requires item_id or sku")

    client = JtlClient.from_env()
    stock = None
    if item_id is None:
        item = await client.get_item_by_sku(sku)
        if item is not None:
            item_id = item.id

    # Stock is never queried without a resolved item id
    if item_id is not None:
        stock = await client.get_stock_by_item_id(item_id)

    if stock is None:
        result: Dict[str, Any] = {"item_id": item_id, "sku": sku, "found": False}
    else:
        result = {"item_id": item_id, "sku": sku, "found": True, **stock.to_dict()}

    result = project_dict(
        result, fields, base_fields={"item_id", "found", "total", "free", "by_warehouse"}
    )

    logger.debug("Tool result: jtl_get_stock -> %s", truncate(str(result)))
    return result
