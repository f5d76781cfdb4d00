"""Item lookup tool."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..jtl_client import JtlClient
from ..utils.logging import truncate
from ..utils.projection import project_dict

logger = logging.getLogger("jtl_connector.resources.items")


async def jtl_get_item(
    sku: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Look up a JTL item by SKU (cached).

    Parameters:
    - sku: Product number to search for (required)
    - fields: Additional upstream fields to include beyond defaults, or ["*"] for all

    Default returns: id, sku
    Returns {"found": false, "sku": ...} when no item matches or the API fails.
    """
    logger.debug("Tool call: jtl_get_item(sku=%s, fields=%s)", sku, fields)
    client = JtlClient.from_env()
    item = await client.get_item_by_sku(sku)

    if item is None:
        result: Dict[str, Any] = {"found": False, "sku": sku}
    else:
        result = project_dict(item.data, fields, base_fields={"id", "sku"})

    logger.debug("Tool result: jtl_get_item -> %s", truncate(str(result)))
    return result
