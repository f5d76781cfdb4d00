"""Connectivity and configuration status tool."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..jtl_client import JtlClient
from ..utils.logging import truncate

logger = logging.getLogger("jtl_connector.resources.auth")


async def jtl_status() -> Dict[str, Any]:
    """Verify JTL API configuration and credentials with an uncached one-item request."""
    logger.debug("Tool call: jtl_status()")
    client = JtlClient.from_env()
    result = await client.health_check()
    logger.debug("Tool result: jtl_status() -> %s", truncate(str(result)))
    return result
