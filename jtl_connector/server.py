"""MCP server for the JTL connector: tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from .resources import (
    auth as auth_tools,
    items,
    stock,
    product_page,
)
from .utils.logging import setup_logging

setup_logging()


def create_mcp_server():
    """Create and configure the FastMCP server with all tools."""
    mcp = FastMCP("mcp-jtl-connector")

    # -- Tools: status ------------------------------------------------------
    mcp.tool()(auth_tools.jtl_status)

    # -- Tools: lookups -----------------------------------------------------
    mcp.tool()(items.jtl_get_item)
    mcp.tool()(stock.jtl_get_stock)

    # -- Tools: product page ------------------------------------------------
    mcp.tool()(product_page.jtl_enrich_product_page)

    return mcp


# Default server instance for stdio transport
server = create_mcp_server()
