"""Stdio transport server for the JTL connector tools.

Usage:
    python -m jtl_connector.stdio_server

Environment Variables (required for lookups):
    JTL_BASE_URL - JTL-Wawi REST API base URL
    JTL_API_KEY - Value sent as the Authorization header

Environment Variables (optional):
    JTL_X_APP_ID - X-AppId header (default: MyApp/1.0.0)
    JTL_X_APP_VERSION - X-AppVersion header (default: 1.0.0)
    JTL_TTL - Item cache TTL in seconds (default: 300)
    JTL_CACHE_TTL - Stock cache TTL in seconds (default: 300)
    JTL_ENABLE_ON_PDP - Enable product page enrichment (default: off)
    JTL_LOG_LEVEL - Logging level (default: INFO)
    JTL_LOG_FILE - Log file path with rotation
"""

from .server import server


def main():
    """Run the MCP server using stdio transport."""
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
