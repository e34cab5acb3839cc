"""OnlineEDA MCP Server - drive the Arcas OnlineEDA platform from MCP clients."""

__version__ = "0.1.0"
