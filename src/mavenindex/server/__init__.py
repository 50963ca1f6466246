"""MCP server for generated repositories."""

from mavenindex.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
