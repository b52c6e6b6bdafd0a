"""Directus MCP Server - token-efficient Directus tools for AI agents."""

__version__ = "0.1.0"
