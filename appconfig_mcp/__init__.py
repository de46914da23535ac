"""
Application package for the AI apps config MCP server.

The registry and reader modules hold the lookup and parsing logic; the
service, tools, resources, and server modules adapt them to MCP.
"""

__all__ = []
