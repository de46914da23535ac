"""
Core server bootstrap for the AI apps config MCP server.

Wires up the fastmcp instance, registers the config tools and resources, and
owns the registry-backed service for the lifetime of the process.
"""

import logging
from typing import Any

from fastmcp import FastMCP  # type: ignore[import-not-found]

from appconfig_mcp.resources import register_config_resources
from appconfig_mcp.service import ConfigService
from appconfig_mcp.settings import Settings
from appconfig_mcp.tools import ConfigToolDependencies, register_config_tools


class ServerApp:
    """Server container holding the injected registry state and the MCP app."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._state: dict[str, Any] = {"settings": settings}
        self._service: ConfigService | None = None
        self._dependencies = ConfigToolDependencies()
        self._mcp_app = FastMCP(
            name="AI Apps Config MCP Server",
            instructions=(
                "Locate, read, and search the configuration files of AI desktop and "
                "editor applications such as Claude Desktop, Cursor, and VS Code."
            ),
        )
        register_config_tools(self._mcp_app, self._dependencies)
        register_config_resources(self._mcp_app, self._dependencies)
        self._state["mcp_app"] = self._mcp_app

    def startup(self) -> None:
        """Build the config service and attach it to the tools and resources."""
        self._logger.info("Starting server bootstrap")
        self._service = ConfigService.from_settings(self._settings)
        self._dependencies.attach_service(self._service)
        self._state["initialized"] = True

    def shutdown(self) -> None:
        """Release acquired resources."""
        self._logger.info("Shutting down server bootstrap")
        self._service = None
        self._dependencies.detach_service()
        self._state.clear()

    def serve_forever(self) -> None:
        """Run the FastMCP server on the configured transport until interrupted."""
        if self._settings.transport == "stdio":
            self._logger.info("Starting stdio transport")
            self._mcp_app.run(transport="stdio")
            return

        host = self._settings.mcp_sse_host
        port = self._settings.mcp_sse_port
        self._logger.info("Starting SSE transport", extra={"host": host, "port": port})
        self._mcp_app.run(transport="sse", host=host, port=port)

    @property
    def service(self) -> ConfigService | None:
        return self._service

    @property
    def mcp(self) -> FastMCP:
        """Expose the configured FastMCP instance."""
        return self._mcp_app


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
