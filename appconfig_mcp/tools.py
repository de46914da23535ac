"""MCP tool registrations for the AI apps config server."""

import logging
from dataclasses import dataclass
from typing import Annotated, Awaitable, Callable, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from appconfig_mcp.service import ConfigService

logger = logging.getLogger(__name__)


@dataclass
class ConfigToolDependencies:
    """Runtime dependencies required by the MCP tools and resources."""

    service: ConfigService | None = None

    def attach_service(self, service: ConfigService) -> None:
        self.service = service

    def detach_service(self) -> None:
        self.service = None

    def require_service(self) -> ConfigService:
        if self.service is None:
            raise RuntimeError("Config service is not initialized.")
        return self.service


def _validate_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string.")
    return value.strip()


def _require_substring(value: str, field_name: str) -> str:
    """Reject blank values but keep surrounding whitespace, which takes part in matching."""
    _validate_non_empty(value, field_name)
    return value


def _optional_substring(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _log_tool_event(tool_name: str, event: str, **fields: object) -> None:
    logger.info(
        "config_tool_event",
        extra={"tool": tool_name, "event": event, **fields},
    )


async def _with_error_handling(tool_name: str, action: Callable[[], Awaitable[str]]) -> str:
    try:
        result = await action()
    except ValueError as exc:
        logger.warning("%s rejected its arguments", tool_name, exc_info=True)
        _log_tool_event(tool_name, "invalid_arguments", error=str(exc))
        return f"Error: {exc}"
    except Exception as exc:  # noqa: BLE001
        logger.exception("%s failed unexpectedly", tool_name)
        _log_tool_event(tool_name, "unexpected_error", error=str(exc))
        return f"Error: Unexpected error: {exc}"
    _log_tool_event(tool_name, "success")
    return result


AppArg = Annotated[
    str,
    Field(description="Application name (gemini, claude desktop, claude code, vscode, cursor)."),
]


def register_config_tools(
    mcp: FastMCP,
    dependencies: ConfigToolDependencies,
) -> None:
    """Register MCP tools that expose the config registry and reader."""

    @mcp.tool(
        name="list_apps",
        description="List all available applications with configuration mappings, including how many of their config locations currently exist.",
    )
    async def list_apps() -> str:
        service = dependencies.require_service()

        async def _call() -> str:
            return service.list_apps()

        return await _with_error_handling("list_apps", _call)

    @mcp.tool(
        name="find_config",
        description="Find configuration files for a specific application. Lists each existing location with its path, type, and format.",
    )
    async def find_config(app: AppArg) -> str:
        app_value = _validate_non_empty(app, "app")
        service = dependencies.require_service()

        async def _call() -> str:
            return service.find_config(app_value)

        return await _with_error_handling("find_config", _call)

    @mcp.tool(
        name="read_config",
        description="Read and display configuration file contents for an application. JSON and plist files are pretty-printed; long text files are truncated.",
    )
    async def read_config(
        app: AppArg,
        config_path: Annotated[
            str | None,
            Field(description="Optional: only read configs whose path contains this text."),
        ] = None,
    ) -> str:
        app_value = _validate_non_empty(app, "app")
        path_filter = _optional_substring(config_path)
        service = dependencies.require_service()

        async def _call() -> str:
            return await service.read_config(app_value, path_filter)

        return await _with_error_handling("read_config", _call)

    @mcp.tool(
        name="search_config",
        description="Search for specific content within an application's configuration files. Matching is case-insensitive and reports line numbers.",
    )
    async def search_config(
        app: AppArg,
        search_term: Annotated[str, Field(description="Term to search for in configuration files.")],
    ) -> str:
        app_value = _validate_non_empty(app, "app")
        term_value = _require_substring(search_term, "search_term")
        service = dependencies.require_service()

        async def _call() -> str:
            return await service.search_config(app_value, term_value)

        return await _with_error_handling("search_config", _call)

    @mcp.tool(
        name="add_config_location",
        description="Add a new configuration location for an existing application. The location is kept for the lifetime of the server process only.",
    )
    async def add_config_location(
        app: AppArg,
        path: Annotated[str, Field(description="Path to the configuration file or directory; a leading '~' means the home directory.")],
        type: Annotated[
            Literal["file", "directory"],
            Field(description="Whether the path is a file or directory."),
        ],
        description: Annotated[str, Field(description="Description of what this configuration contains.")],
        format: Annotated[
            Literal["json", "plist", "yaml", "text", "directory"],
            Field(description="Format of the configuration file; directories use 'directory'."),
        ],
        ctx: Context,
    ) -> str:
        app_value = _validate_non_empty(app, "app")
        path_value = _validate_non_empty(path, "path")
        description_value = _validate_non_empty(description, "description")
        service = dependencies.require_service()

        async def _call() -> str:
            result = service.add_config_location(
                app_value,
                path=path_value,
                type=type,
                description=description_value,
                format=format,
            )
            await ctx.info(result)
            return result

        return await _with_error_handling("add_config_location", _call)

    logger.info("Config MCP tools registered.")
