"""
Request-handling layer that turns registry lookups and reader results into text.

The MCP tool and resource registrations are thin wrappers around
:class:`ConfigService`; keeping the rendering here lets it be exercised
without a running server.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from appconfig_mcp.models import ConfigLocation
from appconfig_mcp.reader import format_for_display, read_configs, search_configs
from appconfig_mcp.registry import ConfigRegistry
from appconfig_mcp.settings import Settings

logger = logging.getLogger(__name__)

RESOURCE_URI_PREFIX = "config://apps/"
SECTION_SEPARATOR = "\n\n" + "=" * 80 + "\n\n"


class ConfigResourceError(LookupError):
    """Raised when a resource request names an app with nothing to read."""


def resource_uri(app_key: str) -> str:
    return f"{RESOURCE_URI_PREFIX}{quote(app_key, safe='')}"


@dataclass(frozen=True, slots=True)
class AppSummary:
    key: str
    display_name: str
    bundle_id: str | None
    config_count: int

    @property
    def has_configs(self) -> bool:
        return self.config_count > 0


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    uri: str
    app_key: str
    name: str
    description: str
    mime_type: str = "application/json"


@dataclass(slots=True)
class ConfigService:
    """Composes the registry and reader into the operations exposed to clients."""

    registry: ConfigRegistry

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfigService":
        """Factory that builds the service from Settings."""
        home = settings.home_dir if settings.home_dir is not None else Path.home()
        return cls(ConfigRegistry(home))

    def _display_name(self, app: str) -> str:
        app_config = self.registry.get_app_config(app)
        return app_config.display_name if app_config else app

    def _available_apps(self) -> str:
        return ", ".join(self.registry.list_application_keys())

    def app_summaries(self) -> list[AppSummary]:
        summaries = []
        for key in self.registry.list_application_keys():
            app_config = self.registry.get_app_config(key)
            configs = self.registry.resolve_configs_for_app(key)
            summaries.append(
                AppSummary(
                    key=key,
                    display_name=app_config.display_name if app_config else key,
                    bundle_id=app_config.bundle_id if app_config else None,
                    config_count=len(configs),
                )
            )
        return summaries

    def list_apps(self) -> str:
        lines = []
        for summary in self.app_summaries():
            bundle = f" [{summary.bundle_id}]" if summary.bundle_id else ""
            flag = "✅" if summary.has_configs else "❌"
            lines.append(
                f"• {summary.display_name} ({summary.key}){bundle} - "
                f"{summary.config_count} configs {flag}"
            )
        return "Available applications:\n\n" + "\n".join(lines)

    def find_config(self, app: str) -> str:
        configs = self.registry.resolve_configs_for_app(app)
        if not configs:
            return f'No configurations found for "{app}". Available apps: {self._available_apps()}'

        output = f"Configuration files for {self._display_name(app)}:\n\n"
        for index, config in enumerate(configs, start=1):
            output += f"{index}. {config.description}\n"
            output += f"   Path: {config.path}\n"
            output += f"   Type: {config.type.value} ({config.format.value})\n\n"
        return output

    async def read_config(self, app: str, path_filter: str | None = None) -> str:
        configs = self.registry.resolve_configs_for_app(app)
        if not configs:
            return f'No configurations found for "{app}". Available apps: {self._available_apps()}'

        if path_filter:
            configs = [config for config in configs if path_filter in config.path]
            if not configs:
                return f'No configuration found matching path "{path_filter}" for app "{app}"'

        results = await read_configs(configs)
        return SECTION_SEPARATOR.join(format_for_display(result) for result in results)

    async def search_config(self, app: str, term: str) -> str:
        configs = self.registry.resolve_configs_for_app(app)
        if not configs:
            return f'No configurations found for "{app}". Available apps: {self._available_apps()}'

        all_matches = await search_configs(configs, term)
        hits = [(config, matches) for config, matches in zip(configs, all_matches) if matches]
        if not hits:
            return f'No matches found for "{term}" in {app} configurations'

        output = f'Search results for "{term}" in {app} configurations:\n\n'
        for config, matches in hits:
            output += f"📄 {config.path}\n{config.description}\n"
            output += "".join(f"  {match}\n" for match in matches)
            output += "\n"
        return output

    def add_config_location(
        self,
        app: str,
        *,
        path: str,
        type: str,
        description: str,
        format: str,
    ) -> str:
        """Append a candidate location; raises ValueError for an inconsistent type/format."""
        location = ConfigLocation(path=path, type=type, description=description, format=format)
        if not self.registry.append_config_location(app, location):
            return f'Unknown app "{app}"; nothing added. Available apps: {self._available_apps()}'
        return f"Added configuration location for {app}:\n{description}\nPath: {path}"

    def list_resources(self) -> list[ResourceDescriptor]:
        descriptors = []
        for key, configs in self.registry.resolve_all_applications().items():
            if not configs:
                continue
            display_name = self._display_name(key)
            descriptors.append(
                ResourceDescriptor(
                    uri=resource_uri(key),
                    app_key=key,
                    name=f"{display_name} Configuration",
                    description=f"Configuration files for {display_name}",
                )
            )
        return descriptors

    async def read_resource(self, app_key: str) -> str:
        """Return every resolvable config of ``app_key`` as a JSON document."""
        configs = self.registry.resolve_configs_for_app(app_key)
        if not configs:
            raise ConfigResourceError(f"No configurations found for app: {app_key}")

        results = await read_configs(configs)
        payload = {
            "app": self._display_name(app_key),
            "configs": [result.to_dict() for result in results],
        }
        return json.dumps(payload, indent=2, default=str)
