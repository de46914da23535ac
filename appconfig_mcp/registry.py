"""Application key to candidate config location mapping."""

import copy
import logging
import os
import stat
from pathlib import Path

from appconfig_mcp.models import AppConfig, ConfigFormat, ConfigLocation, LocationType

logger = logging.getLogger(__name__)


BUILTIN_APPS: dict[str, AppConfig] = {
    "gemini": AppConfig(
        display_name="Google Gemini",
        configs=[
            ConfigLocation(
                path="~/.gemini/settings.json",
                type=LocationType.FILE,
                description="Gemini settings configuration",
                format=ConfigFormat.JSON,
            ),
        ],
    ),
    "claude desktop": AppConfig(
        display_name="Claude Desktop",
        configs=[
            ConfigLocation(
                path="~/Library/Application Support/Claude/claude_desktop_config.json",
                type=LocationType.FILE,
                description="Claude Desktop configuration",
                format=ConfigFormat.JSON,
            ),
        ],
    ),
    "claude code": AppConfig(
        display_name="Claude Code",
        configs=[
            ConfigLocation(
                path="~/.claude/",
                type=LocationType.DIRECTORY,
                description="Claude Code configuration directory",
                format=ConfigFormat.DIRECTORY,
            ),
        ],
    ),
    "vscode": AppConfig(
        display_name="Visual Studio Code",
        bundle_id="com.microsoft.VSCode",
        configs=[
            ConfigLocation(
                path="~/.vscode/mcp.json",
                type=LocationType.FILE,
                description="VS Code MCP configuration",
                format=ConfigFormat.JSON,
            ),
        ],
    ),
    "cursor": AppConfig(
        display_name="Cursor",
        configs=[
            ConfigLocation(
                path="~/.cursor/mcp.json",
                type=LocationType.FILE,
                description="Cursor MCP configuration",
                format=ConfigFormat.JSON,
            ),
        ],
    ),
}


def _matches_type(path: str, expected: LocationType) -> bool:
    mode = os.stat(path).st_mode
    if expected is LocationType.DIRECTORY:
        return stat.S_ISDIR(mode)
    return stat.S_ISREG(mode)


class ConfigRegistry:
    """
    Mutable table of known applications and their candidate config locations.

    Each instance owns its own copy of the table. Resolution re-checks the
    filesystem on every call; nothing is cached. The table is not
    synchronized, so callers must serialize ``append_config_location`` with
    reads of the same application.
    """

    def __init__(self, home: str | Path, apps: dict[str, AppConfig] | None = None) -> None:
        self._home = str(home)
        source = BUILTIN_APPS if apps is None else apps
        self._apps: dict[str, AppConfig] = {
            key.lower(): copy.deepcopy(app) for key, app in source.items()
        }

    @property
    def home(self) -> str:
        return self._home

    def list_application_keys(self) -> list[str]:
        return list(self._apps)

    def get_app_config(self, key: str) -> AppConfig | None:
        return self._apps.get(key.lower())

    def resolve_configs_for_app(self, key: str) -> list[ConfigLocation]:
        """Return the app's locations that exist with the declared type, in declaration order."""
        app = self.get_app_config(key)
        if app is None:
            return []

        found: list[ConfigLocation] = []
        for location in app.configs:
            candidate = location.resolved(self._home)
            try:
                if not _matches_type(candidate.path, candidate.type):
                    logger.debug(
                        "Config candidate has unexpected type",
                        extra={"app": key, "path": candidate.path},
                    )
                    continue
            except OSError as exc:
                logger.debug(
                    "Config candidate not accessible",
                    extra={"app": key, "path": candidate.path, "reason": exc.strerror},
                )
                continue
            found.append(candidate)
        return found

    def resolve_all_applications(self) -> dict[str, list[ConfigLocation]]:
        return {key: self.resolve_configs_for_app(key) for key in self._apps}

    def append_config_location(self, key: str, location: ConfigLocation) -> bool:
        """Append ``location`` to an existing app. Unknown keys are ignored."""
        app = self.get_app_config(key)
        if app is None:
            logger.debug("Ignoring config location for unknown app", extra={"app": key})
            return False
        app.configs.append(location)
        logger.info(
            "Config location added",
            extra={"app": key.lower(), "path": location.path, "format": location.format.value},
        )
        return True
