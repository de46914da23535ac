"""
Reading, parsing, searching, and display formatting for resolved config locations.

Every public function here is total: failures are reported inline through
``ConfigContent.error`` or an empty result rather than raised.
"""

import asyncio
import json
import logging
import os
import plistlib
from typing import Any, Callable, Sequence

import yaml

from appconfig_mcp.models import (
    ConfigContent,
    ConfigFormat,
    ConfigLocation,
    DirectoryListing,
    LocationType,
    StructuredData,
)

logger = logging.getLogger(__name__)

DISPLAY_LINE_LIMIT = 50


def _split_lines(content: str) -> list[str]:
    # Only "\n" ends a line; a final newline does not start another one.
    lines = content.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def _parse_plist(content: str) -> Any:
    return plistlib.loads(content.encode("utf-8"))


_PARSERS: dict[ConfigFormat, Callable[[str], Any]] = {
    ConfigFormat.JSON: json.loads,
    ConfigFormat.PLIST: _parse_plist,
    ConfigFormat.YAML: yaml.safe_load,
}


def _read_directory(location: ConfigLocation) -> ConfigContent:
    entries = sorted(entry for entry in os.listdir(location.path) if not entry.startswith("."))
    listing = "\n".join(f"  {entry}" for entry in entries)
    return ConfigContent(
        path=location.path,
        content=f"Directory contents:\n{listing}",
        format=ConfigFormat.DIRECTORY,
        parsed=DirectoryListing(tuple(entries)),
    )


def _read_file(location: ConfigLocation) -> ConfigContent:
    with open(location.path, encoding="utf-8", errors="replace") as handle:
        content = handle.read()
    result = ConfigContent(path=location.path, content=content, format=location.format)

    parser = _PARSERS.get(location.format)
    if parser is None:
        return result
    try:
        result.parsed = StructuredData(parser(content))
    except Exception as exc:  # noqa: BLE001
        logger.debug(
            "Config parse failed",
            extra={"path": location.path, "format": location.format.value},
        )
        result.error = f"Parse error: {exc}"
    return result


def read_config(location: ConfigLocation) -> ConfigContent:
    """Load a location, parsing file content according to its declared format."""
    try:
        if location.type is LocationType.DIRECTORY:
            return _read_directory(location)
        return _read_file(location)
    except OSError as exc:
        logger.debug("Config read failed", extra={"path": location.path}, exc_info=exc)
        message = exc.strerror or str(exc)
        return ConfigContent(
            path=location.path,
            content="",
            format=location.format,
            error=message,
        )


def search_in_config(location: ConfigLocation, term: str) -> list[str]:
    """
    Return ``"Line N: <text>"`` for each line containing ``term``, ignoring case.

    Read and parse errors yield an empty list, same as no match.
    """
    result = read_config(location)
    if result.error:
        return []

    needle = term.lower()
    return [
        f"Line {number}: {line.strip()}"
        for number, line in enumerate(_split_lines(result.content), start=1)
        if needle in line.lower()
    ]


def format_for_display(result: ConfigContent) -> str:
    if result.error:
        return f"Error reading {result.path}: {result.error}"

    header = f"📄 {result.path}\nFormat: {result.format.value}\n\n"

    if result.format is ConfigFormat.DIRECTORY:
        return header + result.content

    if isinstance(result.parsed, StructuredData) and result.format in (
        ConfigFormat.JSON,
        ConfigFormat.PLIST,
    ):
        # plist trees may hold dates and bytes.
        return header + json.dumps(result.parsed.value, indent=2, default=str)

    lines = _split_lines(result.content)
    if len(lines) > DISPLAY_LINE_LIMIT:
        shown = "\n".join(lines[:DISPLAY_LINE_LIMIT])
        return (
            f"{header}{shown}\n\n"
            f"... (showing first {DISPLAY_LINE_LIMIT} lines of {len(lines)} total lines)"
        )
    return header + result.content


async def read_configs(locations: Sequence[ConfigLocation]) -> list[ConfigContent]:
    """Read several locations concurrently; results keep the input order."""
    return list(
        await asyncio.gather(*(asyncio.to_thread(read_config, location) for location in locations))
    )


async def search_configs(locations: Sequence[ConfigLocation], term: str) -> list[list[str]]:
    """Search several locations concurrently; results keep the input order."""
    return list(
        await asyncio.gather(
            *(asyncio.to_thread(search_in_config, location, term) for location in locations)
        )
    )
