"""Value types shared by the config registry, reader, and service layers."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class LocationType(str, Enum):
    """Filesystem kind a config location is expected to have."""

    FILE = "file"
    DIRECTORY = "directory"


class ConfigFormat(str, Enum):
    """How the reader interprets a location's content."""

    JSON = "json"
    PLIST = "plist"
    YAML = "yaml"
    TEXT = "text"
    DIRECTORY = "directory"


def expand_home(path: str, home: str) -> str:
    """Replace a leading ``~`` in ``path`` with ``home``."""
    if path.startswith("~"):
        return f"{home}{path[1:]}"
    return path


@dataclass(frozen=True, slots=True)
class ConfigLocation:
    """One candidate path plus the metadata describing how to read it."""

    path: str
    type: LocationType
    description: str
    format: ConfigFormat

    def __post_init__(self) -> None:
        # Accept raw strings from tool arguments.
        object.__setattr__(self, "type", LocationType(self.type))
        object.__setattr__(self, "format", ConfigFormat(self.format))
        if self.type is LocationType.DIRECTORY and self.format is not ConfigFormat.DIRECTORY:
            raise ValueError("Directory locations must use the 'directory' format.")

    def resolved(self, home: str) -> "ConfigLocation":
        return replace(self, path=expand_home(self.path, home))


@dataclass(slots=True)
class AppConfig:
    """Display metadata and ordered candidate locations for one application."""

    display_name: str
    configs: list[ConfigLocation] = field(default_factory=list)
    bundle_id: str | None = None


@dataclass(frozen=True, slots=True)
class StructuredData:
    """Tree produced by a successful JSON, plist, or YAML parse."""

    value: Any


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """Sorted, non-hidden entry names of a directory location."""

    entries: tuple[str, ...]


ParsedValue = StructuredData | DirectoryListing


@dataclass(slots=True)
class ConfigContent:
    """Result of reading one config location. Plain text leaves ``parsed`` unset."""

    path: str
    content: str
    format: ConfigFormat
    parsed: ParsedValue | None = None
    error: str | None = None

    def parsed_value(self) -> Any:
        if isinstance(self.parsed, DirectoryListing):
            return list(self.parsed.entries)
        if isinstance(self.parsed, StructuredData):
            return self.parsed.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "format": self.format.value,
            "content": self.content,
            "parsed": self.parsed_value(),
            "error": self.error,
        }
