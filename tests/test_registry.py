from pathlib import Path

from appconfig_mcp.models import AppConfig, ConfigFormat, ConfigLocation, LocationType, expand_home
from appconfig_mcp.registry import ConfigRegistry


def _location(path: str, type_: str = "file", format_: str = "json") -> ConfigLocation:
    return ConfigLocation(path=path, type=type_, description=f"{path} config", format=format_)


def _write(path: Path, text: str = "{}") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_expand_home_only_rewrites_leading_tilde() -> None:
    assert expand_home("~/.cursor/mcp.json", "/home/dev") == "/home/dev/.cursor/mcp.json"
    assert expand_home("/etc/~/x", "/home/dev") == "/etc/~/x"
    assert expand_home("relative/path", "/home/dev") == "relative/path"


def test_list_application_keys_keeps_builtin_order() -> None:
    registry = ConfigRegistry("/nonexistent-home")
    assert registry.list_application_keys() == [
        "gemini",
        "claude desktop",
        "claude code",
        "vscode",
        "cursor",
    ]


def test_get_app_config_is_case_insensitive() -> None:
    registry = ConfigRegistry("/nonexistent-home")
    assert registry.get_app_config("VSCode") is registry.get_app_config("vscode")
    vscode = registry.get_app_config("VSCODE")
    assert vscode is not None
    assert vscode.bundle_id == "com.microsoft.VSCode"
    assert registry.get_app_config("notepad") is None


def test_resolve_keeps_only_existing_paths_of_matching_type(tmp_path: Path) -> None:
    _write(tmp_path / ".cursor" / "mcp.json")
    # Declared as a file but present as a directory.
    (tmp_path / ".gemini" / "settings.json").mkdir(parents=True)
    (tmp_path / ".claude").mkdir()

    registry = ConfigRegistry(tmp_path)

    cursor = registry.resolve_configs_for_app("cursor")
    assert [config.path for config in cursor] == [f"{tmp_path}/.cursor/mcp.json"]
    assert registry.resolve_configs_for_app("gemini") == []
    assert registry.resolve_configs_for_app("claude desktop") == []

    claude_code = registry.resolve_configs_for_app("Claude Code")
    assert len(claude_code) == 1
    assert claude_code[0].type is LocationType.DIRECTORY
    assert Path(claude_code[0].path) == tmp_path / ".claude"


def test_resolve_does_not_rewrite_registry_entries(tmp_path: Path) -> None:
    _write(tmp_path / ".cursor" / "mcp.json")
    registry = ConfigRegistry(tmp_path)

    registry.resolve_configs_for_app("cursor")

    cursor = registry.get_app_config("cursor")
    assert cursor is not None
    assert cursor.configs[0].path == "~/.cursor/mcp.json"


def test_resolve_unknown_app_returns_empty() -> None:
    assert ConfigRegistry("/nonexistent-home").resolve_configs_for_app("notepad") == []


def test_resolve_preserves_declaration_order(tmp_path: Path) -> None:
    _write(tmp_path / "b.yaml", "a: 1")
    _write(tmp_path / "a.json")
    apps = {
        "tool": AppConfig(
            display_name="Tool",
            configs=[
                _location("~/b.yaml", format_="yaml"),
                _location("~/missing.json"),
                _location("~/a.json"),
            ],
        )
    }
    registry = ConfigRegistry(tmp_path, apps)

    resolved = registry.resolve_configs_for_app("TOOL")
    assert [Path(config.path).name for config in resolved] == ["b.yaml", "a.json"]
    assert resolved[0].format is ConfigFormat.YAML


def test_append_config_location_is_additive(tmp_path: Path) -> None:
    _write(tmp_path / ".cursor" / "mcp.json")
    _write(tmp_path / ".cursor" / "rules.txt", "be nice")
    registry = ConfigRegistry(tmp_path)

    added = registry.append_config_location(
        "Cursor", _location("~/.cursor/rules.txt", format_="text")
    )

    assert added is True
    paths = [config.path for config in registry.resolve_configs_for_app("cursor")]
    assert paths == [f"{tmp_path}/.cursor/mcp.json", f"{tmp_path}/.cursor/rules.txt"]


def test_append_config_location_ignores_unknown_app(tmp_path: Path) -> None:
    registry = ConfigRegistry(tmp_path)
    before = {key: list(registry.get_app_config(key).configs) for key in registry.list_application_keys()}

    added = registry.append_config_location("notepad", _location("~/notes.txt", format_="text"))

    assert added is False
    assert registry.list_application_keys() == list(before)
    after = {key: list(registry.get_app_config(key).configs) for key in registry.list_application_keys()}
    assert after == before


def test_registries_do_not_share_state(tmp_path: Path) -> None:
    first = ConfigRegistry(tmp_path)
    second = ConfigRegistry(tmp_path)

    first.append_config_location("gemini", _location("~/.gemini/extra.json"))

    assert len(first.get_app_config("gemini").configs) == 2
    assert len(second.get_app_config("gemini").configs) == 1


def test_resolve_all_applications_covers_every_key(tmp_path: Path) -> None:
    _write(tmp_path / ".vscode" / "mcp.json")
    result = ConfigRegistry(tmp_path).resolve_all_applications()

    assert list(result) == ["gemini", "claude desktop", "claude code", "vscode", "cursor"]
    assert [Path(config.path).name for config in result["vscode"]] == ["mcp.json"]
    assert result["cursor"] == []
