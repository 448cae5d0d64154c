# topmark:header:start
#
#   project      : Recode
#   file         : test_config.py
#   file_relpath : tests/config/test_config.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Configuration loading, discovery, merging and CLI overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from recode.config import MutableConfig
from recode.config.io import get_command_value_or_none, select_recode_table
from recode.core.errors import ConfigError
from recode.filetypes import resolve_file_type
from tests.conftest import make_config, parametrize


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    config = MutableConfig.from_defaults().freeze()
    assert config.separator is None
    assert config.run_formatter is True
    assert config.apply_changes is True
    assert config.show_diff is False
    assert config.diagnostics == ()


def test_recode_toml(tmp_path: Path) -> None:
    path: Path = _write(
        tmp_path / "recode.toml",
        'separator = ";"\nformat = false\n[formatters]\ngo = ["gofmt", "-w"]\nrust = "rustfmt"\n',
    )
    draft = MutableConfig.from_toml_file(path)
    assert draft is not None
    assert draft.separator == ";"
    assert draft.run_formatter is False
    assert draft.formatters == {"go": ("gofmt", "-w"), "rust": ("rustfmt",)}
    assert draft.config_files == [path]


def test_pyproject_tool_table(tmp_path: Path) -> None:
    path: Path = _write(tmp_path / "pyproject.toml", '[tool.recode]\nseparator = "|"\n')
    draft = MutableConfig.from_toml_file(path)
    assert draft is not None and draft.separator == "|"


def test_pyproject_without_tool_table(tmp_path: Path) -> None:
    path: Path = _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert MutableConfig.from_toml_file(path) is None
    assert select_recode_table(path, {"project": {}}) is None


def test_unknown_and_mistyped_keys_warn() -> None:
    draft = MutableConfig.from_toml_dict(
        {"colour": "red", "format": "yes", "formatters": {"go": 3}}
    )
    messages: list[str] = [d.message for d in draft.diagnostics]
    assert messages == [
        "<dict>: unknown config key 'colour' ignored",
        "<dict>: 'format' must be a boolean",
        "<dict>: formatter for 'go' must be a string or a list of strings",
    ]
    assert draft.run_formatter is None
    assert draft.formatters == {}


def test_invalid_toml_raises(tmp_path: Path) -> None:
    path: Path = _write(tmp_path / "recode.toml", "separator = \n")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        MutableConfig.from_toml_file(path)


def test_unreadable_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read config file"):
        MutableConfig.from_toml_file(tmp_path / "missing.toml")


def test_discovery_is_root_most_first(tmp_path: Path) -> None:
    top: Path = _write(tmp_path / "repo" / "recode.toml", 'root = true\nseparator = "a"\n')
    py: Path = _write(tmp_path / "repo" / "pkg" / "pyproject.toml", "[tool.recode]\n")
    near: Path = _write(tmp_path / "repo" / "pkg" / "recode.toml", 'separator = "b"\n')
    _write(tmp_path / "recode.toml", 'separator = "outside"\n')

    found: list[Path] = MutableConfig.discover_local_config_files(tmp_path / "repo" / "pkg")
    assert found == [top.resolve(), py.resolve(), near.resolve()]

    merged = MutableConfig.load_merged(start=tmp_path / "repo" / "pkg").freeze()
    assert merged.separator == "b"


def test_broken_pyproject_is_ignored_by_discovery(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[broken\n")
    conf: Path = _write(tmp_path / "recode.toml", "root = true\n")
    assert MutableConfig.discover_local_config_files(tmp_path) == [conf.resolve()]


def test_explicit_config_applies_last(tmp_path: Path) -> None:
    _write(tmp_path / "recode.toml", 'root = true\nseparator = "a"\n')
    extra: Path = _write(tmp_path / "other.toml", 'separator = "z"\n')
    merged = MutableConfig.load_merged(start=tmp_path, extra_config_files=[extra]).freeze()
    assert merged.separator == "z"
    assert merged.config_files[-1] == extra


def test_merge_keeps_unset_values() -> None:
    base = MutableConfig.from_toml_dict({"separator": ";", "formatters": {"go": "gofmt"}})
    top = MutableConfig.from_toml_dict({"format": False, "formatters": {"c": "indent"}})
    merged = base.merge_with(top)
    assert merged.separator == ";"
    assert merged.run_formatter is False
    assert merged.formatters == {"go": ("gofmt",), "c": ("indent",)}


def test_apply_cli_args() -> None:
    draft = MutableConfig.from_defaults().apply_cli_args(
        {"sep": "", "no_format": False, "formatter": "gofmt -s -w", "dry_run": True, "diff": True}
    )
    config = draft.freeze()
    assert config.separator == ""
    assert config.run_formatter is True
    assert config.formatter_override == ("gofmt", "-s", "-w")
    assert config.apply_changes is False
    assert config.show_diff is True
    assert config.config_files[-1] == "<CLI overrides>"


def test_thaw_freeze_is_lossless() -> None:
    config = make_config(separator=";", show_diff=True)
    assert config.thaw().freeze() == config


@parametrize(
    ("kwargs", "expected"),
    [
        ({}, ("goimports", "-w")),
        ({"formatters": {"go": ("gofmt",)}}, ("gofmt",)),
        ({"formatters": {"go": ()}}, ()),
        ({"formatter_override": ("x",), "formatters": {"go": ("gofmt",)}}, ("x",)),
        ({"run_formatter": False, "formatter_override": ("x",)}, ()),
    ],
)
def test_formatter_for_go(kwargs: dict[str, object], expected: tuple[str, ...]) -> None:
    assert make_config(**kwargs).formatter_for(resolve_file_type(Path("a.go"))) == expected


def test_formatter_for_unknown_type() -> None:
    assert make_config().formatter_for(None) == ()


def test_command_values() -> None:
    assert get_command_value_or_none("gofmt  -w") == ("gofmt", "-w")
    assert get_command_value_or_none(["a", "b c"]) == ("a", "b c")
    assert get_command_value_or_none(["a", 1]) is None
    assert get_command_value_or_none(3) is None
