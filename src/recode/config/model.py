# topmark:header:start
#
#   project      : Recode
#   file         : model.py
#   file_relpath : src/recode/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Configuration model: immutable `Config` and its `MutableConfig` builder.

Configuration is layered, last wins:

1. built-in defaults ([`MutableConfig.from_defaults`][recode.config.model.MutableConfig.from_defaults]);
2. config files discovered from the working directory upwards
   (root-most first; in one directory ``pyproject.toml`` before ``recode.toml``);
3. an explicit ``--config`` file;
4. command-line overrides ([`MutableConfig.apply_cli_args`][recode.config.model.MutableConfig.apply_cli_args]).

Recognized keys (top level of ``recode.toml`` or under ``[tool.recode]``):

```toml
root = true              # stop upward discovery here
separator = ";"          # column-mode separator
format = true            # run the formatter after a write
[formatters]             # per file type formatter command
go = ["gofmt", "-w"]
```
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from recode.config.io import (
    TomlTable,
    get_bool_value_or_none,
    get_command_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
    select_recode_table,
)
from recode.config.logging import get_logger
from recode.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from recode.core.diagnostics import Diagnostic, DiagnosticLog
from recode.core.errors import ConfigError

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.filetypes import FileType

logger: RecodeLogger = get_logger(__name__)

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

KNOWN_KEYS: frozenset[str] = frozenset({"root", "separator", "format", "formatters"})

CLI_OVERRIDE_STR: str = "<CLI overrides>"


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Recode.

    Produced by [`MutableConfig.freeze`][recode.config.model.MutableConfig.freeze].

    Attributes:
        config_files (tuple[Path | str, ...]): Config sources applied, in merge order.
        separator (str | None): Column-mode separator; None selects the default ``","``.
        run_formatter (bool): Whether the formatter runs after a write.
        formatters (Mapping[str, tuple[str, ...]]): Per file type formatter commands
            overriding the built-in ones (an empty command disables formatting).
        formatter_override (tuple[str, ...] | None): Formatter command for every file
            type (``--formatter``); takes precedence over ``formatters``.
        apply_changes (bool): False for a dry run: nothing is written or formatted.
        show_diff (bool): Whether a unified diff of the splice is produced.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading config.
    """

    config_files: tuple[Path | str, ...]
    separator: str | None
    run_formatter: bool
    formatters: Mapping[str, tuple[str, ...]]
    formatter_override: tuple[str, ...] | None
    apply_changes: bool
    show_diff: bool
    diagnostics: tuple[Diagnostic, ...] = ()

    def formatter_for(self, file_type: FileType | None) -> tuple[str, ...]:
        """Return the formatter command for ``file_type`` (empty: do not format)."""
        if not self.run_formatter:
            return ()
        if self.formatter_override is not None:
            return self.formatter_override
        if file_type is None:
            return ()
        return self.formatters.get(file_type.name, file_type.formatter)

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        diagnostics = DiagnosticLog()
        diagnostics.items.extend(self.diagnostics)
        return MutableConfig(
            config_files=list(self.config_files),
            separator=self.separator,
            run_formatter=self.run_formatter,
            formatters=dict(self.formatters),
            formatter_override=self.formatter_override,
            apply_changes=self.apply_changes,
            show_diff=self.show_diff,
            diagnostics=diagnostics,
        )


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    ``None`` means "not set by this layer" so that merging keeps the value of
    the layer below.
    """

    config_files: list[Path | str] = field(default_factory=lambda: [])
    separator: str | None = None
    run_formatter: bool | None = None
    formatters: dict[str, tuple[str, ...]] = field(default_factory=lambda: {})
    formatter_override: tuple[str, ...] | None = None
    apply_changes: bool | None = None
    show_diff: bool | None = None
    root: bool = False
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling in defaults."""
        return Config(
            config_files=tuple(self.config_files),
            separator=self.separator,
            run_formatter=True if self.run_formatter is None else self.run_formatter,
            formatters=dict(self.formatters),
            formatter_override=self.formatter_override,
            apply_changes=True if self.apply_changes is None else self.apply_changes,
            show_diff=bool(self.show_diff),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return the built-in defaults."""
        return cls(
            config_files=["<defaults>"],
            run_formatter=True,
            apply_changes=True,
            show_diff=False,
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Build a draft from a parsed Recode settings table.

        Unknown keys and values of the wrong type are ignored with a warning
        diagnostic.

        Args:
            data (TomlTable): The ``recode.toml`` document or ``[tool.recode]`` table.
            config_file (Path | None): Source file, for messages.

        Returns:
            MutableConfig: The draft holding only the keys present in ``data``.
        """
        draft = cls()
        where: str = str(config_file) if config_file else "<dict>"

        for key in sorted(set(data) - KNOWN_KEYS):
            draft.diagnostics.add_warning(f"{where}: unknown config key '{key}' ignored")
            logger.warning("Unknown config key '%s' in %s", key, where)

        draft.root = bool(get_bool_value_or_none(data, "root"))

        if "separator" in data:
            draft.separator = get_string_value_or_none(data, "separator")
            if draft.separator is None:
                draft.diagnostics.add_warning(f"{where}: 'separator' must be a string")

        if "format" in data:
            draft.run_formatter = get_bool_value_or_none(data, "format")
            if draft.run_formatter is None:
                draft.diagnostics.add_warning(f"{where}: 'format' must be a boolean")

        for ft_name, raw in get_table_value(data, "formatters").items():
            command: tuple[str, ...] | None = get_command_value_or_none(raw)
            if command is None:
                draft.diagnostics.add_warning(
                    f"{where}: formatter for '{ft_name}' must be a string or a list of strings"
                )
                continue
            draft.formatters[ft_name] = command

        logger.debug("MutableConfig from %s: %s", where, draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``recode.toml`` files and ``pyproject.toml`` files (with a
        ``[tool.recode]`` table).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None for a ``pyproject.toml`` without
            a ``[tool.recode]`` table.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        table: TomlTable | None = select_recode_table(path, load_toml_dict(path))
        if table is None:
            logger.debug("No [tool.recode] table in %s", path)
            return None
        draft: MutableConfig = cls.from_toml_dict(table, config_file=path)
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found by walking upward from ``start``.

        Files are returned root-most first so that a later merge gives the nearest
        file precedence. In one directory ``pyproject.toml`` precedes
        ``recode.toml``. A file setting ``root = true`` stops the walk after its
        directory.

        Args:
            start (Path): Directory (or file) where discovery starts.

        Returns:
            list[Path]: Discovered config files in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            stop_here: bool = False
            entries: list[Path] = []
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                try:
                    table: TomlTable | None = select_recode_table(p, load_toml_dict(p))
                except ConfigError as e:
                    # A broken recode.toml is kept so that loading reports it;
                    # a broken pyproject.toml may not concern Recode at all
                    logger.debug("Unreadable config %s during discovery: %s", p, e)
                    if name == CONFIG_FILE_NAME:
                        entries.append(p)
                    continue
                if table is None:
                    continue
                entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if get_bool_value_or_none(table, "root"):
                    stop_here = True
            if entries:
                per_dir.append(entries)

            parent: Path = cur.parent
            if parent == cur or stop_here:
                if stop_here:
                    logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for entries in reversed(per_dir):
            ordered.extend(entries)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: list[Path] | None = None,
        discover: bool = True,
    ) -> MutableConfig:
        """Merge defaults, discovered config files and explicit config files.

        Args:
            start (Path | None): Discovery anchor; defaults to the working directory.
            extra_config_files (list[Path] | None): Explicit files, applied last.
            discover (bool): Whether to discover config files upwards from ``start``.

        Returns:
            MutableConfig: The merged draft (CLI overrides not yet applied).

        Raises:
            ConfigError: If a config file cannot be read or parsed.
        """
        draft: MutableConfig = cls.from_defaults()
        if discover:
            for path in cls.discover_local_config_files(start or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(path)
                if mc is not None:
                    draft = draft.merge_with(mc)
        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)
        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where the values set in ``other`` override this draft."""
        diagnostics = DiagnosticLog()
        diagnostics.items.extend(self.diagnostics)
        diagnostics.items.extend(other.diagnostics)
        return MutableConfig(
            config_files=self.config_files + other.config_files,
            separator=other.separator if other.separator is not None else self.separator,
            run_formatter=other.run_formatter
            if other.run_formatter is not None
            else self.run_formatter,
            formatters={**self.formatters, **other.formatters},
            formatter_override=other.formatter_override
            if other.formatter_override is not None
            else self.formatter_override,
            apply_changes=other.apply_changes
            if other.apply_changes is not None
            else self.apply_changes,
            show_diff=other.show_diff if other.show_diff is not None else self.show_diff,
            root=self.root or other.root,
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from an arguments mapping (CLI or API).

        Recognized keys: ``sep``, ``no_format``, ``formatter`` (a command line
        string), ``dry_run``, ``diff``. Keys that are absent or None are ignored.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This instance, updated.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("sep") is not None:
            self.separator = args["sep"]
        if args.get("no_format"):
            self.run_formatter = False
        if args.get("formatter") is not None:
            self.formatter_override = tuple(shlex.split(args["formatter"]))
        if args.get("dry_run"):
            self.apply_changes = False
        if args.get("diff"):
            self.show_diff = True
        return self
