# topmark:header:start
#
#   project      : Recode
#   file         : filetypes.py
#   file_relpath : src/recode/filetypes.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""File type definitions used to pick a comment indexer and a formatter.

A [`FileType`][recode.filetypes.FileType] matches paths by extension or exact
file name. Each built-in type also declares the external formatter command that
runs after a successful splice (an empty tuple means "no formatter"); the
configuration may override it per type name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from recode.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from recode.config.logging import RecodeLogger

logger: RecodeLogger = get_logger(__name__)


@dataclass(frozen=True)
class FileType:
    """A named family of source files.

    Attributes:
        name (str): Stable identifier (e.g. ``"go"``), used as a config key.
        extensions (tuple[str, ...]): Suffixes including the dot (e.g. ``".go"``).
        filenames (tuple[str, ...]): Exact basenames (e.g. ``"Jenkinsfile"``).
        description (str): Human-readable description.
        grammar (str): tree-sitter grammar name for the comment indexer (empty if unused).
        formatter (tuple[str, ...]): Default formatter argv; the file path is appended.
    """

    name: str
    extensions: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    description: str = ""
    grammar: str = ""
    formatter: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, path: Path) -> bool:
        """Return True if ``path`` belongs to this file type."""
        if self.extensions and path.suffix in self.extensions:
            return True
        return path.name in self.filenames


FILETYPES: Final[tuple[FileType, ...]] = (
    FileType(
        name="go",
        extensions=(".go",),
        description="Go sources (*.go)",
        grammar="go",
        formatter=("goimports", "-w"),
    ),
    FileType(name="c", extensions=(".c", ".h"), description="C sources and headers", grammar="c"),
    FileType(
        name="cpp",
        extensions=(".cc", ".cpp", ".cxx", ".hh", ".hpp", ".hxx"),
        description="C++ sources and headers",
        grammar="cpp",
    ),
    FileType(name="cs", extensions=(".cs",), description="C# sources (*.cs)", grammar="csharp"),
    FileType(name="java", extensions=(".java",), description="Java sources", grammar="java"),
    FileType(
        name="javascript",
        extensions=(".js", ".mjs", ".cjs", ".jsx"),
        description="JavaScript sources",
        grammar="javascript",
    ),
    FileType(
        name="kotlin",
        extensions=(".kt", ".kts"),
        description="Kotlin sources",
        grammar="kotlin",
    ),
    FileType(
        name="rust",
        extensions=(".rs",),
        description="Rust sources (*.rs)",
        grammar="rust",
        formatter=("rustfmt",),
    ),
    FileType(name="swift", extensions=(".swift",), description="Swift sources", grammar="swift"),
    FileType(
        name="typescript",
        extensions=(".ts", ".mts", ".cts"),
        description="TypeScript sources",
        grammar="typescript",
    ),
    FileType(name="tsx", extensions=(".tsx",), description="TypeScript JSX sources", grammar="tsx"),
    FileType(name="python", extensions=(".py", ".pyi"), description="Python sources"),
)


_FILE_TYPES_BY_NAME: Final[dict[str, FileType]] = {ft.name: ft for ft in FILETYPES}


def get_file_type_registry() -> dict[str, FileType]:
    """Return the registry of file type names to `FileType` definitions."""
    return _FILE_TYPES_BY_NAME


def resolve_file_type(path: Path) -> FileType | None:
    """Return the first file type matching ``path``, or None when unknown."""
    for ft in FILETYPES:
        if ft.matches(path):
            logger.debug("File type '%s' detected for file: %s", ft.name, path)
            return ft
    logger.debug("File '%s' cannot be resolved to a known file type", path)
    return None
