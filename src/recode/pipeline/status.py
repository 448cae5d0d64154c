# topmark:header:start
#
#   project      : Recode
#   file         : status.py
#   file_relpath : src/recode/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Status enums for each axis in the Recode pipeline.

Each enum captures one phase (fs, scan, label, render, splice, patch, write,
format). Steps **must only** write to the axes listed in their ``axes_written``
contract.

Conventions:
  * Status enums inherit from `ColoredStrEnum`, which pairs each value with a
    yachalk colorizer.
  * Values are human-readable strings used in CLI output; prefer equality
    (``==``) over identity checks.
"""

from __future__ import annotations

from enum import Enum

from yachalk import chalk

from recode.rendering.colored_enum import ColoredStrEnum


class Axis(str, Enum):
    """Names of the status axes."""

    FS = "fs"
    SCAN = "scan"
    LABEL = "label"
    RENDER = "render"
    SPLICE = "splice"
    PATCH = "patch"
    WRITE = "write"
    FORMAT = "format"


class FsStatus(ColoredStrEnum):
    """Status of reading the source file."""

    PENDING = ("pending", chalk.gray)
    OK = ("ok", chalk.green)
    EMPTY = ("empty file", chalk.yellow)
    NOT_FOUND = ("not found", chalk.red)
    NO_READ_PERMISSION = ("no read permission", chalk.red_bright)
    UNREADABLE = ("read error", chalk.red_bright)
    UNICODE_DECODE_ERROR = ("Unicode decode error", chalk.red)


class ScanStatus(ColoredStrEnum):
    """Status of indexing the comments of the source."""

    PENDING = ("comment scan pending", chalk.gray)
    OK = ("comments indexed", chalk.green)
    UNSUPPORTED = ("unsupported file type", chalk.yellow)
    SYNTAX_ERROR = ("source syntax error", chalk.red_bright)


class LabelStatus(ColoredStrEnum):
    """Status of locating the BEGIN/END markers of the label."""

    PENDING = ("label lookup pending", chalk.gray)
    FOUND = ("label markers found", chalk.green)
    MISSING = ("label markers missing", chalk.yellow)


class RenderStatus(ColoredStrEnum):
    """Status of rendering the template over the input lines."""

    PENDING = ("rendering pending", chalk.gray)
    RENDERED = ("block rendered", chalk.green)
    RENDERED_WITH_ERRORS = ("block rendered, some lines failed", chalk.yellow)
    TEMPLATE_ERROR = ("template does not compile", chalk.red_bright)
    INPUT_NOT_FOUND = ("input not found", chalk.red)
    INPUT_UNREADABLE = ("input read error", chalk.red_bright)


class SpliceStatus(ColoredStrEnum):
    """Status of splicing the rendered block into the source."""

    PENDING = ("splice pending", chalk.gray)
    CHANGED = ("region changed", chalk.blue)
    UNCHANGED = ("region up to date", chalk.green)
    SKIPPED = ("splice skipped", chalk.yellow)


class PatchStatus(ColoredStrEnum):
    """Status of unified diff generation."""

    PENDING = ("patch pending", chalk.gray)
    GENERATED = ("patch generated", chalk.green)
    SKIPPED = ("patch skipped", chalk.yellow)


class WriteStatus(ColoredStrEnum):
    """Status of writing the spliced content back to the source file."""

    PENDING = ("write pending", chalk.gray)
    WRITTEN = ("changes written to file", chalk.green)
    UNCHANGED = ("file already up to date", chalk.green)
    SKIPPED = ("write skipped", chalk.yellow)
    FAILED = ("write failed", chalk.red_bright)


class FormatStatus(ColoredStrEnum):
    """Status of the external formatter run."""

    PENDING = ("format pending", chalk.gray)
    FORMATTED = ("formatted", chalk.green)
    FAILED = ("formatter failed", chalk.red)
    NOT_FOUND = ("formatter not found", chalk.yellow)
    SKIPPED = ("format skipped", chalk.yellow)
