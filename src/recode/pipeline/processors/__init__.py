# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/recode/pipeline/processors/__init__.py
#   project      : Recode
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Comment indexers, auto-imported from the modules of this package."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.filetypes import resolve_file_type
from recode.pipeline.processors.registry import get_indexer_registry

if TYPE_CHECKING:
    from recode.config.logging import RecodeLogger
    from recode.filetypes import FileType
    from recode.pipeline.processors.base import CommentIndexer


logger: RecodeLogger = get_logger(__name__)


def get_indexer_for_file(path: Path) -> CommentIndexer | None:
    """Retrieve the comment indexer registered for the file type of ``path``.

    Args:
        path (Path): The path to the source file.

    Returns:
        CommentIndexer | None: The registered indexer, or None if the file type is
        unknown or has no indexer.
    """
    register_all_processors()
    registry = get_indexer_registry()

    file_type: FileType | None = resolve_file_type(path)
    if file_type is None:
        logger.warning("File '%s' cannot be resolved to a registered file type", path)
        return None

    indexer: CommentIndexer | None = registry.get(file_type.name)
    if indexer is None:
        logger.warning(
            "File '%s' is resolved to file type '%s' but has no registered indexer",
            path,
            file_type.name,
        )
    return indexer


def register_all_processors() -> None:
    """Import all indexer modules in the current package (idempotent)."""
    package_dir = Path(__file__).parent
    for module_info in pkgutil.iter_modules([str(package_dir)]):
        if not module_info.ispkg:
            importlib.import_module(f"{__name__}.{module_info.name}")
