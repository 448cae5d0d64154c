# topmark:header:start
#
#   project      : Recode
#   file         : registry.py
#   file_relpath : src/recode/pipeline/processors/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Registry of CommentIndexers for Recode file types.

This module provides a decorator to register CommentIndexer implementations
for specific file types. Each CommentIndexer is associated with a FileType by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recode.config.logging import get_logger
from recode.filetypes import get_file_type_registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from recode.config.logging import RecodeLogger
    from recode.pipeline.processors.base import CommentIndexer

logger: RecodeLogger = get_logger(__name__)


_registry: dict[str, CommentIndexer] = {}


def register_filetype(
    name: str,
) -> Callable[[type[CommentIndexer]], type[CommentIndexer]]:
    """Class decorator to register a CommentIndexer for a specific file type.

    Each decorated class is instantiated once per file type and bound to it, so
    that ``indexer.file_type`` is correct even when several file types share a
    class.

    Args:
        name (str): Name of the file type as defined in the file type registry.

    Returns:
        Callable[[type[CommentIndexer]], type[CommentIndexer]]: A decorator that
            registers the class as a CommentIndexer.

    Raises:
        ValueError: If the file type name is unknown or already registered.
    """
    file_type_registry = get_file_type_registry()
    if name not in file_type_registry:
        raise ValueError(f"Unknown file type: {name}")

    file_type = file_type_registry[name]

    def decorator(cls: type[CommentIndexer]) -> type[CommentIndexer]:
        logger.debug("Registering indexer %s for file type: %s", cls.__name__, file_type.name)
        if file_type.name in _registry:
            raise ValueError(f"File type '{file_type.name}' already has a registered indexer.")
        instance = cls()
        instance.file_type = file_type
        _registry[file_type.name] = instance
        return cls

    return decorator


def get_indexer_registry() -> dict[str, CommentIndexer]:
    """Return the registry of file type names to CommentIndexer instances."""
    return _registry
