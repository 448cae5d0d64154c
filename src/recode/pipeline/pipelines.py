# topmark:header:start
#
#   project      : Recode
#   file         : pipelines.py
#   file_relpath : src/recode/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Named pipeline variants for Recode (immutable, typed step sequences).

Overview
--------
- ``SCAN``: read → scan
- ``RENDER``: SCAN + render → splice (nothing written)
- ``APPLY``: RENDER + write → format
- ``APPLY_PATCH``: RENDER + patch → write → format

A dry run uses an ``APPLY*`` pipeline with ``Config.apply_changes`` set to
False: the writer selects its null sink and the formatter skips.

```mermaid
flowchart TD
  D[reader] --> N[scanner] --> T[renderer] --> S[splicer]
  S -->|diff| P[patcher] --> W[writer]
  S --> W --> F[formatter]
```
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from recode.pipeline.contracts import Step
from recode.pipeline.steps import (
    formatter,
    patcher,
    reader,
    renderer,
    scanner,
    splicer,
    writer,
)

SCAN_PIPELINE: Final[tuple[Step, ...]] = (
    reader.ReaderStep(),  # Read the source file
    scanner.ScannerStep(),  # Index comments and locate the label markers
)

RENDER_PIPELINE: Final[tuple[Step, ...]] = SCAN_PIPELINE + (
    renderer.RendererStep(),  # Render the template over the input lines
    splicer.SplicerStep(),  # Splice the block between the markers (in memory)
)

APPLY_PIPELINE: Final[tuple[Step, ...]] = RENDER_PIPELINE + (
    writer.WriterStep(),  # Write changes back to the source
    formatter.FormatterStep(),  # Run the external formatter
)

APPLY_PATCH_PIPELINE: Final[tuple[Step, ...]] = RENDER_PIPELINE + (
    patcher.PatcherStep(),  # Generate a unified diff of the splice
    writer.WriterStep(),  # Write changes back to the source
    formatter.FormatterStep(),  # Run the external formatter
)


class Pipeline(tuple[Step, ...], Enum):
    """Available execution pipelines, mapped to their step sequences."""

    SCAN = SCAN_PIPELINE
    RENDER = RENDER_PIPELINE
    APPLY = APPLY_PIPELINE
    APPLY_PATCH = APPLY_PATCH_PIPELINE

    @property
    def steps(self) -> tuple[Step, ...]:
        """Return the instantiated, ordered step sequence for this pipeline."""
        return self.value
