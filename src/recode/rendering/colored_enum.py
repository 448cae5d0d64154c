# topmark:header:start
#
#   project      : Recode
#   file         : colored_enum.py
#   file_relpath : src/recode/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Status enums that carry their own terminal color.

Every pipeline axis reports a member of a `ColoredStrEnum` subclass (see
[`recode.pipeline.status`][recode.pipeline.status]). The member *is* its
human-readable label, so it compares equal to that string, and its yachalk
style travels with it:

```python
from recode.pipeline.status import WriteStatus

WriteStatus.WRITTEN == "changes written to file"  # True
WriteStatus.FAILED.label(color=True)               # bright red label
```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """A yachalk style, or any callable with the same signature."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return ``args`` joined by ``sep`` and decorated for display."""
        ...


class ColoredStrEnum(str, Enum):
    """String enum whose members are ``(label, colorizer)`` pairs."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Build a member whose value is ``text``; ``color`` is kept aside.

        Args:
            text (str): The label, used as the enum value.
            color (Colorizer): Style applied by `label`.

        Returns:
            ColoredStrEnum: The new member.
        """
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the plain label."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the style of this member."""
        return self._color

    def label(self, *, color: bool) -> str:
        """Return the label, styled when ``color`` is True."""
        return self._color(self._value_) if color else self._value_
