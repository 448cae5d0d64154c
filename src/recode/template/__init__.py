# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/template/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Template language and per-line renderer.

Typical use:

```python
from recode.template import render_block, select_render_spec

spec = select_render_spec(row="item: {{ upper . }}", col=None)
block = render_block(spec.compile(), spec, ["a", "b"])
assert block.text == "item: A\\nitem: B"
```
"""

from __future__ import annotations

from recode.template.exec import Template
from recode.template.funcs import BUILTIN_FUNCS, HELPER_FUNCS
from recode.template.render import (
    RenderedBlock,
    RenderMode,
    RenderSpec,
    iter_input_lines,
    render_block,
    select_render_spec,
)

__all__ = [
    "BUILTIN_FUNCS",
    "HELPER_FUNCS",
    "RenderMode",
    "RenderSpec",
    "RenderedBlock",
    "Template",
    "iter_input_lines",
    "render_block",
    "select_render_spec",
]
