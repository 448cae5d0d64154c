# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Recode package.

Recode is a build-time code generation helper. It renders a small template once
per line of an input stream and splices the result into an existing source file
between a pair of ``<LABEL>-BEGIN`` / ``<LABEL>-END`` comments.
"""

from __future__ import annotations
