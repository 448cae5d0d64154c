# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : tests/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Tests for `recode.cli`."""
