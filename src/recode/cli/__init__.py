# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Click-based command line interface for Recode.

The entry point is [`recode.cli.main.cli`][recode.cli.main.cli], exposed as the
``recode`` console script.
"""

__all__: list[str] = []
