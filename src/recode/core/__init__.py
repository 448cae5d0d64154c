# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Core building blocks: label location, splicing, diagnostics and errors.

Nothing in this package depends on Click or on the pipeline; the pipeline steps
and the CLI build on top of it.
"""
