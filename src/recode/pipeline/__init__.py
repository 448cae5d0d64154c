# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Recode processing pipeline: class-based steps sharing a `ProcessingContext`.

Submodules are imported explicitly by their users; this package exports
nothing so that importing a step never drags in the whole pipeline.
"""
