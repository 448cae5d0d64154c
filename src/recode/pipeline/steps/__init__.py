# topmark:header:start
#
#   project      : Recode
#   file         : __init__.py
#   file_relpath : src/recode/pipeline/steps/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Pipeline steps: reader, scanner, renderer, splicer, patcher, writer, formatter."""
