# topmark:header:start
#
#   project      : Recode
#   file         : __main__.py
#   file_relpath : src/recode/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Module entry point for running Recode via ``python -m recode``.

Delegates directly to :func:`recode.cli.main.cli`, so module execution and the
``recode`` console script share a single entry point.

Examples:
    Regenerate the ``MODELS`` block of ``main.go`` from ``models.txt``::

        python -m recode -src main.go -label MODELS -input models.txt -row "&{{ . }}{},"
"""

from __future__ import annotations

from recode.cli.main import cli

if __name__ == "__main__":
    cli()
