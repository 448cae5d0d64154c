# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/recode/core/exit_codes.py
#   project      : Recode
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Exit codes for the Recode CLI.

Recode aligns with the BSD `sysexits` convention where practical, so that
`go generate` and other build drivers can tell failure categories apart.
A run where the label pair is missing is *not* a failure and exits with
``SUCCESS``.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Recode CLI.

    Attributes:
        SUCCESS: Successful execution, whether or not a splice happened.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        SYNTAX_ERROR: The source file could not be tokenized. Mirrors BSD
            ``EX_DATAERR (65)``.
        ENCODING_ERROR: Text decoding error. Also ``EX_DATAERR (65)`` in spirit, kept
            distinct so that callers can tell both apart.
        FILE_NOT_FOUND: Source or input path does not exist. Mirrors BSD
            ``EX_NOINPUT (66)``.
        UNSUPPORTED_FILE_TYPE: No comment indexer for the source file type.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        PIPELINE_ERROR: Internal pipeline failure. Mirrors BSD ``EX_SOFTWARE (70)``.
        TEMPLATE_ERROR: The row/column template does not compile.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    SYNTAX_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    ENCODING_ERROR = 67
    TEMPLATE_ERROR = 68
    UNSUPPORTED_FILE_TYPE = 69  # EX_UNAVAILABLE
    PIPELINE_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
