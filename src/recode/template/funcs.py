# topmark:header:start
#
#   project      : Recode
#   file         : funcs.py
#   file_relpath : src/recode/template/funcs.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Functions callable from templates.

Two read-only tables are defined here:

* `HELPER_FUNCS`: path and string helpers offered to recode templates
  (``dirname``, ``basename``, ``ext``, ``join``, ``split``, ``trim``,
  ``trimPrefix``, ``trimSuffix``, ``strip``, ``lower``, ``upper``);
* `BUILTIN_FUNCS`: the language built-ins (``and``, ``or``, ``not``, ``len``,
  ``index``, comparisons, ``print``, ``printf``).

Path helpers use the host's path separator and mirror the usual lexical path
semantics: ``dirname("a/b/c") == "a/b"``, ``basename("") == "."``,
``ext("x.tar.gz") == ".gz"``.
"""

from __future__ import annotations

import json
import os
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from recode.config.logging import get_logger
from recode.core.errors import TemplateExecError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from recode.config.logging import RecodeLogger

logger: RecodeLogger = get_logger(__name__)

NO_VALUE: Final[str] = "<no value>"


# Value formatting and truth


def format_value(value: Any) -> str:
    """Return the printed form of a template value.

    Strings print as-is, booleans as ``true``/``false``, None as ``<no value>``
    and sequences as ``[a b c]``.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return NO_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(v) for v in value) + "]"
    if isinstance(value, dict):
        items: str = " ".join(
            f"{format_value(k)}:{format_value(v)}" for k, v in sorted(value.items())
        )
        return f"map[{items}]"
    return str(value)


def is_true(value: Any) -> bool:
    """Return the truth of a value: false, 0, None and empty values are false."""
    return bool(value)


# Path helpers


def dirname(path: str) -> str:
    """Return all but the last element of ``path``, cleaned."""
    return os.path.normpath(os.path.dirname(path) or ".")


def basename(path: str) -> str:
    """Return the last element of ``path``; trailing separators are ignored."""
    if path == "":
        return "."
    stripped: str = path.rstrip(os.sep)
    if stripped == "":
        return os.sep
    return os.path.basename(stripped)


def ext(path: str) -> str:
    """Return the extension of the last element of ``path`` (dot included)."""
    i: int = len(path) - 1
    while i >= 0 and path[i] != os.sep:
        if path[i] == ".":
            return path[i:]
        i -= 1
    return ""


def join(*elems: str) -> str:
    """Join the non-empty path elements and clean the result."""
    parts: list[str] = [e for e in elems if e]
    if not parts:
        return ""
    return os.path.normpath(os.sep.join(parts))


# String helpers


def split(s: str, sep: str = " ") -> list[str]:
    """Split ``s`` around ``sep``; an empty ``sep`` splits into characters."""
    logger.debug("split %r by %r", s, sep)
    if sep == "":
        return list(s)
    return s.split(sep)


def trim(s: str, cutset: str) -> str:
    """Strip every leading and trailing character contained in ``cutset``."""
    return s.strip(cutset)


def trim_prefix(s: str, prefix: str) -> str:
    """Remove ``prefix`` from ``s`` if present."""
    return s.removeprefix(prefix)


def trim_suffix(s: str, suffix: str) -> str:
    """Remove ``suffix`` from ``s`` if present."""
    return s.removesuffix(suffix)


def strip(s: str) -> str:
    """Strip leading and trailing whitespace."""
    return s.strip()


HELPER_FUNCS: Final[Mapping[str, Callable[..., Any]]] = MappingProxyType(
    {
        "dirname": dirname,
        "basename": basename,
        "ext": ext,
        "join": join,
        "split": split,
        "trim": trim,
        "trimPrefix": trim_prefix,
        "trimSuffix": trim_suffix,
        "strip": strip,
        "lower": str.lower,
        "upper": str.upper,
    }
)


# Built-ins


def _and(first: Any, *rest: Any) -> Any:
    for value in (first, *rest):
        if not is_true(value):
            return value
    return (first, *rest)[-1]


def _or(first: Any, *rest: Any) -> Any:
    for value in (first, *rest):
        if is_true(value):
            return value
    return (first, *rest)[-1]


def _not(value: Any) -> bool:
    return not is_true(value)


def _len(value: Any) -> int:
    try:
        return len(value)
    except TypeError as exc:
        raise TemplateExecError("len", f"len of type {type(value).__name__}") from exc


def _index(item: Any, *indices: Any) -> Any:
    for idx in indices:
        if isinstance(item, dict):
            item = item.get(idx)
            continue
        if not isinstance(item, (list, tuple, str)):
            raise TemplateExecError("index", f"can't index item of type {type(item).__name__}")
        if not isinstance(idx, int) or isinstance(idx, bool):
            raise TemplateExecError("index", f"cannot index slice/array with {format_value(idx)}")
        if not 0 <= idx < len(item):
            raise TemplateExecError("index", f"index out of range: {idx}")
        item = item[idx]
    return item


def _comparable(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool)
    return (isinstance(a, int) and isinstance(b, int)) or (
        isinstance(a, str) and isinstance(b, str)
    )


def _check(name: str, a: Any, b: Any) -> None:
    if not _comparable(a, b):
        raise TemplateExecError(name, "incompatible types for comparison")


def _eq(a: Any, *others: Any) -> bool:
    if not others:
        raise TemplateExecError("eq", "missing argument for comparison")
    for b in others:
        _check("eq", a, b)
        if a == b:
            return True
    return False


def _ne(a: Any, b: Any) -> bool:
    _check("ne", a, b)
    return a != b


def _ordered(name: str, a: Any, b: Any) -> None:
    _check(name, a, b)
    if isinstance(a, bool):
        raise TemplateExecError(name, "invalid type for comparison")


def _lt(a: Any, b: Any) -> bool:
    _ordered("lt", a, b)
    return a < b


def _le(a: Any, b: Any) -> bool:
    _ordered("le", a, b)
    return a <= b


def _gt(a: Any, b: Any) -> bool:
    _ordered("gt", a, b)
    return a > b


def _ge(a: Any, b: Any) -> bool:
    _ordered("ge", a, b)
    return a >= b


def _print(*args: Any) -> str:
    # Operands are separated by a space when neither side is a string
    out: list[str] = []
    prev: Any = None
    for i, arg in enumerate(args):
        if i > 0 and not isinstance(arg, str) and not isinstance(prev, str):
            out.append(" ")
        out.append(format_value(arg))
        prev = arg
    return "".join(out)


_RE_VERB: Final[re.Pattern[str]] = re.compile(r"%([-+# 0]*)(\d*)(?:\.(\d+))?([a-zA-Z%])")


def _printf(fmt: str, *args: Any) -> str:
    remaining: list[Any] = list(args)

    def convert(m: re.Match[str]) -> str:
        flags, width, precision, verb = m.groups()
        if verb == "%":
            return "%"
        if not remaining:
            return f"%!{verb}(MISSING)"
        arg: Any = remaining.pop(0)
        spec: str = f"%{flags}{width}" + (f".{precision}" if precision else "")
        if verb in ("s", "v"):
            return (spec + "s") % format_value(arg)
        if verb == "q":
            return (spec + "s") % json.dumps(format_value(arg), ensure_ascii=False)
        if verb == "t" and isinstance(arg, bool):
            return (spec + "s") % format_value(arg)
        if verb in ("d", "x", "X", "o", "b") and isinstance(arg, int) and not isinstance(arg, bool):
            if verb == "b":
                return (f"%{flags}{width}s") % format(arg, "b")
            return (spec + verb) % arg
        if verb in ("x", "X") and isinstance(arg, str):
            encoded: str = arg.encode().hex()
            return (spec + "s") % (encoded.upper() if verb == "X" else encoded)
        if verb == "T":
            return type(arg).__name__
        return f"%!{verb}({type(arg).__name__}={format_value(arg)})"

    result: str = _RE_VERB.sub(convert, fmt)
    if remaining:
        extra: str = ", ".join(f"{type(a).__name__}={format_value(a)}" for a in remaining)
        result += f"%!(EXTRA {extra})"
    return result


BUILTIN_FUNCS: Final[Mapping[str, Callable[..., Any]]] = MappingProxyType(
    {
        "and": _and,
        "or": _or,
        "not": _not,
        "len": _len,
        "index": _index,
        "eq": _eq,
        "ne": _ne,
        "lt": _lt,
        "le": _le,
        "gt": _gt,
        "ge": _ge,
        "print": _print,
        "printf": _printf,
    }
)
