# topmark:header:start
#
#   project      : Recode
#   file         : test_funcs.py
#   file_relpath : tests/template/test_funcs.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Helper and built-in template functions."""

from __future__ import annotations

import os
from typing import Any

import pytest

from recode.core.errors import TemplateExecError
from recode.template.funcs import (
    BUILTIN_FUNCS,
    HELPER_FUNCS,
    basename,
    dirname,
    ext,
    format_value,
    join,
    split,
)
from tests.conftest import parametrize

posix_only = pytest.mark.skipif(os.sep != "/", reason="path helpers use the host separator")


def test_helper_table_is_read_only() -> None:
    assert set(HELPER_FUNCS) == {
        "dirname",
        "basename",
        "ext",
        "join",
        "split",
        "trim",
        "trimPrefix",
        "trimSuffix",
        "strip",
        "lower",
        "upper",
    }
    with pytest.raises(TypeError):
        HELPER_FUNCS["evil"] = print  # type: ignore[index]


@posix_only
@parametrize(
    ("path", "expected"),
    [("a/b/c", "a/b"), ("/x/a.go", "/x"), ("a.go", "."), ("", "."), ("a//b/", "a/b")],
)
def test_dirname(path: str, expected: str) -> None:
    assert dirname(path) == expected


@posix_only
@parametrize(
    ("path", "expected"),
    [("/x/a.go", "a.go"), ("a/b/", "b"), ("", "."), ("/", "/"), ("c", "c")],
)
def test_basename(path: str, expected: str) -> None:
    assert basename(path) == expected


@posix_only
@parametrize(
    ("path", "expected"),
    [("x.tar.gz", ".gz"), ("a/b.go", ".go"), ("a.d/b", ""), ("noext", ""), ("dot.", ".")],
)
def test_ext(path: str, expected: str) -> None:
    assert ext(path) == expected


@posix_only
def test_join_cleans_and_skips_empty_elements() -> None:
    assert join("a", "", "b/../c", "d.go") == "a/c/d.go"
    assert join() == ""
    assert join("", "") == ""


def test_split_defaults_to_space() -> None:
    assert split("a b  c") == ["a", "b", "", "c"]
    assert split("a,b", ",") == ["a", "b"]
    assert split("ab", "") == ["a", "b"]


@parametrize(
    ("name", "args", "expected"),
    [
        ("trim", ("--x--", "-"), "x"),
        ("trimPrefix", ("pre_x", "pre_"), "x"),
        ("trimPrefix", ("x", "pre_"), "x"),
        ("trimSuffix", ("x.go", ".go"), "x"),
        ("strip", ("  x \t",), "x"),
        ("lower", ("MiXeD",), "mixed"),
        ("upper", ("hi",), "HI"),
    ],
)
def test_string_helpers(name: str, args: tuple[Any, ...], expected: str) -> None:
    assert HELPER_FUNCS[name](*args) == expected


@parametrize(
    ("value", "expected"),
    [
        ("s", "s"),
        (None, "<no value>"),
        (True, "true"),
        (3, "3"),
        (["a", 1, False], "[a 1 false]"),
        ({"b": 2, "a": 1}, "map[a:1 b:2]"),
    ],
)
def test_format_value(value: Any, expected: str) -> None:
    assert format_value(value) == expected


@parametrize(
    ("args", "expected"),
    [
        (("%s=%d", "x", 3), "x=3"),
        (("%q", "a"), '"a"'),
        (("%05d", 42), "00042"),
        (("%x|%X", 255, "hi"), "ff|6869"),
        (("%t %v", True, None), "true <no value>"),
        (("100%%",), "100%"),
        (("%T", 1), "int"),
        (("%s %s", "x"), "x %!s(MISSING)"),
        (("%s", "x", 1), "x%!(EXTRA int=1)"),
        (("%d", "x"), "%!d(str=x)"),
        (("%-3s|", "a"), "a  |"),
        (("%b", 5), "101"),
    ],
)
def test_printf(args: tuple[Any, ...], expected: str) -> None:
    assert BUILTIN_FUNCS["printf"](*args) == expected


def test_logic_builtins_return_operands() -> None:
    assert BUILTIN_FUNCS["and"]("a", "", "b") == ""
    assert BUILTIN_FUNCS["and"]("a", "b") == "b"
    assert BUILTIN_FUNCS["or"]("", "b") == "b"
    assert BUILTIN_FUNCS["or"]("", 0) == 0
    assert BUILTIN_FUNCS["not"]("") is True


def test_comparisons() -> None:
    assert BUILTIN_FUNCS["eq"]("a", "b", "a") is True
    assert BUILTIN_FUNCS["ne"](1, 2) is True
    assert BUILTIN_FUNCS["lt"]("a", "b") is True
    assert BUILTIN_FUNCS["ge"](2, 2) is True
    with pytest.raises(TemplateExecError):
        BUILTIN_FUNCS["lt"](True, False)
    with pytest.raises(TemplateExecError):
        BUILTIN_FUNCS["eq"]("a")


def test_index_and_len() -> None:
    assert BUILTIN_FUNCS["index"]([["a", "b"]], 0, 1) == "b"
    assert BUILTIN_FUNCS["index"]({"k": "v"}, "k") == "v"
    assert BUILTIN_FUNCS["len"](["a", "b"]) == 2
    with pytest.raises(TemplateExecError, match="can't index item of type int"):
        BUILTIN_FUNCS["index"](3, 0)
    with pytest.raises(TemplateExecError, match="len of type int"):
        BUILTIN_FUNCS["len"](3)
