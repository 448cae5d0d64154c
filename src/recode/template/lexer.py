# topmark:header:start
#
#   project      : Recode
#   file         : lexer.py
#   file_relpath : src/recode/template/lexer.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Tokenizer for the template language.

A template is literal text interleaved with ``{{ action }}`` blocks. The lexer
produces a flat token stream: ``TEXT`` tokens for literal text, and for every
action a ``LEFT`` token, the action's tokens, and a ``RIGHT`` token.

Whitespace trimming follows the usual convention: ``{{- `` removes the
whitespace immediately before the action, `` -}}`` the whitespace immediately
after it (the space next to the dash is required). ``{{/* ... */}}`` is a
comment and produces no tokens.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from recode.core.errors import TemplateSyntaxError

LEFT_DELIM: Final[str] = "{{"
RIGHT_DELIM: Final[str] = "}}"

KEYWORDS: Final[frozenset[str]] = frozenset({"if", "else", "end", "range", "with"})

_RE_LEFT_TRIM: Final[re.Pattern[str]] = re.compile(r"\{\{-\s")
_RE_RIGHT_TRIM: Final[re.Pattern[str]] = re.compile(r"\s+-\}\}")
_RE_COMMENT_CLOSE: Final[re.Pattern[str]] = re.compile(r"(\s+-)?\}\}")

_RE_ACTION_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<string>"(?:[^"\\\n]|\\.)*")
    | (?P<raw>`[^`]*`)
    | (?P<declare>:=)
    | (?P<assign>=)
    | (?P<pipe>\|)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<comma>,)
    | (?P<variable>\$[A-Za-z_0-9]*)
    | (?P<number>[+-]?\d+)
    | (?P<field>\.[A-Za-z_][A-Za-z_0-9]*)
    | (?P<dot>\.)
    | (?P<ident>[A-Za-z_][A-Za-z_0-9]*)
    """,
    re.VERBOSE,
)


class TokenKind(Enum):
    """Kinds of tokens produced by [`lex`][recode.template.lexer.lex]."""

    TEXT = "text"
    LEFT = "left delim"
    RIGHT = "right delim"
    DOT = "dot"
    VARIABLE = "variable"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    PIPE = "pipe"
    LPAREN = "left paren"
    RPAREN = "right paren"
    DECLARE = ":="
    ASSIGN = "="
    COMMA = "comma"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token; ``value`` holds the decoded value for literals."""

    kind: TokenKind
    value: str
    line: int


def _unquote(name: str, line: int, literal: str) -> str:
    """Decode a double-quoted string literal (Go-style escapes)."""
    body: str = literal[1:-1]
    if "\\" not in body:
        return body
    try:
        return body.encode("latin-1", "backslashreplace").decode("unicode_escape")
    except UnicodeDecodeError as exc:
        raise TemplateSyntaxError(name, line, f"bad string syntax: {literal}") from exc


def lex(name: str, source: str) -> list[Token]:
    """Split ``source`` into tokens.

    Args:
        name (str): Template name, used in error messages.
        source (str): Template text.

    Returns:
        list[Token]: The token stream, terminated by an ``EOF`` token.

    Raises:
        TemplateSyntaxError: On unclosed actions/comments or unexpected characters.
    """
    tokens: list[Token] = []
    pos: int = 0
    line: int = 1
    trim_next: bool = False
    n: int = len(source)

    while True:
        start: int = source.find(LEFT_DELIM, pos)
        text: str = source[pos:] if start < 0 else source[pos:start]
        if trim_next:
            text = text.lstrip()
        left_trim: bool = start >= 0 and _RE_LEFT_TRIM.match(source, start) is not None
        if left_trim:
            text = text.rstrip()
        if text:
            tokens.append(Token(TokenKind.TEXT, text, line))
        if start < 0:
            break
        line += source.count("\n", pos, start)

        i: int = start + len(LEFT_DELIM) + (2 if left_trim else 0)

        # Comments: {{/* ... */}}
        if source.startswith("/*", i):
            close: int = source.find("*/", i + 2)
            if close < 0:
                raise TemplateSyntaxError(name, line, "unclosed comment")
            m = _RE_COMMENT_CLOSE.match(source, close + 2)
            if m is None:
                raise TemplateSyntaxError(name, line, "comment ends before closing delimiter")
            trim_next = m.group(1) is not None
            line += source.count("\n", start, m.end())
            pos = m.end()
            continue

        tokens.append(Token(TokenKind.LEFT, LEFT_DELIM, line))
        while True:
            if i >= n:
                raise TemplateSyntaxError(name, line, "unclosed action")
            rt = _RE_RIGHT_TRIM.match(source, i)
            if rt is not None:
                trim_next = True
                i = rt.end()
                break
            if source.startswith(RIGHT_DELIM, i):
                trim_next = False
                i += len(RIGHT_DELIM)
                break
            m = _RE_ACTION_TOKEN.match(source, i)
            if m is None:
                raise TemplateSyntaxError(
                    name, line, f"unexpected {source[i]!r} in command"
                )
            kind: str | None = m.lastgroup
            value: str = m.group(0)
            if kind == "space":
                line += value.count("\n")
            elif kind == "field":
                raise TemplateSyntaxError(
                    name, line, f"field access {value} is not supported on line values"
                )
            else:
                tokens.append(_action_token(name, line, kind, value))
            i = m.end()
        tokens.append(Token(TokenKind.RIGHT, RIGHT_DELIM, line))
        pos = i

    tokens.append(Token(TokenKind.EOF, "", line))
    return tokens


def _action_token(name: str, line: int, kind: str | None, value: str) -> Token:
    """Map a regex group name to a `Token`."""
    if kind == "string":
        return Token(TokenKind.STRING, _unquote(name, line, value), line)
    if kind == "raw":
        return Token(TokenKind.STRING, value[1:-1], line)
    if kind == "ident":
        if value in KEYWORDS:
            return Token(TokenKind.KEYWORD, value, line)
        if value in ("true", "false"):
            return Token(TokenKind.BOOL, value, line)
        return Token(TokenKind.IDENTIFIER, value, line)
    simple: dict[str | None, TokenKind] = {
        "declare": TokenKind.DECLARE,
        "assign": TokenKind.ASSIGN,
        "pipe": TokenKind.PIPE,
        "lparen": TokenKind.LPAREN,
        "rparen": TokenKind.RPAREN,
        "comma": TokenKind.COMMA,
        "variable": TokenKind.VARIABLE,
        "number": TokenKind.NUMBER,
        "dot": TokenKind.DOT,
    }
    return Token(simple[kind], value, line)
