# topmark:header:start
#
#   project      : Recode
#   file         : parse.py
#   file_relpath : src/recode/template/parse.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Parse a token stream into a template tree.

Grammar (informal):

```text
list     := (TEXT | action | control)*
action   := "{{" pipeline "}}"
control  := "{{" ("if" | "with" | "range") pipeline "}}" list
            ["{{" "else" ["if" pipeline] "}}" list] "{{" "end" "}}"
pipeline := [decl] command ("|" command)*
decl     := $v (":=" | "=") | $i "," $e ":="
command  := operand+
operand  := "." | $var | IDENT | STRING | NUMBER | BOOL | "(" pipeline ")"
```

Function names are resolved at parse time: calling a name that is not in the
function table is a syntax error, as is referring to an undeclared variable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NoReturn, Union

from recode.core.errors import TemplateSyntaxError
from recode.template.lexer import Token, TokenKind, lex

if TYPE_CHECKING:
    from collections.abc import Container


@dataclass
class TextNode:
    """Literal text copied to the output."""

    text: str


@dataclass
class DotNode:
    """The cursor ``.``."""

    line: int


@dataclass
class VariableNode:
    """A variable reference (``$`` or ``$name``)."""

    name: str
    line: int


@dataclass
class IdentifierNode:
    """A function name."""

    name: str
    line: int


@dataclass
class LiteralNode:
    """A string, number or boolean constant."""

    value: object
    line: int


@dataclass
class CommandNode:
    """A function call or a single operand."""

    args: list[Node]
    line: int


@dataclass
class PipeNode:
    """A pipeline: optional declaration plus ``|``-chained commands."""

    decl: list[str]
    is_assign: bool
    cmds: list[CommandNode]
    line: int


@dataclass
class ActionNode:
    """A ``{{ pipeline }}`` action."""

    pipe: PipeNode
    line: int


@dataclass
class ListNode:
    """A sequence of nodes."""

    nodes: list[Node] = field(default_factory=list)


@dataclass
class BranchNode:
    """An ``if``, ``with`` or ``range`` block."""

    keyword: str
    pipe: PipeNode
    body: ListNode
    else_body: ListNode | None
    line: int


Node = Union[
    TextNode,
    DotNode,
    VariableNode,
    IdentifierNode,
    LiteralNode,
    CommandNode,
    PipeNode,
    ActionNode,
    ListNode,
    BranchNode,
]


class Parser:
    """Recursive-descent parser over the tokens of one template.

    Args:
        name (str): Template name, used in error messages.
        source (str): Template text.
        funcs (Container[str]): Names of the callable functions.
    """

    def __init__(self, name: str, source: str, funcs: Container[str]) -> None:
        self.name = name
        self.funcs = funcs
        self.tokens: list[Token] = lex(name, source)
        self.pos: int = 0
        self.vars: list[str] = ["$"]

    # Token helpers

    def peek(self, ahead: int = 0) -> Token:
        """Return the token ``ahead`` positions from the current one."""
        idx: int = min(self.pos + ahead, len(self.tokens) - 1)
        return self.tokens[idx]

    def next(self) -> Token:
        """Consume and return the current token."""
        tok: Token = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, context: str) -> Token:
        """Consume a token of ``kind`` or raise a syntax error."""
        tok: Token = self.next()
        if tok.kind is not kind:
            self.error(tok, f"unexpected {self.describe(tok)} in {context}")
        return tok

    def error(self, tok: Token, reason: str) -> NoReturn:
        """Raise a `TemplateSyntaxError` located at ``tok``."""
        raise TemplateSyntaxError(self.name, tok.line, reason)

    @staticmethod
    def describe(tok: Token) -> str:
        """Return a human-readable token description."""
        if tok.kind is TokenKind.EOF:
            return "EOF"
        if tok.kind is TokenKind.RIGHT:
            return '"}}"'
        return f"<{tok.value}>" if tok.value else tok.kind.value

    # Grammar

    def parse(self) -> ListNode:
        """Parse the whole template."""
        body, _ = self.parse_list(stop=())
        return body

    def parse_list(self, stop: tuple[str, ...]) -> tuple[ListNode, Token | None]:
        """Parse nodes until EOF or a ``{{keyword}}`` in ``stop``.

        Returns:
            tuple[ListNode, Token | None]: The parsed list and the terminating keyword
            token (None at EOF). The terminating keyword is consumed, its
            remainder is not.
        """
        out: ListNode = ListNode()
        while True:
            tok: Token = self.next()
            if tok.kind is TokenKind.EOF:
                if stop:
                    self.error(tok, "unexpected EOF")
                return out, None
            if tok.kind is TokenKind.TEXT:
                out.nodes.append(TextNode(tok.value))
                continue
            # LEFT delimiter
            head: Token = self.peek()
            if head.kind is TokenKind.KEYWORD:
                self.next()
                if head.value in ("end", "else"):
                    if head.value not in stop:
                        self.error(head, f"unexpected {{{{{head.value}}}}}")
                    return out, head
                out.nodes.append(self.parse_branch(head))
                continue
            pipe: PipeNode = self.parse_pipeline("command", allow_decl=True)
            self.expect(TokenKind.RIGHT, "command")
            out.nodes.append(ActionNode(pipe=pipe, line=tok.line))

    def parse_branch(self, keyword: Token) -> BranchNode:
        """Parse an ``if``/``with``/``range`` block after its keyword.

        The closing ``{{end}}`` (including an ``{{else if}}`` chain) is consumed.
        """
        scope: int = len(self.vars)
        pipe: PipeNode = self.parse_pipeline(keyword.value, allow_decl=True)
        self.expect(TokenKind.RIGHT, keyword.value)
        body, terminator = self.parse_list(stop=("end", "else"))
        else_body: ListNode | None = None
        if terminator is not None and terminator.value == "else":
            nxt: Token = self.peek()
            if keyword.value == "if" and nxt.kind is TokenKind.KEYWORD and nxt.value == "if":
                # {{else if ...}} shares the outer {{end}}
                self.next()
                else_body = ListNode([self.parse_branch(nxt)])
            else:
                self.expect(TokenKind.RIGHT, "else")
                else_body, _ = self.parse_list(stop=("end",))
                self.expect(TokenKind.RIGHT, "end")
        else:
            self.expect(TokenKind.RIGHT, "end")
        del self.vars[scope:]
        return BranchNode(
            keyword=keyword.value,
            pipe=pipe,
            body=body,
            else_body=else_body,
            line=keyword.line,
        )

    def parse_decl(self, context: str) -> tuple[list[str], bool]:
        """Parse an optional variable declaration or assignment."""
        first: Token = self.peek()
        if first.kind is not TokenKind.VARIABLE:
            return [], False
        op: Token = self.peek(1)
        if op.kind in (TokenKind.DECLARE, TokenKind.ASSIGN):
            self.pos += 2
            if op.kind is TokenKind.ASSIGN:
                if first.value not in self.vars:
                    self.error(first, f'undefined variable "{first.value}"')
                return [first.value], True
            self.vars.append(first.value)
            return [first.value], False
        if context == "range" and op.kind is TokenKind.COMMA:
            second: Token = self.peek(2)
            if second.kind is TokenKind.VARIABLE and self.peek(3).kind is TokenKind.DECLARE:
                self.pos += 4
                self.vars.extend([first.value, second.value])
                return [first.value, second.value], False
            self.error(op, "too many declarations in range")
        return [], False

    def parse_pipeline(self, context: str, *, allow_decl: bool) -> PipeNode:
        """Parse a pipeline up to (not including) ``}}`` or ``)``."""
        line: int = self.peek().line
        decl, is_assign = self.parse_decl(context) if allow_decl else ([], False)
        cmds: list[CommandNode] = []
        while True:
            cmd: CommandNode = self.parse_command()
            if not cmd.args:
                tok: Token = self.peek()
                if cmds or tok.kind is TokenKind.PIPE:
                    self.error(tok, "missing value for command")
                self.error(tok, f"missing value for {context}")
            cmds.append(cmd)
            if self.peek().kind is not TokenKind.PIPE:
                break
            self.next()
        for cmd in cmds[1:]:
            if not isinstance(cmd.args[0], IdentifierNode):
                self.error(
                    Token(TokenKind.PIPE, "|", cmd.line), "non executable command in pipeline stage"
                )
        return PipeNode(decl=decl, is_assign=is_assign, cmds=cmds, line=line)

    def parse_command(self) -> CommandNode:
        """Parse operands until ``|``, ``}}`` or ``)``."""
        line: int = self.peek().line
        args: list[Node] = []
        while True:
            tok: Token = self.peek()
            if tok.kind in (TokenKind.PIPE, TokenKind.RIGHT, TokenKind.RPAREN):
                return CommandNode(args=args, line=line)
            if tok.kind is TokenKind.EOF:
                self.error(tok, "unclosed action")
            args.append(self.parse_operand())

    def parse_operand(self) -> Node:
        """Parse a single operand."""
        tok: Token = self.next()
        if tok.kind is TokenKind.DOT:
            return DotNode(tok.line)
        if tok.kind is TokenKind.VARIABLE:
            if tok.value not in self.vars:
                self.error(tok, f'undefined variable "{tok.value}"')
            return VariableNode(tok.value, tok.line)
        if tok.kind is TokenKind.IDENTIFIER:
            if tok.value not in self.funcs:
                self.error(tok, f'function "{tok.value}" not defined')
            return IdentifierNode(tok.value, tok.line)
        if tok.kind is TokenKind.STRING:
            return LiteralNode(tok.value, tok.line)
        if tok.kind is TokenKind.NUMBER:
            return LiteralNode(int(tok.value), tok.line)
        if tok.kind is TokenKind.BOOL:
            return LiteralNode(tok.value == "true", tok.line)
        if tok.kind is TokenKind.LPAREN:
            pipe: PipeNode = self.parse_pipeline("parenthesized pipeline", allow_decl=False)
            self.expect(TokenKind.RPAREN, "parenthesized pipeline")
            return pipe
        self.error(tok, f"unexpected {self.describe(tok)} in operand")


def parse(name: str, source: str, funcs: Container[str]) -> ListNode:
    """Parse ``source`` into a template tree.

    Args:
        name (str): Template name, used in error messages.
        source (str): Template text.
        funcs (Container[str]): Names of the callable functions.

    Returns:
        ListNode: The root of the parsed tree.

    Raises:
        TemplateSyntaxError: If the template is malformed.
    """
    return Parser(name, source, funcs).parse()
