# topmark:header:start
#
#   project      : Recode
#   file         : exec.py
#   file_relpath : src/recode/template/exec.py
#   license      : MIT
#   copyright    : (c) 2025 Recode contributors
#
# topmark:header:end

"""Compile and execute templates.

A `Template` is compiled once (parse errors surface immediately as
`TemplateSyntaxError`) and may then be executed against any number of values.
Execution errors raise `TemplateExecError`; they never leave partial output
behind.

The function table is explicit: a template sees the language built-ins plus the
mapping given at construction (by default `HELPER_FUNCS`).
"""

from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from recode.config.logging import get_logger
from recode.core.errors import TemplateExecError
from recode.template.funcs import BUILTIN_FUNCS, HELPER_FUNCS, format_value, is_true
from recode.template.parse import (
    ActionNode,
    BranchNode,
    CommandNode,
    DotNode,
    IdentifierNode,
    ListNode,
    LiteralNode,
    PipeNode,
    TextNode,
    VariableNode,
    parse,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from recode.config.logging import RecodeLogger
    from recode.template.parse import Node

logger: RecodeLogger = get_logger(__name__)

_NO_ARG: Any = object()


class Template:
    """A compiled template.

    Args:
        name (str): Name used in error messages.
        source (str): Template text.
        funcs (Mapping[str, Callable[..., Any]] | None): Extra callable functions;
            defaults to `HELPER_FUNCS`. They shadow built-ins of the same name.

    Raises:
        TemplateSyntaxError: If ``source`` does not parse or calls an unknown function.
    """

    def __init__(
        self,
        name: str,
        source: str,
        funcs: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self.name: str = name
        self.source: str = source
        self.funcs: Mapping[str, Callable[..., Any]] = MappingProxyType(
            {**BUILTIN_FUNCS, **(HELPER_FUNCS if funcs is None else funcs)}
        )
        self.tree: ListNode = parse(name, source, self.funcs)
        logger.debug("Compiled template '%s' (%d top-level nodes)", name, len(self.tree.nodes))

    def __repr__(self) -> str:
        return f"Template(name={self.name!r}, source={self.source!r})"

    def execute(self, data: Any) -> str:
        """Execute the template with ``data`` as ``.`` and ``$``.

        Args:
            data (Any): The value of the cursor.

        Returns:
            str: The rendered text.

        Raises:
            TemplateExecError: If evaluation fails.
        """
        state = _State(self, data)
        out: list[str] = []
        state.walk(self.tree, data, out)
        return "".join(out)


class _State:
    """Execution state: the variable stack of a single run."""

    def __init__(self, template: Template, data: Any) -> None:
        self.template = template
        self.vars: list[tuple[str, Any]] = [("$", data)]

    def error(self, reason: str) -> TemplateExecError:
        return TemplateExecError(self.template.name, reason)

    # Variables

    def push(self, name: str, value: Any) -> None:
        self.vars.append((name, value))

    def mark(self) -> int:
        return len(self.vars)

    def pop(self, mark: int) -> None:
        del self.vars[mark:]

    def lookup(self, name: str) -> Any:
        for var_name, value in reversed(self.vars):
            if var_name == name:
                return value
        raise self.error(f'undefined variable: {name}')

    def assign(self, name: str, value: Any) -> None:
        for i in range(len(self.vars) - 1, -1, -1):
            if self.vars[i][0] == name:
                self.vars[i] = (name, value)
                return
        raise self.error(f'undefined variable: {name}')

    # Tree walking

    def walk(self, node: Node, dot: Any, out: list[str]) -> None:
        if isinstance(node, TextNode):
            out.append(node.text)
        elif isinstance(node, ListNode):
            for child in node.nodes:
                self.walk(child, dot, out)
        elif isinstance(node, ActionNode):
            value: Any = self.eval_pipeline(dot, node.pipe)
            if not node.pipe.decl:
                out.append(format_value(value))
        elif isinstance(node, BranchNode):
            self.walk_branch(node, dot, out)
        else:
            raise self.error(f"unknown node: {node!r}")

    def walk_branch(self, node: BranchNode, dot: Any, out: list[str]) -> None:
        mark: int = self.mark()
        try:
            if node.keyword == "range":
                self.walk_range(node, dot, out)
                return
            value: Any = self.eval_pipeline(dot, node.pipe)
            if is_true(value):
                self.walk(node.body, value if node.keyword == "with" else dot, out)
            elif node.else_body is not None:
                self.walk(node.else_body, dot, out)
        finally:
            self.pop(mark)

    def walk_range(self, node: BranchNode, dot: Any, out: list[str]) -> None:
        decl: list[str] = node.pipe.decl
        # Range declarations bind per iteration, not to the pipeline result
        value: Any = self.eval_pipeline(dot, PipeNode([], False, node.pipe.cmds, node.pipe.line))
        empty: bool = True
        for index, elem in self._iterate(value):
            empty = False
            mark: int = self.mark()
            if len(decl) == 1:
                self.push(decl[0], elem)
            elif len(decl) == 2:
                self.push(decl[0], index)
                self.push(decl[1], elem)
            self.walk(node.body, elem, out)
            self.pop(mark)
        if empty and node.else_body is not None:
            self.walk(node.else_body, dot, out)

    def _iterate(self, value: Any) -> Iterator[tuple[Any, Any]]:
        if isinstance(value, (list, tuple)):
            return iter(enumerate(value))
        if isinstance(value, dict):
            return iter((k, value[k]) for k in sorted(value))
        if isinstance(value, int) and not isinstance(value, bool):
            return iter((i, i) for i in range(value))
        if value is None:
            return iter(())
        raise self.error(f"range can't iterate over {format_value(value)}")

    # Evaluation

    def eval_pipeline(self, dot: Any, pipe: PipeNode) -> Any:
        value: Any = _NO_ARG
        for cmd in pipe.cmds:
            value = self.eval_command(dot, cmd, value)
        for name in pipe.decl:
            if pipe.is_assign:
                self.assign(name, value)
            else:
                self.push(name, value)
        return value

    def eval_command(self, dot: Any, cmd: CommandNode, final: Any) -> Any:
        first: Node = cmd.args[0]
        if isinstance(first, IdentifierNode):
            return self.call(dot, first.name, cmd.args[1:], final)
        if len(cmd.args) > 1 or final is not _NO_ARG:
            raise self.error(f"can't give argument to non-function {self.describe(first)}")
        return self.eval_arg(dot, first)

    def eval_arg(self, dot: Any, node: Node) -> Any:
        if isinstance(node, DotNode):
            return dot
        if isinstance(node, VariableNode):
            return self.lookup(node.name)
        if isinstance(node, LiteralNode):
            return node.value
        if isinstance(node, PipeNode):
            mark: int = self.mark()
            try:
                return self.eval_pipeline(dot, node)
            finally:
                self.pop(mark)
        if isinstance(node, IdentifierNode):
            return self.call(dot, node.name, [], _NO_ARG)
        raise self.error(f"can't handle {node!r} as argument")

    def call(self, dot: Any, name: str, arg_nodes: list[Node], final: Any) -> Any:
        fn: Callable[..., Any] = self.template.funcs[name]
        args: list[Any] = [self.eval_arg(dot, a) for a in arg_nodes]
        if final is not _NO_ARG:
            args.append(final)
        try:
            inspect.signature(fn).bind(*args)
        except TypeError as exc:
            raise self.error(f"wrong number of args for {name}: {exc}") from exc
        except ValueError:
            # No introspectable signature; let the call itself decide
            pass
        try:
            return fn(*args)
        except TemplateExecError as exc:
            raise self.error(f"error calling {name}: {exc.reason}") from exc
        except Exception as exc:
            raise self.error(f"error calling {name}: {exc}") from exc

    @staticmethod
    def describe(node: Node) -> str:
        if isinstance(node, DotNode):
            return "."
        if isinstance(node, VariableNode):
            return node.name
        if isinstance(node, LiteralNode):
            return format_value(node.value)
        return type(node).__name__
