"""Source rewrites applied to a template file before compilation.

Two independent passes over the Python AST of the template:

1. **TagFStrings**: every f-string becomes a tag call
   ``f"<b>{x}</b>"`` → ``t(("<b>", "</b>"), x)``
2. **LabelToReturn**: the marker statement becomes the return value
   ``template: f"..."`` → ``return t((...), ...)``

Example:
    ```python
    # page.py, as written
    greeting = "Hello"
    template: f"<p>{greeting} {name}</p>"

    # after both passes
    greeting = "Hello"
    return t(("<p>", " ", "</p>"), greeting, name)
    ```

"""

from __future__ import annotations

import ast
from collections.abc import Iterator, Sequence

from tagtpl.environment.exceptions import TemplateConfigurationError

# Nodes that open a new scope; marker and yield lookups stop at them
SCOPE_NODES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef, ast.Lambda)


def tag_call(tag_name: str, fragments: Sequence[str], values: Sequence[ast.expr]) -> ast.Call:
    """``<tag_name>((fragments...), *values)``"""
    return ast.Call(
        func=ast.Name(id=tag_name, ctx=ast.Load()),
        args=[
            ast.Tuple(elts=[ast.Constant(value=f) for f in fragments], ctx=ast.Load()),
            *values,
        ],
        keywords=[],
    )


def is_tag_call(node: ast.expr, tag_name: str) -> bool:
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == tag_name
    )


class TagFStrings(ast.NodeTransformer):
    """Rewrite every f-string into a call of the tag named ``tag_name``.

    Literal parts become the fragment tuple (always one longer than the
    values). A placeholder carrying a conversion or format spec is passed as
    a one-placeholder f-string, left untagged, since Python must format it
    eagerly. Format specs themselves are never tagged.

    t-strings (``ast.TemplateStr``, Python 3.14+) are already explicit
    templates and keep their shape; f-strings inside their interpolations
    are still rewritten.
    """

    def __init__(self, tag_name: str):
        self.tag_name = tag_name
        self.count = 0

    def visit_JoinedStr(self, node: ast.JoinedStr) -> ast.expr:
        fragments = [""]
        values: list[ast.expr] = []

        for part in node.values:
            if isinstance(part, ast.Constant):
                fragments[-1] += part.value
                continue

            assert isinstance(part, ast.FormattedValue)
            part.value = self.visit(part.value)
            if part.conversion == -1 and part.format_spec is None:
                values.append(part.value)
            else:
                values.append(ast.copy_location(ast.JoinedStr(values=[part]), part))
            fragments.append("")

        self.count += 1
        return ast.copy_location(tag_call(self.tag_name, fragments, values), node)

    def visit_Interpolation(self, node: ast.AST) -> ast.AST:
        # t-string placeholder: rewrite inside the value, keep the format spec
        node.value = self.visit(node.value)  # type: ignore[attr-defined]
        return node


class LabelToReturn(ast.NodeTransformer):
    """Replace ``<label>: <expression>`` statements with ``return <expression>``.

    An expression that is not already a call of the tag is wrapped in one
    (``return t(("", ""), <expression>)``), so the render result is always
    processed text.

    Only bare annotations count as markers (``template: X = 1`` is an
    assignment). Nested function and class scopes are not entered.
    Replaced statements are collected in ``markers``.
    """

    def __init__(self, label: str, tag_name: str = "t"):
        self.label = label
        self.tag_name = tag_name
        self.markers: list[ast.AnnAssign] = []

    def is_marker(self, node: ast.AnnAssign) -> bool:
        return (
            node.value is None
            and node.simple == 1
            and isinstance(node.target, ast.Name)
            and node.target.id == self.label
        )

    def visit_AnnAssign(self, node: ast.AnnAssign) -> ast.stmt:
        if not self.is_marker(node):
            return node
        self.markers.append(node)
        value = node.annotation
        if not is_tag_call(value, self.tag_name):
            value = ast.copy_location(tag_call(self.tag_name, ("", ""), [value]), value)
        return ast.copy_location(ast.Return(value=value), node)

    def _skip_scope(self, node: ast.AST) -> ast.AST:
        return node

    visit_FunctionDef = _skip_scope
    visit_AsyncFunctionDef = _skip_scope
    visit_ClassDef = _skip_scope
    visit_Lambda = _skip_scope


def tag_fstrings(module: ast.Module, tag_name: str) -> int:
    """Tag every f-string of ``module`` in place. Returns how many were tagged."""
    tagger = TagFStrings(tag_name)
    tagger.visit(module)
    return tagger.count


def label_to_return(
    module: ast.Module,
    label: str,
    tag_name: str = "t",
    *,
    name: str | None = None,
) -> int:
    """Turn the single top-level marker of ``module`` into a return, in place.

    Returns:
        Line number of the marker statement.

    Raises:
        TemplateConfigurationError: If there is not exactly one marker, or it
            is nested inside a compound statement.
    """
    top_level = {id(stmt) for stmt in module.body}
    rewriter = LabelToReturn(label, tag_name)
    rewriter.visit(module)

    markers = rewriter.markers
    linenos = [m.lineno for m in markers]
    if len(markers) != 1:
        raise TemplateConfigurationError(
            f"expected exactly one '{label}:' statement, found {len(markers)}",
            label=label,
            count=len(markers),
            linenos=linenos,
            name=name,
        )
    if id(markers[0]) not in top_level:
        raise TemplateConfigurationError(
            f"the '{label}:' statement must be at the top level of the template, "
            "not inside a compound statement",
            label=label,
            count=1,
            linenos=linenos,
            name=name,
        )
    return linenos[0]


def iter_scope(body: Sequence[ast.stmt]) -> Iterator[ast.AST]:
    """Walk ``body`` without descending into nested function/class/lambda scopes."""
    stack: list[ast.AST] = list(reversed(body))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, SCOPE_NODES):
            continue
        stack.extend(reversed(list(ast.iter_child_nodes(node))))


def find_top_level_yield(body: Sequence[ast.stmt]) -> ast.expr | None:
    """First ``yield``/``yield from`` that would run at template level, if any."""
    for node in iter_scope(body):
        if isinstance(node, (ast.Yield, ast.YieldFrom)):
            return node
    return None


def split_future_imports(body: Sequence[ast.stmt]) -> tuple[list[ast.stmt], list[ast.stmt]]:
    """Split leading ``from __future__`` imports (after an optional docstring) off ``body``.

    They must stay module-level statements, so the compiler keeps them
    outside the generated render function.
    """
    start = 0
    if (
        body
        and isinstance(body[0], ast.Expr)
        and isinstance(body[0].value, ast.Constant)
        and isinstance(body[0].value.value, str)
    ):
        start = 1
    end = start
    while (
        end < len(body)
        and isinstance(body[end], ast.ImportFrom)
        and body[end].module == "__future__"
    ):
        end += 1
    return list(body[start:end]), [*body[:start], *body[end:]]
