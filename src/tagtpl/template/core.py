"""tagtpl Template — compiled template function ready for rendering.

The Template class wraps a compiled render function and provides the
``render()`` API. Templates are immutable and safe for concurrent rendering.

Architecture:
    ```
    Template
    ├── _compiled: CompiledTemplate    # render function, code, rewritten AST
    ├── _name, _filename               # For error messages and tracebacks
    └── _source                        # Original template source
    ```

Context Handling:
Every ``render()`` call builds its own context mapping and hands the render
function a read-only view of it (``types.MappingProxyType``). Template code
cannot mutate the caller's data through the context, and no state is shared
between renders.

"""

from __future__ import annotations

import ast
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tagtpl.compiler import CompiledTemplate


class Template:
    """Compiled template ready for rendering.

    Attributes:
        name: Template identifier (for error messages)
        filename: Source file path (for tracebacks)
        source: Original template source
        free_names: Names the template reads from the context or ambient scope

    Methods:
        render(context, **kwargs): Render template with given variables

    Example:
            >>> from tagtpl import Environment
            >>> env = Environment()
            >>> tmpl = env.from_string('template: f"Hello, {name}!"')
            >>> tmpl.render(name="World")
            'Hello, World!'

            >>> tmpl({"name": "World"})  # Templates are callable with a context
            'Hello, World!'

    """

    __slots__ = ("_compiled", "_filename", "_name", "_source")

    def __init__(
        self,
        compiled: CompiledTemplate,
        name: str | None,
        filename: str | None,
        source: str | None = None,
    ):
        self._compiled = compiled
        self._name = name
        self._filename = filename
        self._source = source

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def free_names(self) -> tuple[str, ...]:
        return self._compiled.free_names

    @property
    def code(self) -> str:
        """Python source of the generated render function (for debugging)."""
        return ast.unparse(self._compiled.module)

    def render(self, context: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        """Render the template.

        Args:
            context: Mapping of names to values
            **kwargs: More names; they take precedence over ``context``

        Returns:
            The rendered string

        Errors raised by template code propagate unchanged.
        """
        ctx: dict[str, Any] = dict(context) if context is not None else {}
        if kwargs:
            ctx.update(kwargs)
        return self._compiled.function(MappingProxyType(ctx))

    def __call__(self, context: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        return self.render(context, **kwargs)

    def __repr__(self) -> str:
        return f"<Template {self._name or '(string)'!r}>"
