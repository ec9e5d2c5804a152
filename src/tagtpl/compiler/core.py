"""tagtpl Compiler Core — turn a template file into a render function.

The template is ordinary Python. The compiler rewrites its AST, wraps it in
a function taking the context, and compiles that to a code object.

Pipeline:
Template Source → ast.parse → TagFStrings → LabelToReturn → wrap in def
→ free-name binding → compile() → exec() → render function

    ```python
    # page.py
    title = name.upper()
    template: f"<h1>{title}</h1>"

    # generated
    def render(context):
        if "title" in context:
            title = context["title"]
        if "name" in context:
            name = context["name"]
        elif "name" in _tagtpl_ambient:
            name = _tagtpl_ambient["name"]
        if "t" in context:
            t = context["t"]
        elif "t" in _tagtpl_ambient:
            t = _tagtpl_ambient["t"]
        title = name.upper()
        return t(("<h1>", "</h1>"), title)
    ```

Line numbers of the original source are preserved, so tracebacks raised
while rendering point at the template file.

"""

from __future__ import annotations

import ast
import builtins
import logging
import types
from collections import ChainMap
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from tagtpl.compiler.binding import AMBIENT_NAME, analyze_names, bind_free_names
from tagtpl.compiler.transforms import (
    find_top_level_yield,
    label_to_return,
    split_future_imports,
    tag_fstrings,
)
from tagtpl.config import DEFAULT_CONFIG, CompilerConfig
from tagtpl.environment.exceptions import TemplateConfigurationError, TemplateSyntaxError

logger = logging.getLogger(__name__)

RenderFunction = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """Output of one compilation.

    Attributes:
        function: The render function, called with the context mapping
        code: Code object of the generated module
        module: Rewritten module AST (for introspection/debugging)
        free_names: Names bound from the context or ambient scope at render time
        marker_lineno: Line of the template marker in the source
    """

    function: RenderFunction
    code: types.CodeType
    module: ast.Module
    free_names: tuple[str, ...]
    marker_lineno: int


class Compiler:
    """Compile template source into a render function.

    Compilation is a pure one-shot transform: nothing is cached here and no
    template code runs until the returned function is called.

    Attributes:
        _config: Names agreed with template authors (tag, label, ...)
        _ambient: Fallback names for anything the context does not provide

    Example:
            >>> from tagtpl.tag import t
            >>> compiler = Compiler(ambient={"t": t})
            >>> compiled = compiler.compile('template: f"Hello {name}!"')
            >>> compiled.function({"name": "World"})
            'Hello World!'

    """

    __slots__ = ("_ambient", "_config")

    def __init__(
        self,
        config: CompilerConfig = DEFAULT_CONFIG,
        ambient: Mapping[str, Any] | None = None,
    ):
        self._config = config
        self._ambient: Mapping[str, Any] = ambient if ambient is not None else {}

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def compile(
        self,
        source: str,
        name: str | None = None,
        filename: str | None = None,
    ) -> CompiledTemplate:
        """Compile template source.

        Args:
            source: Python source of the template
            name: Template name for error messages
            filename: Source filename for tracebacks and error messages

        Returns:
            CompiledTemplate holding the render function

        Raises:
            TemplateSyntaxError: Source is not valid Python, or the rewritten
                body is not valid as a function body
            TemplateConfigurationError: No single top-level marker statement, or
                the template assigns the tag name itself
        """
        config = self._config
        filename = filename or "<template>"

        module = self._parse(source, name, filename)
        tagged = tag_fstrings(module, config.tag_name)
        marker_lineno = label_to_return(
            module, config.label, config.tag_name, name=name or filename
        )

        stray_yield = find_top_level_yield(module.body)
        if stray_yield is not None:
            raise TemplateSyntaxError(
                "'yield' outside function",
                lineno=stray_yield.lineno,
                name=name,
                filename=filename,
                source=source,
                col_offset=stray_yield.col_offset,
            )

        future_imports, body = split_future_imports(module.body)
        func = self._make_render_function(body)
        try:
            free_names, read_locals = analyze_names(func, filename)
        except SyntaxError as exc:
            raise TemplateSyntaxError.from_syntax_error(
                exc, name=name, filename=filename, source=source
            ) from exc
        if config.tag_name in read_locals:
            raise TemplateConfigurationError(
                f"the template assigns '{config.tag_name}', the name every f-string is "
                "tagged with; rename that variable or configure another tag_name",
                name=name or filename,
            )
        func.body[0:0] = bind_free_names(free_names, config.context_name, read_locals)

        wrapped = ast.Module(body=[*future_imports, func], type_ignores=[])
        ast.fix_missing_locations(wrapped)

        try:
            code = compile(wrapped, filename, "exec")
        except SyntaxError as exc:
            raise TemplateSyntaxError.from_syntax_error(
                exc, name=name, filename=filename, source=source
            ) from exc

        namespace: dict[str, Any] = {
            "__builtins__": builtins,
            "__name__": f"tagtpl.template:{name or filename}",
            AMBIENT_NAME: ChainMap(self._ambient, vars(builtins)),  # type: ignore[arg-type]
        }
        exec(code, namespace)
        function: RenderFunction = namespace[config.func_name]

        logger.debug(
            "Compiled template %s: %d f-string(s) tagged, marker at line %d, free names %s",
            name or filename,
            tagged,
            marker_lineno,
            free_names,
        )
        return CompiledTemplate(
            function=function,
            code=code,
            module=wrapped,
            free_names=free_names,
            marker_lineno=marker_lineno,
        )

    def _parse(self, source: str, name: str | None, filename: str) -> ast.Module:
        try:
            return ast.parse(source, filename, "exec")
        except SyntaxError as exc:
            raise TemplateSyntaxError.from_syntax_error(
                exc, name=name, filename=filename, source=source
            ) from exc

    def _make_render_function(self, body: list[ast.stmt]) -> ast.FunctionDef:
        """Wrap ``body`` into ``def <func_name>(<context_name>): ...``."""
        config = self._config
        # Parse a stub so the FunctionDef carries every field this Python expects
        stub = ast.parse(f"def {config.func_name}({config.context_name}):\n    pass\n")
        func = stub.body[0]
        assert isinstance(func, ast.FunctionDef)
        func.body = body
        return func
