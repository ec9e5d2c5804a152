"""Exceptions for the tagtpl template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateSyntaxError           # Template source is not valid Python
├── TemplateConfigurationError    # Template marker missing/duplicated, bad config
├── TemplateRuntimeError          # Tag invoked with mismatched fragments/values
└── TemplateNotFoundError         # Template not found by loader

Errors raised by template code itself (or by callables it interpolates)
are never wrapped: they reach the caller of ``render()`` unchanged.

Example:
    ```
    TemplateSyntaxError: Syntax Error: invalid syntax
      --> page.py:3:9
       |
      3 | name = = 1
       |         ^
    ```

"""

from __future__ import annotations

from collections.abc import Sequence


class TemplateError(Exception):
    """Base exception for all tagtpl errors.

    All template-related exceptions inherit from this class, enabling
    broad exception handling:

        >>> try:
        ...     env.from_file("page.py").render(user=user)
        ... except TemplateError as e:
        ...     log.error(f"Template error: {e}")

    """


class TemplateNotFoundError(TemplateError):
    """Template not found by any configured loader.

    Example:
            >>> env.get_template("nonexistent.py")
        TemplateNotFoundError: Template 'nonexistent.py' not found in: templates/

    """


class TemplateSyntaxError(TemplateError):
    """Template source failed to parse or compile as Python.

    ``message`` is the interpreter's own message, untouched; the original
    ``SyntaxError`` is chained as ``__cause__``.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line.  If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.filename = filename
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    @classmethod
    def from_syntax_error(
        cls,
        exc: SyntaxError,
        *,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
    ) -> TemplateSyntaxError:
        """Build from a ``SyntaxError`` raised by ``ast.parse``/``compile``/``symtable``."""
        # SyntaxError.offset is 1-based, col_offset follows the ast convention
        col_offset = exc.offset - 1 if exc.offset else None
        return cls(
            exc.msg,
            lineno=exc.lineno,
            name=name,
            filename=filename,
            source=source,
            col_offset=col_offset,
        )

    def _format_message(self) -> str:
        location = self.filename or self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"

        header = f"Syntax Error: {self.message}\n  --> {location}"

        # Show source snippet when available
        if self.source and self.lineno:
            lines = self.source.splitlines()
            if 0 < self.lineno <= len(lines):
                error_line = lines[self.lineno - 1]
                snippet = f"\n   |\n{self.lineno:>3} | {error_line}"
                if self.col_offset is not None:
                    snippet += f"\n   | {' ' * self.col_offset}^"
                return header + snippet

        return header


class TemplateConfigurationError(TemplateError):
    """The template source or the compiler configuration is unusable.

    Raised when a template file does not contain exactly one top-level
    ``<label>: <expression>`` marker, or when a ``CompilerConfig`` field is
    not a usable identifier.

    Attributes:
        message: Error description
        label: Marker label that was searched for (when relevant)
        count: Number of markers found (when relevant)
        linenos: Line numbers of the markers found
        name: Template name

    Output Format:
            ```
            Configuration Error: expected exactly one 'template:' statement, found 0
              Location: page.py
            ```
    """

    def __init__(
        self,
        message: str,
        *,
        label: str | None = None,
        count: int | None = None,
        linenos: Sequence[int] = (),
        name: str | None = None,
    ):
        self.message = message
        self.label = label
        self.count = count
        self.linenos = tuple(linenos)
        self.name = name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Configuration Error: {self.message}"]
        if self.name:
            parts.append(f"  Location: {self.name}")
        if self.linenos:
            lines = ", ".join(str(n) for n in self.linenos)
            parts.append(f"  Markers at line(s): {lines}")
        return "\n".join(parts)


class TemplateRuntimeError(TemplateError):
    """Render-time misuse of the template machinery.

    Only raised for violations tagtpl itself detects, such as a tag called
    with fragments and values of mismatched length. Exceptions raised by
    template code are left alone.

    Attributes:
        message: Error description
        fragments: Number of literal fragments received (when relevant)
        values: Number of interpolated values received (when relevant)
        suggestion: Actionable fix suggestion

    """

    def __init__(
        self,
        message: str,
        *,
        fragments: int | None = None,
        values: int | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.fragments = fragments
        self.values = values
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.fragments is not None and self.values is not None:
            parts.append(f"  Fragments: {self.fragments}, values: {self.values}")
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)
