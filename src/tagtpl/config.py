"""Compiler configuration.

Names the compiler agrees on with template authors: the tag every f-string
is routed through, the marker label for the template body, and the
parameter/function names of the generated render function.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass

from tagtpl.environment.exceptions import TemplateConfigurationError


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Names used when rewriting template source.

    Attributes:
        tag_name: Identifier every f-string is tagged with (resolved at render time)
        label: Marker label of the ``label: <expression>`` template statement
        context_name: Parameter name of the render function (the context mapping)
        func_name: Name given to the generated render function

    Example:
            >>> config = CompilerConfig(tag_name="html", label="page")
            >>> Compiler(config).compile('page: f"<p>{x}</p>"')

    """

    tag_name: str = "t"
    label: str = "template"
    context_name: str = "context"
    func_name: str = "render"

    def __post_init__(self) -> None:
        for field_name in ("tag_name", "label", "context_name", "func_name"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.isidentifier() or keyword.iskeyword(value):
                raise TemplateConfigurationError(
                    f"{field_name} must be a valid Python identifier, got {value!r}"
                )
        names = (self.tag_name, self.label, self.context_name)
        if len(set(names)) != len(names):
            raise TemplateConfigurationError(
                "tag_name, label and context_name must be distinct names"
            )


DEFAULT_CONFIG = CompilerConfig()
