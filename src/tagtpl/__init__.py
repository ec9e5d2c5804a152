"""tagtpl — Python scripts as templates, powered by f-strings.

A template is a plain Python file. Code runs top to bottom as usual, every
f-string is routed through a tag that processes interpolated values by
shape, and the statement marked ``template:`` becomes the rendered result.

Quickstart:
    >>> from tagtpl import Environment
    >>> env = Environment()
    >>> template = env.from_string('template: f"Hello, {name}!"')
    >>> template.render(name="World")
    'Hello, World!'

Template files:
    ```python
    # templates/header.py
    def heading():
        if mood == "curious":
            return f"<h1>{name}</h1>"

    template: f"<header>{heading}<ul>{(f'<li>{i}</li>' for i in range(3))}</ul></header>"
    ```

    >>> env = Environment(loader=FileSystemLoader("templates/"))
    >>> env.render("header.py", name="Romaric", mood="curious")
    '<header><h1>Romaric</h1><ul><li>0</li><li>1</li><li>2</li></ul></header>'

Architecture:
Template Source → ast.parse → tag f-strings → marker to return
→ wrap in render(context) with explicit name binding → compile() → exec()

Value Processing:
- callables are called (lazy branches, ``None`` → empty)
- sequences and generators are joined
- mappings and dataclasses become compact JSON
- ``None`` and ``False`` render as empty strings

Tags:
    >>> from tagtpl import t
    >>> t(("<a>", "</a>"), lambda: t(("<b>", "</b>"), 1))
    '<a><b>1</b></a>'

"""

# Must precede the compiler import: compiler modules import tagtpl.environment.exceptions
from tagtpl.environment import (  # isort: skip
    DictLoader,
    Environment,
    FileSystemLoader,
    Loader,
    TemplateConfigurationError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from tagtpl.compiler import CompiledTemplate, Compiler
from tagtpl.config import CompilerConfig
from tagtpl.processing import process_value
from tagtpl.tag import Tag, basic_tag, process_tag, t
from tagtpl.template import Template

__version__ = "0.1.0"

__all__ = [
    "CompiledTemplate",
    "Compiler",
    "CompilerConfig",
    "DictLoader",
    "Environment",
    "FileSystemLoader",
    "Loader",
    "Tag",
    "Template",
    "TemplateConfigurationError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "__version__",
    "basic_tag",
    "process_tag",
    "process_value",
    "t",
]
