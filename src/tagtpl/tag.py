"""Template tags — reassemble literal fragments and processed values.

A tag receives the breakdown of a template: the literal fragments and the
interpolated values, one fewer value than fragments. It routes each value
through its processor and concatenates everything back together:

    >>> t(("<a>", "</a>"), lambda: t(("<b>", "</b>"), 1))
    '<a><b>1</b></a>'

The compiler rewrites every f-string of a template file into such a call,
so template authors rarely call a tag by hand.

Python 3.14 t-strings (PEP 750) are accepted directly:

    >>> name = "World"
    >>> t(t"Hello {name}!")
    'Hello World!'

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from tagtpl.environment.exceptions import TemplateRuntimeError
from tagtpl.processing import process_value

_CONVERSIONS: dict[str, Callable[[Any], str]] = {"r": repr, "s": str, "a": ascii}


@runtime_checkable
class TemplateProtocol(Protocol):
    strings: tuple[str, ...]
    interpolations: tuple[Any, ...]


def interpolation_value(interpolation: Any) -> Any:
    """Value of a t-string interpolation, with ``!conversion`` and ``:spec`` applied."""
    value = interpolation.value
    conversion = getattr(interpolation, "conversion", None)
    format_spec = getattr(interpolation, "format_spec", "")
    if conversion:
        value = _CONVERSIONS[conversion](value)
    if format_spec:
        value = format(value, format_spec)
    return value


class Tag:
    """A tag bound to a value processor.

    Tags hold no state besides the processor, so one instance can be
    shared by every template and called recursively from within the
    values it is processing.

    Example:
            >>> shout = Tag(lambda v: str(v).upper())
            >>> shout(("Hello ", "!"), "world")
            'Hello WORLD!'

    """

    __slots__ = ("processor",)

    def __init__(self, processor: Callable[[Any], str] = process_value):
        self.processor = processor

    def __repr__(self) -> str:
        name = getattr(self.processor, "__name__", repr(self.processor))
        return f"<Tag processor={name}>"

    def __call__(self, fragments: Sequence[str] | TemplateProtocol, *values: Any) -> str:
        if not values and isinstance(fragments, TemplateProtocol):
            return self.render_template(fragments)

        if len(fragments) != len(values) + 1:
            raise TemplateRuntimeError(
                "tag expects exactly one more fragment than values",
                fragments=len(fragments),
                values=len(values),
                suggestion="Pass fragments as a single sequence: tag(('a', 'b'), value)",
            )

        processor = self.processor
        parts = [fragments[0]]
        for i in range(1, len(fragments)):
            parts.append(processor(values[i - 1]))
            parts.append(fragments[i])
        return "".join(parts)

    def render_template(self, template: TemplateProtocol) -> str:
        """Render a PEP 750 ``Template`` (or any object shaped like one)."""
        values = [interpolation_value(i) for i in template.interpolations]
        return self(tuple(template.strings), *values)


def process_tag(processor: Callable[[Any], str]) -> Tag:
    """Create a tag that routes every value through ``processor``."""
    return Tag(processor)


# Default tag: shape-aware value processing
t = process_tag(process_value)

# Plain reassembly: every value goes through str()
basic_tag = process_tag(str)
