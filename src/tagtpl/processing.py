"""Value processing — turn an interpolated value into template text.

Values are routed by runtime shape:

- **str**: returned as-is
- **Callable**: called with no arguments, result processed again (``None`` → ``""``)
- **Sequence / iterator**: each element processed, joined with ``""``
- **Record** (mapping or dataclass instance): compact JSON
- **Primitive**: ``str(value)``, with ``None`` and ``False`` rendering as ``""``

Lazy values let templates branch without statements:

    >>> process_value(lambda: "<h1>hi</h1>" if True else None)
    '<h1>hi</h1>'
    >>> process_value(f"<li>{i}</li>" for i in range(2))
    '<li>0</li><li>1</li>'

"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

# Strings are sequences too; they are handled before the sequence branch
_TEXT_TYPES = (str, bytes, bytearray)

# Key types json.dumps accepts as-is (plus None)
_JSON_KEY_TYPES = (str, int, float, bool)


def is_sequence(value: Any) -> bool:
    """True for non-string sequences and iterators (generators included)."""
    if isinstance(value, _TEXT_TYPES):
        return False
    return isinstance(value, (Sequence, Iterator))


def is_record(value: Any) -> bool:
    """True for mappings and dataclass instances (not dataclass types)."""
    if isinstance(value, Mapping):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, _JSON_KEY_TYPES):
        return key
    return str(key)


def to_json_data(value: Any) -> Any:
    """Plain JSON data for a record, recursively.

    Any mapping becomes a dict (keys JSON cannot hold are stringified), a
    dataclass instance becomes a dict of its fields, lists and tuples become
    lists. Other leaves are left for ``json.dumps`` (``default=str``).
    """
    if isinstance(value, Mapping):
        return {_json_key(k): to_json_data(v) for k, v in value.items()}
    if is_record(value):
        return {f.name: to_json_data(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json_data(item) for item in value]
    return value


def dump_record(value: Any) -> str:
    """Serialize a record to compact JSON, keeping key order."""
    return json.dumps(
        to_json_data(value), separators=(",", ":"), ensure_ascii=False, default=str
    )


def process_value(value: Any) -> str:
    """Convert an interpolated value to the text inserted into a template."""
    if isinstance(value, str):
        return value
    if callable(value):
        result = value()
        if result is None:
            return ""
        return process_value(result)
    if is_sequence(value):
        return "".join(process_value(item) for item in value)
    if is_record(value):
        return dump_record(value)
    if value is None or value is False:
        return ""
    return str(value)
