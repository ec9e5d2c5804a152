"""Template loaders for tagtpl environment.

Loaders provide template source to the Environment. They implement
`get_source(name)` returning `(source, filename)` and `get_version(name)`
returning a hashable token that changes whenever the source changes.
The Environment caches compiled templates under that token.

Built-in Loaders:
- `FileSystemLoader`: Load template scripts from filesystem directories
- `DictLoader`: Load from in-memory dictionary (testing/embedded)

Custom Loaders:
Implement the Loader protocol:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM templates WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return row.source, f"db://{name}"

        def get_version(self, name: str) -> Hashable:
            return db.query("SELECT updated_at FROM templates WHERE name = ?", name)

        def list_templates(self) -> list[str]:
            return [r.name for r in db.query("SELECT name FROM templates")]
    ```

"""

from __future__ import annotations

from collections.abc import Hashable
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from tagtpl.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def get_version(self, name: str) -> Hashable: ...

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Load template scripts from filesystem directories.

    Searches one or more directories for templates by name. The first matching
    file is returned.

    Attributes:
        _paths: List of Path objects to search
        _encoding: File encoding (default: utf-8)

    Search Order:
        Directories are searched in order. First match wins:
            ```python
            loader = FileSystemLoader(["templates/custom/", "templates/default/"])
            # Looks in templates/custom/ first, then templates/default/
            ```

    Versioning:
        ``get_version()`` is the file's ``(st_mtime_ns, st_size)``, so an
        edited file is recompiled on the next ``get_template()``.

    Raises:
        TemplateNotFoundError: If template not found in any search path

    """

    __slots__ = ("_encoding", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    def find(self, name: str) -> Path:
        """Path of the first file named ``name`` in the search paths."""
        for base in self._paths:
            path = base / name
            if path.is_file():
                return path

        raise TemplateNotFoundError(
            f"Template '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def get_source(self, name: str) -> tuple[str, str]:
        path = self.find(name)
        return path.read_text(self._encoding), str(path)

    def get_version(self, name: str) -> tuple[str, int, int]:
        path = self.find(name)
        stat = path.stat()
        return str(path), stat.st_mtime_ns, stat.st_size

    def list_templates(self) -> list[str]:
        """List all ``.py`` templates in search paths."""
        templates = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob("*.py"):
                    templates.add(path.relative_to(base).as_posix())
        return sorted(templates)


class DictLoader:
    """Load templates from an in-memory dictionary.

    Maps template names to source strings. Useful for testing, embedded
    templates, or dynamically generated templates.

    Note:
        Returns `None` as filename since templates are not file-backed.
        The source string itself is the version, so replacing an entry in
        the mapping invalidates the cached template.

    Example:
            >>> loader = DictLoader({"hello.py": 'template: f"Hello {name}"'})
            >>> env = Environment(loader=loader)
            >>> env.render("hello.py", name="World")
            'Hello World'

    Raises:
        TemplateNotFoundError: If template name not in mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def _lookup(self, name: str) -> str:
        if name not in self._mapping:
            available = sorted(self._mapping.keys())
            msg = f"Template '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name]

    def get_source(self, name: str) -> tuple[str, None]:
        return self._lookup(name), None

    def get_version(self, name: str) -> str:
        return self._lookup(name)

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())
