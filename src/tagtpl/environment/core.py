"""tagtpl Environment — configuration, ambient names and template cache.

The Environment is the entry point: it holds the compiler configuration, the
ambient names every template can fall back on, an optional loader, and an
LRU cache of compiled templates.

    >>> from tagtpl import Environment
    >>> env = Environment()
    >>> env.from_string('template: f"{name} is {mood}"').render(name="Romaric", mood="curious")
    'Romaric is curious'

Caching:
- ``from_string()`` always compiles
- ``from_file()`` caches by resolved path, keyed on ``(st_mtime_ns, st_size)``
- ``get_template()`` caches by name, keyed on the loader's ``get_version()``

A cached entry whose version no longer matches is recompiled and replaced.
The cache is bounded (``cache_size``, LRU eviction; ``0`` disables it) and
guarded by a lock, so one Environment can serve concurrent renders.

"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable, Mapping
from pathlib import Path
from typing import Any

from tagtpl.compiler import Compiler
from tagtpl.config import CompilerConfig
from tagtpl.environment.exceptions import TemplateNotFoundError
from tagtpl.environment.loaders import Loader
from tagtpl.tag import basic_tag, t
from tagtpl.template import Template

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 400


class Environment:
    """Central configuration and template cache.

    Attributes:
        loader: Optional loader used by ``get_template()``
        config: CompilerConfig (tag name, marker label, context/function names)
        globals: Ambient names templates fall back on when the context lacks them
        cache_size: Maximum number of cached templates (0 disables caching)

    Ambient Names:
        ``globals`` always starts with ``t`` and ``basic_tag``, and with the
        configured tag name bound to ``t``. Entries passed in ``globals`` win.
        Templates look ambient names up at render time, so later
        ``add_global()`` calls are visible to already compiled templates.

    Example:
            >>> env = Environment(loader=FileSystemLoader("templates/"))
            >>> env.add_global("site_name", "My Site")
            >>> env.render("page.py", {"title": "Home"})

    """

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        tag_name: str = "t",
        label: str = "template",
        context_name: str = "context",
        func_name: str = "render",
        globals: Mapping[str, Any] | None = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.loader = loader
        self.config = CompilerConfig(
            tag_name=tag_name,
            label=label,
            context_name=context_name,
            func_name=func_name,
        )
        self.globals: dict[str, Any] = {"t": t, "basic_tag": basic_tag, tag_name: t}
        if globals:
            self.globals.update(globals)
        self.cache_size = cache_size

        self._compiler = Compiler(self.config, self.globals)
        self._cache: OrderedDict[Hashable, tuple[Hashable, Template]] = OrderedDict()
        self._cache_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Ambient names
    # ------------------------------------------------------------------

    def add_global(self, name: str, value: Any) -> None:
        """Make ``value`` available to templates as ``name``."""
        self.globals[name] = value

    def update_globals(self, mapping: Mapping[str, Any]) -> None:
        """Batch version of ``add_global()``."""
        self.globals.update(mapping)

    # ------------------------------------------------------------------
    # Compilation entry points
    # ------------------------------------------------------------------

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Compile template source. Never cached.

        Raises:
            TemplateSyntaxError: Source is not valid Python
            TemplateConfigurationError: No single top-level marker statement
        """
        return self._compile(source, name=name, filename=None)

    def from_file(self, path: str | Path, encoding: str = "utf-8") -> Template:
        """Compile a template file, reusing the cached template while the file is unchanged."""
        resolved = Path(path).resolve()
        stat = resolved.stat()
        version = (stat.st_mtime_ns, stat.st_size)

        def load() -> Template:
            source = resolved.read_text(encoding)
            return self._compile(source, name=resolved.name, filename=str(resolved))

        return self._cached(("file", str(resolved)), version, load)

    def get_template(self, name: str) -> Template:
        """Load a template through the loader (cached by loader version).

        Raises:
            TemplateNotFoundError: No loader configured, or the loader cannot find it
        """
        loader = self.loader
        if loader is None:
            raise TemplateNotFoundError(
                f"Template '{name}' not found: no loader configured on this Environment"
            )
        version = loader.get_version(name)

        def load() -> Template:
            source, filename = loader.get_source(name)
            return self._compile(source, name=name, filename=filename)

        return self._cached(("loader", name), version, load)

    def render(self, name: str, context: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        """Shortcut for ``get_template(name).render(context, **kwargs)``."""
        return self.get_template(name).render(context, **kwargs)

    def _compile(self, source: str, name: str | None, filename: str | None) -> Template:
        compiled = self._compiler.compile(source, name=name, filename=filename)
        return Template(compiled, name=name, filename=filename, source=source)

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _cached(
        self,
        key: Hashable,
        version: Hashable,
        load: Callable[[], Template],
    ) -> Template:
        if self.cache_size <= 0:
            return load()

        with self._cache_lock:
            entry = self._cache.get(key)
            if entry is not None and entry[0] == version:
                self._cache.move_to_end(key)
                self._hits += 1
                logger.debug("Template cache hit: %s", key)
                return entry[1]
            self._misses += 1
            if entry is not None:
                logger.debug("Template changed, recompiling: %s", key)

        # Compile outside the lock; a concurrent miss on the same key just
        # compiles twice and the last writer wins.
        template = load()

        with self._cache_lock:
            self._cache[key] = (version, template)
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug("Template cache evicted: %s", evicted)
        return template

    def clear_template_cache(self, names: list[str] | None = None) -> None:
        """Drop cached templates (all of them, or only those loaded under ``names``).

        ``names`` may hold loader names or file paths given to ``from_file()``.
        """
        with self._cache_lock:
            if names is None:
                self._cache.clear()
                return
            for name in names:
                self._cache.pop(("loader", name), None)
                self._cache.pop(("file", str(Path(name).resolve())), None)

    def cache_info(self) -> dict[str, int]:
        """Cache statistics: size, max_size, hits, misses."""
        with self._cache_lock:
            return {
                "size": len(self._cache),
                "max_size": self.cache_size,
                "hits": self._hits,
                "misses": self._misses,
            }
