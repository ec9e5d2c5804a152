"""tagtpl Template package — compiled template objects ready for rendering."""

from tagtpl.template.core import Template

__all__ = ["Template"]
