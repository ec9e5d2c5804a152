"""tagtpl environment — configuration, loaders, caching and errors."""

from tagtpl.environment.exceptions import (
    TemplateConfigurationError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from tagtpl.environment.loaders import DictLoader, FileSystemLoader, Loader
from tagtpl.environment.core import Environment

__all__ = [
    "DictLoader",
    "Environment",
    "FileSystemLoader",
    "Loader",
    "TemplateConfigurationError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
]
