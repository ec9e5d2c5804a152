"""tagtpl compiler — template source to render function.

Public API:
    Compiler: Rewrites and compiles template source
    CompiledTemplate: Render function plus compilation metadata

"""

from tagtpl.compiler.core import CompiledTemplate, Compiler

__all__ = ["CompiledTemplate", "Compiler"]
