"""Explicit binding of free names to the render context.

A template body reads names it never defines (``name``, ``mood``, the tag
``t``, builtins such as ``range``). Instead of a dynamic scope, the compiler
finds those names up front with ``symtable`` and emits one binding per name
at the top of the render function:

    ```python
    def render(context):
        if "mood" in context:
            mood = context["mood"]
        elif "mood" in _tagtpl_ambient:
            mood = _tagtpl_ambient["mood"]
        ...
    ```

The context wins over ambient names (environment globals, then builtins).
A name found in neither stays unbound, so reading it raises ``NameError``
only on the code path that actually uses it.

Names the template binds itself are locals of the render function. Those it
also reads (``title = title.upper()``, an input declared as ``name: str``)
are seeded from the context first, so the context value is visible until
the template assigns its own.
"""

from __future__ import annotations

import ast
import symtable

# Global name holding the ambient ChainMap in the compiled module namespace
AMBIENT_NAME = "_tagtpl_ambient"


def _collect_globals(table: symtable.SymbolTable, names: set[str]) -> None:
    for symbol in table.get_symbols():
        if symbol.is_global() and not symbol.is_declared_global():
            names.add(symbol.get_name())
    for child in table.get_children():
        _collect_globals(child, names)


def _function_table(func: ast.FunctionDef, filename: str) -> symtable.SymbolTable:
    source = ast.unparse(ast.Module(body=[func], type_ignores=[]))
    return symtable.symtable(source, filename, "exec").get_children()[0]


def analyze_names(
    func: ast.FunctionDef, filename: str = "<template>"
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Free names and read locals of ``func``, each sorted.

    Free names are read by ``func`` (or scopes nested in it) and bound
    nowhere in it. Names declared ``global`` are left to module-level lookup
    and not reported.

    Read locals are names ``func`` itself both binds and reads, other than
    its parameters: ``title = title.upper()`` or an input declared as
    ``name: str``.

    Raises:
        SyntaxError: If the symbol table cannot be built (``import *`` in the
            template body, misplaced ``nonlocal``, ...).
    """
    table = _function_table(func, filename)
    free: set[str] = set()
    _collect_globals(table, free)
    free.discard(AMBIENT_NAME)
    read_locals = {
        symbol.get_name()
        for symbol in table.get_symbols()
        if symbol.is_local() and symbol.is_referenced() and not symbol.is_parameter()
    }
    return tuple(sorted(free)), tuple(sorted(read_locals))


def find_free_names(func: ast.FunctionDef, filename: str = "<template>") -> tuple[str, ...]:
    """Names read by ``func`` (or scopes nested in it) that nothing in it binds."""
    return analyze_names(func, filename)[0]


def _lookup_assign(name: str, mapping_name: str) -> ast.Assign:
    # name = mapping_name["name"]
    return ast.Assign(
        targets=[ast.Name(id=name, ctx=ast.Store())],
        value=ast.Subscript(
            value=ast.Name(id=mapping_name, ctx=ast.Load()),
            slice=ast.Constant(value=name),
            ctx=ast.Load(),
        ),
    )


def _contains(name: str, mapping_name: str) -> ast.Compare:
    # "name" in mapping_name
    return ast.Compare(
        left=ast.Constant(value=name),
        ops=[ast.In()],
        comparators=[ast.Name(id=mapping_name, ctx=ast.Load())],
    )


def bind_free_names(
    names: tuple[str, ...],
    context_name: str,
    read_locals: tuple[str, ...] = (),
) -> list[ast.stmt]:
    """Generate the binding prologue.

    ``names`` are bound from the context, then from the ambient scope.
    ``read_locals`` are only seeded from the context; the template's own
    assignments overwrite them.
    """
    prologue: list[ast.stmt] = []
    for name in read_locals:
        prologue.append(
            ast.If(
                test=_contains(name, context_name),
                body=[_lookup_assign(name, context_name)],
                orelse=[],
            )
        )
    for name in names:
        prologue.append(
            ast.If(
                test=_contains(name, context_name),
                body=[_lookup_assign(name, context_name)],
                orelse=[
                    ast.If(
                        test=_contains(name, AMBIENT_NAME),
                        body=[_lookup_assign(name, AMBIENT_NAME)],
                        orelse=[],
                    )
                ],
            )
        )
    return prologue
