# -------------------------------------
# Column list composition
# -------------------------------------
"""
Compose declarative column lists with ordinary Python.

A column list is an ordered sequence of type-erased handles. Items accepted
anywhere in a composition:

    TabularColumn          wrapped into an AnyTabularColumn
    AnyTabularColumn       used as-is
    None                   statically absent, dropped
    list / tuple / generator of items, flattened in place

Helpers cover the usual branches:

    columns(
        TabularColumn.identity("name", field("name")),
        optional(show_email, TabularColumn.identity("email", field("email"))),
        either(compact, short_cols, long_cols),
        each(["q1", "q2"], lambda q: TabularColumn.identity(q, field(q))),
    )

or, as a generator function:

    @column_builder
    def user_columns(show_email):
        yield TabularColumn.identity("name", field("name"))
        if show_email:
            yield TabularColumn.identity("email", field("email"))
"""
from __future__ import annotations

import functools
import types
from collections.abc import Iterable
from typing import Any, Callable

from .column import TabularColumn
from .erased import AnyTabularColumn, erase


def _flatten(item: Any, out: list[AnyTabularColumn]) -> None:
    if item is None:
        return
    if isinstance(item, (TabularColumn, AnyTabularColumn)):
        out.append(erase(item))
        return
    if isinstance(item, (list, tuple, types.GeneratorType)):
        for sub in item:
            _flatten(sub, out)
        return
    raise TypeError(f"Cannot use {type(item).__name__} as a column")


def columns(*items: Any) -> list[AnyTabularColumn]:
    """
    Flatten items into an ordered list of column handles.

    Args:
        *items: Columns, handles, None, or nested lists/tuples/generators of them

    Returns:
        List of AnyTabularColumn in declaration order, absent entries dropped

    Raises:
        TypeError: If an item is not a column, handle, None, or sequence
    """
    out: list[AnyTabularColumn] = []
    for item in items:
        _flatten(item, out)
    return out


def optional(condition: Any, *items: Any) -> list[AnyTabularColumn]:
    """Items when condition is truthy, nothing otherwise."""
    if not condition:
        return []
    return columns(*items)


def either(condition: Any, first: Any, second: Any) -> list[AnyTabularColumn]:
    """The first item(s) when condition is truthy, else the second."""
    return columns(first if condition else second)


def each(values: Iterable[Any], factory: Callable[[Any], Any]) -> list[AnyTabularColumn]:
    """Apply factory to each value and flatten the results in order."""
    return columns(*(factory(v) for v in values))


def column_builder(fn: Callable[..., Any]) -> Callable[..., list[AnyTabularColumn]]:
    """
    Decorator turning fn into a column-list builder.

    fn may return an item (or list of items) or be a generator that yields
    items. The wrapped function returns the flattened handle list.
    """
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> list[AnyTabularColumn]:
        return columns(fn(*args, **kwargs))
    return wrapper
