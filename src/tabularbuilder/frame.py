# -------------------------------------
# Table assembly
# -------------------------------------
"""
Assemble tables from row objects and a declarative column list.

    table = make_table(users, [
        TabularColumn.identity("name", field("name")),
        TabularColumn.simple("age", field("age"), str),
        None,                                   # statically skipped column
    ])

`columns` may nest sub-lists (e.g. from columns() or optional()) and may also
be a zero-argument callable returning the list, such as a plain generator
function or one decorated with @column_builder. Either way it is flattened
the same way builder.columns flattens its arguments.

Columns are produced independently and in list order. A column is left out
when the rows are empty or when its inclusion predicate rejects the first
row; rows are never filtered, sorted or deduplicated. Errors raised by
selectors or transforms propagate unchanged and no partial table is returned.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable, Hashable, Iterable, Union

from . import builder
from .erased import AnyColumn, AnyTabularColumn
from .column import TabularColumn
from .table import Orientation, table_from_columns, table_to_arrow, table_to_pandas, table_to_rows

logger = logging.getLogger(__name__)

ColumnItem = Union[TabularColumn, AnyTabularColumn, None, Iterable[Any]]
ColumnList = Union[Iterable[ColumnItem], Callable[[], Iterable[ColumnItem]]]


def _resolve(columns: ColumnList) -> list[AnyTabularColumn]:
    if callable(columns):
        columns = columns()
    return builder.columns(*columns)


def make_columns(rows: Sequence[Any], columns: ColumnList) -> list[AnyColumn]:
    """
    Build every surviving column for rows, in list order.

    Args:
        rows: Row objects
        columns: Column definitions/handles, None or nested lists of them, or a callable returning them

    Returns:
        Built columns; absent entries and skipped columns are dropped
    """
    if not isinstance(rows, Sequence):
        rows = list(rows)
    built: list[AnyColumn] = []
    for handle in _resolve(columns):
        col = handle.make_column(rows)
        if col is None:
            logger.debug("column %r skipped for %d rows", handle.name, len(rows))
            continue
        built.append(col)
    return built


def make_table(
    rows: Sequence[Any],
    columns: ColumnList,
    orientation: Orientation = "column",
) -> dict[str, Any]:
    """
    Convert row objects into a table.

    Args:
        rows: Row objects, all of the same shape
        columns: Column definitions/handles, None or nested lists of them, or a callable returning them
        orientation: "column" (default), "row", or "arrow"

    Returns:
        Table dict; zero columns when rows is empty or every column is skipped

    Raises:
        ValueError: If orientation is not supported
    """
    if orientation not in ("row", "column", "arrow"):
        raise ValueError(f"Unsupported orientation: {orientation}")
    built = make_columns(rows, columns)
    table = table_from_columns(built)
    logger.debug("assembled table with %d columns: %s", len(built), table["columns"])
    if orientation == "row":
        return table_to_rows(table)
    if orientation == "arrow":
        return table_to_arrow(table)
    return table


def make_dataframe(rows: Sequence[Any], columns: ColumnList):
    """Same as make_table, returned as a pandas DataFrame."""
    return table_to_pandas(make_table(rows, columns))


# -------------------------------------
# Grouped assembly
# -------------------------------------

def group_rows(rows: Iterable[Any], key: Callable[[Any], Hashable]) -> dict[Hashable, list[Any]]:
    """
    Partition rows by key, keeping groups and rows in first-seen order.

    Args:
        rows: Row objects
        key: Function row -> group key

    Returns:
        Dict group key -> rows of that group
    """
    groups: dict[Hashable, list[Any]] = {}
    for row in rows:
        groups.setdefault(key(row), []).append(row)
    return groups


def make_tables(
    rows: Iterable[Any],
    columns: ColumnList,
    key: Callable[[Any], Hashable],
    orientation: Orientation = "column",
) -> dict[Hashable, dict[str, Any]]:
    """
    Apply one column list to every group of rows.

    The column list is resolved once and reused, so each group's table has
    the columns whose inclusion predicate accepts that group's first row.

    Returns:
        Dict group key -> table
    """
    resolved = _resolve(columns)
    return {
        group: make_table(members, resolved, orientation)
        for group, members in group_rows(rows, key).items()
    }
