# -------------------------------------
# Column spec files
# -------------------------------------
"""
Load declarative column lists and rows from YAML files.

A column spec file looks like:

    columns:
      - name: name
      - name: age
        transform: str(value)
      - name: role
        if: age > 20
        then: value
        else: None
      - name: admin_note
        field: meta.note
        when: role == 'admin'
      - name: debug
        include: false

Entry keys:
    name        column label (required)
    field       dot-separated field path, defaults to name
    transform   expression over `value` (the selected field)
    if/then/else
                row expression choosing between two value expressions;
                mutually exclusive with transform
    when        row expression, column kept only if true for the first row
    unless      row expression, column dropped if true for the first row
    include     false drops the entry from the list before assembly

Expressions are evaluated with simpleeval. Row expressions see the row's
fields as names; value expressions see `value`.
"""
from __future__ import annotations

import ast
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Callable

import yaml
from simpleeval import SimpleEval

from .column import TabularColumn, field
from .erased import AnyTabularColumn


class ColumnSpecError(ValueError):
    pass


# Functions available in spec expressions
FUNCS: dict[str, Callable[..., Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "len": len,
    "round": round,
    "upper": lambda s: str(s).upper(),
    "lower": lambda s: str(s).lower(),
}

ENTRY_KEYS = {"name", "field", "transform", "if", "then", "else", "when", "unless", "include"}


def _row_names(row: Any) -> Mapping[str, Any]:
    """Field names visible to row expressions."""
    if isinstance(row, Mapping):
        return row
    if hasattr(row, "_asdict"):
        return row._asdict()
    if is_dataclass(row):
        return {f.name: getattr(row, f.name) for f in fields(row)}
    if hasattr(row, "__dict__"):
        return vars(row)
    raise TypeError(f"Cannot read fields of a {type(row).__name__} row")


def _check_expr(expr: Any, where: str) -> str:
    if not isinstance(expr, (str, int, float, bool)) and expr is not None:
        raise ColumnSpecError(f"{where}: expression must be a scalar, got {type(expr).__name__}")
    text = "None" if expr is None else str(expr)
    try:
        ast.parse(text.strip(), mode="eval")
    except SyntaxError as e:
        raise ColumnSpecError(f"{where}: invalid expression {text!r}: {e.msg}")
    return text


def row_expr(expr: str) -> Callable[[Any], Any]:
    """Compile an expression evaluated against a row's fields."""
    se = SimpleEval(functions=FUNCS)

    def evaluate(row: Any) -> Any:
        se.names = _row_names(row)
        return se.eval(expr)

    return evaluate


def value_expr(expr: str) -> Callable[[Any], Any]:
    """Compile an expression evaluated against one selected value."""
    se = SimpleEval(functions=FUNCS)

    def evaluate(value: Any) -> Any:
        se.names = {"value": value}
        return se.eval(expr)

    return evaluate


def parse_column_entry(entry: Any, index: int = 0) -> AnyTabularColumn | None:
    """
    Build one column handle from a spec entry.

    Args:
        entry: Mapping as described in the module docstring
        index: Position in the spec, used in error messages

    Returns:
        AnyTabularColumn, or None when the entry has include: false

    Raises:
        ColumnSpecError: If the entry is malformed
    """
    where = f"columns[{index}]"
    if not isinstance(entry, Mapping):
        raise ColumnSpecError(f"{where}: expected a mapping, got {type(entry).__name__}")
    unknown = set(entry) - ENTRY_KEYS
    if unknown:
        raise ColumnSpecError(f"{where}: unknown keys {sorted(unknown)}")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ColumnSpecError(f"{where}: 'name' is required")
    where = f"{where} ({name})"

    include = entry.get("include", True)
    if not isinstance(include, bool):
        raise ColumnSpecError(f"{where}: 'include' must be true or false, got {include!r}")
    if not include:
        return None

    try:
        selector = field(str(entry.get("field", name)))
    except ValueError as e:
        raise ColumnSpecError(f"{where}: {e}")

    branch_keys = [k for k in ("if", "then", "else") if k in entry]
    if branch_keys and "transform" in entry:
        raise ColumnSpecError(f"{where}: 'transform' cannot be combined with if/then/else")
    if branch_keys and len(branch_keys) != 3:
        raise ColumnSpecError(f"{where}: 'if', 'then' and 'else' must be given together")
    if "when" in entry and "unless" in entry:
        raise ColumnSpecError(f"{where}: 'when' cannot be combined with 'unless'")

    if branch_keys:
        column = TabularColumn.conditional(
            name,
            selector,
            predicate=row_expr(_check_expr(entry["if"], where)),
            then=value_expr(_check_expr(entry["then"], where)),
            otherwise=value_expr(_check_expr(entry["else"], where)),
        )
    elif "transform" in entry:
        column = TabularColumn.simple(name, selector, value_expr(_check_expr(entry["transform"], where)))
    else:
        column = TabularColumn.identity(name, selector)

    if "when" in entry:
        column = column.when(row_expr(_check_expr(entry["when"], where)))
    elif "unless" in entry:
        column = column.disable(row_expr(_check_expr(entry["unless"], where)))

    return AnyTabularColumn(column)


def parse_column_spec(data: Any) -> list[AnyTabularColumn | None]:
    """
    Build a declarative column list from parsed YAML.

    Args:
        data: Either a list of entries or a mapping with a 'columns' list

    Returns:
        Column handles in spec order; excluded entries are None

    Raises:
        ColumnSpecError: If the spec is malformed
    """
    if isinstance(data, Mapping):
        if "columns" not in data:
            raise ColumnSpecError("Column spec missing required key: 'columns'")
        data = data["columns"]
    if not isinstance(data, list):
        raise ColumnSpecError(f"'columns' must be a list, got {type(data).__name__}")
    return [parse_column_entry(entry, i) for i, entry in enumerate(data)]


def load_column_spec(path: str | Path) -> list[AnyTabularColumn | None]:
    """
    Load a column spec YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ColumnSpecError: If the spec is malformed
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return parse_column_spec(data)


def load_rows(path: str | Path) -> list[dict[str, Any]]:
    """
    Load row objects from a YAML (or JSON) file.

    The file holds either a list of mappings or a mapping with a 'rows' list.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the file does not hold a list of mappings
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if isinstance(data, Mapping):
        data = data.get("rows")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Rows in '{path}' must be a list, got {type(data).__name__}")
    for i, row in enumerate(data):
        if not isinstance(row, Mapping):
            raise ValueError(f"Row {i} in '{path}' is not a mapping: {row!r}")
    return data
