# -------------------------------------
# Table dicts produced by the assembler
# -------------------------------------
"""
Dict tables returned by make_table, and their typed and text forms.

    {"orientation": "column", "columns": ["name", "age"], "rows": [["John", "Jane"], [20, 21]]}

"rows" holds one value list per column name; position i of every list comes
from the same source object. The same dict in "row" orientation holds one
list per source object instead, and in "arrow" orientation one pa.Array per
column. pyarrow and pandas are imported only when a typed form is asked for.
"""
from __future__ import annotations

from typing import Any, Iterable, Literal, TYPE_CHECKING

pa = None
pd = None


def _import_pyarrow():
    """Import pyarrow lazily, raising a clear error if not installed."""
    global pa
    if pa is None:
        try:
            import pyarrow as _pa
        except ImportError:
            raise ImportError(
                "PyArrow is required for arrow-oriented tables. "
                "Install with: pip install pyarrow"
            )
        pa = _pa
    return pa


def _import_pandas():
    """Import pandas lazily, raising a clear error if not installed."""
    global pd
    if pd is None:
        try:
            import pandas as _pd
        except ImportError:
            raise ImportError(
                "pandas is required for DataFrame conversion. "
                "Install with: pip install pandas"
            )
        pd = _pd
    return pd


if TYPE_CHECKING:
    import pandas as pd

    from .erased import AnyColumn


Orientation = Literal["row", "column", "arrow"]


def table_from_columns(columns: Iterable[AnyColumn]) -> dict[str, Any]:
    """
    Build a column-oriented table from built columns.

    Args:
        columns: Columns in output order (anything with .name and .values)

    Returns:
        Column-oriented table; no names and no data when columns is empty
    """
    names = []
    data = []
    for col in columns:
        names.append(col.name)
        data.append(list(col.values))
    return {"orientation": "column", "columns": names, "rows": data}


def _value_lists(table: dict[str, Any]) -> list[list[Any]]:
    """One Python list per column, whatever the table's orientation."""
    orientation = table.get("orientation", "column")
    if orientation == "column":
        return table["rows"]
    if orientation == "arrow":
        return [arr.to_pylist() for arr in table["rows"]]
    if orientation == "row":
        return [[row[i] for row in table["rows"]] for i in range(len(table["columns"]))]
    raise ValueError(f"Unsupported orientation: {orientation}")


def table_to_rows(table: dict[str, Any]) -> dict[str, Any]:
    """Row-oriented copy of a table: one value list per source object."""
    if table.get("orientation") == "row":
        return table
    values = _value_lists(table)
    n_rows = len(values[0]) if values else 0
    return {
        "orientation": "row",
        "columns": list(table["columns"]),
        "rows": [[col[i] for col in values] for i in range(n_rows)],
    }


def table_to_arrow(table: dict[str, Any]) -> dict[str, Any]:
    """
    Arrow-oriented copy of a table.

    pyarrow infers each column's type from its values, None becoming null.

    Raises:
        pyarrow.ArrowInvalid / ArrowTypeError: If a column mixes incompatible types
    """
    if table.get("orientation") == "arrow":
        return table
    _pa = _import_pyarrow()
    return {
        "orientation": "arrow",
        "columns": list(table["columns"]),
        "rows": [_pa.array(values) for values in _value_lists(table)],
    }


def table_to_pandas(table: dict[str, Any]) -> pd.DataFrame:
    """
    DataFrame with the table's columns in order.

    Arrow tables keep their arrow types through pa.Table.to_pandas.
    Duplicate column names are kept.
    """
    _pd = _import_pandas()
    if table.get("orientation") == "arrow":
        _pa = _import_pyarrow()
        return _pa.Table.from_arrays(list(table["rows"]), names=list(table["columns"])).to_pandas()
    df = _pd.DataFrame(dict(enumerate(_value_lists(table))))
    df.columns = list(table["columns"])
    return df


# -------------------------------------
# Text output
# -------------------------------------

def _cell(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, float):
        return "0" if v == 0 else f"{v:.6g}"
    return str(v)


def format_table(table: dict[str, Any]) -> str:
    """Tab-separated text: a header line, then one line per source object."""
    lines = ["\t".join(str(name) for name in table["columns"])]
    for row in table_to_rows(table)["rows"]:
        lines.append("\t".join(_cell(v) for v in row))
    return "\n".join(lines)
