# -------------------------------------
# tabularbuilder
# -------------------------------------
"""
Declarative conversion of row objects into column-oriented tables.

Each column is a rule (TabularColumn) that selects a field from every row and
transforms it, optionally choosing the transform per row and optionally
skipping the whole column based on the first row. make_table evaluates an
ordered list of such rules against a list of rows.

    from tabularbuilder import TabularColumn, field, make_table

    table = make_table(users, [
        TabularColumn.identity("name", field("name")),
        TabularColumn.simple("age", field("age"), str),
        TabularColumn.identity("role", field("role")).when(lambda u: u.role == "admin"),
    ])

Imports are lazy so `python -m tabularbuilder` does not import submodules twice.
"""

__all__ = [
    # column
    "TabularColumn",
    "SimpleMapping",
    "ConditionalMapping",
    "Column",
    "field",
    "identity",
    # erased
    "AnyTabularColumn",
    "AnyColumn",
    "erase",
    # builder
    "columns",
    "optional",
    "either",
    "each",
    "column_builder",
    # frame
    "make_columns",
    "make_table",
    "make_dataframe",
    "make_tables",
    "group_rows",
    # table
    "table_from_columns",
    "table_to_rows",
    "table_to_arrow",
    "table_to_pandas",
    "format_table",
    # config
    "ColumnSpecError",
    "parse_column_spec",
    "load_column_spec",
    "load_rows",
]

# Lazy import mapping: attribute -> (module, name)
_LAZY_IMPORTS = {
    # column
    "TabularColumn": (".column", "TabularColumn"),
    "SimpleMapping": (".column", "SimpleMapping"),
    "ConditionalMapping": (".column", "ConditionalMapping"),
    "Column": (".column", "Column"),
    "field": (".column", "field"),
    "identity": (".column", "identity"),
    # erased
    "AnyTabularColumn": (".erased", "AnyTabularColumn"),
    "AnyColumn": (".erased", "AnyColumn"),
    "erase": (".erased", "erase"),
    # builder
    "columns": (".builder", "columns"),
    "optional": (".builder", "optional"),
    "either": (".builder", "either"),
    "each": (".builder", "each"),
    "column_builder": (".builder", "column_builder"),
    # frame
    "make_columns": (".frame", "make_columns"),
    "make_table": (".frame", "make_table"),
    "make_dataframe": (".frame", "make_dataframe"),
    "make_tables": (".frame", "make_tables"),
    "group_rows": (".frame", "group_rows"),
    # table
    "table_from_columns": (".table", "table_from_columns"),
    "table_to_rows": (".table", "table_to_rows"),
    "table_to_arrow": (".table", "table_to_arrow"),
    "table_to_pandas": (".table", "table_to_pandas"),
    "format_table": (".table", "format_table"),
    # config
    "ColumnSpecError": (".config", "ColumnSpecError"),
    "parse_column_spec": (".config", "parse_column_spec"),
    "load_column_spec": (".config", "load_column_spec"),
    "load_rows": (".config", "load_rows"),
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_name, __package__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
