# -------------------------------------
# tabularbuilder CLI entry point
# -------------------------------------
"""
CLI entry point.

Usage:
    python -m tabularbuilder data/users.yml --columns data/columns.yml
    python -m tabularbuilder data/users.yml --columns data/columns.yml --group-by role
"""
import argparse
import logging
import sys

import yaml
from simpleeval import InvalidExpression

from .column import field
from .config import load_column_spec, load_rows
from .frame import make_table, make_tables
from .table import format_table


def main(argv=None) -> int:
    p = argparse.ArgumentParser(
        description="Build a table from a rows file and a declarative column spec.",
    )
    p.add_argument("rows", help="YAML/JSON file with a list of row mappings")
    p.add_argument("--columns", "-c", required=True, metavar="SPEC", help="YAML column spec file")
    p.add_argument("--group-by", "-g", metavar="FIELD", help="Build one table per value of FIELD")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            force=True,
        )

    try:
        spec = load_column_spec(args.columns)
        rows = load_rows(args.rows)
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"tabularbuilder error: {e}", file=sys.stderr)
        return 1

    try:
        if args.group_by:
            tables = make_tables(rows, spec, field(args.group_by))
            blocks = [f"# {args.group_by} = {group}\n{format_table(table)}" for group, table in tables.items()]
            out = "\n\n".join(blocks)
        else:
            out = format_table(make_table(rows, spec))
    except KeyError as e:
        print(f"tabularbuilder error: row has no field {e}", file=sys.stderr)
        return 1
    except (AttributeError, InvalidExpression) as e:
        print(f"tabularbuilder error: {e}", file=sys.stderr)
        return 1

    print(out)
    return 0


if __name__ == "__main__":
    import signal
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    raise SystemExit(main())
