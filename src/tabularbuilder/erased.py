# -------------------------------------
# Type-erased column handles
# -------------------------------------
"""
Type erasure for TabularColumn.

AnyTabularColumn hides the field and output types of a TabularColumn behind
two captured closures, so columns producing str, int, Optional[str], ...
can sit in one ordered list over the same row type:

    columns = [
        AnyTabularColumn(TabularColumn.identity("Name", field("name"))),
        AnyTabularColumn(TabularColumn.identity("Age", field("age"))),
    ]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from .column import Column, TabularColumn

R = TypeVar("R")


@dataclass(frozen=True)
class AnyColumn:
    """A named column with its element type erased.

    Values are the objects produced by the column's transform, unchanged.
    """
    name: str
    values: tuple[Any, ...]

    @classmethod
    def erase(cls, column: Column) -> AnyColumn:
        return cls(column.name, column.values)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def first(self) -> Any:
        return self.values[0] if self.values else None

    @property
    def value_types(self) -> tuple[type, ...]:
        """Distinct Python types of the non-None values, in first-seen order."""
        seen: dict[type, None] = {}
        for v in self.values:
            if v is not None:
                seen.setdefault(type(v), None)
        return tuple(seen)


class AnyTabularColumn(Generic[R]):
    """Type-erased wrapper around exactly one TabularColumn."""

    __slots__ = ("name", "_make", "_when")

    def __init__(self, column: TabularColumn[R, Any, Any]):
        self.name = column.name

        def make(rows: Sequence[R]) -> AnyColumn | None:
            col = column.make_column(rows)
            if col is None:
                return None
            return AnyColumn.erase(col)

        self._make: Callable[[Sequence[R]], AnyColumn | None] = make
        self._when: Callable[[R], bool] = column.condition

    def make_column(self, rows: Sequence[R]) -> AnyColumn | None:
        """Build the erased column, or None when the wrapped column is skipped."""
        return self._make(rows)

    def should_create(self, row: R) -> bool:
        """Evaluate the wrapped column's inclusion predicate against one row."""
        return bool(self._when(row))

    def __repr__(self) -> str:
        return f"AnyTabularColumn({self.name!r})"


def erase(item: TabularColumn | AnyTabularColumn) -> AnyTabularColumn:
    """Wrap a TabularColumn, passing an AnyTabularColumn through unchanged."""
    if isinstance(item, AnyTabularColumn):
        return item
    if isinstance(item, TabularColumn):
        return AnyTabularColumn(item)
    raise TypeError(f"Expected TabularColumn or AnyTabularColumn, got {type(item).__name__}")
