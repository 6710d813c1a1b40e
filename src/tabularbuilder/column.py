# -------------------------------------
# Column definitions
# -------------------------------------
"""
Declarative column definitions.

A TabularColumn describes how to derive one output column from a list of
row objects:

    selector    row -> field value (usually built with field("path"))
    mapping     either SimpleMapping(transform) or
                ConditionalMapping(predicate, then, otherwise)
    condition   inclusion predicate, set with .when() or .disable() and
                checked against the FIRST row only

Examples:

    age = TabularColumn.simple("Age", field("age"), lambda a: f"{a} years")

    status = TabularColumn.conditional(
        "Status", field("score"),
        predicate=lambda r: r["score"] > 60,
        then=lambda s: f"Pass: {s}",
        otherwise=lambda s: f"Fail: {s}",
    )

    premium = TabularColumn.identity("Features", field("features")).when(
        lambda r: r["is_premium"]
    )

Because `when` only looks at the first row, the same column list can be
applied to pre-grouped subsets of data and yield a different column set per
group.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field as dc_field, replace
from typing import Any, Callable, Generic, Sequence, TypeVar, Union

R = TypeVar("R")
F = TypeVar("F")
O = TypeVar("O")


def identity(value: Any) -> Any:
    return value


def always(row: Any) -> bool:
    return True


def field(path: str) -> Callable[[Any], Any]:
    """
    Build a selector for a dot-separated field path.

    Each path segment is looked up as a key on mappings and as an attribute
    on any other object, so "owner.name" works for dicts of dicts, plain
    objects, or a mix of both.

    Args:
        path: Dot-separated field path (e.g. "age" or "owner.name")

    Returns:
        Function row -> field value

    Raises:
        ValueError: If path is empty
    """
    keys = [k for k in path.split(".") if k]
    if not keys:
        raise ValueError(f"Invalid field path: {path!r}")

    def select(row: Any) -> Any:
        current = row
        for key in keys:
            if isinstance(current, Mapping):
                current = current[key]
            else:
                current = getattr(current, key)
        return current

    select.__name__ = f"field_{'_'.join(keys)}"
    select.__qualname__ = select.__name__
    return select


# -------------------------------------
# Mappings
# -------------------------------------

@dataclass(frozen=True)
class SimpleMapping(Generic[F, O]):
    transform: Callable[[F], O] = identity

    def apply(self, row: Any, raw: F) -> O:
        return self.transform(raw)


@dataclass(frozen=True)
class ConditionalMapping(Generic[R, F, O]):
    """Context-aware mapping: the branch is chosen per row by `predicate`."""
    predicate: Callable[[R], bool]
    then: Callable[[F], O]
    otherwise: Callable[[F], O]

    def apply(self, row: R, raw: F) -> O:
        if self.predicate(row):
            return self.then(raw)
        return self.otherwise(raw)


ColumnMapping = Union[SimpleMapping, ConditionalMapping]


# -------------------------------------
# Columns
# -------------------------------------

@dataclass(frozen=True)
class Column(Generic[O]):
    """A named column of values, one per row, in row order."""
    name: str
    values: tuple[O, ...]

    def __len__(self) -> int:
        return len(self.values)

    @property
    def first(self) -> O | None:
        return self.values[0] if self.values else None


@dataclass(frozen=True)
class TabularColumn(Generic[R, F, O]):
    """Rule deriving one table column from a list of row objects."""
    name: str
    selector: Callable[[R], F]
    mapping: ColumnMapping = dc_field(default_factory=SimpleMapping)
    condition: Callable[[R], bool] = always

    @classmethod
    def simple(
        cls,
        name: str,
        selector: Callable[[R], F],
        transform: Callable[[F], O],
        when: Callable[[R], bool] = always,
    ) -> TabularColumn[R, F, O]:
        """Column whose values are transform(selector(row))."""
        return cls(name, selector, SimpleMapping(transform), when)

    @classmethod
    def identity(
        cls,
        name: str,
        selector: Callable[[R], F],
        when: Callable[[R], bool] = always,
    ) -> TabularColumn[R, F, F]:
        """Column whose values are selector(row), unchanged."""
        return cls(name, selector, SimpleMapping(identity), when)

    @classmethod
    def conditional(
        cls,
        name: str,
        selector: Callable[[R], F],
        predicate: Callable[[R], bool],
        then: Callable[[F], O],
        otherwise: Callable[[F], O],
        when: Callable[[R], bool] = always,
    ) -> TabularColumn[R, F, O]:
        """
        Column whose transform depends on the whole row.

        For each row the value is then(raw) if predicate(row) else
        otherwise(raw), where raw = selector(row). Unlike a simple transform,
        the predicate sees every field of the row, not only the selected one.
        """
        return cls(name, selector, ConditionalMapping(predicate, then, otherwise), when)

    @property
    def is_conditional(self) -> bool:
        return isinstance(self.mapping, ConditionalMapping)

    def should_create(self, row: R) -> bool:
        return bool(self.condition(row))

    def make_column(self, rows: Sequence[R]) -> Column[O] | None:
        """
        Build the column from a list of rows.

        Args:
            rows: Row objects, all of the same shape

        Returns:
            Column with one value per row, or None if rows is empty or the
            inclusion predicate rejects rows[0]
        """
        if not rows or not self.condition(rows[0]):
            return None
        apply = self.mapping.apply
        select = self.selector
        values = tuple(apply(row, select(row)) for row in rows)
        return Column(self.name, values)

    def when(self, condition: Callable[[R], bool]) -> TabularColumn[R, F, O]:
        """Return a copy created only for groups whose first row passes `condition`."""
        return replace(self, condition=condition)

    def disable(self, condition: Callable[[R], bool]) -> TabularColumn[R, F, O]:
        """Return a copy skipped for groups whose first row passes `condition`."""
        return replace(self, condition=lambda row: not condition(row))
