"""Tests for tabularbuilder.erased."""
from decimal import Decimal

import pytest

from tabularbuilder.column import TabularColumn, field
from tabularbuilder.erased import AnyColumn, AnyTabularColumn, erase
from conftest import Role


class TestAnyTabularColumn:
    """Tests for the type-erased column handle."""

    def test_round_trip_matches_definition(self, users):
        definitions = [
            TabularColumn.identity("name", field("name")),
            TabularColumn.simple("age", field("age"), str),
            TabularColumn.conditional(
                "role", field("role"), lambda u: u.age > 20, lambda r: r.value, lambda r: None
            ),
        ]
        for d in definitions:
            direct = d.make_column(users)
            erased = AnyTabularColumn(d).make_column(users)
            assert erased.name == direct.name
            assert erased.values == direct.values

    def test_values_not_coerced(self, users):
        col = AnyTabularColumn(
            TabularColumn.simple("price", field("age"), lambda a: Decimal(a) / 4)
        ).make_column(users)
        assert col.values == (Decimal("5"), Decimal("5.25"), Decimal("5.5"))
        assert col.value_types == (Decimal,)

    def test_enum_values_kept(self, users):
        col = AnyTabularColumn(TabularColumn.identity("role", field("role"))).make_column(users)
        assert col.first is Role.ADMIN
        assert col.value_types == (Role,)

    def test_value_types_skip_none(self):
        col = AnyColumn("x", (None, 1, "a", 2))
        assert col.value_types == (int, str)
        assert len(col) == 4

    def test_empty_rows(self):
        handle = AnyTabularColumn(TabularColumn.identity("name", field("name")))
        assert handle.make_column([]) is None

    def test_should_create_delegates(self, users):
        handle = AnyTabularColumn(
            TabularColumn.identity("role", field("role")).when(lambda u: u.role is Role.ADMIN)
        )
        assert [handle.should_create(u) for u in users] == [True, False, True]

    def test_skipped_column(self, users):
        handle = AnyTabularColumn(
            TabularColumn.identity("role", field("role")).disable(lambda u: True)
        )
        assert handle.make_column(users) is None

    def test_heterogeneous_list(self, users):
        handles = [
            AnyTabularColumn(TabularColumn.identity("name", field("name"))),
            AnyTabularColumn(TabularColumn.identity("age", field("age"))),
            AnyTabularColumn(TabularColumn.simple("adult", field("age"), lambda a: a >= 21)),
        ]
        built = [h.make_column(users) for h in handles]
        assert [c.value_types for c in built] == [(str,), (int,), (bool,)]

    def test_repr(self):
        handle = AnyTabularColumn(TabularColumn.identity("name", field("name")))
        assert repr(handle) == "AnyTabularColumn('name')"


class TestErase:
    """Tests for erase()."""

    def test_wraps_definition(self):
        handle = erase(TabularColumn.identity("name", field("name")))
        assert isinstance(handle, AnyTabularColumn)
        assert handle.name == "name"

    def test_passes_handle_through(self):
        handle = AnyTabularColumn(TabularColumn.identity("name", field("name")))
        assert erase(handle) is handle

    def test_rejects_other(self):
        with pytest.raises(TypeError, match="TabularColumn"):
            erase("name")
