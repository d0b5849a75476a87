import pytest

from injectree.errors import NotFoundError
from injectree.mapping_table import MappingTable


def make_value(value):
    return lambda injector, identifier: value


def test_exists_only_for_registered_identifiers():
    table = MappingTable({"a": make_value(1)})

    assert table.exists("a")
    assert "a" in table
    assert not table.exists("b")
    assert "b" not in table


def test_get_missing_identifier_raises_not_found():
    table = MappingTable()

    with pytest.raises(NotFoundError, match="No mapping for 'missing'") as raised:
        table.get("missing")

    assert raised.value.identifier == "missing"
    assert isinstance(raised.value, KeyError)


def test_set_replaces_existing_entry():
    first, second = make_value(1), make_value(2)
    table = MappingTable({"a": first})

    table.set("a", second)

    assert table.get("a") is second
    assert len(table) == 1


def test_identifiers_are_compared_by_exact_value():
    table = MappingTable({"a b": make_value(1)})

    assert not table.exists("a")
    assert not table.exists("a  b")
    assert not table.exists("A b")


def test_initial_mappings_are_copied():
    initial = {"a": make_value(1)}
    table = MappingTable(initial)

    table.set("b", make_value(2))

    assert "b" not in initial


def test_update_unions_another_table():
    table = MappingTable({"a": make_value(1)})
    other = MappingTable({"b": make_value(2), "a": make_value(3)})

    table.update(other)

    assert table.identifiers() == ["a", "b"]
    assert table.get("a") is other.get("a")


def test_copy_is_independent():
    table = MappingTable({"a": make_value(1)})
    copied = table.copy()

    copied.set("b", make_value(2))

    assert table.identifiers() == ["a"]
    assert copied.identifiers() == ["a", "b"]
