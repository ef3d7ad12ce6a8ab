import pytest

from services.autocomplete.SelectionResolver import SelectionResolver, stringify_value
from shared.helper.field_path import to_field_spec

OPTIONS = [
    {"id": 1, "name": "Alice"},
    {"id": 2, "name": "Bob"},
    {"id": 3, "name": "Carla"},
    {"name": "no id"},
]


@pytest.fixture
def resolver() -> SelectionResolver:
    return SelectionResolver(to_field_spec("id"))


@pytest.mark.parametrize(
    "value, expected",
    [(1, "1"), (1.0, "1"), ("1", "1"), (1.5, "1.5"), (True, "true"), (None, None)],
)
def test_stringify_value(value, expected) -> None:
    assert stringify_value(value) == expected


def test_none_resolves_to_none(resolver) -> None:
    assert resolver.resolve(None, OPTIONS) is None


def test_scalar_id_resolves_to_loaded_option(resolver) -> None:
    assert resolver.resolve(2, OPTIONS) == OPTIONS[1]
    assert resolver.resolve("2", OPTIONS) == OPTIONS[1]


def test_scalar_id_not_loaded_resolves_to_none(resolver) -> None:
    assert resolver.resolve(99, OPTIONS) is None
    assert resolver.resolve(1, []) is None


def test_list_of_ids_keeps_options_order(resolver) -> None:
    assert resolver.resolve([3, "1", 42], OPTIONS) == [OPTIONS[0], OPTIONS[2]]


def test_hydrated_items_pass_through(resolver) -> None:
    item = {"id": 99, "name": "not loaded"}
    assert resolver.resolve(item, OPTIONS) is item
    assert resolver.resolve([item, OPTIONS[0]], OPTIONS) == [item, OPTIONS[0]]


def test_equality_against_scalar_and_item(resolver) -> None:
    assert resolver.is_option_equal_to_value(OPTIONS[0], 1)
    assert resolver.is_option_equal_to_value(OPTIONS[0], "1")
    assert resolver.is_option_equal_to_value(OPTIONS[0], {"id": 1, "name": "renamed"})
    assert not resolver.is_option_equal_to_value(OPTIONS[1], 1)


def test_equality_against_lists(resolver) -> None:
    assert resolver.is_option_equal_to_value(OPTIONS[1], [1, 2])
    assert resolver.is_option_equal_to_value(OPTIONS[1], [{"id": 2}])
    assert not resolver.is_option_equal_to_value(OPTIONS[2], [1, 2])


@pytest.mark.parametrize("value", [None, "", []])
def test_empty_values_never_match(resolver, value) -> None:
    assert not resolver.is_option_equal_to_value(OPTIONS[0], value)


def test_option_without_value_never_matches(resolver) -> None:
    assert not resolver.is_option_equal_to_value(OPTIONS[3], "None")


def test_value_field_function() -> None:
    resolver = SelectionResolver(to_field_spec(lambda option: option["name"].lower()))
    assert resolver.resolve("bob", OPTIONS) == OPTIONS[1]
    assert resolver.get_option_value(OPTIONS[2]) == "carla"
