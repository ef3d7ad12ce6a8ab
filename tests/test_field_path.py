import pytest
from pydantic import BaseModel

from shared.helper.field_path import resolve_field, to_field_spec
from shared.models.field import FieldExtractor, FieldPath


class Company(BaseModel):
    name: str


class Person(BaseModel):
    id: int
    company: Company


def test_dotted_path_resolves_nested_value() -> None:
    assert resolve_field({"company": {"name": "Acme"}}, "company.name") == "Acme"


def test_missing_path_yields_none_without_raising() -> None:
    item = {"company": {"name": "Acme"}}
    assert resolve_field(item, "company.missing.x") is None
    assert resolve_field(item, "nothing") is None


def test_path_through_primitive_stops() -> None:
    assert resolve_field({"company": {"name": "Acme"}}, "company.name.first") is None
    assert resolve_field({"id": 3}, "id.value") is None


def test_empty_path_and_none_item() -> None:
    assert resolve_field({"a": 1}, "") is None
    assert resolve_field(None, "a") is None


def test_list_index_segments() -> None:
    body = {"data": {"results": [{"name": "first"}, {"name": "second"}]}}
    assert resolve_field(body, "data.results.1.name") == "second"
    assert resolve_field(body, "data.results.5.name") is None
    assert resolve_field(body, "data.results.x") is None


def test_negative_index_segments_do_not_resolve() -> None:
    body = {"results": [{"name": "first"}, {"name": "last"}]}
    assert resolve_field(body, "results.-1") is None
    assert resolve_field(body, "results.-1.name") is None


def test_attribute_access_on_objects() -> None:
    person = Person(id=7, company=Company(name="Initech"))
    assert resolve_field(person, "company.name") == "Initech"
    assert resolve_field(person, "company.city") is None


def test_extractor_result_is_returned_verbatim() -> None:
    item = {"first": "Ada", "last": "Lovelace"}
    assert resolve_field(item, lambda i: f"{i['first']} {i['last']}") == "Ada Lovelace"
    assert resolve_field(item, lambda i: None) is None


def test_to_field_spec_builds_tagged_variants() -> None:
    assert to_field_spec("a.b") == FieldPath(path="a.b")
    fn = lambda item: item
    spec = to_field_spec(fn)
    assert isinstance(spec, FieldExtractor)
    assert spec.fn is fn
    assert to_field_spec(spec) is spec


def test_to_field_spec_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        to_field_spec(42)
