from dataclasses import dataclass

import pytest

from reshape import Field, FieldSpec, GenericError, UnknownField, field_spec, shape, shape_many, validate_fields


@dataclass
class Item:
    Id: int
    Name: str
    Genre: str


class NotADataclass:
    pass


def test_field_spec_keeps_declaration_order():
    spec = field_spec(Item)
    assert spec.names == ["Id", "Name", "Genre"]
    assert "genre" in spec
    assert field_spec(Item) is spec


def test_field_spec_requires_a_dataclass():
    with pytest.raises(GenericError):
        FieldSpec.from_type(NotADataclass)


def test_duplicate_field_names_are_rejected():
    with pytest.raises(GenericError):
        FieldSpec([Field("id", lambda obj: 1), Field("ID", lambda obj: 2)])


def test_validate_fields():
    assert validate_fields(Item, None) == []
    assert validate_fields(Item, "") == []
    assert validate_fields(Item, " name , id") == ["Name", "Id"]


def test_unknown_field_rejects_the_request():
    with pytest.raises(UnknownField) as exc_info:
        validate_fields(Item, "Id,Unknown")
    assert exc_info.value.field == "Unknown"
    assert exc_info.value.status_code == 400
    assert "Unknown field 'Unknown'" in exc_info.value.message


def test_shape_requested_fields():
    shaped = shape(Item(1, "The Shining", "Horror"), "Id,Name")
    assert list(shaped.items()) == [("Id", 1), ("Name", "The Shining")]


def test_shape_keeps_requested_order():
    shaped = shape(Item(1, "The Shining", "Horror"), "genre,ID")
    assert list(shaped.items()) == [("Genre", "Horror"), ("Id", 1)]


def test_shape_all_fields():
    item = Item(1, "The Shining", "Horror")
    assert list(shape(item).items()) == [("Id", 1), ("Name", "The Shining"), ("Genre", "Horror")]
    assert list(shape(item, "").keys()) == ["Id", "Name", "Genre"]


def test_shape_doesnt_coerce_values():
    value = object()
    shaped = shape(Item(value, None, "Horror"), "Id,Name")
    assert shaped["Id"] is value
    assert shaped["Name"] is None


def test_shape_unknown_field():
    with pytest.raises(UnknownField):
        shape(Item(1, "The Shining", "Horror"), "Unknown")


def test_shape_with_an_explicit_spec():
    spec = FieldSpec([Field("title", lambda obj: obj.Name.upper()), Field("id", lambda obj: obj.Id)])
    shaped = shape(Item(1, "It", "Horror"), spec=spec)
    assert list(shaped.items()) == [("title", "IT"), ("id", 1)]


def test_shape_many_returns_fresh_mappings():
    items = [Item(1, "It", "Horror"), Item(2, "Dune", "Science fiction")]
    shaped = shape_many(items, "Name")
    assert shaped == [{"Name": "It"}, {"Name": "Dune"}]
    shaped[0]["links"] = []
    assert "links" not in shape(items[0], "Name")
