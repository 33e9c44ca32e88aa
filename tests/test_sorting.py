import datetime
from types import SimpleNamespace

import pytest

from reshape import PropertyMapping, SortKey, UnknownSortKey, apply_sort, compile_sort, parse_order_by
from reshape.library import db, Author
from reshape.library.mappings import property_mappings
from reshape.library.resources import AuthorResource


def person(first, last, born=None):
    return SimpleNamespace(first=first, last=last, dateOfBirth=born)


@pytest.fixture
def mapping():
    return (
        PropertyMapping("AuthorDto", "Author")
        .register("name", ["first", "last"])
        .register("age", ["dateOfBirth"], revert=True)
        .register("last", ["last"])
    )


def names(people):
    return [f"{p.first} {p.last}" for p in people]


def test_parse_order_by():
    assert parse_order_by(None) == []
    assert parse_order_by(" ") == []
    clauses = parse_order_by(" name , age desc,last")
    assert [(c.key, c.descending) for c in clauses] == [("name", False), ("age", True), ("last", False)]


def test_desc_suffix_is_case_sensitive(mapping):
    with pytest.raises(UnknownSortKey) as exc_info:
        compile_sort("name DESC", mapping)
    assert exc_info.value.key == "name DESC"


def test_composite_mapping_last_path_dominates(mapping):
    assert compile_sort("name", mapping) == [SortKey("last", False), SortKey("first", False)]


def test_reverted_mapping_cancels_descending(mapping):
    assert compile_sort("age desc", mapping) == [SortKey("dateOfBirth", False)]
    assert compile_sort("age", mapping) == [SortKey("dateOfBirth", True)]


def test_compile_is_idempotent(mapping):
    order_by = "name desc, age"
    assert compile_sort(order_by, mapping) == compile_sort(order_by, mapping)


def test_multiple_clauses_nest_within_clause_first(mapping):
    keys = compile_sort("name, age desc", mapping)
    assert keys == [SortKey("last"), SortKey("first"), SortKey("dateOfBirth", False)]


def test_keys_are_case_insensitive(mapping):
    assert compile_sort("NAME", mapping) == compile_sort("name", mapping)


def test_empty_order_by_returns_the_sequence_untouched(mapping):
    people = [person("b", "b"), person("a", "a")]
    assert apply_sort(people, None, mapping) is people
    assert apply_sort(people, "", mapping) is people
    assert apply_sort(people, "   ", mapping) is people


def test_unknown_key_rejects_the_whole_request(mapping):
    people = [person("b", "b"), person("a", "a")]
    with pytest.raises(UnknownSortKey) as exc_info:
        apply_sort(people, "name, bogus", mapping)
    assert exc_info.value.key == "bogus"
    assert exc_info.value.status_code == 400
    assert names(people) == ["b b", "a a"]


def test_sort_objects_by_composite_key(mapping):
    people = [person("Stephen", "King"), person("Neil", "Gaiman"), person("Owen", "King"), person("Anne", "Rice")]
    assert names(apply_sort(people, "name", mapping)) == ["Neil Gaiman", "Owen King", "Stephen King", "Anne Rice"]
    assert names(apply_sort(people, "name desc", mapping)) == ["Anne Rice", "Stephen King", "Owen King", "Neil Gaiman"]


def test_sort_objects_by_reverted_key(mapping):
    people = [
        person("a", "old", datetime.date(1940, 1, 1)),
        person("b", "young", datetime.date(1990, 1, 1)),
        person("c", "middle", datetime.date(1960, 1, 1)),
    ]
    # youngest first: the lowest age
    assert names(apply_sort(people, "age", mapping)) == ["b young", "c middle", "a old"]
    assert names(apply_sort(people, "age desc", mapping)) == ["a old", "c middle", "b young"]


def test_later_clauses_break_ties(mapping):
    people = [
        person("x", "Smith", datetime.date(1970, 1, 1)),
        person("y", "Jones", datetime.date(1980, 1, 1)),
        person("z", "Smith", datetime.date(1990, 1, 1)),
    ]
    assert names(apply_sort(people, "last, age", mapping)) == ["y Jones", "z Smith", "x Smith"]
    assert names(apply_sort(people, "last desc, age desc", mapping)) == ["x Smith", "z Smith", "y Jones"]


def test_none_values_are_sorted_last(mapping):
    people = [person("a", None), person("b", "Brown")]
    assert names(apply_sort(people, "last", mapping)) == ["b Brown", "a None"]
    people = [person("a", None), person("b", "Brown"), person("c", "Adams")]
    assert names(apply_sort(people, "last desc", mapping)) == ["b Brown", "c Adams", "a None"]
    assert names(apply_sort(people, "name desc", mapping)) == ["b Brown", "c Adams", "a None"]


def test_sort_query(app):
    mapping = property_mappings.lookup(AuthorResource, Author)
    with app.app_context():
        query = apply_sort(db.session.query(Author), "Name", mapping)
        result = [f"{a.first_name} {a.last_name}" for a in query.all()]
        assert result == ["Douglas Adams", "Neil Gaiman", "Owen King", "Stephen King", "Tom Lanoye", "George RR Martin"]

        query = apply_sort(db.session.query(Author), "Genre desc, Age", mapping)
        result = [f"{a.first_name} {a.last_name}" for a in query.all()]
        assert result == ["Tom Lanoye", "Douglas Adams", "Owen King", "Stephen King", "Neil Gaiman", "George RR Martin"]


def test_sort_query_is_lazy(app):
    mapping = property_mappings.lookup(AuthorResource, Author)
    with app.app_context():
        query = apply_sort(db.session.query(Author), "Age desc", mapping)
        assert hasattr(query, "all")
        assert "ORDER BY" in str(query)
