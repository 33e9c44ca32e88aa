import pytest

from reshape import (
    AmbiguousMapping,
    DuplicateMappingKey,
    MappingError,
    MappingNotFound,
    MappingRegistry,
    PropertyMapping,
)


class AuthorDto:
    pass


class AuthorEntity:
    pass


def author_mapping():
    return (
        PropertyMapping(AuthorDto, AuthorEntity)
        .register("Id", ["id"])
        .register("Age", ["date_of_birth"], revert=True)
        .register("Name", ["first_name", "last_name"])
    )


def test_keys_are_case_insensitive():
    mapping = author_mapping()
    assert "name" in mapping
    assert "NAME" in mapping
    assert mapping["age"].destination_paths == ("date_of_birth",)
    assert mapping["age"].revert is True
    assert mapping["Name"].destination_paths == ("first_name", "last_name")


def test_single_path_may_be_a_string():
    mapping = PropertyMapping(AuthorDto, AuthorEntity).register("Genre", "genre")
    assert mapping["genre"].destination_paths == ("genre",)


def test_duplicate_key_is_rejected():
    mapping = author_mapping()
    with pytest.raises(DuplicateMappingKey):
        mapping.register("name", ["last_name"])


def test_empty_destination_paths_are_rejected():
    with pytest.raises(MappingError):
        PropertyMapping(AuthorDto, AuthorEntity).register("Name", [])


def test_lookup():
    mapping = author_mapping()
    registry = MappingRegistry(mapping).freeze()
    assert registry.lookup(AuthorDto, AuthorEntity) is mapping
    assert (AuthorDto, AuthorEntity) in registry
    assert len(registry) == 1


def test_lookup_of_unregistered_pair():
    registry = MappingRegistry(author_mapping()).freeze()
    with pytest.raises(MappingNotFound) as exc_info:
        registry.lookup(AuthorEntity, AuthorDto)
    assert "AuthorEntity, AuthorDto" in exc_info.value.message


def test_second_mapping_for_a_pair_is_ambiguous():
    registry = MappingRegistry(author_mapping())
    with pytest.raises(AmbiguousMapping):
        registry.add(PropertyMapping(AuthorDto, AuthorEntity).register("Id", ["id"]))


def test_mapping_without_entries_is_rejected():
    with pytest.raises(MappingError):
        MappingRegistry(PropertyMapping(AuthorDto, AuthorEntity))


def test_frozen_registry_is_read_only():
    registry = MappingRegistry(author_mapping()).freeze()
    mapping = registry.lookup(AuthorDto, AuthorEntity)
    assert mapping.frozen
    with pytest.raises(MappingError):
        mapping.register("Genre", ["genre"])
    with pytest.raises(MappingError):
        registry.add(PropertyMapping(AuthorEntity, AuthorDto).register("Id", ["id"]))


def test_valid_mapping_exists_for():
    registry = MappingRegistry(author_mapping()).freeze()
    assert registry.valid_mapping_exists_for(AuthorDto, AuthorEntity, "Name, age desc")
    assert registry.valid_mapping_exists_for(AuthorDto, AuthorEntity, None)
    assert registry.valid_mapping_exists_for(AuthorDto, AuthorEntity, "  ")
    assert not registry.valid_mapping_exists_for(AuthorDto, AuthorEntity, "Name, bogus")
