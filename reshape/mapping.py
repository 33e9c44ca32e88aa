"""
Property mappings: translate the public sort keys of a resource type
to the property paths of the storage type it's read from, e.g.

    PropertyMapping(AuthorResource, Author)
        .register("Id", ["id"])
        .register("Age", ["date_of_birth"], revert=True)
        .register("Name", ["first_name", "last_name"])

A mapping registry holds exactly one mapping per (resource type, storage type) pair.
Registries are built at startup and frozen, after which they're only read.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple
import reshape
from .errors import AmbiguousMapping, DuplicateMappingKey, MappingError, MappingNotFound
from .sorting import parse_order_by


@dataclass(frozen=True)
class MappingEntry:
    """
    :param source_key: public (client facing) sort key
    :param destination_paths: storage property paths, in the order they were registered
    :param revert: flip the sort direction, f.i. "age" is sorted by "date_of_birth" in the opposite direction
    """

    source_key: str
    destination_paths: Tuple[str, ...]
    revert: bool = False


class PropertyMapping:
    """
    The mapping entries for a single (source, destination) type pair.
    Keys are matched case-insensitively.
    """

    def __init__(self, source, destination, entries: Optional[Dict[str, Iterable[str]]] = None) -> None:
        self.source = source
        self.destination = destination
        self._entries: Dict[str, MappingEntry] = {}
        self._frozen = False
        for source_key, destination_paths in (entries or {}).items():
            self.register(source_key, destination_paths)

    def register(self, source_key: str, destination_paths: Iterable[str], revert: bool = False) -> "PropertyMapping":
        """
        :param source_key: public sort key
        :param destination_paths: one or more storage property paths
        :param revert: whether the sort direction should be reverted
        :return: self, so registrations can be chained
        """
        if self._frozen:
            raise MappingError(f"{self} is frozen, can't register '{source_key}'")
        if isinstance(destination_paths, str):
            destination_paths = [destination_paths]
        destination_paths = tuple(destination_paths)
        if not destination_paths:
            raise MappingError(f"No destination paths for '{source_key}' in {self}")
        folded = source_key.strip().casefold()
        if folded in self._entries:
            raise DuplicateMappingKey(f"Duplicate key '{source_key}' in {self}")
        self._entries[folded] = MappingEntry(source_key.strip(), destination_paths, revert)
        return self

    def freeze(self) -> "PropertyMapping":
        self._frozen = True
        self._entries = MappingProxyType(self._entries)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, source_key: str) -> Optional[MappingEntry]:
        return self._entries.get(source_key.strip().casefold())

    def __getitem__(self, source_key: str) -> MappingEntry:
        entry = self.get(source_key)
        if entry is None:
            raise KeyError(source_key)
        return entry

    def __contains__(self, source_key: str) -> bool:
        return self.get(source_key) is not None

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def key(self):
        return (self.source, self.destination)

    def __repr__(self) -> str:
        return f"<PropertyMapping {_type_name(self.source)} -> {_type_name(self.destination)}>"


class MappingRegistry:
    """
    Lookup table of property mappings keyed by the (source, destination) type pair
    """

    def __init__(self, *mappings: PropertyMapping) -> None:
        self._mappings = {}
        self._frozen = False
        for mapping in mappings:
            self.add(mapping)

    def add(self, mapping: PropertyMapping) -> PropertyMapping:
        """
        :param mapping: mapping to register, there can be only one per type pair
        :return: the registered mapping
        """
        if self._frozen:
            raise MappingError(f"Registry is frozen, can't add {mapping}")
        if mapping.key in self._mappings:
            raise AmbiguousMapping(f"More than one property mapping for {mapping}")
        if not len(mapping):
            raise MappingError(f"{mapping} has no entries")
        self._mappings[mapping.key] = mapping
        reshape.log.debug(f"Registered {mapping} ({len(mapping)} keys)")
        return mapping

    def freeze(self) -> "MappingRegistry":
        """
        Freeze the registry and all of its mappings: no registrations are accepted afterwards
        """
        for mapping in self._mappings.values():
            if not mapping.frozen:
                mapping.freeze()
        self._mappings = MappingProxyType(self._mappings)
        self._frozen = True
        return self

    def lookup(self, source, destination) -> PropertyMapping:
        """
        :param source: public resource type
        :param destination: storage type
        :return: the property mapping for the pair
        """
        try:
            return self._mappings[(source, destination)]
        except KeyError:
            raise MappingNotFound(f"Cannot find exact property mapping instance for <{_type_name(source)}, {_type_name(destination)}>")

    def valid_mapping_exists_for(self, source, destination, order_by: Optional[str]) -> bool:
        """
        :param order_by: raw orderBy string
        :return: True if every clause of the orderBy string names a mapped key
        """
        if order_by is None or not order_by.strip():
            return True
        mapping = self.lookup(source, destination)
        return all(clause.key in mapping for clause in parse_order_by(order_by))

    def __contains__(self, pair) -> bool:
        return pair in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)


def _type_name(type_):
    return getattr(type_, "__name__", str(type_))
