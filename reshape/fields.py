"""
Declared resource fields

The field spec of a resource type is derived once from its dataclass definition,
requests only look up names in the spec, no attributes are discovered at runtime.
"""

import dataclasses
from functools import lru_cache
from operator import attrgetter
from typing import Callable, Iterable, List, Optional, Tuple
from .errors import GenericError, UnknownField


@dataclasses.dataclass(frozen=True)
class Field:
    name: str
    accessor: Callable

    def get(self, obj):
        return self.accessor(obj)


class FieldSpec:
    """
    Ordered, case-insensitive collection of the fields declared by a resource type
    """

    def __init__(self, fields: Iterable[Field], resource_type=None) -> None:
        self.resource_type = resource_type
        self.fields: Tuple[Field, ...] = tuple(fields)
        self._by_name = {}
        for field in self.fields:
            folded = field.name.casefold()
            if folded in self._by_name:
                raise GenericError(f"Duplicate field '{field.name}' in {resource_type}")
            self._by_name[folded] = field

    @classmethod
    def from_type(cls, resource_type) -> "FieldSpec":
        """
        :param resource_type: dataclass of the public resource
        :return: field spec in declaration order
        """
        if not dataclasses.is_dataclass(resource_type):
            raise GenericError(f"{resource_type} is not a dataclass, declare its FieldSpec explicitly")
        fields = [Field(f.name, attrgetter(f.name)) for f in dataclasses.fields(resource_type)]
        return cls(fields, resource_type)

    @property
    def names(self) -> List[str]:
        return [field.name for field in self.fields]

    def get(self, name: str) -> Optional[Field]:
        return self._by_name.get(name.strip().casefold())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"<FieldSpec {getattr(self.resource_type, '__name__', '')} {self.names}>"


@lru_cache(maxsize=None)
def field_spec(resource_type) -> FieldSpec:
    """
    :param resource_type: resource dataclass
    :return: the (cached) field spec of the type
    """
    return FieldSpec.from_type(resource_type)


def split_fields(fields: Optional[str]) -> List[str]:
    """
    :param fields: comma separated field names
    :return: trimmed names, an empty list when no fields were requested
    """
    if fields is None or not fields.strip():
        return []
    return [name.strip() for name in fields.split(",")]


def validate_fields(spec: FieldSpec, fields: Optional[str]) -> List[str]:
    """
    Check that all requested fields are declared by the resource type

    :param spec: FieldSpec (or resource type)
    :param fields: comma separated field names, None or "" means all fields
    :return: the declared names of the requested fields, in request order
    """
    if not isinstance(spec, FieldSpec):
        spec = field_spec(spec)
    result = []
    for name in split_fields(fields):
        field = spec.get(name)
        if field is None:
            raise UnknownField(name)
        result.append(field.name)
    return result
