# Data shaping: reduce a resource to the fields requested by the client
#
# GET /api/authors?fields=Id,Name returns
#   {"id": ..., "name": ..., "links": [...]}
# The "links" member is added by the caller (cfr. links.py), not here.
#
from collections import OrderedDict
from typing import Iterable, List, Optional
from .fields import FieldSpec, field_spec, validate_fields


def shape(resource, fields: Optional[str] = None, spec: Optional[FieldSpec] = None) -> OrderedDict:
    """
    :param resource: resource object (an instance of a resource dataclass)
    :param fields: comma separated field names, all declared fields if empty
    :param spec: field spec of the resource, derived from the resource type if omitted
    :return: ordered mapping of field names to values
    """
    if spec is None:
        spec = field_spec(type(resource))
    names = validate_fields(spec, fields)
    if not names:
        return OrderedDict((field.name, field.get(resource)) for field in spec)
    # requested order, not declaration order
    return OrderedDict((name, spec.get(name).get(resource)) for name in names)


def shape_many(resources: Iterable, fields: Optional[str] = None, spec: Optional[FieldSpec] = None) -> List[OrderedDict]:
    """
    :param resources: resource objects of the same type
    :return: list of shaped resources
    """
    return [shape(resource, fields, spec) for resource in resources]
