# flake8: noqa: F401
#
# reshape: sort key mapping, data shaping and HATEOAS links for Flask-SQLAlchemy APIs
#
from .reshape_init import DB, log, Reshape
from . import errors
from .errors import (
    ReshapeError,
    ValidationError,
    GenericError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    UnknownSortKey,
    UnknownField,
    MappingError,
    MappingNotFound,
    AmbiguousMapping,
    DuplicateMappingKey,
)
from .mapping import MappingEntry, PropertyMapping, MappingRegistry
from .sorting import OrderByClause, SortKey, parse_order_by, compile_sort, apply_sort
from .fields import Field, FieldSpec, field_spec, validate_fields
from .shaping import shape, shape_many
from .links import Link, ActionLink, ResourceLinks, CollectionLinks, add_links, linked_collection
from .pagination import ResourceParameters, PageMetadata, PagedList
from .api import ReshapeApi, Resource, http_method_decorator
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "Reshape",
    "ReshapeApi",
    "Resource",
    "http_method_decorator",
    # mapping:
    "MappingEntry",
    "PropertyMapping",
    "MappingRegistry",
    # sorting:
    "OrderByClause",
    "SortKey",
    "parse_order_by",
    "compile_sort",
    "apply_sort",
    # shaping:
    "Field",
    "FieldSpec",
    "field_spec",
    "validate_fields",
    "shape",
    "shape_many",
    # links:
    "Link",
    "ActionLink",
    "ResourceLinks",
    "CollectionLinks",
    "add_links",
    "linked_collection",
    "ResourceParameters",
    "PageMetadata",
    "PagedList",
    # Errors:
    "ReshapeError",
    "ValidationError",
    "GenericError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "UnknownSortKey",
    "UnknownField",
    "MappingError",
    "MappingNotFound",
    "AmbiguousMapping",
    "DuplicateMappingKey",
)
