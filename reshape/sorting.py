# Sorting: compile a client orderBy string into typed sort keys and apply them
#
# orderBy="Name, Age desc" with the mappings
#   Name -> first_name, last_name
#   Age  -> date_of_birth (reverted)
# compiles to
#   [SortKey("last_name"), SortKey("first_name"), SortKey("date_of_birth")]
#
# Clauses are compiled left to right and the destination paths of a clause in reverse order.
# The first compiled key is the dominant one, the following keys break ties.
#
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Iterable, List, Optional
import reshape
from .errors import GenericError, UnknownSortKey

DESCENDING_SUFFIX = " desc"


@dataclass(frozen=True)
class OrderByClause:
    key: str
    descending: bool = False


@dataclass(frozen=True)
class SortKey:
    path: str
    descending: bool = False

    def column(self, model):
        """
        :param model: sqla model class
        :return: sqla order_by expression for this key
        """
        attr = getattr(model, self.path, None)
        if attr is None or not hasattr(attr, "desc"):
            raise GenericError(f"{model} has no sortable attribute {self.path}")
        return attr.desc() if self.descending else attr.asc()


def parse_order_by(order_by: Optional[str]) -> List[OrderByClause]:
    """
    :param order_by: comma separated clauses, each may end with " desc"
    :return: list of parsed clauses
    """
    if order_by is None or not order_by.strip():
        return []
    clauses = []
    for raw_clause in order_by.split(","):
        clause = raw_clause.strip()
        descending = clause.endswith(DESCENDING_SUFFIX)
        if descending:
            clause = clause[: -len(DESCENDING_SUFFIX)].strip()
        clauses.append(OrderByClause(clause, descending))
    return clauses


def compile_sort(order_by: Optional[str], mapping) -> List[SortKey]:
    """
    :param order_by: raw orderBy string
    :param mapping: PropertyMapping of the resource type
    :return: sort keys, dominant key first
    """
    clauses = parse_order_by(order_by)
    # all keys are checked before anything is compiled: no partial sorts
    for clause in clauses:
        if clause.key not in mapping:
            raise UnknownSortKey(clause.key)

    sort_keys = []
    for clause in clauses:
        entry = mapping[clause.key]
        for path in reversed(entry.destination_paths):
            sort_keys.append(SortKey(path, clause.descending != entry.revert))
    return sort_keys


def apply_sort(sequence: Any, order_by: Optional[str], mapping) -> Any:
    """
    Sort the sequence with the orderBy string

    :param sequence: sqla query (or select) or an iterable of objects
    :param order_by: raw orderBy string
    :param mapping: PropertyMapping of the resource type
    :return: the sorted query, or a sorted list for plain iterables
    """
    if sequence is None:
        raise GenericError("Can't sort an empty sequence")
    if mapping is None:
        raise GenericError("Can't sort without a property mapping")
    if order_by is None or not order_by.strip():
        return sequence

    sort_keys = compile_sort(order_by, mapping)
    reshape.log.debug(f"Sorting {mapping} by {sort_keys}")

    if hasattr(sequence, "order_by"):
        # the query isn't executed here
        return sequence.order_by(*[sort_key.column(mapping.destination) for sort_key in sort_keys])

    return sort_objects(sequence, sort_keys)


def sort_objects(objects: Iterable, sort_keys: List[SortKey]) -> list:
    """
    :param objects: objects to be sorted in memory
    :param sort_keys: sort keys, dominant key first
    :return: sorted list

    Python sorts are stable: sorting by the least significant key first
    leaves the dominant key sorted last.
    None values are sorted last in both directions.
    """
    result = list(objects)
    for sort_key in reversed(sort_keys):
        getter = attrgetter(sort_key.path)
        present = [obj for obj in result if getter(obj) is not None]
        missing = [obj for obj in result if getter(obj) is None]
        present.sort(key=getter, reverse=sort_key.descending)
        result = present + missing
    return result
