# Pagination: request parameters, paged query execution and pagination metadata
#
# The collection query string:
#   ?fields=Id,Name&orderBy=Name&searchQuery=tolkien&genre=Fantasy&pageNumber=2&pageSize=10
#
# pageSize is clamped to MAX_PAGE_SIZE instead of being rejected.
# The pagination metadata is sent in the X-Pagination header, the links in the body.
#
import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import sqlalchemy
import sqlalchemy.orm.collections
import reshape
from .config import get_config, get_int_config
from .errors import GenericError, ValidationError


@dataclass(frozen=True)
class ResourceParameters:
    """
    Query parameters of a collection request
    """

    page_number: int = 1
    page_size: int = 10
    fields: Optional[str] = None
    order_by: Optional[str] = None
    search_query: Optional[str] = None
    genre: Optional[str] = None

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "page_number", clamp_page_number(self.page_number))
        object.__setattr__(self, "page_size", clamp_page_size(self.page_size))

    @classmethod
    def from_args(cls, args) -> "ResourceParameters":
        """
        :param args: request.args (werkzeug MultiDict) or a plain dict
        :return: ResourceParameters, defaults are taken from the configuration
        """
        try:
            page_number = int(args.get("pageNumber", get_config("DEFAULT_PAGE_NUMBER")))
            page_size = int(args.get("pageSize", get_config("DEFAULT_PAGE_SIZE")))
        except (TypeError, ValueError):
            raise ValidationError("Pagination Value Error")

        return cls(
            page_number=page_number,
            page_size=page_size,
            fields=args.get("fields") or None,
            order_by=args.get("orderBy", get_config("DEFAULT_ORDER_BY")),
            search_query=args.get("searchQuery") or None,
            genre=args.get("genre") or None,
        )

    def to_query_args(self, page_number: Optional[int] = None) -> Dict[str, Any]:
        """
        :param page_number: page number to link to, the current page if omitted
        :return: the query string arguments that reproduce this request
        """
        return {
            "fields": self.fields,
            "orderBy": self.order_by,
            "searchQuery": self.search_query,
            "genre": self.genre,
            "pageNumber": self.page_number if page_number is None else page_number,
            "pageSize": self.page_size,
        }


def clamp_page_size(page_size: int) -> int:
    max_page_size = get_int_config("MAX_PAGE_SIZE")
    if page_size > max_page_size:
        reshape.log.debug(f"pageSize {page_size} capped to {max_page_size}")
        return max_page_size
    if page_size <= 0:
        return 1
    return page_size


def clamp_page_number(page_number: int) -> int:
    if page_number < 1:
        return 1
    return page_number


@dataclass(frozen=True)
class PageMetadata:
    total_count: int
    page_size: int
    current_page: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
        }

    def to_header(self) -> str:
        return json.dumps(self.to_dict())


class PagedList(list):
    """
    A page of query results and the pagination state of the query
    """

    def __init__(self, items: List, total_count: int, page_number: int, page_size: int) -> None:
        super().__init__(items)
        self.metadata = PageMetadata(
            total_count=total_count,
            page_size=page_size,
            current_page=page_number,
            total_pages=math.ceil(total_count / page_size) if page_size else 0,
        )

    @property
    def total_count(self) -> int:
        return self.metadata.total_count

    @property
    def total_pages(self) -> int:
        return self.metadata.total_pages

    @property
    def current_page(self) -> int:
        return self.metadata.current_page

    @property
    def page_size(self) -> int:
        return self.metadata.page_size

    @property
    def has_next(self) -> bool:
        return self.metadata.has_next

    @property
    def has_previous(self) -> bool:
        return self.metadata.has_previous

    @classmethod
    def create(cls, source, page_number: int, page_size: int) -> "PagedList":
        """
        this is where the query is executed

        :param source: sqla query or a list
        :param page_number: 1-based page number
        :param page_size: number of items per page
        :return: PagedList
        """
        offset = (page_number - 1) * page_size
        if isinstance(source, (list, tuple, sqlalchemy.orm.collections.InstrumentedList)):
            count = len(source)
            items = list(source[offset : offset + page_size])
        else:
            try:
                count = source.count()
                items = source.offset(offset).limit(page_size).all()
            except OverflowError:
                raise ValidationError("Pagination Overflow Error")
            except sqlalchemy.exc.SQLAlchemyError as exc:
                raise GenericError(f"{exc}")
        return cls(items, count, page_number, page_size)
