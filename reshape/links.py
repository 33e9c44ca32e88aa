"""
HATEOAS links

Every shaped resource gets a "links" member that describes where it can be retrieved
and which actions the client can perform on it, e.g.

    {"href": "http://localhost/api/authors/<id>", "rel": "self", "method": "GET"}

Collections get "self", "nextPage" and "previousPage" links
that carry the current query parameters.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from flask import url_for

SELF = "self"
NEXT_PAGE = "nextPage"
PREVIOUS_PAGE = "previousPage"


@dataclass(frozen=True)
class Link:
    href: str
    rel: str
    method: str = "GET"

    def to_dict(self) -> Dict[str, str]:
        return {"href": self.href, "rel": self.rel, "method": self.method}


def create_link(endpoint: str, rel: str, method: str = "GET", **values) -> Link:
    """
    :param endpoint: flask endpoint name
    :param rel: relation name
    :param method: HTTP method
    :param values: url arguments, None values are left out
    :return: Link with an absolute url
    """
    values = {name: value for name, value in values.items() if value is not None}
    return Link(url_for(endpoint, _external=True, **values), rel, method)


@dataclass(frozen=True)
class ActionLink:
    """
    An action that can be performed on a resource

    :param endpoint: flask endpoint name
    :param rel: relation name
    :param method: HTTP method
    :param id_arg: url argument that receives the resource id
    """

    endpoint: str
    rel: str
    method: str = "GET"
    id_arg: str = "id"


class ResourceLinks:
    """
    The link definitions of a single resource type
    """

    def __init__(self, endpoint: str, id_arg: str = "id", actions: Iterable[ActionLink] = ()) -> None:
        self.endpoint = endpoint
        self.id_arg = id_arg
        self.actions = tuple(actions)

    def create(self, resource_id, fields: Optional[str] = None, **route_values) -> List[Link]:
        """
        :param resource_id: id of the resource
        :param fields: requested fields, added to the self link so it returns the same shape
        :param route_values: other url arguments, f.i. the id of the parent resource
        :return: self link followed by the action links
        """
        self_values = dict(route_values)
        self_values[self.id_arg] = resource_id
        if fields is not None and fields.strip():
            self_values["fields"] = fields
        links = [create_link(self.endpoint, SELF, "GET", **self_values)]
        for action in self.actions:
            values = dict(route_values)
            values[action.id_arg] = resource_id
            links.append(create_link(action.endpoint, action.rel, action.method, **values))
        return links


class CollectionLinks:
    """
    Self and paging links for a collection endpoint
    """

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    def create(self, parameters, has_next: bool, has_previous: bool, **route_values) -> List[Link]:
        """
        :param parameters: ResourceParameters of the current request
        :param has_next: there's a page after the current page
        :param has_previous: there's a page before the current page
        :return: list of links, the paging links are only added when the pages exist
        """
        links = [self.page_link(parameters, SELF, parameters.page_number, **route_values)]
        if has_next:
            links.append(self.page_link(parameters, NEXT_PAGE, parameters.page_number + 1, **route_values))
        if has_previous:
            links.append(self.page_link(parameters, PREVIOUS_PAGE, parameters.page_number - 1, **route_values))
        return links

    def page_link(self, parameters, rel: str, page_number: int, **route_values) -> Link:
        values = dict(route_values)
        values.update(parameters.to_query_args(page_number=page_number))
        return create_link(self.endpoint, rel, "GET", **values)


def add_links(shaped: dict, links: List[Link]) -> dict:
    """
    :param shaped: shaped resource
    :param links: links of the resource
    :return: the shaped resource with an additional "links" member
    """
    shaped["links"] = links
    return shaped


def linked_collection(items: List[dict], links: List[Link]) -> dict:
    """
    :return: collection body: the shaped items and the collection links
    """
    return {"value": items, "links": links}
