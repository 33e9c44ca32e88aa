from urllib.parse import parse_qs, urlparse

from reshape import ActionLink, CollectionLinks, Link, ResourceLinks, ResourceParameters, add_links, linked_collection
from reshape.library.api import author_links, book_links


def query_of(link):
    return parse_qs(urlparse(link.href).query)


def test_author_links(app):
    with app.test_request_context():
        links = author_links.create("abc")
    assert [(link.rel, link.method) for link in links] == [
        ("self", "GET"),
        ("delete_author", "DELETE"),
        ("add_book_for_author", "POST"),
        ("books", "GET"),
    ]
    assert links[0].href == "http://localhost/api/authors/abc"
    assert links[1].href == "http://localhost/api/authors/abc"
    assert links[2].href == "http://localhost/api/authors/abc/books"
    assert not query_of(links[0])


def test_self_link_keeps_the_requested_fields(app):
    with app.test_request_context():
        links = author_links.create("abc", "Id,Name")
        blank = author_links.create("abc", "  ")
    assert query_of(links[0]) == {"fields": ["Id,Name"]}
    # the action links aren't shaped
    assert not query_of(links[1])
    assert not query_of(blank[0])


def test_book_links_carry_the_author(app):
    with app.test_request_context():
        links = book_links.create("b1", author_id="a1")
    assert [link.rel for link in links] == ["self", "update_book", "partially_update_book", "delete_book"]
    assert [link.method for link in links] == ["GET", "PUT", "PATCH", "DELETE"]
    assert all(link.href == "http://localhost/api/authors/a1/books/b1" for link in links)


def test_custom_action_id_argument(app):
    links = ResourceLinks("books", id_arg="author_id", actions=[ActionLink("author", "owner", "GET", id_arg="id")])
    with app.test_request_context():
        self_link, owner = links.create("a1")
    assert self_link.href == "http://localhost/api/authors/a1/books"
    assert owner.href == "http://localhost/api/authors/a1"


def test_collection_links(app):
    collection_links = CollectionLinks("authors")
    parameters = ResourceParameters(page_number=2, page_size=2, order_by="Name", genre="Horror")
    with app.test_request_context():
        both = collection_links.create(parameters, has_next=True, has_previous=True)
        first = collection_links.create(ResourceParameters(page_number=1, page_size=2), has_next=True, has_previous=False)
        single = collection_links.create(ResourceParameters(), has_next=False, has_previous=False)

    assert [link.rel for link in both] == ["self", "nextPage", "previousPage"]
    assert [link.rel for link in first] == ["self", "nextPage"]
    assert [link.rel for link in single] == ["self"]

    self_link, next_page, previous_page = both
    assert urlparse(self_link.href).path == "/api/authors"
    assert query_of(self_link)["pageNumber"] == ["2"]
    assert query_of(next_page) == {"orderBy": ["Name"], "genre": ["Horror"], "pageNumber": ["3"], "pageSize": ["2"]}
    assert query_of(previous_page)["pageNumber"] == ["1"]


def test_add_links():
    links = [Link("http://localhost/api/authors/abc", "self")]
    shaped = add_links({"id": "abc"}, links)
    assert shaped == {"id": "abc", "links": links}
    assert links[0].to_dict() == {"href": "http://localhost/api/authors/abc", "rel": "self", "method": "GET"}
    assert linked_collection([shaped], links) == {"value": [shaped], "links": links}
