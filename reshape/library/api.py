#  This file contains the flask-restful "Resource" objects of the library API:
#  - Authors / AuthorItem for the author collection and instances
#  - AuthorCollections / AuthorCollection to create and retrieve sets of authors
#  - Books / BookItem for the books of an author, PUT and PATCH (JSON Patch) upsert a book
#
#  Client input (orderBy, fields, payloads) is validated before the storage is queried.
#
# pylint: disable=redefined-builtin,invalid-name
#
from http import HTTPStatus
from flask import request, url_for
from reshape import ConflictError, NotFoundError, Resource, UnknownSortKey, ValidationError
from reshape import ActionLink, CollectionLinks, ResourceLinks, add_links, linked_collection
from reshape import parse_order_by, shape, shape_many, validate_fields
from reshape.config import get_config
from reshape.api import make_response
from .mappers import apply_book_patch, author_from_payload, book_from_payload, load_book_patch, to_author_resource, to_book_resource
from .mappers import update_book, validate_book_payload
from .mappings import property_mappings
from .models import Author, Book
from .resources import AuthorResource, BookResource
from .repository import LibraryRepository

author_links = ResourceLinks(
    "author",
    id_arg="id",
    actions=[
        ActionLink("author", "delete_author", "DELETE", id_arg="id"),
        ActionLink("books", "add_book_for_author", "POST", id_arg="author_id"),
        ActionLink("books", "books", "GET", id_arg="author_id"),
    ],
)
authors_links = CollectionLinks("authors")

book_links = ResourceLinks(
    "book",
    id_arg="book_id",
    actions=[
        ActionLink("book", "update_book", "PUT", id_arg="book_id"),
        ActionLink("book", "partially_update_book", "PATCH", id_arg="book_id"),
        ActionLink("book", "delete_book", "DELETE", id_arg="book_id"),
    ],
)


def linked_author(author: Author, fields=None) -> dict:
    resource = to_author_resource(author)
    return add_links(shape(resource, fields), author_links.create(resource.id, fields))


def linked_book(book: Book, fields=None) -> dict:
    resource = to_book_resource(book)
    return add_links(shape(resource, fields), book_links.create(resource.id, fields, author_id=resource.author_id))


class LibraryResource(Resource):
    """
    Superclass of the library endpoints
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.repository = LibraryRepository()

    def get_author_or_404(self, author_id):
        author = self.repository.get_author(author_id)
        if author is None:
            raise NotFoundError(f"Author {author_id}")
        return author

    def check_author_exists(self, author_id):
        if not self.repository.author_exists(author_id):
            raise NotFoundError(f"Author {author_id}")

    def check_order_by(self, resource_type, entity_type, order_by):
        """
        Reject the request before the storage is queried when orderBy names an unmapped key
        """
        if property_mappings.valid_mapping_exists_for(resource_type, entity_type, order_by):
            return
        mapping = property_mappings.lookup(resource_type, entity_type)
        unknown = [clause.key for clause in parse_order_by(order_by) if clause.key not in mapping]
        raise UnknownSortKey(unknown[0])


class Authors(LibraryResource):
    """
    /authors : paged author collection
    """

    def get(self):
        """
        HTTP GET: return the requested page of shaped authors with their links,
        the pagination metadata is returned in the X-Pagination header
        """
        parameters = request.resource_parameters
        self.check_order_by(AuthorResource, Author, parameters.order_by)
        validate_fields(AuthorResource, parameters.fields)

        authors = self.repository.get_authors(parameters)

        links = authors_links.create(parameters, authors.has_next, authors.has_previous)
        items = [linked_author(author, parameters.fields) for author in authors]
        headers = {get_config("PAGINATION_HEADER"): authors.metadata.to_header()}
        return make_response(linked_collection(items, links), HTTPStatus.OK, headers)

    def post(self):
        """
        HTTP POST: create an author (and its books)
        """
        author = author_from_payload(request.get_json_payload())
        self.repository.add_author(author)
        self.repository.save()

        result = linked_author(author)
        headers = {"Location": url_for("author", id=author.id, _external=True)}
        return make_response(result, HTTPStatus.CREATED, headers)


class AuthorItem(LibraryResource):
    """
    /authors/<id> : a single author
    """

    def get(self, id):
        fields = request.fields
        validate_fields(AuthorResource, fields)
        author = self.get_author_or_404(id)
        return make_response(linked_author(author, fields))

    def post(self, id):
        """
        Authors are created on the collection: posting to an existing author is a conflict
        """
        if self.repository.author_exists(id):
            raise ConflictError(f"Author {id} already exists")
        raise NotFoundError(f"Author {id}")

    def delete(self, id):
        author = self.get_author_or_404(id)
        self.repository.delete_author(author)
        self.repository.save()
        return make_response(None, HTTPStatus.NO_CONTENT)


class AuthorCollections(LibraryResource):
    """
    /authorcollections : create a set of authors at once
    """

    def post(self):
        payload = request.get_json_payload()
        if not isinstance(payload, list):
            raise ValidationError("Provide a list of authors")
        authors = [author_from_payload(item) for item in payload]
        for author in authors:
            self.repository.add_author(author)
        self.repository.save()

        ids = ",".join(author.id for author in authors)
        result = shape_many(to_author_resource(author) for author in authors)
        headers = {"Location": url_for("author_collection", ids=ids, _external=True)}
        return make_response(result, HTTPStatus.CREATED, headers)


class AuthorCollection(LibraryResource):
    """
    /authorcollections/(<ids>) : retrieve a set of authors, the ids are comma separated
    """

    def get(self, ids):
        author_ids = [author_id.strip() for author_id in ids.split(",") if author_id.strip()]
        if not author_ids:
            raise ValidationError("No author ids")
        authors = self.repository.get_authors_by_ids(author_ids)
        if len(authors) != len(author_ids):
            raise NotFoundError(f"Authors {ids}")
        return make_response(shape_many(to_author_resource(author) for author in authors))


class Books(LibraryResource):
    """
    /authors/<author_id>/books : the books of an author
    """

    def get(self, author_id):
        fields = request.fields
        order_by = request.args.get("orderBy")
        validate_fields(BookResource, fields)
        self.check_order_by(BookResource, Book, order_by)
        self.check_author_exists(author_id)

        books = self.repository.get_books_for_author(author_id, order_by)
        return make_response([linked_book(book, fields) for book in books])

    def post(self, author_id):
        book = book_from_payload(request.get_json_payload())
        self.check_author_exists(author_id)
        self.repository.add_book_for_author(author_id, book)
        self.repository.save()

        headers = {"Location": url_for("book", author_id=author_id, book_id=book.id, _external=True)}
        return make_response(linked_book(book), HTTPStatus.CREATED, headers)


class BookItem(LibraryResource):
    """
    /authors/<author_id>/books/<book_id> : a single book
    """

    def get_book_or_404(self, author_id, book_id):
        self.check_author_exists(author_id)
        book = self.repository.get_book_for_author(author_id, book_id)
        if book is None:
            raise NotFoundError(f"Book {book_id}")
        return book

    def get(self, author_id, book_id):
        fields = request.fields
        validate_fields(BookResource, fields)
        book = self.get_book_or_404(author_id, book_id)
        return make_response(linked_book(book, fields))

    def put(self, author_id, book_id):
        """
        HTTP PUT: update the book, or create it with the given id when it doesn't exist (upsert)
        """
        values = validate_book_payload(request.get_json_payload())
        self.check_author_exists(author_id)
        book = self.repository.get_book_for_author(author_id, book_id)
        if book is None:
            return self.add_book(author_id, book_id, values)
        return self.save_book_changes(book, values)

    def patch(self, author_id, book_id):
        """
        HTTP PATCH: apply a JSON Patch document to the book,
        the book is created when it doesn't exist (upsert)
        """
        patch = load_book_patch(request.get_json_payload())
        self.check_author_exists(author_id)
        book = self.repository.get_book_for_author(author_id, book_id)
        values = apply_book_patch(patch, book)
        if book is None:
            return self.add_book(author_id, book_id, values)
        return self.save_book_changes(book, values)

    def add_book(self, author_id, book_id, values):
        if self.repository.book_exists(book_id):
            raise ConflictError(f"Book {book_id} belongs to another author")
        book = Book(id=book_id, **values)
        self.repository.add_book_for_author(author_id, book)
        self.repository.save()
        headers = {"Location": url_for("book", author_id=author_id, book_id=book.id, _external=True)}
        return make_response(linked_book(book), HTTPStatus.CREATED, headers)

    def save_book_changes(self, book, values):
        update_book(book, values)
        self.repository.update_book_for_author(book)
        self.repository.save()
        return make_response(None, HTTPStatus.NO_CONTENT)

    def delete(self, author_id, book_id):
        book = self.get_book_or_404(author_id, book_id)
        self.repository.delete_book(book)
        self.repository.save()
        return make_response(None, HTTPStatus.NO_CONTENT)
