# Storage boundary of the library: queries and unit-of-work operations on the db session
from typing import Iterable, List, Optional
from sqlalchemy import func, or_
import reshape
from reshape import PagedList, ResourceParameters, apply_sort
from .mappings import property_mappings
from .models import db, new_id, Author, Book
from .resources import AuthorResource, BookResource


class LibraryRepository:
    """
    The queries are sorted with the property mappings of the resources,
    they're only executed when a page or an instance is retrieved
    """

    def __init__(self, session=None, mappings=property_mappings) -> None:
        self.session = session if session is not None else db.session
        self.mappings = mappings

    # Authors

    def get_authors(self, parameters: ResourceParameters) -> PagedList:
        """
        :param parameters: filtering, sorting and paging parameters
        :return: the requested page of authors
        """
        query = self.session.query(Author)

        if parameters.genre:
            genre = parameters.genre.strip().lower()
            query = query.filter(func.lower(Author.genre) == genre)

        if parameters.search_query:
            search = f"%{parameters.search_query.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(Author.genre).like(search),
                    func.lower(Author.first_name).like(search),
                    func.lower(Author.last_name).like(search),
                )
            )

        query = apply_sort(query, parameters.order_by, self.mappings.lookup(AuthorResource, Author))
        return PagedList.create(query, parameters.page_number, parameters.page_size)

    def get_authors_by_ids(self, author_ids: Iterable[str]) -> List[Author]:
        author_ids = list(author_ids)
        query = self.session.query(Author).filter(Author.id.in_(author_ids))
        return query.order_by(Author.first_name, Author.last_name).all()

    def get_author(self, author_id: str) -> Optional[Author]:
        return self.session.get(Author, author_id)

    def author_exists(self, author_id: str) -> bool:
        return self.session.query(Author.id).filter(Author.id == author_id).first() is not None

    def add_author(self, author: Author) -> Author:
        author.id = new_id()
        for book in author.books:
            book.id = new_id()
        self.session.add(author)
        reshape.log.info(f"Added {author}")
        return author

    def delete_author(self, author: Author) -> None:
        self.session.delete(author)
        reshape.log.info(f"Deleted {author}")

    # Books

    def get_books_for_author(self, author_id: str, order_by: Optional[str] = None) -> List[Book]:
        query = self.session.query(Book).filter(Book.author_id == author_id)
        query = apply_sort(query, order_by, self.mappings.lookup(BookResource, Book))
        return query.all()

    def get_book_for_author(self, author_id: str, book_id: str) -> Optional[Book]:
        return self.session.query(Book).filter(Book.author_id == author_id, Book.id == book_id).first()

    def book_exists(self, book_id: str) -> bool:
        return self.session.query(Book.id).filter(Book.id == book_id).first() is not None

    def add_book_for_author(self, author_id: str, book: Book) -> Book:
        if book.id is None:
            book.id = new_id()
        book.author_id = author_id
        self.session.add(book)
        reshape.log.info(f"Added {book} for author {author_id}")
        return book

    def update_book_for_author(self, book: Book) -> Book:
        # the changes are tracked by the session
        return book

    def delete_book(self, book: Book) -> None:
        self.session.delete(book)
        reshape.log.info(f"Deleted {book}")

    def save(self) -> None:
        """
        Flush the pending changes, the request decorator commits or rolls back
        """
        self.session.flush()
