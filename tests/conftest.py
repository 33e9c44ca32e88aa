import datetime
import pytest

from reshape.library import create_app, db, Author, Book

AUTHORS = [
    ("Stephen", "King", datetime.date(1947, 9, 21), "Horror", ["The Shining", "Misery"]),
    ("George", "RR Martin", datetime.date(1948, 9, 20), "Fantasy", ["A Game of Thrones"]),
    ("Neil", "Gaiman", datetime.date(1960, 11, 10), "Fantasy", ["American Gods"]),
    ("Tom", "Lanoye", datetime.date(1958, 8, 27), "Various", []),
    ("Douglas", "Adams", datetime.date(1952, 3, 11), "Science fiction", ["Mostly Harmless"]),
    ("Owen", "King", datetime.date(1977, 2, 21), "Horror", []),
]


@pytest.fixture
def app():
    app = create_app({"TESTING": True})
    with app.app_context():
        for first_name, last_name, date_of_birth, genre, titles in AUTHORS:
            author = Author(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, genre=genre)
            author.books = [Book(title=title, description=f"About {title}") for title in titles]
            db.session.add(author)
        db.session.commit()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def author_ids(app):
    """
    :return: {"Stephen King": id, ...}
    """
    with app.app_context():
        return {f"{author.first_name} {author.last_name}": author.id for author in db.session.query(Author).all()}
