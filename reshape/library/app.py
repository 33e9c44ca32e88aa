# Library application factory
from flask import Flask
import reshape
from reshape import ReshapeApi
from .api import AuthorCollection, AuthorCollections, AuthorItem, Authors, BookItem, Books
from .models import db

API_PREFIX = "/api"


def create_api(app: Flask, prefix: str = API_PREFIX) -> ReshapeApi:
    """
    Expose the library resources

    :param app: flask app, the db should've been initialized for the app
    :param prefix: url prefix
    :return: the api
    """
    api = ReshapeApi(app, prefix=prefix, app_db=db)
    api.add_resource(Authors, "/authors", endpoint="authors")
    api.add_resource(AuthorItem, "/authors/<string:id>", endpoint="author")
    api.add_resource(AuthorCollections, "/authorcollections", endpoint="author_collections")
    api.add_resource(AuthorCollection, "/authorcollections/(<string:ids>)", endpoint="author_collection")
    api.add_resource(Books, "/authors/<string:author_id>/books", endpoint="books")
    api.add_resource(BookItem, "/authors/<string:author_id>/books/<string:book_id>", endpoint="book")
    reshape.log.info(f"Created library API on {prefix}")
    return api


def create_app(config=None) -> Flask:
    """
    :param config: configuration overrides, f.i. SQLALCHEMY_DATABASE_URI
    :return: flask app serving the library API
    """
    app = Flask("library")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", ERROR_404_HELP=False)
    app.config.update(config or {})
    db.init_app(app)

    with app.app_context():
        db.create_all()
        create_api(app)

    return app
