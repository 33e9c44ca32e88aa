# flake8: noqa: F401
#
# Library API: authors and their books, served with reshape
#
from .models import db, Author, Book
from .resources import AuthorResource, BookResource
from .mappings import property_mappings
from .repository import LibraryRepository
from .app import create_app, create_api
