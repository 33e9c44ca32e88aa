# Sort key mappings of the library resources, built once when the module is imported
from reshape import MappingRegistry, PropertyMapping
from .models import Author, Book
from .resources import AuthorResource, BookResource

property_mappings = MappingRegistry(
    PropertyMapping(AuthorResource, Author)
    .register("Id", ["id"])
    .register("Genre", ["genre"])
    # older authors have an earlier date of birth
    .register("Age", ["date_of_birth"], revert=True)
    .register("Name", ["first_name", "last_name"]),
    PropertyMapping(BookResource, Book)
    .register("Id", ["id"])
    .register("Title", ["title"])
    .register("Description", ["description"]),
).freeze()
