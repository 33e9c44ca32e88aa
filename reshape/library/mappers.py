# Conversion between storage entities, public resources and request payloads
import datetime
from collections import defaultdict
from typing import Dict, List, Optional
import jsonpatch
import jsonpointer
from reshape import UnprocessableEntityError, ValidationError
from .models import Author, Book
from .resources import AuthorResource, BookResource

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_NAME_LENGTH = 50
BOOK_MEMBERS = ("title", "description")


def current_age(date_of_birth: datetime.date, today: Optional[datetime.date] = None) -> int:
    """
    :param date_of_birth: date of birth
    :param today: reference date, defaults to today
    :return: age in full years
    """
    today = today or datetime.date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def to_author_resource(author: Author, today: Optional[datetime.date] = None) -> AuthorResource:
    return AuthorResource(
        id=author.id,
        name=f"{author.first_name} {author.last_name}",
        age=current_age(author.date_of_birth, today),
        genre=author.genre,
    )


def to_book_resource(book: Book) -> BookResource:
    return BookResource(id=book.id, title=book.title, description=book.description, author_id=book.author_id)


def _check_dict(payload, name: str) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError(f"Invalid {name} payload")
    return payload


def _required_string(payload: dict, member: str, max_length: int, errors: Dict[str, List[str]]) -> Optional[str]:
    value = payload.get(member)
    if value is None or (isinstance(value, str) and not value.strip()):
        errors[member].append(f"The {member} field is required.")
        return None
    if not isinstance(value, str):
        errors[member].append(f"The {member} field should be a string.")
        return None
    if len(value) > max_length:
        errors[member].append(f"The {member} shouldn't have more than {max_length} characters.")
    return value


def validate_book_payload(payload) -> Dict[str, Optional[str]]:
    """
    :param payload: {"title": ..., "description": ...}
    :return: the validated title and description
    """
    payload = _check_dict(payload, "book")
    errors = defaultdict(list)
    title = _required_string(payload, "title", MAX_TITLE_LENGTH, errors)
    description = payload.get("description")
    if description is not None:
        if not isinstance(description, str):
            errors["description"].append("The description field should be a string.")
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            errors["description"].append(f"The description shouldn't have more than {MAX_DESCRIPTION_LENGTH} characters.")
    if title is not None and description == title:
        errors["book"].append("The title and description must be different.")
    if errors:
        raise UnprocessableEntityError(dict(errors))
    return {"title": title, "description": description}


def book_from_payload(payload) -> Book:
    return Book(**validate_book_payload(payload))


def update_book(book: Book, values: Dict[str, Optional[str]]) -> Book:
    """
    :param values: validated book members, cfr. validate_book_payload
    """
    for name, value in values.items():
        setattr(book, name, value)
    return book


def book_values(book: Optional[Book] = None) -> Dict[str, Optional[str]]:
    """
    :param book: existing book, or None for a book that will be created
    :return: the patchable members of the book
    """
    if book is None:
        return {name: None for name in BOOK_MEMBERS}
    return {name: getattr(book, name) for name in BOOK_MEMBERS}


def load_book_patch(payload) -> jsonpatch.JsonPatch:
    """
    :param payload: JSON Patch document, f.i. [{"op": "replace", "path": "/title", "value": "It"}]
    :return: JsonPatch, the operations are checked but not applied
    """
    if not isinstance(payload, list) or not all(isinstance(operation, dict) for operation in payload):
        raise ValidationError("Invalid JSON Patch document, expected a list of operations")
    try:
        return jsonpatch.JsonPatch(payload)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
        raise ValidationError(f"Invalid JSON Patch document: {exc}")


def apply_book_patch(patch: jsonpatch.JsonPatch, book: Optional[Book] = None) -> Dict[str, Optional[str]]:
    """
    :param patch: JsonPatch returned by load_book_patch
    :param book: book to patch, None when the book will be created
    :return: the validated members of the patched book
    """
    try:
        document = patch.apply(book_values(book))
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
        raise UnprocessableEntityError({"book": [str(exc)]})
    unknown = [name for name in document if name not in BOOK_MEMBERS]
    if unknown:
        raise UnprocessableEntityError({name: [f"Unknown member {name}."] for name in unknown})
    return validate_book_payload(document)


def author_from_payload(payload) -> Author:
    """
    :param payload: {"firstName": ..., "lastName": ..., "dateOfBirth": "1950-01-31", "genre": ..., "books": [...]}
    :return: new Author entity, with its books
    """
    payload = _check_dict(payload, "author")
    errors = defaultdict(list)
    first_name = _required_string(payload, "firstName", MAX_NAME_LENGTH, errors)
    last_name = _required_string(payload, "lastName", MAX_NAME_LENGTH, errors)
    genre = _required_string(payload, "genre", MAX_NAME_LENGTH, errors)
    date_of_birth = None
    raw_date = payload.get("dateOfBirth")
    if not raw_date:
        errors["dateOfBirth"].append("The dateOfBirth field is required.")
    else:
        try:
            date_of_birth = datetime.date.fromisoformat(str(raw_date)[:10])
        except ValueError:
            errors["dateOfBirth"].append(f"Invalid date: {raw_date}")
    books = payload.get("books") or []
    if not isinstance(books, list):
        errors["books"].append("The books field should be a list.")
        books = []
    if errors:
        raise UnprocessableEntityError(dict(errors))

    author = Author(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, genre=genre)
    author.books = [book_from_payload(book) for book in books]
    return author
