"""
Public resource types: the representations returned to the clients.
Their fields are the fields that can be requested with ?fields=
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthorResource:
    id: str
    name: str
    age: int
    genre: str


@dataclass(frozen=True)
class BookResource:
    id: str
    title: str
    description: Optional[str]
    author_id: str
