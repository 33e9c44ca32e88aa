# Storage entities of the library, the API exposes them through the resources in resources.py
import uuid
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def new_id() -> str:
    return str(uuid.uuid4())


class Author(db.Model):
    """
    description: Author entity
    """

    __tablename__ = "Authors"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=False)
    genre = db.Column(db.String(50), nullable=False)
    books = db.relationship("Book", back_populates="author", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Author {self.id} {self.first_name} {self.last_name}>"


class Book(db.Model):
    """
    description: Book entity
    """

    __tablename__ = "Books"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500))
    author_id = db.Column(db.String(36), db.ForeignKey("Authors.id"), nullable=False)
    author = db.relationship("Author", back_populates="books")

    def __repr__(self):
        return f"<Book {self.id} {self.title}>"
