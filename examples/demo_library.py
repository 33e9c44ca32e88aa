#!/usr/bin/env python3
"""
  This demo application serves the library API
  When reshape is installed, you can run this app:
  $ python3 demo_library.py [Listener-IP]

  This will run the example on http://Listener-Ip:5000

  - An sqlite database is created and populated
  - The authors and books are exposed on /api/authors

  Try:
  http://Listener-Ip:5000/api/authors?orderBy=Age desc&fields=Id,Name,Age&pageSize=3
"""
import datetime
import sys
from reshape.library import create_app, db, Author, Book

SEED = [
    ("Stephen", "King", datetime.date(1947, 9, 21), "Horror", ["The Shining", "Misery", "It"]),
    ("George", "RR Martin", datetime.date(1948, 9, 20), "Fantasy", ["A Game of Thrones", "A Clash of Kings"]),
    ("Neil", "Gaiman", datetime.date(1960, 11, 10), "Fantasy", ["American Gods", "Coraline"]),
    ("Tom", "Lanoye", datetime.date(1958, 8, 27), "Various", ["Speechless"]),
    ("Douglas", "Adams", datetime.date(1952, 3, 11), "Science fiction", ["The Hitchhiker's Guide to the Galaxy"]),
    ("Agatha", "Christie", datetime.date(1890, 9, 15), "Crime", ["Murder on the Orient Express"]),
    ("Ursula", "Le Guin", datetime.date(1929, 10, 21), "Fantasy", ["A Wizard of Earthsea"]),
]


def populate():
    for first_name, last_name, date_of_birth, genre, titles in SEED:
        author = Author(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, genre=genre)
        author.books = [Book(title=title, description=f"{title} by {first_name} {last_name}") for title in titles]
        db.session.add(author)
    db.session.commit()


# Address where the api will be hosted, change this if you're not running the app on localhost!
host = sys.argv[1] if sys.argv[1:] else "127.0.0.1"
app = create_app()

with app.app_context():
    populate()

if __name__ == "__main__":
    app.run(host=host)
