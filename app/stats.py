"""
app/stats.py

Estadísticas de un autor a partir de sus libros.

La función es pura: recibe los libros (objetos ORM o cualquier cosa con
title, published_year, pages y genre) y no los modifica. Cuando varios
libros empatan en el valor extremo gana el primero en el orden de entrada.
"""

import math
from typing import Iterable, Optional


def _pick(books, key, better):
    """Primer libro con el mejor valor de `key` (ignorando None)."""
    best = None
    for book in books:
        value = getattr(book, key)
        if value is None:
            continue
        if best is None or better(value, getattr(best, key)):
            best = book
    return best


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _year(book) -> Optional[dict]:
    if book is None:
        return None
    return {"title": book.title, "year": book.published_year}


def _pages(book) -> Optional[dict]:
    if book is None:
        return None
    return {"title": book.title, "pages": book.pages}


def aggregate_author_stats(author_id: int, author_name: str, books: Iterable) -> dict:
    books = list(books)

    with_pages = [b.pages for b in books if b.pages is not None]
    average_pages = _round_half_up(sum(with_pages) / len(with_pages)) if with_pages else None

    genres = []
    for book in books:
        if book.genre is not None and book.genre not in genres:
            genres.append(book.genre)

    return {
        "author_id": author_id,
        "author_name": author_name,
        "total_books": len(books),
        "first_book": _year(_pick(books, "published_year", lambda a, b: a < b)),
        "latest_book": _year(_pick(books, "published_year", lambda a, b: a > b)),
        "average_pages": average_pages,
        "genres": genres,
        "longest_book": _pages(_pick(books, "pages", lambda a, b: a > b)),
        "shortest_book": _pages(_pick(books, "pages", lambda a, b: a < b)),
    }
