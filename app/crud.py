"""
app/crud.py

Acceso a datos de autores y libros (SQLAlchemy).

Los get_* devuelven None si el registro no existe; las escrituras lanzan
ConflictError (email/ISBN duplicado) o AuthorNotFoundError (authorId que no
existe). Ante cualquier fallo de escritura se hace rollback antes de propagar.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager, joinedload, selectinload

from app import models, schemas
from app.query import BookQuery

logger = logging.getLogger(__name__)


class ConflictError(Exception):
    """Violación de unicidad (email de autor o ISBN de libro)."""


class AuthorNotFoundError(Exception):
    """El authorId indicado para un libro no existe."""

    def __init__(self, author_id: int):
        super().__init__(f"Author {author_id} not found")
        self.author_id = author_id


def _commit(db: Session, conflict_message: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("conflict: %s (%s)", conflict_message, e.orig)
        raise ConflictError(conflict_message) from e


# ---------------------------------------------------------------------
# Autores
# ---------------------------------------------------------------------

def get_author(db: Session, author_id: int, with_books: bool = False) -> Optional[models.Author]:
    stmt = select(models.Author).where(models.Author.id == author_id)
    if with_books:
        stmt = stmt.options(selectinload(models.Author.books))
    return db.scalar(stmt)


def list_authors(db: Session) -> List[models.Author]:
    stmt = (
        select(models.Author)
        .options(selectinload(models.Author.books))
        .order_by(models.Author.created_at.desc(), models.Author.id.desc())
    )
    return db.execute(stmt).scalars().all()


def create_author(db: Session, data: schemas.AuthorCreate) -> models.Author:
    author = models.Author(**data.model_dump())
    db.add(author)
    _commit(db, "Email already registered")
    db.refresh(author)
    logger.info("author created id=%s", author.id)
    return author


def update_author(db: Session, author: models.Author, data: schemas.AuthorUpdate) -> models.Author:
    # Solo los campos enviados; birth_year enviado vacío llega como None
    for name, value in data.model_dump(exclude_unset=True).items():
        setattr(author, name, value)
    _commit(db, "Email already registered")
    db.refresh(author)
    return author


def delete_author(db: Session, author: models.Author) -> None:
    author_id = author.id
    db.delete(author)
    db.commit()
    logger.info("author deleted id=%s", author_id)


# ---------------------------------------------------------------------
# Libros
# ---------------------------------------------------------------------

def get_book(db: Session, book_id: int) -> Optional[models.Book]:
    stmt = (
        select(models.Book)
        .options(joinedload(models.Book.author))
        .where(models.Book.id == book_id)
    )
    return db.scalar(stmt)


def list_books(db: Session) -> List[models.Book]:
    stmt = (
        select(models.Book)
        .options(joinedload(models.Book.author))
        .order_by(models.Book.created_at.desc(), models.Book.id.desc())
    )
    return db.execute(stmt).scalars().all()


def list_author_books(db: Session, author_id: int) -> List[models.Book]:
    stmt = (
        select(models.Book)
        .where(models.Book.author_id == author_id)
        .order_by(models.Book.id)
    )
    return db.execute(stmt).scalars().all()


def query_books(db: Session, query: BookQuery) -> Tuple[List[models.Book], int]:
    """Devuelve (filas de la página, total de filas que cumplen los filtros)."""
    count_stmt = query.apply_filters(select(func.count(models.Book.id)))
    total = db.scalar(count_stmt) or 0
    if query.skip >= total:
        # Página más allá del final; el OFFSET puede no caber en un entero de la BD
        return [], total

    stmt = query.apply(select(models.Book)).options(contains_eager(models.Book.author))
    rows = db.execute(stmt).scalars().all()
    return rows, total


def _assert_author_exists(db: Session, author_id: int) -> None:
    if db.get(models.Author, author_id) is None:
        raise AuthorNotFoundError(author_id)


def create_book(db: Session, data: schemas.BookCreate) -> models.Book:
    _assert_author_exists(db, data.author_id)

    book = models.Book(**data.model_dump())
    db.add(book)
    _commit(db, "ISBN already exists")
    logger.info("book created id=%s author_id=%s", book.id, book.author_id)
    return get_book(db, book.id)


def update_book(db: Session, book: models.Book, data: schemas.BookUpdate) -> models.Book:
    changes = data.model_dump(exclude_unset=True)
    # publishedYear/pages vacíos no borran el valor guardado
    for name in ("published_year", "pages"):
        if name in changes and changes[name] is None:
            del changes[name]

    if "author_id" in changes and changes["author_id"] != book.author_id:
        _assert_author_exists(db, changes["author_id"])

    for name, value in changes.items():
        setattr(book, name, value)
    _commit(db, "ISBN already exists")
    db.expire(book)
    return get_book(db, book.id)


def delete_book(db: Session, book: models.Book) -> None:
    book_id = book.id
    db.delete(book)
    db.commit()
    logger.info("book deleted id=%s", book_id)
