"""
app/query.py

Constructor de consultas para la búsqueda de libros.

Convierte los parámetros crudos del request (strings tal cual llegan en la
query string) en un descriptor acotado: filtros, orden y paginación. Nunca
lanza errores por valores inválidos; en su lugar aplica los valores por
defecto:

- page  : entero >= 1 (por defecto 1)
- limit : entero entre 1 y MAX_LIMIT (por defecto 10)
- sortBy: title | publishedYear | createdAt (por defecto createdAt)
- order : asc | desc (por defecto desc)
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import Select, asc, desc

from app import models

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

DEFAULT_SORT = "createdAt"
SORT_FIELDS = {
    "title": models.Book.title,
    "publishedYear": models.Book.published_year,
    "createdAt": models.Book.created_at,
}


def _parse_int(raw, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


@dataclass(frozen=True)
class BookQuery:
    """Descriptor normalizado de una búsqueda de libros."""

    search: Optional[str] = None
    genre: Optional[str] = None
    author_name: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT
    order: str = "desc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit

    def filters(self) -> List:
        """
        Condiciones activas (se combinan con AND).

        Los valores van como parámetros enlazados; los comodines de LIKE que
        escriba el usuario se escapan con autoescape.
        """
        clauses = []
        if self.search:
            clauses.append(models.Book.title.icontains(self.search, autoescape=True))
        if self.genre:
            clauses.append(models.Book.genre == self.genre)
        if self.author_name:
            clauses.append(models.Author.name.icontains(self.author_name, autoescape=True))
        return clauses

    def order_by(self) -> List:
        direction = asc if self.order == "asc" else desc
        # El id desempata filas con el mismo valor para que las páginas sean estables
        return [direction(SORT_FIELDS[self.sort_by]), direction(models.Book.id)]

    def apply_filters(self, stmt: Select) -> Select:
        return stmt.join(models.Book.author).where(*self.filters())

    def apply(self, stmt: Select) -> Select:
        """Aplica filtros, orden y paginación a un select de Book."""
        return (
            self.apply_filters(stmt)
            .order_by(*self.order_by())
            .offset(self.skip)
            .limit(self.take)
        )


def build_book_query(
    search: Optional[str] = None,
    genre: Optional[str] = None,
    author_name: Optional[str] = None,
    page=None,
    limit=None,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> BookQuery:
    page = max(_parse_int(page, DEFAULT_PAGE), 1)

    limit = _parse_int(limit, DEFAULT_LIMIT)
    if limit < 1:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)

    sort_by = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT
    order = "asc" if order == "asc" else "desc"

    return BookQuery(
        search=_clean(search),
        genre=genre if _clean(genre) else None,
        author_name=_clean(author_name),
        page=page,
        limit=limit,
        sort_by=sort_by,
        order=order,
    )
