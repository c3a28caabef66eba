from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

# Máximo de una columna Integer (int4 en PostgreSQL)
MAX_INT = 2**31 - 1


# Los JSON de la API usan camelCase (publishedYear, authorId...);
# en Python seguimos con snake_case.
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _reject_null(value, field_name: str):
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


# ---------------------------------------------------------------------
# Autores
# ---------------------------------------------------------------------

class AuthorBase(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    bio: Optional[str] = None
    nationality: Optional[str] = None
    birth_year: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("birth_year", mode="before")
    @classmethod
    def _empty_birth_year(cls, v):
        return _blank_to_none(v)


class AuthorCreate(AuthorBase):
    pass


class AuthorUpdate(CamelModel):
    """
    Actualización parcial de un autor.

    Solo se aplican los campos presentes en el body. birthYear vacío ("" o
    null) se guarda como null; name/email no admiten null.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    nationality: Optional[str] = None
    birth_year: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)

    @field_validator("name", "email")
    @classmethod
    def _required_when_present(cls, v, info):
        _reject_null(v, info.field_name)
        if info.field_name == "name":
            v = v.strip()
            if not v:
                raise ValueError("name cannot be empty")
        return v

    @field_validator("birth_year", mode="before")
    @classmethod
    def _empty_birth_year(cls, v):
        return _blank_to_none(v)


class Author(AuthorBase):
    id: int
    # La respuesta no vuelve a validar el email guardado
    email: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------
# Libros
# ---------------------------------------------------------------------

class BookBase(CamelModel):
    title: str = Field(min_length=3)
    description: Optional[str] = None
    isbn: Optional[str] = None
    published_year: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)
    genre: Optional[str] = None
    pages: Optional[int] = Field(default=None, ge=1, le=MAX_INT)

    @field_validator("isbn", "published_year", "pages", mode="before")
    @classmethod
    def _blank_fields(cls, v):
        return _blank_to_none(v)


class BookCreate(BookBase):
    author_id: int = Field(le=MAX_INT)


class BookUpdate(CamelModel):
    """
    Actualización parcial de un libro.

    publishedYear y pages vacíos se ignoran (el valor guardado no cambia);
    description, genre e isbn sí se pueden poner a null.
    """
    title: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = None
    isbn: Optional[str] = None
    published_year: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)
    genre: Optional[str] = None
    pages: Optional[int] = Field(default=None, ge=1, le=MAX_INT)
    author_id: Optional[int] = Field(default=None, le=MAX_INT)

    @field_validator("title", "author_id")
    @classmethod
    def _required_when_present(cls, v, info):
        return _reject_null(v, info.field_name)

    @field_validator("isbn", "published_year", "pages", mode="before")
    @classmethod
    def _blank_fields(cls, v):
        return _blank_to_none(v)


class Book(BookBase):
    id: int
    title: str
    author_id: int
    created_at: datetime
    updated_at: datetime


# Versión ligera del autor para mostrarlo dentro del libro
class BookAuthor(CamelModel):
    id: int
    name: str
    email: str


class BookWithAuthor(Book):
    author: BookAuthor


class AuthorDetail(Author):
    books: List[Book] = []


# ---------------------------------------------------------------------
# Búsqueda paginada
# ---------------------------------------------------------------------

class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class BookSearchResponse(CamelModel):
    data: List[BookWithAuthor]
    pagination: Pagination


# ---------------------------------------------------------------------
# Estadísticas de autor
# ---------------------------------------------------------------------

class BookYear(CamelModel):
    title: str
    year: int


class BookPages(CamelModel):
    title: str
    pages: int


class AuthorStats(CamelModel):
    author_id: int
    author_name: str
    total_books: int
    first_book: Optional[BookYear] = None
    latest_book: Optional[BookYear] = None
    average_pages: Optional[int] = None
    genres: List[str] = []
    longest_book: Optional[BookPages] = None
    shortest_book: Optional[BookPages] = None


class Message(BaseModel):
    message: str
