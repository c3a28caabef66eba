from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from .database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    bio = Column(Text)
    nationality = Column(String)
    birth_year = Column(Integer)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # Relación uno-a-muchos: al borrar el autor se borran sus libros.
    # Los libros se cargan del más reciente al más antiguo (sin año al final).
    books = relationship(
        "Book",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by=lambda: [Book.published_year.desc().nulls_last(), Book.id],
    )

class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text)
    isbn = Column(String, unique=True)
    published_year = Column(Integer)
    genre = Column(String, index=True)
    pages = Column(Integer)
    author_id = Column(Integer, ForeignKey("authors.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    author = relationship("Author", back_populates="books")
