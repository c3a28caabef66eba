from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from app import crud, schemas
from app.schemas import MAX_INT
from app.database import get_db
from app.pagination import compute_pagination
from app.query import build_book_query

router = APIRouter(prefix="/books", tags=["books"])


def _get_book_or_404(db: Session, book_id: int):
    book = crud.get_book(db, book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


# -------------------------------
# GET /books/ (listar libros)
# -------------------------------
@router.get("/", response_model=List[schemas.BookWithAuthor])
def list_books(db: Session = Depends(get_db)):
    """Lista todos los libros (más recientes primero) con su autor."""
    return crud.list_books(db)


# -------------------------------
# GET /books/search (búsqueda paginada)
# -------------------------------
# Los parámetros llegan como texto: valores inválidos se normalizan a los
# valores por defecto en lugar de devolver error.
@router.get("/search", response_model=schemas.BookSearchResponse)
def search_books(
    search: Optional[str] = None,
    genre: Optional[str] = None,
    author_name: Optional[str] = Query(None, alias="authorName"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Busca libros por título (search), género exacto (genre) y nombre de autor
    (authorName), con orden (sortBy/order) y paginación (page/limit, máx. 50).
    """
    query = build_book_query(
        search=search,
        genre=genre,
        author_name=author_name,
        page=page,
        limit=limit,
        sort_by=sort_by,
        order=order,
    )
    rows, total = crud.query_books(db, query)
    return {
        "data": rows,
        "pagination": compute_pagination(total, query.page, query.limit),
    }


# -------------------------------
# POST /books/ (crea libro)
# -------------------------------
@router.post("/", response_model=schemas.BookWithAuthor, status_code=201)
def create_book(book: schemas.BookCreate, db: Session = Depends(get_db)):
    """
    Crea un libro.

    Nota:
    - El autor (authorId) debe existir; si no, 404 y no se crea nada.
    - El ISBN es único; si ya existe, 409.
    """
    try:
        return crud.create_book(db, book)
    except crud.AuthorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except crud.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


# -------------------------------
# GET /books/{book_id} (detalle)
# -------------------------------
@router.get("/{book_id}", response_model=schemas.BookWithAuthor)
def get_book(book_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """Devuelve el detalle de un libro por ID, incluyendo su autor."""
    return _get_book_or_404(db, book_id)


# -------------------------------
# PUT /books/{book_id} (actualiza libro)
# -------------------------------
@router.put("/{book_id}", response_model=schemas.BookWithAuthor)
def update_book(payload: schemas.BookUpdate, book_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """
    Actualiza un libro (parcial).

    publishedYear y pages vacíos se ignoran; title mantiene el mínimo de
    3 caracteres; authorId, si viene, debe existir.
    """
    book = _get_book_or_404(db, book_id)
    try:
        return crud.update_book(db, book, payload)
    except crud.AuthorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except crud.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{book_id}", response_model=schemas.Message)
def delete_book(book_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    book = _get_book_or_404(db, book_id)
    crud.delete_book(db, book)
    return {"message": "Book deleted"}
