from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app import crud, schemas
from app.schemas import MAX_INT
from app.database import get_db
from app.stats import aggregate_author_stats

router = APIRouter(prefix="/authors", tags=["authors"])


def _get_author_or_404(db: Session, author_id: int, with_books: bool = False):
    author = crud.get_author(db, author_id, with_books=with_books)
    if not author:
        raise HTTPException(status_code=404, detail="Author not found")
    return author


# -------------------------------
# GET /authors/ (listar autores)
# -------------------------------
@router.get("/", summary="List authors", response_model=List[schemas.AuthorDetail])
def list_authors(db: Session = Depends(get_db)):
    """Lista todos los autores (más recientes primero) con sus libros."""
    return crud.list_authors(db)


@router.post("/", response_model=schemas.Author, status_code=201)
def create_author(author: schemas.AuthorCreate, db: Session = Depends(get_db)):
    """
    Crea un autor.

    Body esperado:
    {
      "name": "Nombre",
      "email": "autor@dominio.com",
      "bio": "opcional",
      "nationality": "opcional",
      "birthYear": 1900
    }
    """
    try:
        return crud.create_author(db, author)
    except crud.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{author_id}", response_model=schemas.AuthorDetail)
def read_author(author_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """
    Obtiene un autor por id, con sus libros ordenados por año de
    publicación (más reciente primero).
    """
    return _get_author_or_404(db, author_id, with_books=True)


@router.put("/{author_id}", response_model=schemas.AuthorDetail)
def update_author(payload: schemas.AuthorUpdate, author_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """
    Actualiza un autor (parcial).

    Los campos que no vienen en el body no se tocan. birthYear vacío
    ("" o null) deja el año de nacimiento en null.
    """
    author = _get_author_or_404(db, author_id)
    try:
        crud.update_author(db, author, payload)
    except crud.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _get_author_or_404(db, author_id, with_books=True)


@router.delete("/{author_id}", response_model=schemas.Message)
def delete_author(author_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """Elimina un autor y, en cascada, todos sus libros."""
    author = _get_author_or_404(db, author_id)
    crud.delete_author(db, author)
    return {"message": "Author deleted"}


@router.get("/{author_id}/books", response_model=List[schemas.Book])
def read_author_books(author_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """Devuelve los libros de un autor."""
    _get_author_or_404(db, author_id)
    return crud.list_author_books(db, author_id)


@router.get("/{author_id}/stats", response_model=schemas.AuthorStats)
def read_author_stats(author_id: int = Path(le=MAX_INT), db: Session = Depends(get_db)):
    """
    Estadísticas del autor: total de libros, primer y último libro (por año),
    media de páginas, géneros, y libro más largo / más corto.
    """
    author = _get_author_or_404(db, author_id)
    books = crud.list_author_books(db, author_id)
    return aggregate_author_stats(author.id, author.name, books)
