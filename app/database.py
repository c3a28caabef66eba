from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL, SQL_ECHO


def _engine_kwargs(url: str) -> dict:
    """
    Opciones extra del engine según el motor.

    SQLite necesita check_same_thread=False porque FastAPI atiende cada
    request en un hilo distinto; la BD en memoria además debe compartir
    una única conexión (StaticPool) o cada sesión vería una BD vacía.
    """
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Aquí se define la base para que models.py la pueda importar
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
