"""
app/main.py

Servicio de Biblioteca (FastAPI): autores y sus libros (relación uno-a-muchos).

Endpoints clave:
- /authors/...             -> CRUD de autores (app/routers/authors.py)
- GET /authors/{id}/stats  -> estadísticas de un autor
- /books/...               -> CRUD de libros (app/routers/books.py)
- GET /books/search        -> búsqueda con filtros, orden y paginación
- GET /health              -> healthcheck con verificación DB
- GET /metrics             -> métricas Prometheus
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import LOG_LEVEL
from app.database import engine, Base
from app import models  # noqa: F401  (registra las tablas en Base.metadata)
from app.routers import authors, books

logger = logging.getLogger("app")
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)

try:
    # Crea tablas si no existen (sin Alembic)
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas verificadas/creadas correctamente.")
except SQLAlchemyError as e:
    # Si otra instancia las está creando a la vez, las tablas ya estarán ahí
    logger.warning("Aviso en DB: no se pudieron crear las tablas: %s", e)

app = FastAPI(
    title="Servicio de Biblioteca",
    description="Servicio encargado de la gestión de autores y libros",
    version="1.0.0",
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"]
)


def _route_path(request: Request) -> str:
    # Plantilla de la ruta (/books/{book_id}) para no crear una serie por id
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id", str(uuid4()))
    start = time.time()

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception(
            "request_id=%s method=%s path=%s error=%s",
            request_id, request.method, request.url.path, str(exc)
        )
        raise

    duration_ms = int((time.time() - start) * 1000)
    logger.info(
        "request_id=%s method=%s path=%s status=%s duration_ms=%s",
        request_id, request.method, request.url.path, response.status_code, duration_ms
    )
    path = _route_path(request)
    REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
    REQUEST_LATENCY.labels(request.method, path).observe((time.time() - start))

    response.headers["X-Request-Id"] = request_id
    return response


# ---------------------------------------------------------------------
# Errores
# ---------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Los errores de validación del body/params se devuelven como 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # El middleware ya dejó la traza en el log; al cliente solo un mensaje genérico
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/metrics", include_in_schema=False)
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(authors.router)
app.include_router(books.router)


# ---------------------------------------------------------------------
# Utilidad / Observabilidad básica
# ---------------------------------------------------------------------

@app.get("/")
def read_root():
    return {
        "service": "Library Service",
        "status": "Online",
        "message": "Bienvenido al sistema de gestión de autores y libros",
    }


@app.get("/health")
def health_check():
    """
    Healthcheck simple:
    - Devuelve healthy si puede ejecutar SELECT 1 contra la BD.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "error": str(e)}
