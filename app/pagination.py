import math


def compute_pagination(total: int, page: int, limit: int) -> dict:
    """
    Metadatos de paginación para una búsqueda.

    totalPages es 0 cuando no hay resultados. Pedir una página más allá del
    final no es un error: simplemente no hay datos y hasNext es False.
    """
    total_pages = math.ceil(total / limit) if total > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
