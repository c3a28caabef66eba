"""
app/config.py

Configuración leída de variables de entorno (las inyecta docker-compose en
despliegue). Para desarrollo local se usa SQLite si no hay DATABASE_URL.
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./library.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Muestra el SQL generado por SQLAlchemy (solo para depurar)
SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes")
