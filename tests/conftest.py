import os

# BD en memoria para los tests; debe fijarse antes de importar la app
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from app.database import Base, engine
from app import models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
