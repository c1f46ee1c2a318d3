import os
import tempfile
from pathlib import Path

import pytest

# Must be set before db.py is first imported (test modules import main at collection).
_DB_DIR = Path(tempfile.mkdtemp(prefix="primatrain-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    import models  # noqa: F401
    from db import Base, engine

    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
