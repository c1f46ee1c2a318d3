# primatrain/routers/health.py
from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from db import engine
from expressions import evaluate

router = APIRouter(prefix="/health", tags=["health"])

# Exercises every operator, a mixed number and a parenthesised group.
KNOWN_EXPRESSION = "(1/2 + 1'1/4) × 2 ÷ 8"
KNOWN_VALUE = "7/16"


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True}


@router.get("/engine")
def health_engine():
    value = evaluate(KNOWN_EXPRESSION).format()
    return {"ok": value == KNOWN_VALUE, "expression": KNOWN_EXPRESSION, "value": value}


def _migration_heads() -> list[str]:
    try:
        script = ScriptDirectory.from_config(Config("alembic.ini"))
    except CommandError:
        return []
    return list(script.get_heads())


def _applied_revision():
    try:
        with engine.connect() as conn:
            return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
    except SQLAlchemyError:
        # no alembic_version table: the schema was never migrated
        return None


@router.get("/migrations")
def health_migrations():
    heads = _migration_heads()
    db_ver = _applied_revision()
    synced = bool(heads) and db_ver in heads
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
