# primatrain/routers/runs.py
from __future__ import annotations

import hmac
import os
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from db import SessionLocal
from models import GradeRun
from schemas.runs import GradeRunOut

router = APIRouter(prefix="/runs", tags=["runs"])


def _matches(given: str | None, env_name: str) -> bool:
    wanted = os.environ.get(env_name, "")
    return bool(wanted) and given is not None and hmac.compare_digest(given, wanted)


def require_reader(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """Run history is readable with GRADING_API_KEY or ADMIN_TOKEN."""
    if not (_matches(x_admin_token, "ADMIN_TOKEN") or _matches(x_api_key, "GRADING_API_KEY")):
        raise HTTPException(status_code=401, detail="unauthorized")


@router.get("/recent-list", dependencies=[Depends(require_reader)])
def runs_recent(limit: Annotated[int, Query(ge=1, le=100)] = 20):
    with SessionLocal() as db:
        runs = db.query(GradeRun).order_by(GradeRun.created_at.desc()).limit(limit).all()
        rows = [GradeRunOut.model_validate(r).model_dump(exclude={"items"}) for r in runs]
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/{run_id}", response_model=GradeRunOut)
def get_run(run_id: int):
    with SessionLocal() as db:
        run = db.get(GradeRun, run_id)
        if run is None:
            raise HTTPException(status_code=404, detail="Grade run not found")
        return GradeRunOut.model_validate(run)
