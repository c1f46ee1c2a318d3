import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import LOG_LEVEL

# Routers
from routers.exercises import router as exercises_router
from routers.grading import router as grading_router
from routers.health import router as health_router
from routers.runs import router as runs_router

logger = logging.getLogger("primatrain")
logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Primatrain – Arithmetic Exercises API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(exercises_router)  # /generate, /evaluate
app.include_router(grading_router)  # /grade
app.include_router(runs_router)  # /runs/...
app.include_router(health_router)  # /health/...
