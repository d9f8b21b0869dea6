# facultyeval/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

# --- Settings / DB ---
from facultyeval.core.app_logger import get_logger, setup_logging
from facultyeval.core.db import init_db
from facultyeval.core.errors import EvaluationError, StoreFailure
from facultyeval.core.settings import settings

# --- Routers ---
from facultyeval.routers import admin, evaluations, evaluator, faculty, health, rubric, student

setup_logging()
log = get_logger("app")

API_PREFIX = settings.API_PREFIX


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("%s %s started, prefix=%s", settings.PROJECT_NAME, settings.VERSION, API_PREFIX)
    yield


# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    root_path=settings.ROOT_PATH,
    lifespan=lifespan,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
ALLOW_ALL_CORS = settings.ALLOW_ALL_CORS or settings.DEBUG

ALLOWED_ORIGINS = [
    "http://127.0.0.1:3000", "http://localhost:3000",
]
LOCALHOST_REGEX = r"http://(localhost|127\.0\.0\.1):\d+$"

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if ALLOW_ALL_CORS else ALLOWED_ORIGINS,
    allow_origin_regex=LOCALHOST_REGEX if not ALLOW_ALL_CORS else ".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,
)

# -----------------------------------------------------------------------------
# Register routers
# -----------------------------------------------------------------------------
app.include_router(evaluations.router, prefix=API_PREFIX)
app.include_router(evaluator.router,   prefix=API_PREFIX)
app.include_router(faculty.router,     prefix=API_PREFIX)
app.include_router(student.router,     prefix=API_PREFIX)
app.include_router(rubric.router,      prefix=API_PREFIX)
app.include_router(admin.router,       prefix=API_PREFIX)
app.include_router(health.router)


@app.get("/")
def root():
    return {
        "ok": True,
        "service": settings.PROJECT_NAME,
        "prefix": API_PREFIX,
        "docs": "/docs",
    }


@app.get(f"{API_PREFIX}/_routes")
def list_routes(request: Request):
    out: List[Dict[str, Any]] = []
    for r in request.app.router.routes:
        out.append({"path": getattr(r, "path", str(r)), "methods": sorted(getattr(r, "methods", None) or [])})
    return out


# -----------------------------------------------------------------------------
# Exception handlers
# -----------------------------------------------------------------------------
@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError):
    if isinstance(exc, StoreFailure):
        log.error("%s %s -> %s", request.method, request.url.path, exc.message)
    else:
        log.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "ok": False,
            "error": "invalid_request",
            "detail": "Missing or malformed fields: " + ", ".join(f for f in fields if f),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "internal_error", "detail": "Internal server error"},
    )


# -----------------------------------------------------------------------------
# Lambda handler
# -----------------------------------------------------------------------------
handler = Mangum(app)
