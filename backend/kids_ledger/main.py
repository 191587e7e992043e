import logging
import os
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from kids_ledger.core.logging import setup_logging
from kids_ledger.core.migrations import RunMigrations
from kids_ledger.modules.core.router import router as core_router
from kids_ledger.modules.ledgers.router import router as ledgers_router

setup_logging()

logger = logging.getLogger("app.request")
startup_logger = logging.getLogger("app.startup")


def _env_truthy(name: str) -> bool:
    value = os.getenv(name, "").strip().lower()
    return value in {"1", "true", "yes", "on"}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if _env_truthy("RUN_MIGRATIONS_ON_STARTUP"):
        RunMigrations()
    startup_logger.info("startup complete")
    yield


app = FastAPI(title="Kids Ledger API", lifespan=lifespan)

allowed_origins = os.getenv("ALLOWED_ORIGINS", "")
origin_list = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
if origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logger(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)

    # Ledger ids are credentials; only the route template is logged.
    route = request.scope.get("route")
    path = getattr(route, "path", None) or "unmatched"
    parts = [f"{request.method} {path}"]

    status = response.status_code
    if status >= 400:
        if status == 404:
            parts.append("ERROR: not found")
        elif status >= 500:
            parts.append("ERROR: server error")
        else:
            parts.append("ERROR: client error")

    parts.append(f"status={status}")
    parts.append(f"{duration_ms}ms")

    log_msg = " | ".join(parts)
    if status >= 500:
        logger.error(log_msg)
    elif status >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-Id"] = request_id
    return response


app.include_router(core_router)
app.include_router(ledgers_router)
