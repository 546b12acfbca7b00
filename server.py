"""FastAPI entry point for the Slotgrid web API."""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

load_dotenv(Path(__file__).resolve().with_name(".env"))

from slotgrid.errors import GridError, StorageFailure
from slotgrid_web.broadcast import BroadcastHub
from slotgrid_web.database import init_db, session_scope
from slotgrid_web.routes import admin, grid
from slotgrid_web.service import GridService
from slotgrid_web.store import GridStore

logger = logging.getLogger(__name__)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SLOTGRID_CORS_ORIGINS", "").split(",")
    if origin.strip()
]


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.grid_service = GridService(GridStore(session_scope))
    app.state.broadcast_hub = BroadcastHub()
    yield


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject security headers for every HTTP response."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault(
            "Permissions-Policy",
            "camera=(), microphone=(), geolocation=()",
        )
        response.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        return response


app = FastAPI(title="Slotgrid", version="1.0.0", lifespan=lifespan)
app.add_middleware(SecurityHeadersMiddleware)
if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.include_router(admin.router)
app.include_router(grid.router)


@app.exception_handler(GridError)
async def grid_error_handler(request: Request, exc: GridError) -> JSONResponse:
    if isinstance(exc, StorageFailure):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "invalid request body", "code": "invalid_argument"},
    )


@app.get("/health")
def health():
    return {"status": "healthy"}


def run() -> None:
    """Helper to run the development server."""

    import uvicorn

    uvicorn.run(
        "server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=False,
    )


if __name__ == "__main__":
    run()
