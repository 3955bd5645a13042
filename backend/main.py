"""
p5 Sketch Embedder FastAPI application.

Entry point for the API server:

    uvicorn backend.main:app --port 3000

or `p5sketch-server`, which reads HOST and PORT from the environment.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import settings
from backend.middleware.body_limit import BodySizeLimitMiddleware
from backend.routes import demos as demo_routes
from backend.routes import pages as pages_routes
from backend.routes import sketches as sketch_routes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Sketches are held in process memory, so there is nothing to open or
    flush; startup and shutdown are only logged.
    """
    logger.info("p5 Sketch Embedder running at %s", settings.PUBLIC_URL)
    yield
    logger.info("p5 Sketch Embedder stopped; in-memory sketches discarded")


app = FastAPI(
    title="p5 Sketch Embedder",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── error bodies ────────────────────────────────────────────────────────────


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Every JSON error body is {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or mistyped request bodies are client errors (400)."""
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Register routes
app.include_router(sketch_routes.router)
app.include_router(pages_routes.router)
app.include_router(demo_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}


# Serve frontend after all API routes
_FRONTEND = settings.FRONTEND_DIR

if _FRONTEND.is_dir():
    app.mount("/static", StaticFiles(directory=str(_FRONTEND)), name="static")

    @app.get("/")
    async def serve_index():
        """Serve the editor SPA."""
        return FileResponse(str(_FRONTEND / "index.html"))


def serve():
    """Run the API server with uvicorn."""
    uvicorn.run(
        "backend.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    serve()
