# firefly/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from firefly.core.config import settings
from firefly.api.errors import DocumentAPIError, document_api_error_handler
from firefly.api.routes_document import preview_router, router as document_router
from firefly.api.v1.api import api_router
from firefly.db.init_db import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    init_db()
    logger.info("Database ready at %s", settings.database_url)
    yield


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Placeholders-Placed", "X-Placeholders-Skipped"],
    )

    # ---------- ERRORS ----------
    app.add_exception_handler(DocumentAPIError, document_api_error_handler)

    # ---------- ROUTERS ----------
    app.include_router(document_router, prefix="/api")
    app.include_router(preview_router, prefix="/api")
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    return app


app = create_application()
