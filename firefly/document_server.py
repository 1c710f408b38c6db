# firefly/document_server.py
"""
Standalone document generator.

Serves only POST /generate-document, for deployments where the report editor
talks to a separate process. Run with:

    python -m firefly.document_server
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from firefly.api.errors import DocumentAPIError, document_api_error_handler
from firefly.api.routes_document import router as document_router
from firefly.core.config import settings

logger = logging.getLogger(__name__)


def create_document_server() -> FastAPI:
    app = FastAPI(title=f"{settings.PROJECT_NAME} document generator", version=settings.VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["https://localhost:3000", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition"],
    )
    app.add_exception_handler(DocumentAPIError, document_api_error_handler)
    app.include_router(document_router)
    return app


app = create_document_server()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Document generator server running on port %d", settings.document_server_port)
    uvicorn.run(app, host="0.0.0.0", port=settings.document_server_port)
