# firefly/api/routes_document.py
"""
Report generation endpoints.

POST /generate-document stamps the caller's placeholder values onto a
template under the template root and returns the PDF as a download. The same
router backs ``/api/generate-document`` in the main app and
``/generate-document`` in the standalone document server.
"""

import json
import logging
import traceback
from typing import Any, Mapping

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse, PlainTextResponse, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from firefly.api.deps import get_app_settings, get_position_table
from firefly.api.errors import DocumentAPIError
from firefly.core.config import Settings
from firefly.core.placeholders import PositionTable
from firefly.schemas.document import GenerateDocumentRequest
from firefly.services.pdf_stamper import (
    EmptyTemplateError,
    StampingError,
    TemplateLoadError,
    stamp_pdf,
)
from firefly.services.template_service import (
    EmptyTemplateFileError,
    InvalidTemplatePathError,
    TemplateNotFoundError,
    read_template,
    resolve_template_path,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])
preview_router = APIRouter(tags=["documents"])

DOWNLOAD_FILENAME = "modified-document.pdf"


def _internal_error(message: str, debug: bool) -> DocumentAPIError:
    return DocumentAPIError(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message,
        error=traceback.format_exc() if debug else None,
    )


def render_document(
    template_root: str,
    template_path: str,
    values: Mapping[str, Any],
    positions: PositionTable,
    debug: bool = False,
) -> Response:
    """
    Read the template, stamp ``values`` and wrap the PDF in a download response.

    Raises DocumentAPIError with the status the editor expects.
    """
    try:
        template_bytes = read_template(template_root, template_path)
    except InvalidTemplatePathError:
        raise DocumentAPIError(status.HTTP_400_BAD_REQUEST, "Invalid template path")
    except TemplateNotFoundError:
        logger.error("Template file not found: %s", template_path)
        raise DocumentAPIError(status.HTTP_404_NOT_FOUND, "Template file not found")
    except EmptyTemplateFileError:
        raise DocumentAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Template file is empty")
    except OSError:
        logger.exception("Error reading template file %s", template_path)
        raise _internal_error("Error reading template file", debug)

    try:
        result = stamp_pdf(template_bytes, values, positions)
    except EmptyTemplateError:
        raise DocumentAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "PDF template has no pages")
    except TemplateLoadError:
        logger.exception("Error loading PDF template %s", template_path)
        raise _internal_error("Failed to load PDF template", debug)
    except StampingError as exc:
        logger.exception("Error stamping %s", template_path)
        raise _internal_error(str(exc), debug)
    except Exception as exc:
        logger.exception("Error generating document from %s", template_path)
        raise _internal_error(str(exc) or "Failed to generate document", debug)

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={DOWNLOAD_FILENAME}",
            "X-Placeholders-Placed": str(len(result.placed)),
            "X-Placeholders-Skipped": str(len(result.skipped)),
        },
    )


@router.api_route(
    "/generate-document",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    summary="Stamp placeholder values onto a report template",
    response_class=Response,
)
async def generate_document(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    positions: PositionTable = Depends(get_position_table),
):
    """
    Body: ``{"projectId": str, "placeholders": {name: value}, "templatePath": str}``

    ``templatePath`` is relative to the template root, e.g.
    ``document template/Report_Template.pdf``.
    """
    if request.method != "POST":
        logger.info("Invalid method: %s", request.method)
        raise DocumentAPIError(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            "Method not allowed",
            headers={"Allow": "POST"},
        )

    raw = await request.body()
    if not raw.strip():
        logger.error("No request body received")
        raise DocumentAPIError(status.HTTP_400_BAD_REQUEST, "Request body is required")

    try:
        data = json.loads(raw)
    except ValueError:
        raise DocumentAPIError(status.HTTP_400_BAD_REQUEST, "Missing required parameters")
    if data is None:
        raise DocumentAPIError(status.HTTP_400_BAD_REQUEST, "Request body is required")

    try:
        payload = GenerateDocumentRequest.model_validate(data)
    except ValidationError as exc:
        logger.error("Missing parameters: %s", exc.errors())
        raise DocumentAPIError(status.HTTP_400_BAD_REQUEST, "Missing required parameters")

    logger.info(
        "Generating document for project %s: %d placeholders, template %s",
        payload.projectId, len(payload.placeholders), payload.templatePath,
    )
    return await run_in_threadpool(
        render_document,
        settings.template_root,
        payload.templatePath,
        payload.placeholders,
        positions,
        settings.debug,
    )


@preview_router.get("/serve-pdf", summary="Default report template for preview")
def serve_pdf(settings: Settings = Depends(get_app_settings)):
    try:
        path = resolve_template_path(settings.template_root, settings.default_template_path)
    except InvalidTemplatePathError:
        return PlainTextResponse("PDF file not found", status_code=status.HTTP_404_NOT_FOUND)

    if not path.is_file():
        return PlainTextResponse("PDF file not found", status_code=status.HTTP_404_NOT_FOUND)

    return FileResponse(
        path,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline"},
    )
