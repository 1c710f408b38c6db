# File: firefly/api/v1/routes_project_document.py

"""
Document editor endpoints for a stored project.

GET  /projects/{id}/placeholders  -> extracted values, grouped for the form
POST /projects/{id}/document      -> stamp (edited) values and download
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from firefly.api.deps import get_app_settings, get_db, get_position_table
from firefly.api.errors import DocumentAPIError
from firefly.api.routes_document import render_document
from firefly.core.config import Settings
from firefly.core.placeholders import PositionTable
from firefly.schemas.document import PlaceholderListResponse, ProjectDocumentRequest
from firefly.services import project_service
from firefly.services.placeholder_extractor import (
    apply_overrides,
    extract_placeholders,
    group_placeholders,
)
from firefly.services.project_service import ProjectNotFoundError
from firefly.services.webhook_service import notify_document_saved

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.get(
    "/{project_id}/placeholders",
    response_model=PlaceholderListResponse,
    summary="Placeholders extracted from a project",
)
def list_placeholders(project_id: str, db: Session = Depends(get_db)):
    try:
        project = project_service.get_project_aggregate(db, project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    placeholders = extract_placeholders(project)
    return PlaceholderListResponse(
        project_id=project.id,
        items=placeholders,
        groups=group_placeholders(placeholders),
        total=len(placeholders),
    )


@router.post(
    "/{project_id}/document",
    summary="Generate the report PDF for a project",
)
def generate_project_document(
    project_id: str,
    payload: ProjectDocumentRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    positions: PositionTable = Depends(get_position_table),
):
    """
    Re-reads the project, lays the editor's values over the extracted ones
    and stamps the template (the configured default unless one is given).

    The webhook, if configured, is notified after the response is sent.
    """
    try:
        project = project_service.get_project_aggregate(db, project_id)
    except ProjectNotFoundError:
        raise DocumentAPIError(status.HTTP_404_NOT_FOUND, "Project not found")

    values = apply_overrides(extract_placeholders(project), payload.placeholders)

    if settings.webhook_url:
        background_tasks.add_task(
            notify_document_saved,
            settings.webhook_url,
            project.model_dump(mode="json"),
            settings.webhook_timeout,
        )

    logger.info("Generating report for project %s with %d values", project_id, len(values))
    return render_document(
        settings.template_root,
        payload.templatePath or settings.default_template_path,
        values,
        positions,
        settings.debug,
    )
