# File: firefly/api/v1/routes_project.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from firefly.api.deps import get_db
from firefly.schemas.project import (
    ProjectDraft,
    ProjectRead,
    ProjectStats,
    ProjectStatus,
    ProjectSummary,
)
from firefly.services import project_service
from firefly.services.project_service import DraftConflictError, ProjectNotFoundError

router = APIRouter()


def _not_found(exc: ProjectNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")


def _conflict(exc: DraftConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get(
    "/",
    response_model=list[ProjectSummary],
    summary="List projects",
)
def list_projects(
    owner_id: Optional[str] = None,
    status_filter: Optional[ProjectStatus] = Query(default=None, alias="status"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """
    Newest first. Optionally scoped to one owner and/or status.
    """
    return project_service.list_projects(db, owner_id=owner_id, status=status_filter, limit=limit)


@router.get(
    "/stats",
    response_model=ProjectStats,
    summary="Dashboard counts by status",
)
def get_project_stats(owner_id: Optional[str] = None, db: Session = Depends(get_db)):
    return project_service.project_stats(db, owner_id=owner_id)


@router.post(
    "/",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project (first wizard save)",
)
def create_project(
    payload: ProjectDraft,
    owner_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Inserts the project and every collection in the draft.

    The response carries the generated ids; send them back on later saves.
    """
    try:
        return project_service.create_project_draft(db, payload, owner_id=owner_id)
    except DraftConflictError as exc:
        raise _conflict(exc)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get full project",
)
def get_project(project_id: str, db: Session = Depends(get_db)):
    try:
        return project_service.get_project(db, project_id)
    except ProjectNotFoundError as exc:
        raise _not_found(exc)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Save wizard draft",
)
def save_project(project_id: str, payload: ProjectDraft, db: Session = Depends(get_db)):
    """
    Overwrites the project's fields and reconciles each collection present
    in the payload by id. Omitted collections are left as they are.
    """
    try:
        return project_service.save_project_draft(db, project_id, payload)
    except ProjectNotFoundError as exc:
        raise _not_found(exc)
    except DraftConflictError as exc:
        raise _conflict(exc)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
)
def delete_project(project_id: str, db: Session = Depends(get_db)):
    try:
        project_service.delete_project(db, project_id)
    except ProjectNotFoundError as exc:
        raise _not_found(exc)
    except DraftConflictError as exc:
        raise _conflict(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
