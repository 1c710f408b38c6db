# firefly/services/project_service.py
"""
Project store: wizard drafts, listing, stats and deletion.

A draft save overwrites the project's scalar fields and reconciles every
child collection present in the payload by identifier:

  * an item whose id is already stored under this project is updated in place
    (it may move between buildings or areas);
  * an item without an id, or with a new client-chosen id, is inserted;
  * a stored item missing from the payload is deleted, together with
    everything below it (rooms and commodities, areas, buildings).

Collections left out of the payload (None) are not touched. The whole save
is one transaction.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from firefly.models.base import new_id, utcnow
from firefly.models.building import Area, Building, Commodity, Room
from firefly.models.project import FacilityLocation, Firewater, Project
from firefly.models.safety import (
    EmergencyLightingZone,
    EmergencyStaircase,
    EscapeRoute,
    FireExtinguisher,
    FireHoseReel,
    FireHydrant,
    SignageItem,
    SpecialRisk,
)
from firefly.schemas.building import AreaSchema, BuildingSchema
from firefly.schemas.project import ProjectDraft, ProjectRead, ProjectStats, ProjectStatus

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "name",
    "report_type",
    "company_name",
    "client_name",
    "facility_process",
    "construction_year",
    "status",
)

# Project attribute -> model for collections with no children of their own
FLAT_COLLECTIONS: Dict[str, Type[Any]] = {
    "special_risks": SpecialRisk,
    "escape_routes": EscapeRoute,
    "emergency_staircases": EmergencyStaircase,
    "signage": SignageItem,
    "emergency_lighting_zones": EmergencyLightingZone,
    "fire_hose_reels": FireHoseReel,
    "fire_extinguishers": FireExtinguisher,
    "fire_hydrants": FireHydrant,
}

BUILDING_NESTED = {"id", "areas"}
AREA_NESTED = {"id", "rooms", "commodities"}


class ProjectNotFoundError(LookupError):
    pass


class DraftConflictError(RuntimeError):
    """The draft cannot be applied as sent (stale version, foreign ids)."""


# ---------------------------------------------------------------------------
# Reconciliation helpers
# ---------------------------------------------------------------------------

class _Reconciler:
    """Matches incoming items to stored rows of one project by id."""

    def __init__(self, db: Session, project: Project):
        self.db = db
        self.project = project
        self._claimed: set = set()

        buildings = list(project.buildings)
        areas = [a for b in buildings for a in b.areas]
        self.stored: Dict[Type[Any], Dict[str, Any]] = {
            Building: {b.id: b for b in buildings},
            Area: {a.id: a for a in areas},
            Room: {r.id: r for a in areas for r in a.rooms},
            Commodity: {c.id: c for a in areas for c in a.commodities},
        }
        for attr, model in FLAT_COLLECTIONS.items():
            rows = getattr(project, attr)
            self.stored[model] = {row.id: row for row in rows}

    def row_for(self, model: Type[Any], item_id: Optional[str]) -> Any:
        if item_id:
            key = (model, item_id)
            if key in self._claimed:
                raise DraftConflictError(
                    f"{model.__tablename__} id {item_id} appears more than once in the draft"
                )
            self._claimed.add(key)

            row = self.stored.get(model, {}).get(item_id)
            if row is not None:
                return row
            if self.db.get(model, item_id) is not None:
                raise DraftConflictError(
                    f"{model.__tablename__} id {item_id} belongs to another project"
                )
        return model(id=item_id or new_id())

    def sync(
        self,
        model: Type[Any],
        items: Sequence[Any],
        apply: Callable[[Any, Any], None],
    ) -> List[Any]:
        rows = []
        for position, item in enumerate(items):
            row = self.row_for(model, item.id)
            apply(row, item)
            row.position = position
            rows.append(row)
        return rows


def _copy_fields(row: Any, item: Any, exclude: Iterable[str] = ("id",)) -> None:
    for key, value in item.model_dump(exclude=set(exclude)).items():
        setattr(row, key, value)


def _apply_area(reconciler: _Reconciler) -> Callable[[Area, AreaSchema], None]:
    def apply(row: Area, item: AreaSchema) -> None:
        _copy_fields(row, item, exclude=AREA_NESTED)
        row.rooms = reconciler.sync(Room, item.rooms, _copy_fields)
        row.commodities = reconciler.sync(Commodity, item.commodities, _copy_fields)
    return apply


def _apply_building(reconciler: _Reconciler) -> Callable[[Building, BuildingSchema], None]:
    apply_area = _apply_area(reconciler)

    def apply(row: Building, item: BuildingSchema) -> None:
        _copy_fields(row, item, exclude=BUILDING_NESTED)
        row.areas = reconciler.sync(Area, item.areas, apply_area)
    return apply


def _apply_one_to_one(project: Project, draft: ProjectDraft, attr: str, model: Type[Any]) -> None:
    incoming = getattr(draft, attr)
    if incoming is None:
        # An explicit null clears it; leaving the key out keeps it.
        if attr in draft.model_fields_set:
            setattr(project, attr, None)
        return

    row = getattr(project, attr)
    if row is None:
        row = model(id=new_id())
        setattr(project, attr, row)
    _copy_fields(row, incoming, exclude=())


def _apply_draft(db: Session, project: Project, draft: ProjectDraft) -> None:
    # Full overwrite of the scalar columns, not a patch.
    for field in SCALAR_FIELDS:
        setattr(project, field, getattr(draft, field))
    project.last_edited_at = utcnow()

    _apply_one_to_one(project, draft, "facility_location", FacilityLocation)
    _apply_one_to_one(project, draft, "firewater", Firewater)

    reconciler = _Reconciler(db, project)

    if draft.buildings is not None:
        project.buildings = reconciler.sync(Building, draft.buildings, _apply_building(reconciler))

    for attr, model in FLAT_COLLECTIONS.items():
        items = getattr(draft, attr)
        if items is not None:
            setattr(project, attr, reconciler.sync(model, items, _copy_fields))


def _commit(db: Session, project_id: str) -> None:
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        raise DraftConflictError(
            f"Project {project_id} was saved by someone else; reload and try again"
        ) from exc
    except IntegrityError as exc:
        db.rollback()
        raise DraftConflictError(f"Draft for project {project_id} conflicts with stored data") from exc
    except Exception:
        db.rollback()
        raise


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_project(db: Session, project_id: str) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise ProjectNotFoundError(f"Project {project_id} not found")
    return project


def get_project_aggregate(db: Session, project_id: str) -> ProjectRead:
    """Load a project and validate it into the explicit aggregate schema."""
    return ProjectRead.model_validate(get_project(db, project_id))


def create_project_draft(
    db: Session,
    draft: ProjectDraft,
    owner_id: Optional[str] = None,
) -> Project:
    """First wizard save: insert the project and everything in the draft."""
    project = Project(id=new_id(), owner_id=owner_id)
    db.add(project)
    try:
        _apply_draft(db, project, draft)
    except Exception:
        db.rollback()
        raise
    _commit(db, project.id)
    db.refresh(project)

    logger.info("Created project %s (owner=%s)", project.id, owner_id)
    return project


def save_project_draft(db: Session, project_id: str, draft: ProjectDraft) -> Project:
    """Later wizard saves: overwrite scalars and reconcile child collections."""
    project = get_project(db, project_id)

    if draft.version is not None and draft.version != project.version:
        raise DraftConflictError(
            f"Project {project_id} is at version {project.version}, draft was based on {draft.version}"
        )

    try:
        _apply_draft(db, project, draft)
    except Exception:
        db.rollback()
        raise
    _commit(db, project_id)
    db.refresh(project)

    logger.info("Saved draft for project %s (version %d)", project_id, project.version)
    return project


def list_projects(
    db: Session,
    owner_id: Optional[str] = None,
    status: Optional[ProjectStatus] = None,
    limit: Optional[int] = None,
) -> List[Project]:
    """Newest first."""
    stmt = select(Project).order_by(Project.created_at.desc())
    if owner_id is not None:
        stmt = stmt.where(Project.owner_id == owner_id)
    if status is not None:
        stmt = stmt.where(Project.status == ProjectStatus(status).value)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def delete_project(db: Session, project_id: str) -> None:
    """Hard delete a project and all of its child rows."""
    project = get_project(db, project_id)
    db.delete(project)
    _commit(db, project_id)
    logger.info("Deleted project %s", project_id)


def project_stats(db: Session, owner_id: Optional[str] = None) -> ProjectStats:
    stmt = select(Project.status, func.count()).group_by(Project.status)
    if owner_id is not None:
        stmt = stmt.where(Project.owner_id == owner_id)
    counts = {status: count for status, count in db.execute(stmt)}

    return ProjectStats(
        total=sum(counts.values()),
        drafts=counts.get(ProjectStatus.draft.value, 0),
        in_progress=counts.get(ProjectStatus.review.value, 0),
        approved=counts.get(ProjectStatus.approved.value, 0),
        requires_attention=counts.get(ProjectStatus.rejected.value, 0),
    )
