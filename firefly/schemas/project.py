# File: firefly/schemas/project.py

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from firefly.schemas.building import BuildingSchema
from firefly.schemas.safety import (
    EmergencyLightingZoneSchema,
    EmergencyStaircaseSchema,
    EscapeRouteSchema,
    FireExtinguisherSchema,
    FireHoseReelSchema,
    FireHydrantSchema,
    FirewaterSchema,
    SignageSchema,
    SpecialRiskSchema,
)

PROVINCES = (
    "Eastern Cape",
    "Free State",
    "Gauteng",
    "KwaZulu-Natal",
    "Limpopo",
    "Mpumalanga",
    "North West",
    "Northern Cape",
    "Western Cape",
)


class ProjectStatus(str, Enum):
    draft = "draft"
    review = "review"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"


class FacilityLocationSchema(BaseModel):
    town: Optional[str] = None
    province: Optional[str] = None

    class Config:
        from_attributes = True

    @field_validator("province", mode="before")
    @classmethod
    def normalise_province(cls, v):
        if v is None or v == "":
            return None
        wanted = str(v).strip().lower()
        for name in PROVINCES:
            if name.lower() == wanted:
                return name
        raise ValueError(f"unknown province '{v}'")


class ProjectBase(BaseModel):
    name: Optional[str] = None
    report_type: Optional[str] = None
    company_name: Optional[str] = None
    client_name: Optional[str] = None
    facility_process: Optional[str] = None
    construction_year: Optional[int] = Field(default=None, ge=1800, le=2100)
    status: ProjectStatus = ProjectStatus.draft

    class Config:
        from_attributes = True
        use_enum_values = True


class ProjectDraft(ProjectBase):
    """
    Wizard payload. A collection left as ``None`` is not touched by the save;
    an empty list clears it.
    """

    # Last version the client saw; a mismatch means someone saved in between.
    version: Optional[int] = None

    facility_location: Optional[FacilityLocationSchema] = None
    firewater: Optional[FirewaterSchema] = None

    buildings: Optional[List[BuildingSchema]] = None
    special_risks: Optional[List[SpecialRiskSchema]] = None
    escape_routes: Optional[List[EscapeRouteSchema]] = None
    emergency_staircases: Optional[List[EmergencyStaircaseSchema]] = None
    signage: Optional[List[SignageSchema]] = None
    emergency_lighting_zones: Optional[List[EmergencyLightingZoneSchema]] = None
    fire_hose_reels: Optional[List[FireHoseReelSchema]] = None
    fire_extinguishers: Optional[List[FireExtinguisherSchema]] = None
    fire_hydrants: Optional[List[FireHydrantSchema]] = None


class ProjectSummary(ProjectBase):
    id: str
    owner_id: Optional[str] = None
    created_at: datetime
    last_edited_at: datetime
    version: int


class ProjectRead(ProjectSummary):
    """Full project aggregate as stored."""

    facility_location: Optional[FacilityLocationSchema] = None
    firewater: Optional[FirewaterSchema] = None

    buildings: List[BuildingSchema] = []
    special_risks: List[SpecialRiskSchema] = []
    escape_routes: List[EscapeRouteSchema] = []
    emergency_staircases: List[EmergencyStaircaseSchema] = []
    signage: List[SignageSchema] = []
    emergency_lighting_zones: List[EmergencyLightingZoneSchema] = []
    fire_hose_reels: List[FireHoseReelSchema] = []
    fire_extinguishers: List[FireExtinguisherSchema] = []
    fire_hydrants: List[FireHydrantSchema] = []


class ProjectStats(BaseModel):
    total: int
    drafts: int
    in_progress: int
    approved: int
    requires_attention: int
