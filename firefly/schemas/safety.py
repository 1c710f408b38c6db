# File: firefly/schemas/safety.py

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RiskType(str, Enum):
    diesel_tank = "diesel_tank"
    inverter_canopy = "inverter_canopy"
    pallet_storage = "pallet_storage"
    oil_tank = "oil_tank"
    lpg_storage = "lpg_storage"
    other = "other"


class _ProjectItem(BaseModel):
    id: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True


class SpecialRiskSchema(_ProjectItem):
    risk_type: Optional[RiskType] = None
    location: Optional[str] = None
    details: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None


class EscapeRouteSchema(_ProjectItem):
    name: Optional[str] = None
    travel_distance: Optional[float] = Field(default=None, ge=0)
    width: Optional[float] = Field(default=None, ge=0)


class EmergencyStaircaseSchema(_ProjectItem):
    name: Optional[str] = None
    width: Optional[float] = Field(default=None, ge=0)
    fire_rated: Optional[bool] = None


class SignageSchema(_ProjectItem):
    sign_type: Optional[str] = None
    location: Optional[str] = None
    photoluminescent: Optional[bool] = None


class EmergencyLightingZoneSchema(_ProjectItem):
    name: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)
    lux_level: Optional[float] = Field(default=None, ge=0)


class FireHoseReelSchema(_ProjectItem):
    location: Optional[str] = None
    hose_length: Optional[float] = Field(default=None, ge=0)
    coverage_radius: Optional[float] = Field(default=None, ge=0)


class FireExtinguisherSchema(_ProjectItem):
    extinguisher_type: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[float] = Field(default=None, ge=0)


class FireHydrantSchema(_ProjectItem):
    location: Optional[str] = None
    hydrant_type: Optional[str] = None
    flow_rate: Optional[float] = Field(default=None, ge=0)


class FirewaterSchema(BaseModel):
    source: Optional[str] = None
    capacity: Optional[float] = Field(default=None, ge=0)
    pressure: Optional[float] = Field(default=None, ge=0)

    class Config:
        from_attributes = True
