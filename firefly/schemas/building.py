# File: firefly/schemas/building.py

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

# SANS 10400-A occupancy classes offered by the wizard
OCCUPANCY_CLASSES = (
    "A1", "A2", "A3", "A4",
    "B1", "B2", "B3",
    "C1", "C2",
    "D1", "D2", "D3", "D4",
    "E1", "E2", "E3", "E4",
    "F1", "F2", "F3",
    "G1",
    "H1", "H2", "H3", "H4",
    "J1", "J2", "J3", "J4",
)


class CommodityCategory(str, Enum):
    I = "I"
    II = "II"
    III = "III"
    IV = "IV"


class RoomSchema(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None

    class Config:
        from_attributes = True


class CommoditySchema(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    category: Optional[CommodityCategory] = None
    stack_height: Optional[float] = Field(default=None, ge=0)
    storage_type: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True


class AreaSchema(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    rooms: List[RoomSchema] = []
    commodities: List[CommoditySchema] = []

    class Config:
        from_attributes = True


class BuildingSchema(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    classification: Optional[str] = None
    total_building_area: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None

    wall_brick: bool = False
    wall_steel: bool = False
    wall_concrete: bool = False
    wall_timber: bool = False
    wall_other: Optional[str] = None

    photo_url: Optional[str] = None
    layout_url: Optional[str] = None

    areas: List[AreaSchema] = []

    class Config:
        from_attributes = True

    @field_validator("classification", mode="before")
    @classmethod
    def check_classification(cls, v):
        if v is None or v == "":
            return None
        code = str(v).strip().upper()
        if code not in OCCUPANCY_CLASSES:
            raise ValueError(f"unknown occupancy classification '{v}'")
        return code
