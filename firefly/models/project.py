# File: firefly/models/project.py

"""
Project model.

A project is one compliance assessment of a facility. It owns every child
collection the wizard collects; deleting a project removes all of them.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from firefly.models.building import Building
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


def _children(target: str):
    return relationship(
        target,
        back_populates="project",
        cascade="all, delete-orphan",
        order_by=f"{target}.position",
    )


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    owner_id: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    report_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    client_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    facility_process: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    construction_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    last_edited_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    # Bumped on every UPDATE; two saves racing on the same row cannot both win.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    facility_location: Mapped[Optional["FacilityLocation"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", uselist=False
    )
    firewater: Mapped[Optional["Firewater"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", uselist=False
    )

    buildings: Mapped[List["Building"]] = _children("Building")
    special_risks: Mapped[List["SpecialRisk"]] = _children("SpecialRisk")
    escape_routes: Mapped[List["EscapeRoute"]] = _children("EscapeRoute")
    emergency_staircases: Mapped[List["EmergencyStaircase"]] = _children("EmergencyStaircase")
    signage: Mapped[List["SignageItem"]] = _children("SignageItem")
    emergency_lighting_zones: Mapped[List["EmergencyLightingZone"]] = _children(
        "EmergencyLightingZone"
    )
    fire_hose_reels: Mapped[List["FireHoseReel"]] = _children("FireHoseReel")
    fire_extinguishers: Mapped[List["FireExtinguisher"]] = _children("FireExtinguisher")
    fire_hydrants: Mapped[List["FireHydrant"]] = _children("FireHydrant")

    __mapper_args__ = {"version_id_col": version}


class FacilityLocation(Base):
    __tablename__ = "facility_locations"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    town: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    province: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    project: Mapped[Project] = relationship(back_populates="facility_location")


class Firewater(Base):
    __tablename__ = "firewater"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    source: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Litres and kPa as entered on site
    capacity: Mapped[Optional[float]] = mapped_column(nullable=True)
    pressure: Mapped[Optional[float]] = mapped_column(nullable=True)

    project: Mapped[Project] = relationship(back_populates="firewater")
