# File: firefly/models/safety.py

"""
Project-level fire safety collections: special risks, escape provisions and
firefighting equipment. All hang directly off a project.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from firefly.models.base import Base, new_id

if TYPE_CHECKING:
    from firefly.models.project import Project


class ProjectChildMixin:
    """id, owning project and ordering shared by every project collection."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @declared_attr
    def project_id(cls) -> Mapped[str]:
        return mapped_column(
            ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
        )

    @declared_attr
    def project(cls) -> Mapped["Project"]:
        return relationship("Project", back_populates=cls._collection)


class SpecialRisk(ProjectChildMixin, Base):
    __tablename__ = "special_risks"
    _collection = "special_risks"

    risk_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)


class EscapeRoute(ProjectChildMixin, Base):
    __tablename__ = "escape_routes"
    _collection = "escape_routes"

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    travel_distance: Mapped[Optional[float]] = mapped_column(nullable=True)
    width: Mapped[Optional[float]] = mapped_column(nullable=True)


class EmergencyStaircase(ProjectChildMixin, Base):
    __tablename__ = "emergency_staircases"
    _collection = "emergency_staircases"

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    width: Mapped[Optional[float]] = mapped_column(nullable=True)
    fire_rated: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)


class SignageItem(ProjectChildMixin, Base):
    __tablename__ = "signage_items"
    _collection = "signage"

    sign_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    photoluminescent: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)


class EmergencyLightingZone(ProjectChildMixin, Base):
    __tablename__ = "emergency_lighting_zones"
    _collection = "emergency_lighting_zones"

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # minutes
    duration: Mapped[Optional[float]] = mapped_column(nullable=True)
    lux_level: Mapped[Optional[float]] = mapped_column(nullable=True)


class FireHoseReel(ProjectChildMixin, Base):
    __tablename__ = "fire_hose_reels"
    _collection = "fire_hose_reels"

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hose_length: Mapped[Optional[float]] = mapped_column(nullable=True)
    coverage_radius: Mapped[Optional[float]] = mapped_column(nullable=True)


class FireExtinguisher(ProjectChildMixin, Base):
    __tablename__ = "fire_extinguishers"
    _collection = "fire_extinguishers"

    extinguisher_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    capacity: Mapped[Optional[float]] = mapped_column(nullable=True)


class FireHydrant(ProjectChildMixin, Base):
    __tablename__ = "fire_hydrants"
    _collection = "fire_hydrants"

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hydrant_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    flow_rate: Mapped[Optional[float]] = mapped_column(nullable=True)
