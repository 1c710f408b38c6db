# File: firefly/models/building.py

"""
Buildings and what sits inside them.

Building -> Area -> (Room, Commodity). Each level cascades deletes to the
next, so dropping a building from a draft removes its areas, rooms and
commodities in one flush.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.models.base import Base, new_id

if TYPE_CHECKING:
    from firefly.models.project import Project


class Building(Base):
    __tablename__ = "buildings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # SANS 10400-A occupancy class, e.g. "B2" or "J1"
    classification: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    total_building_area: Mapped[Optional[float]] = mapped_column(nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    wall_brick: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wall_steel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wall_concrete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wall_timber: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wall_other: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    photo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    layout_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    project: Mapped["Project"] = relationship(back_populates="buildings")
    areas: Mapped[List["Area"]] = relationship(
        back_populates="building",
        cascade="all, delete-orphan",
        order_by="Area.position",
    )


class Area(Base):
    __tablename__ = "areas"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    building_id: Mapped[str] = mapped_column(
        ForeignKey("buildings.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    building: Mapped[Building] = relationship(back_populates="areas")
    rooms: Mapped[List["Room"]] = relationship(
        back_populates="area",
        cascade="all, delete-orphan",
        order_by="Room.position",
    )
    commodities: Mapped[List["Commodity"]] = relationship(
        back_populates="area",
        cascade="all, delete-orphan",
        order_by="Commodity.position",
    )


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    area_id: Mapped[str] = mapped_column(
        ForeignKey("areas.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    area: Mapped[Area] = relationship(back_populates="rooms")


class Commodity(Base):
    __tablename__ = "expected_commodities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    area_id: Mapped[str] = mapped_column(
        ForeignKey("areas.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Commodity class I-IV
    category: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)
    stack_height: Mapped[Optional[float]] = mapped_column(nullable=True)
    storage_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    area: Mapped[Area] = relationship(back_populates="commodities")
