# File: firefly/core/placeholders.py

"""
Placeholder position table.

Maps a placeholder name to the page and coordinates where its value is drawn
on the report template. Coordinates are PDF user-space points with the origin
at the bottom-left corner of the page; pages are 1-based.

The table is an immutable value. Build it once (``load_position_table``) and
pass it to the stamper instead of reaching for module state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

DEFAULT_FONT_SIZE = 12.0


@dataclass(frozen=True)
class PlaceholderPosition:
    """Where a single placeholder value lands on the template."""

    page: int
    x: float
    y: float
    font_size: float = DEFAULT_FONT_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be 1-based, got {self.page}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")


PositionTable = Mapping[str, PlaceholderPosition]


def _pos(x: float, y: float, page: int = 1, font_size: float = DEFAULT_FONT_SIZE) -> PlaceholderPosition:
    return PlaceholderPosition(page=page, x=x, y=y, font_size=font_size)


_DEFAULT_POSITIONS: Dict[str, PlaceholderPosition] = {
    # Project info
    "company_name": _pos(100, 700),
    "client_name": _pos(100, 680),
    "facility_process": _pos(100, 660),
    "construction_year": _pos(100, 640),
    # Location
    "town": _pos(100, 620),
    "province": _pos(100, 600),
    # Buildings
    "building_1_name": _pos(100, 540),
    "building_1_classification": _pos(100, 520),
    "building_1_area": _pos(100, 500),
    "building_1_description": _pos(100, 480),
    # Special risks
    "risk_1_type": _pos(100, 440),
    "risk_1_location": _pos(100, 420),
    "risk_1_details": _pos(100, 400),
    "risk_1_description": _pos(100, 380),
    # Escape routes
    "escape_route_1_name": _pos(100, 340),
    "escape_route_1_travel_distance": _pos(100, 320),
    "escape_route_1_width": _pos(100, 300),
    # Emergency staircases
    "emergency_staircase_1_name": _pos(100, 260),
    "emergency_staircase_1_width": _pos(100, 240),
    "emergency_staircase_1_fire_rated": _pos(100, 220),
    # Signage
    "signage_1_type": _pos(100, 180),
    "signage_1_location": _pos(100, 160),
    "signage_1_photoluminescent": _pos(100, 140),
    # Emergency lighting zones
    "emergency_lighting_1_name": _pos(100, 100),
    "emergency_lighting_1_duration": _pos(100, 80),
    "emergency_lighting_1_lux_level": _pos(100, 60),
    # Fire hose reels
    "fire_hose_reel_1_location": _pos(300, 700),
    "fire_hose_reel_1_length": _pos(300, 680),
    "fire_hose_reel_1_coverage_radius": _pos(300, 660),
    # Fire extinguishers
    "fire_extinguisher_1_type": _pos(300, 620),
    "fire_extinguisher_1_location": _pos(300, 600),
    "fire_extinguisher_1_capacity": _pos(300, 580),
    # Fire hydrants
    "fire_hydrant_1_location": _pos(300, 540),
    "fire_hydrant_1_type": _pos(300, 520),
    "fire_hydrant_1_flow_rate": _pos(300, 500),
    # Firewater
    "firewater_source": _pos(300, 460),
    "firewater_capacity": _pos(300, 440),
    "firewater_pressure": _pos(300, 420),
}

DEFAULT_POSITION_TABLE: PositionTable = MappingProxyType(dict(_DEFAULT_POSITIONS))


def build_position_table(
    entries: Mapping[str, Mapping[str, float]],
    base: Optional[PositionTable] = None,
) -> PositionTable:
    """
    Build a read-only table from plain dict entries.

    Each entry needs ``page``, ``x`` and ``y``; ``font_size`` is optional.
    Entries replace same-named positions in ``base``.
    """
    table: Dict[str, PlaceholderPosition] = dict(base or {})
    for name, entry in entries.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"Position for '{name}' must be an object, got {type(entry).__name__}")
        try:
            table[name] = PlaceholderPosition(
                page=int(entry["page"]),
                x=float(entry["x"]),
                y=float(entry["y"]),
                font_size=float(entry.get("font_size", DEFAULT_FONT_SIZE)),
            )
        except KeyError as exc:
            raise ValueError(f"Position for '{name}' is missing {exc}") from exc
        except TypeError as exc:
            raise ValueError(f"Position for '{name}' has a non-numeric value") from exc
    return MappingProxyType(table)


@lru_cache
def load_position_table(path: Optional[str] = None) -> PositionTable:
    """
    Return the default table, extended by the JSON file at ``path`` if given.
    """
    if not path:
        return DEFAULT_POSITION_TABLE

    with open(Path(path), "r", encoding="utf-8") as f:
        entries = json.load(f)
    if not isinstance(entries, dict):
        raise ValueError(f"Position table {path} must be a JSON object")
    return build_position_table(entries, base=DEFAULT_POSITION_TABLE)
