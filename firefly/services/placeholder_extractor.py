# firefly/services/placeholder_extractor.py
"""
Flatten a project aggregate into named placeholder values.

Scalar fields become ``company_name``, ``town`` and so on. Repeated
collections are indexed by the item's 1-based position, e.g.
``risk_2_location``; no stored identifier appears in a name, so reordering a
collection renames its placeholders.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from firefly.schemas.document import Placeholder, PlaceholderGroup, PlaceholderType
from firefly.schemas.project import ProjectRead

logger = logging.getLogger(__name__)

# Display order used by the editor form; anything else is listed last.
CATEGORY_ORDER = [
    "Project Info",
    "Location",
    "Buildings",
    "Zones",
    "Commodities",
    "Special Risks",
    "Fire Detection",
    "Firewater",
    "Escape Routes",
    "Emergency Staircase",
    "Signage",
    "Emergency Lighting Zones",
    "Fire Hose Reels",
    "Fire Extinguishers",
    "Fire Hydrants",
    "Fire Alarm Panel",
    "Smoke Ventilation",
    "Occupancy Separation",
    "Divisional Separation",
    "Automatic Fire Extinguishment Areas",
]

TEXT = PlaceholderType.text
NUMBER = PlaceholderType.number
CHECKBOX = PlaceholderType.checkbox

# (attribute on the item, placeholder suffix, input kind)
FieldSpec = Tuple[str, str, PlaceholderType]

# (attribute on the project, placeholder prefix, category, fields)
COLLECTIONS: List[Tuple[str, str, str, Sequence[FieldSpec]]] = [
    ("buildings", "building", "Buildings", [
        ("name", "name", TEXT),
        ("classification", "classification", TEXT),
        ("total_building_area", "area", NUMBER),
        ("description", "description", TEXT),
    ]),
    ("special_risks", "risk", "Special Risks", [
        ("risk_type", "type", TEXT),
        ("location", "location", TEXT),
        ("details", "details", TEXT),
        ("description", "description", TEXT),
    ]),
    ("escape_routes", "escape_route", "Escape Routes", [
        ("name", "name", TEXT),
        ("travel_distance", "travel_distance", NUMBER),
        ("width", "width", NUMBER),
    ]),
    ("emergency_staircases", "emergency_staircase", "Emergency Staircase", [
        ("name", "name", TEXT),
        ("width", "width", NUMBER),
        ("fire_rated", "fire_rated", CHECKBOX),
    ]),
    ("signage", "signage", "Signage", [
        ("sign_type", "type", TEXT),
        ("location", "location", TEXT),
        ("photoluminescent", "photoluminescent", CHECKBOX),
    ]),
    ("emergency_lighting_zones", "emergency_lighting", "Emergency Lighting Zones", [
        ("name", "name", TEXT),
        ("duration", "duration", NUMBER),
        ("lux_level", "lux_level", NUMBER),
    ]),
    ("fire_hose_reels", "fire_hose_reel", "Fire Hose Reels", [
        ("location", "location", TEXT),
        ("hose_length", "length", NUMBER),
        ("coverage_radius", "coverage_radius", NUMBER),
    ]),
    ("fire_extinguishers", "fire_extinguisher", "Fire Extinguishers", [
        ("extinguisher_type", "type", TEXT),
        ("location", "location", TEXT),
        ("capacity", "capacity", NUMBER),
    ]),
    ("fire_hydrants", "fire_hydrant", "Fire Hydrants", [
        ("location", "location", TEXT),
        ("hydrant_type", "type", TEXT),
        ("flow_rate", "flow_rate", NUMBER),
    ]),
]

PROJECT_FIELDS: Sequence[FieldSpec] = [
    ("company_name", "company_name", TEXT),
    ("client_name", "client_name", TEXT),
    ("facility_process", "facility_process", TEXT),
    ("construction_year", "construction_year", NUMBER),
]

LOCATION_FIELDS: Sequence[FieldSpec] = [
    ("town", "town", TEXT),
    ("province", "province", TEXT),
]

FIREWATER_FIELDS: Sequence[FieldSpec] = [
    ("source", "firewater_source", TEXT),
    ("capacity", "firewater_capacity", NUMBER),
    ("pressure", "firewater_pressure", NUMBER),
]


def format_value(value: Any) -> str:
    """
    String form of a stored value as the report shows it.

    Booleans become "true" or "". Whole floats drop the trailing ".0".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "value"):  # Enum
        return str(value.value)
    return str(value)


def format_placeholder_label(name: str) -> str:
    """``building_2_name`` -> ``Building 2 Name``"""
    words = re.sub(r"(\d+)", r" \1 ", name.replace("_", " ")).split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def _emit(
    out: List[Placeholder],
    source: Any,
    fields: Iterable[FieldSpec],
    category: str,
    prefix: str = "",
) -> None:
    for attr, suffix, kind in fields:
        value = getattr(source, attr, None)
        if kind == CHECKBOX:
            # Unset and False collapse to the same "" downstream.
            if value is None:
                continue
        elif not value:
            continue
        name = f"{prefix}{suffix}"
        out.append(
            Placeholder(
                name=name,
                value=format_value(value),
                type=kind,
                category=category,
                label=format_placeholder_label(name),
            )
        )


def extract_placeholders(project: ProjectRead) -> List[Placeholder]:
    """
    Flatten ``project`` into placeholders sorted by (category, name).

    Only populated fields produce a placeholder, so a project with nothing
    filled in yields an empty list.
    """
    extracted: List[Placeholder] = []

    _emit(extracted, project, PROJECT_FIELDS, "Project Info")
    if project.facility_location is not None:
        _emit(extracted, project.facility_location, LOCATION_FIELDS, "Location")

    for attr, prefix, category, fields in COLLECTIONS:
        items = getattr(project, attr, None) or []
        for index, item in enumerate(items, start=1):
            _emit(extracted, item, fields, category, prefix=f"{prefix}_{index}_")

    if project.firewater is not None:
        _emit(extracted, project.firewater, FIREWATER_FIELDS, "Firewater")

    extracted.sort(key=lambda p: (p.category, p.name))
    logger.debug(
        "Extracted %d placeholders for project %s", len(extracted), getattr(project, "id", None)
    )
    return extracted


def to_value_map(placeholders: Iterable[Placeholder]) -> Dict[str, str]:
    return {p.name: p.value for p in placeholders}


def group_placeholders(placeholders: Iterable[Placeholder]) -> List[PlaceholderGroup]:
    """Group by category in the editor's display order."""
    grouped: Dict[str, List[Placeholder]] = {}
    for placeholder in placeholders:
        grouped.setdefault(placeholder.category or "Other", []).append(placeholder)

    def rank(category: str) -> Tuple[int, str]:
        try:
            return CATEGORY_ORDER.index(category), category
        except ValueError:
            return len(CATEGORY_ORDER), category

    return [
        PlaceholderGroup(category=category, placeholders=grouped[category])
        for category in sorted(grouped, key=rank)
    ]


def apply_overrides(
    placeholders: Iterable[Placeholder], overrides: Optional[Dict[str, Any]]
) -> Dict[str, str]:
    """
    Value map with the editor's edits laid over the extracted values.

    Names the extractor did not produce are kept too; the stamper decides
    whether they have a position.
    """
    values = to_value_map(placeholders)
    for name, value in (overrides or {}).items():
        values[name] = format_value(value)
    return values
