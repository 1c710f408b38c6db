# File: tests/test_placeholder_extractor.py

from datetime import datetime, timezone

from firefly.schemas.document import Placeholder
from firefly.schemas.project import ProjectRead
from firefly.services.placeholder_extractor import (
    CATEGORY_ORDER,
    apply_overrides,
    extract_placeholders,
    format_placeholder_label,
    format_value,
    group_placeholders,
    to_value_map,
)


def make_project(**fields) -> ProjectRead:
    now = datetime(2025, 3, 24, tzinfo=timezone.utc)
    base = {"id": "p1", "created_at": now, "last_edited_at": now, "version": 1}
    base.update(fields)
    return ProjectRead.model_validate(base)


def test_empty_project_yields_nothing():
    assert extract_placeholders(make_project()) == []


def test_scalar_and_location_fields():
    project = make_project(
        company_name="Acme Foods",
        construction_year=1998,
        facility_location={"town": "Stellenbosch", "province": "western cape"},
    )
    values = to_value_map(extract_placeholders(project))

    assert values == {
        "company_name": "Acme Foods",
        "construction_year": "1998",
        "town": "Stellenbosch",
        "province": "Western Cape",
    }


def test_collections_are_indexed_from_one():
    project = make_project(
        buildings=[
            {"name": "Warehouse", "classification": "j2", "total_building_area": 1200.0},
            {"name": "Office", "total_building_area": 350.5},
        ],
        special_risks=[{"risk_type": "diesel_tank", "location": "North yard"}],
    )
    values = to_value_map(extract_placeholders(project))

    assert values["building_1_name"] == "Warehouse"
    assert values["building_1_classification"] == "J2"
    assert values["building_1_area"] == "1200"
    assert values["building_2_name"] == "Office"
    assert values["building_2_area"] == "350.5"
    assert values["risk_1_type"] == "diesel_tank"
    assert values["risk_1_location"] == "North yard"
    assert "building_2_classification" not in values
    assert "risk_1_details" not in values


def test_renamed_collection_fields():
    project = make_project(
        fire_hose_reels=[{"location": "Bay 3", "hose_length": 30}],
        firewater={"source": "Municipal", "capacity": 50000, "pressure": 0},
    )
    values = to_value_map(extract_placeholders(project))

    assert values["fire_hose_reel_1_length"] == "30"
    assert values["firewater_source"] == "Municipal"
    assert values["firewater_capacity"] == "50000"
    # zero counts as not filled in
    assert "firewater_pressure" not in values


def test_checkbox_values():
    project = make_project(
        emergency_staircases=[
            {"name": "East stair", "fire_rated": True},
            {"name": "West stair", "fire_rated": False},
            {"name": "South stair"},
        ],
    )
    values = to_value_map(extract_placeholders(project))

    assert values["emergency_staircase_1_fire_rated"] == "true"
    assert values["emergency_staircase_2_fire_rated"] == ""
    assert "emergency_staircase_3_fire_rated" not in values


def test_sorted_by_category_then_name():
    project = make_project(
        company_name="Acme",
        client_name="Bob",
        buildings=[{"name": "Warehouse", "description": "Racking"}],
        facility_location={"town": "Paarl"},
    )
    placeholders = extract_placeholders(project)
    keys = [(p.category, p.name) for p in placeholders]

    assert keys == sorted(keys)
    assert keys[0] == ("Buildings", "building_1_description")


def test_labels_and_types():
    project = make_project(buildings=[{"name": "Warehouse", "total_building_area": 10}])
    by_name = {p.name: p for p in extract_placeholders(project)}

    assert by_name["building_1_name"].label == "Building 1 Name"
    assert by_name["building_1_area"].type == "number"
    assert by_name["building_1_name"].category == "Buildings"


def test_format_value():
    assert format_value(None) == ""
    assert format_value(True) == "true"
    assert format_value(False) == ""
    assert format_value(120.0) == "120"
    assert format_value(2.5) == "2.5"
    assert format_value(7) == "7"
    assert format_value("x") == "x"


def test_format_placeholder_label():
    assert format_placeholder_label("fire_hydrant_12_flow_rate") == "Fire Hydrant 12 Flow Rate"
    assert format_placeholder_label("town") == "Town"


def test_group_placeholders_follows_display_order():
    placeholders = [
        Placeholder(name="a", value="1", category="Custom"),
        Placeholder(name="firewater_source", value="Tank", category="Firewater"),
        Placeholder(name="town", value="Paarl", category="Location"),
        Placeholder(name="company_name", value="Acme", category="Project Info"),
    ]
    groups = group_placeholders(placeholders)

    assert [g.category for g in groups] == ["Project Info", "Location", "Firewater", "Custom"]
    assert CATEGORY_ORDER[0] == "Project Info"


def test_apply_overrides():
    placeholders = [Placeholder(name="company_name", value="Acme", category="Project Info")]
    values = apply_overrides(placeholders, {"company_name": "Acme Ltd", "notes": 3.0, "flag": False})

    assert values == {"company_name": "Acme Ltd", "notes": "3", "flag": ""}
    assert apply_overrides(placeholders, None) == {"company_name": "Acme"}
