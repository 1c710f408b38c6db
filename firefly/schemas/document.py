# File: firefly/schemas/document.py

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

PlaceholderValue = Union[str, bool, int, float, None]


class PlaceholderType(str, Enum):
    text = "text"
    number = "number"
    date = "date"
    file = "file"
    checkbox = "checkbox"


class Placeholder(BaseModel):
    """One flattened project value, ready for the editor form."""

    name: str
    value: str
    type: PlaceholderType = PlaceholderType.text
    category: str
    label: str = ""

    class Config:
        use_enum_values = True


class PlaceholderGroup(BaseModel):
    category: str
    placeholders: List[Placeholder]


class PlaceholderListResponse(BaseModel):
    project_id: str
    items: List[Placeholder]
    groups: List[PlaceholderGroup]
    total: int


class GenerateDocumentRequest(BaseModel):
    # Field names match what the editor already sends.
    projectId: str = Field(min_length=1)
    placeholders: Dict[str, PlaceholderValue]
    templatePath: str = Field(min_length=1)


class ProjectDocumentRequest(BaseModel):
    """Editor save: values typed over the extracted placeholders."""

    placeholders: Dict[str, PlaceholderValue] = {}
    templatePath: Optional[str] = None
