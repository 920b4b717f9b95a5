"""Typed models for the skill catalog and the records that reference it."""

from __future__ import annotations

import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SKILLSET_ID_PATTERN = re.compile(r"^[a-z0-9_]+$")

Role = Literal["volunteer", "agency", "super_admin"]


class Item(BaseModel):
    """A node of the selectable hierarchy (domain, category or skill).

    Depth-1 nodes carry ``children``; depth-2 nodes carry ``sub_children``
    (serialized as ``subChildren``). A node without either is a leaf.
    """

    id: str
    label: str
    children: List["Item"] = Field(default_factory=list)
    sub_children: List["Item"] = Field(default_factory=list, alias="subChildren")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def is_leaf(self) -> bool:
        return not self.children and not self.sub_children

    def child_nodes(self) -> list["Item"]:
        """Direct children, whichever list holds them."""
        return [*self.children, *self.sub_children]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_defaults=True)


class SkillsetRow(BaseModel):
    """One row of the ``skillsets`` table (adjacency list form)."""

    id: str = Field(description="Lowercase identifier: letters, digits, underscores")
    label: str = Field(description="Display label")
    parent_id: Optional[str] = Field(default=None, description="Parent row id, None for domains")

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        if not SKILLSET_ID_PATTERN.match(value):
            raise ValueError(
                "ID must be lowercase, with no spaces, using letters, numbers, or underscores."
            )
        return value

    @field_validator("label")
    @classmethod
    def _validate_label(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Label is required.")
        return value

    @field_validator("parent_id", mode="before")
    @classmethod
    def _blank_parent_is_root(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileRecord(BaseModel):
    """A user profile as stored in the ``profiles`` table."""

    id: str
    full_name: str = ""
    role: Role = "volunteer"
    skills: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("skills", mode="before")
    @classmethod
    def _null_skills(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectRecord(BaseModel):
    """A project as stored in the ``projects`` table."""

    id: str
    title: str = ""
    organization_id: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("required_skills", mode="before")
    @classmethod
    def _null_required_skills(cls, value: Any) -> Any:
        return [] if value is None else value


class VolunteerMatch(BaseModel):
    """A volunteer recommended for a project and the skills that matched."""

    profile: ProfileRecord
    matched_skills: List[str] = Field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matched_skills)
