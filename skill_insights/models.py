"""Snapshot records handed to the analytics engine.

Members carry their skill assignments and engagement history; scales,
skills and clients form the catalog.  The engine only reads these.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------
ScaleKind = Literal["ordinal", "numeric"]


class ScaleLevel(BaseModel):
    """One ordinal label and its rank."""

    value: str
    order: int = 0


class Scale(BaseModel):
    """A ranking system for proficiency labels.

    Ordinal scales keep ``(label, rank)`` pairs in ``levels``; numeric
    scales keep integer-like strings in ``numeric_values``.
    """

    id: int
    name: str = ""
    kind: ScaleKind = "ordinal"
    levels: list[ScaleLevel] = Field(default_factory=list)
    numeric_values: list[str] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def normalise_kind(cls, v: str) -> str:
        """Stored scales use ``qualitative`` for ordinal catalogs."""
        if v == "qualitative":
            return "ordinal"
        return v

    def labels(self) -> list[str]:
        """Catalog labels in stored order."""
        if self.kind == "numeric":
            return list(self.numeric_values)
        return [lv.value for lv in self.levels]


# ---------------------------------------------------------------------------
# Skill catalog
# ---------------------------------------------------------------------------
class KnowledgeArea(BaseModel):
    id: int
    name: str = Field(..., min_length=1)


class SkillCategory(BaseModel):
    """Groups skills; the scale is inherited by every skill in it."""

    id: int
    name: str = Field(..., min_length=1)
    scale_id: int | None = None


class Skill(BaseModel):
    id: int
    name: str = Field(..., min_length=1)
    category_id: int | None = None
    knowledge_area_id: int | None = None
    knowledge_area: KnowledgeArea | None = None
    strategic_priority: bool = False

    @property
    def knowledge_area_name(self) -> str:
        return self.knowledge_area.name if self.knowledge_area else "Other"


class SkillAssignment(BaseModel):
    """A member's level on one skill, measured on one scale.

    ``level`` is free-form and may not exist in the scale's catalog.
    ``skill`` is the catalog record attached by the loader, if any.
    """

    member_id: int
    skill_id: int
    scale_id: int
    level: str
    skill: Skill | None = None


# ---------------------------------------------------------------------------
# Clients & engagements
# ---------------------------------------------------------------------------
class Client(BaseModel):
    """A client; ``description`` and ``is_active`` are carried for callers only.

    Inactive clients still resolve as a member's current client.
    """

    id: int
    name: str = Field(..., min_length=1)
    description: str = ""
    is_active: bool = True


class EngagementPeriod(BaseModel):
    """Time a member spent with a client; no ``end_date`` means ongoing.

    ``role`` feeds :func:`engagement_roles`; ``status`` is passed through
    untouched, the resolver decides from the dates alone.
    """

    member_id: int | None = None
    client_id: int
    start_date: date
    end_date: date | None = None
    role: str = ""
    status: str = ""


class Member(BaseModel):
    id: int
    name: str = Field(..., min_length=1)
    email: str = ""
    skills: list[SkillAssignment] = Field(default_factory=list)
    engagements: list[EngagementPeriod] = Field(default_factory=list)


def index_scales(scales: list[Scale]) -> dict[int, Scale]:
    """Map scale id → scale; the first entry wins on duplicate ids."""
    index: dict[int, Scale] = {}
    for s in scales:
        index.setdefault(s.id, s)
    return index
