"""Tests for skill_insights/models.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from skill_insights.models import (
    EngagementPeriod,
    KnowledgeArea,
    Scale,
    ScaleLevel,
    Skill,
    SkillCategory,
    index_scales,
)


class TestScale:
    def test_qualitative_alias(self):
        scale = Scale(id=1, kind="qualitative", levels=[ScaleLevel(value="Low", order=0)])
        assert scale.kind == "ordinal"

    def test_invalid_kind(self):
        with pytest.raises(ValidationError):
            Scale(id=1, kind="fuzzy")

    def test_labels_ordinal(self):
        scale = Scale(id=1, levels=[ScaleLevel(value="B", order=1), ScaleLevel(value="A", order=0)])
        assert scale.labels() == ["B", "A"]

    def test_labels_numeric(self):
        scale = Scale(id=1, kind="numeric", numeric_values=["3", "1"])
        assert scale.labels() == ["3", "1"]

    def test_negative_order_accepted(self):
        assert ScaleLevel(value="x", order=-1).order == -1

    def test_index_first_wins(self):
        a = Scale(id=1, name="a")
        b = Scale(id=1, name="b")
        assert index_scales([a, b])[1].name == "a"


class TestSkill:
    def test_knowledge_area_name(self):
        skill = Skill(id=1, name="Python", knowledge_area=KnowledgeArea(id=1, name="Backend"))
        assert skill.knowledge_area_name == "Backend"

    def test_knowledge_area_fallback(self):
        assert Skill(id=1, name="Python").knowledge_area_name == "Other"


class TestEngagementPeriod:
    def test_iso_strings_parsed(self):
        p = EngagementPeriod(client_id=1, start_date="2023-01-01", end_date="2023-06-01")
        assert p.start_date == date(2023, 1, 1)
        assert p.end_date == date(2023, 6, 1)

    def test_open_ended(self):
        assert EngagementPeriod(client_id=1, start_date="2023-01-01").end_date is None


class TestSkillCategory:
    def test_scale_optional(self):
        assert SkillCategory(id=1, name="Languages").scale_id is None
        assert SkillCategory(id=2, name="Cloud", scale_id=3).scale_id == 3
