"""Integration tests: a loaded snapshot flowing through every report."""

from datetime import date

import pytest

from skill_insights.engine.availability import availability_summary, available_talent_by_skill
from skill_insights.engine.engagement import current_client_name
from skill_insights.engine.proficiency import (
    analyze_skill,
    member_comparison,
    skill_gaps,
    team_strengths,
)
from skill_insights.models import Client, Member, Scale, Skill


class TestDashboardSnapshot:
    """Data shaped the way the storage layer hands it over."""

    @pytest.fixture
    def snapshot(self):
        scale = Scale.model_validate({
            "id": 1,
            "name": "Proficiency",
            "kind": "qualitative",
            "levels": [
                {"value": "Basic", "order": 1},
                {"value": "Advanced", "order": 3},
                {"value": "Intermediate", "order": 2},
            ],
        })
        area = {"id": 1, "name": "Data"}
        sql = Skill.model_validate({"id": 1, "name": "SQL", "knowledge_area": area})
        spark = Skill.model_validate({"id": 2, "name": "Spark", "knowledge_area": area})
        clients = [Client(id=1, name="Talent Pool"), Client(id=2, name="Initech")]

        raw_members = [
            {
                "id": 1,
                "name": "Ana",
                "skills": [
                    {"member_id": 1, "skill_id": 1, "scale_id": 1, "level": "Advanced", "skill": sql.model_dump()},
                    {"member_id": 1, "skill_id": 2, "scale_id": 1, "level": "Basic", "skill": spark.model_dump()},
                ],
                "engagements": [
                    {"client_id": 2, "start_date": "2023-03-01"},
                ],
            },
            {
                "id": 2,
                "name": "Bo",
                "skills": [
                    {"member_id": 2, "skill_id": 1, "scale_id": 1, "level": "Basic", "skill": sql.model_dump()},
                ],
                "engagements": [
                    {"client_id": 2, "start_date": "2022-01-01", "end_date": "2022-12-31"},
                    {"client_id": 1, "start_date": "2023-01-01"},
                ],
            },
            {"id": 3, "name": "Cy"},
        ]
        members = [Member.model_validate(m) for m in raw_members]
        return scale, [sql, spark], clients, members

    def test_skill_report(self, snapshot):
        scale, skills, _, members = snapshot
        assignments = [a for m in members for a in m.skills]
        result = analyze_skill(skills[0], scale, assignments, members)
        assert result.total_members == 2
        assert result.average_rank == 2.0
        assert [d.level for d in result.level_distribution] == ["Basic", "Intermediate", "Advanced"]
        assert [p.member_name for p in result.top_performers] == ["Ana", "Bo"]
        assert result.skill_gap_percentage == 50

    def test_team_reports(self, snapshot):
        scale, skills, _, members = snapshot
        strengths = team_strengths(members, [scale])
        assert [(s.name, s.count, s.percentage) for s in strengths] == [("Data", 1, 33)]

        gaps = skill_gaps(skills, members, [scale])
        assert [(g.skill_name, g.percentage) for g in gaps] == [("Spark", 33), ("SQL", 67)]

        comparison = member_comparison(members[0], members, [scale])
        assert [(c.skill_name, c.percentile) for c in comparison] == [("SQL", 50), ("Spark", 0)]

    def test_engagement_reports(self, snapshot):
        _, skills, clients, members = snapshot
        now = date(2024, 1, 1)
        # Bo's open pool period is skipped, so the last real client still shows
        assert [current_client_name(m, clients, now) for m in members] == ["Initech", "Initech", "Talent Pool"]

        summary = availability_summary(members, clients, now)
        assert summary.available == 1
        assert summary.utilisation_percentage == 67

        talent = available_talent_by_skill(skills, members, clients, now)
        assert [(t.skill_name, t.total, t.available) for t in talent] == [("SQL", 2, 0), ("Spark", 1, 0)]
