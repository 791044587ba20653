"""Proficiency analytics — skill statistics, team strengths and gaps.

All functions are *pure*.  Missing members, skills or scales degrade to
placeholder values; nothing here raises on incomplete data.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from skill_insights.engine.scale_order import resolve_rank, round_half_up, sorted_levels
from skill_insights.models import KnowledgeArea, Member, Scale, Skill, SkillAssignment, index_scales
from skill_insights.settings import DEFAULT_THRESHOLDS, AnalyticsThresholds

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class LevelShare(BaseModel):
    """How many assignments sit at one catalog level."""

    level: str
    count: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)


class TopPerformer(BaseModel):
    member_id: int
    member_name: str
    level: str


class SkillAnalytics(BaseModel):
    """Statistics for a single skill across the team."""

    skill_id: int
    skill_name: str
    total_members: int = Field(ge=0)
    average_rank: float = 0.0
    level_distribution: list[LevelShare]
    top_performers: list[TopPerformer]
    skill_gap_percentage: int = Field(ge=0, le=100, default=0)  # share below average


class TeamStrength(BaseModel):
    """Strong-member count for one knowledge area."""

    name: str
    count: int = Field(ge=0)
    percentage: int = Field(ge=0)
    average_rank: float = 0.0


class SkillGap(BaseModel):
    """Coverage for one catalog skill, keyed by ``skill_name``.

    Catalog skills sharing a name share one coverage figure.
    """

    skill_id: int
    skill_name: str
    count: int = Field(ge=0)
    percentage: int = Field(ge=0)
    average_rank: float = 0.0


class MemberSkillComparison(BaseModel):
    """A member's level on one skill against everyone holding it."""

    skill_id: int | None = None
    skill_name: str
    member_level: str
    team_average: float = 0.0
    percentile: int = Field(ge=0, le=100, default=0)


class AreaTalent(BaseModel):
    """Members holding at least one skill in a knowledge area."""

    name: str
    count: int = Field(ge=0)
    percentage: int = Field(ge=0)


class StrategicSkillCoverage(BaseModel):
    skill_name: str
    coverage: int = Field(ge=0)  # assignments, not distinct members
    percentage: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def _mean(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def _resolvable(
    assignment: SkillAssignment,
    scales: dict[int, Scale],
) -> tuple[Skill, Scale] | None:
    scale = scales.get(assignment.scale_id)
    if assignment.skill is None or scale is None:
        logger.debug(
            "Skipping assignment member=%s skill=%s scale=%s: unresolved skill or scale",
            assignment.member_id, assignment.skill_id, assignment.scale_id,
        )
        return None
    return assignment.skill, scale


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_skill(
    skill: Skill,
    scale: Scale,
    assignments: list[SkillAssignment],
    members: list[Member],
    thresholds: AnalyticsThresholds | None = None,
) -> SkillAnalytics:
    """Level distribution, average, top performers and gap for *skill*."""
    th = thresholds or DEFAULT_THRESHOLDS
    held = [a for a in assignments if a.skill_id == skill.id]
    total = len(held)

    counts: dict[str, int] = {level: 0 for level in sorted_levels(scale)}
    for a in held:
        if a.level in counts:
            counts[a.level] += 1
    distribution = [
        LevelShare(level=level, count=n, percentage=_percent(n, total))
        for level, n in counts.items()
    ]

    ranks = [resolve_rank(scale, a.level) for a in held]
    average = _mean(ranks)

    names: dict[int, str] = {}
    for m in members:
        names.setdefault(m.id, m.name)
    ranked = sorted(held, key=lambda a: resolve_rank(scale, a.level), reverse=True)
    top = [
        TopPerformer(
            member_id=a.member_id,
            member_name=names.get(a.member_id, UNKNOWN),
            level=a.level,
        )
        for a in ranked[: th.top_performer_limit]
    ]

    below = sum(1 for r in ranks if r < average)

    return SkillAnalytics(
        skill_id=skill.id,
        skill_name=skill.name,
        total_members=total,
        average_rank=average,
        level_distribution=distribution,
        top_performers=top,
        skill_gap_percentage=_percent(below, total),
    )


def team_strengths(
    members: list[Member],
    scales: list[Scale],
    thresholds: AnalyticsThresholds | None = None,
) -> list[TeamStrength]:
    """Strong members per knowledge area, most strong members first.

    Each member counts once per area, using the first assignment for that
    area in stored order.  A member is strong when that rank reaches
    ``strong_ratio`` of the highest rank seen anywhere in the area.
    """
    th = thresholds or DEFAULT_THRESHOLDS
    scale_index = index_scales(scales)

    area_max: dict[str, int] = {}
    counted: dict[str, list[int]] = {}  # area → first rank of each member

    for member in members:
        seen: set[str] = set()
        for a in member.skills:
            resolved = _resolvable(a, scale_index)
            if resolved is None:
                continue
            skill, scale = resolved
            area = skill.knowledge_area_name
            rank = resolve_rank(scale, a.level)
            area_max[area] = max(area_max.get(area, rank), rank)
            if area in seen:
                continue
            seen.add(area)
            counted.setdefault(area, []).append(rank)

    total_members = len(members)
    results: list[TeamStrength] = []
    for area, ranks in counted.items():
        bar = area_max[area] * th.strong_ratio
        strong = sum(1 for r in ranks if r >= bar)
        results.append(TeamStrength(
            name=area,
            count=strong,
            percentage=_percent(strong, total_members),
            average_rank=_mean(ranks),
        ))
    return sorted(results, key=lambda s: s.count, reverse=True)


def skill_gaps(
    skills: list[Skill],
    members: list[Member],
    scales: list[Scale],
    thresholds: AnalyticsThresholds | None = None,
) -> list[SkillGap]:
    """Catalog skills with low coverage or a low average rank, least covered first."""
    th = thresholds or DEFAULT_THRESHOLDS
    scale_index = index_scales(scales)

    holders: dict[str, set[int]] = {}
    ranks: dict[str, list[int]] = {}
    for member in members:
        for a in member.skills:
            resolved = _resolvable(a, scale_index)
            if resolved is None:
                continue
            skill, scale = resolved
            holders.setdefault(skill.name, set()).add(member.id)
            ranks.setdefault(skill.name, []).append(resolve_rank(scale, a.level))

    total_members = len(members)
    rows: list[SkillGap] = []
    for skill in skills:
        coverage = len(holders.get(skill.name, ()))
        row = SkillGap(
            skill_id=skill.id,
            skill_name=skill.name,
            count=coverage,
            percentage=_percent(coverage, total_members),
            average_rank=_mean(ranks.get(skill.name, [])),
        )
        if row.percentage < th.gap_coverage_percent or row.average_rank < th.gap_average_rank:
            rows.append(row)
    return sorted(rows, key=lambda r: r.percentage)


def member_comparison(
    member: Member,
    all_members: list[Member],
    scales: list[Scale],
) -> list[MemberSkillComparison]:
    """Benchmark each of *member*'s skills against the whole team."""
    scale_index = index_scales(scales)
    population: dict[tuple[int, int], list[SkillAssignment]] = {}
    for m in all_members:
        for a in m.skills:
            population.setdefault((a.skill_id, a.scale_id), []).append(a)

    rows: list[MemberSkillComparison] = []
    for a in member.skills:
        resolved = _resolvable(a, scale_index)
        if resolved is None:
            rows.append(MemberSkillComparison(
                skill_id=a.skill_id,
                skill_name=a.skill.name if a.skill else UNKNOWN,
                member_level=a.level,
            ))
            continue
        skill, scale = resolved
        peers = [resolve_rank(scale, p.level) for p in population.get((a.skill_id, a.scale_id), [])]
        own = resolve_rank(scale, a.level)
        rows.append(MemberSkillComparison(
            skill_id=skill.id,
            skill_name=skill.name,
            member_level=a.level,
            team_average=_mean(peers),
            percentile=_percent(sum(1 for r in peers if own > r), len(peers)),
        ))
    return sorted(rows, key=lambda r: r.percentile, reverse=True)


def least_talent_areas(
    knowledge_areas: list[KnowledgeArea],
    members: list[Member],
    limit: int = 6,
) -> list[AreaTalent]:
    """Catalog areas with the fewest members, thinnest first.

    A member counts once per area however many skills they hold in it.
    Skills pointing at an area outside the catalog are ignored.
    """
    areas_by_id = {ka.id: ka.name for ka in reversed(knowledge_areas)}
    counts: dict[str, int] = {ka.name: 0 for ka in knowledge_areas}

    for member in members:
        member_areas: set[str] = set()
        for a in member.skills:
            if a.skill is None or a.skill.knowledge_area_id not in areas_by_id:
                continue
            member_areas.add(areas_by_id[a.skill.knowledge_area_id])
        for name in member_areas:
            counts[name] += 1

    rows = [
        AreaTalent(name=name, count=n, percentage=_percent(n, len(members)))
        for name, n in counts.items()
    ]
    return sorted(rows, key=lambda r: r.count)[:limit]


def strategic_skill_coverage(members: list[Member]) -> list[StrategicSkillCoverage]:
    """Coverage of strategic-priority skills, least covered first.

    Keyed by skill name; a name is strategic when any assignment's skill
    record carries ``strategic_priority``.
    """
    strategic: dict[str, None] = {}
    coverage: dict[str, int] = {}
    for member in members:
        for a in member.skills:
            if a.skill is None:
                continue
            if a.skill.strategic_priority:
                strategic.setdefault(a.skill.name, None)
            coverage[a.skill.name] = coverage.get(a.skill.name, 0) + 1

    rows = [
        StrategicSkillCoverage(
            skill_name=name,
            coverage=coverage.get(name, 0),
            percentage=_percent(coverage.get(name, 0), len(members)),
        )
        for name in strategic
    ]
    return sorted(rows, key=lambda r: r.coverage)
