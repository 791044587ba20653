"""Availability analytics — who is in the talent pool and who works together.

All functions are *pure*.  Each member's client is resolved once per call
with :func:`resolve_current_client`.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from skill_insights.engine.engagement import POOL_CLIENT_NAME, find_sentinel, resolve_current_client
from skill_insights.engine.scale_order import round_half_up
from skill_insights.models import Client, Member, Skill


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class AvailabilitySummary(BaseModel):
    total_members: int = Field(ge=0)
    available: int = Field(ge=0)
    engaged: int = Field(ge=0)
    utilisation_percentage: int = Field(ge=0, le=100, default=0)


class SkillAvailability(BaseModel):
    """Holders of a skill and how many of them sit in the pool."""

    skill_name: str
    total: int = Field(ge=0)
    available: int = Field(ge=0)


class CollaborationOpportunity(BaseModel):
    member_a: str
    member_b: str
    client: str
    common_skills: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _resolve_all(
    members: list[Member],
    clients: list[Client],
    now: date | datetime | None,
    pool_name: str,
) -> list[tuple[Member, Client, bool]]:
    pool = find_sentinel(clients, pool_name)
    rows = []
    for m in members:
        current = resolve_current_client(m.engagements, clients, now, pool_name)
        rows.append((m, current, current.id == pool.id))
    return rows


def _skill_names(member: Member) -> list[str]:
    names: dict[str, None] = {}
    for a in member.skills:
        if a.skill is not None:
            names.setdefault(a.skill.name, None)
    return list(names)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def availability_summary(
    members: list[Member],
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> AvailabilitySummary:
    """Pool vs engaged head-count and the resulting utilisation."""
    resolved = _resolve_all(members, clients, now, pool_name)
    available = sum(1 for _, _, in_pool in resolved if in_pool)
    total = len(members)
    engaged = total - available
    return AvailabilitySummary(
        total_members=total,
        available=available,
        engaged=engaged,
        utilisation_percentage=round_half_up(engaged / total * 100) if total else 0,
    )


def available_talent_by_skill(
    skills: list[Skill],
    members: list[Member],
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> list[SkillAvailability]:
    """Per catalog skill name: holders and available holders, most available first."""
    tally: dict[str, list[int]] = {s.name: [0, 0] for s in skills}

    for member, _, in_pool in _resolve_all(members, clients, now, pool_name):
        for a in member.skills:
            if a.skill is None or a.skill.name not in tally:
                continue
            counts = tally[a.skill.name]
            counts[0] += 1
            if in_pool:
                counts[1] += 1

    rows = [
        SkillAvailability(skill_name=name, total=total, available=avail)
        for name, (total, avail) in tally.items()
        if total > 0
    ]
    return sorted(rows, key=lambda r: r.available, reverse=True)


def client_groups(
    members: list[Member],
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> dict[str, list[Member]]:
    """Members keyed by the name of their current client."""
    groups: dict[str, list[Member]] = {}
    for member, current, _ in _resolve_all(members, clients, now, pool_name):
        groups.setdefault(current.name, []).append(member)
    return groups


def collaboration_opportunities(
    members: list[Member],
    clients: list[Client],
    now: date | datetime | None = None,
    limit: int = 20,
    pool_name: str = POOL_CLIENT_NAME,
) -> list[CollaborationOpportunity]:
    """Pairs on the same real client who share at least one skill."""
    pool = find_sentinel(clients, pool_name)
    opportunities: list[CollaborationOpportunity] = []

    for client_name, group in client_groups(members, clients, now, pool_name).items():
        if client_name == pool.name or len(group) < 2:
            continue
        skill_sets = [(m, _skill_names(m)) for m in group]
        for i, (ma, sa) in enumerate(skill_sets):
            for mb, sb in skill_sets[i + 1:]:
                common = [s for s in sa if s in sb]
                if not common:
                    continue
                opportunities.append(CollaborationOpportunity(
                    member_a=ma.name,
                    member_b=mb.name,
                    client=client_name,
                    common_skills=common[:3],
                ))

    return opportunities[:limit]
