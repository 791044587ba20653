"""Skill, proficiency and engagement analytics for team dashboards."""

from .models import Client, EngagementPeriod, Member, Scale, Skill, SkillAssignment

__all__ = [
    "Client",
    "EngagementPeriod",
    "Member",
    "Scale",
    "Skill",
    "SkillAssignment",
]
