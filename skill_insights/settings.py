"""Tunable analytics thresholds.

Defaults match the dashboards; each can be overridden through the
environment, e.g. ``SKILL_INSIGHTS_STRONG_RATIO=0.8``.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

_ENV_PREFIX = "SKILL_INSIGHTS_"

_ENV_FIELDS: dict[str, str] = {
    "STRONG_RATIO": "strong_ratio",
    "GAP_COVERAGE_PERCENT": "gap_coverage_percent",
    "GAP_AVERAGE_RANK": "gap_average_rank",
    "TOP_PERFORMERS": "top_performer_limit",
    "POOL_CLIENT_NAME": "pool_client_name",
}


class AnalyticsThresholds(BaseModel):
    """Fixed cut-offs used by the proficiency and engagement reports."""

    # share of the area's max rank a member needs to count as strong
    strong_ratio: float = Field(default=0.75, ge=0.0, le=1.0)
    # skills below this coverage percentage are gaps
    gap_coverage_percent: float = Field(default=50, ge=0, le=100)
    # skills below this average rank are gaps, whatever the scale's range
    gap_average_rank: float = Field(default=2.5, ge=0)
    top_performer_limit: int = Field(default=5, ge=0)
    pool_client_name: str = Field(default="Talent Pool", min_length=1)


DEFAULT_THRESHOLDS = AnalyticsThresholds()


def load_thresholds() -> AnalyticsThresholds:
    """Build thresholds from ``SKILL_INSIGHTS_*`` environment variables.

    Invalid overrides are logged and ignored; the default stays in place.
    """
    values: dict[str, str] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        raw = os.getenv(_ENV_PREFIX + suffix, "")
        if raw:
            values[field_name] = raw

    accepted: dict[str, str] = {}
    for field_name, raw in values.items():
        try:
            AnalyticsThresholds(**{field_name: raw})
        except ValidationError as e:
            logger.warning("Ignoring invalid %s override %r: %s", field_name, raw, e.errors()[0]["msg"])
            continue
        accepted[field_name] = raw

    if accepted:
        logger.info("Analytics thresholds overridden: %s", ", ".join(sorted(accepted)))
    return AnalyticsThresholds(**accepted)
