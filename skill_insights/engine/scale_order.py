"""Scale ranking — turn level labels into comparable integer ranks.

All functions are *pure*.  Unknown or unparseable labels rank 0, the
same as the lowest level, so bad data never raises here.
"""

from __future__ import annotations

import math
import re

from skill_insights.models import Scale

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (12.5 → 13)."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Ranks
# ---------------------------------------------------------------------------
def _parse_numeric(label: str) -> int:
    match = _LEADING_INT.match(label)
    return int(match.group(1)) if match else 0


def resolve_rank(scale: Scale, label: str) -> int:
    """Return the rank of *label* on *scale*, or 0 if it is not recognised."""
    if scale.kind == "numeric":
        return _parse_numeric(label)
    for lv in scale.levels:
        if lv.value == label:
            return lv.order
    return 0


def compare(scale: Scale, a: str, b: str) -> int:
    """Positive if *a* outranks *b*, negative if below, 0 if equal."""
    return resolve_rank(scale, a) - resolve_rank(scale, b)


def is_higher_level(scale: Scale, a: str, b: str) -> bool:
    return compare(scale, a, b) > 0


# ---------------------------------------------------------------------------
# Catalog ordering
# ---------------------------------------------------------------------------
def sorted_levels(scale: Scale) -> list[str]:
    """Catalog labels ascending by rank; equal ranks keep catalog order."""
    return sorted(scale.labels(), key=lambda label: resolve_rank(scale, label))


def highest_level(scale: Scale) -> str:
    levels = sorted_levels(scale)
    return levels[-1] if levels else ""


def lowest_level(scale: Scale) -> str:
    levels = sorted_levels(scale)
    return levels[0] if levels else ""


def max_rank(scale: Scale) -> int:
    """Highest rank in the catalog (0 for an empty catalog)."""
    return max((resolve_rank(scale, label) for label in scale.labels()), default=0)


def next_higher_level(scale: Scale, current: str) -> str | None:
    """Label just above *current*, or ``None`` at the top or if unknown."""
    levels = sorted_levels(scale)
    if current not in levels:
        return None
    idx = levels.index(current)
    if idx == len(levels) - 1:
        return None
    return levels[idx + 1]


def percentile_position(scale: Scale, label: str) -> int:
    """Position of *label* along the sorted catalog, 0–100."""
    levels = sorted_levels(scale)
    if len(levels) <= 1 or label not in levels:
        return 0
    return round_half_up(levels.index(label) / (len(levels) - 1) * 100)
