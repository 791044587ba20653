"""Engagement resolution — which client a member currently belongs to.

A member's periods may overlap and arrive in any order.  The resolver
never raises: missing data falls back to the talent-pool client.
"""

from __future__ import annotations

from datetime import date, datetime
import logging

from skill_insights.models import Client, EngagementPeriod, Member
from skill_insights.settings import DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)

POOL_CLIENT_NAME = DEFAULT_THRESHOLDS.pool_client_name

DEFAULT_POOL_CLIENT = Client(
    id=1,
    name=POOL_CLIENT_NAME,
    description="Internal talent pool",
    is_active=True,
)

UNKNOWN_CLIENT = "Unknown Client"


# ---------------------------------------------------------------------------
# Sentinel
# ---------------------------------------------------------------------------
def is_sentinel(client: Client, pool_name: str = POOL_CLIENT_NAME) -> bool:
    """True for the client that stands for "not engaged"."""
    return client.name == pool_name


def find_sentinel(clients: list[Client], pool_name: str = POOL_CLIENT_NAME) -> Client:
    """The named pool client, else the first client, else the built-in default."""
    if not clients:
        return DEFAULT_POOL_CLIENT
    for c in clients:
        if is_sentinel(c, pool_name):
            return c
    logger.debug("No %r client in catalog, using %r as pool", pool_name, clients[0].name)
    return clients[0]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _as_date(now: date | datetime | None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def _lookup(client_id: int, clients: list[Client]) -> Client | None:
    for c in clients:
        if c.id == client_id:
            return c
    logger.warning("Engagement references unknown client id=%s", client_id)
    return None


def _latest(periods: list[EngagementPeriod], key) -> EngagementPeriod | None:
    # max() keeps the first of equal keys, so ties go to input order
    return max(periods, key=key, default=None)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def resolve_current_client(
    periods: list[EngagementPeriod],
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> Client:
    """Resolve the client that represents a member's status at *now*.

    1. Ongoing periods (no end, or ending after *now*) outside the pool:
       the one that started last wins.
    2. Otherwise the non-pool period that ended (or started) last.
    3. Otherwise the pool client.

    A period whose client is not in the catalog falls through to the
    next rule.
    """
    if not clients:
        return DEFAULT_POOL_CLIENT

    pool = find_sentinel(clients, pool_name)
    if not periods:
        return pool

    today = _as_date(now)
    outside_pool = [p for p in periods if p.client_id != pool.id]

    ongoing = [p for p in outside_pool if p.end_date is None or p.end_date > today]
    current = _latest(ongoing, key=lambda p: p.start_date)
    if current is not None:
        client = _lookup(current.client_id, clients)
        if client is not None:
            return client

    recent = _latest(outside_pool, key=lambda p: p.end_date or p.start_date)
    if recent is not None:
        client = _lookup(recent.client_id, clients)
        if client is not None:
            return client

    return pool


def current_client_for_member(
    member: Member,
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> Client:
    return resolve_current_client(member.engagements, clients, now, pool_name)


def current_client_name(
    member: Member,
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> str:
    return current_client_for_member(member, clients, now, pool_name).name


def current_client_id(
    member: Member,
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> int:
    return current_client_for_member(member, clients, now, pool_name).id


def is_available(
    member: Member,
    clients: list[Client],
    now: date | datetime | None = None,
    pool_name: str = POOL_CLIENT_NAME,
) -> bool:
    """True when the member resolves to the talent pool."""
    current = current_client_for_member(member, clients, now, pool_name)
    return current.id == find_sentinel(clients, pool_name).id


# ---------------------------------------------------------------------------
# Catalog helpers
# ---------------------------------------------------------------------------
def client_name_for_id(client_id: int, clients: list[Client]) -> str:
    for c in clients:
        if c.id == client_id:
            return c.name
    return UNKNOWN_CLIENT


def engaged_client_ids(members: list[Member]) -> list[int]:
    """Every client id referenced by any engagement, first-seen order."""
    ids: dict[int, None] = {}
    for m in members:
        for p in m.engagements:
            ids.setdefault(p.client_id, None)
    return list(ids)


def engagement_roles(members: list[Member]) -> list[str]:
    """Distinct non-empty roles across all engagements, first-seen order."""
    roles: dict[str, None] = {}
    for m in members:
        for p in m.engagements:
            if p.role:
                roles.setdefault(p.role, None)
    return list(roles)
