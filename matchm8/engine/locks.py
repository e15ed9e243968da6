"""
Lock engine - decides, as of "now", which fixtures still accept predictions.

Only reports state. Rejecting a write for a locked fixture is the job of
the submission path (PredictionService).
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Union

from matchm8.engine.normalization import normalize_config, to_utc
from matchm8.models import DeadlineMode, Fixture, FixtureLock, LeagueConfig, LockStatus


def lock_instant(kickoff: Optional[datetime], config: LeagueConfig) -> Optional[datetime]:
    """kickoff - offset, in UTC. None for fixtures without a kickoff."""
    if kickoff is None:
        return None
    kickoff = to_utc(kickoff, config.timezone)
    try:
        return kickoff - timedelta(minutes=config.lock_offset_minutes)
    except OverflowError:
        # offset reaches past year 1: locked since forever
        return datetime.min.replace(tzinfo=timezone.utc)


def compute_lock_status(
    fixtures: Iterable[Fixture],
    config: Union[LeagueConfig, Mapping, None] = None,
    now: Optional[datetime] = None
) -> LockStatus:
    """
    Lock status for one week.

    - Per fixture: locked when now >= kickoff - offset (the boundary instant
      counts as locked). No kickoff means it never locks.
    - first_kickoff: the whole week locks at the earliest fixture lock instant.
    - per_match: no week-level flag (week_locked is None).

    Malformed config falls back to defaults; never raises.
    """
    config = normalize_config(config)
    now = to_utc(now, config.timezone) if now else datetime.now(timezone.utc)

    locks: dict[str, FixtureLock] = {}
    kickoffs: list[datetime] = []
    lock_instants: list[datetime] = []

    for fixture in fixtures:
        kickoff = to_utc(fixture.kickoff, config.timezone) if fixture.kickoff else None
        lock_at = lock_instant(kickoff, config)

        locks[fixture.id] = FixtureLock(
            locked=lock_at is not None and now >= lock_at,
            kickoff=kickoff,
            lock_at=lock_at,
        )

        if kickoff is not None:
            kickoffs.append(kickoff)
            lock_instants.append(lock_at)

    week_lock_at = min(lock_instants) if lock_instants else None

    week_locked = None
    if config.deadline_mode == DeadlineMode.FIRST_KICKOFF:
        week_locked = week_lock_at is not None and now >= week_lock_at

    return LockStatus(
        mode=config.deadline_mode,
        week_locked=week_locked,
        week_lock_at=week_lock_at,
        first_kickoff_at=min(kickoffs) if kickoffs else None,
        fixtures=locks,
    )
