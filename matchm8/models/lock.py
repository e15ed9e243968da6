from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from .config import DeadlineMode


class FixtureLock(BaseModel):
    """Estado de bloqueo de un partido"""

    locked: bool
    kickoff: Optional[datetime] = None
    lock_at: Optional[datetime] = None  # kickoff - offset


class LockStatus(BaseModel):
    """
    Estado de bloqueo de una jornada.

    week_locked solo existe en modo first_kickoff; en per_match es None
    y hay que mirar cada partido en `fixtures`.
    """

    mode: DeadlineMode
    week_locked: Optional[bool] = None
    week_lock_at: Optional[datetime] = None
    first_kickoff_at: Optional[datetime] = None

    fixtures: dict[str, FixtureLock] = {}

    @property
    def locked_ids(self) -> list[str]:
        return [fixture_id for fixture_id, lock in self.fixtures.items() if lock.locked]

    def accepts(self, fixture_id: str) -> bool:
        """True si todavía se puede escribir una predicción para ese partido"""
        if self.mode == DeadlineMode.FIRST_KICKOFF:
            return not self.week_locked
        lock = self.fixtures.get(fixture_id)
        return lock is None or not lock.locked
