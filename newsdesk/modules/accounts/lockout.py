"""Failed-login lockout policy.

Per account state machine::

    Unlocked(n) --fail, n + 1 < max--> Unlocked(n + 1)
    Unlocked(n) --fail, n + 1 >= max--> Locked(until = now + lock_duration)
    Locked      --lock_until passes, fail--> Unlocked(1)
    *           --success--> Unlocked(0)

The lock is derived from ``lock_until`` when it is read and is never expired
by a background job. Counter changes are applied by the repository as one
conditional UPDATE per event.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from newsdesk.core.config import SecuritySettings

from .models import Account


@dataclass(frozen=True, slots=True)
class LockoutPolicy:
    max_attempts: int = 5
    lock_duration: timedelta = timedelta(hours=2)

    @classmethod
    def from_settings(cls, security: SecuritySettings) -> "LockoutPolicy":
        return cls(
            max_attempts=security.max_login_attempts,
            lock_duration=timedelta(minutes=security.lockout_minutes),
        )

    def is_locked(self, account: Account, now: datetime) -> bool:
        return account.is_locked(now)

    def lock_deadline(self, now: datetime) -> datetime:
        return now + self.lock_duration
