"""Deadline urgency classification.

Pure functions of (deadline, now). Nothing caches the result: callers pass
the current time on every read so the same roster can be re-evaluated as
the clock moves. The days-remaining figure and the urgency tier share one
cutoff (``urgent_within_days``).
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from admissions.roster.models import Urgency

URGENT_WITHIN_DAYS = 5

_ONE_DAY_SECONDS = timedelta(days=1).total_seconds()


def classify_urgency(
    deadline: datetime,
    now: datetime,
    urgent_within_days: int = URGENT_WITHIN_DAYS,
) -> Urgency:
    """Return 'high' when the deadline is at most ``urgent_within_days`` away.

    Past deadlines are 'high' as well.
    """
    if deadline - now <= timedelta(days=urgent_within_days):
        return "high"
    return "medium"


def days_remaining(deadline: datetime, now: datetime) -> int:
    """Whole days until the deadline, rounded up (negative once it has passed)."""
    return math.ceil((deadline - now).total_seconds() / _ONE_DAY_SECONDS)


def format_deadline(deadline: datetime) -> str:
    """Short US-style date, e.g. 3/7/2026."""
    return f"{deadline.month}/{deadline.day}/{deadline.year}"
