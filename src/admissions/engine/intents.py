"""Keyword intent matching for free-text roster queries.

Each flag is tested independently against the lower-cased query, so several
can be true at once. Resolving overlaps is the response planner's job.
"""

from __future__ import annotations

from dataclasses import dataclass

import regex

# Timeout in seconds for matching user-supplied query text
REGEX_TIMEOUT = 0.5

# Substring alternations, matched anywhere in the lower-cased query
INTENT_PATTERNS: dict[str, regex.Pattern[str]] = {
    "wants_missing": regex.compile(r"missing|incomplete|pending"),
    "wants_financial": regex.compile(r"financial|fee|income"),
    "wants_priority": regex.compile(r"priority|urgent|deadline|due soon"),
    "wants_email": regex.compile(r"email|draft|reminder"),
    "wants_status_list": regex.compile(
        r"under review|waitlisted|rejected|accepted|application status"
    ),
    "wants_update_status": regex.compile(r"update status|mark reviewed|set status"),
}


@dataclass(frozen=True, slots=True)
class IntentFlags:
    """Boolean intents detected in a query."""

    wants_missing: bool = False
    wants_financial: bool = False
    wants_priority: bool = False
    wants_email: bool = False
    wants_status_list: bool = False
    wants_update_status: bool = False

    def active(self) -> list[str]:
        """Names of the flags that are set, in declaration order."""
        return [name for name in INTENT_PATTERNS if getattr(self, name)]


def _matches(pattern: regex.Pattern[str], text: str) -> bool:
    try:
        return pattern.search(text, timeout=REGEX_TIMEOUT) is not None
    except TimeoutError:
        # Treat a runaway match as no match
        return False


def interpret_query(query: str) -> IntentFlags:
    """Map a free-text query to intent flags."""
    q = query.lower()
    return IntentFlags(
        **{name: _matches(pattern, q) for name, pattern in INTENT_PATTERNS.items()}
    )
