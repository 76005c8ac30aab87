"""Response planner: intent flags + roster -> one rendered reply.

Strategies form a strict priority chain; the first matching branch wins and
only that branch runs:

    1. update status      -> mark the first applicant 'Documents Reviewed'
    2. status list        -> names per requested status
    3. missing + financial-> applicants missing a financial document
    4. missing            -> applicants with any missing document
    5. priority           -> ranking by ascending deadline
    6. email              -> count of applicants eligible for a reminder
    7. otherwise          -> help text

Every branch degrades to a friendly message on an empty roster.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from admissions.core.logging import get_logger
from admissions.engine.classifier import URGENT_WITHIN_DAYS, classify_urgency, format_deadline
from admissions.engine.intents import IntentFlags
from admissions.roster.models import Applicant

logger = get_logger(__name__)

REVIEWED_STAGE = "Documents Reviewed"
STATUS_VOCABULARY = ("under review", "waitlisted", "rejected", "accepted")

HELP_TEXT = (
    "I can help with:\n"
    "• Missing documents\n"
    "• Deadlines and priorities\n"
    "• Reminder email drafting\n"
    "• Listing students by application status\n"
    "Try asking 'Who's missing financial documents?' or 'List accepted students'."
)

StatusUpdater = Callable[[int, str], None]


def priority_applicants(
    roster: Sequence[Applicant],
    now: datetime,
    urgent_within_days: int = URGENT_WITHIN_DAYS,
) -> list[Applicant]:
    """Applicants ranked by ascending deadline.

    Anything not 'low' urgency qualifies; the classifier never produces
    'low', so every applicant is included. Ties keep roster order.
    """
    candidates = [
        a for a in roster if classify_urgency(a.deadline, now, urgent_within_days) != "low"
    ]
    return sorted(candidates, key=lambda a: a.deadline)


def _bullets(applicants: Sequence[Applicant]) -> str:
    return "\n".join(f"• {a.name}" for a in applicants)


class ResponsePlanner:
    """Select and render the reply strategy for a query.

    The planner reads the roster it is given and never mutates it directly;
    the update-status branch goes through the injected ``update_status``
    operation.
    """

    def __init__(
        self,
        update_status: StatusUpdater,
        urgent_within_days: int = URGENT_WITHIN_DAYS,
    ) -> None:
        self._update_status = update_status
        self._urgent_within_days = urgent_within_days

    def respond(
        self,
        intents: IntentFlags,
        query: str,
        roster: Sequence[Applicant],
        now: datetime,
    ) -> str:
        """Render the reply for a query.

        Args:
            intents: Flags from interpret_query(query)
            query: The original query text
            roster: Current applicants, in ingestion order
            now: Reference time for urgency

        Returns:
            The rendered reply text
        """
        if intents.wants_update_status:
            strategy, reply = "update_status", self._update_first(roster)
        elif intents.wants_status_list:
            strategy, reply = "status_list", self._status_list(query, roster)
        elif intents.wants_missing and intents.wants_financial:
            strategy, reply = "missing_financial", self._missing_financial(roster)
        elif intents.wants_missing:
            strategy, reply = "missing", self._missing(roster)
        elif intents.wants_priority:
            strategy, reply = "priority", self._priority(roster, now)
        elif intents.wants_email:
            strategy, reply = "email", self._email_eligibility(roster)
        else:
            strategy, reply = "help", HELP_TEXT

        logger.debug(
            "response_planned",
            strategy=strategy,
            intents=intents.active(),
            roster_size=len(roster),
        )
        return reply

    def _update_first(self, roster: Sequence[Applicant]) -> str:
        if not roster:
            return "No students available to update status."
        first = roster[0]
        self._update_status(first.id, REVIEWED_STAGE)
        return f"Updated application status for {first.name} to '{REVIEWED_STAGE}'."

    def _status_list(self, query: str, roster: Sequence[Applicant]) -> str:
        q = query.lower()
        requested = [status for status in STATUS_VOCABULARY if status in q]
        if not requested:
            return "Please specify a status to filter e.g. 'accepted'."

        reply = ""
        for status in requested:
            matching = [a for a in roster if status in a.stage.lower()]
            if matching:
                reply += f"\nStudents with status '{status}':\n{_bullets(matching)}\n"
            else:
                reply += f"\nNo students found with status '{status}'.\n"
        return reply

    def _missing_financial(self, roster: Sequence[Applicant]) -> str:
        matching = [
            a
            for a in roster
            if any("financial" in doc.lower() for doc in a.missing_documents)
        ]
        if not matching:
            return "No students missing financial documents."
        return f"Students missing financial documents:\n{_bullets(matching)}"

    def _missing(self, roster: Sequence[Applicant]) -> str:
        matching = [a for a in roster if a.missing_documents]
        if not matching:
            return "All students have complete applications."
        lines = "\n".join(
            f"• {a.name} - Missing: {', '.join(a.missing_documents)}" for a in matching
        )
        return f"{len(matching)} students have missing documents:\n{lines}"

    def _priority(self, roster: Sequence[Applicant], now: datetime) -> str:
        ranked = priority_applicants(roster, now, self._urgent_within_days)
        if not ranked:
            return "No priority applicants found."
        lines = "\n".join(
            f"{rank}. {a.name} - "
            f"{classify_urgency(a.deadline, now, self._urgent_within_days).upper()} urgency "
            f"(Deadline: {format_deadline(a.deadline)})"
            for rank, a in enumerate(ranked, start=1)
        )
        return f"Priority applicants:\n{lines}"

    def _email_eligibility(self, roster: Sequence[Applicant]) -> str:
        eligible = sum(1 for a in roster if a.missing_documents)
        return f"I can draft reminder emails for {eligible} students who are missing documents."
