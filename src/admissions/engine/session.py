"""Admissions session: the single owner of roster and conversation state.

One session corresponds to one open dashboard. Every action (ingest, query,
status update, draft, approve, discard) runs to completion before the next,
so no locking is needed. The roster is replaced wholesale on ingestion and
otherwise changes only through update_status().

Usage:
    from admissions.engine.session import AdmissionsSession

    session = AdmissionsSession(config)
    session.ingest(rows, source_name="Sheet1")
    reply = session.ask("Who is missing financial documents?")
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any

from admissions.config_schema import AppConfig
from admissions.core.errors import ApplicantNotFoundError, NoActiveDraftError, RosterLoadError
from admissions.core.logging import get_logger, set_session_id
from admissions.engine.classifier import classify_urgency, days_remaining, format_deadline
from admissions.engine.drafter import draft_reminder_email
from admissions.engine.intents import interpret_query
from admissions.engine.planner import ResponsePlanner, priority_applicants
from admissions.roster.loader import load_roster_rows
from admissions.roster.models import Applicant, ChatMessage, ChatRole, EmailDraft, Urgency
from admissions.roster.normalizer import normalize_rows

logger = get_logger(__name__)

Clock = Callable[[], datetime]

WELCOME_PROMPT = (
    "Ask me about missing docs, priority applicants, email drafts, or application status."
)


@dataclass(frozen=True, slots=True)
class ApplicantCard:
    """Dashboard projection of a priority applicant."""

    applicant: Applicant
    urgency: Urgency
    deadline_display: str
    days_left: int
    missing_display: str


class AdmissionsSession:
    """Roster, chat log, and reminder-draft workflow for one user session."""

    def __init__(self, config: AppConfig | None = None, clock: Clock = datetime.now) -> None:
        self._config = config or AppConfig()
        self._clock = clock
        self._roster: list[Applicant] = []
        self._messages: list[ChatMessage] = []
        self._selected: Applicant | None = None
        self._draft: EmailDraft | None = None
        self._emails_sent = 0
        self._planner = ResponsePlanner(
            update_status=self.update_status,
            urgent_within_days=self._config.classifier.urgent_within_days,
        )
        self.session_id = str(uuid.uuid4())
        set_session_id(self.session_id)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def roster(self) -> tuple[Applicant, ...]:
        return tuple(self._roster)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def emails_sent(self) -> int:
        return self._emails_sent

    @property
    def draft(self) -> EmailDraft | None:
        return self._draft

    @property
    def selected_applicant(self) -> Applicant | None:
        return self._selected

    def now(self) -> datetime:
        return self._clock()

    def get_applicant(self, applicant_id: int) -> Applicant:
        """Look up an applicant by id.

        Raises:
            ApplicantNotFoundError: If no applicant has this id
        """
        for applicant in self._roster:
            if applicant.id == applicant_id:
                return applicant
        raise ApplicantNotFoundError(applicant_id)

    def urgency_of(self, applicant: Applicant) -> Urgency:
        return classify_urgency(
            applicant.deadline, self.now(), self._config.classifier.urgent_within_days
        )

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(self, rows: Iterable[Mapping[str, Any]], source_name: str) -> list[Applicant]:
        """Replace the roster with normalized rows and announce the load."""
        self._roster = normalize_rows(
            rows,
            now=self.now(),
            default_deadline_days=self._config.classifier.default_deadline_days,
        )
        self._selected = None
        self._draft = None

        self._append("agent", f'Loaded {len(self._roster)} students from "{source_name}".')
        self._append("agent", WELCOME_PROMPT)
        logger.info("roster_ingested", source=source_name, applicants=len(self._roster))
        return list(self._roster)

    def ingest_file(self, path: Path, sheet: str | None = None) -> bool:
        """Load a roster spreadsheet into the session.

        A load failure is reported in the chat log rather than raised.

        Returns:
            True if the roster was loaded
        """
        try:
            source_name, rows = load_roster_rows(path, sheet=sheet)
        except RosterLoadError as e:
            self.report_load_failure(e)
            return False
        self.ingest(rows, source_name=source_name)
        return True

    def report_load_failure(self, error: str | Exception) -> None:
        """Record an ingestion failure; the roster is left empty."""
        self._roster = []
        self._selected = None
        self._draft = None
        self._append("agent", f"Error loading data: {error}")
        logger.warning("roster_load_failed", error=str(error))

    # ------------------------------------------------------------------
    # Queries and status updates
    # ------------------------------------------------------------------

    def ask(self, query: str) -> str | None:
        """Answer a free-text query, logging both turns.

        Blank queries are ignored and return None.
        """
        if not query.strip():
            return None

        self._append("user", query)
        intents = interpret_query(query)
        reply = self._planner.respond(intents, query, self._roster, self.now())
        self._append("agent", reply)
        logger.info("query_answered", intents=intents.active(), reply_chars=len(reply))
        return reply

    def update_status(self, applicant_id: int, new_stage: str) -> None:
        """Set an applicant's stage and clear their missing documents.

        An unknown id changes nothing.
        """
        for index, applicant in enumerate(self._roster):
            if applicant.id == applicant_id:
                self._roster[index] = replace(applicant, stage=new_stage, missing_documents=[])
                break
        else:
            logger.warning("status_update_unknown_applicant", applicant_id=applicant_id)
            return

        self._append(
            "system",
            f"Application status for student #{applicant_id} updated to '{new_stage}'.",
        )
        logger.info("status_updated", applicant_id=applicant_id, stage=new_stage)

    def priority_applicants(self) -> list[Applicant]:
        return priority_applicants(
            self._roster, self.now(), self._config.classifier.urgent_within_days
        )

    def applicant_cards(self) -> list[ApplicantCard]:
        """Priority applicants with the display fields the dashboard shows."""
        now = self.now()
        cards = []
        for applicant in self.priority_applicants():
            missing = applicant.missing_documents
            cards.append(
                ApplicantCard(
                    applicant=applicant,
                    urgency=self.urgency_of(applicant),
                    deadline_display=format_deadline(applicant.deadline),
                    days_left=days_remaining(applicant.deadline, now),
                    missing_display=", ".join(missing) if missing else "None",
                )
            )
        return cards

    # ------------------------------------------------------------------
    # Reminder drafts
    # ------------------------------------------------------------------

    def request_draft(self, applicant_id: int) -> EmailDraft:
        """Draft a reminder for an applicant and make it the active draft.

        Raises:
            ApplicantNotFoundError: If no applicant has this id
        """
        applicant = self.get_applicant(applicant_id)
        drafting = self._config.drafting
        draft = draft_reminder_email(
            applicant,
            self.now(),
            urgent_within_days=self._config.classifier.urgent_within_days,
            reminder_subject=drafting.reminder_subject,
            signature=drafting.signature,
        )
        self._selected = applicant
        self._draft = draft
        logger.info("draft_created", applicant_id=applicant_id, to=draft.to)
        return draft

    def edit_draft(self, body: str) -> EmailDraft:
        """Replace the body of the active draft.

        Raises:
            NoActiveDraftError: If no draft is active
        """
        if self._draft is None:
            raise NoActiveDraftError("No reminder draft to edit; request a draft first")
        self._draft = replace(self._draft, body=body)
        return self._draft

    def approve_draft(self) -> str:
        """Mark the active draft as sent.

        Returns:
            The confirmation message appended to the chat log

        Raises:
            NoActiveDraftError: If no draft is active
        """
        if self._draft is None or self._selected is None:
            raise NoActiveDraftError("No reminder draft to approve; request a draft first")

        confirmation = f"✅ Reminder email sent to {self._selected.name}"
        self._append("system", confirmation)
        self._emails_sent += 1
        logger.info(
            "draft_approved",
            applicant_id=self._draft.applicant_id,
            emails_sent=self._emails_sent,
        )
        self._draft = None
        self._selected = None
        return confirmation

    def discard_draft(self) -> None:
        """Drop the active draft, if any."""
        if self._draft is not None:
            logger.info("draft_discarded", applicant_id=self._draft.applicant_id)
        self._draft = None
        self._selected = None

    def _append(self, role: ChatRole, text: str) -> None:
        self._messages.append(ChatMessage(role=role, text=text, created_at=self.now()))
