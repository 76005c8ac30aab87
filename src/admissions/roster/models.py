"""Roster data records.

Applicant rows are created once per ingestion and only change through the
status-update operation. Urgency is never stored here: it is derived from
``deadline`` and the current time by admissions.engine.classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Urgency = Literal["high", "medium"]
ChatRole = Literal["user", "agent", "system"]

UNKNOWN_EMAIL = "unknown@email.com"
DEFAULT_STAGE = "Application in Progress"


@dataclass
class Applicant:
    """One normalized roster entry."""

    id: int
    name: str
    deadline: datetime
    email: str = UNKNOWN_EMAIL
    stage: str = DEFAULT_STAGE
    missing_documents: list[str] = field(default_factory=list)

    @property
    def first_name(self) -> str:
        """First whitespace-delimited token of the name."""
        parts = self.name.split()
        return parts[0] if parts else self.name


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One turn in the append-only chat log."""

    role: ChatRole
    text: str
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True, slots=True)
class EmailDraft:
    """Unsent reminder email tied to one applicant."""

    applicant_id: int
    to: str
    subject: str
    body: str
