"""Applicant roster: records, row normalization and spreadsheet loading."""

from admissions.roster.loader import load_roster_rows
from admissions.roster.models import (
    DEFAULT_STAGE,
    UNKNOWN_EMAIL,
    Applicant,
    ChatMessage,
    ChatRole,
    EmailDraft,
    Urgency,
)
from admissions.roster.normalizer import normalize_row, normalize_rows

__all__ = [
    "DEFAULT_STAGE",
    "UNKNOWN_EMAIL",
    "Applicant",
    "ChatMessage",
    "ChatRole",
    "EmailDraft",
    "Urgency",
    "load_roster_rows",
    "normalize_row",
    "normalize_rows",
]
