"""Reminder email drafting.

Drafting is pure: it renders a subject/body for one applicant and touches
no state. Sending is modeled by the session's approve step.
"""

from __future__ import annotations

from datetime import datetime

from admissions.engine.classifier import (
    URGENT_WITHIN_DAYS,
    days_remaining,
    format_deadline,
)
from admissions.roster.models import Applicant, EmailDraft

REMINDER_SUBJECT = "Reminder: Missing Documents for Your Application"
SIGNATURE = "Best,\nAdmissions Office"


def draft_reminder_email(
    applicant: Applicant,
    now: datetime,
    urgent_within_days: int = URGENT_WITHIN_DAYS,
    reminder_subject: str = REMINDER_SUBJECT,
    signature: str = SIGNATURE,
) -> EmailDraft:
    """Render the missing-documents reminder for one applicant.

    Deadlines within ``urgent_within_days`` (by whole days remaining) get
    the URGENT subject and a body naming the days left.
    """
    days_left = days_remaining(applicant.deadline, now)
    urgent = days_left <= urgent_within_days

    if urgent:
        subject = f"URGENT: Missing Documents - Deadline {format_deadline(applicant.deadline)}"
        request = (
            f"Please submit missing documents within {days_left} days "
            "to meet the application deadline."
        )
    else:
        subject = reminder_subject
        request = "Please submit missing documents to complete your application."

    bullets = "\n".join(f"- {doc}" for doc in applicant.missing_documents)
    body = f"Dear {applicant.first_name},\n\n{request}\n\n{bullets}\n\n{signature}"

    return EmailDraft(
        applicant_id=applicant.id,
        to=applicant.email,
        subject=subject,
        body=body,
    )
