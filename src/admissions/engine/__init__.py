"""Query interpretation, urgency classification and reminder drafting.

- Classifier: urgency tier and days remaining from a deadline
- Intent matcher: keyword flags from a free-text query
- Response planner: priority chain of reply strategies
- Drafter: reminder email subject/body
- Session: roster, chat log and draft workflow
"""

from admissions.engine.classifier import (
    classify_urgency,
    days_remaining,
    format_deadline,
)
from admissions.engine.drafter import draft_reminder_email
from admissions.engine.intents import IntentFlags, interpret_query
from admissions.engine.planner import HELP_TEXT, ResponsePlanner, priority_applicants
from admissions.engine.session import AdmissionsSession, ApplicantCard

__all__ = [
    # Classifier
    "classify_urgency",
    "days_remaining",
    "format_deadline",
    # Drafter
    "draft_reminder_email",
    # Intents
    "IntentFlags",
    "interpret_query",
    # Planner
    "HELP_TEXT",
    "ResponsePlanner",
    "priority_applicants",
    # Session
    "AdmissionsSession",
    "ApplicantCard",
]
