"""Tests for AdmissionsSession: ingestion, queries, status updates and drafts."""

import copy
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from admissions.core.errors import ApplicantNotFoundError, NoActiveDraftError
from admissions.engine.session import WELCOME_PROMPT, AdmissionsSession

# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


def test_ingest_builds_roster_and_announces(
    session: AdmissionsSession, sample_rows: list[dict[str, Any]]
):
    applicants = session.ingest(sample_rows, source_name="Sheet1")

    assert [a.name for a in applicants] == ["Maria Lopez", "James Chen", "Priya Nair"]
    assert [a.id for a in session.roster] == [1, 2, 3]
    assert [(m.role, m.text) for m in session.messages] == [
        ("agent", 'Loaded 3 students from "Sheet1".'),
        ("agent", WELCOME_PROMPT),
    ]


def test_ingest_replaces_previous_roster(loaded_session: AdmissionsSession):
    """Ingestion is a bulk replace, not a merge."""
    loaded_session.ingest([{"fullname": "Only One"}], source_name="Sheet2")

    assert [a.name for a in loaded_session.roster] == ["Only One"]
    assert loaded_session.messages[-2].text == 'Loaded 1 students from "Sheet2".'


def test_ingest_uses_session_clock_for_default_deadline(
    session: AdmissionsSession, now: datetime
):
    session.ingest([{"fullname": "No Deadline"}], source_name="Sheet1")

    assert session.roster[0].deadline == now + timedelta(days=10)


def test_load_failure_reported_as_message(loaded_session: AdmissionsSession):
    """A failed load empties the roster and leaves one message."""
    loaded_session.report_load_failure("workbook is corrupt")

    assert loaded_session.roster == ()
    assert loaded_session.messages[-1].role == "agent"
    assert loaded_session.messages[-1].text == "Error loading data: workbook is corrupt"


def test_ingest_file_missing_path(session: AdmissionsSession, tmp_path: Path):
    """Missing files are reported, not raised."""
    assert session.ingest_file(tmp_path / "nope.xlsx") is False

    assert session.roster == ()
    assert session.messages[-1].text.startswith("Error loading data: Roster file not found")


def test_ingest_file_csv(session: AdmissionsSession, tmp_path: Path):
    path = tmp_path / "roster.csv"
    path.write_text("fullname,documents.missing.0\nAna Silva,Transcript\nBen Ode,\n")

    assert session.ingest_file(path) is True
    assert [a.missing_documents for a in session.roster] == [["Transcript"], []]
    assert session.messages[-2].text == 'Loaded 2 students from "roster.csv".'


@pytest.mark.parametrize(
    "query",
    ["missing documents", "priority", "accepted", "financial missing", "email", "update status"],
)
def test_queries_on_empty_roster_never_raise(session: AdmissionsSession, query: str):
    session.report_load_failure("boom")

    assert session.ask(query)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def test_ask_logs_both_turns(loaded_session: AdmissionsSession):
    reply = loaded_session.ask("Who is missing financial documents?")

    assert reply == "Students missing financial documents:\n• Maria Lopez"
    assert [(m.role, m.text) for m in loaded_session.messages[-2:]] == [
        ("user", "Who is missing financial documents?"),
        ("agent", reply),
    ]


def test_blank_query_is_ignored(loaded_session: AdmissionsSession):
    before = len(loaded_session.messages)

    assert loaded_session.ask("   ") is None
    assert len(loaded_session.messages) == before


def test_update_status_query_applies_to_first_applicant(loaded_session: AdmissionsSession):
    reply = loaded_session.ask("mark reviewed")

    first = loaded_session.roster[0]
    assert reply == "Updated application status for Maria Lopez to 'Documents Reviewed'."
    assert first.stage == "Documents Reviewed"
    assert first.missing_documents == []
    roles = [m.role for m in loaded_session.messages[-3:]]
    assert roles == ["user", "system", "agent"]


def test_priority_query_end_to_end(session: AdmissionsSession, now: datetime):
    """Deadlines of 2, 8 and 40 days: all three are listed, earliest first."""
    rows = [
        {"fullname": "Forty Days", "programinfo.deadline": now + timedelta(days=40),
         "documents.missing.0": "Essay"},
        {"fullname": "Two Days", "programinfo.deadline": now + timedelta(days=2),
         "documents.missing.0": "Transcript"},
        {"fullname": "Eight Days", "programinfo.deadline": now + timedelta(days=8),
         "documents.missing.0": "Passport"},
    ]
    session.ingest(rows, source_name="Sheet1")

    reply = session.ask("priority applicants")

    assert reply == (
        "Priority applicants:\n"
        "1. Two Days - HIGH urgency (Deadline: 3/4/2026)\n"
        "2. Eight Days - MEDIUM urgency (Deadline: 3/10/2026)\n"
        "3. Forty Days - MEDIUM urgency (Deadline: 4/11/2026)"
    )


def test_urgency_is_recomputed_as_clock_moves(sample_rows: list[dict[str, Any]], now: datetime):
    """Urgency is derived on read, never stored."""
    current = {"now": now}
    session = AdmissionsSession(clock=lambda: current["now"])
    session.ingest(sample_rows, source_name="Sheet1")
    priya = session.get_applicant(3)

    assert session.urgency_of(priya) == "medium"
    current["now"] = now + timedelta(days=4)
    assert session.urgency_of(priya) == "high"


# ---------------------------------------------------------------------------
# Status updates
# ---------------------------------------------------------------------------


def test_update_status_changes_only_target(loaded_session: AdmissionsSession):
    others_before = copy.deepcopy(loaded_session.roster[1:])

    loaded_session.update_status(1, "Accepted")

    target = loaded_session.get_applicant(1)
    assert target.stage == "Accepted"
    assert target.missing_documents == []
    assert loaded_session.roster[1:] == others_before
    assert loaded_session.messages[-1].role == "system"
    assert loaded_session.messages[-1].text == (
        "Application status for student #1 updated to 'Accepted'."
    )


def test_update_status_accepts_any_stage(loaded_session: AdmissionsSession):
    loaded_session.update_status(2, "")

    assert loaded_session.get_applicant(2).stage == ""


def test_update_status_unknown_id_is_noop(loaded_session: AdmissionsSession):
    roster_before = copy.deepcopy(loaded_session.roster)
    messages_before = len(loaded_session.messages)

    loaded_session.update_status(99, "Accepted")

    assert loaded_session.roster == roster_before
    assert len(loaded_session.messages) == messages_before


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


def test_draft_approve_flow(loaded_session: AdmissionsSession):
    draft = loaded_session.request_draft(1)

    assert draft.subject.startswith("URGENT:")
    assert loaded_session.draft == draft
    assert loaded_session.selected_applicant.name == "Maria Lopez"

    confirmation = loaded_session.approve_draft()

    assert confirmation == "✅ Reminder email sent to Maria Lopez"
    assert loaded_session.emails_sent == 1
    assert loaded_session.draft is None
    assert loaded_session.selected_applicant is None
    assert loaded_session.messages[-1].role == "system"
    assert loaded_session.messages[-1].text == confirmation


def test_request_draft_does_not_change_roster(loaded_session: AdmissionsSession):
    before = copy.deepcopy(loaded_session.roster)

    loaded_session.request_draft(2)

    assert loaded_session.roster == before
    assert loaded_session.emails_sent == 0


def test_discard_draft(loaded_session: AdmissionsSession):
    loaded_session.request_draft(3)

    loaded_session.discard_draft()

    assert loaded_session.draft is None
    assert loaded_session.emails_sent == 0
    with pytest.raises(NoActiveDraftError):
        loaded_session.approve_draft()


def test_edit_draft_replaces_body(loaded_session: AdmissionsSession):
    original = loaded_session.request_draft(3)

    edited = loaded_session.edit_draft("Hi Priya, quick reminder.")

    assert edited.body == "Hi Priya, quick reminder."
    assert edited.subject == original.subject
    assert loaded_session.draft == edited


def test_draft_errors(loaded_session: AdmissionsSession):
    with pytest.raises(ApplicantNotFoundError) as exc_info:
        loaded_session.request_draft(42)
    assert exc_info.value.applicant_id == 42

    with pytest.raises(NoActiveDraftError):
        loaded_session.edit_draft("text")
    with pytest.raises(NoActiveDraftError):
        loaded_session.approve_draft()


def test_applicant_cards(loaded_session: AdmissionsSession):
    cards = loaded_session.applicant_cards()

    assert [c.applicant.name for c in cards] == ["Maria Lopez", "Priya Nair", "James Chen"]
    maria = cards[0]
    assert maria.urgency == "high"
    assert maria.deadline_display == "3/5/2026"
    assert maria.days_left == 3
    assert maria.missing_display == "Transcript, Financial Aid Form"
    assert cards[2].missing_display == "None"


def test_session_uses_configured_cutoff(
    sample_rows: list[dict[str, Any]], clock: Callable[[], datetime]
):
    from admissions.config_schema import AppConfig

    config = AppConfig(classifier={"urgent_within_days": 10})
    session = AdmissionsSession(config, clock=clock)
    session.ingest(sample_rows, source_name="Sheet1")

    assert session.urgency_of(session.get_applicant(3)) == "high"
    assert session.request_draft(3).subject.startswith("URGENT:")
