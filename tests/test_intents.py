"""Tests for keyword intent matching."""

import pytest

from admissions.engine.intents import IntentFlags, interpret_query


def test_missing_financial_query():
    """Only the missing and financial flags fire."""
    flags = interpret_query("Who is missing financial documents?")

    assert flags == IntentFlags(wants_missing=True, wants_financial=True)


def test_accepted_students_query():
    """A status word selects the status-list intent."""
    flags = interpret_query("list accepted students")

    assert flags.wants_status_list is True
    assert flags.active() == ["wants_status_list"]


def test_flags_are_independent():
    """Several intents can be set by one query."""
    flags = interpret_query("Update status and show priority deadlines")

    assert flags.wants_update_status is True
    assert flags.wants_priority is True


def test_matching_is_case_insensitive():
    """Upper-case queries match."""
    assert interpret_query("URGENT REMINDER").active() == ["wants_priority", "wants_email"]


@pytest.mark.parametrize(
    ("query", "flag"),
    [
        ("incomplete applications", "wants_missing"),
        ("pending items", "wants_missing"),
        ("application fee", "wants_financial"),
        ("income proof", "wants_financial"),
        ("what is due soon", "wants_priority"),
        ("send a draft", "wants_email"),
        ("email them", "wants_email"),
        ("who is waitlisted", "wants_status_list"),
        ("show application status", "wants_status_list"),
        ("mark reviewed", "wants_update_status"),
        ("set status please", "wants_update_status"),
    ],
)
def test_trigger_keywords(query: str, flag: str):
    """Each trigger keyword sets its flag."""
    assert getattr(interpret_query(query), flag) is True


def test_unrelated_query_sets_nothing():
    """Small talk matches no intent."""
    assert interpret_query("hello there").active() == []


def test_substring_matches_inside_words():
    """Triggers are substrings, not whole words."""
    assert interpret_query("any feedback?").wants_financial is True
