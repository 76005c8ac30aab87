"""JSON API routes for the admissions assistant.

All routes operate on the shared AdmissionsSession. Domain errors map to
HTTP status codes: unknown applicant -> 404, no active draft -> 409.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from admissions.core.errors import ApplicantNotFoundError, NoActiveDraftError
from admissions.core.logging import get_logger
from admissions.engine.classifier import days_remaining, format_deadline
from admissions.engine.session import AdmissionsSession
from admissions.roster.models import Applicant, EmailDraft
from admissions.web.app import API_VERSION
from admissions.web.dependencies import get_session

logger = get_logger(__name__)

api_router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Pydantic models for API input validation
# ---------------------------------------------------------------------------


class ChatRequest(BaseModel):
    """A free-text question about the roster."""

    query: str = Field(min_length=1)


class StatusUpdateRequest(BaseModel):
    """New application stage for one applicant."""

    stage: str


class DraftEditRequest(BaseModel):
    """Replacement body for the active draft."""

    body: str


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def _applicant_json(session: AdmissionsSession, applicant: Applicant) -> dict[str, Any]:
    return {
        "id": applicant.id,
        "name": applicant.name,
        "email": applicant.email,
        "stage": applicant.stage,
        "missing_documents": list(applicant.missing_documents),
        "deadline": applicant.deadline.isoformat(),
        "deadline_display": format_deadline(applicant.deadline),
        "urgency": session.urgency_of(applicant),
        "days_remaining": days_remaining(applicant.deadline, session.now()),
    }


def _draft_json(draft: EmailDraft) -> dict[str, Any]:
    return {
        "applicant_id": draft.applicant_id,
        "to": draft.to,
        "subject": draft.subject,
        "body": draft.body,
    }


# ---------------------------------------------------------------------------
# Roster and chat
# ---------------------------------------------------------------------------


@api_router.get("/applicants")
async def list_applicants(session: AdmissionsSession = Depends(get_session)):
    """All applicants in roster order with derived urgency."""
    return [_applicant_json(session, a) for a in session.roster]


@api_router.get("/priority")
async def priority_dashboard(session: AdmissionsSession = Depends(get_session)):
    """Priority cards plus the dashboard counters."""
    cards = session.applicant_cards()
    return {
        "emails_sent": session.emails_sent,
        "priority_alerts": len(cards),
        "applicants": [
            {
                "id": card.applicant.id,
                "name": card.applicant.name,
                "urgency": card.urgency,
                "deadline": card.deadline_display,
                "days_left": card.days_left,
                "missing": card.missing_display,
            }
            for card in cards
        ],
    }


@api_router.post("/chat")
async def chat_endpoint(
    body: ChatRequest,
    session: AdmissionsSession = Depends(get_session),
):
    """Answer a free-text query about the roster."""
    reply = session.ask(body.query)
    if reply is None:
        raise HTTPException(status_code=422, detail="Query cannot be blank")
    return {"reply": reply}


@api_router.get("/messages")
async def list_messages(session: AdmissionsSession = Depends(get_session)):
    """The chat log, oldest first."""
    return [
        {"role": m.role, "text": m.text, "created_at": m.created_at.isoformat()}
        for m in session.messages
    ]


@api_router.post("/applicants/{applicant_id}/status")
async def update_status(
    applicant_id: int,
    body: StatusUpdateRequest,
    session: AdmissionsSession = Depends(get_session),
):
    """Set an applicant's stage; unknown ids are a no-op."""
    session.update_status(applicant_id, body.stage)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Reminder drafts
# ---------------------------------------------------------------------------


@api_router.post("/applicants/{applicant_id}/draft")
async def request_draft(
    applicant_id: int,
    session: AdmissionsSession = Depends(get_session),
):
    """Draft a reminder email and make it the active draft."""
    try:
        draft = session.request_draft(applicant_id)
    except ApplicantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return _draft_json(draft)


@api_router.put("/draft")
async def edit_draft(
    body: DraftEditRequest,
    session: AdmissionsSession = Depends(get_session),
):
    """Replace the active draft's body."""
    try:
        draft = session.edit_draft(body.body)
    except NoActiveDraftError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    return _draft_json(draft)


@api_router.post("/draft/approve")
async def approve_draft(session: AdmissionsSession = Depends(get_session)):
    """Mark the active draft as sent."""
    try:
        message = session.approve_draft()
    except NoActiveDraftError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    return {"message": message, "emails_sent": session.emails_sent}


@api_router.post("/draft/discard")
async def discard_draft(session: AdmissionsSession = Depends(get_session)):
    """Drop the active draft."""
    session.discard_draft()
    return Response(status_code=204)


@api_router.get("/health")
async def health_check(session: AdmissionsSession = Depends(get_session)):
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "applicants": len(session.roster),
        "emails_sent": session.emails_sent,
        "version": API_VERSION,
    }
