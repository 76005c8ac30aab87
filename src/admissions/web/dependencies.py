"""FastAPI dependency injection helpers.

The session is created during app construction or lifespan and stored on
app.state; route handlers receive it through Depends().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request

from admissions.core.logging import set_session_id

if TYPE_CHECKING:
    from admissions.engine.session import AdmissionsSession


def get_session(request: Request) -> AdmissionsSession:
    """Get the shared AdmissionsSession from app state.

    Also binds the session id for log entries written while handling the
    request; context set during startup does not reach request tasks.
    """
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Session not initialized")
    set_session_id(session.session_id)
    return session
