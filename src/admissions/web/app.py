"""FastAPI application for the admissions assistant.

Usage:
    from admissions.web.app import create_app

    app = create_app(roster_path=Path("roster.xlsx"))
    # Run with: uvicorn.run(app, host="127.0.0.1", port=8000)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI

from admissions.core.logging import get_logger

if TYPE_CHECKING:
    from admissions.engine.session import AdmissionsSession

logger = get_logger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session and load the roster on startup.

    A session supplied to create_app() is kept as-is. Config or roster
    failures never stop the server: they fall back to defaults or an empty
    roster with the error in the chat log.
    """
    from admissions.config import get_config
    from admissions.config_schema import AppConfig
    from admissions.core.errors import ConfigLoadError, ConfigValidationError
    from admissions.engine.session import AdmissionsSession

    if getattr(app.state, "session", None) is None:
        try:
            config = get_config()
        except (ConfigLoadError, ConfigValidationError) as e:
            logger.error("config_load_failed", error=str(e))
            config = AppConfig()

        session = AdmissionsSession(config)
        roster_path = app.state.roster_path or (
            Path(config.roster.path) if config.roster.path else None
        )
        if roster_path is not None:
            session.ingest_file(roster_path, sheet=config.roster.sheet)
        else:
            logger.info("no_roster_configured")
        app.state.session = session

    yield


def create_app(
    session: AdmissionsSession | None = None,
    roster_path: Path | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session: Pre-built session (tests); otherwise created on startup
        roster_path: Roster to load on startup, overriding config

    Returns:
        Configured FastAPI instance
    """
    from admissions.web.routes import api_router

    app = FastAPI(
        title="EDMO Admissions Assistant",
        description="Applicant roster triage and reminder drafting",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.session = session
    app.state.roster_path = roster_path

    app.include_router(api_router)

    return app
