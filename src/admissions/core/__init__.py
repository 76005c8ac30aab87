"""Shared infrastructure: structured logging and the error hierarchy."""

from admissions.core.errors import (
    AdmissionsError,
    ApplicantNotFoundError,
    ConfigLoadError,
    ConfigValidationError,
    NoActiveDraftError,
    RosterLoadError,
)
from admissions.core.logging import configure_logging, get_logger, set_session_id

__all__ = [
    "AdmissionsError",
    "ApplicantNotFoundError",
    "ConfigLoadError",
    "ConfigValidationError",
    "NoActiveDraftError",
    "RosterLoadError",
    "configure_logging",
    "get_logger",
    "set_session_id",
]
