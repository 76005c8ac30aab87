"""Pytest fixtures and configuration for admissions assistant tests.

Provides a fixed clock, sample roster rows, sessions and config files.
"""

import os
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Generator

import pytest

from admissions.config import reset_config
from admissions.config_schema import AppConfig
from admissions.engine.session import AdmissionsSession
from admissions.roster.models import Applicant

NOW = datetime(2026, 3, 2, 12, 0, 0)


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Generator[None, None, None]:
    """Reset the config singleton before each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time used by every time-dependent test."""
    return NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock returning the fixed reference time."""
    return lambda: now


@pytest.fixture
def make_applicant(now: datetime) -> Callable[..., Applicant]:
    """Factory for Applicants with a deadline N days from the reference time."""

    def _make(
        applicant_id: int,
        name: str,
        days: float = 10,
        missing: list[str] | None = None,
        stage: str = "Application in Progress",
        email: str = "student@example.edu",
    ) -> Applicant:
        return Applicant(
            id=applicant_id,
            name=name,
            email=email,
            stage=stage,
            missing_documents=list(missing or []),
            deadline=now + timedelta(days=days),
        )

    return _make


@pytest.fixture
def sample_rows(now: datetime) -> list[dict[str, Any]]:
    """Raw spreadsheet rows using the export's dotted column names."""
    return [
        {
            "personalinfo.fullname": "Maria Lopez",
            "personalinfo.contact.email": "maria@example.edu",
            "programinfo.deadline": now + timedelta(days=3),
            "application.status": "Under Review",
            "documents.missing.0": "Transcript",
            "documents.missing.1": "Financial Aid Form",
        },
        {
            "fullname": "James Chen",
            "email": "james@example.edu",
            "programinfo.deadline": now + timedelta(days=20),
            "application.status": "Accepted",
            "documents.missing.0": None,
        },
        {
            "Student Name": "Priya Nair",
            "programinfo.deadline": now + timedelta(days=8),
            "documents.missing.0": "Recommendation Letter",
        },
    ]


@pytest.fixture
def sample_config() -> AppConfig:
    """Default application config."""
    return AppConfig()


@pytest.fixture
def session(sample_config: AppConfig, clock: Callable[[], datetime]) -> AdmissionsSession:
    """Empty session on the fixed clock."""
    return AdmissionsSession(sample_config, clock=clock)


@pytest.fixture
def loaded_session(
    session: AdmissionsSession, sample_rows: list[dict[str, Any]]
) -> AdmissionsSession:
    """Session with the sample roster ingested."""
    session.ingest(sample_rows, source_name="Sheet1")
    return session


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a minimal valid config.yaml content."""
    return """
schema_version: 1

roster:
  path: "data/roster.xlsx"

classifier:
  urgent_within_days: 5
  default_deadline_days: 10

drafting:
  signature: "Regards,\\nGraduate Admissions"
"""


@pytest.fixture
def config_file(temp_config_dir: Path, sample_config_yaml: str) -> Path:
    """Create a temporary config file with valid content."""
    config_path = temp_config_dir / "config.yaml"
    config_path.write_text(sample_config_yaml)
    return config_path


@pytest.fixture
def set_config_env(config_file: Path) -> Generator[None, None, None]:
    """Set the ADMISSIONS_CONFIG_PATH environment variable."""
    old_value = os.environ.get("ADMISSIONS_CONFIG_PATH")
    os.environ["ADMISSIONS_CONFIG_PATH"] = str(config_file)
    yield
    if old_value is None:
        del os.environ["ADMISSIONS_CONFIG_PATH"]
    else:
        os.environ["ADMISSIONS_CONFIG_PATH"] = old_value
