"""Pydantic configuration schema for the admissions assistant.

Mirrors the structure of config.yaml. Every section has defaults, so an
empty file (or no file at all) yields a working configuration.

Usage:
    from admissions.config_schema import AppConfig

    config = AppConfig(**yaml_data)
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Current schema version - increment when adding new required fields
CURRENT_SCHEMA_VERSION = 1


class RosterConfig(BaseModel):
    """Where the applicant roster is loaded from."""

    path: str | None = Field(
        default=None,
        description="Roster spreadsheet (.xlsx, .xlsm or .csv) loaded on server start",
    )
    sheet: str | None = Field(
        default=None,
        description="Worksheet name; the first sheet is used when omitted",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        """Reject blank roster paths."""
        if v is not None and not v.strip():
            raise ValueError("Roster path cannot be empty (omit it instead)")
        return v


class ClassifierConfig(BaseModel):
    """Urgency classification thresholds.

    The same cutoff drives urgency tiers and the urgent email variant.
    """

    urgent_within_days: int = Field(
        default=5,
        ge=0,
        le=365,
        description="Deadlines at most this many days away are 'high' urgency",
    )
    default_deadline_days: int = Field(
        default=10,
        ge=0,
        le=3650,
        description="Deadline assigned when a row has no parseable deadline",
    )


class DraftingConfig(BaseModel):
    """Reminder email templates."""

    reminder_subject: str = Field(
        default="Reminder: Missing Documents for Your Application",
        description="Subject line for non-urgent reminders",
    )
    signature: str = Field(
        default="Best,\nAdmissions Office",
        description="Signature block appended to every reminder body",
    )


class LoggingConfig(BaseModel):
    """Structured logging options."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    json_output: bool = Field(
        default=True,
        description="JSON lines (server) instead of console rendering",
    )


class AppConfig(BaseModel):
    """Root configuration schema for the admissions assistant."""

    schema_version: int = Field(
        default=CURRENT_SCHEMA_VERSION,
        ge=1,
        description="Config schema version for migration tracking",
    )
    roster: RosterConfig = Field(default_factory=RosterConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    drafting: DraftingConfig = Field(default_factory=DraftingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
