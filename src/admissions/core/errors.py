"""Custom exception types for the admissions assistant.

Error messages should say what failed, where, and how to fix it. The query
path (normalizer, intent matcher, response planner) never raises; these
exceptions belong to the outer boundaries: configuration, roster loading,
and the draft/approve workflow.
"""


class AdmissionsError(Exception):
    """Base exception for all admissions assistant errors."""

    pass


class ConfigLoadError(AdmissionsError):
    """Raised when config.yaml cannot be loaded (file not found, YAML parse error)."""

    pass


class ConfigValidationError(AdmissionsError):
    """Raised when config.yaml fails Pydantic validation.

    Includes specific field errors with actionable messages.
    """

    pass


class RosterLoadError(AdmissionsError):
    """Raised when the applicant roster file cannot be read or parsed.

    Attributes:
        path: The roster file that failed to load (if known)
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ApplicantNotFoundError(AdmissionsError):
    """Raised when an operation names an applicant id that is not in the roster.

    Attributes:
        applicant_id: The id that was requested
    """

    def __init__(self, applicant_id: int):
        super().__init__(f"No applicant with id {applicant_id} in the current roster")
        self.applicant_id = applicant_id


class NoActiveDraftError(AdmissionsError):
    """Raised when approving or editing while no reminder draft is held."""

    pass
