"""HTTP API for the admissions assistant.

Exposes the session operations (roster, chat queries, status updates and the
reminder draft workflow) as JSON endpoints for a dashboard frontend.
"""

from admissions.web.app import create_app

__all__ = ["create_app"]
