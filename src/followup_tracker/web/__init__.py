"""Web application entry point for the follow-up tracker.

Run with ``uvicorn --factory followup_tracker.web:create_app``.
"""

from .app import create_app

__all__ = ["create_app"]
