"""REST API for planning, validating and exporting cut jobs.

Run with ``uvicorn glassopt.web:app``.
"""

from glassopt.web.app import app, create_app

__all__ = ["app", "create_app"]
