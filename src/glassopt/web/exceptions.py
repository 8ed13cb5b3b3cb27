"""API error types and their JSON responses.

Every error body has the same shape: ``error`` (summary), ``error_type``
(machine readable category) and ``details``.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from glassopt.application.config import ConfigError


class UnsupportedFormatError(Exception):
    """No exporter is registered under the requested format name."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )
        self.format_name = format_name
        self.available = available


def _error_response(status_code: int, error: str, error_type: str, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "error_type": error_type, "details": details},
    )


async def _config_error(request: Request, exc: ConfigError) -> JSONResponse:
    return _error_response(
        422, "Invalid job configuration", exc.error_type, exc.details or None
    )


async def _unsupported_format(request: Request, exc: UnsupportedFormatError) -> JSONResponse:
    return _error_response(
        400,
        str(exc),
        "unsupported_format",
        {"format": exc.format_name, "available": exc.available},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConfigError, _config_error)
    app.add_exception_handler(UnsupportedFormatError, _unsupported_format)
