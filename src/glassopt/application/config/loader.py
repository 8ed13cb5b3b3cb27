"""Loading of JSON job files.

Every failure surfaces as a ConfigError. Its ``error_type`` tells callers
what went wrong: file_not_found, permission_denied, file_read_error,
json_parse or validation. Its ``details`` carry the per-field or
per-position specifics that the CLI and the web API report back.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from glassopt.application.config.schema import JobConfiguration


class ConfigError(Exception):
    """A job file or job dictionary could not be turned into a JobConfiguration.

    Attributes:
        message: Human readable summary.
        error_type: Failure category.
        path: Job file involved, None for in-memory data.
        details: Structured specifics; ``line``/``column``/``message`` for
            JSON errors, ``path``/``message``/``value``/``error_type`` for
            schema errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_json_error(cls, error: json.JSONDecodeError, path: Path) -> "ConfigError":
        return cls(
            f"Invalid JSON in {path} at line {error.lineno}, "
            f"column {error.colno}: {error.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {"line": error.lineno, "column": error.colno, "message": error.msg}
            ],
        )

    @classmethod
    def from_validation_error(
        cls, error: PydanticValidationError, path: Path | None = None
    ) -> "ConfigError":
        details = [
            {
                "path": _format_json_path(item["loc"]),
                "message": item["msg"],
                "value": item.get("input"),
                "error_type": item["type"],
            }
            for item in error.errors()
        ]
        summary = ["Configuration validation failed:"]
        for detail in details:
            got = "" if detail["value"] is None else f" (got: {detail['value']!r})"
            summary.append(f"  - {detail['path']}: {detail['message']}{got}")
        return cls("\n".join(summary), "validation", path, details)


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location the way it reads in the job file.

    >>> _format_json_path(("pieces", 0, "quantity"))
    'pieces[0].quantity'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        )
    except OSError as e:
        raise ConfigError(
            f"Could not read config file {path}: {e}", "file_read_error", path
        )


def _validate(data: Any, path: Path | None = None) -> JobConfiguration:
    try:
        return JobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError.from_validation_error(e, path)


def load_config(path: Path) -> JobConfiguration:
    """Read, parse and validate a JSON job file.

    Raises:
        ConfigError: On any failure; see ``error_type`` for the category.
    """
    text = _read_text(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError.from_json_error(e, path)
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> JobConfiguration:
    """Validate an already parsed job, e.g. a web request body."""
    return _validate(data)
