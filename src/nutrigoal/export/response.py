"""JSON envelope printed by every command run with --json."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from nutrigoal.config.settings import ConfigError
from nutrigoal.data.loaders import LoaderError

ENVELOPE_VERSION = "1.0"


@dataclass
class CommandResponse:
    """Result of one CLI command in machine-readable form.

    ``data`` holds the command payload (targets, goals, a score or a
    report). ``errors`` is non-empty exactly when ``success`` is False, and
    ``error_kind`` then says whether the config, an input file or a
    command-line value was at fault.
    """

    command: str
    success: bool = True
    data: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    error_kind: Optional[str] = None  # "config", "input" or "validation"
    suggestions: list[str] = field(default_factory=list)
    summary: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "warnings": self.warnings,
            "errors": self.errors,
            "suggestions": self.suggestions,
            "human_summary": self.summary,
            "generated_at": self.created_at.isoformat(timespec="seconds"),
            "schema_version": ENVELOPE_VERSION,
        }
        if self.error_kind is not None:
            payload["error_kind"] = self.error_kind
        return payload

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def classify_error(error: Union[str, Exception]) -> str:
    """Name the kind of failure for the envelope's error_kind."""
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, (LoaderError, OSError)):
        return "input"
    return "validation"


def create_response(
    command: str,
    data: Optional[dict[str, Any]] = None,
    warnings: Optional[list[str]] = None,
    human_summary: str = "",
) -> CommandResponse:
    """Wrap a successful command result.

    Args:
        command: Command name, e.g. "score" or "config show"
        data: Command payload
        warnings: Non-fatal problems, such as meals whose macros disagree
            with their calories
        human_summary: One line for people reading the JSON

    Returns:
        CommandResponse with success=True
    """
    return CommandResponse(
        command=command,
        data=data or {},
        warnings=warnings or [],
        summary=human_summary,
    )


def error_response(
    command: str,
    error: Union[str, Exception],
    suggestions: Optional[list[str]] = None,
) -> CommandResponse:
    """Wrap a failed command.

    Args:
        command: Command name
        error: The exception raised, or a message
        suggestions: Hints for fixing the invocation

    Returns:
        CommandResponse with success=False and error_kind set
    """
    message = str(error)
    return CommandResponse(
        command=command,
        success=False,
        errors=[message],
        error_kind=classify_error(error),
        suggestions=suggestions or [],
        summary=f"{command} failed: {message}",
    )
