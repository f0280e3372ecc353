"""Output formatters and the JSON response envelope."""

from nutrigoal.export.formatters import JSONFormatter, MarkdownFormatter, TableFormatter
from nutrigoal.export.response import CommandResponse, create_response, error_response

__all__ = [
    "CommandResponse",
    "JSONFormatter",
    "MarkdownFormatter",
    "TableFormatter",
    "create_response",
    "error_response",
]
