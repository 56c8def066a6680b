"""
Custom exceptions for the static optimizer.

Error philosophy:
  - ParseError  → FAIL HARD: the input never reaches the rule engine.
  - ConfigError → FAIL HARD: raised while building the orchestrator.

The rules themselves have no error vocabulary. A missing element or an empty
match list is an ordinary outcome that either produces an issue or doesn't.
"""

from typing import Optional


class OptimizerError(Exception):
    """Base exception for all static optimizer errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(OptimizerError):
    """
    Raised by the document adapter when markup cannot be turned into a tree.

    Callers surface this to the user; no partial report is produced.
    """

    def to_response(self) -> dict:
        """Convert to the error record written by the CLI."""
        return {
            "error": "ParseError",
            "message": self.message,
            "details": self.details
        }


class ConfigError(OptimizerError):
    """Raised when a configuration value (argument or env var) is invalid."""

    def __init__(self, message: str, setting: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.setting = setting  # e.g. "OPTIMIZER_STEP_DELAY"
