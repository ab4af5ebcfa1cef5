from typing import Dict, Optional


class InvariantViolation(Exception):
    """Raised when a domain rule is broken."""


class ValidationError(InvariantViolation):
    """
    Submitted fields are unusable. Carries per-field messages so the
    editor can be redisplayed with errors next to each input.
    """

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}
