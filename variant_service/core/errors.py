# Error types raised at the mutation boundary

from typing import Any, Dict, List, Optional


class ErrorResponse(Exception):
    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class ValidationError(ErrorResponse):
    """A required field is missing or invalid; the mutation was rejected."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        details: dict = None,
    ):
        details = dict(details or {})
        if errors:
            details["errors"] = errors
        super().__init__(message, status_code=400, details=details)

    @property
    def errors(self) -> List[Dict[str, Any]]:
        return self.details.get("errors", [])


class ConfirmationRequired(ErrorResponse):
    """A destructive action was attempted without an affirmative confirmation."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=428, details=details)
