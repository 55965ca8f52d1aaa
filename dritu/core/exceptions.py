"""
Exception hierarchy for the dashboard backend.
"""

from typing import Any, Dict, Optional


class DrituError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


class RecordNotFoundError(DrituError):
    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} with id '{entity_id}' not found",
            code="RECORD_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class ValidationError(DrituError):
    """Business-rule validation failed (missing client, empty quotation, bad sort field, ...)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field} if field else {},
        )
