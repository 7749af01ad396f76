"""
Model Translations Error Hierarchy — Structured exceptions for the write and query paths.

Every error carries the model it was raised for (when known) plus free-form
context, and serializes to a JSON-compatible dict for the structured event log.

Hierarchy:
    TranslationError
    ├── ConfigurationError        — Model is missing its __translatable__ declaration
    ├── InvalidFormatError        — Translatable attribute given as a non-mapping value
    └── UnsupportedOperatorError  — Unknown comparison operator in a translation predicate

Storage errors (sqlalchemy.exc.*) are never wrapped: they propagate unchanged
after the enclosing transaction has been rolled back.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class TranslationError(Exception):
    """
    Base error for all model-translation failures.
    All context is serializable to JSON.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.model: Optional[str] = context.get("model")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "model": self.model,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k != "model"
            },
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.model:
            parts.append(f"model={self.model}")
        return " | ".join(parts)


class ConfigurationError(TranslationError):
    """
    Static configuration mistake — a model uses the translation mixin without
    declaring ``__translatable__``. Raised before any transaction opens.
    """
    pass


class InvalidFormatError(TranslationError):
    """
    A declared translatable attribute was supplied with a value that is not a
    locale-keyed mapping. Raised inside the open transaction and triggers rollback.
    """

    def __init__(self, attribute: str, message: Optional[str] = None, **context: Any):
        self.attribute = attribute
        message = message or (
            f"Translatable attribute '{attribute}' must be a mapping of locale to value"
        )
        super().__init__(message, attribute=attribute, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["attribute"] = self.attribute
        return d


class UnsupportedOperatorError(TranslationError):
    """Comparison operator not understood by the predicate builder."""

    def __init__(self, operator: str, **context: Any):
        self.operator = operator
        super().__init__(f"Unsupported comparison operator '{operator}'", operator=operator, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["operator"] = self.operator
        return d
