# photobot/services/errors.py
from __future__ import annotations


class EngineError(Exception):
    """Base for errors raised by the ranking & vote services."""


class ValidationError(EngineError, ValueError):
    """Missing or invalid identifiers in a request. Raised before any write."""


class NotFoundError(ValidationError):
    """Referenced photo / category does not exist."""


class StoreError(EngineError):
    """Read or write against the store failed. Never retried here."""


class AuthorizationError(EngineError):
    """Missing or incorrect shared-secret credential."""
