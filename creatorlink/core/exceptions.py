"""Custom exceptions for the CreatorLink inquiry service."""

from __future__ import annotations

from typing import Any


class CreatorLinkException(Exception):
    """Base exception for CreatorLink application."""

    pass


class ConfigurationError(CreatorLinkException):
    """Raised when configuration is invalid."""

    pass


class ValidationError(CreatorLinkException):
    """Raised when a field update or request payload is invalid."""

    pass


class NotFoundError(CreatorLinkException):
    """Raised when a resource is not found."""

    pass


class StorageError(CreatorLinkException):
    """Raised when the key-value store cannot complete an operation."""

    pass


class StepTransitionError(CreatorLinkException):
    """Raised when an action is not allowed at the current form step."""

    pass


class MarketplaceAPIError(CreatorLinkException):
    """Raised when the marketplace REST API call fails.

    ``status_code`` and ``body`` are ``None`` for transport failures
    (connection refused, timeout) where no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def has_response(self) -> bool:
        return self.status_code is not None
