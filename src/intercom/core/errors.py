"""Intercom error types."""

from __future__ import annotations


class IntercomError(Exception):
    """Base class for registry policy failures.

    Carries a stable error ``code`` and the event or method ``name``
    that triggered the failure.
    """

    code = "E_INTERCOM"

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Intercom failure for '{name}'.")

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"code": self.code, "name": self.name, "message": str(self)}


class NoHandlerError(IntercomError):
    """Raised when no handler is registered and the strict policy is on."""

    code = "E_NO_HANDLER"

    def __init__(self, name: str) -> None:
        super().__init__(name, f"No handler is registered for '{name}' on the registry.")


class AlreadyExistsError(IntercomError):
    """Raised when a second event handler is refused."""

    code = "E_ALREADY_EXISTS"

    def __init__(self, name: str) -> None:
        super().__init__(
            name,
            f"There is an already registered handler for '{name}' on the registry.",
        )
