"""Intercom - in-process event bus and single-responder RPC dispatcher."""

from __future__ import annotations

from intercom.core import (
    AlreadyExistsError,
    CallbackHandler,
    DeferredHandler,
    HandlerEntry,
    Intercom,
    IntercomConfig,
    IntercomError,
    NoHandlerError,
)
from intercom.core.models.config import ConfigLike

__version__ = "1.0.0"


def create_intercom_instance(config: ConfigLike | None = None) -> Intercom:
    """Create an independent dispatcher with its own registries."""
    return Intercom(config)


# Shared instance for the whole process
default_intercom = Intercom()

__all__ = [
    "AlreadyExistsError",
    "CallbackHandler",
    "DeferredHandler",
    "HandlerEntry",
    "Intercom",
    "IntercomConfig",
    "IntercomError",
    "NoHandlerError",
    "__version__",
    "create_intercom_instance",
    "default_intercom",
]
