"""Core module - registries, handler shapes and the dispatcher."""

from intercom.core.errors import AlreadyExistsError, IntercomError, NoHandlerError
from intercom.core.handlers import CallbackHandler, DeferredHandler
from intercom.core.intercom import Intercom
from intercom.core.models.config import IntercomConfig
from intercom.core.registry import HandlerEntry, HandlerRegistry

__all__ = [
    "AlreadyExistsError",
    "CallbackHandler",
    "DeferredHandler",
    "HandlerEntry",
    "HandlerRegistry",
    "Intercom",
    "IntercomConfig",
    "IntercomError",
    "NoHandlerError",
]
