"""Method handler shapes and the uniform async adapter around them."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")

# callback(error, result)
CompletionCallback = Callable[[Any, Any], None]


@dataclass(frozen=True)
class DeferredHandler(Generic[T, U]):
    """
    Handler returning its result as an awaitable.

    A plain return value is accepted too and used as the result.
    """

    fn: Callable[[T], Awaitable[U] | U]

    async def __call__(self, payload: T) -> U:
        result = self.fn(payload)
        if inspect.isawaitable(result):
            return await result
        return result


@dataclass(frozen=True)
class CallbackHandler(Generic[T, U]):
    """
    Handler reporting completion through a trailing callback.

    The wrapped function is called as ``fn(payload, callback)`` and must
    eventually call ``callback(error, result)``. A non-None error fails
    the request, otherwise it resolves with result. The callback may be
    called from any thread; only the first call counts.
    """

    fn: Callable[[T, CompletionCallback], Any]

    async def __call__(self, payload: T) -> U:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[U] = loop.create_future()

        def settle(error: Any, result: Any) -> None:
            if future.cancelled():
                logger.debug(
                    "Request already cancelled, dropping completion",
                    handler=getattr(self.fn, "__name__", repr(self.fn)),
                )
                return
            if future.done():
                logger.warning(
                    "Completion callback invoked more than once, ignoring",
                    handler=getattr(self.fn, "__name__", repr(self.fn)),
                )
                return
            if error is not None:
                future.set_exception(_as_exception(error))
            else:
                future.set_result(result)

        def callback(error: Any = None, result: Any = None) -> None:
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None

            if running is loop:
                settle(error, result)
            else:
                loop.call_soon_threadsafe(settle, error, result)

        try:
            self.fn(payload, callback)
        except Exception as e:
            if future.done():
                logger.exception(
                    "Handler raised after completing",
                    handler=getattr(self.fn, "__name__", repr(self.fn)),
                )
            else:
                future.set_exception(e)

        return await future


MethodHandler = DeferredHandler[Any, Any] | CallbackHandler[Any, Any]


def as_method_handler(handler: Any) -> MethodHandler:
    """
    Normalize a registration argument into a tagged handler.

    Bare callables are treated as deferred-result handlers.

    Raises:
        TypeError: If handler is not callable
    """
    if isinstance(handler, (DeferredHandler, CallbackHandler)):
        return handler
    if not callable(handler):
        raise TypeError(f"Method handler must be callable, got {type(handler).__name__}")
    return DeferredHandler(handler)


def _as_exception(error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return RuntimeError(str(error))
