"""Intercom dispatcher: named events and single-responder methods."""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable
from typing import Any

import structlog

from intercom.core.handlers import CompletionCallback, as_method_handler
from intercom.core.models.config import ConfigLike, IntercomConfig
from intercom.core.registry import HandlerEntry, HandlerRegistry

logger = structlog.get_logger(__name__)

# Type alias for event listeners, plain or coroutine functions
EventListener = Callable[[Any], Any]


class Intercom:
    """
    In-process event bus and RPC dispatcher.

    Events fan out to every listener registered under a name, scheduled on
    the running loop and never awaited by the emitter. Methods have exactly
    one responder whose result comes back through a future or a callback.
    """

    def __init__(self, config: ConfigLike | None = None) -> None:
        """
        Initialize the dispatcher.

        Args:
            config: Full config, or partial overrides of the defaults
        """
        if isinstance(config, IntercomConfig):
            self.config = config
        else:
            self.config = IntercomConfig().merge(config)

        self._event_handlers = HandlerRegistry("event")
        self._method_handlers = HandlerRegistry("method")

        # Strong refs keep coroutine listeners alive until they finish
        self._pending: set[asyncio.Future[Any]] = set()
        self._stats = {
            "events_emitted": 0,
            "handlers_invoked": 0,
            "handler_errors": 0,
            "requests_made": 0,
            "requests_failed": 0,
        }

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(
        self,
        event_name: str,
        payload: Any = None,
        config: ConfigLike | None = None,
    ) -> None:
        """
        Emit an event with the given payload.

        Every listener is scheduled on the running loop in registration
        order and runs after the caller returns. Listener failures are
        logged, never raised here.

        Args:
            event_name: Target event name
            payload: Value passed to every listener
            config: Per-call override of throw_error_if_no_event_handler_found

        Raises:
            NoHandlerError: If nobody listens and the strict policy is on
        """
        strict = self.config.merge(config).throw_error_if_no_event_handler_found

        self._event_handlers.prepare(event_name)
        self._event_handlers.ensure_exists(event_name, strict)

        entries = self._event_handlers.entries(event_name)
        if entries:
            loop = asyncio.get_running_loop()
            for entry in entries:
                loop.call_soon(self._invoke_listener, event_name, entry, payload)

        self._stats["events_emitted"] += 1

    def on_event(
        self,
        event_name: str,
        handler: EventListener,
        config: ConfigLike | None = None,
    ) -> str:
        """
        Register a listener for an event.

        Args:
            event_name: Target event name
            handler: Called with the payload on every emit
            config: Per-call override of prevent_duplicated_event_listeners

        Returns:
            Identifier of the registered listener

        Raises:
            AlreadyExistsError: If duplicates are refused and one exists
        """
        if not callable(handler):
            raise TypeError(f"Event handler must be callable, got {type(handler).__name__}")

        strict = self.config.merge(config).prevent_duplicated_event_listeners

        self._event_handlers.prepare(event_name)
        self._event_handlers.prevent_duplicate(event_name, strict)

        entry = HandlerEntry(
            id=self._event_handlers.generate_unique_id(event_name),
            handler=handler,
        )
        self._event_handlers.append(event_name, entry)

        logger.debug("Event handler registered", event_name=event_name, handler_id=entry.id)
        return entry.id

    def remove_all_event_handlers(self, event_name: str) -> None:
        """Remove every listener of an event."""
        self._event_handlers.prepare(event_name)
        self._event_handlers.remove_all(event_name)

    def remove_event_handler(self, event_name: str, handler_id: str) -> None:
        """Remove one listener by its identifier."""
        self._event_handlers.prepare(event_name)
        self._event_handlers.remove_by_id(event_name, handler_id)

    def _invoke_listener(self, event_name: str, entry: HandlerEntry, payload: Any) -> None:
        """Run a single listener, isolating its failures from the emitter."""
        self._stats["handlers_invoked"] += 1
        try:
            result = entry.handler(payload)
        except Exception as e:
            self._stats["handler_errors"] += 1
            logger.exception(
                "Event handler error",
                event_name=event_name,
                handler_id=entry.id,
                error=str(e),
            )
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._pending.add(task)
            task.add_done_callback(
                functools.partial(self._on_listener_done, event_name, entry.id)
            )

    def _on_listener_done(
        self,
        event_name: str,
        handler_id: str,
        task: asyncio.Future[Any],
    ) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            self._stats["handler_errors"] += 1
            logger.error(
                "Event handler error",
                event_name=event_name,
                handler_id=handler_id,
                error=str(error),
                exc_info=error,
            )

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def request(
        self,
        method_name: str,
        payload: Any = None,
        config: ConfigLike | None = None,
        callback: CompletionCallback | None = None,
    ) -> asyncio.Future[Any] | None:
        """
        Invoke the responder of a method.

        Without a callback the returned future resolves to the responder's
        result or fails with its error. With a callback, nothing is
        returned and callback(error, result) is called on completion.
        A missing responder under the relaxed policy yields None.

        Args:
            method_name: Target method name
            payload: Value passed to the responder
            config: Per-call override of throw_error_if_no_method_handler_found
            callback: Completion callback, selects callback mode

        Raises:
            NoHandlerError: If no responder exists and the strict policy is on
        """
        strict = self.config.merge(config).throw_error_if_no_method_handler_found

        self._method_handlers.prepare(method_name)
        self._method_handlers.ensure_exists(method_name, strict)

        entries = self._method_handlers.entries(method_name)
        loop = asyncio.get_running_loop()

        if entries:
            future: asyncio.Future[Any] = loop.create_task(entries[0].handler(payload))
        else:
            logger.debug("No method handler, resolving to None", method=method_name)
            future = loop.create_future()
            future.set_result(None)

        self._stats["requests_made"] += 1
        future.add_done_callback(self._on_request_done)

        if callback is None:
            return future

        future.add_done_callback(
            functools.partial(self._complete_callback, method_name, callback)
        )
        return None

    def on_request(self, method_name: str, handler: Any) -> str:
        """
        Register the responder of a method, replacing any previous one.

        Args:
            method_name: Target method name
            handler: DeferredHandler, CallbackHandler or a bare callable
                (treated as deferred)

        Returns:
            Identifier of the registered responder
        """
        adapter = as_method_handler(handler)

        self._method_handlers.prepare(method_name)
        entry = HandlerEntry(
            id=self._method_handlers.generate_unique_id(method_name),
            handler=adapter,
        )
        self._method_handlers.replace(method_name, [entry])

        logger.debug(
            "Method handler registered",
            method=method_name,
            handler_id=entry.id,
            style=type(adapter).__name__,
        )
        return entry.id

    def remove_method_handler(self, method_name: str) -> None:
        """Remove the responder of a method."""
        self._method_handlers.remove_all(method_name)

    def _on_request_done(self, future: asyncio.Future[Any]) -> None:
        if future.cancelled() or future.exception() is not None:
            self._stats["requests_failed"] += 1

    def _complete_callback(
        self,
        method_name: str,
        callback: CompletionCallback,
        future: asyncio.Future[Any],
    ) -> None:
        """Bridge a finished request future into callback(error, result)."""
        if future.cancelled():
            error: BaseException | None = asyncio.CancelledError()
        else:
            error = future.exception()

        try:
            if error is not None:
                callback(error, None)
            else:
                callback(None, future.result())
        except Exception as e:
            logger.exception("Request callback error", method=method_name, error=str(e))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def event_names(self) -> list[str]:
        """Event names with at least one listener."""
        return self._event_handlers.names()

    def method_names(self) -> list[str]:
        """Method names with a responder."""
        return self._method_handlers.names()

    def listener_count(self, event_name: str) -> int:
        """Number of listeners registered for an event."""
        return len(self._event_handlers.entries(event_name))

    def has_method_handler(self, method_name: str) -> bool:
        """Check if a method has a responder."""
        return method_name in self._method_handlers

    @property
    def stats(self) -> dict[str, int]:
        """Get dispatcher statistics."""
        return self._stats.copy()

    @property
    def pending_count(self) -> int:
        """Coroutine listeners still running."""
        return len(self._pending)
