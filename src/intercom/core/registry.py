"""Handler registry shared by the event and method channels."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from intercom.core.errors import AlreadyExistsError, NoHandlerError
from intercom.core.ids import generate_id

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HandlerEntry:
    """A handler bound to a name, with its registration identifier."""

    id: str
    handler: Callable[..., Any]


class HandlerRegistry:
    """
    Mapping from a name to the ordered list of its handler entries.

    Every operation on a name expects the slot to exist, so callers run
    prepare() first. Insertion order is invocation order.
    """

    def __init__(
        self,
        kind: str,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """
        Initialize the registry.

        Args:
            kind: Registry label used in log records ("event" or "method")
            id_factory: Source of random identifiers
        """
        self.kind = kind
        self._id_factory = id_factory
        self._handlers: dict[str, list[HandlerEntry]] = {}

    def prepare(self, name: str) -> None:
        """Create an empty slot for name if there is none yet."""
        if not isinstance(self._handlers.get(name), list):
            self._handlers[name] = []

    def ensure_exists(self, name: str, strict: bool) -> None:
        """
        Ensure at least one handler is registered for name.

        Raises:
            NoHandlerError: If the slot is empty and strict is set
        """
        if not self._handlers[name] and strict:
            raise NoHandlerError(name)

    def prevent_duplicate(self, name: str, strict: bool) -> None:
        """
        Refuse a second handler for name.

        Raises:
            AlreadyExistsError: If the slot is populated and strict is set
        """
        if self._handlers[name] and strict:
            raise AlreadyExistsError(name)

    def remove_all(self, name: str) -> None:
        """Delete the whole slot for name."""
        removed = self._handlers.pop(name, None)
        logger.debug(
            "Handlers removed",
            registry=self.kind,
            name=name,
            count=len(removed or ()),
        )

    def remove_by_id(self, name: str, handler_id: str) -> None:
        """Drop the entry whose id matches; no-op when none does."""
        self._handlers[name] = [e for e in self._handlers[name] if e.id != handler_id]
        logger.debug("Handler removed", registry=self.kind, name=name, handler_id=handler_id)

    def generate_unique_id(self, name: str) -> str:
        """Generate an identifier not used by any current entry of name."""
        taken = {entry.id for entry in self._handlers[name]}

        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate
            logger.debug("Identifier collision, retrying", registry=self.kind, name=name)

    def append(self, name: str, entry: HandlerEntry) -> None:
        """Add an entry at the end of the slot."""
        self._handlers[name].append(entry)

    def replace(self, name: str, entries: list[HandlerEntry]) -> None:
        """Swap the whole slot content."""
        self._handlers[name] = list(entries)

    def entries(self, name: str) -> tuple[HandlerEntry, ...]:
        """Snapshot of the entries registered for name."""
        return tuple(self._handlers.get(name, ()))

    def names(self) -> list[str]:
        """Names holding at least one handler."""
        return [name for name, entries in self._handlers.items() if entries]

    def __contains__(self, name: object) -> bool:
        return bool(self._handlers.get(name)) if isinstance(name, str) else False

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self.names())
