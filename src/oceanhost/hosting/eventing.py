"""Lifecycle events for the application model."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

import structlog

from oceanhost.hosting.resources import Resource

logger = structlog.get_logger()

T = TypeVar("T", bound=Resource)


@dataclass
class ApplicationModel:
    """The set of resources declared by the app host."""

    resources: list[Resource] = field(default_factory=list)

    def resources_of_type(self, resource_type: type[T]) -> list[T]:
        return [r for r in self.resources if isinstance(r, resource_type)]


@dataclass
class AfterPublishEvent:
    """Raised once the app host has been asked to publish."""

    model: ApplicationModel
    app_directory: Path
    output_path: Path | None = None
    cancel_event: threading.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


EventHandler = Callable[[Any], Any]


class EventBus:
    """In-memory subscription registry keyed by event type."""

    def __init__(self) -> None:
        self._handlers: dict[type[Any], list[EventHandler]] = {}

    def subscribe(self, event_type: type[Any], handler: EventHandler) -> None:
        """Register a handler for an event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def handlers(self, event_type: type[Any]) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def publish(self, event: Any) -> list[Any]:
        """Invoke the handlers for ``event`` in subscription order.

        Handler exceptions propagate to the caller.
        """
        results = []
        for handler in self.handlers(type(event)):
            logger.debug(
                "event_dispatch",
                event_type=type(event).__name__,
                handler=getattr(handler, "__name__", repr(handler)),
            )
            results.append(handler(event))
        return results
