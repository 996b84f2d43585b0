"""
Typed event bus for decoupled communication.

Event types are Enums so subscribers never match on magic strings.

Usage:
    bus = EventBus()
    bus.subscribe(DialogueEvent.RULE_MATCHED, on_rule_matched)
    bus.publish(DialogueEvent.RULE_MATCHED, rule_id="greeting")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class AudioEvent(Enum):
    """Voice channel events."""
    VOICE_STARTED = auto()
    VOICE_STOPPED = auto()


class UIEvent(Enum):
    """UI widget events."""
    WIDGET_FOCUSED = auto()
    WIDGET_UNFOCUSED = auto()
    TEXT_SUBMITTED = auto()
    TEXT_CLEARED = auto()


class DialogueEvent(Enum):
    """Responder lifecycle events."""
    INPUT_DROPPED = auto()
    RULE_MATCHED = auto()
    FALLBACK_USED = auto()
    RESPONSE_STARTED = auto()
    SUBTITLE_CLEARED = auto()
    RESPONSE_FINISHED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Event-specific payload
        consumed: Whether a handler stopped propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to lower-priority handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Publish/subscribe hub.

    Features:
    - Priority ordering (higher first, FIFO among equals)
    - Weak references by default, so dead listeners drop out
    - One-shot handlers
    - Events published from inside a handler are queued, not nested
    """

    def __init__(self):
        # event type -> [(priority, handler_ref, one_shot)]
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            one_shot: Remove the handler after its first call
            weak: Hold only a weak reference to the handler
        """
        if weak:
            handler_ref = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)
        else:
            handler_ref = handler

        handlers = self._handlers.setdefault(event_type, [])
        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, (priority, handler_ref, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            entry for entry in self._handlers[event_type]
            if self._get_handler(entry[1]) != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)

        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)

        return event

    def has_subscribers(self, event_type: Enum) -> bool:
        return bool(self._handlers.get(event_type))

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all of them."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type)
        if not handlers:
            return

        self._is_publishing = True
        to_remove = []

        try:
            for _, handler_ref, one_shot in list(handlers):
                handler = self._get_handler(handler_ref)

                if handler is None:
                    to_remove.append(handler_ref)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception("Error in event handler for %s", event.type)

                if one_shot:
                    to_remove.append(handler_ref)

                if event.consumed:
                    break
        finally:
            self._is_publishing = False

        if to_remove:
            self._handlers[event.type] = [
                entry for entry in self._handlers.get(event.type, [])
                if entry[1] not in to_remove
            ]

        while self._event_queue:
            self._dispatch(self._event_queue.pop(0))

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
