"""
Base widget class and the text capabilities the dialogue layer talks to.

Widgets are DATA + BEHAVIOR. UI is inherently stateful.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from engine.core.events import EventBus


SubmitHandler = Callable[[str], None]


class TextDisplay(ABC):
    """Anything that can show a line of text. Empty text clears it."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...


class TextInputSource(ABC):
    """
    A text entry surface that emits submit events.

    Listeners receive the submitted string. After handling a submit,
    owners usually clear() the surface and activate() it again.
    """

    @abstractmethod
    def subscribe_submit(self, handler: SubmitHandler) -> None:
        ...

    @abstractmethod
    def unsubscribe_submit(self, handler: SubmitHandler) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def activate(self) -> None:
        ...


class Widget:
    """
    Base class for UI widgets.

    Tracks visibility, enabled state and focus. Focus changes are
    published on the event bus when one is attached.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus

        # State
        self.visible: bool = True
        self.enabled: bool = True
        self.focusable: bool = False
        self.focused: bool = False
        self.tag: str = ""  # For identification

        # Callbacks
        self.on_focus_enter: Optional[Callable[[], None]] = None
        self.on_focus_exit: Optional[Callable[[], None]] = None

    def focus(self) -> bool:
        """Try to take focus. Returns True if the widget is now focused."""
        if not (self.focusable and self.enabled and self.visible):
            return False

        if not self.focused:
            self.focused = True
            if self.on_focus_enter:
                self.on_focus_enter()
            self._publish_focus(True)
        return True

    def unfocus(self) -> None:
        if not self.focused:
            return
        self.focused = False
        if self.on_focus_exit:
            self.on_focus_exit()
        self._publish_focus(False)

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.unfocus()

    def _publish_focus(self, gained: bool) -> None:
        if self.event_bus is None:
            return
        # Import here to avoid circular import
        from engine.core.events import UIEvent
        event_type = UIEvent.WIDGET_FOCUSED if gained else UIEvent.WIDGET_UNFOCUSED
        self.event_bus.publish(event_type, widget=self)
