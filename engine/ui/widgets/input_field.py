"""
Input field widget for free-text entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Callable

from engine.core.events import UIEvent
from engine.ui.widget import Widget, TextInputSource, SubmitHandler

if TYPE_CHECKING:
    from engine.core.events import EventBus


class InputField(Widget, TextInputSource):
    """
    Text input field widget.

    Features:
    - Character insert/delete at a cursor
    - Max length limit
    - Placeholder text
    - Submit listeners (any number, added and removed by owners)
    """

    def __init__(
        self,
        placeholder: str = "",
        max_length: int = 128,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(event_bus)
        self._text = ""
        self._placeholder = placeholder
        self._max_length = max_length
        self._cursor_pos = 0

        self._submit_handlers: list[SubmitHandler] = []

        # Callbacks
        self.on_change: Optional[Callable[[str], None]] = None

        # Validation
        self.allowed_chars: Optional[str] = None  # None = all printable

        self.focusable = True

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if len(value) <= self._max_length:
            self._text = value
            self._cursor_pos = len(value)

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def cursor_pos(self) -> int:
        return self._cursor_pos

    @property
    def display_text(self) -> str:
        """Text to render: the entry, or the placeholder when empty."""
        return self._text or self._placeholder

    def set_text(self, text: str) -> 'InputField':
        """Set text (fluent)."""
        self.text = text
        return self

    # Text manipulation

    def insert_char(self, char: str) -> bool:
        """Insert a character at cursor position."""
        if len(self._text) >= self._max_length:
            return False

        if self.allowed_chars and char not in self.allowed_chars:
            return False

        self._text = self._text[:self._cursor_pos] + char + self._text[self._cursor_pos:]
        self._cursor_pos += 1
        self._notify_change()
        return True

    def type_text(self, text: str) -> int:
        """Insert characters one by one. Returns how many were accepted."""
        return sum(1 for char in text if self.insert_char(char))

    def delete_char(self, forward: bool = False) -> bool:
        """Delete character before (backspace) or after (delete) cursor."""
        if forward:
            if self._cursor_pos >= len(self._text):
                return False
            self._text = self._text[:self._cursor_pos] + self._text[self._cursor_pos + 1:]
        else:
            if self._cursor_pos <= 0:
                return False
            self._text = self._text[:self._cursor_pos - 1] + self._text[self._cursor_pos:]
            self._cursor_pos -= 1

        self._notify_change()
        return True

    def move_cursor(self, delta: int) -> None:
        self._cursor_pos = max(0, min(len(self._text), self._cursor_pos + delta))

    def submit(self) -> None:
        """Commit the current entry to every submit listener."""
        text = self._text
        for handler in list(self._submit_handlers):
            handler(text)
        if self.event_bus:
            self.event_bus.publish(UIEvent.TEXT_SUBMITTED, widget=self, text=text)

    # TextInputSource

    def subscribe_submit(self, handler: SubmitHandler) -> None:
        if handler not in self._submit_handlers:
            self._submit_handlers.append(handler)

    def unsubscribe_submit(self, handler: SubmitHandler) -> None:
        if handler in self._submit_handlers:
            self._submit_handlers.remove(handler)

    def clear(self) -> None:
        """Clear the input field."""
        self._text = ""
        self._cursor_pos = 0
        self._notify_change()
        if self.event_bus:
            self.event_bus.publish(UIEvent.TEXT_CLEARED, widget=self)

    def activate(self) -> None:
        """Give the field keyboard focus, ready for the next entry."""
        self.focus()

    def _notify_change(self) -> None:
        if self.on_change:
            self.on_change(self._text)
