"""
Label widget for displaying text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from engine.ui.widget import Widget, TextDisplay

if TYPE_CHECKING:
    from engine.core.events import EventBus


class Label(Widget, TextDisplay):
    """
    Simple text display widget, used for subtitles.

    Features:
    - Single or multi-line text
    - Alignment options
    - Custom color
    """

    def __init__(
        self,
        text: str = "",
        color: Optional[Tuple[int, ...]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(event_bus)
        self._text = text
        self.color = color

        # Alignment
        self.align: str = "center"  # "left", "center", "right"

        # Wrapping
        self.max_width: Optional[float] = None

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value

    @property
    def is_empty(self) -> bool:
        return not self._text

    @property
    def lines(self) -> list[str]:
        return self._text.split("\n") if self._text else []

    def set_text(self, text: str) -> None:
        self.text = text
