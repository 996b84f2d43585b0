"""
UI pieces the dialogue layer draws on.

Quick Start:
    from engine.ui import InputField, Label

    entry = InputField(placeholder="Say something...")
    subtitle = Label()

Architecture:
    - Widget: Base class (visibility, focus)
    - TextDisplay: Capability for anything that shows text
    - TextInputSource: Capability for text entry with submit events
"""

from engine.ui.widget import Widget, TextDisplay, TextInputSource
from engine.ui.widgets import Label, InputField

__all__ = [
    "Widget",
    "TextDisplay",
    "TextInputSource",
    "Label",
    "InputField",
]
