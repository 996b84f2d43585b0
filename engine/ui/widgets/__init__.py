"""
UI Widgets collection.

- Label: Text display (subtitles)
- InputField: Free-text entry
"""

from engine.ui.widgets.label import Label
from engine.ui.widgets.input_field import InputField

__all__ = [
    "Label",
    "InputField",
]
