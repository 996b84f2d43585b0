"""
NPC Responder Engine

Host-side building blocks: events, frame-driven scheduling, voice audio
and text widgets. The dialogue logic itself lives in `responder`.

Quick Start:
    from engine import EventBus, TickScheduler, VoiceAudioManager, InputField, Label

    bus = EventBus()
    audio = VoiceAudioManager(bus)
    audio.init()
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Re-export core components for convenience
from engine.core import (
    EventBus,
    Event,
    AudioEvent,
    UIEvent,
    DialogueEvent,
    Scheduler,
    TickScheduler,
    ScheduledAction,
)

from engine.audio import AudioOutput, VoiceAudioManager
from engine.ui import InputField, Label, TextDisplay, TextInputSource

__all__ = [
    # Core
    "EventBus",
    "Event",
    "AudioEvent",
    "UIEvent",
    "DialogueEvent",
    "Scheduler",
    "TickScheduler",
    "ScheduledAction",
    # Audio
    "AudioOutput",
    "VoiceAudioManager",
    # UI
    "InputField",
    "Label",
    "TextDisplay",
    "TextInputSource",
]
