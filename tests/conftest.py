import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())

from engine.audio.manager import AudioOutput


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests so no real mixer is opened.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.mixer'), \
         patch('pygame.time'):
        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)
        yield


class RecordingAudio(AudioOutput):
    """AudioOutput that records commands instead of making noise."""

    def __init__(self, lengths=None):
        self.lengths = dict(lengths or {})
        self.calls = []
        self.clip = None

    def stop(self):
        self.calls.append(("stop",))

    def set_clip(self, handle):
        self.clip = handle
        self.calls.append(("set_clip", handle))

    def play(self):
        self.calls.append(("play", self.clip))

    def clip_length(self, handle):
        return self.lengths.get(handle)


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def scheduler():
    """Scheduler used as a fake clock."""
    from engine.core.scheduler import TickScheduler
    return TickScheduler()


@pytest.fixture
def audio():
    return RecordingAudio(lengths={
        "vo/hello.ogg": 3.0,
        "vo/door.ogg": 1.5,
        "vo/huh.ogg": 1.0,
    })


@pytest.fixture
def subtitle():
    from engine.ui.widgets.label import Label
    return Label()


@pytest.fixture
def input_field():
    from engine.ui.widgets.input_field import InputField
    return InputField(placeholder="Say something...")


@pytest.fixture
def rules():
    from responder.rules import ResponseRule
    return [
        ResponseRule(id="greeting", keywords=["hello", "hi"], audio="vo/hello.ogg",
                     subtitle="Well met, traveler."),
        ResponseRule(id="door", keywords=["open", "the", "door"], exact_match=True,
                     audio="vo/door.ogg", subtitle="It's locked.", priority=5),
        ResponseRule(id="silent", keywords=["secret"], subtitle="...", priority=1),
    ]


@pytest.fixture
def config(rules):
    from responder.config import ResponderConfig
    return ResponderConfig(rules=rules)


@pytest.fixture
def presenter(config, audio, subtitle, input_field, scheduler, event_bus):
    from responder.presenter import ResponsePresenter
    return ResponsePresenter(
        config,
        audio,
        subtitle=subtitle,
        input_source=input_field,
        scheduler=scheduler,
        events=event_bus,
    )
