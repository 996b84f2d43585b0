import pytest
from unittest.mock import MagicMock
from engine.audio.manager import VoiceAudioManager
from engine.core.events import AudioEvent

# All tests here need the mock_pygame fixture from conftest
pytestmark = pytest.mark.usefixtures("mock_pygame")

@pytest.fixture
def voice(tmp_path):
    import pygame
    pygame.mixer.get_init.return_value = None

    mgr = VoiceAudioManager()
    mgr.init()

    clip_path = tmp_path / "hello.ogg"
    clip_path.write_bytes(b"fake")

    sound = MagicMock()
    sound.get_length.return_value = 2.5
    pygame.mixer.Sound.return_value = sound

    return mgr, str(clip_path), sound

def test_voice_manager_init():
    import pygame
    # Simulate mixer not initialized yet
    pygame.mixer.get_init.return_value = None

    mgr = VoiceAudioManager(channel_id=2)
    mgr.init()

    assert mgr._initialized
    pygame.mixer.init.assert_called_once()
    pygame.mixer.set_reserved.assert_called_with(3)
    pygame.mixer.Channel.assert_called_with(2)

def test_clip_length_uses_sound(voice):
    mgr, path, sound = voice

    assert mgr.clip_length(path) == 2.5

def test_sounds_are_cached(voice):
    import pygame
    mgr, path, _ = voice

    mgr.clip_length(path)
    mgr.set_clip(path)

    pygame.mixer.Sound.assert_called_once_with(path)

def test_missing_file_has_no_clip(voice, tmp_path):
    import pygame
    mgr, _, _ = voice
    missing = str(tmp_path / "nope.ogg")

    assert mgr.clip_length(missing) is None
    mgr.set_clip(missing)
    assert mgr.current_clip is None

    mgr.play()
    mgr._channel.play.assert_not_called()

def test_play_uses_voice_channel(voice):
    mgr, path, sound = voice
    bus_events = []
    mgr.event_bus = MagicMock()
    mgr.event_bus.publish.side_effect = lambda t, **d: bus_events.append(t)

    mgr.set_clip(path)
    mgr.play()

    mgr._channel.play.assert_called_once_with(sound)
    assert bus_events == [AudioEvent.VOICE_STARTED]

def test_stop_publishes_when_busy(voice, event_bus):
    mgr, path, _ = voice
    mgr.event_bus = event_bus
    stopped = []
    event_bus.subscribe(AudioEvent.VOICE_STOPPED, lambda e: stopped.append(e), weak=False)

    mgr._channel.get_busy.return_value = True
    mgr.stop()
    mgr._channel.get_busy.return_value = False
    mgr.stop()

    assert mgr._channel.stop.call_count == 2
    assert len(stopped) == 1

def test_uninitialized_manager_is_silent():
    mgr = VoiceAudioManager()

    mgr.stop()
    mgr.set_clip("vo/hello.ogg")
    mgr.play()

    assert mgr.clip_length("vo/hello.ogg") is None
    assert not mgr.is_playing

def test_volume_is_clamped(voice):
    mgr, _, _ = voice

    mgr.volume = 1.7
    assert mgr.volume == 1.0
    mgr._channel.set_volume.assert_called_with(1.0)
