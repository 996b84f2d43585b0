"""Audio output module."""

from engine.audio.manager import AudioOutput, VoiceAudioManager

__all__ = [
    "AudioOutput",
    "VoiceAudioManager",
]
