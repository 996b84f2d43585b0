"""
Voice audio output.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import pygame

from engine.core.events import EventBus, AudioEvent

logger = logging.getLogger(__name__)


class AudioOutput(ABC):
    """
    Capability set the dialogue layer needs from an audio device.

    Handles are opaque to callers; the device decides what they mean.
    Playback is fire-and-forget. Durations come from clip_length().
    """

    @abstractmethod
    def stop(self) -> None:
        """Stop whatever is currently playing."""

    @abstractmethod
    def set_clip(self, handle: Any) -> None:
        """Select the clip the next play() starts."""

    @abstractmethod
    def play(self) -> None:
        """Start the selected clip."""

    @abstractmethod
    def clip_length(self, handle: Any) -> float | None:
        """Length of a clip in seconds, or None if unknown."""


class VoiceAudioManager(AudioOutput):
    """
    Single voice channel on pygame.mixer.

    Handles are sound file paths. Sounds are loaded on first use
    and cached; missing or broken files yield no clip.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        channel_id: int = 0,
        volume: float = 1.0,
    ):
        self.event_bus = event_bus
        self._channel_id = channel_id
        self._volume = max(0.0, min(1.0, volume))

        self._sound_cache: dict[str, pygame.mixer.Sound] = {}
        self._channel: pygame.mixer.Channel | None = None
        self._clip: pygame.mixer.Sound | None = None
        self._clip_handle: str | None = None
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the mixer and reserve the voice channel."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_reserved(self._channel_id + 1)
            self._channel = pygame.mixer.Channel(self._channel_id)
            self._initialized = True
            logger.info("Voice channel %d ready.", self._channel_id)
        except pygame.error as e:
            logger.error(f"Failed to initialize voice audio: {e}")

    def quit(self) -> None:
        """Release the voice channel and drop cached sounds."""
        self.stop()
        self._sound_cache.clear()
        self._channel = None
        self._initialized = False

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, value))
        if self._channel is not None:
            self._channel.set_volume(self._volume)

    @property
    def current_clip(self) -> str | None:
        """Handle of the selected clip, if it loaded."""
        return self._clip_handle if self._clip is not None else None

    @property
    def is_playing(self) -> bool:
        return self._channel is not None and bool(self._channel.get_busy())

    # --- AudioOutput ---

    def stop(self) -> None:
        if self._channel is None:
            return
        was_playing = self.is_playing
        self._channel.stop()
        if was_playing and self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_STOPPED, file=self._clip_handle)

    def set_clip(self, handle: Any) -> None:
        self._clip_handle = handle
        self._clip = self._get_sound(handle) if handle else None

    def play(self) -> None:
        if self._clip is None or self._channel is None:
            return

        self._channel.set_volume(self._volume)
        self._channel.play(self._clip)
        if self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_STARTED, file=self._clip_handle)

    def clip_length(self, handle: Any) -> float | None:
        sound = self._get_sound(handle) if handle else None
        if sound is None:
            return None
        return sound.get_length()

    def _get_sound(self, file_path: str) -> pygame.mixer.Sound | None:
        """Load or retrieve sound from cache."""
        if not self._initialized:
            return None

        if file_path not in self._sound_cache:
            if not Path(file_path).exists():
                logger.warning(f"Audio file not found: {file_path}")
                return None
            try:
                self._sound_cache[file_path] = pygame.mixer.Sound(file_path)
            except pygame.error as e:
                logger.error(f"Failed to load sound {file_path}: {e}")
                return None

        return self._sound_cache[file_path]
