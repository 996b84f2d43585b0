"""
Response presenter - plays a selected response as voice plus subtitle.

The presenter owns the "speaking" state. While it is speaking and the
config asks for it, new player input is dropped. Each presentation
schedules two actions against the clip length: clear the subtitle and
release the lock. A new presentation cancels everything the previous
one scheduled, so nothing stale fires into it.

Usage:
    presenter = ResponsePresenter(config, audio, subtitle_label, input_field)
    presenter.attach()          # host init

    # each frame
    presenter.update(dt)

    presenter.detach()          # host teardown
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Optional

from engine.core.events import DialogueEvent
from engine.core.scheduler import Action, Scheduler, TickScheduler
from responder.rules import normalize_text, select_rule

if TYPE_CHECKING:
    from engine.audio.manager import AudioOutput
    from engine.core.events import EventBus
    from engine.ui.widget import TextDisplay, TextInputSource
    from responder.config import ResponderConfig

logger = logging.getLogger(__name__)


class PresenterState(Enum):
    """Presentation lifecycle."""
    IDLE = auto()
    SPEAKING = auto()


class ResponsePresenter:
    """
    Drives one presentation at a time.

    Collaborators are capability objects supplied by the host:
    - audio: stop/set_clip/play plus clip_length for timing
    - subtitle: text display, optional
    - input_source: text entry to listen to, optional
    - scheduler: deferred actions; a TickScheduler is created if omitted
    - events: bus for lifecycle notifications, optional
    """

    def __init__(
        self,
        config: ResponderConfig,
        audio: AudioOutput,
        subtitle: Optional[TextDisplay] = None,
        input_source: Optional[TextInputSource] = None,
        scheduler: Optional[Scheduler] = None,
        events: Optional[EventBus] = None,
    ):
        self.config = config
        self.audio = audio
        self.subtitle = subtitle
        self.input_source = input_source
        self.events = events

        self._owns_scheduler = scheduler is None
        self.scheduler: Scheduler = scheduler if scheduler is not None else TickScheduler()

        self._is_speaking = False
        self._attached = False

    @property
    def is_speaking(self) -> bool:
        return self._is_speaking

    @property
    def state(self) -> PresenterState:
        return PresenterState.SPEAKING if self._is_speaking else PresenterState.IDLE

    # Host lifecycle

    def attach(self) -> None:
        """Start listening to the input source's submit event."""
        if self._attached or self.input_source is None:
            return
        self.input_source.subscribe_submit(self.submit_text)
        self._attached = True

    def detach(self) -> None:
        """Stop listening to the input source."""
        if not self._attached or self.input_source is None:
            return
        self.input_source.unsubscribe_submit(self.submit_text)
        self._attached = False

    def update(self, dt: float) -> None:
        """Advance an owned scheduler. Shared schedulers are the host's job."""
        if self._owns_scheduler:
            self.scheduler.update(dt)

    # Input

    def submit_text(self, raw_text: str) -> None:
        """
        Handle a committed entry from the input source.

        Blank entries are ignored, but the input surface is cleared and
        re-activated either way.
        """
        if raw_text and raw_text.strip():
            self.handle_user_text(raw_text)

        if self.input_source is not None:
            self.input_source.clear()
            self.input_source.activate()

    def handle_user_text(self, raw_text: str) -> None:
        """Match the text against the rule table and present the result."""
        config = self.config

        if config.lock_while_speaking and self._is_speaking:
            logger.debug("Dropped input while speaking: %r", raw_text)
            self._publish(DialogueEvent.INPUT_DROPPED, text=raw_text)
            return

        text = normalize_text(raw_text, config.case_insensitive)
        best = select_rule(text, config.rules, config.case_insensitive)

        if best is not None and best.has_audio:
            self._publish(DialogueEvent.RULE_MATCHED, rule_id=best.id, text=text)
            self.present(best.audio, best.subtitle)
        elif config.fallback_audio is not None:
            self._publish(DialogueEvent.FALLBACK_USED, text=text, audio=True)
            self.present(config.fallback_audio, config.fallback_subtitle)
        else:
            self._publish(DialogueEvent.FALLBACK_USED, text=text, audio=False)
            self._show_subtitle_only(config.fallback_subtitle, config.subtitle_only_duration)

    # Presentation

    def present(self, audio: Any, subtitle_text: str) -> None:
        """
        Play a clip with its subtitle, preempting any running presentation.

        The lock is taken before anything is scheduled. A clip of unknown
        length counts as zero, which shows and clears the subtitle and
        releases the lock right away.
        """
        self.scheduler.cancel_all()
        self._set_subtitle("")

        self.audio.stop()
        self.audio.set_clip(audio)
        self.audio.play()

        if self.config.lock_while_speaking:
            self._is_speaking = True

        duration = (self.audio.clip_length(audio) if audio is not None else None) or 0.0

        logger.info("Presenting %r for %.2fs", subtitle_text, duration)
        self._publish(DialogueEvent.RESPONSE_STARTED, subtitle=subtitle_text, duration=duration)

        self._show_subtitle_for(subtitle_text, duration)
        self._after(duration, self._release_lock, "release-lock")

    def _show_subtitle_only(self, text: str, duration: float) -> None:
        """Degraded presentation: subtitle with no audio and no lock."""
        if self.subtitle is None:
            return

        # Whatever was scheduled before (including a lock release) is void now
        self.scheduler.cancel_all()
        self._is_speaking = False

        self._show_subtitle_for(text, duration)

    def _show_subtitle_for(self, text: str, duration: float) -> None:
        if self.subtitle is None:
            return
        self._set_subtitle(text)
        self._after(duration, self._clear_subtitle, "clear-subtitle")

    def _clear_subtitle(self) -> None:
        self._set_subtitle("")
        self._publish(DialogueEvent.SUBTITLE_CLEARED)

    def _release_lock(self) -> None:
        self._is_speaking = False
        self._publish(DialogueEvent.RESPONSE_FINISHED)

    def _after(self, seconds: float, action: Action, label: str) -> None:
        if seconds > 0:
            self.scheduler.schedule_after(seconds, action, label)
        else:
            action()

    def _set_subtitle(self, text: str) -> None:
        if self.subtitle is not None:
            self.subtitle.set_text(text)

    def _publish(self, event_type: DialogueEvent, **data: Any) -> None:
        if self.events is not None:
            self.events.publish(event_type, presenter=self, **data)
