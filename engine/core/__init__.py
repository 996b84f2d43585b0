"""
Core engine module.

Exports:
- EventBus, Event: Event system
- AudioEvent, UIEvent, DialogueEvent: Built-in event types
- Scheduler, TickScheduler, ScheduledAction: Deferred actions
"""

from engine.core.events import EventBus, Event, AudioEvent, UIEvent, DialogueEvent
from engine.core.scheduler import Scheduler, TickScheduler, ScheduledAction

__all__ = [
    # Events
    "EventBus",
    "Event",
    "AudioEvent",
    "UIEvent",
    "DialogueEvent",
    # Scheduling
    "Scheduler",
    "TickScheduler",
    "ScheduledAction",
]
