"""
Event bus for DinoBus.

The session controller publishes what happened during a tick or a
transition (sound cues, music control, score and state changes); the audio
engine and anything else interested subscribes by event type. Dispatch is
synchronous and happens inside the frame loop.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Notifications published by the session."""
    # Audio
    SOUND_PLAY = auto()
    MUSIC_START = auto()
    MUSIC_STOP = auto()
    AUDIO_RESUME = auto()

    # Session
    STATE_CHANGED = auto()
    SCORE_CHANGED = auto()
    TRANSFORM_CHANGED = auto()
    FACT_READY = auto()

    SHUTDOWN = auto()


@dataclass
class Event:
    """
    One notification.

    Attributes:
        type: What happened
        data: Payload, e.g. ``{"cue": Cue.JUMP}`` or ``{"score": 12}``
        source: Component that emitted the event
        timestamp: Monotonic time of creation
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Routes session events to subscribers.

    Handlers run in subscription order. A handler that raises is logged and
    skipped so the remaining handlers and the tick still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for one event type.

        Returns:
            A function that removes the subscription again
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to every handler subscribed to its type."""
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.name} handler: {e}")


def sound_event(cue: Any, source: str = "session") -> Event:
    """Create a one-shot sound cue event."""
    return Event(EventType.SOUND_PLAY, data={"cue": cue}, source=source)
