"""Event bus dispatch."""

from dinobus.core.events import Event, EventBus, EventType, sound_event
from dinobus.game.effects import Cue


def test_subscribers_receive_matching_events():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.SOUND_PLAY, received.append)

    bus.emit(sound_event(Cue.JUMP))
    bus.emit(Event(EventType.MUSIC_START))

    assert len(received) == 1
    assert received[0].data["cue"] is Cue.JUMP
    assert received[0].source == "session"


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    order = []
    bus.subscribe(EventType.SCORE_CHANGED, lambda e: order.append("hud"))
    bus.subscribe(EventType.SCORE_CHANGED, lambda e: order.append("audio"))

    bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 3}))
    assert order == ["hud", "audio"]


def test_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.SCORE_CHANGED, received.append)

    unsubscribe()
    unsubscribe()
    bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 1}))

    assert received == []


def test_handler_can_unsubscribe_itself_mid_dispatch():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.SHUTDOWN, lambda e: unsubscribe())
    bus.subscribe(EventType.SHUTDOWN, received.append)

    bus.emit(Event(EventType.SHUTDOWN))
    assert len(received) == 1


def test_handler_errors_are_contained():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("speaker on fire")

    bus.subscribe(EventType.SOUND_PLAY, broken)
    bus.subscribe(EventType.SOUND_PLAY, received.append)

    bus.emit(sound_event(Cue.CRASH))
    assert len(received) == 1
