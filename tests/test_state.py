"""Session state machine."""

import pytest

from dinobus.core.state import State, StateMachine


def test_starts_on_title_screen():
    assert StateMachine().state is State.START


def test_full_cycle():
    sm = StateMachine()
    assert sm.transition(State.PLAYING)
    assert sm.transition(State.GAME_OVER, runs=1, last_score=42)
    assert sm.context.runs == 1
    assert sm.context.last_score == 42
    assert sm.transition(State.PLAYING)
    assert sm.transition(State.GAME_OVER)


@pytest.mark.parametrize("path,refused", [
    ([], State.GAME_OVER),
    ([State.PLAYING], State.PLAYING),
    ([State.PLAYING], State.START),
    ([State.PLAYING, State.GAME_OVER], State.START),
])
def test_invalid_transitions_are_refused(path, refused):
    sm = StateMachine()
    for state in path:
        assert sm.transition(state)
    before = sm.state

    assert not sm.can_transition(refused)
    assert not sm.transition(refused)
    assert sm.state is before


def test_unknown_context_keys_are_ignored():
    sm = StateMachine()
    sm.transition(State.PLAYING, bogus=1)
    assert not hasattr(sm.context, "bogus")


def test_listeners_see_transitions():
    sm = StateMachine()
    seen = []
    sm.add_listener(lambda old, new, ctx: seen.append((old, new)))

    sm.transition(State.PLAYING)
    sm.transition(State.START)  # refused, not reported

    assert seen == [(State.START, State.PLAYING)]


def test_broken_listener_does_not_block_transition():
    sm = StateMachine()
    seen = []

    def broken(old, new, ctx):
        raise RuntimeError("boom")

    sm.add_listener(broken)
    sm.add_listener(lambda old, new, ctx: seen.append(new))

    assert sm.transition(State.PLAYING)
    assert sm.transition(State.GAME_OVER)
    assert seen == [State.PLAYING, State.GAME_OVER]
