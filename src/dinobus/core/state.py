"""
State machine for the DinoBus session flow.

States:
    START: Title screen, waiting for the first run
    PLAYING: The simulation is ticking
    GAME_OVER: Run finished, showing score and a dino fact

The title screen is only shown once; after the first run the session
alternates between PLAYING and GAME_OVER.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session states."""
    START = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class StateContext:
    """Bookkeeping carried across runs."""
    runs: int = 0
    last_score: int = 0


Listener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Session state with a fixed set of allowed moves.

    Refused transitions are logged and leave the state untouched; accepted
    ones are reported to every listener.
    """

    TRANSITIONS: dict[State, frozenset[State]] = {
        State.START: frozenset({State.PLAYING}),
        State.PLAYING: frozenset({State.GAME_OVER}),
        State.GAME_OVER: frozenset({State.PLAYING}),
    }

    def __init__(self, initial_state: State = State.START) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in self.TRANSITIONS.get(self._state, frozenset())

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Move to ``to_state`` if the current state allows it.

        Args:
            to_state: Target state
            **context_updates: StateContext fields to overwrite; unknown
                names are ignored

        Returns:
            True if the state changed
        """
        if not self.can_transition(to_state):
            logger.warning(f"Refused transition: {self._state.name} -> {to_state.name}")
            return False

        old_state, self._state = self._state, to_state
        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)
