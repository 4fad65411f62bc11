"""Session controller: run lifecycle, scoring and collaborator calls.

Owns the START -> PLAYING -> GAME_OVER flow. The world is only touched
here to step it and to reset it when a new run begins; everything the
outside world needs to hear about (sounds, music, score) goes out over the
event bus.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from dinobus.core.events import Event, EventBus, EventType, sound_event
from dinobus.core.state import State, StateContext, StateMachine
from dinobus.exceptions import StorageWriteError
from dinobus.game.effects import EMPTY_STEP, Cue, StepResult
from dinobus.game.world import World
from dinobus.session.intent import JumpIntent
from dinobus.storage.highscore import HighScoreStore

logger = logging.getLogger(__name__)


class FactSource(Protocol):
    async def generate_fact(self) -> str: ...


@dataclass(frozen=True)
class SessionView:
    """What the HUD needs to know, frozen at the moment it was taken."""

    state: State
    score: int
    high_score: int
    transformed: bool
    fact: str
    fact_loading: bool
    new_high_score: bool


class SessionController:
    """Drives one player's sequence of runs."""

    FALLBACK_FACT = "Did you know? Dinosaurs hatched from eggs!"

    def __init__(
        self,
        world: World,
        store: HighScoreStore,
        event_bus: EventBus,
        facts: Optional[FactSource] = None,
        state_machine: Optional[StateMachine] = None,
    ):
        self.world = world
        self.store = store
        self.event_bus = event_bus
        self.state_machine = state_machine or StateMachine()
        self.intent = JumpIntent()
        self._facts = facts

        self.score = 0
        self.high_score = store.load()
        self._new_high_score = False

        # Bumped on every new run; fact replies carry the value they started with
        self._generation = 0
        self._fact = ""
        self._fact_loading = False
        self._fact_task: Optional[asyncio.Task] = None

        self.state_machine.add_listener(self._on_state_changed)
        logger.info(f"Session ready, high score {self.high_score}")

    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def fact(self) -> str:
        return self._fact

    @property
    def fact_loading(self) -> bool:
        return self._fact_loading

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Title screen -> first run."""
        if self.state is not State.START:
            return False
        return self._begin_run()

    def restart(self) -> bool:
        """Game over -> fresh run."""
        if self.state is not State.GAME_OVER:
            return False
        return self._begin_run()

    def play(self) -> bool:
        """Start or restart, whichever applies."""
        return self.start() or self.restart()

    def _begin_run(self) -> bool:
        if not self.state_machine.transition(State.PLAYING):
            return False

        self._generation += 1
        self._cancel_fact_task()
        self.world.reset()
        self.score = 0
        self._new_high_score = False
        self._fact = ""
        self._fact_loading = False
        self.intent.clear()

        self.event_bus.emit(Event(EventType.AUDIO_RESUME, source="session"))
        self.event_bus.emit(Event(EventType.MUSIC_START, source="session"))
        self.event_bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 0}, source="session"))
        logger.info(f"Run {self._generation} started")
        return True

    def end_game(self) -> Optional[asyncio.Task]:
        """Finish the current run.

        Records the high score, plays the game-over cue and kicks off the
        fact request. Returns the fact task when an event loop is running.
        """
        context = self.state_machine.context
        if not self.state_machine.transition(
            State.GAME_OVER, runs=context.runs + 1, last_score=self.score
        ):
            return None

        self.intent.clear()
        self._record_high_score()
        self.event_bus.emit(sound_event(Cue.GAME_OVER))
        logger.info(f"Run {self._generation} over with score {self.score}")

        self._fact = ""
        self._fact_loading = True
        generation = self._generation

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, using fallback fact")
            self._apply_fact(generation, self.FALLBACK_FACT)
            return None

        self._fact_task = loop.create_task(self._fetch_fact(generation))
        return self._fact_task

    def _record_high_score(self) -> None:
        if self.score <= self.high_score:
            return

        self.high_score = self.score
        self._new_high_score = True
        try:
            self.store.save(self.score)
        except StorageWriteError as e:
            logger.error(f"High score not persisted: {e}")

    # ------------------------------------------------------------------
    # Facts
    # ------------------------------------------------------------------

    async def _fetch_fact(self, generation: int) -> None:
        if self._facts is None:
            fact = self.FALLBACK_FACT
        else:
            try:
                fact = await self._facts.generate_fact()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Fact generation failed: {e}")
                fact = self.FALLBACK_FACT

        self._apply_fact(generation, fact)

    def _cancel_fact_task(self) -> None:
        if self._fact_task is not None and not self._fact_task.done():
            self._fact_task.cancel()
        self._fact_task = None

    def _apply_fact(self, generation: int, fact: str) -> None:
        if generation != self._generation or self.state is not State.GAME_OVER:
            logger.info(f"Discarding stale fact from run {generation}")
            return

        self._fact = fact or self.FALLBACK_FACT
        self._fact_loading = False
        self.event_bus.emit(Event(EventType.FACT_READY, data={"fact": self._fact}, source="session"))

    # ------------------------------------------------------------------
    # Per-frame
    # ------------------------------------------------------------------

    def press_jump(self) -> None:
        if self.state is State.PLAYING:
            self.intent.press()

    def release_jump(self) -> None:
        self.intent.release()

    def request_jump(self) -> None:
        if self.state is State.PLAYING:
            self.intent.request()

    def tick(self) -> StepResult:
        """Run one simulation tick if a run is in progress."""
        if self.state is not State.PLAYING:
            return EMPTY_STEP

        result = self.world.step(self.intent.consume())

        if result.score_delta:
            self.score += result.score_delta
            self.event_bus.emit(Event(EventType.SCORE_CHANGED, data={"score": self.score}, source="session"))

        for cue in result.cues:
            self.event_bus.emit(sound_event(cue))

        if result.transform_started or result.transform_ended:
            self.event_bus.emit(Event(
                EventType.TRANSFORM_CHANGED,
                data={"transformed": self.world.player.transformed},
                source="session",
            ))

        return result

    def view(self) -> SessionView:
        return SessionView(
            state=self.state,
            score=self.score,
            high_score=self.high_score,
            transformed=self.world.player.transformed,
            fact=self._fact,
            fact_loading=self._fact_loading,
            new_high_score=self._new_high_score,
        )

    def shutdown(self) -> None:
        """Release pending work when the window closes."""
        self._cancel_fact_task()
        self.event_bus.emit(Event(EventType.MUSIC_STOP, source="session"))
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="session"))
        logger.info("Session shut down")

    def _on_state_changed(self, old: State, new: State, context: StateContext) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old.name, "to": new.name, "runs": context.runs},
            source="session",
        ))
