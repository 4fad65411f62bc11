"""
DinoBus Audio Engine - synthesized chiptune cues and background tune.

Every sound is generated at start-up from simple oscillators, so the game
ships without audio assets. Playback problems are never allowed to reach
the simulation: they are logged and dropped.
"""

import array
import logging
import math
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from dinobus.core.events import Event, EventBus, EventType
from dinobus.game.effects import Cue

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def saw(t: float, freq: float) -> float:
    """Sawtooth wave."""
    return 2 * ((t * freq) % 1) - 1


def exp_ramp(start: float, end: float, progress: float) -> float:
    """Exponential interpolation, progress clamped to [0, 1]."""
    progress = max(0.0, min(1.0, progress))
    return start * (end / start) ** progress


def lin_ramp(start: float, end: float, progress: float) -> float:
    progress = max(0.0, min(1.0, progress))
    return start + (end - start) * progress


Oscillator = Callable[[float, float], float]

# (frequency Hz, duration s); 0 Hz is a rest
MELODY: List[Tuple[float, float]] = [
    (261.63, 0.2), (329.63, 0.2), (392.00, 0.2), (523.25, 0.4),
    (392.00, 0.2), (329.63, 0.2), (261.63, 0.4), (0, 0.2),
    (293.66, 0.2), (349.23, 0.2), (440.00, 0.2), (587.33, 0.4),
    (440.00, 0.2), (349.23, 0.2), (293.66, 0.4), (0, 0.2),
    (261.63, 0.2), (261.63, 0.2), (392.00, 0.2), (392.00, 0.2),
    (440.00, 0.2), (440.00, 0.2), (392.00, 0.4), (0, 0.2),
]

CUE_SOUNDS: Dict[Cue, str] = {
    Cue.JUMP: "jump",
    Cue.COLLECT: "collect",
    Cue.CRASH: "crash",
    Cue.ROAR: "roar",
    Cue.HONK: "honk",
    Cue.EAT: "eat",
    Cue.GAME_OVER: "crash",
}


def render_voice(
    osc: Oscillator,
    duration: float,
    freq: Callable[[float], float],
    gain: Callable[[float], float],
) -> array.array:
    """Render one oscillator voice to 16-bit mono samples.

    ``freq`` and ``gain`` map the time within the sound to Hz and to a 0..1
    amplitude. Phase is accumulated so frequency sweeps stay continuous.
    """
    samples = array.array('h')
    phase = 0.0
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        phase += freq(t) / SAMPLE_RATE
        val = osc(phase, 1.0) * gain(t)
        samples.append(int(max(-1.0, min(1.0, val)) * 32767))
    return samples


class AudioEngine:
    """
    Chiptune audio for DinoBus.

    Sound effects play on any free channel; the background tune loops on
    channel 0. With ``enabled=False`` (or when the mixer fails to open)
    every method is a silent no-op.
    """

    MUSIC = "music"

    def __init__(self, enabled: bool = True, music_volume: float = 0.3, sfx_volume: float = 1.0):
        self._enabled = enabled
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume_music = max(0.0, min(1.0, music_volume))
        self._volume_sfx = max(0.0, min(1.0, sfx_volume))
        self._muted = False
        self._music_playing = False
        self._music_channel: Optional[pygame.mixer.Channel] = None
        self._unsubscribers: List[Callable[[], None]] = []

    def init(self) -> bool:
        """Initialize the mixer and synthesize all sounds."""
        if not self._enabled:
            logger.info("Audio disabled")
            return False

        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
            pygame.mixer.set_reserved(1)
            self._initialized = True
            self._generate_all_sounds()
            logger.info("Audio engine initialized")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            self._initialized = False
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        self._gen_jump()
        self._gen_collect()
        self._gen_crash()
        self._gen_roar()
        self._gen_honk()
        self._gen_eat()
        self._gen_music()
        logger.info(f"Generated {len(self._sounds)} sounds")

    # ===== SOUND EFFECTS =====

    def _gen_jump(self) -> None:
        """Short square blip."""
        d = 0.1
        samples = render_voice(
            square, d,
            freq=lambda t: 150,
            gain=lambda t: exp_ramp(0.1, 0.001, t / d),
        )
        self._sounds["jump"] = self._create_sound(samples)

    def _gen_collect(self) -> None:
        """Rising sine chirp."""
        d = 0.2
        samples = render_voice(
            sine, d,
            freq=lambda t: exp_ramp(600, 1200, t / 0.1),
            gain=lambda t: exp_ramp(0.1, 0.01, t / d),
        )
        self._sounds["collect"] = self._create_sound(samples)

    def _gen_crash(self) -> None:
        d = 0.3
        samples = render_voice(
            saw, d,
            freq=lambda t: exp_ramp(100, 50, t / d),
            gain=lambda t: exp_ramp(0.2, 0.01, t / d),
        )
        self._sounds["crash"] = self._create_sound(samples)

    def _gen_roar(self) -> None:
        """Long falling growl for the transformation."""
        d = 0.4
        samples = render_voice(
            saw, d,
            freq=lambda t: lin_ramp(300, 50, t / d),
            gain=lambda t: lin_ramp(0.2, 0.01, t / d),
        )
        self._sounds["roar"] = self._create_sound(samples)

    def _gen_honk(self) -> None:
        d = 0.2
        samples = render_voice(
            square, d,
            freq=lambda t: 400,
            gain=lambda t: lin_ramp(0.1, 0.0, t / d),
        )
        self._sounds["honk"] = self._create_sound(samples)

    def _gen_eat(self) -> None:
        """Quick chomp."""
        d = 0.1
        samples = render_voice(
            saw, d,
            freq=lambda t: exp_ramp(200, 50, t / d),
            gain=lambda t: exp_ramp(0.2, 0.01, t / d),
        )
        self._sounds["eat"] = self._create_sound(samples)

    # ===== MUSIC =====

    def _gen_music(self) -> None:
        """Cheerful C-major loop on a triangle wave."""
        samples = array.array('h')
        for freq, duration in MELODY:
            if freq <= 0:
                samples.extend([0] * int(SAMPLE_RATE * duration))
                continue

            # Notes sound for 90% of their slot
            sounding = duration * 0.9
            note = render_voice(
                triangle, sounding,
                freq=lambda t, f=freq: f,
                gain=lambda t, s=sounding: exp_ramp(0.1, 0.001, t / s),
            )
            samples.extend(note)
            samples.extend([0] * (int(SAMPLE_RATE * duration) - len(note)))

        self._sounds[self.MUSIC] = self._create_sound(samples)

    # ===== PLAYBACK API =====

    def play(self, sound_name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        try:
            sound.set_volume(min(1.0, volume * self._volume_sfx))
            return sound.play()
        except Exception as e:
            logger.debug(f"Failed to play {sound_name}: {e}")
            return None

    def play_cue(self, cue: Cue) -> None:
        sound_name = CUE_SOUNDS.get(cue)
        if sound_name is None:
            logger.debug(f"No sound for cue {cue}")
            return
        self.play(sound_name)

    def resume(self) -> None:
        """Make sure the mixer is running (first user gesture unlocks it)."""
        if not self._initialized or self._muted:
            return
        try:
            pygame.mixer.unpause()
        except Exception as e:
            logger.debug(f"Failed to resume audio: {e}")

    def start_music(self) -> None:
        """Loop the background tune; a no-op if it is already playing."""
        if not self._initialized:
            return
        if self._music_playing and self._music_channel and self._music_channel.get_busy():
            return

        sound = self._sounds.get(self.MUSIC)
        if not sound:
            return

        try:
            self._music_channel = pygame.mixer.Channel(0)
            self._music_channel.set_volume(self._volume_music)
            self._music_channel.play(sound, loops=-1)
            if self._muted:
                self._music_channel.pause()
            self._music_playing = True
            logger.info("Background music started")
        except Exception as e:
            logger.debug(f"Failed to play music: {e}")

    def stop_music(self) -> None:
        """Stop currently playing music."""
        if self._music_channel:
            try:
                self._music_channel.stop()
            except Exception as e:
                logger.debug(f"Failed to stop music: {e}")
        self._music_playing = False

    def toggle_mute(self) -> bool:
        """Toggle mute state. Returns the new state."""
        self._muted = not self._muted
        if self._initialized:
            try:
                if self._muted:
                    pygame.mixer.pause()
                else:
                    pygame.mixer.unpause()
            except Exception as e:
                logger.debug(f"Failed to toggle mute: {e}")
        logger.info("Audio muted" if self._muted else "Audio unmuted")
        return self._muted

    # ===== EVENT BUS =====

    def attach(self, event_bus: EventBus) -> None:
        """Subscribe to the session's sound and music events."""
        self._unsubscribers = [
            event_bus.subscribe(EventType.SOUND_PLAY, self._on_sound),
            event_bus.subscribe(EventType.MUSIC_START, lambda e: self.start_music()),
            event_bus.subscribe(EventType.MUSIC_STOP, lambda e: self.stop_music()),
            event_bus.subscribe(EventType.AUDIO_RESUME, lambda e: self.resume()),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_sound(self, event: Event) -> None:
        cue = event.data.get("cue")
        if isinstance(cue, Cue):
            self.play_cue(cue)

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        self.detach()
        if self._initialized:
            self.stop_music()
            try:
                pygame.mixer.quit()
            except Exception as e:
                logger.debug(f"Mixer quit failed: {e}")
            self._initialized = False
            logger.info("Audio engine cleaned up")
