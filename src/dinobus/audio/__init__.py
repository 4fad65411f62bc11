"""Audio module for DinoBus - synthesized sound effects and music."""

from dinobus.audio.engine import AudioEngine, CUE_SOUNDS

__all__ = ["AudioEngine", "CUE_SOUNDS"]
