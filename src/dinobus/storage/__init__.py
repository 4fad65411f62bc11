"""Persistence for the best score."""

from dinobus.storage.highscore import HighScoreStore, HIGHSCORE_KEY

__all__ = ["HighScoreStore", "HIGHSCORE_KEY"]
