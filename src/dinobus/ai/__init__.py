"""AI module for DinoBus - Gemini integration for dino facts."""

from dinobus.ai.client import GeminiClient, GeminiConfig, GeminiModel
from dinobus.ai.facts import FactService

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiModel",
    "FactService",
]
