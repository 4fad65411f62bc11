"""Dino fact service shown on the game-over screen."""

import logging
from typing import Optional

from dinobus.ai.client import GeminiClient

logger = logging.getLogger(__name__)


FACT_PROMPT = (
    "Tell me a very short, fun, and simple fact about dinosaurs for a "
    "4-year-old boy. Keep it under 20 words. Be enthusiastic!"
)

NO_KEY_FACT = "Ask your parents to set the API Key to learn cool dino facts!"
EMPTY_FACT = "Dinosaurs are awesome!"
ERROR_FACT = "Dinosaurs roared really loud! ROAR!"


class FactService:
    """Turns a Gemini reply into a displayable fact, never an exception."""

    def __init__(self, client: Optional[GeminiClient] = None):
        self._client = client

    @property
    def is_available(self) -> bool:
        return self._client is not None and self._client.is_available

    async def generate_fact(self) -> str:
        """Fetch one fact.

        Returns:
            The fact text, or one of the fixed fallbacks when the service
            is unconfigured, replies with nothing, or fails.
        """
        if not self.is_available:
            return NO_KEY_FACT

        text = await self._client.generate_text(FACT_PROMPT)
        if text is None:
            logger.warning("No fact from Gemini, using fallback")
            return ERROR_FACT

        text = text.strip()
        if not text:
            return EMPTY_FACT

        logger.info(f"Dino fact: {text}")
        return text
