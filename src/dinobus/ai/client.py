"""Gemini API client for DinoBus.

Thin async wrapper around the google-genai SDK: the blocking call runs in a
worker thread so the frame loop keeps drawing while a fact is on its way.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class GeminiModel(Enum):
    """Available Gemini models."""

    # Fast text model, thinking disabled for short replies
    FLASH = "gemini-2.5-flash"


@dataclass
class GeminiConfig:
    """Configuration for Gemini client."""

    api_key: str
    model: str = GeminiModel.FLASH.value
    timeout: float = 15.0
    max_retries: int = 3
    retry_delay: float = 1.0
    thinking_budget: int = 0
    temperature: float = 0.9
    max_output_tokens: int = 256


class GeminiClient:
    """Async interface to Gemini text generation.

    One instance is owned by the application and passed to whatever needs
    it; the SDK client itself is created on first use.
    """

    def __init__(self, config: GeminiConfig):
        self.config = config
        self._client = None

        if not config.api_key:
            logger.warning("Gemini API key not set, dino facts will use a fallback")
        logger.info(f"GeminiClient initialized (model {config.model})")

    @property
    def is_available(self) -> bool:
        """Check if AI features are available."""
        return bool(self.config.api_key)

    def _ensure_client(self) -> bool:
        if self._client is not None:
            return True

        if not self.config.api_key:
            logger.error("Cannot initialize client: no API key")
            return False

        try:
            from google import genai

            self._client = genai.Client(api_key=self.config.api_key)
            logger.info("Gemini API client connected")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")
            return False

    async def generate_text(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> Optional[str]:
        """Generate text using Gemini.

        Args:
            prompt: The user prompt
            system_instruction: Optional system prompt
            temperature: Override default temperature
            max_tokens: Override max output tokens

        Returns:
            Generated text (possibly empty) or None on error
        """
        if not self._ensure_client():
            return None

        try:
            from google.genai import types

            config = types.GenerateContentConfig(
                temperature=temperature if temperature is not None else self.config.temperature,
                max_output_tokens=max_tokens or self.config.max_output_tokens,
                system_instruction=system_instruction,
                thinking_config=types.ThinkingConfig(
                    thinking_budget=self.config.thinking_budget
                ),
            )

            for attempt in range(self.config.max_retries):
                try:
                    response = await asyncio.wait_for(
                        asyncio.to_thread(
                            self._client.models.generate_content,
                            model=self.config.model,
                            contents=prompt,
                            config=config,
                        ),
                        timeout=self.config.timeout,
                    )
                    return (response.text or "") if response else ""

                except asyncio.TimeoutError:
                    logger.warning(f"Timeout on attempt {attempt + 1}")
                except Exception as e:
                    if "503" in str(e) or "overloaded" in str(e).lower():
                        logger.warning(f"Service overloaded, retry {attempt + 1}")
                        await asyncio.sleep(self.config.retry_delay * (attempt + 1))
                    else:
                        raise

            logger.error("All retries exhausted")
            return None

        except Exception as e:
            logger.error(f"Text generation failed: {e}")
            return None
