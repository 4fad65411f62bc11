"""
Main entry point for DinoBus Runner.

Builds the world, session and collaborators from settings and runs the
game window until the player quits.
"""

import asyncio
import logging
import random
import sys

from dinobus.core.events import EventBus
from dinobus.exceptions import DinoBusError
from dinobus.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Wire everything together and run the window."""
    from dinobus.ai.client import GeminiClient, GeminiConfig
    from dinobus.ai.facts import FactService
    from dinobus.app.window import GameWindow
    from dinobus.audio.engine import AudioEngine
    from dinobus.game.world import World
    from dinobus.session.controller import SessionController
    from dinobus.storage.highscore import HighScoreStore

    logger = logging.getLogger(__name__)

    # Fails fast if the high score cannot be stored
    store = HighScoreStore(settings.highscore_path)

    rng = random.Random(settings.seed)
    world = World(settings.display.width, settings.display.height, rng=rng)
    event_bus = EventBus()

    client = GeminiClient(GeminiConfig(
        api_key=settings.ai.gemini_api_key,
        model=settings.ai.model,
        timeout=settings.ai.timeout,
        max_retries=settings.ai.max_retries,
        retry_delay=settings.ai.retry_delay,
    ))
    facts = FactService(client)

    audio = AudioEngine(
        enabled=settings.audio.enabled,
        music_volume=settings.audio.music_volume,
        sfx_volume=settings.audio.sfx_volume,
    )
    audio.attach(event_bus)

    controller = SessionController(world, store, event_bus, facts)
    window = GameWindow(settings, controller, audio=audio)

    if settings.seed is not None:
        logger.info(f"Using fixed seed {settings.seed}")

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("DinoBus starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except DinoBusError as e:
        logger.error(f"Cannot start: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("DinoBus stopped")


if __name__ == "__main__":
    main()
