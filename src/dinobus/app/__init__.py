"""Desktop front end: pygame window and frame loop."""

from dinobus.app.window import GameWindow

__all__ = ["GameWindow"]
