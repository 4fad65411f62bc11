"""Session flow: run lifecycle, scoring and input intent."""

from dinobus.session.controller import SessionController, SessionView
from dinobus.session.intent import JumpIntent

__all__ = ["SessionController", "SessionView", "JumpIntent"]
