"""Graphics module for DinoBus - numpy frame buffer drawing."""

from dinobus.graphics.renderer import Renderer
from dinobus.graphics.sprites import Sprite, compile_sprite

__all__ = ["Renderer", "Sprite", "compile_sprite"]
