"""DinoBus Runner - side-scrolling bus that turns into a dinosaur."""

__version__ = "0.1.0"
