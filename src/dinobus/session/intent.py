"""
Debounced jump intent.

Input handlers only ever set a flag here; the simulation consumes it at the
start of the next tick. Holding the key (or OS key repeat) does not queue
extra jumps.
"""

import logging

logger = logging.getLogger(__name__)


class JumpIntent:
    """Edge-triggered jump request shared between input and simulation."""

    def __init__(self) -> None:
        self._held = False
        self._pending = False

    def press(self) -> None:
        """Key went down. Only the first press of a hold counts."""
        if not self._held:
            self._held = True
            self._pending = True

    def release(self) -> None:
        """Key went up."""
        self._held = False

    def request(self) -> None:
        """One-off request (pointer tap) with no matching release."""
        self._pending = True

    def consume(self) -> bool:
        """Return the pending request and clear it."""
        pending = self._pending
        self._pending = False
        return pending

    def clear(self) -> None:
        self._held = False
        self._pending = False
