"""Error types raised by DinoBus components."""


class DinoBusError(Exception):
    """Base class for all DinoBus errors."""


class RenderSurfaceError(DinoBusError):
    """Raised when no window or render surface can be created."""


class StorageUnavailableError(DinoBusError):
    """Raised at start-up when the high-score location cannot be used."""


class StorageWriteError(DinoBusError):
    """Raised when persisting the high score fails."""
