# errors.py


class PathTracerError(Exception):
    """
    Base class for every error raised by the renderer.
    """


class ConfigurationError(PathTracerError, ValueError):
    """
    Raised before rendering starts when the caller supplied an invalid scene,
    camera or render setting.
    """


class PoolCreationError(ConfigurationError):
    """
    Raised when a worker pool is requested with fewer than one thread.
    """

    def __init__(self, workers: int):
        super().__init__(f"Cannot create a worker pool with {workers} threads.")
        self.workers = workers


class RenderError(PathTracerError):
    """
    Raised when a row job fails. The render is abandoned; the original
    exception is chained as __cause__.
    """

    def __init__(self, row: int, message: str):
        super().__init__(f"Rendering row {row} failed: {message}")
        self.row = row
