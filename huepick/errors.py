"""Color picker errors."""


class HuepickError(Exception):
    """Base class for huepick errors."""
    pass


class ColorRangeError(HuepickError, ValueError):
    """Value outside its documented interval (channel, count, index, ...)."""
    pass


class InvalidOrientationError(HuepickError, ValueError):
    """Unrecognised orientation, slider mode or channel."""
    pass
