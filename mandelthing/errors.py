"""
Exception types raised by the MandelThing core.

Validation errors derive from ValueError so callers that only care about
"bad input" can catch that, while the shell can tell the kinds apart.
"""


class MandelThingError(Exception):
    """Base class for all MandelThing errors."""


class InvalidDepth(MandelThingError, ValueError):
    """Maximum depth is not an integer >= 2."""


class InvalidDimensions(MandelThingError, ValueError):
    """Image width or height is not a positive integer."""


class DegenerateViewport(MandelThingError, ValueError):
    """Viewport has a zero (or non-finite) extent along an axis."""


class DegenerateZoomSelection(MandelThingError, ValueError):
    """Zoom selection has zero width or height."""


class SettingsLoadFailure(MandelThingError):
    """Settings file is missing or malformed."""


class RenderCancelled(MandelThingError):
    """A render was abandoned because its cancel flag was set."""
