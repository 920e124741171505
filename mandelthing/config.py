"""
Render configuration and settings loading.

Settings come from a small JSON file with optional integer keys::

    {"maxdepth": 256, "width": 640, "height": 480}

A missing or unreadable file is not fatal: a warning is logged and the
built-in defaults are used. A single bad or out-of-range key falls back to
its own default while the other keys still apply.
"""

import json
import logging
import os
from dataclasses import dataclass

from .errors import InvalidDepth, InvalidDimensions, SettingsLoadFailure


logger = logging.getLogger(__name__)


DEFAULT_MAX_DEPTH = 256
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_SETTINGS_PATH = "mandelthing.json"

MIN_DEPTH = 2


@dataclass(frozen=True)
class Settings:
    """Startup defaults for the viewer, as read from the settings file."""

    max_depth: int = DEFAULT_MAX_DEPTH
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


@dataclass(frozen=True)
class RenderConfig:
    """Pixel grid size and iteration limit for a single render."""

    width: int
    height: int
    max_depth: int

    def validate(self):
        """
        Check the configuration, raising on the first problem found.

        Raises:
            InvalidDimensions: width or height is not a positive integer
            InvalidDepth: max_depth is not an integer >= 2
        """
        for name, value in (("width", self.width), ("height", self.height)):
            if not _is_int(value) or value <= 0:
                raise InvalidDimensions(f"Image {name} must be > 0, got {value!r}.")
        if not _is_int(self.max_depth) or self.max_depth < MIN_DEPTH:
            raise InvalidDepth(f"Depth must be >= {MIN_DEPTH}.")
        return self

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.width, settings.height, settings.max_depth)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def parse_depth(text):
    """
    Parse the contents of the depth field.

    Anything that is not an integer >= 2 raises InvalidDepth, mirroring
    the message shown to the user.
    """
    try:
        depth = int(str(text).strip())
    except ValueError:
        raise InvalidDepth(f"Depth must be >= {MIN_DEPTH}.") from None
    if depth < MIN_DEPTH:
        raise InvalidDepth(f"Depth must be >= {MIN_DEPTH}.")
    return depth


def _read_settings_file(path):
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SettingsLoadFailure(f"settings file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsLoadFailure(f"could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsLoadFailure(f"{path} must contain a JSON object")
    return data


def load_settings(path=DEFAULT_SETTINGS_PATH):
    """
    Load viewer settings from a JSON file.

    Args:
        path: Settings file location (default: mandelthing.json in cwd)

    Returns:
        Settings with values from the file where present and valid,
        defaults everywhere else.
    """
    logger.info("Loading settings from %s...", os.path.abspath(path))
    try:
        data = _read_settings_file(path)
    except SettingsLoadFailure as e:
        logger.warning("Using default settings: %s", e)
        return Settings()

    values = {}
    for key, field, minimum in (
        ("maxdepth", "max_depth", MIN_DEPTH),
        ("width", "width", 1),
        ("height", "height", 1),
    ):
        if key not in data:
            continue
        raw = data[key]
        try:
            # JSON numbers and numeric strings are both accepted
            if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
                raise ValueError(raw)
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %r in %s: %r", key, path, raw)
            continue
        if value < minimum:
            logger.warning("Ignoring invalid %r in %s: %r (must be >= %d)", key, path, raw, minimum)
            continue
        values[field] = value

    settings = Settings(**values)
    logger.info("Done.")
    return settings
