"""
Palette definitions for Mandelbrot visualization.

Each palette is a numpy array of shape (256, 3) with RGB values (uint8).
Entry i holds a channel ramp of intensity (i * 16) % 256, so the colors
cycle every 16 depths, passed through the brighten rule below.

To add a new palette:
1. Define a create_palette_xxx() function that returns the color array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


NUM_COLORS = 256

BLACK = (0, 0, 0)

# Brighten rule: scale by 1/0.7, but first lift dim channels to a floor
# so that black and near-black still get brighter.
BRIGHTEN_FACTOR = 0.7
BRIGHTEN_FLOOR = int(1.0 / (1.0 - BRIGHTEN_FACTOR))


def brighter(rgb):
    """
    Return a brighter version of an (r, g, b) color.

    Pure black becomes (3, 3, 3); any channel in (0, 3) is raised to 3
    before every channel is divided by 0.7 and clamped to 255.
    """
    r, g, b = rgb
    if r == 0 and g == 0 and b == 0:
        return (BRIGHTEN_FLOOR, BRIGHTEN_FLOOR, BRIGHTEN_FLOOR)

    def lift(c):
        if 0 < c < BRIGHTEN_FLOOR:
            c = BRIGHTEN_FLOOR
        return min(int(c / BRIGHTEN_FACTOR), 255)

    return (lift(r), lift(g), lift(b))


def build_palette(size=NUM_COLORS, channels=(0, 0, 1)):
    """
    Build a brightened ramp palette.

    Args:
        size: Number of entries (default 256)
        channels: Which of (r, g, b) carry the ramp, as 0/1 flags

    Returns:
        Read-only (size, 3) uint8 array
    """
    if size <= 0:
        raise ValueError(f"Palette size must be > 0, got {size}")

    colors = np.zeros((size, 3), dtype=np.uint8)
    for i in range(size):
        j = (i * 16) % 256
        colors[i] = brighter(tuple(j * c for c in channels))
    colors.setflags(write=False)
    return colors


def create_palette_blue():
    """Blue ramp: the classic look, black interior on blue bands."""
    return build_palette(channels=(0, 0, 1))


def create_palette_red():
    return build_palette(channels=(1, 0, 0))


def create_palette_green():
    return build_palette(channels=(0, 1, 0))


def create_palette_gray():
    return build_palette(channels=(1, 1, 1))


def create_palette_violet():
    return build_palette(channels=(1, 0, 1))


def create_palette_yellow():
    return build_palette(channels=(1, 1, 0))


def create_palette_cyan():
    return build_palette(channels=(0, 1, 1))


# Registry of all available palettes.
# Keys are display names, values are factory functions.
COLORMAPS = {
    'Blue': create_palette_blue,
    'Red': create_palette_red,
    'Green': create_palette_green,
    'Gray': create_palette_gray,
    'Violet': create_palette_violet,
    'Yellow': create_palette_yellow,
    'Cyan': create_palette_cyan,
}


def get_colormap(name):
    """
    Get a palette by name.

    Args:
        name: Key from COLORMAPS dictionary

    Returns:
        Palette array (256, 3) of uint8 RGB values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name]()


def get_default_colormap():
    """Get the default palette (Blue)."""
    return create_palette_blue()


def list_colormap_names():
    """Get list of available palette names."""
    return list(COLORMAPS.keys())


def color_for(depth, max_depth, palette):
    """
    Color of a single pixel.

    Points that never escaped (depth >= max_depth) are black, everything
    else indexes the palette modulo its length.
    """
    if depth >= max_depth:
        return BLACK
    r, g, b = palette[depth % len(palette)]
    return (int(r), int(g), int(b))
