"""
MandelThing - Mandelbrot Set Viewer Package

An interactive Mandelbrot set plotter using Pygame for display and Numba
for JIT-compiled escape-time computation.

Quick Start:
    from mandelthing import run, RenderConfig
    run(RenderConfig(640, 480, 256))

Or from command line:
    python -m mandelthing

Headless use:
    from mandelthing import RenderConfig, render, reset_viewport
    depths = render(reset_viewport(), RenderConfig(640, 480, 256))

Package Structure:
    - compute.py: JIT-compiled escape-time and coloring kernels
    - viewport.py: Pixel <-> complex mapping, zoom box and viewport state
    - colormaps.py: Brightened ramp palettes and the depth -> color rule
    - renderer.py: Synchronous render() and the async renderer
    - config.py: RenderConfig validation and settings file loading
    - menu.py: Control bar (depth field, Plot / Reset / About)
    - app.py: Main application and event loop

Controls:
    - Drag: Draw a zoom box
    - Plot / Enter: Render (zooming into the box, if any)
    - Reset / R: Back to the default view
    - ESC: Quit
"""

__version__ = "1.0"

from .config import RenderConfig, Settings, load_settings, parse_depth
from .errors import (
    DegenerateViewport,
    DegenerateZoomSelection,
    InvalidDepth,
    InvalidDimensions,
    MandelThingError,
    RenderCancelled,
    SettingsLoadFailure,
)
from .viewport import (
    Viewport,
    ViewportController,
    ZoomBox,
    ZoomSelection,
    apply_zoom,
    reset_viewport,
    to_imag,
    to_pixel_x,
    to_pixel_y,
    to_real,
)
from .colormaps import COLORMAPS, build_palette, color_for, get_colormap, list_colormap_names
from .renderer import MandelbrotRenderer, RenderResult, render, render_image
from .app import run, MandelThingApp

__all__ = [
    "COLORMAPS",
    "DegenerateViewport",
    "DegenerateZoomSelection",
    "InvalidDepth",
    "InvalidDimensions",
    "MandelThingApp",
    "MandelThingError",
    "MandelbrotRenderer",
    "RenderCancelled",
    "RenderConfig",
    "RenderResult",
    "Settings",
    "SettingsLoadFailure",
    "Viewport",
    "ViewportController",
    "ZoomBox",
    "ZoomSelection",
    "apply_zoom",
    "build_palette",
    "color_for",
    "get_colormap",
    "list_colormap_names",
    "load_settings",
    "parse_depth",
    "render",
    "render_image",
    "reset_viewport",
    "run",
    "to_imag",
    "to_pixel_x",
    "to_pixel_y",
    "to_real",
]
