"""
Rendering entry points.

render() is the synchronous contract: viewport + config in, complete depth
grid out. It works through the image in bands of scanlines so a caller can
abandon a long render by setting a threading.Event.

The MandelbrotRenderer class handles:
- Background (async) computation so the UI stays responsive
- Cancelling an in-flight render when a newer one is requested
- Coloring the finished depth grid with the current palette
- Handing each finished frame to the UI exactly once
"""

import logging
import threading
import time
from dataclasses import dataclass

import numpy as np

from .colormaps import get_default_colormap
from .compute import apply_palette, compute_depth_partial
from .errors import RenderCancelled


logger = logging.getLogger(__name__)


# Rows computed between checks of the cancel flag
ROWS_PER_BAND = 16


@dataclass(frozen=True)
class RenderResult:
    """A finished frame: depth grid, its colored pixels and what produced it."""

    depths: np.ndarray
    rgb: np.ndarray
    viewport: object
    config: object


def render(viewport, config, cancel=None):
    """
    Compute the escape depth of every pixel of a viewport.

    Args:
        viewport: Viewport to sample
        config: RenderConfig with width, height and max_depth
        cancel: Optional threading.Event polled between bands of rows

    Returns:
        int32 array of shape (config.height, config.width), indexed [y, x].
        A value of config.max_depth means the point never escaped.

    Raises:
        InvalidDimensions, InvalidDepth: bad config
        DegenerateViewport: viewport has zero extent
        RenderCancelled: cancel was set before the grid was finished
    """
    config.validate()
    viewport.validate()

    width, height, max_depth = config.width, config.height, config.max_depth
    depths = np.zeros((height, width), dtype=np.int32)

    for start_y in range(0, height, ROWS_PER_BAND):
        if cancel is not None and cancel.is_set():
            raise RenderCancelled(f"render cancelled at row {start_y} of {height}")
        compute_h = min(ROWS_PER_BAND, height - start_y)
        compute_depth_partial(
            viewport.top_left_real, viewport.top_left_imag,
            viewport.bottom_right_real, viewport.bottom_right_imag,
            width, height, max_depth,
            depths, start_y, compute_h
        )

    return depths


def colorize(depths, max_depth, palette):
    """Turn a depth grid into an (H, W, 3) uint8 RGB image."""
    rgb = np.empty(depths.shape + (3,), dtype=np.uint8)
    apply_palette(depths, max_depth, palette, rgb)
    return rgb


def render_image(viewport, config, palette, cancel=None):
    """Render a viewport and color it. Returns a RenderResult."""
    depths = render(viewport, config, cancel)
    return RenderResult(depths, colorize(depths, config.max_depth, palette), viewport, config)


class MandelbrotRenderer:
    """
    Handles async rendering on a single background thread.

    Usage:
        renderer = MandelbrotRenderer()
        renderer.compute_async(viewport, config)

        # In your game loop:
        result = renderer.get_result()
        if result is not None:
            display(result.rgb)

    Only one render runs at a time. Requesting another one while a render
    is in flight cancels it; the worker then moves straight on to the
    newest request. Requests that were superseded before they started are
    dropped.
    """

    def __init__(self, palette=None):
        """
        Initialize the renderer.

        Args:
            palette: Palette array (256, 3) uint8 (default: blue ramp)
        """
        self.palette = palette if palette is not None else get_default_colormap()

        # Async computation state
        self.computing = False
        self.pending = None  # (viewport, config) waiting to be rendered
        self.result = None  # Finished RenderResult not yet collected
        self.lock = threading.Lock()
        self.cancel_event = threading.Event()
        self.idle = threading.Event()
        self.idle.set()

    def compute_async(self, viewport, config):
        """
        Start async computation for the given viewport.

        Inputs are validated here, on the caller's thread, so bad values
        are reported before anything changes.

        Args:
            viewport: Viewport to render
            config: RenderConfig for the frame
        """
        config.validate()
        viewport.validate()

        with self.lock:
            self.pending = (viewport, config)
            if self.computing:
                self.cancel_event.set()
            else:
                self.computing = True
                self.idle.clear()
                thread = threading.Thread(target=self._compute_thread)
                thread.daemon = True
                thread.start()

    def _compute_thread(self):
        """Background thread for rendering."""
        finished = False
        try:
            self._process_requests()
            finished = True
        finally:
            if not finished:
                with self.lock:
                    self.pending = None
                    self.computing = False
                    self.idle.set()

    def _process_requests(self):
        while True:
            with self.lock:
                request = self.pending
                self.pending = None
                self.cancel_event.clear()
                if request is None:
                    self.computing = False
                    self.idle.set()
                    break

            viewport, config = request
            logger.info(
                "Plotting... maxDepth=%d imageWidth=%d imageHeight=%d "
                "ar=%r ai=%r br=%r bi=%r",
                config.max_depth, config.width, config.height,
                viewport.top_left_real, viewport.top_left_imag,
                viewport.bottom_right_real, viewport.bottom_right_imag,
            )
            start = time.perf_counter()
            try:
                result = render_image(viewport, config, self.palette, self.cancel_event)
            except RenderCancelled as e:
                logger.debug("%s", e)
                continue
            except Exception:
                logger.exception("Render failed")
                continue

            logger.info("Done. (%.2fs)", time.perf_counter() - start)
            with self.lock:
                self.result = result

    def get_result(self):
        """
        Get the latest render result if ready.

        Returns:
            RenderResult if a frame finished since the last call, None otherwise.
        """
        with self.lock:
            result, self.result = self.result, None
        return result

    def wait(self, timeout=None):
        """Block until no render is running or pending. Returns False on timeout."""
        return self.idle.wait(timeout)

    def cancel(self):
        """Drop any pending request and abandon the running render."""
        with self.lock:
            self.pending = None
            if self.computing:
                self.cancel_event.set()
