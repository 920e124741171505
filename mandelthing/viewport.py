"""
Viewport arithmetic: pixel <-> complex plane mapping and the zoom box.

The viewport is the rectangle of the complex plane shown in the image,
given by its top-left and bottom-right corners. With the default view the
real part grows left to right and the imaginary part shrinks top to
bottom:

                   i
     (-2.5, 1.5)+--------+-----+
                |        |     |
                |--------0-----| r
                |        |     |
                +--------+-----+(1.5, -1.5)

Everything here is a pure function of its arguments except for
ZoomBox and ViewportController, which hold the interactive state the
shell drives from mouse events.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .errors import DegenerateViewport, DegenerateZoomSelection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane, from top-left to bottom-right corner."""

    top_left_real: float
    top_left_imag: float
    bottom_right_real: float
    bottom_right_imag: float

    @property
    def real_span(self) -> float:
        return self.bottom_right_real - self.top_left_real

    @property
    def imag_span(self) -> float:
        return self.bottom_right_imag - self.top_left_imag

    def is_degenerate(self) -> bool:
        spans = (self.real_span, self.imag_span)
        return any(s == 0.0 or not math.isfinite(s) for s in spans)

    def validate(self) -> "Viewport":
        if self.is_degenerate():
            raise DegenerateViewport(
                f"Viewport has zero extent: real span {self.real_span!r}, "
                f"imaginary span {self.imag_span!r}"
            )
        return self


DEFAULT_VIEWPORT = Viewport(-2.5, 1.5, 1.5, -1.5)


def reset_viewport() -> Viewport:
    """Return the default view of the whole set."""
    return DEFAULT_VIEWPORT


def to_real(x: float, width: int, viewport: Viewport) -> float:
    """Real part of the complex point at pixel column x."""
    return viewport.top_left_real + (x / width) * (viewport.bottom_right_real - viewport.top_left_real)


def to_imag(y: float, height: int, viewport: Viewport) -> float:
    """Imaginary part of the complex point at pixel row y."""
    return viewport.top_left_imag + (y / height) * (viewport.bottom_right_imag - viewport.top_left_imag)


def to_pixel_x(real: float, width: int, viewport: Viewport) -> float:
    """Inverse of to_real: fractional pixel column of a real coordinate."""
    return (real - viewport.top_left_real) / viewport.real_span * width


def to_pixel_y(imag: float, height: int, viewport: Viewport) -> float:
    """Inverse of to_imag: fractional pixel row of an imaginary coordinate."""
    return (imag - viewport.top_left_imag) / viewport.imag_span * height


@dataclass(frozen=True)
class ZoomSelection:
    """Pixel-space rectangle picked with the zoom box."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


def apply_zoom(viewport: Viewport, selection: ZoomSelection, width: int, height: int) -> Viewport:
    """
    Map a pixel-space selection to the viewport it covers.

    The selection's top-left corner maps to the new top-left and its far
    corner (left + width, top + height) to the new bottom-right.

    Raises:
        DegenerateZoomSelection: the selection has zero width or height
    """
    if selection.is_degenerate():
        raise DegenerateZoomSelection(
            f"Zoom selection {selection.width}x{selection.height} has no area"
        )
    return Viewport(
        to_real(selection.left, width, viewport),
        to_imag(selection.top, height, viewport),
        to_real(selection.right, width, viewport),
        to_imag(selection.bottom, height, viewport),
    ).validate()


def _clamp(value, upper):
    return max(0, min(upper - 1, int(value)))


def _clamp_edge(value, upper):
    # Dragged points may land on the far edge, one past the last pixel
    return max(0, min(upper, int(value)))


class ZoomBox:
    """
    Two-phase zoom box gesture.

    begin_selection() on mouse press, update_selection() on every drag
    event and end_selection() on release. A press without a drag yields no
    selection, so a single click just clears the previous box.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.anchor = None
        self.current: Optional[ZoomSelection] = None

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def begin_selection(self, point) -> None:
        if self.current is not None:
            logger.debug("Zoom box off.")
        self.anchor = (_clamp(point[0], self.width), _clamp(point[1], self.height))
        self.current = None

    def update_selection(self, point) -> Optional[ZoomSelection]:
        """Stretch the box to point and return the current rectangle."""
        if self.anchor is None:
            return None
        if self.current is None:
            logger.debug("Zoom box on.")

        ax, ay = self.anchor
        px, py = _clamp_edge(point[0], self.width), _clamp_edge(point[1], self.height)
        self.current = ZoomSelection(
            left=min(ax, px),
            top=min(ay, py),
            width=abs(px - ax),
            height=abs(py - ay),
        )
        return self.current

    def end_selection(self) -> Optional[ZoomSelection]:
        """Finish the gesture; None if nothing with an area was dragged out."""
        selection = self.current
        self.anchor = None
        if selection is None or selection.is_degenerate():
            self.current = None
            return None
        return selection

    def clear(self) -> None:
        self.anchor = None
        self.current = None


class ViewportController:
    """
    Owns the persistent viewport and the pending zoom selection.

    The selection made with the zoom box is only applied when the next
    plot is requested (apply_pending_selection), the same way the Plot
    button consumes the box in the viewer.
    """

    def __init__(self, width: int, height: int, viewport: Optional[Viewport] = None):
        self.width = width
        self.height = height
        self.viewport = (viewport or reset_viewport()).validate()
        self.zoom_box = ZoomBox(width, height)
        self.pending_selection: Optional[ZoomSelection] = None

    def reset(self) -> Viewport:
        self.viewport = reset_viewport()
        self.pending_selection = None
        self.zoom_box.clear()
        return self.viewport

    def begin_selection(self, point) -> None:
        self.pending_selection = None
        self.zoom_box.begin_selection(point)

    def update_selection(self, point) -> Optional[ZoomSelection]:
        return self.zoom_box.update_selection(point)

    def end_selection(self) -> Optional[ZoomSelection]:
        self.pending_selection = self.zoom_box.end_selection()
        return self.pending_selection

    @property
    def visible_box(self) -> Optional[ZoomSelection]:
        """The rectangle the shell should outline, if any."""
        return self.zoom_box.current

    def apply_pending_selection(self) -> bool:
        """
        Zoom into the pending selection, consuming it.

        Returns:
            True if the viewport changed. Degenerate selections are
            discarded without touching the viewport.
        """
        selection = self.pending_selection
        self.pending_selection = None
        self.zoom_box.clear()
        if selection is None:
            return False
        try:
            new_viewport = apply_zoom(self.viewport, selection, self.width, self.height)
        except (DegenerateZoomSelection, DegenerateViewport) as e:
            logger.debug("Discarding zoom selection: %s", e)
            return False
        self.viewport = new_viewport
        return True
