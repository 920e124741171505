"""
Escape-time computation functions using Numba JIT compilation.

This module contains the performance-critical kernels:
- Escape depth of a single point
- Depth grids for a full viewport or for a band of rows
- Palette application (depth grid -> RGB buffer)

The recurrence is z -> z^2 + c starting at z = 0, written out on the real
and imaginary parts:

    zr' = zr*zr - zi*zi + cr
    zi' = 2*zr*zi + ci

The new imaginary part uses the old real part, so the real part is held in
a temporary until both are computed. Kernels are compiled without fastmath
so the floating point evaluation order is exactly the one above.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQUARED = 4.0


@jit(nopython=True, cache=True)
def escape_depth(cr, ci, max_depth):
    """
    Count the iterations before z escapes |z| > 2.

    Returns 0 if the first iterate already escapes and max_depth if no
    iterate escapes. Overflow to inf satisfies the escape test; NaN never
    does, so a NaN orbit simply runs to max_depth.
    """
    zr = 0.0
    zi = 0.0
    depth = 0
    while depth < max_depth:
        zr2 = zr * zr - zi * zi + cr
        zi = 2.0 * zr * zi + ci
        zr = zr2
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQUARED:
            break
        depth += 1
    return depth


@jit(nopython=True, parallel=True, cache=True)
def compute_depth(tl_real, tl_imag, br_real, br_imag, width, height, max_depth):
    """
    Compute the escape depth of every pixel in a viewport.

    Args:
        tl_real, tl_imag: Top-left corner in the complex plane
        br_real, br_imag: Bottom-right corner in the complex plane
        width, height: Output grid dimensions in pixels
        max_depth: Maximum iteration count before assuming point is in set

    Returns:
        2D int32 array of shape (height, width). Points in the set have
        value = max_depth.
    """
    result = np.zeros((height, width), dtype=np.int32)
    span_r = br_real - tl_real
    span_i = br_imag - tl_imag

    for py in prange(height):
        ci = tl_imag + (py / height) * span_i
        for px in range(width):
            cr = tl_real + (px / width) * span_r
            result[py, px] = escape_depth(cr, ci, max_depth)

    return result


@jit(nopython=True, parallel=True, cache=True)
def compute_depth_partial(tl_real, tl_imag, br_real, br_imag, width, height,
                          max_depth, result, start_y, compute_h):
    """
    Compute a band of rows, writing into an existing depth grid.

    Used by the renderer to work through the image a few scanlines at a
    time so a render can be abandoned between bands.

    Args:
        tl_real, tl_imag, br_real, br_imag: Full viewport corners
        width, height: Full grid dimensions
        max_depth: Maximum iterations
        result: Output int32 array (height, width), modified in place
        start_y: First row of the band
        compute_h: Number of rows in the band
    """
    span_r = br_real - tl_real
    span_i = br_imag - tl_imag

    for row in prange(compute_h):
        py = start_y + row
        ci = tl_imag + (py / height) * span_i
        for px in range(width):
            cr = tl_real + (px / width) * span_r
            result[py, px] = escape_depth(cr, ci, max_depth)


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(depths, max_depth, palette, out):
    """
    Color a depth grid with a palette.

    Depths >= max_depth are black; every other depth uses
    palette[depth % len(palette)].

    Args:
        depths: 2D int array from compute_depth
        max_depth: Maximum depth value (points with this value are black)
        palette: Nx3 array of RGB colors (uint8)
        out: Output RGB image array (height, width, 3), modified in place
    """
    height, width = depths.shape
    num_colors = palette.shape[0]

    for py in prange(height):
        for px in range(width):
            d = depths[py, px]
            if d >= max_depth:
                out[py, px, 0] = 0
                out[py, px, 1] = 0
                out[py, px, 2] = 0
            else:
                idx = d % num_colors
                out[py, px, 0] = palette[idx, 0]
                out[py, px, 1] = palette[idx, 1]
                out[py, px, 2] = palette[idx, 2]


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real plot.

    Args:
        palette: A palette array to use for warming up apply_palette
    """
    depths = compute_depth(-2.5, 1.5, 1.5, -1.5, 10, 10, 10)
    compute_depth_partial(-2.5, 1.5, 1.5, -1.5, 10, 10, 10, depths, 0, 1)
    dummy = np.zeros((10, 10, 3), dtype=np.uint8)
    apply_palette(depths, 10, palette, dummy)
