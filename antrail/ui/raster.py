"""Raster — draw simulation state into an RGBA8 pixel buffer.

Pure read pass over the environment and ants.  The frame is composed at
grid resolution with NumPy, then each cell is blown up to
``scale_x × scale_y`` pixels and copied into the caller's buffer.

Draw order decides what wins when things share a cell:

1. Background
2. Food
3. Nest
4. Pheromone (blended over whatever is below, alpha = intensity)
5. Ants (colour depends on whether they carry food)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from antrail.colony.ant import Ant
    from antrail.world.environment import Environment

# Colour palette (RGB)
BACKGROUND = np.array([0, 0, 0], dtype=np.float64)
FOOD = np.array([0, 0, 255], dtype=np.float64)
NEST = np.array([255, 101, 0], dtype=np.float64)
PHEROMONE = np.array([128, 0, 128], dtype=np.float64)
ANT_SEARCHING = np.array([0, 255, 0], dtype=np.float64)
ANT_CARRYING = np.array([255, 0, 0], dtype=np.float64)


def frame_length(pixel_width: int, pixel_height: int) -> int:
    """Return the byte length of an RGBA8 frame."""
    return pixel_width * pixel_height * 4


def _writable_pixels(buffer: object, expected: int) -> NDArray[np.uint8]:
    """Return a flat writable uint8 view of ``buffer``.

    Raises:
        ValueError: If the buffer has the wrong size or type, or is
            read-only.
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8 or not buffer.flags.c_contiguous:
            msg = "frame array must be a C-contiguous uint8 array"
            raise ValueError(msg)
        flat = buffer.reshape(-1)
    else:
        flat = np.frombuffer(buffer, dtype=np.uint8)

    if flat.size != expected:
        msg = f"frame buffer holds {flat.size} bytes, expected {expected}"
        raise ValueError(msg)
    if not flat.flags.writeable:
        msg = "frame buffer is read-only"
        raise ValueError(msg)
    return flat


def compose(environment: Environment, ants: Iterable[Ant]) -> NDArray[np.uint8]:
    """Compose one RGBA pixel per grid cell.

    Args:
        environment: Shared grid state.
        ants: Ants to draw, later ants on top of earlier ones.

    Returns:
        ``(height, width, 4)`` uint8 image, fully opaque.
    """
    image = np.empty((environment.height, environment.width, 3), dtype=np.float64)
    image[:] = BACKGROUND

    if environment.food:
        xs, ys = np.array(environment.food, dtype=np.intp).T
        image[ys, xs] = FOOD

    nest_x, nest_y = environment.nest
    image[nest_y, nest_x] = NEST

    # Empty cells have zero intensity and therefore zero alpha
    alpha = np.minimum(environment.pheromones.intensity, 1.0)[..., np.newaxis]
    image = image * (1.0 - alpha) + PHEROMONE * alpha

    for ant in ants:
        image[ant.y, ant.x] = ANT_CARRYING if ant.carrying_food else ANT_SEARCHING

    rgba = np.empty((environment.height, environment.width, 4), dtype=np.uint8)
    rgba[..., :3] = np.rint(image).astype(np.uint8)
    rgba[..., 3] = 255
    return rgba


def render_frame(
    environment: Environment,
    ants: Iterable[Ant],
    buffer: object,
    scale_x: int = 1,
    scale_y: int = 1,
) -> None:
    """Fill ``buffer`` with the current state, scaled up per cell.

    The buffer is checked before anything is written.

    Args:
        environment: Shared grid state.
        ants: Ants to draw.
        buffer: ``bytearray``, writable ``memoryview`` or uint8 array of
            ``width * scale_x * height * scale_y * 4`` bytes.
        scale_x: Pixels per cell horizontally.
        scale_y: Pixels per cell vertically.

    Raises:
        ValueError: If the buffer is the wrong size, type, or read-only.
    """
    expected = frame_length(environment.width * scale_x, environment.height * scale_y)
    flat = _writable_pixels(buffer, expected)

    cells = compose(environment, ants)
    pixels = np.repeat(np.repeat(cells, scale_y, axis=0), scale_x, axis=1)
    flat[:] = pixels.reshape(-1)
