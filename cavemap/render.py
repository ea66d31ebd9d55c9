# cavemap/render.py
"""Adapters between the generation buffers and the outside world.

Converts cave grids to color images, color images to Pillow images, writes
PNG files and renders grids as console text for step-by-step viewing.
"""
from pathlib import Path
from typing import Union

import numpy as np
import structlog
from PIL import Image

from cavemap.world.grid import (
    BLACK,
    FLOOR_CHAR,
    WALL_CHAR,
    WHITE,
    BinaryGrid,
    Color,
    ColorImage,
)

log = structlog.get_logger(__name__)

PathLike = Union[str, Path]


def grid_to_image(grid: BinaryGrid, wall: Color = BLACK, floor: Color = WHITE) -> ColorImage:
    """Paint walls and floor with flat colors (black walls on white by default)."""
    palette = np.array([floor, wall], dtype=np.float32)
    return ColorImage(grid.width, grid.height, palette[grid.cells.astype(np.intp)])


def to_pil_image(image: ColorImage) -> Image.Image:
    rgba = np.clip(np.rint(image.pixels * 255.0), 0, 255).astype(np.uint8)
    return Image.fromarray(rgba)


def from_pil_image(pil_image: Image.Image) -> ColorImage:
    rgba = np.asarray(pil_image.convert("RGBA"), dtype=np.float32) / 255.0
    height, width = rgba.shape[:2]
    return ColorImage(width, height, rgba)


def save_image(image: ColorImage, path: PathLike) -> Path:
    """Encode ``image`` as PNG at ``path``, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_pil_image(image).save(path, format="PNG")
    log.info("Saved image", path=str(path), width=image.width, height=image.height)
    return path


def render_ascii(grid: BinaryGrid, wall: str = WALL_CHAR, floor: str = FLOOR_CHAR) -> str:
    return "\n".join(
        "".join(wall if cell else floor for cell in row) for row in grid.cells
    )


__all__ = [
    "grid_to_image",
    "to_pil_image",
    "from_pil_image",
    "save_image",
    "render_ascii",
]
