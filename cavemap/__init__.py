"""Procedural cave maps re-rendered as Voronoi mosaics with treasure markers.

Public import surface for the generation stages and the pipeline.
"""

from .config import GeneratorConfig
from .errors import CaveMapError, InsufficientCandidates, InvalidConfig
from .pipeline import CaveMosaicResult, generate_cave_mosaic
from .world.grid import BLACK, RED, TRANSPARENT, WHITE, BinaryGrid, ColorImage, Point

__all__ = [
    "GeneratorConfig",
    "CaveMapError",
    "InvalidConfig",
    "InsufficientCandidates",
    "CaveMosaicResult",
    "generate_cave_mosaic",
    "BinaryGrid",
    "ColorImage",
    "Point",
    "BLACK",
    "WHITE",
    "RED",
    "TRANSPARENT",
]
