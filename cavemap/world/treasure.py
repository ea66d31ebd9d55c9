# cavemap/world/treasure.py
"""Treasure spot selection and X-shaped map markers."""
from typing import List, Sequence

import structlog

from cavemap.errors import InsufficientCandidates
from cavemap.validation import require_non_negative_int
from cavemap.world.grid import RED, BinaryGrid, Color, ColorImage, Point
from map_rng import MapRNG

log = structlog.get_logger(__name__)


def find_candidate_spots(cave_map: BinaryGrid, margin: int) -> List[Point]:
    """Floor cells with a wall directly above them, at least ``margin`` from every edge.

    Scans column by column (x outer, y inner). The cell above row 0 lies
    outside the map and therefore counts as wall.
    """
    margin = require_non_negative_int("margin", margin)
    spots: List[Point] = []
    for x in range(margin, cave_map.width - margin):
        for y in range(margin, cave_map.height - margin):
            if not cave_map.is_alive(x, y) and cave_map.is_alive(x, y - 1):
                spots.append(Point(x, y))
    log.debug("Treasure candidates found", count=len(spots), margin=margin)
    return spots


def choose(spots: Sequence[Point], count: int, seed: int) -> List[Point]:
    """Pick ``count`` distinct spots without replacement."""
    count = require_non_negative_int("count", count)
    seed = require_non_negative_int("seed", seed)
    pool = list(dict.fromkeys(Point(*spot) for spot in spots))
    if count > len(pool):
        log.error(
            "Not enough treasure candidates",
            requested=count,
            available=len(pool),
        )
        raise InsufficientCandidates(count, len(pool))
    chosen = MapRNG(seed).sample(pool, count)
    log.debug("Treasure spots chosen", count=len(chosen), seed=seed)
    return chosen


def draw_cross(surface: ColorImage, center: Point, size: int, color: Color) -> int:
    """Stamp both diagonals through ``center`` out to ``size`` cells.

    Points falling outside ``surface`` are skipped. Returns the number of
    writes that landed on the surface.
    """
    size = require_non_negative_int("size", size)
    cx, cy = center
    written = 0
    for i in range(-size, size + 1):
        written += surface.set_pixel(cx + i, cy + i, color)
        written += surface.set_pixel(cx - i, cy + i, color)
    return written


def place_treasures(
    cave_map: BinaryGrid,
    surface: ColorImage,
    count: int,
    cross_size: int,
    seed: int,
    color: Color = RED,
) -> List[Point]:
    """Choose treasure spots on ``cave_map`` and mark each one on ``surface``."""
    spots = find_candidate_spots(cave_map, cross_size)
    chosen = choose(spots, count, seed)
    for spot in chosen:
        draw_cross(surface, spot, cross_size, color)
    log.info(
        "Treasures placed",
        placed=len(chosen),
        candidates=len(spots),
        cross_size=cross_size,
    )
    return chosen


__all__ = ["find_candidate_spots", "choose", "draw_cross", "place_treasures"]
