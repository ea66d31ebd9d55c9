# cavemap/world/voronoi.py
"""
Discrete Voronoi mosaic.

Every pixel joins the region of its nearest random centroid and is then
repainted with a single color aggregated over that region, either the
mean color or the most frequent exact color.
"""
from dataclasses import dataclass, field
from typing import Final, List, Optional

import numba
import numpy as np
import structlog

from cavemap.errors import InvalidConfig
from cavemap.validation import require_non_negative_int, require_positive_int
from cavemap.world.grid import BLACK, Color, ColorImage
from map_rng import MapRNG

log = structlog.get_logger(__name__)

# Fill for a region no pixel was assigned to
EMPTY_REGION_COLOR: Final[Color] = BLACK


@dataclass
class Tessellation:
    """Everything computed by one mosaic pass."""
    centroids: np.ndarray  # (region_count, 2) as (x, y)
    assignment: np.ndarray  # (width * height,) region index per pixel
    fill_colors: np.ndarray  # (region_count, 4)
    image: ColorImage
    empty_regions: List[int] = field(default_factory=list)

    @property
    def region_count(self) -> int:
        return int(self.centroids.shape[0])


# --- Numba Kernels ---
@numba.njit(cache=True)
def _assign_regions(width: int, height: int, centroids: np.ndarray) -> np.ndarray:
    """Brute-force nearest centroid per pixel, lowest index wins ties."""
    n_regions = centroids.shape[0]
    assignment = np.empty(width * height, dtype=np.int64)
    for y in range(height):
        for x in range(width):
            best = 0
            dx = x - centroids[0, 0]
            dy = y - centroids[0, 1]
            best_dist = dx * dx + dy * dy
            for i in range(1, n_regions):
                dx = x - centroids[i, 0]
                dy = y - centroids[i, 1]
                dist = dx * dx + dy * dy
                if dist < best_dist:
                    best_dist = dist
                    best = i
            assignment[x + y * width] = best
    return assignment


# --- Region Stages ---
def generate_centroids(width: int, height: int, region_count: int, rng: MapRNG) -> np.ndarray:
    """Draw ``region_count`` integer centroids, one (x, y) pair per region."""
    centroids = np.empty((region_count, 2), dtype=np.int64)
    for i in range(region_count):
        centroids[i] = rng.get_point(width, height)
    return centroids


def assign_regions(width: int, height: int, centroids: np.ndarray) -> np.ndarray:
    # Squared integer distances order pixels exactly like Euclidean ones.
    centroids = np.ascontiguousarray(centroids, dtype=np.int64)
    if centroids.ndim != 2 or centroids.shape[1] != 2 or centroids.shape[0] == 0:
        raise InvalidConfig("centroids must be a non-empty (n, 2) array")
    return _assign_regions(width, height, centroids)


def _population_order(width: int, height: int) -> np.ndarray:
    """Pixel indices visited column by column (x outer, y inner)."""
    return np.arange(width * height).reshape(height, width).T.reshape(-1)


def mean_fill_colors(
    source: ColorImage, assignment: np.ndarray, region_count: int
) -> np.ndarray:
    """Per-region mean of r, g and b with alpha forced to 1.0."""
    pixels = source.flat.astype(np.float64)
    counts = np.bincount(assignment, minlength=region_count)
    fills = np.tile(np.asarray(EMPTY_REGION_COLOR, dtype=np.float64), (region_count, 1))
    filled = counts > 0
    for channel in range(3):
        sums = np.bincount(assignment, weights=pixels[:, channel], minlength=region_count)
        fills[filled, channel] = sums[filled] / counts[filled]
    fills[filled, 3] = 1.0
    return fills.astype(np.float32)


def mode_fill_colors(
    source: ColorImage, assignment: np.ndarray, region_count: int
) -> np.ndarray:
    """Per-region most frequent exact color.

    Ties go to the color that entered the region's frequency table first,
    with pixels fed in column-major order.
    """
    order = _population_order(source.width, source.height)
    regions = assignment[order].astype(np.uint32)
    colors = np.ascontiguousarray(source.flat[order])
    # Compare exact float values through their bit patterns.
    rows = np.column_stack((regions, colors.view(np.uint32)))
    unique_rows, first_seen, counts = np.unique(
        rows, axis=0, return_index=True, return_counts=True
    )
    unique_regions = unique_rows[:, 0].astype(np.int64)
    ranking = np.lexsort((first_seen, -counts, unique_regions))
    ranked_regions = unique_regions[ranking]
    leaders = np.ones(len(ranking), dtype=bool)
    leaders[1:] = ranked_regions[1:] != ranked_regions[:-1]

    fills = np.tile(np.asarray(EMPTY_REGION_COLOR, dtype=np.float32), (region_count, 1))
    winners = ranking[leaders]
    fills[unique_regions[winners]] = colors[first_seen[winners]]
    return fills


# --- Public API ---
def tessellate(
    source: Optional[ColorImage],
    region_count: int,
    seed: int,
    use_mean: bool = True,
) -> Tessellation:
    """Partition ``source`` into ``region_count`` regions and repaint it."""
    if source is None:
        log.error("Mosaic requested without a source image")
        raise InvalidConfig("source image is required")
    region_count = require_positive_int("region_count", region_count)
    seed = require_non_negative_int("seed", seed)

    width, height = source.width, source.height
    log.info(
        "Generating Voronoi mosaic",
        width=width,
        height=height,
        regions=region_count,
        seed=seed,
        fill="mean" if use_mean else "mode",
    )

    rng = MapRNG(seed)
    centroids = generate_centroids(width, height, region_count, rng)
    assignment = assign_regions(width, height, centroids)

    if use_mean:
        fill_colors = mean_fill_colors(source, assignment, region_count)
    else:
        fill_colors = mode_fill_colors(source, assignment, region_count)

    region_sizes = np.bincount(assignment, minlength=region_count)
    empty_regions = [int(i) for i in np.flatnonzero(region_sizes == 0)]
    if empty_regions:
        log.warning(
            "Voronoi regions received no pixels",
            count=len(empty_regions),
            regions=empty_regions,
            fill=EMPTY_REGION_COLOR,
        )

    image = ColorImage(width, height, fill_colors[assignment])
    log.info("Voronoi mosaic complete", empty_regions=len(empty_regions))
    return Tessellation(
        centroids=centroids,
        assignment=assignment,
        fill_colors=fill_colors,
        image=image,
        empty_regions=empty_regions,
    )


def generate(
    source: Optional[ColorImage],
    region_count: int,
    seed: int,
    use_mean: bool = True,
) -> ColorImage:
    return tessellate(source, region_count, seed, use_mean).image


__all__ = [
    "EMPTY_REGION_COLOR",
    "Tessellation",
    "generate_centroids",
    "assign_regions",
    "mean_fill_colors",
    "mode_fill_colors",
    "tessellate",
    "generate",
]
