# cavemap/pipeline.py
"""Cave -> mosaic -> treasure composition.

Each stage takes the previous stage's output; nothing is shared except
the values passed along, and each stage seeds its own ``MapRNG``.
"""
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from cavemap.config import GeneratorConfig
from cavemap.render import grid_to_image
from cavemap.world import cave, treasure, voronoi
from cavemap.world.cave import StepSink
from cavemap.world.grid import BinaryGrid, ColorImage, Point

log = structlog.get_logger(__name__)


@dataclass
class CaveMosaicResult:
    cave: BinaryGrid
    cave_image: ColorImage
    mosaic: ColorImage
    final: ColorImage
    treasures: List[Point]
    empty_regions: List[int] = field(default_factory=list)
    seeds: Dict[str, int] = field(default_factory=dict)
    phase_ms: Dict[str, int] = field(default_factory=dict)


def generate_cave_mosaic(
    config: GeneratorConfig, on_step: Optional[StepSink] = None
) -> CaveMosaicResult:
    """Run all three stages for ``config``.

    ``config`` is validated before anything is allocated. ``on_step``
    receives every intermediate cave grid. Markers are drawn on a copy of
    the mosaic, so ``result.mosaic`` stays free of them.
    """
    config.validate()
    seeds = {
        "cave": config.seed,
        "mosaic": config.effective_mosaic_seed,
        "treasure": config.effective_treasure_seed,
    }
    log.info(
        "Starting cave mosaic generation",
        width=config.width,
        height=config.height,
        seeds=seeds,
    )
    phase_times: Dict[str, int] = {}

    def _phase(label, fn, *args, **kwargs):
        started = time.perf_counter()
        result = fn(*args, **kwargs)
        phase_times[label] = int((time.perf_counter() - started) * 1000)
        return result

    cave_map = _phase(
        "cave",
        cave.run,
        config.width,
        config.height,
        seeds["cave"],
        config.chance_to_start_alive,
        config.birth_limit,
        config.death_limit,
        config.number_of_steps,
        on_step=on_step,
    )
    cave_image = grid_to_image(cave_map)
    tessellation = _phase(
        "mosaic",
        voronoi.tessellate,
        cave_image,
        config.region_amount,
        seeds["mosaic"],
        use_mean=config.use_mean_color,
    )
    final = tessellation.image.copy()
    spots = _phase(
        "treasure",
        treasure.place_treasures,
        cave_map,
        final,
        config.number_of_treasures,
        config.cross_size,
        seeds["treasure"],
        color=config.marker_color,
    )

    log.info(
        "Cave mosaic generation complete",
        treasures=len(spots),
        empty_regions=len(tessellation.empty_regions),
        phase_ms=phase_times,
    )
    return CaveMosaicResult(
        cave=cave_map,
        cave_image=cave_image,
        mosaic=tessellation.image,
        final=final,
        treasures=spots,
        empty_regions=tessellation.empty_regions,
        seeds=seeds,
        phase_ms=phase_times,
    )


__all__ = ["CaveMosaicResult", "generate_cave_mosaic"]
