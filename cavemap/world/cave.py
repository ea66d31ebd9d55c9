# cavemap/world/cave.py
"""
Cellular-automata cave simulation.
Numba kernels scan the flat wall buffer; cells outside the grid count as
walls, which closes the cave with a solid border without padding cells.
"""
from typing import Callable, Optional

import numba
import numpy as np
import structlog

from cavemap.world.grid import BinaryGrid
from cavemap.validation import (
    require_int,
    require_non_negative_int,
    require_positive_int,
    require_probability,
)
from map_rng import MapRNG

log = structlog.get_logger(__name__)

StepSink = Callable[[int, BinaryGrid], None]


# --- Numba Kernels ---
@numba.njit(cache=True)
def _count_alive_neighbors(cells: np.ndarray, x: int, y: int) -> int:
    """Alive cells in the Moore neighborhood of ``(x, y)``; off-grid is alive."""
    height, width = cells.shape
    count = 0
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            nx = x + dx
            ny = y + dy
            if nx < 0 or ny < 0 or nx >= width or ny >= height:
                count += 1
            elif cells[ny, nx]:
                count += 1
    return count


@numba.njit(cache=True)
def _simulation_step(cells: np.ndarray, birth_limit: int, death_limit: int) -> np.ndarray:
    """One automaton generation written into a fresh buffer."""
    height, width = cells.shape
    new_cells = np.zeros((height, width), dtype=np.bool_)
    for y in range(height):
        for x in range(width):
            alive_neighbors = _count_alive_neighbors(cells, x, y)
            if cells[y, x]:
                new_cells[y, x] = alive_neighbors >= death_limit
            else:
                new_cells[y, x] = alive_neighbors > birth_limit
    return new_cells


# --- Public API ---
def initialize(width: int, height: int, seed: int, chance_alive: float) -> BinaryGrid:
    """Random starting grid; a cell is alive when its draw is below ``chance_alive``."""
    width = require_positive_int("width", width)
    height = require_positive_int("height", height)
    chance_alive = require_probability("chance_alive", chance_alive)
    seed = require_non_negative_int("seed", seed)

    rng = MapRNG(seed)
    cells = rng.get_float_grid(width, height) < chance_alive
    grid = BinaryGrid(width, height, cells)
    log.debug(
        "Initialized cave grid",
        width=width,
        height=height,
        seed=seed,
        chance_alive=chance_alive,
        alive=grid.alive_count(),
    )
    return grid


def count_alive_neighbors(grid: BinaryGrid, x: int, y: int) -> int:
    return int(_count_alive_neighbors(grid.cells, int(x), int(y)))


def step(grid: BinaryGrid, birth_limit: int, death_limit: int) -> BinaryGrid:
    """Return the next generation; ``grid`` itself is left untouched.

    An alive cell survives with at least ``death_limit`` alive neighbors.
    A dead cell is born with more than ``birth_limit`` alive neighbors.
    """
    birth_limit = require_int("birth_limit", birth_limit)
    death_limit = require_int("death_limit", death_limit)
    new_cells = _simulation_step(grid.cells, birth_limit, death_limit)
    return BinaryGrid(grid.width, grid.height, new_cells)


def _notify(on_step: StepSink, step_number: int, grid: BinaryGrid) -> None:
    try:
        on_step(step_number, grid)
    except Exception as e:
        # Observers only display frames; a failing one must not alter the run.
        log.error("Step observer failed", step=step_number, error=str(e), exc_info=True)


def run(
    width: int,
    height: int,
    seed: int,
    chance_alive: float,
    birth_limit: int,
    death_limit: int,
    steps: int,
    on_step: Optional[StepSink] = None,
) -> BinaryGrid:
    """Initialize a grid and apply ``steps`` generations in sequence."""
    steps = require_non_negative_int("steps", steps)
    birth_limit = require_int("birth_limit", birth_limit)
    death_limit = require_int("death_limit", death_limit)

    log.info(
        "Starting cave simulation",
        width=width,
        height=height,
        seed=seed,
        steps=steps,
        birth_limit=birth_limit,
        death_limit=death_limit,
    )
    grid = initialize(width, height, seed, chance_alive)
    for step_number in range(1, steps + 1):
        grid = step(grid, birth_limit, death_limit)
        log.debug("Simulation step finished", step=step_number, alive=grid.alive_count())
        if on_step is not None:
            _notify(on_step, step_number, grid)

    log.info(
        "Cave simulation complete",
        alive=grid.alive_count(),
        floor=grid.width * grid.height - grid.alive_count(),
    )
    return grid


__all__ = ["initialize", "count_alive_neighbors", "step", "run", "StepSink"]
