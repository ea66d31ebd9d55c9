import pytest

from cavemap.errors import InvalidConfig
from cavemap.world import cave
from cavemap.world.grid import BinaryGrid


def test_single_cell_grid_sees_eight_alive_neighbors():
    for rows in (["#"], ["."]):
        grid = BinaryGrid.from_strings(rows)
        assert cave.count_alive_neighbors(grid, 0, 0) == 8


def test_count_alive_neighbors_treats_border_as_solid():
    grid = BinaryGrid.from_strings(["#..", ".#.", "..."])
    assert cave.count_alive_neighbors(grid, 1, 1) == 1
    assert cave.count_alive_neighbors(grid, 0, 0) == 6
    assert cave.count_alive_neighbors(grid, 2, 1) == 4
    assert cave.count_alive_neighbors(grid, 1, 2) == 4


def test_step_matches_hand_computed_generation():
    grid = BinaryGrid.from_strings(["#..", ".#.", "..."])
    result = cave.step(grid, birth_limit=4, death_limit=3)
    assert result == BinaryGrid.from_strings(["###", "#..", "#.#"])


def test_step_all_dead_grid_only_corners_are_born():
    grid = BinaryGrid(5, 5)
    result = cave.step(grid, birth_limit=4, death_limit=3)
    # Corners see five off-grid neighbors, edges three, the interior none.
    assert result == BinaryGrid.from_strings(
        ["#...#", ".....", ".....", ".....", "#...#"]
    )


def test_step_all_walls_survive_with_full_neighborhoods():
    grid = BinaryGrid.from_strings(["###", "###", "###"])
    assert cave.step(grid, birth_limit=4, death_limit=8) == grid


def test_step_does_not_mutate_input():
    grid = BinaryGrid.from_strings(["#..", ".#.", "..."])
    snapshot = grid.copy()
    cave.step(grid, birth_limit=4, death_limit=3)
    assert grid == snapshot


def test_initialize_extreme_probabilities():
    assert cave.initialize(8, 6, seed=3, chance_alive=0.0).alive_count() == 0
    assert cave.initialize(8, 6, seed=3, chance_alive=1.0).alive_count() == 48


def test_initialize_is_seeded():
    first = cave.initialize(32, 24, seed=11, chance_alive=0.45)
    second = cave.initialize(32, 24, seed=11, chance_alive=0.45)
    other = cave.initialize(32, 24, seed=12, chance_alive=0.45)
    assert first == second
    assert first != other
    assert (first.width, first.height) == (32, 24)


def test_run_is_deterministic():
    args = dict(
        width=40, height=30, seed=7, chance_alive=0.45,
        birth_limit=4, death_limit=3, steps=5,
    )
    assert cave.run(**args) == cave.run(**args)


def test_run_with_zero_steps_returns_initial_grid():
    initial = cave.initialize(16, 16, seed=5, chance_alive=0.5)
    result = cave.run(16, 16, 5, 0.5, birth_limit=4, death_limit=3, steps=0)
    assert result == initial


def test_run_applies_step_repeatedly():
    grid = cave.initialize(20, 20, seed=9, chance_alive=0.45)
    for _ in range(3):
        grid = cave.step(grid, 4, 3)
    assert cave.run(20, 20, 9, 0.45, 4, 3, 3) == grid


def test_run_reports_each_step_to_sink():
    seen = []
    result = cave.run(
        12, 12, 1, 0.45, 4, 3, 4,
        on_step=lambda number, grid: seen.append((number, grid.copy())),
    )
    assert [number for number, _ in seen] == [1, 2, 3, 4]
    assert seen[-1][1] == result


def test_failing_sink_does_not_change_result():
    def broken_sink(number, grid):
        raise RuntimeError("display went away")

    expected = cave.run(12, 12, 2, 0.45, 4, 3, 3)
    assert cave.run(12, 12, 2, 0.45, 4, 3, 3, on_step=broken_sink) == expected


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=5, seed=0, chance_alive=0.5),
        dict(width=5, height=-1, seed=0, chance_alive=0.5),
        dict(width=5, height=5, seed=0, chance_alive=1.5),
        dict(width=5, height=5, seed=0, chance_alive=-0.1),
        dict(width=True, height=5, seed=0, chance_alive=0.5),
    ],
)
def test_initialize_rejects_invalid_config(kwargs):
    with pytest.raises(InvalidConfig):
        cave.initialize(**kwargs)


def test_run_rejects_negative_steps():
    with pytest.raises(InvalidConfig):
        cave.run(5, 5, 0, 0.5, 4, 3, -1)
