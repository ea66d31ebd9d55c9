import numpy as np
from PIL import Image

from cavemap.render import from_pil_image, grid_to_image, render_ascii, save_image, to_pil_image
from cavemap.world.grid import BLACK, RED, WHITE, BinaryGrid, ColorImage


def test_grid_to_image_paints_walls_black_on_white():
    grid = BinaryGrid.from_strings(["#.", ".#"])
    image = grid_to_image(grid)
    assert image.get_pixel(0, 0) == BLACK
    assert image.get_pixel(1, 0) == WHITE
    assert image.get_pixel(0, 1) == WHITE
    assert image.get_pixel(1, 1) == BLACK


def test_grid_to_image_custom_palette():
    grid = BinaryGrid.from_strings(["#."])
    image = grid_to_image(grid, wall=RED, floor=BLACK)
    assert image.get_pixel(0, 0) == RED
    assert image.get_pixel(1, 0) == BLACK


def test_pil_conversion_keeps_layout():
    image = ColorImage.filled(5, 3, WHITE)
    image.set_pixel(4, 0, RED)
    pil = to_pil_image(image)
    assert pil.size == (5, 3)
    assert pil.mode == "RGBA"
    assert pil.getpixel((4, 0)) == (255, 0, 0, 255)
    assert from_pil_image(pil) == image


def test_save_image_creates_folders(tmp_path):
    image = ColorImage.filled(6, 4, BLACK)
    path = save_image(image, tmp_path / "nested" / "out" / "map.png")
    assert path.is_file()
    with Image.open(path) as loaded:
        assert loaded.size == (6, 4)
        assert np.asarray(loaded.convert("RGBA"))[0, 0].tolist() == [0, 0, 0, 255]


def test_render_ascii():
    grid = BinaryGrid.from_strings(["#..", ".#."])
    assert render_ascii(grid) == "#..\n.#."
    assert render_ascii(grid, wall="X", floor=" ") == "X  \n X "
