import pytest

from evoart.gene import Gene, Shape
from evoart.pixel import Pixel
from evoart.rasterizer import Rasterizer

BLACK = Pixel(0, 0, 0, 255)
RED = Pixel(255, 0, 0, 255)


def pixel_at(r, x, y):
    return r.data[y * r.width + x]


def test_new_buffer_is_zeroed():
    r = Rasterizer(4, 3)
    assert r.data == [Pixel()] * 12


def test_default_size_is_one_by_one():
    r = Rasterizer()
    assert (r.width, r.height, len(r.data)) == (1, 1, 1)


def test_clear_fills_every_pixel():
    r = Rasterizer(5, 5)
    r.clear(RED)
    assert set(r.data) == {RED}


def test_resize_updates_dimensions_and_buffer():
    r = Rasterizer(4, 4)
    r.resize(8, 2)
    assert (r.width, r.height) == (8, 2)
    assert len(r.data) == 16
    r.resize(2, 3)
    assert len(r.data) == 6


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Rasterizer(-1, 4)


def test_opaque_square_covers_center_only():
    r = Rasterizer(20, 20)
    r.clear(BLACK)
    r.draw(Gene(Shape.SQUARE, 10.0, 10.0, 4.0, RED))
    assert pixel_at(r, 10, 10) == RED
    assert pixel_at(r, 8, 8) == RED
    assert pixel_at(r, 12, 12) == BLACK
    assert pixel_at(r, 0, 0) == BLACK


def test_square_clipped_at_origin():
    r = Rasterizer(10, 10)
    r.clear(BLACK)
    r.draw(Gene(Shape.SQUARE, 0.0, 0.0, 4.0, RED))
    assert pixel_at(r, 0, 0) == RED
    assert pixel_at(r, 1, 1) == RED
    assert pixel_at(r, 2, 2) == BLACK


def test_transparent_gene_changes_nothing():
    r = Rasterizer(10, 10)
    r.clear(BLACK)
    r.draw(Gene(Shape.CIRCLE, 5.0, 5.0, 4.0, Pixel(255, 255, 255, 0)))
    assert set(r.data) == {BLACK}


def test_half_alpha_blend():
    r = Rasterizer(3, 3)
    r.clear(BLACK)
    r.draw(Gene(Shape.SQUARE, 1.5, 1.5, 1.0, Pixel(255, 255, 255, 128)))
    assert pixel_at(r, 1, 1) == Pixel(127, 127, 127, 255)


def test_circle_is_symmetric_and_bounded():
    r = Rasterizer(11, 11)
    r.clear(BLACK)
    r.draw(Gene(Shape.CIRCLE, 5.0, 5.0, 2.0, RED))
    drawn = {(x, y) for y in range(11) for x in range(11) if pixel_at(r, x, y) == RED}
    assert (5, 5) in drawn
    assert (5, 7) in drawn
    assert (7, 7) not in drawn
    assert drawn == {(10 - x, y) for x, y in drawn}
    assert drawn == {(x, 10 - y) for x, y in drawn}
    assert all(abs(x - 5) <= 2 and abs(y - 5) <= 2 for x, y in drawn)


def test_circle_off_canvas_draws_nothing():
    r = Rasterizer(10, 10)
    r.clear(BLACK)
    r.draw(Gene(Shape.CIRCLE, 100.0, 100.0, 5.0, RED))
    assert set(r.data) == {BLACK}


def test_triangle_fill():
    r = Rasterizer(12, 12)
    r.clear(BLACK)
    r.draw(Gene(Shape.TRIANGLE, 0.0, 0.0, 10.0, RED))
    assert pixel_at(r, 5, 1) == RED
    assert pixel_at(r, 0, 8) == BLACK
    assert pixel_at(r, 11, 11) == BLACK


def test_zero_size_triangle_draws_nothing():
    r = Rasterizer(10, 10)
    r.clear(BLACK)
    r.draw(Gene(Shape.TRIANGLE, 3.0, 3.0, 0.0, RED))
    assert set(r.data) == {BLACK}


def test_data_is_a_copy():
    r = Rasterizer(2, 2)
    r.clear(BLACK)
    snapshot = r.data
    snapshot[0] = RED
    assert r.data[0] == BLACK