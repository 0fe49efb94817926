"""Software rasterizer drawing genes into an RGBA buffer with alpha blending."""

from __future__ import annotations

import math

from evoart.gene import Gene, Shape
from evoart.pixel import Pixel

TRIANGLE_HEIGHT_RATIO = 0.866025

_Point = tuple[float, float]


def _edge(a: _Point, b: _Point, x: float, y: float) -> int:
    return int(math.trunc(b[0] - a[0]) * (y - a[1]) - math.trunc(b[1] - a[1]) * (x - a[0]))


class Rasterizer:
    """A fixed-size pixel canvas onto which genes are drawn."""

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self._check_size(width, height)
        self._width = width
        self._height = height
        self._buffer: list[Pixel] = [Pixel()] * (width * height)

    @staticmethod
    def _check_size(width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid canvas size {width}x{height}")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def data(self) -> list[Pixel]:
        """A copy of the pixel buffer in row-major order."""
        return list(self._buffer)

    def resize(self, width: int, height: int) -> None:
        """Change the canvas size, keeping existing pixels in buffer order."""
        self._check_size(width, height)
        self._width = width
        self._height = height
        count = width * height
        if count <= len(self._buffer):
            del self._buffer[count:]
        else:
            self._buffer.extend([Pixel()] * (count - len(self._buffer)))

    def clear(self, color: Pixel) -> None:
        self._buffer = [color] * len(self._buffer)

    def draw(self, gene: Gene) -> None:
        col = gene.color
        if gene.shape is Shape.CIRCLE:
            self._draw_circle(int(gene.x), int(gene.y), gene.size, col)
        elif gene.shape is Shape.SQUARE:
            half = gene.size / 2.0
            self._draw_rectangle(gene.x - half, gene.y - half, gene.size, gene.size, col)
        else:
            s = gene.size
            x0, y0 = gene.x, gene.y
            self._draw_triangle(
                ((x0, y0), (x0 + s, y0), (x0 + s / 2.0, y0 + s * TRIANGLE_HEIGHT_RATIO)), col
            )

    def _blend(self, x: int, y: int, col: Pixel) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            return
        alpha = col.a
        if alpha == 0:
            return
        index = y * self._width + x
        if alpha == 255:
            self._buffer[index] = col
            return
        inv = 255 - alpha
        p = self._buffer[index]
        self._buffer[index] = Pixel(
            (p.r * inv + col.r * alpha) >> 8,
            (p.g * inv + col.g * alpha) >> 8,
            (p.b * inv + col.b * alpha) >> 8,
            p.a,
        )

    def _draw_circle(self, cx: int, cy: int, radius: float, col: Pixel) -> None:
        r = int(radius)
        r2 = r * r
        for y in range(max(0, cy - r), min(self._height, cy + r + 1)):
            dy = y - cy
            dx_squared = r2 - dy * dy
            if dx_squared < 0:
                continue
            dx = int(math.sqrt(dx_squared))
            for x in range(max(0, cx - dx), min(self._width, cx + dx + 1)):
                self._blend(x, y, col)

    def _draw_rectangle(self, x: float, y: float, w: float, h: float, col: Pixel) -> None:
        x0 = max(0, math.floor(x))
        y0 = max(0, math.floor(y))
        x1 = min(self._width, math.ceil(x + w))
        y1 = min(self._height, math.ceil(y + h))
        for yy in range(y0, y1):
            for xx in range(x0, x1):
                self._blend(xx, yy, col)

    def _draw_triangle(self, pts: tuple[_Point, _Point, _Point], col: Pixel) -> None:
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        x_start = max(0, math.floor(min(xs)))
        x_end = min(self._width, math.ceil(max(xs)))
        y_start = max(0, math.floor(min(ys)))
        y_end = min(self._height, math.ceil(max(ys)))

        area = _edge(pts[0], pts[1], pts[2][0], pts[2][1])
        if area == 0:
            return
        clockwise = area > 0
        edges = [(pts[i], pts[(i + 1) % 3]) for i in range(3)]

        for y in range(y_start, y_end):
            py = y + 0.5
            for x in range(x_start, x_end):
                px = x + 0.5
                inside = True
                for a, b in edges:
                    val = _edge(a, b, px, py)
                    if (clockwise and val < 0) or (not clockwise and val > 0):
                        inside = False
                        break
                if inside:
                    self._blend(x, y, col)