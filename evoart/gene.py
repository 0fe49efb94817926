"""Genes: coloured shapes that together make up an individual."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum

from evoart.pixel import Pixel

MIN_RANDOM_SIZE = 5.0
MAX_RANDOM_SIZE = 50.0
MIN_RANDOM_ALPHA = 50
MAX_RANDOM_ALPHA = 200


class Shape(IntEnum):
    CIRCLE = 0
    TRIANGLE = 1
    SQUARE = 2


@dataclass(frozen=True)
class Gene:
    """A single shape with position, size and colour."""

    shape: Shape = Shape.CIRCLE
    x: float = 0.0
    y: float = 0.0
    size: float = 0.0
    color: Pixel = field(default_factory=Pixel)

    def __post_init__(self) -> None:
        object.__setattr__(self, "shape", Shape(self.shape))

    @property
    def pos(self) -> tuple[float, float]:
        return (self.x, self.y)


Individual = list[Gene]


def random_gene(rng: random.Random, canvas_w: float, canvas_h: float) -> Gene:
    """Create a gene with random shape, position, size and colour."""
    shape = Shape(rng.randint(0, 2))
    x = rng.uniform(0.0, float(canvas_w))
    y = rng.uniform(0.0, float(canvas_h))
    size = rng.uniform(MIN_RANDOM_SIZE, MAX_RANDOM_SIZE)
    r = rng.randint(0, 255)
    g = rng.randint(0, 255)
    b = rng.randint(0, 255)
    a = rng.randint(MIN_RANDOM_ALPHA, MAX_RANDOM_ALPHA)
    return Gene(shape, x, y, size, Pixel(r, g, b, a))


def random_individual(
    rng: random.Random, canvas_w: float, canvas_h: float, gene_count: int
) -> Individual:
    """Create an individual made of gene_count random genes."""
    return [random_gene(rng, canvas_w, canvas_h) for _ in range(gene_count)]