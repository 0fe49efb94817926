"""Genetic operators: tournament selection, crossover and mutation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import replace

from evoart.gene import Individual, Shape
from evoart.pixel import Pixel

log = logging.getLogger(__name__)

DEFAULT_TOURNAMENT_SIZE = 5


def tournament_select(
    fitness_values: Sequence[float],
    rng: random.Random,
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE,
) -> int:
    """Return the index of the fittest of tournament_size random picks."""
    population_size = len(fitness_values)
    if population_size == 0:
        raise ValueError("cannot select from an empty population")
    tournament_size = min(tournament_size, population_size)
    if tournament_size <= 0:
        return 0
    best = rng.randrange(population_size)
    for _ in range(tournament_size - 1):
        challenger = rng.randrange(population_size)
        if fitness_values[challenger] > fitness_values[best]:
            best = challenger
    return best


def one_point_crossover(
    a: Individual, b: Individual, rng: random.Random
) -> tuple[Individual, Individual]:
    """Swap the tails of two parents after a random cut point.

    Parents of different or zero length cannot be crossed; the children are
    then copies of the first non-empty parent.
    """
    n, m = len(a), len(b)
    if n != m or n == 0:
        log.warning("crossover size mismatch or empty individuals: a=%d b=%d", n, m)
        if n > 0:
            return list(a), list(a)
        if m > 0:
            return list(b), list(b)
        return [], []
    cut = rng.randint(1, n - 1) if n > 1 else 0
    return list(a[:cut]) + list(b[cut:]), list(b[:cut]) + list(a[cut:])


def _clamp(value, low, high):
    return max(low, min(high, value))


def mutate_individual(
    individual: Individual,
    rng: random.Random,
    canvas_w: float,
    canvas_h: float,
    mutation_rate: float,
) -> bool:
    """Mutate genes in place, each with probability mutation_rate.

    Returns whether any gene was mutated.
    """
    width, height = float(canvas_w), float(canvas_h)
    mutated = False
    for i, gene in enumerate(individual):
        if rng.random() >= mutation_rate:
            continue
        mutated = True
        kind = rng.randint(0, 6)
        color = gene.color
        if kind == 0:
            x = _clamp(gene.x + rng.uniform(-20.0, 20.0), 0.0, width)
            y = _clamp(gene.y + rng.uniform(-20.0, 20.0), 0.0, height)
            gene = replace(gene, x=x, y=y)
        elif kind == 1:
            gene = replace(gene, size=_clamp(gene.size + rng.uniform(-10.0, 10.0), 1.0, 100.0))
        elif kind == 2:
            r = _clamp(color.r + rng.randint(-20, 20), 0, 255)
            g = _clamp(color.g + rng.randint(-20, 20), 0, 255)
            b = _clamp(color.b + rng.randint(-20, 20), 0, 255)
            gene = replace(gene, color=Pixel(r, g, b, color.a))
        elif kind == 3:
            gene = replace(gene, shape=Shape(rng.randint(0, 2)))
        elif kind == 4:
            x = rng.uniform(0.0, width)
            y = rng.uniform(0.0, height)
            gene = replace(gene, x=x, y=y)
        elif kind == 5:
            gene = replace(gene, size=rng.uniform(5.0, 50.0))
        else:
            r = rng.randint(0, 255)
            g = rng.randint(0, 255)
            b = rng.randint(0, 255)
            gene = replace(gene, color=Pixel(r, g, b, color.a))
        individual[i] = gene
    return mutated