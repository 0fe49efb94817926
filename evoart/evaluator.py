"""Renders a whole population and scores each individual against a target."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from evoart.fitness import compute_fitness
from evoart.gene import Individual
from evoart.pixel import Pixel
from evoart.rasterizer import Rasterizer

log = logging.getLogger(__name__)

CLEAR_COLOR = Pixel(0, 0, 0, 255)
INVALID_FITNESS = -1e12


class PopulationEvaluator:
    """Holds the current population and renders it onto a canvas of fixed size."""

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self._rasterizer = Rasterizer(width, height)
        self._population: list[Individual] = []
        self._population_size = 0
        self._genes_per_individual = 0

    @property
    def width(self) -> int:
        return self._rasterizer.width

    @property
    def height(self) -> int:
        return self._rasterizer.height

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def genes_per_individual(self) -> int:
        return self._genes_per_individual

    def resize(self, width: int, height: int) -> None:
        """Change the size of the canvas individuals are rendered on."""
        self._rasterizer.resize(width, height)

    def upload_population(self, population: Sequence[Individual]) -> None:
        """Store a copy of the population to be rendered and evaluated."""
        self._population_size = len(population)
        if not population:
            log.warning("attempted to upload an empty population")
            self._genes_per_individual = 0
            return

        self._genes_per_individual = len(population[0])
        if self._genes_per_individual == 0:
            log.warning("first individual has 0 genes")
            return

        mismatched = next(
            (ind for ind in population if len(ind) != self._genes_per_individual), None
        )
        if mismatched is not None:
            log.warning(
                "population has inconsistent gene counts: %d genes, expected %d",
                len(mismatched),
                self._genes_per_individual,
            )

        self._population = [list(ind) for ind in population]

    def _render(self, individual: Individual) -> list[Pixel]:
        self._rasterizer.clear(CLEAR_COLOR)
        for gene in individual:
            self._rasterizer.draw(gene)
        return self._rasterizer.data

    def render_and_evaluate(self, target: Sequence[Pixel]) -> list[float]:
        """Render every individual and return its fitness against target.

        An empty population, or one whose individuals have no genes, scores
        every slot with a very low fitness.
        """
        if self._population_size == 0 or self._genes_per_individual == 0:
            log.error("population not uploaded or empty before evaluation")
            return [INVALID_FITNESS] * self._population_size

        width, height = self.width, self.height
        results: list[float] = []
        for index in range(self._population_size):
            if index < len(self._population):
                pixels = self._render(self._population[index])
                results.append(compute_fitness(pixels, target, width, height))
            else:
                results.append(-1e9)
        return results

    def rendered_image(self, index: int) -> list[Pixel]:
        """Return the rendering of the individual at index, row-major."""
        if not 0 <= index < self._population_size:
            raise IndexError("individual index out of bounds")
        if index < len(self._population):
            return self._render(self._population[index])
        log.error("population data mismatch for index %d", index)
        return [CLEAR_COLOR] * (self.width * self.height)