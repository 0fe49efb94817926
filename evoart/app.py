"""The evolution loop: evolves shapes towards a target image and shows the best one."""

from __future__ import annotations

import argparse
import logging
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from evoart.evaluator import PopulationEvaluator
from evoart.gautils import mutate_individual, one_point_crossover, tournament_select
from evoart.gene import Individual, random_individual
from evoart.pixel import Pixel

log = logging.getLogger(__name__)

DEFAULT_TARGET = Path("../assets/AstridOgKnut.jpg")
DEFAULT_OUTPUT_DIR = Path("../../output")
WINDOW_SIZE = (800, 600)
WINDOW_TITLE = "EvoArt"


@dataclass(frozen=True)
class Settings:
    """Tunable parameters of the evolution."""

    population_size: int = 200
    genes_per_individual: int = 150
    mutation_rate: float = 0.02
    tournament_size: int = 5
    display_frequency: int = 20
    show_stats: bool = True
    progressive: bool = True
    initial_resolution_factor: int = 8
    progressive_frequency: int = 50

    def __post_init__(self) -> None:
        if self.population_size < 1:
            raise ValueError("population_size must be at least 1")
        if self.genes_per_individual < 1:
            raise ValueError("genes_per_individual must be at least 1")
        if self.display_frequency < 1 or self.progressive_frequency < 1:
            raise ValueError("frequencies must be at least 1")
        if self.initial_resolution_factor < 1:
            raise ValueError("initial_resolution_factor must be at least 1")


def downscale(
    pixels: Sequence[Pixel], width: int, height: int, factor: int
) -> tuple[list[Pixel], int, int]:
    """Average factor x factor blocks of an RGB image.

    Returns the new pixels with the new width and height; alpha is set opaque.
    """
    if factor < 1:
        raise ValueError(f"resolution factor must be at least 1, got {factor}")
    if len(pixels) != width * height:
        raise ValueError(f"expected {width * height} pixels, got {len(pixels)}")
    new_w, new_h = width // factor, height // factor
    if new_w == 0 or new_h == 0:
        raise ValueError(f"resolution factor {factor} results in zero dimension")

    out: list[Pixel] = []
    for y in range(new_h):
        rows = range(y * factor, min((y + 1) * factor, height))
        for x in range(new_w):
            cols = range(x * factor, min((x + 1) * factor, width))
            block = [pixels[sy * width + sx] for sy in rows for sx in cols]
            count = len(block)
            out.append(
                Pixel(
                    sum(p.r for p in block) // count,
                    sum(p.g for p in block) // count,
                    sum(p.b for p in block) // count,
                    255,
                )
            )
    return out, new_w, new_h


def _load_target(target: Image.Image | str | Path) -> Image.Image:
    if isinstance(target, Image.Image):
        return target.convert("RGB")
    with Image.open(target) as img:
        return img.convert("RGB")


def _pixels_of(image: Image.Image) -> list[Pixel]:
    it = iter(image.tobytes())
    return [Pixel(r, g, b, 255) for r, g, b in zip(it, it, it)]


def _image_of(pixels: Sequence[Pixel], width: int, height: int) -> Image.Image:
    return Image.frombytes("RGBA", (width, height), b"".join(bytes(p) for p in pixels))


class Application:
    """Evolves a population of shape collections towards a target image."""

    def __init__(
        self,
        target: Image.Image | str | Path,
        settings: Settings | None = None,
        rng: random.Random | None = None,
        display: bool = False,
    ) -> None:
        self.settings = settings or Settings()
        self._rng = rng or random.Random()
        self._display = display
        self._screen = None
        self._running = True

        image = _load_target(target)
        self.canvas_w, self.canvas_h = image.size
        log.info("Target image size: %d, %d", self.canvas_w, self.canvas_h)
        self._target_pixels = _pixels_of(image)

        self.generation_count = 0
        self.last_displayed_generation = 0
        self._evaluator = PopulationEvaluator(1, 1)

        s = self.settings
        self._fitness_values: list[float] = [0.0] * s.population_size
        self._population: list[Individual] = [[]]
        self._population.extend(
            random_individual(self._rng, self.canvas_w, self.canvas_h, s.genes_per_individual)
            for _ in range(s.population_size - 1)
        )
        self._best: Individual = list(self._population[1]) if s.population_size > 1 else []

        if s.progressive:
            self.current_resolution_factor = s.initial_resolution_factor
            if not self.downscale_target_image(self.current_resolution_factor):
                raise ValueError(
                    f"target image {self.canvas_w}x{self.canvas_h} is too small for "
                    f"resolution factor {self.current_resolution_factor}"
                )
        else:
            self.current_resolution_factor = 1
            self._downscaled_target = list(self._target_pixels)
            self._evaluator.resize(self.canvas_w, self.canvas_h)

        log.info("Using CPU implementation")
        self._evaluator.upload_population(self._population)

    @property
    def evaluator(self) -> PopulationEvaluator:
        return self._evaluator

    @property
    def population(self) -> list[Individual]:
        return [list(ind) for ind in self._population]

    @property
    def fitness_values(self) -> list[float]:
        return list(self._fitness_values)

    @property
    def best_individual(self) -> Individual:
        return list(self._best)

    @property
    def downscaled_target(self) -> list[Pixel]:
        return list(self._downscaled_target)

    def downscale_target_image(self, factor: int) -> bool:
        """Shrink the target by factor and resize rendering to match.

        Returns False, leaving everything unchanged, when the result would be empty.
        """
        try:
            pixels, w, h = downscale(self._target_pixels, self.canvas_w, self.canvas_h, factor)
        except ValueError as exc:
            log.warning("Warning: %s", exc)
            return False
        self._downscaled_target = pixels
        self._evaluator.resize(w, h)
        self._evaluator.upload_population(self._population)
        return True

    def increase_resolution(self) -> None:
        """Halve the resolution factor, if it is above 1."""
        if self.current_resolution_factor <= 1:
            return
        next_factor = self.current_resolution_factor // 2
        if self.canvas_w // next_factor == 0 or self.canvas_h // next_factor == 0:
            log.info("Cannot increase resolution further without zero dimensions.")
            return
        self.current_resolution_factor = next_factor
        log.info("Increasing resolution to 1/%d of original", next_factor)
        self.downscale_target_image(next_factor)

    def _mutated_copy(self, individual: Individual, rate: float) -> Individual:
        child = list(individual)
        mutate_individual(child, self._rng, self.canvas_w, self.canvas_h, rate)
        return child

    def _repair_best(self, best: Individual) -> Individual:
        genes = self.settings.genes_per_individual
        log.warning("Warning: best individual has %d genes, expected %d", len(best), genes)
        if not best:
            return random_individual(self._rng, self.canvas_w, self.canvas_h, genes)
        best = list(best)
        while len(best) < genes:
            best.append(best[self._rng.randrange(len(best))])
        return best[:genes]

    def update(self) -> None:
        """Evaluate the population and breed the next generation."""
        s = self.settings
        genes = s.genes_per_individual
        rate = s.mutation_rate
        self._fitness_values = self._evaluator.render_and_evaluate(self._downscaled_target)
        fitness = self._fitness_values

        best_index = 0
        for index, value in enumerate(fitness[: s.population_size]):
            if value > fitness[best_index]:
                best_index = index
        best = list(self._population[best_index])
        if len(best) != genes:
            best = self._repair_best(best)
        self._best = best

        validated: list[Individual] = [best]
        for individual in self._population[1 : s.population_size]:
            if len(individual) == genes:
                validated.append(individual)
            else:
                validated.append(self._mutated_copy(best, rate * 5))
        while len(validated) < s.population_size:
            validated.append(self._mutated_copy(best, rate * 10))

        new_pop: list[Individual] = [list(best)]
        while len(new_pop) < s.population_size:
            i1 = tournament_select(fitness, self._rng, s.tournament_size)
            i2 = tournament_select(fitness, self._rng, s.tournament_size)
            if not (0 <= i1 < len(validated) and 0 <= i2 < len(validated)):
                i1 = i2 = 0
            child1, child2 = one_point_crossover(validated[i1], validated[i2], self._rng)
            if len(child1) != genes:
                child1 = self._mutated_copy(validated[0], rate * 2)
            if len(child2) != genes:
                child2 = self._mutated_copy(validated[0], rate * 2)
            mutate_individual(child1, self._rng, self.canvas_w, self.canvas_h, rate)
            mutate_individual(child2, self._rng, self.canvas_w, self.canvas_h, rate)
            new_pop.append(child1)
            if len(new_pop) < s.population_size:
                new_pop.append(child2)

        invalid = next((ind for ind in new_pop if len(ind) != genes), None)
        if invalid is not None:
            log.error("Invalid individual size after update: %d. Regenerating...", len(invalid))
            first = new_pop[0]
            new_pop = [first] + [
                self._mutated_copy(first, rate * 5) for _ in range(s.population_size - 1)
            ]

        self._population = new_pop
        self._evaluator.upload_population(self._population)
        self.generation_count += 1

    def render(self) -> Image.Image:
        """Render the first individual; show it in the window if one is open."""
        ev = self._evaluator
        image = _image_of(ev.rendered_image(0), ev.width, ev.height)
        if self._screen is not None:
            self._blit(image)
        return image

    def _blit(self, image: Image.Image) -> None:
        import pygame

        screen = self._screen
        win_w, win_h = screen.get_size()
        w, h = image.size
        scale = min(win_w / w, win_h / h)
        surface = pygame.image.frombuffer(image.tobytes(), image.size, "RGBA")
        scaled_size = (max(1, int(w * scale)), max(1, int(h * scale)))
        surface = pygame.transform.scale(surface, scaled_size)
        offset = ((win_w - w * scale) / 2.0, (win_h - h * scale) / 2.0)
        screen.fill((0, 0, 0))
        screen.blit(surface, offset)
        pygame.display.flip()

    def save_current_image(self, output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> Path:
        """Save the current rendering as a timestamped PNG and return its path."""
        image = self.render() if self._screen is None else self._current_image()
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = directory / f"evo_art_gen{self.generation_count}_{stamp}.png"
        image.save(path)
        log.info("Image saved successfully to: %s", path.resolve())
        return path

    def _current_image(self) -> Image.Image:
        ev = self._evaluator
        return _image_of(ev.rendered_image(0), ev.width, ev.height)

    def _open_window(self) -> None:
        import pygame

        pygame.init()
        self._screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)

    def _close_window(self) -> None:
        import pygame

        self._screen = None
        pygame.quit()

    def _process_events(self) -> None:
        if self._screen is None:
            return
        import pygame

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_s:
                self.save_current_image()

    def _report(self, clock: float) -> float:
        s = self.settings
        gen = self.generation_count
        mode = f"resolution: 1/{self.current_resolution_factor}, mode: CPU"
        if s.show_stats and gen > 0:
            now = time.perf_counter()
            elapsed = max(now - clock, 1e-9)
            log.info(
                "Generation %d best fitness = %s (%s) | Perf: %.2f generations/sec",
                gen,
                self._fitness_values[0],
                mode,
                s.display_frequency / elapsed,
            )
            return now
        log.info("Generation %d (%s)", gen, mode)
        return time.perf_counter() if s.show_stats else clock

    def run(self, max_generations: int | None = None) -> int:
        """Evolve until the window closes or max_generations is reached.

        Returns the number of generations evolved so far.
        """
        s = self.settings
        if self._display and self._screen is None:
            self._open_window()
        self._running = True
        clock = time.perf_counter()
        try:
            while self._running and (
                max_generations is None or self.generation_count < max_generations
            ):
                self._process_events()
                if not self._running:
                    break
                self.update()
                gen = self.generation_count
                at_step = s.progressive and gen > 0 and gen % s.progressive_frequency == 0
                force = at_step and self.current_resolution_factor < s.initial_resolution_factor
                if gen % s.display_frequency == 0 or gen == 0 or force:
                    self.render()
                    self.last_displayed_generation = gen
                    clock = self._report(clock)
                if at_step and self.current_resolution_factor > 1:
                    self.increase_resolution()
        finally:
            if self._screen is not None:
                self._close_window()
        return self.generation_count


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="evoart", description="Evolve coloured shapes towards a target image."
    )
    parser.add_argument("target", nargs="?", default=str(DEFAULT_TARGET), help="target image")
    parser.add_argument("--generations", type=int, default=None, help="stop after this many")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--output", default=str(DEFAULT_OUTPUT_DIR), help="directory for saved images")
    parser.add_argument("--headless", action="store_true", help="do not open a window")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        app = Application(
            args.target, rng=random.Random(args.seed), display=not args.headless
        )
    except (OSError, UnidentifiedImageError) as exc:
        log.error("ERROR: Failed to load target image from %s: %s", args.target, exc)
        return 1
    except ValueError as exc:
        log.error("ERROR: %s", exc)
        return 1
    app.run(args.generations)
    if args.headless:
        app.save_current_image(args.output)
    return 0