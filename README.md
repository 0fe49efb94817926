# evoart

evoart evolves a picture that resembles a target image. Each candidate picture
(an *individual*) is a list of semi-transparent shapes (circles, triangles and
squares), each with a position, a size and an RGBA colour. A genetic algorithm
with tournament selection, one-point crossover, mutation and elitism carries
the best individual over unchanged to the next generation and breeds the rest
of the population.

Fitness is the negated sum of squared RGB differences between a rendered
individual and the target, so a perfect match scores 0 and everything else
scores below it.

By default the search starts on a target shrunk to 1/8 of its size by block
averaging and halves that factor every 50 generations until it works at full
size.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
evoart [target] [--generations N] [--seed N] [--output DIR] [--headless]
```

- `target` – the image to approximate (default `../assets/AstridOgKnut.jpg`,
  relative to the working directory). It must be at least 8 pixels wide and
  high.
- `--generations N` – stop after N generations; without it the run goes on
  until the window is closed.
- `--seed N` – seed the random number generator for a repeatable run.
- `--headless` – do not open a window. When the run ends, the current best
  individual is saved as a PNG file.
- `--output DIR` – where `--headless` saves that image (default
  `../../output`).

Without `--headless` a window of 800×600 opens and shows the best individual,
scaled to fit, every 20 generations and whenever the resolution steps up.
While it is open, press **S** to save the best individual as a PNG file in
`../../output`; close the window to stop.

Progress is logged to the terminal: the generation number, the best fitness,
the working resolution and generations per second. The command exits with
status 1 if the target image cannot be loaded or is too small.

Saved files are named `evo_art_gen<generation>_<YYYYmmdd_HHMMSS>.png`.

## Using it as a library

```python
import random
from evoart.app import Application, Settings

app = Application(
    "target.png",
    settings=Settings(population_size=20, genes_per_individual=30),
    rng=random.Random(1),
)
app.run(100)                       # evolve 100 generations, no window
image = app.render()               # a PIL image of the best individual
path = app.save_current_image("out")
```

The modules:

- `evoart.pixel` – `Pixel`, an immutable RGBA value whose channels must be
  ints in 0..255; `bytes(pixel)` and `Pixel.from_bytes` convert to and from
  four bytes.
- `evoart.gene` – `Shape` (`CIRCLE`, `TRIANGLE`, `SQUARE`), `Gene` (shape,
  `x`, `y`, `size`, `color`), and `random_gene` / `random_individual`, which
  make random genes on a canvas of a given size. An individual is a plain
  `list` of genes.
- `evoart.rasterizer` – `Rasterizer`, a software renderer with `clear`,
  `draw`, `resize`, `width`, `height` and `data` (a copy of the row-major
  buffer). Circles are centred on the gene's position, squares are centred on
  it, and triangles have their first corner at it. Drawing blends each colour
  over the canvas by its alpha.
- `evoart.fitness` – `compute_fitness` for pixel buffers (raises
  `ValueError` when their sizes do not match the given width and height) and
  `compute_image_fitness` for two PIL images, compared over the target's area.
- `evoart.gautils` – `tournament_select`, `one_point_crossover` (returns two
  children) and `mutate_individual` (mutates in place and returns whether
  anything changed).
- `evoart.evaluator` – `PopulationEvaluator`, which holds a copy of a
  population (`upload_population`), scores every individual against a target
  (`render_and_evaluate`) and returns the rendering of one individual
  (`rendered_image`).
- `evoart.app` – `Settings` (population size, genes per individual, mutation
  rate, tournament size, display and resolution-step frequencies, whether to
  start at reduced resolution and at which factor), `Application` with
  `update`, `run`, `render`, `save_current_image`, `downscale_target_image`
  and `increase_resolution`, `downscale`, which shrinks a pixel buffer by an
  integer factor by averaging blocks, and `main`, the command above.

## Limitations

All rendering and scoring runs in pure Python on the CPU, one individual at a
time, with no parallelism or graphics-card acceleration. With the default
settings (200 individuals of 150 shapes) a generation takes noticeable time,
especially once the working resolution reaches full size; smaller settings
make experiments practical.