"""Fitness: negated squared RGB error between a rendering and the target."""

from __future__ import annotations

from collections.abc import Sequence

from PIL import Image

from evoart.pixel import Pixel


def compute_fitness(
    rendered: Sequence[Pixel], target: Sequence[Pixel], width: int, height: int
) -> float:
    """Return minus the summed squared RGB difference; alpha is ignored."""
    size = width * height
    if len(rendered) != size or len(target) != size:
        raise ValueError(
            f"fitness size mismatch: rendered {len(rendered)}, target {len(target)}, expected {size}"
        )
    total = 0
    for p, q in zip(rendered, target):
        dr = p.r - q.r
        dg = p.g - q.g
        db = p.b - q.b
        total += dr * dr + dg * dg + db * db
    return -float(total)


def compute_image_fitness(rendered: Image.Image, target: Image.Image) -> float:
    """Fitness of two images over the target's area, comparing RGB only."""
    w, h = target.size
    if rendered.width < w or rendered.height < h:
        raise ValueError(f"rendered image {rendered.size} is smaller than target {target.size}")
    got = rendered.convert("RGB").crop((0, 0, w, h)).tobytes()
    want = target.convert("RGB").tobytes()
    return -float(sum((a - b) * (a - b) for a, b in zip(got, want)))