import random

import pytest

from evoart.gautils import mutate_individual, one_point_crossover, tournament_select
from evoart.gene import Gene, Shape, random_individual
from evoart.pixel import Pixel


def distinct_genes(n, offset=0):
    return [Gene(Shape.CIRCLE, float(i + offset), 0.0, 5.0, Pixel(1, 1, 1, 100)) for i in range(n)]


def test_tournament_empty_raises():
    with pytest.raises(ValueError):
        tournament_select([], random.Random(0))


def test_tournament_size_zero_returns_first():
    assert tournament_select([1.0, 5.0, 3.0], random.Random(0), 0) == 0


def test_tournament_single_member():
    assert tournament_select([7.0], random.Random(3), 5) == 0


def test_tournament_index_in_range():
    rng = random.Random(9)
    values = [float(v) for v in range(10)]
    assert all(0 <= tournament_select(values, rng) < 10 for _ in range(200))


def test_tournament_prefers_fitter():
    rng = random.Random(123)
    values = [float(v) for v in range(100)]
    picks = [tournament_select(values, rng, 5) for _ in range(1000)]
    assert sum(picks) / len(picks) > 60


def test_crossover_children_swap_tails():
    a = distinct_genes(10)
    b = distinct_genes(10, offset=100)
    c, d = one_point_crossover(a, b, random.Random(4))
    assert len(c) == len(d) == 10
    cuts = [k for k in range(1, 10) if c == a[:k] + b[k:] and d == b[:k] + a[k:]]
    assert len(cuts) == 1


def test_crossover_does_not_alias_parents():
    a = distinct_genes(4)
    b = distinct_genes(4, offset=10)
    c, _ = one_point_crossover(a, b, random.Random(0))
    c.clear()
    assert len(a) == 4


def test_crossover_single_gene_swaps_parents():
    a = distinct_genes(1)
    b = distinct_genes(1, offset=50)
    assert one_point_crossover(a, b, random.Random(0)) == (b, a)


def test_crossover_mismatch_copies_first_parent():
    a = distinct_genes(3)
    b = distinct_genes(5, offset=10)
    assert one_point_crossover(a, b, random.Random(0)) == (a, a)


def test_crossover_empty_first_copies_second():
    b = distinct_genes(2)
    assert one_point_crossover([], b, random.Random(0)) == (b, b)


def test_crossover_both_empty():
    assert one_point_crossover([], [], random.Random(0)) == ([], [])


def test_mutation_rate_zero_changes_nothing():
    ind = random_individual(random.Random(1), 50, 40, 30)
    before = list(ind)
    assert mutate_individual(ind, random.Random(2), 50, 40, 0.0) is False
    assert ind == before


def test_full_mutation_keeps_invariants():
    ind = random_individual(random.Random(5), 50, 40, 200)
    before = list(ind)
    assert mutate_individual(ind, random.Random(6), 50, 40, 1.0) is True
    assert len(ind) == 200
    assert ind != before
    for old, new in zip(before, ind):
        assert new.color.a == old.color.a
        assert 1.0 <= new.size <= 100.0
        if new.pos != old.pos:
            assert 0.0 <= new.x <= 50 and 0.0 <= new.y <= 40


def test_mutation_is_deterministic_per_seed():
    first = random_individual(random.Random(8), 30, 30, 50)
    second = list(first)
    mutate_individual(first, random.Random(11), 30, 30, 0.5)
    mutate_individual(second, random.Random(11), 30, 30, 0.5)
    assert first == second