import dataclasses
import math

import numpy as np
import pytest

from evostat.errors import InvalidArgumentError
from evostat.genes import Gene, IntegerGene, Phenotype
from evostat.operators import GaussianMutation, gaussian_mutate


class ForcedNormal:
    """Real integer stream, fixed Gaussian draw."""

    def __init__(self, z, seed=0):
        self._rng = np.random.default_rng(seed)
        self.z = z

    def integers(self, *args, **kwargs):
        return self._rng.integers(*args, **kwargs)

    def standard_normal(self):
        return self.z


def test_extreme_draw_clamps_to_upper_bound():
    genes, k = gaussian_mutate([Gene(5.0, 0.0, 10.0)], 1.0, ForcedNormal(100.0))
    assert k == 1
    assert genes[0].value == 10.0


def test_extreme_negative_draw_clamps_to_lower_bound():
    genes, _ = gaussian_mutate([Gene(5.0, 0.0, 10.0)], 1.0, ForcedNormal(-100.0))
    assert genes[0].value == 0.0


def test_draw_scales_the_current_value():
    # multiplicative perturbation: z * v, not v + z
    genes, _ = gaussian_mutate([Gene(4.0, -10.0, 10.0)], 1.0, ForcedNormal(0.5))
    assert genes[0].value == 2.0


def test_mutated_values_stay_within_bounds():
    rng = np.random.default_rng(21)
    genes = [Gene(float(v), -1.0, 3.0) for v in rng.uniform(-1.0, 3.0, size=200)]
    for _ in range(20):
        genes, _ = gaussian_mutate(genes, 0.7, rng)
        assert all(g.is_valid() for g in genes)


def test_exactly_k_genes_change_and_input_is_untouched():
    original = [Gene(float(v), -100.0, 100.0) for v in range(1, 11)]
    snapshot = list(original)
    genes, k = gaussian_mutate(original, 0.5, ForcedNormal(2.0, seed=3))
    assert k == 5
    assert original == snapshot
    changed = [i for i, (a, b) in enumerate(zip(original, genes)) if a != b]
    assert len(changed) == 5
    for i in range(10):
        if i not in changed:
            assert genes[i] is original[i]


def test_subset_size_rounds_up():
    genes = [Gene(1.0, 0.0, 2.0)] * 10
    assert gaussian_mutate(genes, 0.01, np.random.default_rng(0))[1] == 1
    assert gaussian_mutate(genes, 1.0, np.random.default_rng(0))[1] == 10
    assert gaussian_mutate(genes, 0.25, np.random.default_rng(0))[1] == math.ceil(10 * 0.25)


def test_empty_gene_list_is_a_no_op():
    assert gaussian_mutate([], 0.5, np.random.default_rng(0)) == ((), 0)


def test_same_seed_same_result():
    genes = [Gene(float(v), -5.0, 5.0) for v in np.linspace(-4, 4, 9)]
    a = gaussian_mutate(genes, 0.4, np.random.default_rng(42))
    b = gaussian_mutate(genes, 0.4, np.random.default_rng(42))
    assert a == b


@pytest.mark.parametrize("p", [0.0, -0.2, 1.5, float("nan")])
def test_probability_outside_unit_interval_is_rejected(p):
    with pytest.raises(InvalidArgumentError):
        gaussian_mutate([Gene(1.0, 0.0, 2.0)], p, np.random.default_rng(0))
    with pytest.raises(InvalidArgumentError):
        GaussianMutation(p)


def test_integer_gene_stays_integral():
    genes, _ = gaussian_mutate([IntegerGene(3, 0, 10)], 1.0, ForcedNormal(1.4))
    assert genes[0].value == 4 and isinstance(genes[0].value, int)
    assert isinstance(genes[0], IntegerGene)


def test_genes_are_immutable():
    g = Gene(1.0, 0.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        g.value = 1.5
    with pytest.raises(InvalidArgumentError):
        Gene(1.0, 2.0, 0.0)


def test_alterer_counts_mutations_and_invalidates_fitness():
    pop = [Phenotype(tuple(Gene(1.0, -3.0, 3.0) for _ in range(4)), 7.0) for _ in range(3)]
    m = GaussianMutation(0.5)
    out, total = m.alter(pop, np.random.default_rng(1))
    assert total == 3 * 2
    assert m.mutations == 6
    assert all(pt.fitness is None for pt in out)
    assert all(pt.fitness == 7.0 for pt in pop)
    m.mutate(pop[0].genotype, np.random.default_rng(2))
    assert m.mutations == 8


def test_integer_gene_rounding_stays_within_fractional_bounds():
    # 0.5 rounds half-to-even down to 0, below the lower bound
    genes, _ = gaussian_mutate([IntegerGene(1, 0.5, 1.4)], 1.0, ForcedNormal(0.5))
    assert genes[0].value == 1
    assert genes[0].is_valid()
    genes, _ = gaussian_mutate([IntegerGene(2, 0.5, 2.4)], 1.0, ForcedNormal(1.2))
    assert genes[0].value == 2 and genes[0].is_valid()


def test_integer_gene_needs_an_integer_in_bounds():
    with pytest.raises(InvalidArgumentError):
        IntegerGene(1, 1.2, 1.8)
