import numpy as np
import pytest

from evostat.config import EvoConfig, apply_profile
from evostat.errors import InvalidArgumentError
from evostat.evolution import generation_step, mutate_population
from evostat.genes import Gene, Phenotype
from evostat.rng import spawn_rngs


def _pop(size=12, n_genes=6, seed=0):
    rng = np.random.default_rng(seed)
    return [Phenotype(tuple(Gene(float(v), -10.0, 10.0) for v in rng.uniform(-10, 10, n_genes)),
                      float(i)) for i in range(size)]


def test_worker_count_does_not_change_the_outcome():
    pop = _pop()
    serial, n1 = mutate_population(pop, 0.5, seed=7, n_workers=1)
    threaded, n4 = mutate_population(pop, 0.5, seed=7, n_workers=4)
    assert serial == threaded
    assert n1 == n4 == len(pop) * 3


def test_mutate_population_rejects_zero_workers():
    with pytest.raises(InvalidArgumentError):
        mutate_population(_pop(), 0.5, seed=1, n_workers=0)


def test_spawned_streams_are_reproducible_and_distinct():
    a = [r.random() for r in spawn_rngs(3, 4)]
    b = [r.random() for r in spawn_rngs(3, 4)]
    assert a == b
    assert len(set(a)) == 4


def test_generation_step_reports_input_and_replays():
    pop = _pop()
    cfg = EvoConfig(mutation_probability=0.2, random_seed=5, n_workers=2)
    stat, new_pop, n_mut = generation_step(pop, cfg, generation=3)
    assert stat.count == len(pop)
    assert stat.max == float(len(pop) - 1)
    assert n_mut == len(pop) * 2
    again = generation_step(pop, cfg, generation=3)
    assert again[1] == new_pop
    other = generation_step(pop, cfg, generation=4)
    assert other[1] != new_pop


def test_config_validation_and_profiles():
    assert EvoConfig().validate().mutation_probability == 0.05
    assert apply_profile(EvoConfig(), "explore").mutation_probability == 0.3
    assert apply_profile(EvoConfig(), "Exploit").mutation_probability == 0.01
    with pytest.raises(InvalidArgumentError):
        apply_profile(EvoConfig(), "random")
    for bad in (dict(mutation_probability=0.0), dict(random_seed=-1),
                dict(n_workers=0), dict(optimize="up")):
        with pytest.raises(InvalidArgumentError):
            EvoConfig(**bad).validate()
