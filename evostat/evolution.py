import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple, Union

import numpy as np

from .config import EvoConfig
from .errors import InvalidArgumentError
from .genes import Phenotype
from .operators import GaussianMutation
from .rng import SeedLike, spawn_rngs
from .statistics import Statistic, evaluate

logger = logging.getLogger(__name__)

def mutate_population(population: Sequence[Phenotype],
                      mutation: Union[GaussianMutation, float],
                      seed: SeedLike,
                      n_workers: int = 1) -> Tuple[List[Phenotype], int]:
    """Mutate every phenotype, optionally across worker threads.

    Phenotype ``i`` always draws from child stream ``i`` of `seed`, so the
    outcome is the same for any `n_workers`.
    """
    if not isinstance(mutation, GaussianMutation):
        mutation = GaussianMutation(mutation)
    if n_workers < 1:
        raise InvalidArgumentError(f"n_workers must be >= 1, got {n_workers}")
    rngs = spawn_rngs(seed, len(population))
    if n_workers == 1 or len(population) < 2:
        results = [mutation.mutate_phenotype(pt, r) for pt, r in zip(population, rngs)]
    else:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            results = list(ex.map(mutation.mutate_phenotype, population, rngs))
    out = [pt for pt, _ in results]
    total = sum(k for _, k in results)
    logger.debug("mutated population of %d with %d workers: %d genes changed",
                 len(out), n_workers, total)
    return out, total

def generation_step(population: Sequence[Phenotype], cfg: EvoConfig,
                    generation: int = 0) -> Tuple[Statistic, List[Phenotype], int]:
    """Summarise `population`, then mutate it.

    The seed for the generation is derived from ``cfg.random_seed`` and the
    generation index, so a run can be replayed from any generation.
    """
    cfg.validate()
    stat = evaluate(population, optimize=cfg.optimize)
    seed = np.random.SeedSequence([cfg.random_seed, generation])
    pop, n_mut = mutate_population(population, cfg.mutation_probability, seed, cfg.n_workers)
    logger.info("gen %d: n=%d mean=%.6g var=%.6g median=%s mutations=%d",
                generation, stat.count, stat.mean, stat.variance, stat.median, n_mut)
    return stat, pop, n_mut
