import logging
import math
import threading
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidArgumentError
from .genes import Gene, Phenotype
from .subset import subset

logger = logging.getLogger(__name__)

def _bounded(x, lo, hi): return max(lo, min(hi, x))

def check_probability(p) -> float:
    p = float(p)
    if not (0.0 < p <= 1.0):
        raise InvalidArgumentError(f"mutation probability must lie in (0, 1], got {p}")
    return p

def subset_size(n: int, p: float) -> int:
    return min(int(math.ceil(n * p)), n)

def gaussian_mutate(genes: Sequence[Gene], probability: float,
                    rng: np.random.Generator) -> Tuple[Tuple[Gene, ...], int]:
    """Gaussian mutation of ``ceil(len(genes) * probability)`` randomly chosen genes.

    Each chosen gene with value ``v`` and bounds ``[lo, hi]`` is replaced by a
    new gene holding ``clip(z * v, lo, hi)`` with ``z ~ N(0, 1)``. Note the
    draw *scales* the current value instead of being added to it; this is the
    established behaviour and is kept as is. The input is not modified.

    Returns the new genes and the number of mutated positions.
    """
    p = check_probability(probability)
    out = list(genes)
    k = subset_size(len(out), p)
    if k == 0:
        return tuple(out), 0
    for i in subset(len(out), k, rng):
        g = out[i]
        v = float(rng.standard_normal()) * float(g.value)
        out[i] = g.new_instance(_bounded(v, g.min, g.max))
    return tuple(out), k

class GaussianMutation:
    """Alterer applying `gaussian_mutate` with a fixed probability.

    `mutations` counts every gene changed through this instance; the counter
    is guarded so one instance may be shared between worker threads (each
    worker still needs its own random stream).
    """

    def __init__(self, probability: float = 0.05):
        self.probability = check_probability(probability)
        self._mutations = 0
        self._lock = threading.Lock()

    @property
    def mutations(self) -> int:
        return self._mutations

    def _count(self, k: int):
        with self._lock:
            self._mutations += k

    def mutate(self, genes: Sequence[Gene], rng: np.random.Generator) -> Tuple[Tuple[Gene, ...], int]:
        out, k = gaussian_mutate(genes, self.probability, rng)
        self._count(k)
        return out, k

    def mutate_phenotype(self, pt: Phenotype, rng: np.random.Generator) -> Tuple[Phenotype, int]:
        genes, k = self.mutate(pt.genotype, rng)
        return (pt.with_genotype(genes) if k else pt), k

    def alter(self, population: Sequence[Phenotype], rng: np.random.Generator) -> Tuple[List[Phenotype], int]:
        """Mutate every phenotype of `population` from one stream.

        Mutated phenotypes come back with ``fitness=None``.
        """
        out, total = [], 0
        for pt in population:
            new, k = self.mutate_phenotype(pt, rng)
            out.append(new); total += k
        logger.debug("altered %d phenotypes, %d genes mutated", len(out), total)
        return out, total

    def __repr__(self):
        return f"GaussianMutation(probability={self.probability})"
