import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .errors import InvalidArgumentError
from .genes import Phenotype
from .median import median

logger = logging.getLogger(__name__)

OPTIMIZE = ("maximize", "minimize")

@dataclass(frozen=True)
class Statistic:
    """Fitness summary of one population snapshot.

    When ``count == 0`` the sums, mean, variance and std are 0 and the
    value-bearing fields (min, max, median, best, worst) are None; check
    ``count`` before relying on them.
    """
    count: int = 0
    sum: float = 0.0
    sum_of_squares: float = 0.0
    min: Optional[float] = None
    max: Optional[float] = None
    mean: float = 0.0
    variance: float = 0.0
    median: Optional[float] = None
    best: Optional[Phenotype] = None
    worst: Optional[Phenotype] = None

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)

    def as_dict(self) -> dict:
        return {"count": self.count, "sum": self.sum, "sum_of_squares": self.sum_of_squares,
                "min": self.min, "max": self.max, "mean": self.mean,
                "variance": self.variance, "std": self.std, "median": self.median}

def _fitness(p: Phenotype) -> float:
    if p.fitness is None:
        raise InvalidArgumentError("population contains an unevaluated phenotype (fitness is None)")
    f = float(p.fitness)
    if not math.isfinite(f):
        raise InvalidArgumentError(f"fitness must be finite, got {p.fitness!r}")
    return f

@dataclass
class FitnessAccumulator:
    """Running sums over fitness values.

    Partial accumulators built over disjoint slices can be merged with
    `combine`. The raw values are kept so the median is selected over the
    whole, centralised buffer.
    """
    optimize: str = "maximize"
    count: int = 0
    sum: float = 0.0
    sum_of_squares: float = 0.0
    min: float = math.inf
    max: float = -math.inf
    best: Optional[Phenotype] = None
    worst: Optional[Phenotype] = None
    values: List[float] = field(default_factory=list)

    def __post_init__(self):
        if self.optimize not in OPTIMIZE:
            raise InvalidArgumentError(f"optimize must be one of {OPTIMIZE}, got {self.optimize!r}")

    def _better(self, a: Phenotype, b: Phenotype) -> bool:
        fa, fb = float(a.fitness), float(b.fitness)
        return fa > fb if self.optimize == "maximize" else fa < fb

    def _rank(self, p: Phenotype):
        if self.best is None or self._better(p, self.best): self.best = p
        if self.worst is None or self._better(self.worst, p): self.worst = p

    def accept(self, p: Phenotype) -> 'FitnessAccumulator':
        f = _fitness(p)
        self.count += 1
        self.sum += f
        self.sum_of_squares += f * f
        if f < self.min: self.min = f
        if f > self.max: self.max = f
        self._rank(p)
        self.values.append(f)
        return self

    def combine(self, other: 'FitnessAccumulator') -> 'FitnessAccumulator':
        if other.optimize != self.optimize:
            raise InvalidArgumentError("cannot combine accumulators with different optimize directions")
        out = FitnessAccumulator(self.optimize, self.count + other.count,
                                 self.sum + other.sum,
                                 self.sum_of_squares + other.sum_of_squares,
                                 min(self.min, other.min), max(self.max, other.max),
                                 self.best, self.worst, self.values + other.values)
        for p in (other.best, other.worst):
            if p is not None: out._rank(p)
        return out

    def result(self) -> Statistic:
        n = self.count
        if n == 0:
            return Statistic()
        mean = self.sum / n
        var = 0.0 if n <= 1 else max(self.sum_of_squares / n - mean * mean, 0.0)
        return Statistic(count=n, sum=self.sum, sum_of_squares=self.sum_of_squares,
                         min=self.min, max=self.max, mean=mean, variance=var,
                         median=median(np.asarray(self.values, dtype=np.float64)),
                         best=self.best, worst=self.worst)

def evaluate(population: Sequence[Phenotype], optimize: str = "maximize") -> Statistic:
    """Summarise the fitness of `population` without touching it."""
    acc = FitnessAccumulator(optimize)
    for p in population:
        acc.accept(p)
    s = acc.result()
    logger.debug("evaluated %d phenotypes: mean=%.6g variance=%.6g median=%s",
                 s.count, s.mean, s.variance, s.median)
    return s
