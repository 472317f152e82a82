import math
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Sequence, Tuple

from .errors import InvalidArgumentError

class Numeric(Protocol):
    """What a gene value or a fitness has to support."""
    def __add__(self, other): ...
    def __mul__(self, other): ...
    def __lt__(self, other) -> bool: ...
    def __float__(self) -> float: ...

@dataclass(frozen=True)
class Gene:
    value: float
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidArgumentError(f"gene bounds must be finite, got [{self.min}, {self.max}]")
        if self.min > self.max:
            raise InvalidArgumentError(f"gene bounds inverted: min={self.min} > max={self.max}")

    def new_instance(self, value) -> 'Gene':
        return replace(self, value=float(value))

    def is_valid(self) -> bool:
        return self.min <= self.value <= self.max

@dataclass(frozen=True)
class IntegerGene(Gene):
    def __post_init__(self):
        super().__post_init__()
        if math.ceil(self.min) > math.floor(self.max):
            raise InvalidArgumentError(f"no integer lies in [{self.min}, {self.max}]")

    def new_instance(self, value) -> 'IntegerGene':
        v = int(round(float(value)))
        # rounding may step outside non-integral bounds
        v = max(math.ceil(self.min), min(math.floor(self.max), v))
        return replace(self, value=v)

Genotype = Tuple[Gene, ...]

@dataclass(frozen=True)
class Phenotype:
    genotype: Genotype
    fitness: Optional[Numeric] = None

    def with_genotype(self, genotype: Sequence[Gene]) -> 'Phenotype':
        # fitness no longer matches the new genes
        return Phenotype(tuple(genotype), None)

    @property
    def evaluated(self) -> bool:
        return self.fitness is not None

