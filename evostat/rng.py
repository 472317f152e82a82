from typing import List, Union
import numpy as np

from .errors import InvalidArgumentError

SeedLike = Union[None, int, np.random.SeedSequence]

def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Seeded random stream. Passing a Generator through returns it unchanged."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)

def spawn_rngs(seed: SeedLike, n: int) -> List[np.random.Generator]:
    """`n` statistically independent streams derived from one seed.

    Stream `i` depends only on `(seed, i)`, so handing stream `i` to worker `i`
    keeps results reproducible however the work is scheduled.
    """
    if n < 0:
        raise InvalidArgumentError(f"cannot spawn a negative number of streams ({n})")
    ss = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in ss.spawn(n)]
