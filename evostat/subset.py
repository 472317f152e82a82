import numbers
import numpy as np

from .errors import InvalidArgumentError

def _count(name: str, v) -> int:
    if isinstance(v, bool) or not isinstance(v, numbers.Integral):
        raise InvalidArgumentError(f"{name} must be an integer, got {v!r}")
    if v < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {v}")
    return int(v)

def subset(n: int, k: int, rng: np.random.Generator) -> np.ndarray:
    """Draw `k` distinct indices from `[0, n)`, every k-subset equally likely.

    Partial Fisher-Yates over a virtual identity array: only swapped slots are
    stored, so time and memory are O(k) however large `n` is. Exactly `k`
    integer draws are taken from `rng`. The result is sorted ascending.
    """
    n = _count("n", n); k = _count("k", k)
    if k > n:
        raise InvalidArgumentError(f"subset size k={k} exceeds population size n={n}")
    swapped = {}
    out = np.empty(k, dtype=np.int64)
    for i in range(k):
        j = int(rng.integers(i, n))
        out[i] = swapped.get(j, j)
        swapped[j] = swapped.get(i, i)
    out.sort()
    return out
