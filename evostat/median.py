"""Sort-free order statistics.

Both functions bisect on the value range and count how many elements fall
below, on and above the current guess. Every pass is one vectorised scan over
a private float64 copy of the input, and the range shrinks each pass to the
nearest value on the majority side, so no full sort is ever performed.
"""
import numpy as np

from .errors import InvalidArgumentError

def _working_copy(values) -> np.ndarray:
    m = np.array(values, dtype=np.float64).ravel()  # always a copy
    if m.size == 0:
        raise InvalidArgumentError("median of an empty sequence is undefined")
    if not np.all(np.isfinite(m)):
        raise InvalidArgumentError("values must be finite")
    return m

def _midpoint(lo: float, hi: float) -> float:
    mid = (lo + hi) / 2
    if not np.isfinite(mid):
        mid = lo / 2 + hi / 2  # lo + hi overflowed
    return min(max(mid, lo), hi)

def _scan(m: np.ndarray, guess: float, lo: float, hi: float):
    below = m < guess; above = m > guess
    less = int(np.count_nonzero(below)); greater = int(np.count_nonzero(above))
    equal = m.size - less - greater
    max_lt = max(lo, float(m[below].max())) if less else lo
    min_gt = min(hi, float(m[above].min())) if greater else hi
    return less, greater, equal, max_lt, min_gt

def median(values) -> float:
    """Torben's median.

    Returns the ``(n + 1) // 2``-th smallest value, i.e. the middle element for
    odd ``n`` and the lower of the two middle elements for even ``n``. No
    averaging is done: ``median([4, 1, 3, 2]) == 2``.
    """
    m = _working_copy(values)
    half = (m.size + 1) // 2
    lo, hi = float(m.min()), float(m.max())
    while True:
        guess = _midpoint(lo, hi)
        less, greater, equal, max_lt, min_gt = _scan(m, guess, lo, hi)
        if less <= half and greater <= half:
            break
        elif less > greater:
            hi = max_lt
        else:
            lo = min_gt
    if less >= half:
        return max_lt
    elif less + equal >= half:
        return guess
    return min_gt

def order_statistic(values, rank: int) -> float:
    """The `rank`-th smallest value (1-based) of `values`."""
    m = _working_copy(values)
    if isinstance(rank, bool) or int(rank) != rank or not 1 <= rank <= m.size:
        raise InvalidArgumentError(f"rank must be an integer in [1, {m.size}], got {rank!r}")
    rank = int(rank)
    lo, hi = float(m.min()), float(m.max())
    # invariant: the answer lies in [lo, hi]
    while lo < hi:
        guess = _midpoint(lo, hi)
        less, greater, equal, max_lt, min_gt = _scan(m, guess, lo, hi)
        if less >= rank:
            hi = max_lt
        elif less + equal >= rank:
            return guess
        else:
            lo = min_gt
    return lo
