import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import stats

from .errors import InvalidArgumentError, ArithmeticDegenerateError

@dataclass(frozen=True)
class Domain:
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidArgumentError(f"domain bounds must be finite, got [{self.min}, {self.max}]")
        if self.min > self.max:
            raise InvalidArgumentError(f"malformed domain: min={self.min} > max={self.max}")
        if self.min == self.max:
            raise ArithmeticDegenerateError(f"zero-width domain at {self.min}")

def _y2(x1: float, x2: float, y1: float) -> float:
    # ordinate at x2 that makes the trapezoid under the line have area 1
    return -((x2 - x1) * y1 - 2) / (x2 - x1)

def _out(a: np.ndarray):
    return float(a) if a.ndim == 0 else a

class LinearDistribution:
    """Normalised density that is a straight line over a bounded interval.

    Only the left ordinate `y1` is given; the right ordinate `y2` follows from
    the unit-area condition. When that would make `y2` negative the density
    becomes a triangle that hits zero before the end of the domain: `y2` is
    set to 0 and the upper bound shrinks to ``x1 + 2 / y1``.

    ``pdf(x) = k·x + d`` on ``[x1, x2]`` with ``k = (y2 - y1) / (x2 - x1)`` and
    ``d = y1 - k·x1``; ``cdf`` is its antiderivative anchored at ``x1``.
    """

    def __init__(self, domain, y1: float):
        if not isinstance(domain, Domain):
            domain = Domain(*domain)
        y1 = float(y1)
        if not math.isfinite(y1) or y1 < 0:
            raise InvalidArgumentError(f"y1 must be a finite value >= 0, got {y1}")
        x1, x2 = float(domain.min), float(domain.max)
        if not math.isfinite(x2 - x1):
            raise InvalidArgumentError(f"domain width overflows: [{x1}, {x2}]")
        y2 = _y2(x1, x2, y1)
        if y2 <= 0:
            y2 = 0.0
            x2 = x1 + 2.0 / y1
            if x2 <= x1:
                raise ArithmeticDegenerateError(f"support x1 + 2/y1 collapses onto x1={x1} for y1={y1}")
        self._domain = domain
        self._x1, self._x2, self._y1, self._y2 = x1, x2, y1, y2
        self._k = (y2 - y1) / (x2 - x1)
        self._d = y1 - self._k * x1

    @property
    def domain(self) -> Domain: return self._domain
    @property
    def x1(self) -> float: return self._x1
    @property
    def x2(self) -> float: return self._x2
    @property
    def y1(self) -> float: return self._y1
    @property
    def y2(self) -> float: return self._y2
    @property
    def slope(self) -> float: return self._k
    @property
    def intercept(self) -> float: return self._d

    def pdf(self, x):
        x = np.asarray(x, dtype=np.float64)
        inside = (x >= self._x1) & (x <= self._x2)
        return _out(np.where(inside, np.maximum(self._k * x + self._d, 0.0), 0.0))

    def cdf(self, x):
        x = np.asarray(x, dtype=np.float64)
        x1, k, d = self._x1, self._k, self._d
        area = k * (x * x - x1 * x1) / 2.0 + d * (x - x1)
        p = np.where(x < x1, 0.0, np.where(x > self._x2, 1.0, np.clip(area, 0.0, 1.0)))
        return _out(p)

    def ppf(self, q):
        """Inverse of `cdf` on ``[0, 1]``."""
        q = np.asarray(q, dtype=np.float64)
        if np.any(~np.isfinite(q)) or np.any((q < 0) | (q > 1)):
            raise InvalidArgumentError("quantiles must lie in [0, 1]")
        # solves y1·t + k·t²/2 = q for t = x - x1 without cancellation
        root = np.sqrt(np.maximum(self._y1 ** 2 + 2.0 * self._k * q, 0.0))
        denom = self._y1 + root
        t = np.divide(2.0 * q, denom, out=np.zeros_like(q), where=denom > 0)
        return _out(np.clip(self._x1 + t, self._x1, self._x2))

    def sample(self, size=None, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        return self.ppf(rng.random(size))

    def to_scipy(self) -> stats.rv_continuous:
        return _LinearGen(dist=self, a=self._x1, b=self._x2, name="linear")

    def pdf_text(self) -> str:
        return f"p(x) = {self._k:f}·x + {self._d:f}"

    def cdf_text(self) -> str:
        return f"P(x) = {self._k / 2.0:f}·(x² - {self._x1 ** 2:f}) + {self._d:f}·(x - {self._x1:f})"

    def _key(self):
        return (self._domain, self._x1, self._x2, self._y1, self._y2)

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"LinearDistribution[({self._x1:f}, {self._y1:f}), ({self._x2:f}, {self._y2:f})]"

class _LinearGen(stats.rv_continuous):
    """scipy.stats view of a LinearDistribution."""

    def __init__(self, dist: LinearDistribution, **kwargs):
        super().__init__(**kwargs)
        self._dist = dist

    def _updated_ctor_param(self):
        # scipy re-instantiates the generator when freezing or copying
        dct = super()._updated_ctor_param()
        dct["dist"] = self._dist
        return dct

    def _pdf(self, x):
        return self._dist.pdf(x)

    def _cdf(self, x):
        return self._dist.cdf(x)

    def _ppf(self, q):
        return self._dist.ppf(q)
