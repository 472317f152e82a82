from dataclasses import dataclass

from .errors import InvalidArgumentError

@dataclass
class EvoConfig:
    mutation_probability: float = 0.05
    random_seed: int = 42
    n_workers: int = 1
    # direction used for best/worst in the statistics
    optimize: str = "maximize"

    def validate(self) -> 'EvoConfig':
        if not (0.0 < self.mutation_probability <= 1.0):
            raise InvalidArgumentError(f"mutation_probability must lie in (0, 1], got {self.mutation_probability}")
        if isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int) or self.random_seed < 0:
            raise InvalidArgumentError(f"random_seed must be a non-negative int, got {self.random_seed!r}")
        if self.n_workers < 1:
            raise InvalidArgumentError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.optimize not in ("maximize", "minimize"):
            raise InvalidArgumentError(f"optimize must be 'maximize' or 'minimize', got {self.optimize!r}")
        return self

def apply_profile(cfg: 'EvoConfig', profile: str) -> 'EvoConfig':
    p = profile.lower()
    if p in ("explore", "exploration"):
        cfg.mutation_probability = 0.3
    elif p in ("exploit", "exploitation", "finetune"):
        cfg.mutation_probability = 0.01
    else:
        raise InvalidArgumentError(f"unknown profile {profile!r}")
    return cfg
