"""Numerical settings shared by the volume computations."""

import dataclasses
from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass(frozen=True)
class Settings:
    # a pivot at or below this fraction of its original column is treated as zero
    singular_tolerance: float = 1e-12

    # passed through to scipy.integrate.quad
    quad_epsabs: float = 1.49e-8
    quad_epsrel: float = 1.49e-8
    quad_limit: int = 200

    # windows 10, 100, ... checked before trusting an integral over an unbounded domain
    divergence_windows: int = 6

    # how fast the exhausting cover approaches an endpoint not in the set
    cover_ratio: float = 0.5

    # allowed relative gap between the generator fold and 1/|det|
    factor_rel_tol: float = 1e-6

    def __post_init__(self) -> None:
        if not 0 < self.cover_ratio < 1:
            raise ValueError(f"cover_ratio must lie in (0, 1), got {self.cover_ratio}")
        if self.singular_tolerance < 0:
            raise ValueError("singular_tolerance must be non-negative")
        if self.divergence_windows < 1:
            raise ValueError("divergence_windows must be at least 1")


DEFAULT_SETTINGS = Settings()


def load_settings(path: Path) -> Settings:
    """Read settings from a YAML mapping, falling back to defaults for
    missing keys."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, but got {type(data).__name__}")

    known = {f.name for f in dataclasses.fields(Settings)}
    if unknown := sorted(set(data) - known):
        raise ValueError(f"Unknown settings in {path}: {', '.join(unknown)}")

    return Settings(**data)
