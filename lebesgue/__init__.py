"""lebesgue

Lebesgue measure on real coordinate space: volumes of intervals, boxes and
balls, the region between two functions, how volume rescales under linear
maps, and lifting almost-everywhere statements from slices to whole sets.
"""

from .boxes import Box, ball_volume, box_volume, pi_box
from .collaborators import (
    LEBESGUE,
    BaseMeasure,
    BorelOracle,
    EliminationDecomposer,
    ExhaustingCover,
    IntegrationEngine,
    Lebesgue,
    MatrixDecomposer,
    MeasurableSetOracle,
    QuadratureEngine,
    SecondCountableCover,
    WithDensity,
)
from .config import DEFAULT_SETTINGS, Settings, load_settings
from .cover import AEWitness, GlobalAEWitness, NullSet, lift_ae, lift_ae_restrict
from .ennreal import ENNReal, ONE, TOP, ZERO
from .errors import (
    DomainMismatch,
    NotAlmostEverywhere,
    NotMeasurable,
    SingularMatrix,
    Unrepresentable,
    VolumeError,
)
from .generators import DiagonalMap, GeneratorChain, LinearMap, Transvection, compose
from .intervals import FiniteSet, Interval
from .linear import decompose, linear_scaling_factor, pushforward_volume, scaling_factor_1d
from .region import (
    RegionBetween,
    region_between_integral,
    region_between_lintegral,
    region_between_volume,
)
from .shapes import Shape, real_volume, volume
