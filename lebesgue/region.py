"""lebesgue.region

The region between the graphs of two functions over a domain in the real
line, ``{(x, y) : x ∈ s, f(x) < y < g(x)}``.

Its area reduces to a one dimensional integral (Fubini): the vertical slice
over ``x`` is the interval ``(f(x), g(x))``, whose length is
``max(0, g(x) - f(x))``. Integrating the slice length over ``s`` gives the
area. Where ``f(x) >= g(x)`` the slice is empty and contributes nothing.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from .collaborators import (
    LEBESGUE,
    BaseMeasure,
    BorelOracle,
    IntegrationEngine,
    MeasurableSetOracle,
    QuadratureEngine,
)
from .config import DEFAULT_SETTINGS, Settings
from .ennreal import ENNReal
from .errors import NotMeasurable
from .intervals import Interval
from .logger import log
from .shapes import Shape

RealFunction: TypeAlias = Callable[[float], float]


@dataclass(frozen=True)
class RegionBetween(Shape):
    lower: RealFunction
    upper: RealFunction
    domain: Interval
    closed_lower: bool = False
    closed_upper: bool = False

    def ambient_axes(self) -> tuple[int, int]:
        return (0, 1)

    def functions(self) -> tuple[Callable, ...]:
        return (self.lower, self.upper)

    def slice(self, x: float) -> Interval:
        """The vertical section of the region above ``x``."""
        f, g = self.lower(x), self.upper(x)
        if math.isnan(f) or math.isnan(g):
            raise NotMeasurable(self, f"slice at {x!r} is undefined")
        return Interval(f, g, self.closed_lower, self.closed_upper)

    def slice_volume(self, x: float) -> float:
        return self.slice(x).volume().value

    def __contains__(self, member: object) -> bool:
        try:
            x, y = member  # type: ignore
        except (TypeError, ValueError):
            return False
        return x in self.domain and y in self.slice(x)

    def is_bounded(self) -> bool:
        # boundedness of f and g is not decidable from the outside
        return False

    def volume(
        self,
        measure: BaseMeasure = LEBESGUE,
        engine: IntegrationEngine | None = None,
    ) -> ENNReal:
        engine = engine or QuadratureEngine()
        v = engine.integrate(self.slice_volume, self.domain, measure)
        log.debug(f"region over {self.domain!s} has volume {v!s}")
        return v

    def __str__(self) -> str:
        return f"region({self.lower!r} < y < {self.upper!r}, x ∈ {self.domain!s})"


def region_between_lintegral(
    f: RealFunction,
    g: RealFunction,
    s: Interval,
    measure: BaseMeasure = LEBESGUE,
    *,
    closed_lower: bool = False,
    closed_upper: bool = False,
    engine: IntegrationEngine | None = None,
    oracle: MeasurableSetOracle | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> ENNReal:
    """
    Volume of the region between ``f`` and ``g`` over ``s`` as the integral
    of the slice lengths. The domain may be unbounded and the result may be
    infinite. Closing either boundary of the slices does not change it.
    """
    region = RegionBetween(f, g, s, closed_lower, closed_upper)
    (oracle or BorelOracle()).require(region)
    return region.volume(measure, engine or QuadratureEngine(settings))


def region_between_volume(
    f: RealFunction,
    g: RealFunction,
    s: Interval,
    measure: BaseMeasure = LEBESGUE,
    *,
    engine: IntegrationEngine | None = None,
    oracle: MeasurableSetOracle | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> ENNReal:
    """Volume of ``{(x, y) : x ∈ s, f(x) < y < g(x)}`` under ``measure × λ``."""
    return region_between_lintegral(
        f, g, s, measure, engine=engine, oracle=oracle, settings=settings
    )


def region_between_integral(
    f: RealFunction,
    g: RealFunction,
    s: Interval,
    measure: BaseMeasure = LEBESGUE,
    **kwargs,
) -> float:
    """The region volume as a float, for integrable ``f`` and ``g``.

    Raises ``Unrepresentable`` when the region has infinite volume.
    """
    return region_between_volume(f, g, s, measure, **kwargs).to_finite()
