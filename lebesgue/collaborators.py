"""lebesgue.collaborators

The external machinery the volume computations lean on, each as an
abstract interface with a default implementation:

- ``MeasurableSetOracle``: decides measurability of sets and functions.
- ``IntegrationEngine``: integrates non-negative functions over an interval.
- ``MatrixDecomposer``: factors an invertible matrix into generators.
- ``SecondCountableCover``: enumerates a countable family of witness
  intervals whose union is the union of all of them.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from scipy import integrate

from .config import DEFAULT_SETTINGS, Settings
from .ennreal import ENNReal, TOP, ZERO
from .errors import NotMeasurable, SingularMatrix
from .generators import DiagonalMap, GeneratorChain, LinearMap, Transvection
from .intervals import FiniteSet, Interval
from .logger import log
from .shapes import Shape

# ============================================================================
# MEASURABILITY
# ============================================================================


class MeasurableSetOracle(ABC):
    @abstractmethod
    def is_measurable(self, obj: object) -> bool:
        pass

    @abstractmethod
    def is_measurable_function(self, fn: object) -> bool:
        pass

    def require(self, obj: object) -> None:
        if not self.is_measurable(obj):
            raise NotMeasurable(obj)
        log.trace(f"{obj!s} is measurable")


class BorelOracle(MeasurableSetOracle):
    """
    Every shape the library can describe is a Borel set, as long as the
    functions it is built from are measurable. Functions are taken to be
    measurable when they can be called; an undefined value surfaces later
    as ``NotMeasurable`` during integration.
    """

    def is_measurable(self, obj: object) -> bool:
        if not isinstance(obj, Shape):
            return False
        return all(self.is_measurable_function(fn) for fn in obj.functions())

    def is_measurable_function(self, fn: object) -> bool:
        return callable(fn)


# ============================================================================
# INTEGRATION
# ============================================================================


class BaseMeasure(ABC):
    """A measure on the real line given by a density against Lebesgue measure."""

    @abstractmethod
    def density(self, x: float) -> float:
        pass


class Lebesgue(BaseMeasure):
    def density(self, x: float) -> float:
        return 1.0

    def __repr__(self) -> str:
        return "Lebesgue()"


@dataclass(frozen=True)
class WithDensity(BaseMeasure):
    rho: Callable[[float], float]

    def density(self, x: float) -> float:
        d = self.rho(x)
        if math.isnan(d) or d < 0:
            raise NotMeasurable(self.rho, f"density is {d!r} at {x!r}")
        return d


LEBESGUE = Lebesgue()


class IntegrationEngine(ABC):
    @abstractmethod
    def integrate(
        self,
        fn: Callable[[float], float],
        domain: Interval,
        measure: BaseMeasure = LEBESGUE,
    ) -> ENNReal:
        """The integral of a non-negative ``fn`` over ``domain``."""


class QuadratureEngine(IntegrationEngine):
    """Adaptive quadrature through ``scipy.integrate.quad``."""

    def __init__(self, settings: Settings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def integrate(
        self,
        fn: Callable[[float], float],
        domain: Interval,
        measure: BaseMeasure = LEBESGUE,
    ) -> ENNReal:
        # endpoints are null, so degenerate domains integrate to zero
        if domain.volume().is_zero():
            return ZERO

        def integrand(x: float) -> float:
            v = fn(x)
            if math.isnan(v):
                raise NotMeasurable(fn, f"integrand is undefined at {x!r}")
            if v < 0:
                raise ValueError(f"integrand must be non-negative, got {v!r} at {x!r}")
            return v * measure.density(x) if v else 0.0

        value, abserr, problem = self._quad(integrand, domain.lo, domain.hi)
        log.debug(f"∫ over {domain!s} = {value!r} (± {abserr:.2e})")

        if not math.isfinite(value):
            return TOP
        if not domain.is_bounded() and self._diverges(integrand, domain, value, abserr, problem):
            log.debug(f"∫ over {domain!s} diverges")
            return TOP
        if problem is not None:
            log.warning(f"quadrature over {domain!s}: {problem}")
        return ENNReal.of_real(value)

    def _quad(
        self, integrand: Callable[[float], float], lo: float, hi: float
    ) -> tuple[float, float, str | None]:
        """``quad`` with its diagnostics. The message is ``None`` on success."""
        result = integrate.quad(
            integrand,
            lo,
            hi,
            epsabs=self.settings.quad_epsabs,
            epsrel=self.settings.quad_epsrel,
            limit=self.settings.quad_limit,
            full_output=1,
        )
        # a fourth element is only returned when quad reports a problem
        problem = result[3] if len(result) > 3 else None
        return result[0], result[1], problem

    def _windows(self, domain: Interval) -> Iterator[tuple[float, float]]:
        """Bounded windows of width 10, 100, ... growing towards the infinite ends."""
        for k in range(1, self.settings.divergence_windows + 1):
            w = 10.0**k
            match (math.isfinite(domain.lo), math.isfinite(domain.hi)):
                case (True, False):
                    yield domain.lo, domain.lo + w
                case (False, True):
                    yield domain.hi - w, domain.hi
                case _:
                    yield -w, w

    def _diverges(
        self,
        integrand: Callable[[float], float],
        domain: Interval,
        value: float,
        abserr: float,
        problem: str | None,
    ) -> bool:
        """
        Over an infinite range ``quad`` can return a finite number for a
        divergent integral. It is trusted only if it reported no problem and
        no bounded window of the domain already holds more than it.
        """
        if problem is not None:
            return True
        slack = max(self.settings.quad_epsabs, self.settings.quad_epsrel * value) + abserr
        for lo, hi in self._windows(domain):
            partial, partial_err, _ = self._quad(integrand, lo, hi)
            if partial - partial_err > value + slack:
                log.trace(f"window [{lo:g}, {hi:g}] holds {partial!r} > {value!r}")
                return True
        return False


# ============================================================================
# MATRIX DECOMPOSITION
# ============================================================================


class MatrixDecomposer(ABC):
    @abstractmethod
    def decompose(self, m: LinearMap) -> GeneratorChain:
        """Generators whose ordered product equals ``m``."""


class EliminationDecomposer(MatrixDecomposer):
    """
    Gaussian elimination using only transvections.

    Row operations ``L`` and column operations ``R`` bring the matrix to a
    diagonal ``D = Lₘ⋯L₁ · M · R₁⋯Rₚ``. Inverting the shears gives
    ``M = L₁⁻¹⋯Lₘ⁻¹ · D · Rₚ⁻¹⋯R₁⁻¹``. A small pivot is enlarged by adding the
    later row with the largest entry in its column, so no permutations are
    needed.

    A pivot no larger than ``singular_tolerance`` times the largest entry of its
    column in ``m`` counts as zero. The test is relative, so scaling ``m`` by a
    nonzero constant never changes whether it is singular.
    """

    def __init__(self, settings: Settings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def decompose(self, m: LinearMap) -> GeneratorChain:
        n = m.dim
        a = np.array(m.matrix, dtype=float)
        axes = m.axes

        # pivots are judged against the size of their column in the input
        scale = np.abs(m.matrix).max(axis=0) if n else np.zeros(0)
        tolerance = self.settings.singular_tolerance

        rows: list[Transvection] = []
        cols: list[Transvection] = []

        def row_op(target: int, source: int, c: float) -> None:
            a[target, :] += c * a[source, :]
            rows.append(Transvection(axes[target], axes[source], c, axes))

        def col_op(target: int, source: int, c: float) -> None:
            # right multiplication by (I + c·E[source, target]) adds c·col_source to col_target
            a[:, target] += c * a[:, source]
            cols.append(Transvection(axes[source], axes[target], c, axes))

        for k in range(n):
            r = max(range(k, n), key=lambda r: abs(a[r, k]))
            if abs(a[r, k]) <= tolerance * scale[k] or a[r, k] == 0.0:
                raise SingularMatrix(m.determinant)
            if r != k:
                # signs agree, so the pivot grows to |a[k, k]| + |a[r, k]|
                sign = 1.0 if (a[k, k] >= 0) == (a[r, k] >= 0) else -1.0
                log.trace(f"pivot {k} is small, adding row {r}")
                row_op(k, r, sign)

            pivot = a[k, k]
            for r in range(k + 1, n):
                if a[r, k] != 0.0:
                    row_op(r, k, -a[r, k] / pivot)
                    a[r, k] = 0.0
            for c in range(k + 1, n):
                if a[k, c] != 0.0:
                    col_op(c, k, -a[k, c] / pivot)
                    a[k, c] = 0.0

        diagonal = DiagonalMap(tuple(np.diag(a)), axes)
        chain = (
            tuple(t.inverse() for t in rows)
            + (diagonal,)
            + tuple(t.inverse() for t in reversed(cols))
        )
        log.debug(f"decomposed {m!s} into {len(chain)} generators")
        return GeneratorChain(axes, chain)


# ============================================================================
# COUNTABLE COVERS
# ============================================================================

CoverDomain: TypeAlias = Interval | FiniteSet


class SecondCountableCover(ABC):
    @abstractmethod
    def pairs(self, s: CoverDomain) -> Iterator[tuple[float, float]]:
        """
        An ordered sequence of pairs ``a < b`` drawn from ``s`` whose open
        intervals cover every point of ``s`` except the residual.
        """

    @abstractmethod
    def residual(self, s: CoverDomain) -> tuple[float, ...]:
        """The (at most two) points of ``s`` no witness interval contains."""


class ExhaustingCover(SecondCountableCover):
    """
    Covers the interior of ``s`` with an increasing sequence of intervals.

    Endpoints that belong to ``s`` are used directly. Endpoints that do not
    are approached geometrically from an anchor inside ``s`` until the
    approach reaches the outermost float of ``s``, which joins the residual.
    """

    def __init__(self, settings: Settings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def residual(self, s: CoverDomain) -> tuple[float, ...]:
        match s:
            case FiniteSet():
                pts = s.sorted()
                return tuple(dict.fromkeys(pts[:1] + pts[-1:]))
            case Interval():
                if s.is_empty():
                    return ()
                if s.lo == s.hi:
                    return (s.lo,)
                lo, hi = self._extremes(s)
                return tuple(dict.fromkeys(x for x in (lo, hi) if x in s))
            case _:
                raise TypeError(f"cannot cover {s!r}")

    def pairs(self, s: CoverDomain) -> Iterator[tuple[float, float]]:
        match s:
            case FiniteSet():
                if len(s) >= 2:
                    pts = s.sorted()
                    yield (pts[0], pts[-1])
            case Interval():
                if s.volume().is_zero():
                    return
                if s.closed_lo and s.closed_hi:
                    yield (s.lo, s.hi)
                    return
                yield from self._exhaust(s)
            case _:
                raise TypeError(f"cannot cover {s!r}")

    @staticmethod
    def _extremes(s: Interval) -> tuple[float, float]:
        """The outermost floats of ``s``.

        An endpoint outside ``s`` is replaced by its neighbour towards the
        interior, the last float an open piece with ends in ``s`` cannot reach.
        """
        lo = s.lo if s.closed_lo else math.nextafter(s.lo, math.inf)
        hi = s.hi if s.closed_hi else math.nextafter(s.hi, -math.inf)
        return lo, hi

    def _exhaust(self, s: Interval) -> Iterator[tuple[float, float]]:
        anchor = s.representative()
        ratio = self.settings.cover_ratio
        lo, hi = self._extremes(s)

        def approach(end: float, extreme: float, k: int) -> float:
            try:
                if math.isinf(end):
                    x = anchor + math.copysign(ratio**-k, end)
                else:
                    x = end + (anchor - end) * ratio**k
            except OverflowError:
                return extreme
            return x if x in s else extreme

        previous = None
        k = 1
        while True:
            a = lo if s.closed_lo else approach(s.lo, lo, k)
            b = hi if s.closed_hi else approach(s.hi, hi, k)
            if not a < b:
                return
            if (a, b) != previous:
                yield (a, b)
                previous = (a, b)
            if (a, b) == (lo, hi):
                return
            k += 1
