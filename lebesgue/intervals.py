"""lebesgue.intervals

Intervals of the real line and their one dimensional volume.

The four bounded kinds (``Ioo``, ``Icc``, ``Ico``, ``Ioc``) differ only on
their endpoints, which form a null set, so all of them have volume
``max(0, hi - lo)``. Rays and the full line have infinite volume.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Real
from typing import Literal, Self, TypeAlias

from .ennreal import ENNReal, TOP, ZERO
from .shapes import Shape

Kind: TypeAlias = Literal["Ioo", "Icc", "Ico", "Ioc"]

KINDS: tuple[Kind, ...] = ("Ioo", "Icc", "Ico", "Ioc")


@dataclass(frozen=True)
class Interval(Shape):
    lo: float
    hi: float
    closed_lo: bool = True
    closed_hi: bool = True

    def __post_init__(self) -> None:
        if math.isnan(self.lo) or math.isnan(self.hi):
            raise ValueError(f"Interval endpoints cannot be NaN, got ({self.lo}, {self.hi})")
        object.__setattr__(self, "lo", float(self.lo))
        object.__setattr__(self, "hi", float(self.hi))
        # an infinite endpoint is never attained
        if math.isinf(self.lo):
            object.__setattr__(self, "closed_lo", False)
        if math.isinf(self.hi):
            object.__setattr__(self, "closed_hi", False)

    @classmethod
    def of_kind(cls, kind: Kind, lo: float, hi: float) -> Self:
        match kind:
            case "Ioo":
                return cls(lo, hi, False, False)
            case "Icc":
                return cls(lo, hi, True, True)
            case "Ico":
                return cls(lo, hi, True, False)
            case "Ioc":
                return cls(lo, hi, False, True)
            case _:
                raise ValueError(f"Unknown interval kind {kind!r}")

    @property
    def kind(self) -> Kind:
        match (self.closed_lo, self.closed_hi):
            case (False, False):
                return "Ioo"
            case (True, True):
                return "Icc"
            case (True, False):
                return "Ico"
            case _:
                return "Ioc"

    def is_empty(self) -> bool:
        if self.lo == self.hi:
            return not (self.closed_lo and self.closed_hi)
        return self.lo > self.hi

    def is_bounded(self) -> bool:
        return self.is_empty() or (math.isfinite(self.lo) and math.isfinite(self.hi))

    def volume(self) -> ENNReal:
        if self.hi <= self.lo:
            return ZERO
        if math.isinf(self.lo) or math.isinf(self.hi):
            return TOP
        return ENNReal.of_real(self.hi - self.lo)

    def diam(self) -> ENNReal:
        if self.is_empty():
            return ZERO
        return ENNReal.of_real(self.hi - self.lo)

    def __contains__(self, member: object) -> bool:
        if not isinstance(member, Real) or isinstance(member, bool):
            return False
        above = member > self.lo or (self.closed_lo and member == self.lo)
        below = member < self.hi or (self.closed_hi and member == self.hi)
        return above and below

    def representative(self) -> float:
        """Some point of the interval, or ``0.0`` when it is empty."""
        if self.is_empty():
            return 0.0
        match (math.isfinite(self.lo), math.isfinite(self.hi)):
            case (True, True):
                return self.lo + (self.hi - self.lo) / 2
            case (True, False):
                return self.lo + 1.0
            case (False, True):
                return self.hi - 1.0
            case _:
                return 0.0

    # Transformations

    def translate(self, t: float) -> "Interval":
        return Interval(self.lo + t, self.hi + t, self.closed_lo, self.closed_hi)

    def __add__(self, t: float) -> "Interval":
        return self.translate(t)

    def scale(self, a: float) -> "Interval":
        """The image of the interval under ``x ↦ a * x``."""
        if a == 0:
            return point(0.0) if not self.is_empty() else Interval(0.0, 0.0, False, False)
        if a > 0:
            return Interval(a * self.lo, a * self.hi, self.closed_lo, self.closed_hi)
        return Interval(a * self.hi, a * self.lo, self.closed_hi, self.closed_lo)

    def __neg__(self) -> "Interval":
        return self.scale(-1.0)

    def preimage_mul_left(self, a: float) -> "Interval":
        """The preimage of the interval under ``x ↦ a * x``."""
        if a == 0:
            return univ() if 0.0 in self else Interval(0.0, 0.0, False, False)
        return self.scale(1.0 / a)

    def __and__(self, other: "Interval") -> "Interval":
        """Intersection."""
        if self.lo > other.lo:
            lo, closed_lo = self.lo, self.closed_lo
        elif self.lo < other.lo:
            lo, closed_lo = other.lo, other.closed_lo
        else:
            lo, closed_lo = self.lo, self.closed_lo and other.closed_lo

        if self.hi < other.hi:
            hi, closed_hi = self.hi, self.closed_hi
        elif self.hi > other.hi:
            hi, closed_hi = other.hi, other.closed_hi
        else:
            hi, closed_hi = self.hi, self.closed_hi and other.closed_hi

        return Interval(lo, hi, closed_lo, closed_hi)

    def closure(self) -> "Interval":
        if self.is_empty():
            return self
        return Interval(self.lo, self.hi, True, True)

    def interior(self) -> "Interval":
        return Interval(self.lo, self.hi, False, False)

    def __str__(self) -> str:
        if self.is_empty():
            return "∅"
        if self.lo == self.hi:
            return f"{{{self.lo:g}}}"
        left = "[" if self.closed_lo else "("
        right = "]" if self.closed_hi else ")"
        lo = "-∞" if self.lo == -math.inf else f"{self.lo:g}"
        hi = "∞" if self.hi == math.inf else f"{self.hi:g}"
        return f"{left}{lo}, {hi}{right}"


# Constructors, named after the usual interval notation


def Ioo(a: float, b: float) -> Interval:
    return Interval(a, b, False, False)


def Icc(a: float, b: float) -> Interval:
    return Interval(a, b, True, True)


def Ico(a: float, b: float) -> Interval:
    return Interval(a, b, True, False)


def Ioc(a: float, b: float) -> Interval:
    return Interval(a, b, False, True)


def Ioi(a: float) -> Interval:
    return Interval(a, math.inf, False, False)


def Ici(a: float) -> Interval:
    return Interval(a, math.inf, True, False)


def Iio(b: float) -> Interval:
    return Interval(-math.inf, b, False, False)


def Iic(b: float) -> Interval:
    return Interval(-math.inf, b, False, True)


def univ() -> Interval:
    return Interval(-math.inf, math.inf, False, False)


def point(x: float) -> Interval:
    return Interval(x, x, True, True)


def uIcc(a: float, b: float) -> Interval:
    """The closed interval between ``a`` and ``b`` in either order."""
    return Icc(min(a, b), max(a, b))


def ball(center: float, radius: float) -> Interval:
    return Ioo(center - radius, center + radius)


def closed_ball(center: float, radius: float) -> Interval:
    if radius < 0:
        return Interval(center, center, False, False)
    return Icc(center - radius, center + radius)


@dataclass(frozen=True)
class FiniteSet(Shape):
    """A finite set of reals. It has volume zero since points are not atoms."""

    points: frozenset[float]

    @classmethod
    def of(cls, points: Iterable[float]) -> Self:
        pts = frozenset(float(p) for p in points)
        if any(math.isnan(p) for p in pts):
            raise ValueError("FiniteSet cannot contain NaN")
        return cls(pts)

    def volume(self) -> ENNReal:
        return ENNReal.sum(point(p).volume() for p in self.points)

    def __contains__(self, member: object) -> bool:
        return member in self.points

    def is_bounded(self) -> bool:
        return all(math.isfinite(p) for p in self.points)

    def __len__(self) -> int:
        return len(self.points)

    def sorted(self) -> list[float]:
        return sorted(self.points)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{p:g}" for p in self.sorted()) + "}"
