"""lebesgue.boxes

Boxes in ``ℝ^ι`` for a finite index set ``ι``. The volume of a box is the
product of the volumes of its axes, so a degenerate axis forces the whole
product to zero even when another axis is unbounded.
"""

import math
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Self, TypeAlias

import numpy as np

from . import intervals
from .ennreal import ENNReal, ZERO
from .errors import DomainMismatch
from .intervals import Interval, Kind
from .logger import log
from .shapes import Shape

Axis: TypeAlias = Hashable


@dataclass(frozen=True)
class Box(Shape):
    axes: tuple[tuple[Axis, Interval], ...]

    def __post_init__(self) -> None:
        labels = [label for label, _ in self.axes]
        if len(set(labels)) != len(labels):
            raise ValueError(f"Box axes must be distinct, got {labels}")

    @classmethod
    def of(cls, axes: Mapping[Axis, Interval]) -> Self:
        return cls(tuple(axes.items()))

    @classmethod
    def from_intervals(cls, intervals: Iterable[Interval]) -> Self:
        """A box indexed by ``0, 1, ..., n - 1``."""
        return cls(tuple(enumerate(intervals)))

    @property
    def labels(self) -> tuple[Axis, ...]:
        return tuple(label for label, _ in self.axes)

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return tuple(iv for _, iv in self.axes)

    @property
    def ndim(self) -> int:
        return len(self.axes)

    def __getitem__(self, label: Axis) -> Interval:
        for lbl, iv in self.axes:
            if lbl == label:
                return iv
        raise KeyError(label)

    def ambient_axes(self) -> tuple[Axis, ...]:
        return self.labels

    def check_axes(self, labels: Sequence[Axis]) -> None:
        if tuple(labels) != self.labels:
            raise DomainMismatch(tuple(labels), self.labels)

    def volume(self) -> ENNReal:
        # every axis is evaluated; the product absorbs zeros and infinities itself
        factors = [iv.volume() for iv in self.intervals]
        log.trace(f"box axes {', '.join(str(f) for f in factors)}")
        return ENNReal.prod(factors)

    def is_empty(self) -> bool:
        return any(iv.is_empty() for iv in self.intervals)

    def is_bounded(self) -> bool:
        return self.is_empty() or all(iv.is_bounded() for iv in self.intervals)

    def _coordinates(self, member: object) -> tuple[float, ...] | None:
        if isinstance(member, Mapping):
            if set(member) != set(self.labels):
                return None
            return tuple(member[label] for label in self.labels)
        try:
            coords = tuple(np.asarray(member, dtype=float).reshape(-1))
        except (TypeError, ValueError):
            return None
        return coords if len(coords) == self.ndim else None

    def __contains__(self, member: object) -> bool:
        coords = self._coordinates(member)
        if coords is None:
            return False
        return all(x in iv for x, iv in zip(coords, self.intervals))

    def translate(self, vector: Sequence[float]) -> "Box":
        if len(vector) != self.ndim:
            raise DomainMismatch(self.labels, tuple(range(len(vector))))
        return Box(
            tuple(
                (label, iv.translate(t))
                for (label, iv), t in zip(self.axes, vector)
            )
        )

    def diam(self) -> ENNReal:
        """Diameter in the sup metric."""
        if self.is_empty():
            return ZERO
        return max((iv.diam() for iv in self.intervals), default=ZERO)

    def prod_diam(self) -> ENNReal:
        """Product of the axis diameters, an upper bound of the volume."""
        return ENNReal.prod(iv.diam() for iv in self.intervals)

    def __str__(self) -> str:
        return " × ".join(str(iv) for iv in self.intervals) or "ℝ⁰"


def box_volume(box: Box) -> ENNReal:
    return box.volume()


def pi_box(
    kind: Kind,
    lows: Sequence[float],
    highs: Sequence[float],
    labels: Sequence[Axis] | None = None,
) -> Box:
    """The product of intervals of the same kind between two corners."""
    if len(lows) != len(highs):
        raise DomainMismatch(tuple(range(len(lows))), tuple(range(len(highs))))
    if labels is None:
        labels = range(len(lows))
    elif len(labels) != len(lows):
        raise DomainMismatch(tuple(labels), tuple(range(len(lows))))
    return Box(
        tuple(
            (label, Interval.of_kind(kind, lo, hi))
            for label, lo, hi in zip(labels, lows, highs)
        )
    )


def ball(center: Sequence[float], radius: float) -> Box:
    """The open ball in the sup metric, a product of open intervals."""
    return Box.from_intervals(intervals.ball(c, radius) for c in center)


def closed_ball(center: Sequence[float], radius: float) -> Box:
    return Box.from_intervals(intervals.closed_ball(c, radius) for c in center)


def ball_volume(n: int, radius: float, closed: bool = False) -> ENNReal:
    """
    Volume of a ball of ``radius`` in ``ℝⁿ`` with the sup metric.

    Open and closed balls agree, and the value is ``(2r)ⁿ``.
    """
    if n < 0:
        raise ValueError(f"dimension must be non-negative, got {n}")
    if math.isnan(radius):
        raise ValueError("radius cannot be NaN")
    make = closed_ball if closed else ball
    return make([0.0] * n, radius).volume()
