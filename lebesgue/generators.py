"""lebesgue.generators

Square real matrices indexed by a finite axis tuple, and the two kinds of
elementary maps every invertible matrix factors into: diagonal maps and
transvections (shears).
"""

from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import reduce
from typing import Self, TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .boxes import Box
from .ennreal import ENNReal, ONE
from .errors import DomainMismatch

Axis: TypeAlias = Hashable


def _default_axes(n: int, axes: Sequence[Axis] | None) -> tuple[Axis, ...]:
    if axes is None or len(axes) == 0:
        return tuple(range(n))
    if len(axes) != n:
        raise DomainMismatch(tuple(range(n)), tuple(axes))
    if len(set(axes)) != n:
        raise ValueError(f"axes must be distinct, got {tuple(axes)}")
    return tuple(axes)


@dataclass(frozen=True, eq=False)
class LinearMap:
    matrix: NDArray[np.float64]
    axes: tuple[Axis, ...] = ()

    def __post_init__(self) -> None:
        m = np.array(self.matrix, dtype=float)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise DomainMismatch(("square",), tuple(m.shape))
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)
        object.__setattr__(self, "axes", _default_axes(m.shape[0], self.axes))

    @classmethod
    def of(cls, rows: ArrayLike, axes: Sequence[Axis] | None = None) -> Self:
        return cls(np.asarray(rows, dtype=float), tuple(axes or ()))

    @classmethod
    def identity(cls, axes: Sequence[Axis]) -> Self:
        return cls(np.eye(len(axes)), tuple(axes))

    @property
    def dim(self) -> int:
        return self.matrix.shape[0]

    @property
    def determinant(self) -> float:
        return float(np.linalg.det(self.matrix)) if self.dim else 1.0

    def check_axes(self, axes: Sequence[Axis]) -> None:
        if tuple(axes) != self.axes:
            raise DomainMismatch(self.axes, tuple(axes))

    def __matmul__(self, other: "LinearMap") -> "LinearMap":
        self.check_axes(other.axes)
        return LinearMap(self.matrix @ other.matrix, self.axes)

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        return self.matrix @ np.asarray(x, dtype=float)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearMap):
            return NotImplemented
        return self.axes == other.axes and np.array_equal(self.matrix, other.matrix)

    def __hash__(self) -> int:
        return hash((self.axes, self.matrix.tobytes()))

    def __str__(self) -> str:
        rows = ("[" + ", ".join(f"{x:g}" for x in row) + "]" for row in self.matrix)
        return "[" + ", ".join(rows) + "]"


def compose(a: LinearMap, b: LinearMap) -> LinearMap:
    """The map ``a ∘ b``."""
    return a @ b


@dataclass(frozen=True)
class DiagonalMap:
    """Scales axis ``axes[k]`` by ``scales[k]``."""

    scales: tuple[float, ...]
    axes: tuple[Axis, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "scales", tuple(float(d) for d in self.scales))
        object.__setattr__(self, "axes", _default_axes(len(self.scales), self.axes))

    def matrix(self) -> NDArray[np.float64]:
        return np.diag(self.scales) if self.scales else np.zeros((0, 0))

    @property
    def determinant(self) -> float:
        return float(np.prod(self.scales))

    def scaling_factor(self) -> ENNReal:
        # x ↦ d·x multiplies lengths by |d|, so the pushforward divides by it
        return ENNReal.prod(ENNReal.of_real(abs(d)).inv() for d in self.scales)

    def preimage(self, box: Box) -> Box:
        box.check_axes(self.axes)
        return Box(
            tuple(
                (label, iv.preimage_mul_left(d))
                for (label, iv), d in zip(box.axes, self.scales)
            )
        )

    def __str__(self) -> str:
        return "diag(" + ", ".join(f"{d:g}" for d in self.scales) + ")"


@dataclass(frozen=True)
class Transvection:
    """Adds ``c * x[source]`` to ``x[target]`` and fixes every other axis."""

    target: Axis
    source: Axis
    c: float
    axes: tuple[Axis, ...]

    def __post_init__(self) -> None:
        if self.target == self.source:
            raise ValueError(f"a transvection needs two distinct axes, got {self.target!r}")
        if self.target not in self.axes or self.source not in self.axes:
            raise DomainMismatch(self.axes, (self.target, self.source))
        object.__setattr__(self, "c", float(self.c))

    def matrix(self) -> NDArray[np.float64]:
        m = np.eye(len(self.axes))
        m[self.axes.index(self.target), self.axes.index(self.source)] = self.c
        return m

    @property
    def determinant(self) -> float:
        return 1.0

    def scaling_factor(self) -> ENNReal:
        return ONE

    def inverse(self) -> "Transvection":
        return Transvection(self.target, self.source, -self.c, self.axes)

    def preimage_volume(self, box: Box) -> ENNReal:
        """
        Volume of the preimage of ``box`` under the shear.

        For fixed values of the other coordinates the preimage restricted to
        the target axis is ``box[target] - c * x[source]``, a translate of the
        target interval. Translation keeps length, so one slice stands for all
        of them and the volume is its length times the volume of the remaining
        axes.
        """
        box.check_axes(self.axes)

        def slice_volume(x_source: float) -> ENNReal:
            return box[self.target].translate(-self.c * x_source).volume()

        rest = ENNReal.prod(
            iv.volume() for label, iv in box.axes if label != self.target
        )
        return slice_volume(box[self.source].representative()) * rest

    def __str__(self) -> str:
        return f"shear({self.target!r} += {self.c:g}·{self.source!r})"


Generator: TypeAlias = DiagonalMap | Transvection


def generator_factor(gen: Generator) -> ENNReal:
    match gen:
        case DiagonalMap():
            return gen.scaling_factor()
        case Transvection():
            return ONE
        case _:
            raise TypeError(f"not a generator: {gen!r}")


@dataclass(frozen=True)
class GeneratorChain:
    """An ordered product ``g₀ · g₁ · … · gₖ`` of elementary generators."""

    axes: tuple[Axis, ...]
    generators: tuple[Generator, ...] = field(default=())

    def __post_init__(self) -> None:
        for gen in self.generators:
            if gen.axes != self.axes:
                raise DomainMismatch(self.axes, gen.axes)

    def __iter__(self) -> Iterator[Generator]:
        return iter(self.generators)

    def __len__(self) -> int:
        return len(self.generators)

    def __add__(self, other: "GeneratorChain") -> "GeneratorChain":
        if other.axes != self.axes:
            raise DomainMismatch(self.axes, other.axes)
        return GeneratorChain(self.axes, self.generators + other.generators)

    def matrix(self) -> LinearMap:
        product = reduce(
            lambda acc, gen: acc @ gen.matrix(),
            self.generators,
            np.eye(len(self.axes)),
        )
        return LinearMap(product, self.axes)

    @property
    def determinant(self) -> float:
        return float(np.prod([gen.determinant for gen in self.generators]))

    def scaling_factor(self) -> ENNReal:
        """Fold the per-generator factors; pushforwards compose multiplicatively."""
        return reduce(
            lambda acc, gen: acc * generator_factor(gen),
            self.generators,
            ONE,
        )

    def __str__(self) -> str:
        return " · ".join(str(g) for g in self.generators) or "id"
