"""lebesgue.ennreal

The extended non-negative reals ``[0, ∞]``. All volumes are expressed in
this type. Arithmetic is total: ``∞`` absorbs under addition, zero absorbs
under multiplication (so ``0 * ∞ = 0``) and subtraction is truncated at
zero.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Real
from typing import Self, TypeAlias

from .errors import Unrepresentable

ENNRealLike: TypeAlias = "ENNReal | int | float"


@dataclass(frozen=True, eq=False)
class ENNReal:
    value: float = 0.0

    def __post_init__(self) -> None:
        v = float(self.value)
        if math.isnan(v) or v < 0:
            raise ValueError(f"ENNReal needs a non-negative value, but got {self.value!r}")
        object.__setattr__(self, "value", v)

    # Constructors

    @classmethod
    def of_real(cls, x: float) -> Self:
        """Embed a real number, clamping negatives to zero."""
        if math.isnan(x):
            raise ValueError("cannot embed NaN")
        return cls(max(0.0, float(x)))

    @classmethod
    def zero(cls) -> Self:
        return cls(0.0)

    @classmethod
    def one(cls) -> Self:
        return cls(1.0)

    @classmethod
    def top(cls) -> Self:
        return cls(math.inf)

    @classmethod
    def _coerce(cls, other: ENNRealLike) -> "ENNReal":
        if isinstance(other, ENNReal):
            return other
        if isinstance(other, Real):
            return cls(other)
        raise TypeError(f"cannot use {type(other).__name__} as an ENNReal")

    @classmethod
    def sum(cls, items: Iterable[ENNRealLike]) -> Self:
        acc = cls.zero()
        for x in items:
            acc = acc + x
        return acc

    @classmethod
    def prod(cls, items: Iterable[ENNRealLike]) -> Self:
        """Multiply every factor. A zero factor absorbs an infinite one."""
        acc = cls.one()
        for x in items:
            acc = acc * x
        return acc

    # Queries

    def is_top(self) -> bool:
        return math.isinf(self.value)

    def is_zero(self) -> bool:
        return self.value == 0.0

    def to_finite(self) -> float:
        if self.is_top():
            raise Unrepresentable("∞ has no finite representation")
        return self.value

    to_real = to_finite

    def isclose(
        self,
        other: ENNRealLike,
        rel_tol: float = 1e-9,
        abs_tol: float = 1e-12,
    ) -> bool:
        other = self._coerce(other)
        if self.is_top() or other.is_top():
            return self.is_top() and other.is_top()
        return math.isclose(self.value, other.value, rel_tol=rel_tol, abs_tol=abs_tol)

    # Arithmetic

    def __add__(self, other: ENNRealLike) -> "ENNReal":
        other = self._coerce(other)
        return ENNReal(self.value + other.value)

    __radd__ = __add__

    def __mul__(self, other: ENNRealLike) -> "ENNReal":
        other = self._coerce(other)
        if self.is_zero() or other.is_zero():
            return ENNReal.zero()
        return ENNReal(self.value * other.value)

    __rmul__ = __mul__

    def __sub__(self, other: ENNRealLike) -> "ENNReal":
        """Truncated subtraction: ``max(0, self - other)``."""
        other = self._coerce(other)
        if other.is_top():
            return ENNReal.zero()
        if self.is_top():
            return ENNReal.top()
        return ENNReal(max(0.0, self.value - other.value))

    def __rsub__(self, other: ENNRealLike) -> "ENNReal":
        return self._coerce(other) - self

    def smul(self, c: float) -> "ENNReal":
        """Scale by a finite, non-negative real."""
        if not math.isfinite(c) or c < 0:
            raise ValueError(f"smul needs a finite non-negative scalar, but got {c!r}")
        return self * ENNReal(c)

    def inv(self) -> "ENNReal":
        if self.is_zero():
            return ENNReal.top()
        if self.is_top():
            return ENNReal.zero()
        return ENNReal(1.0 / self.value)

    def __truediv__(self, other: ENNRealLike) -> "ENNReal":
        return self * self._coerce(other).inv()

    def __rtruediv__(self, other: ENNRealLike) -> "ENNReal":
        return self._coerce(other) * self.inv()

    def __pow__(self, n: int) -> "ENNReal":
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"only natural powers are supported, but got {n!r}")
        if n == 0:
            return ENNReal.one()
        if self.is_zero() or self.is_top():
            return self
        try:
            return ENNReal(self.value**n)
        except OverflowError:
            return ENNReal.top()

    # Ordering

    def _other_value(self, other: object) -> float | None:
        if isinstance(other, ENNReal):
            return other.value
        if isinstance(other, Real):
            return float(other)
        return None

    def __eq__(self, other: object) -> bool:
        v = self._other_value(other)
        if v is None:
            return NotImplemented
        return self.value == v

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        v = self._other_value(other)
        if v is None:
            return NotImplemented
        return self.value < v

    def __le__(self, other: object) -> bool:
        v = self._other_value(other)
        if v is None:
            return NotImplemented
        return self.value <= v

    def __gt__(self, other: object) -> bool:
        v = self._other_value(other)
        if v is None:
            return NotImplemented
        return self.value > v

    def __ge__(self, other: object) -> bool:
        v = self._other_value(other)
        if v is None:
            return NotImplemented
        return self.value >= v

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __float__(self) -> float:
        return self.to_finite()

    def __str__(self) -> str:
        if self.is_top():
            return "∞"
        return f"{self.value:g}"


ZERO = ENNReal.zero()
ONE = ENNReal.one()
TOP = ENNReal.top()
