from abc import ABC, abstractmethod
from collections.abc import Callable

from .ennreal import ENNReal
from .logger import log


class Shape(ABC):
    """A subset of real coordinate space with a known volume."""

    @abstractmethod
    def volume(self) -> ENNReal:
        pass

    @abstractmethod
    def __contains__(self, member: object) -> bool:
        pass

    @abstractmethod
    def is_bounded(self) -> bool:
        pass

    def ambient_axes(self) -> tuple | None:
        """Axis labels of the ambient space, or ``None`` for the real line."""
        return None

    def functions(self) -> tuple[Callable, ...]:
        """
        The functions the shape is defined through.

        Measurability of the shape reduces to measurability of these.
        """
        return ()


def volume(shape: Shape) -> ENNReal:
    v = shape.volume()
    log.trace(f"volume({shape!s}) = {v!s}")
    return v


def real_volume(shape: Shape) -> float:
    """The volume as a float, raising ``Unrepresentable`` if it is infinite."""
    return volume(shape).to_finite()
