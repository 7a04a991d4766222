"""lebesgue.cover

Lifting an almost-everywhere statement from slices to a whole set.

Suppose a predicate ``p`` holds almost everywhere on ``s ∩ (a, b)`` for all
``a < b`` in ``s``. The intervals ``(a, b)`` cover ``s`` except for at most
two points (its attained extremes). Countably many of them already have the
same union. Each contributes a null exceptional set, the leftover points are
null because the measure has no atoms, and a countable union of null sets is
null. So ``p`` holds almost everywhere on ``s``.

Here the countable family is an ordered, lazily generated sequence and the
local statements are witnesses carrying their exceptional sets explicitly.
"""

import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from itertools import islice
from typing import Self, TypeAlias

from .collaborators import (
    BorelOracle,
    CoverDomain,
    ExhaustingCover,
    MeasurableSetOracle,
    SecondCountableCover,
)
from .config import DEFAULT_SETTINGS, Settings
from .ennreal import ENNReal
from .errors import NotAlmostEverywhere
from .intervals import Interval, Ioo, point
from .logger import log
from .shapes import Shape

Predicate: TypeAlias = Callable[[float], bool]


@dataclass(frozen=True)
class NullSet(Shape):
    """A finite union of points and degenerate intervals, checked to be null."""

    pieces: tuple[Interval, ...] = ()

    def __post_init__(self) -> None:
        if not self.volume().is_zero():
            raise NotAlmostEverywhere(self)

    @classmethod
    def empty(cls) -> Self:
        return cls(())

    @classmethod
    def of_points(cls, points: Iterable[float]) -> Self:
        return cls(tuple(point(x) for x in points))

    def volume(self) -> ENNReal:
        # subadditivity: the union is no larger than the sum of its pieces
        return ENNReal.sum(piece.volume() for piece in self.pieces)

    def __contains__(self, member: object) -> bool:
        return any(member in piece for piece in self.pieces)

    def is_bounded(self) -> bool:
        return all(piece.is_bounded() for piece in self.pieces)

    def __or__(self, other: "NullSet") -> "NullSet":
        return NullSet(self.pieces + other.pieces)

    def __str__(self) -> str:
        return "{" + ", ".join(str(p) for p in self.pieces) + "}"


@dataclass(frozen=True)
class AEWitness:
    """The predicate holds outside ``exceptional``."""

    exceptional: NullSet = field(default_factory=NullSet.empty)

    @classmethod
    def everywhere(cls) -> Self:
        return cls()

    @classmethod
    def except_at(cls, points: Iterable[float]) -> Self:
        return cls(NullSet.of_points(points))


Obligation: TypeAlias = Callable[[float, float], AEWitness]


@dataclass
class CoverPiece:
    interval: Interval
    witness: AEWitness


class GlobalAEWitness:
    """
    The predicate holds almost everywhere on ``domain``.

    The exceptional set is the residual of the cover together with the
    exceptional sets of the local witnesses. Local witnesses are requested
    lazily, in cover order, and remembered. The memo is guarded by a lock, so
    one witness can be queried from several threads.
    """

    def __init__(
        self,
        domain: CoverDomain,
        predicate: Predicate,
        obligation: Obligation,
        cover: SecondCountableCover,
        restricted: bool,
    ) -> None:
        self.domain = domain
        self.predicate = predicate
        self.restricted = restricted
        self.residual = NullSet.of_points(cover.residual(domain))
        self._obligation = obligation
        self._pairs = cover.pairs(domain)
        self._pieces: list[CoverPiece] = []
        self._lock = threading.Lock()

    def _next_piece(self) -> CoverPiece | None:
        try:
            a, b = next(self._pairs)
        except StopIteration:
            return None
        witness = self._obligation(a, b)
        if not isinstance(witness, AEWitness):
            raise TypeError(f"obligation returned {witness!r}, expected an AEWitness")
        piece = CoverPiece(Ioo(a, b), witness)
        log.trace(f"cover piece {len(self._pieces)}: {piece.interval!s}, exceptional {witness.exceptional!s}")
        self._pieces.append(piece)
        return piece

    def _piece(self, i: int) -> CoverPiece | None:
        with self._lock:
            while len(self._pieces) <= i:
                if self._next_piece() is None:
                    return None
            return self._pieces[i]

    def pieces(self) -> Iterator[CoverPiece]:
        i = 0
        while (piece := self._piece(i)) is not None:
            yield piece
            i += 1

    def locate(self, x: float) -> CoverPiece | None:
        """The first cover piece containing ``x``."""
        for piece in self.pieces():
            if x in piece.interval:
                return piece
        return None

    def is_exceptional(self, x: float) -> bool:
        if x in self.residual:
            return True
        piece = self.locate(x)
        return piece is not None and x in piece.witness.exceptional

    def holds(self, x: float) -> bool:
        """Whether the statement is consistent at ``x``."""
        if x not in self.domain:
            return True
        return bool(self.predicate(x)) or self.is_exceptional(x)

    def violations(self, samples: Iterable[float]) -> list[float]:
        return [x for x in samples if not self.holds(x)]

    def check(self, samples: Iterable[float]) -> bool:
        return not self.violations(samples)

    def exceptional_volume(self, limit: int | None = 64) -> ENNReal:
        """Volume of the residual plus the first ``limit`` local exceptional sets."""
        pieces = self.pieces() if limit is None else islice(self.pieces(), limit)
        return self.residual.volume() + ENNReal.sum(
            piece.witness.exceptional.volume() for piece in pieces
        )

    def __repr__(self) -> str:
        shape = "restricted" if self.restricted else "guarded"
        return f"GlobalAEWitness({self.domain!s}, {shape}, {len(self._pieces)} pieces seen)"


def _lift(
    s: CoverDomain,
    obligation: Obligation,
    predicate: Predicate,
    restricted: bool,
    cover: SecondCountableCover | None,
    oracle: MeasurableSetOracle | None,
    settings: Settings,
) -> GlobalAEWitness:
    (oracle or BorelOracle()).require(s)
    witness = GlobalAEWitness(
        s,
        predicate,
        obligation,
        cover or ExhaustingCover(settings),
        restricted,
    )
    log.debug(f"lifted a.e. statement to {s!s} (residual {witness.residual!s})")
    return witness


def lift_ae(
    s: CoverDomain,
    obligation: Obligation,
    predicate: Predicate,
    *,
    cover: SecondCountableCover | None = None,
    oracle: MeasurableSetOracle | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> GlobalAEWitness:
    """
    From ``∀ a < b in s, ∀ᵐ x, x ∈ s ∩ (a, b) → p x`` conclude
    ``∀ᵐ x, x ∈ s → p x`` for the ambient measure.

    ``obligation(a, b)`` must return an ``AEWitness`` for the slice.
    """
    return _lift(s, obligation, predicate, False, cover, oracle, settings)


def lift_ae_restrict(
    s: CoverDomain,
    obligation: Obligation,
    predicate: Predicate,
    *,
    cover: SecondCountableCover | None = None,
    oracle: MeasurableSetOracle | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> GlobalAEWitness:
    """As ``lift_ae``, phrased for the measure restricted to ``s``."""
    return _lift(s, obligation, predicate, True, cover, oracle, settings)
