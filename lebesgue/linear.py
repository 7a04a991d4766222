"""lebesgue.linear

How volume rescales under an invertible linear map.

For an invertible ``M`` the pushforward of Lebesgue measure is
``|det M|⁻¹ · λ``. Rather than trusting the determinant, the factor is
computed from a factorization of ``M`` into diagonal maps and transvections:

- a diagonal map ``diag(d₁, …, dₙ)`` rescales by ``∏ |dᵢ|⁻¹``;
- a transvection is volume preserving, since each of its slices is a
  translate and translations keep interval length;
- pushforwards compose, so the factor of a product is the product of the
  factors.
"""

from numpy.typing import ArrayLike

from .collaborators import (
    BorelOracle,
    EliminationDecomposer,
    MatrixDecomposer,
    MeasurableSetOracle,
)
from .config import DEFAULT_SETTINGS, Settings
from .ennreal import ENNReal
from .errors import DomainMismatch
from .generators import GeneratorChain, LinearMap
from .logger import log
from .shapes import Shape


def _as_map(m: LinearMap | ArrayLike) -> LinearMap:
    return m if isinstance(m, LinearMap) else LinearMap.of(m)


def decompose(
    m: LinearMap | ArrayLike,
    decomposer: MatrixDecomposer | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> GeneratorChain:
    """Factor ``m`` into generators, raising ``SingularMatrix`` if it has none."""
    return (decomposer or EliminationDecomposer(settings)).decompose(_as_map(m))


def linear_scaling_factor(
    m: LinearMap | ArrayLike,
    decomposer: MatrixDecomposer | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> ENNReal:
    """
    The ``c`` with ``volume(M⁻¹(S)) = c · volume(S)`` for every measurable
    ``S``, which is ``1 / |det M|``.

    Raises ``SingularMatrix`` when the determinant vanishes.
    """
    m = _as_map(m)
    chain = decompose(m, decomposer, settings)
    factor = chain.scaling_factor()

    expected = ENNReal.of_real(abs(m.determinant)).inv()
    if not factor.isclose(expected, rel_tol=settings.factor_rel_tol, abs_tol=0.0):
        log.warning(f"generator factor {factor!s} disagrees with 1/|det| = {expected!s}")

    log.debug(f"scaling factor of {m!s} is {factor!s} ({len(chain)} generators)")
    return factor


def scaling_factor_1d(a: float, settings: Settings = DEFAULT_SETTINGS) -> ENNReal:
    """Scaling factor of ``x ↦ a·x``, which is ``|a|⁻¹``."""
    return linear_scaling_factor(LinearMap.of([[a]]), settings=settings)


def pushforward_volume(
    m: LinearMap | ArrayLike,
    s: Shape,
    decomposer: MatrixDecomposer | None = None,
    oracle: MeasurableSetOracle | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> ENNReal:
    """
    Volume of ``s`` under the pushforward of Lebesgue measure by ``m``, that
    is ``volume(m⁻¹(s)) = |det m|⁻¹ · volume(s)``.
    """
    m = _as_map(m)
    (oracle or BorelOracle()).require(s)

    axes = s.ambient_axes()
    if axes is None:
        if m.dim != 1:
            raise DomainMismatch(m.axes, (0,))
    else:
        m.check_axes(axes)

    return linear_scaling_factor(m, decomposer, settings) * s.volume()
