"""Hypothesis-based property tests for one dimensional interval volume."""

import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from lebesgue import TOP, ZERO, FiniteSet, Interval, Unrepresentable, real_volume, volume
from lebesgue.intervals import (
    KINDS,
    Icc,
    Ici,
    Ico,
    Iic,
    Iio,
    Ioc,
    Ioi,
    Ioo,
    ball,
    closed_ball,
    point,
    uIcc,
    univ,
)

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================


def reals() -> st.SearchStrategy[float]:
    return st.floats(min_value=-1e3, max_value=1e3, allow_nan=False, allow_infinity=False)


def kinds() -> st.SearchStrategy[str]:
    return st.sampled_from(KINDS)


def bounded_intervals() -> st.SearchStrategy[Interval]:
    return st.builds(
        lambda kind, a, b: Interval.of_kind(kind, min(a, b), max(a, b)),
        kinds(),
        reals(),
        reals(),
    )


def close(x: float, y: float) -> bool:
    return math.isclose(x, y, rel_tol=1e-9, abs_tol=1e-9)


# ============================================================================
# VOLUME OF THE BASIC SHAPES
# ============================================================================


@given(kinds(), reals(), reals())
def test_volume_ignores_boundary_kind(kind: str, a: float, b: float) -> None:
    lo, hi = min(a, b), max(a, b)
    assert volume(Interval.of_kind(kind, lo, hi)) == hi - lo


@given(kinds(), reals(), reals())
def test_reversed_endpoints_have_zero_volume(kind: str, a: float, b: float) -> None:
    assume(a > b)
    assert volume(Interval.of_kind(kind, a, b)) == ZERO


@given(reals())
def test_points_have_zero_volume(x: float) -> None:
    assert volume(point(x)) == ZERO
    assert volume(FiniteSet.of([x, x + 1, x - 1])) == ZERO


@given(reals())
def test_rays_have_infinite_volume(x: float) -> None:
    for ray in (Ioi(x), Ici(x), Iio(x), Iic(x)):
        assert volume(ray) == TOP
    assert volume(univ()) == TOP


@given(reals(), st.floats(min_value=0, max_value=1e3))
def test_ball_volume_is_twice_the_radius(c: float, r: float) -> None:
    assert close(volume(ball(c, r)).value, 2 * r)
    assert close(volume(closed_ball(c, r)).value, 2 * r)


def test_degenerate_balls() -> None:
    assert volume(ball(1.0, 0.0)) == ZERO
    assert volume(closed_ball(1.0, 0.0)) == ZERO
    assert volume(ball(1.0, -2.0)) == ZERO
    assert closed_ball(1.0, -2.0).is_empty()


@given(reals(), reals())
def test_unordered_interval(a: float, b: float) -> None:
    assert volume(uIcc(a, b)) == abs(b - a)


# ============================================================================
# INVARIANCE AND SCALING
# ============================================================================


@given(bounded_intervals(), reals())
def test_translation_invariance(i: Interval, t: float) -> None:
    assert close(volume(i + t).value, volume(i).value)


@given(bounded_intervals(), reals().filter(lambda a: a != 0))
def test_scaling_law(i: Interval, a: float) -> None:
    assert close(volume(i.scale(a)).value, abs(a) * volume(i).value)


@given(bounded_intervals())
def test_negation_preserves_volume(i: Interval) -> None:
    assert volume(-i) == volume(i)


@given(bounded_intervals(), reals().filter(lambda a: abs(a) > 1e-3))
def test_preimage_under_multiplication(i: Interval, a: float) -> None:
    assert close(volume(i.preimage_mul_left(a)).value, volume(i).value / abs(a))


def test_preimage_under_zero() -> None:
    # x ↦ 0 sends everything to 0
    assert volume(Icc(-1, 1).preimage_mul_left(0)) == TOP
    assert volume(Icc(1, 2).preimage_mul_left(0)) == ZERO


def test_scaling_by_negative_swaps_boundaries() -> None:
    assert Ico(1, 2).scale(-1) == Ioc(-2, -1)
    assert 0.0 in Icc(-3, 4).scale(0)


# ============================================================================
# METRIC BOUNDS
# ============================================================================


@given(bounded_intervals())
def test_volume_at_most_diameter(i: Interval) -> None:
    assert volume(i) <= i.diam()


@given(bounded_intervals())
def test_bounded_intervals_have_finite_volume(i: Interval) -> None:
    assert i.is_bounded()
    assert volume(i) < TOP
    assert real_volume(i) == volume(i).value


def test_real_volume_of_ray_is_unrepresentable() -> None:
    with pytest.raises(Unrepresentable):
        real_volume(Ioi(0))


# ============================================================================
# MEMBERSHIP AND SET OPERATIONS
# ============================================================================


@given(bounded_intervals(), reals())
def test_membership_matches_endpoints(i: Interval, x: float) -> None:
    inside = i.lo < x < i.hi or (x == i.lo and i.closed_lo) or (x == i.hi and i.closed_hi)
    assert (x in i) == inside


def test_membership_of_half_open() -> None:
    assert 0 in Ico(0, 1)
    assert 1 not in Ico(0, 1)
    assert "0" not in Ico(0, 1)


def test_intersection() -> None:
    assert Icc(0, 2) & Ioo(1, 3) == Ioc(1, 2)
    assert (Icc(0, 1) & Icc(2, 3)).is_empty()
    assert Ioo(0, 2) & Icc(0, 2) == Ioo(0, 2)


def test_infinite_endpoints_are_open() -> None:
    assert Interval(-math.inf, 0.0, True, True) == Iic(0.0)


def test_str() -> None:
    assert str(Ico(0, 1)) == "[0, 1)"
    assert str(Ioi(2)) == "(2, ∞)"
    assert str(point(3)) == "{3}"
    assert str(Ioo(1, 1)) == "∅"
