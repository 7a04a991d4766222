"""Hypothesis-based property tests for the extended non-negative reals."""

import math

import pytest
from hypothesis import example, given
from hypothesis import strategies as st

from lebesgue import ONE, TOP, ZERO, ENNReal, Unrepresentable

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================


def finite_values() -> st.SearchStrategy[float]:
    return st.floats(min_value=0, max_value=1e100, allow_nan=False, allow_infinity=False)


def ennreals() -> st.SearchStrategy[ENNReal]:
    """Finite values, zero and the top element."""
    return st.one_of(
        finite_values().map(ENNReal),
        st.sampled_from([ZERO, ONE, TOP]),
    )


# ============================================================================
# ABSORBING RULES
# ============================================================================


@given(ennreals())
def test_top_absorbs_addition(x: ENNReal) -> None:
    assert x + TOP == TOP
    assert TOP + x == TOP


@given(ennreals())
def test_zero_absorbs_multiplication(x: ENNReal) -> None:
    assert x * ZERO == ZERO
    assert ZERO * x == ZERO


def test_zero_times_top_is_zero() -> None:
    assert ZERO * TOP == ZERO
    assert TOP * ZERO == ZERO


@given(finite_values().filter(lambda v: v > 0))
def test_positive_times_top_is_top(v: float) -> None:
    assert ENNReal(v) * TOP == TOP


@given(st.lists(ennreals(), max_size=6))
def test_prod_with_a_zero_factor_is_zero(xs: list[ENNReal]) -> None:
    assert ENNReal.prod([*xs, ZERO, TOP]) == ZERO
    assert ENNReal.prod([TOP, *xs, ZERO]) == ZERO


def test_empty_sum_and_product() -> None:
    assert ENNReal.sum([]) == ZERO
    assert ENNReal.prod([]) == ONE


# ============================================================================
# ARITHMETIC
# ============================================================================


@given(ennreals(), ennreals())
def test_addition_and_multiplication_commute(x: ENNReal, y: ENNReal) -> None:
    assert x + y == y + x
    assert x * y == y * x


@given(finite_values(), finite_values())
def test_truncated_subtraction(a: float, b: float) -> None:
    assert (ENNReal(a) - ENNReal(b)).value == max(0.0, a - b)


@given(ennreals())
def test_subtraction_with_top(x: ENNReal) -> None:
    assert x - TOP == ZERO
    if not x.is_top():
        assert TOP - x == TOP


@given(ennreals(), ennreals())
@example(TOP, TOP)
@example(ZERO, TOP)
def test_operations_are_total(x: ENNReal, y: ENNReal) -> None:
    for result in (x + y, x * y, x - y, x / y, x.inv()):
        assert isinstance(result, ENNReal)


def test_inverse() -> None:
    assert ZERO.inv() == TOP
    assert TOP.inv() == ZERO
    assert ENNReal(4).inv() == 0.25
    assert ENNReal(1) / ENNReal(0) == TOP
    assert ZERO / ZERO == ZERO


def test_natural_powers() -> None:
    assert ENNReal(2) ** 10 == 1024
    assert ZERO**0 == ONE
    assert TOP**0 == ONE
    assert TOP**3 == TOP
    assert ENNReal(1e200) ** 3 == TOP
    with pytest.raises(ValueError):
        ENNReal(2) ** -1


@given(ennreals(), finite_values())
def test_smul_distributes(x: ENNReal, c: float) -> None:
    assert x.smul(c) == x * ENNReal(c)


def test_smul_rejects_negative_or_infinite_scalars() -> None:
    with pytest.raises(ValueError):
        ONE.smul(-1.0)
    with pytest.raises(ValueError):
        ONE.smul(math.inf)


def test_numbers_mix_with_ennreals() -> None:
    assert sum([ENNReal(1), ENNReal(2)]) == 3
    assert 2 * ENNReal(3) == ENNReal(6)
    assert ENNReal(3) == 3.0


# ============================================================================
# ORDER AND CONVERSION
# ============================================================================


@given(ennreals())
def test_top_is_the_greatest_element(x: ENNReal) -> None:
    assert x <= TOP
    assert ZERO <= x


@given(ennreals(), ennreals())
def test_order_is_total(x: ENNReal, y: ENNReal) -> None:
    assert x <= y or y <= x
    assert min(x, y) <= max(x, y)


def test_of_real_clamps_negatives() -> None:
    assert ENNReal.of_real(-3.5) == ZERO
    assert ENNReal.of_real(-math.inf) == ZERO
    assert ENNReal.of_real(2.5) == 2.5
    assert ENNReal.of_real(math.inf) == TOP


@pytest.mark.parametrize("bad", [-1.0, math.nan])
def test_direct_construction_needs_non_negative_values(bad: float) -> None:
    with pytest.raises(ValueError):
        ENNReal(bad)


def test_to_finite() -> None:
    assert ENNReal(1.5).to_finite() == 1.5
    with pytest.raises(Unrepresentable):
        TOP.to_finite()
    with pytest.raises(Unrepresentable):
        float(TOP)


def test_isclose() -> None:
    assert ENNReal(0.1 + 0.2).isclose(0.3)
    assert TOP.isclose(TOP)
    assert not TOP.isclose(1e308)


def test_str() -> None:
    assert str(TOP) == "∞"
    assert str(ENNReal(2)) == "2"
