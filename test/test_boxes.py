"""Volume of boxes and balls in real coordinate space."""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lebesgue import ONE, TOP, ZERO, Box, DomainMismatch, ball_volume, box_volume, pi_box
from lebesgue.intervals import KINDS, Icc, Ioi, Ioo, point, univ

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================


def corners(n: int) -> st.SearchStrategy[tuple[list[float], list[float]]]:
    coords = st.floats(min_value=-100, max_value=100, allow_nan=False)
    return st.tuples(
        st.lists(coords, min_size=n, max_size=n),
        st.lists(coords, min_size=n, max_size=n),
    ).map(lambda c: ([min(a, b) for a, b in zip(*c)], [max(a, b) for a, b in zip(*c)]))


# ============================================================================
# BOXES
# ============================================================================


def test_box_volume_is_product_of_sides() -> None:
    assert box_volume(pi_box("Icc", [0, 0, 0], [1, 2, 3])) == 6


@given(corners(3))
def test_box_volume_ignores_boundary_kind(c: tuple[list[float], list[float]]) -> None:
    lows, highs = c
    volumes = {pi_box(kind, lows, highs).volume() for kind in KINDS}
    assert len(volumes) == 1


def test_degenerate_axis_absorbs_unbounded_axis() -> None:
    assert Box.from_intervals([point(0.0), univ()]).volume() == ZERO
    assert Box.from_intervals([Ioi(0.0), Ioo(2.0, 1.0)]).volume() == ZERO
    assert Box.from_intervals([Icc(0, 1), Ioi(0.0)]).volume() == TOP


def test_empty_product_is_one() -> None:
    assert Box(()).volume() == ONE


@given(corners(3))
def test_volume_bounded_by_diameters(c: tuple[list[float], list[float]]) -> None:
    b = pi_box("Ioo", *c)
    assert b.volume() <= b.prod_diam()
    assert b.volume() <= b.diam() ** b.ndim


@given(corners(2), st.lists(st.floats(min_value=-100, max_value=100), min_size=2, max_size=2))
def test_translation_invariance(c: tuple[list[float], list[float]], t: list[float]) -> None:
    b = pi_box("Icc", *c)
    assert b.translate(t).volume().isclose(b.volume(), abs_tol=1e-8)


def test_labelled_axes() -> None:
    b = Box.of({"x": Icc(0, 1), "y": Icc(0, 2)})
    assert b.labels == ("x", "y")
    assert b["y"] == Icc(0, 2)
    assert b.volume() == 2
    assert {"x": 0.5, "y": 1.5} in b
    assert {"x": 0.5, "y": 2.5} not in b


def test_membership_by_position() -> None:
    b = pi_box("Ico", [0, 0], [1, 1])
    assert (0, 0.5) in b
    assert (1, 0.5) not in b
    assert (0.5,) not in b


def test_box_axes_must_be_distinct() -> None:
    with pytest.raises(ValueError):
        Box((("x", Icc(0, 1)), ("x", Icc(0, 1))))


def test_pi_box_dimension_mismatch() -> None:
    with pytest.raises(DomainMismatch):
        pi_box("Icc", [0, 0], [1])
    with pytest.raises(DomainMismatch):
        Box.from_intervals([Icc(0, 1)]).translate([1.0, 2.0])


# ============================================================================
# BALLS
# ============================================================================


@given(st.integers(min_value=0, max_value=6), st.floats(min_value=0, max_value=10))
def test_ball_volume(n: int, r: float) -> None:
    assert ball_volume(n, r).isclose((2 * r) ** n)


@given(st.integers(min_value=1, max_value=6), st.floats(min_value=0, max_value=10))
def test_open_and_closed_balls_agree(n: int, r: float) -> None:
    assert ball_volume(n, r) == ball_volume(n, r, closed=True)


def test_ball_in_zero_dimensions() -> None:
    assert ball_volume(0, 3.0) == ONE


def test_negative_radius_is_empty() -> None:
    assert ball_volume(2, -1.0) == ZERO
    assert ball_volume(2, -1.0, closed=True) == ZERO


def test_ball_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        ball_volume(-1, 1.0)
    with pytest.raises(ValueError):
        ball_volume(2, math.nan)
