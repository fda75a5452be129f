"""Tests for curve flattening."""

import logging

import numpy as np
import pytest
from svgpathtools import CubicBezier, Line, QuadraticBezier

from mandala.svg.flatten import _MAX_STEPS, flatten_outline, segment_steps
from mandala.svg.path_data import parse_path_data
from tests.conftest import PENTAGON_D, PETAL_D, TRIANGLE_D

CIRCLE_D = "M 10 0 A 10 10 0 0 1 -10 0 A 10 10 0 0 1 10 0 Z"


def test_lines_need_one_step():
    assert segment_steps(Line(0j, 100 + 100j), 0.01) == 1


def test_straight_curves_need_one_step():
    assert segment_steps(QuadraticBezier(0j, 5 + 0j, 10 + 0j), 0.01) == 1
    assert segment_steps(CubicBezier(0j, 1 + 0j, 2 + 0j, 3 + 0j), 0.01) == 1


def test_quadratic_steps_follow_error_bound():
    # |p0 - 2 p1 + p2| = 20 -> n = ceil(sqrt(2 * 20 / (8 * 0.1))) = ceil(sqrt(50)) = 8
    assert segment_steps(QuadraticBezier(0j, 5 + 10j, 10 + 0j), 0.1) == 8


def test_finer_tolerance_means_more_steps():
    cubic = parse_path_data(PETAL_D).segments[0]
    assert segment_steps(cubic, 0.001) > segment_steps(cubic, 0.01) > segment_steps(cubic, 1.0)


def test_polygon_rings_keep_their_vertices():
    rings = flatten_outline(parse_path_data(PENTAGON_D), 0.01)
    assert len(rings) == 1
    np.testing.assert_array_equal(rings[0], [[10, 0], [20, 8], [16, 20], [4, 20], [0, 8]])


def test_closing_point_not_repeated():
    rings = flatten_outline(parse_path_data(TRIANGLE_D), 0.01)
    assert rings[0].shape == (3, 2)


def test_open_subpath_is_closed_implicitly():
    rings = flatten_outline(parse_path_data("M 0 0 L 10 0 L 5 20"), 0.01)
    assert rings[0].shape == (3, 2)


def test_circle_chords_within_tolerance():
    tol = 0.01
    ring = flatten_outline(parse_path_data(CIRCLE_D), tol)[0]
    radii = np.hypot(ring[:, 0], ring[:, 1])
    np.testing.assert_allclose(radii, 10.0)
    mids = (ring + np.roll(ring, -1, axis=0)) / 2
    sagitta = 10.0 - np.hypot(mids[:, 0], mids[:, 1])
    assert sagitta.max() <= tol + 1e-9


def test_degenerate_rings_dropped():
    assert flatten_outline(parse_path_data("M 0 0 L 10 0 Z"), 0.01) == []


def test_tolerance_must_be_positive():
    with pytest.raises(ValueError):
        flatten_outline(parse_path_data(TRIANGLE_D), 0.0)


def test_step_cap_is_logged(caplog):
    huge = QuadraticBezier(0j, 1e6 + 1e6j, 2e6 + 0j)
    with caplog.at_level(logging.DEBUG, logger="mandala.svg.flatten"):
        assert segment_steps(huge, 0.01) == _MAX_STEPS
    assert "Capping QuadraticBezier" in caplog.text
