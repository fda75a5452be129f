"""Tests for open/closed state interpolation."""

import pytest

from mandala.engine.color import Color
from mandala.engine.state import MandalaState
from mandala.engine.transform import Transform
from tests.conftest import COLOR_CLOSED, COLOR_OPEN


def test_weight_zero_is_closed_and_one_is_open(states):
    open_, closed = states
    assert MandalaState.interpolate(closed, open_, 0.0) == closed
    one = MandalaState.interpolate(closed, open_, 1.0)
    assert one.color == open_.color
    assert one.rotate.isclose(open_.rotate)
    assert one.translate.isclose(open_.translate)
    assert one.scale.isclose(open_.scale)


def test_color_midpoint(states):
    open_, closed = states
    mid = MandalaState.interpolate(closed, open_, 0.5).color
    assert mid.as_tuple() == pytest.approx((0.5, 0.5, 0.5, 0.55))


def test_color_channels_are_independent():
    c = COLOR_CLOSED.lerp(COLOR_OPEN, 0.25)
    assert c.as_tuple() == pytest.approx((0.25, 0.75, 0.75, 0.325))


def test_transforms_interpolate_elementwise(states):
    open_, closed = states
    mid = MandalaState.interpolate(closed, open_, 0.5)
    assert mid.translate.isclose(Transform.translate(25.0, 0.0))
    assert mid.scale.isclose(Transform.scale(0.55, 1.0))


def test_extrapolation_leaves_color_range():
    black = MandalaState.from_pose(Color(0.0, 0.0, 0.0))
    white = MandalaState.from_pose(Color(1.0, 1.0, 1.0))
    over = MandalaState.interpolate(black, white, 1.5)
    assert over.color.r == pytest.approx(1.5)
    assert over.color.clipped().r == 1.0


def test_from_pose_composes_translate_scale_rotate():
    state = MandalaState.from_pose(Color(1, 1, 1), rotate_degrees=90, translate=(10, 0), scale=(2, 1))
    expected = Transform.translate(10, 0) @ Transform.scale(2, 1) @ Transform.rotate(90)
    assert state.pose.isclose(expected)


def test_states_are_not_hashable(states):
    with pytest.raises(TypeError):
        hash(states[0])
