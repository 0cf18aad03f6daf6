"""Tests for planar vector arithmetic."""

import dataclasses

import pytest

from hu_layout.vector import (
    EPSILON,
    ZERO,
    Vector2,
    add,
    length,
    length_sq,
    normalize,
    scale,
    subtract,
)


class TestVectorOperations:
    """Tests for the basic value operations."""

    def test_add_and_subtract(self):
        a = Vector2(1.0, 2.0)
        b = Vector2(3.0, -5.0)
        assert a + b == Vector2(4.0, -3.0)
        assert a - b == Vector2(-2.0, 7.0)
        assert add(a, b) == a + b
        assert subtract(a, b) == a - b

    def test_scale(self):
        v = Vector2(1.5, -2.0)
        assert v * 2 == Vector2(3.0, -4.0)
        assert 2 * v == Vector2(3.0, -4.0)
        assert scale(v, 0) == ZERO
        assert -v == Vector2(-1.5, 2.0)

    def test_lengths(self):
        v = Vector2(3.0, 4.0)
        assert v.length_sq() == 25.0
        assert v.length() == 5.0
        assert length_sq(v) == 25.0
        assert length(v) == 5.0

    def test_immutable(self):
        """Vectors are values: fields cannot be reassigned."""
        v = Vector2(1.0, 1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.x = 2.0  # type: ignore[misc]

    def test_value_equality(self):
        assert Vector2(1.0, 2.0) == Vector2(1.0, 2.0)
        assert Vector2(1.0, 2.0).as_tuple() == (1.0, 2.0)


class TestNormalize:
    """Tests for epsilon-guarded normalization."""

    def test_unit_length(self):
        n = Vector2(3.0, 4.0).normalize()
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)
        assert n.length() == pytest.approx(1.0)

    def test_zero_vector_returns_zero_exactly(self):
        """normalize(0) is exactly zero, never NaN."""
        n = normalize(ZERO)
        assert n == Vector2(0.0, 0.0)
        assert n.is_finite()

    def test_below_epsilon_returns_zero(self):
        tiny = Vector2(EPSILON / 4, EPSILON / 4)
        assert tiny.normalize() == ZERO

    def test_just_above_epsilon_has_direction(self):
        small = Vector2(EPSILON * 10, 0.0)
        n = small.normalize()
        assert n.x == pytest.approx(1.0)
        assert n.y == 0.0

    def test_epsilon_is_single_precision(self):
        assert EPSILON == pytest.approx(1.1920929e-07)
