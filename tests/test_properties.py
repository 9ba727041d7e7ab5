"""Algebraic properties and IEEE-754 edge cases of Vector."""

import logging
import math
import warnings

import numpy as np
import pytest

from vec3d import config
from vec3d.vector import Vector

SAMPLES = [
    Vector(1, 2, 3),
    Vector(4, 5, 6),
    Vector(-1.5, 0.25, 8),
    Vector(0, 0, 0),
    Vector(1e-3, -2e5, 3.75),
    Vector(-7, -7, 2),
]
PAIRS = [(a, b) for a in SAMPLES for b in SAMPLES]


class TestAlgebra:
    @pytest.mark.parametrize("a,b", PAIRS)
    def test_add_commutes(self, a, b):
        assert Vector.add(a, b).equals(Vector.add(b, a))

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_dot_commutes(self, a, b):
        assert Vector.dot(a, b) == Vector.dot(b, a)

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_cross_anticommutes(self, a, b):
        assert Vector.cross(a, b).equals(Vector.negative(Vector.cross(b, a)))

    @pytest.mark.parametrize("a", SAMPLES)
    def test_additive_inverse(self, a):
        assert Vector.add(a, Vector.negative(a)).equals(Vector(0, 0, 0))

    @pytest.mark.parametrize("a", SAMPLES)
    def test_array_round_trip(self, a):
        assert Vector.from_array(a.to_array(3)).equals(a)

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_lerp_endpoints(self, a, b):
        assert Vector.lerp(a, b, 0).equals(a)
        assert Vector.lerp(a, b, 1).equals(b)

    def test_scalar_broadcast(self):
        assert Vector.add(Vector(1, 2, 3), 1).equals(Vector(2, 3, 4))

    @pytest.mark.parametrize("phi", [-1.5, -0.7, 0.0, 0.3, 1.2, 1.5])
    @pytest.mark.parametrize("theta", [-3.0, -1.0, 0.0, 0.5, 2.0, 3.1])
    def test_spherical_round_trip(self, phi, theta):
        v = Vector.from_phi_theta(phi, theta)
        assert v.length() == pytest.approx(1.0)
        got = v.to_phi_theta()
        assert got.phi == pytest.approx(phi, abs=1e-9)
        assert got.theta == pytest.approx(theta, abs=1e-9)


class TestNonFinite:
    def test_unit_of_zero_vector_is_nan(self):
        u = Vector(0, 0, 0).unit()
        assert all(math.isnan(c) for c in u)

    def test_divide_by_zero_scalar(self):
        v = Vector(1, -2, 0).divide(0)
        assert v.x == math.inf
        assert v.y == -math.inf
        assert math.isnan(v.z)

    def test_divide_by_zero_component(self):
        v = Vector(1, 1, 1).divide(Vector(0, -0.0, 1))
        assert v.x == math.inf
        assert v.y == -math.inf
        assert v.z == 1.0

    def test_division_operator_follows_ieee(self):
        v = Vector(2, 0, 0) / 0
        assert v.x == math.inf
        assert math.isnan(v.y)

    def test_angle_with_zero_vector_is_nan(self):
        assert math.isnan(Vector(1, 2, 3).angle_to(Vector(0, 0, 0)))
        assert math.isnan(Vector.angle_between(Vector(), Vector(1, 0, 0)))

    def test_angle_ratio_out_of_range_is_nan(self, monkeypatch):
        monkeypatch.setattr(Vector, "length", lambda self: 1.0)
        monkeypatch.setattr(Vector, "dot", lambda self, other: 1.0 + 1e-12)
        assert math.isnan(Vector(1, 0, 0).angle_to(Vector(1, 0, 0)))

    def test_to_phi_theta_of_zero_vector(self):
        phi, theta = Vector(0, 0, 0).to_phi_theta()
        assert math.isnan(phi)
        assert theta == 0.0

    @pytest.mark.parametrize("phi,theta", [(math.inf, 0.0), (-math.inf, 1.0), (0.0, math.inf)])
    def test_from_phi_theta_infinite_angle_is_nan(self, phi, theta):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            v = Vector.from_phi_theta(phi, theta)
        assert math.isnan(v.x)
        assert math.isnan(v.z)

    def test_from_phi_theta_nan_azimuth_keeps_elevation(self):
        v = Vector.from_phi_theta(0.0, math.nan)
        assert math.isnan(v.x)
        assert v.y == 0.0
        assert math.isnan(v.z)

    def test_divide_by_numpy_zero_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            v = Vector(1, -1, 0).divide(np.float64(0.0))
            w = Vector(1, 1, 1) / np.float64(0.0)
        assert v.x == math.inf
        assert v.y == -math.inf
        assert math.isnan(v.z)
        assert w.x == math.inf

    def test_infinite_components_propagate(self):
        v = Vector(math.inf, 0, 0)
        assert v.length() == math.inf
        assert math.isnan(v.unit().x)


class TestDiagnostics:
    def test_silent_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="vec3d.vector"):
            Vector(0, 0, 0).unit()
        assert caplog.records == []

    def test_debug_logs_degenerate_input(self, caplog, monkeypatch):
        monkeypatch.setattr(config, "DEBUG", True)
        with caplog.at_level(logging.WARNING, logger="vec3d.vector"):
            Vector(0, 0, 0).unit()
            Vector(1, 0, 0).angle_to(Vector(0, 0, 0))
            Vector(0, 0, 0).to_phi_theta()
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 3
        assert messages[0].startswith("unit: zero-length vector")
        assert messages[1].startswith("angle_to: zero-length vector")
        assert messages[2].startswith("to_phi_theta: zero-length vector")

    def test_debug_does_not_change_results(self, monkeypatch):
        monkeypatch.setattr(config, "DEBUG", True)
        assert all(math.isnan(c) for c in Vector(0, 0, 0).unit())
        assert Vector(3, 0, 4).unit().equals(Vector(0.6, 0, 0.8))
