"""Tests for direction construction and frame rotation."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from mott_mc.physics.direction import polar_to_direction, rotate_uz


class TestPolarToDirection:

    @pytest.mark.parametrize("theta", [0.0, 1e-7, 0.3, np.pi / 2.0, 2.8, np.pi])
    @pytest.mark.parametrize("phi", [0.0, 1.0, np.pi, 5.5])
    def test_unit_norm(self, theta, phi):
        direction = polar_to_direction(theta, phi)
        assert np.linalg.norm(direction) == pytest.approx(1.0)
        assert direction[2] == pytest.approx(np.cos(theta))

    def test_backward_hemisphere(self):
        assert polar_to_direction(3.0, 0.0)[2] < 0.0

    def test_azimuth(self):
        direction = polar_to_direction(np.pi / 2.0, np.pi / 2.0)
        assert_allclose(direction, [0.0, 1.0, 0.0], atol=1e-12)


class TestRotateUz:

    def test_identity_for_plus_z(self):
        local = polar_to_direction(0.4, 1.2)
        assert_allclose(rotate_uz(local, np.array([0.0, 0.0, 1.0])), local)

    def test_flip_for_minus_z(self):
        local = polar_to_direction(0.4, 1.2)
        rotated = rotate_uz(local, np.array([0.0, 0.0, -1.0]))
        assert_allclose(rotated, [-local[0], local[1], -local[2]])

    def test_forward_maps_onto_reference(self):
        reference = np.array([1.0, 2.0, -0.5])
        reference /= np.linalg.norm(reference)
        assert_allclose(rotate_uz(np.array([0.0, 0.0, 1.0]), reference), reference, atol=1e-12)

    @pytest.mark.parametrize("theta", [1e-3, 0.5, 2.0, 3.1])
    def test_preserves_scattering_angle(self, theta):
        rng = np.random.default_rng(42)
        reference = rng.normal(size=3)
        reference /= np.linalg.norm(reference)

        rotated = rotate_uz(polar_to_direction(theta, 2.0), reference)

        assert np.linalg.norm(rotated) == pytest.approx(1.0)
        assert np.dot(rotated, reference) == pytest.approx(np.cos(theta), abs=1e-12)
