"""
Unit tests for the hyperbolic geometry kernel.

Tests cover:
- Linear-algebra primitives and the Minkowski form
- Exponential and logarithm maps and parallel transport
- Conversion between the hyperboloid and the Poincaré disc
- Geodesic arc construction
"""

import math

import numpy as np
import pytest

from crystalball.exceptions import DegenerateInputError
from crystalball.geometry import (
    BASE_PT,
    GeodesicArc,
    centre_of_arc_through,
    conformal_factor,
    disc_tangent_to_hyperboloid,
    disc_to_hyperboloid,
    dot,
    euclidean_distance,
    exponential,
    geodesic_arc,
    geodesic_parallel_transport,
    hyperboloid_distance,
    hyperboloid_to_disc,
    invert_thru_boundary,
    is_in_disc,
    is_on_hyperboloid,
    logarithm,
    minkowski_dot,
    norm,
    scale,
    tangent_norm,
    vector_sum,
)
from crystalball.geometry.arcs import angle_about
from tests import CLOSENESS, PT0, PT1, TestFixtures


class TestLinearAlgebra:
    """Test vector primitives."""

    def test_dot(self):
        assert dot([1, 2], [-1, 3]) == 5

    def test_norm(self):
        assert norm([1, 2]) == pytest.approx(math.sqrt(5), abs=CLOSENESS)

    def test_euclidean_distance(self):
        assert euclidean_distance([1, 2], [-1, 3]) == pytest.approx(math.sqrt(5), abs=CLOSENESS)

    def test_scale_and_sum_return_new_vectors(self):
        v = np.array([1.0, 2.0])
        scaled = scale(2.0, v)
        total = vector_sum(v, scaled)
        np.testing.assert_array_equal(scaled, [2.0, 4.0])
        np.testing.assert_array_equal(total, [3.0, 6.0])
        np.testing.assert_array_equal(v, [1.0, 2.0])

    def test_minkowski_dot(self):
        assert minkowski_dot([0, 1, 3], [1, 4, 1]) == pytest.approx(1, abs=CLOSENESS)

    def test_length_mismatch(self):
        """Combining vectors of different lengths is an error."""
        with pytest.raises(ValueError):
            dot([1, 2], [1, 2, 3])
        with pytest.raises(ValueError):
            minkowski_dot([1, 2], [1, 2, 3])


class TestHyperboloid:
    """Test the metric and maps of the hyperboloid."""

    def test_example_points_on_hyperboloid(self):
        assert minkowski_dot(PT0, PT0) == pytest.approx(-1, abs=CLOSENESS)
        assert minkowski_dot(PT1, PT1) == pytest.approx(-1, abs=CLOSENESS)
        assert is_on_hyperboloid(PT0)
        assert not is_on_hyperboloid([0, 0, -1])
        assert not is_on_hyperboloid([0, 1])

    def test_tangent_norm_at_base_point(self):
        """Tangents at the base point have their Euclidean norm."""
        tangent = [1, 2, 0]
        assert tangent_norm(tangent) == pytest.approx(norm(tangent), abs=CLOSENESS)

    def test_distance_with_exponential(self):
        tangent = [1, 2, 0]
        other_pt = exponential(BASE_PT, tangent)
        assert hyperboloid_distance(BASE_PT, other_pt) == pytest.approx(math.sqrt(5), abs=CLOSENESS)

    def test_distance_to_self(self):
        assert hyperboloid_distance(PT0, PT0) < 1e-6
        assert hyperboloid_distance(BASE_PT, BASE_PT) == 0.0

    def test_exponential_stays_on_hyperboloid(self):
        other_pt = exponential(PT0, logarithm(PT0, PT1))
        assert is_on_hyperboloid(other_pt, 1e-8)

    def test_logarithm_inverts_exponential(self):
        tangent = [1, 2, 0]
        other_pt = exponential(BASE_PT, tangent)
        np.testing.assert_allclose(logarithm(BASE_PT, other_pt), tangent, atol=CLOSENESS)

    def test_exponential_inverts_logarithm(self):
        log = logarithm(PT0, PT1)
        assert hyperboloid_distance(PT1, exponential(PT0, log)) == pytest.approx(0, abs=1e-6)

    def test_logarithm_is_tangent(self):
        log = logarithm(PT0, PT1)
        assert minkowski_dot(log, PT0) == pytest.approx(0, abs=1e-9)
        assert tangent_norm(log) == pytest.approx(hyperboloid_distance(PT0, PT1), rel=1e-9)

    def test_exponential_of_zero_tangent(self):
        """A (near-)zero tangent exponentiates to a copy of the base point."""
        base = np.array(PT0)
        result = exponential(base, [0, 0, 0])
        np.testing.assert_array_equal(result, base)
        assert result is not base

        result = exponential(base, [1e-9, 0, 0])
        np.testing.assert_array_equal(result, base)

    def test_logarithm_of_base_point(self):
        np.testing.assert_array_equal(logarithm(PT0, PT0), np.zeros(3))
        np.testing.assert_array_equal(logarithm(BASE_PT, BASE_PT), np.zeros(3))

    def test_parallel_transport(self):
        tangent = [1, 2, 0]
        direction = [3, 0, 0]
        other_pt = exponential(BASE_PT, direction)
        transported = geodesic_parallel_transport(BASE_PT, direction, tangent)
        # tangent at the destination with the same norm
        assert minkowski_dot(transported, other_pt) == pytest.approx(0, abs=CLOSENESS)
        assert tangent_norm(transported) == pytest.approx(tangent_norm(tangent), abs=CLOSENESS)

    def test_parallel_transport_orthogonal_component_unchanged(self):
        transported = geodesic_parallel_transport(BASE_PT, [3, 0, 0], [0, 2, 0])
        np.testing.assert_allclose(transported, [0, 2, 0], atol=CLOSENESS)

    def test_parallel_transport_of_direction(self):
        """The velocity of a geodesic is transported to its velocity."""
        direction = np.array([0.6, -0.8, 0.0])
        other_pt = exponential(BASE_PT, direction)
        transported = geodesic_parallel_transport(BASE_PT, direction, direction)
        back = logarithm(other_pt, BASE_PT)
        np.testing.assert_allclose(transported, -back, atol=1e-9)

    def test_parallel_transport_along_zero_direction(self):
        tangent = np.array([1.0, 2.0, 0.0])
        transported = geodesic_parallel_transport(BASE_PT, [0, 0, 0], tangent)
        np.testing.assert_array_equal(transported, tangent)
        assert transported is not tangent


class TestConversion:
    """Test conversion between the hyperboloid and the disc."""

    def test_disc_norm(self):
        """Disc points at hyperbolic distance d from the centre have norm tanh(d / 2)."""
        dist = hyperboloid_distance(BASE_PT, PT0)
        assert norm(hyperboloid_to_disc(PT0)) == pytest.approx(math.tanh(dist / 2), abs=CLOSENESS)

    def test_base_point_is_centre(self):
        np.testing.assert_array_equal(hyperboloid_to_disc(BASE_PT), [0, 0])
        np.testing.assert_array_equal(disc_to_hyperboloid([0, 0]), BASE_PT)

    def test_disc_to_hyperboloid_inverts_hyperboloid_to_disc(self):
        pt = disc_to_hyperboloid(hyperboloid_to_disc(PT1))
        assert hyperboloid_distance(pt, PT1) == pytest.approx(0, abs=1e-6)

    def test_hyperboloid_to_disc_inverts_disc_to_hyperboloid(self):
        disc_pt = [0.24, -0.3]
        np.testing.assert_allclose(hyperboloid_to_disc(disc_to_hyperboloid(disc_pt)), disc_pt, atol=CLOSENESS)

    def test_disc_to_hyperboloid_lands_on_hyperboloid(self):
        for disc_pt in TestFixtures.random_disc_points(20, max_norm=0.95):
            assert is_on_hyperboloid(disc_to_hyperboloid(disc_pt), 1e-8)

    def test_disc_tangent_to_hyperboloid(self):
        disc_pt = [0.24, -0.3]
        hyper_tangent = disc_tangent_to_hyperboloid(disc_pt, [1, 0])
        hyper_pt = disc_to_hyperboloid(disc_pt)
        assert minkowski_dot(hyper_pt, hyper_tangent) == pytest.approx(0, abs=CLOSENESS)

    def test_disc_tangent_is_differential(self):
        """Agrees with a finite difference of disc_to_hyperboloid."""
        disc_pt = np.array([0.24, -0.3])
        disc_tangent = np.array([0.3, 0.7])
        h = 1e-6
        finite_diff = (
            disc_to_hyperboloid(disc_pt + h * disc_tangent)
            - disc_to_hyperboloid(disc_pt - h * disc_tangent)
        ) / (2 * h)
        np.testing.assert_allclose(
            disc_tangent_to_hyperboloid(disc_pt, disc_tangent), finite_diff, rtol=1e-6, atol=1e-6
        )

    def test_disc_tangent_length(self):
        """The hyperbolic length of a disc tangent is its conformal factor times its Euclidean length."""
        disc_pt = [0.5, 0.2]
        disc_tangent = [0.1, -0.2]
        hyper_tangent = disc_tangent_to_hyperboloid(disc_pt, disc_tangent)
        assert tangent_norm(hyper_tangent) == pytest.approx(
            conformal_factor(disc_pt) * norm(disc_tangent), rel=1e-9
        )

    def test_conformal_factor(self):
        assert conformal_factor([0, 0]) == 2.0
        assert conformal_factor([0.6, 0.0]) == pytest.approx(2 / 0.64)
        with pytest.raises(DegenerateInputError):
            conformal_factor([1.0, 0.0])

    def test_outside_disc(self):
        assert is_in_disc([0.5, 0.5])
        assert not is_in_disc([1.0, 0.0])
        with pytest.raises(DegenerateInputError):
            disc_to_hyperboloid([0.8, 0.8])

    def test_invert_thru_boundary(self):
        np.testing.assert_allclose(invert_thru_boundary([0.5, 0]), [2.0, 0.0])
        with pytest.raises(DegenerateInputError):
            invert_thru_boundary([0, 0])


class TestGeodesicArcs:
    """Test construction of geodesic arcs on the disc."""

    def test_centre_of_arc(self):
        centre = centre_of_arc_through([0.5, 0], [0, 0.5])
        np.testing.assert_allclose(centre, [1.25, 1.25], atol=CLOSENESS)

    def test_geodesic_arc_example(self):
        arc = geodesic_arc([0.5, 0], [0, 0.5])
        np.testing.assert_allclose(arc.centre, [1.25, 1.25], atol=CLOSENESS)
        assert arc.radius ** 2 == pytest.approx(2.125, abs=CLOSENESS)
        assert 0 < arc.span < math.pi

    def test_arc_passes_through_inversion(self):
        pt = [0.3, -0.1]
        arc = geodesic_arc(pt, [0.2, 0.4])
        assert euclidean_distance(arc.centre, invert_thru_boundary(pt)) == pytest.approx(
            arc.radius, rel=1e-9
        )

    def test_arc_orthogonal_to_boundary(self):
        arc = geodesic_arc([0.3, -0.1], [0.2, 0.4])
        assert dot(arc.centre, arc.centre) == pytest.approx(1 + arc.radius ** 2, rel=1e-9)

    @pytest.mark.parametrize("pt0,pt1", [
        ([0.5, 0], [0, 0.5]),
        ([0, 0.5], [0.5, 0]),
        ([-0.7, 0.1], [0.6, 0.2]),
        ([0.1, -0.8], [-0.3, -0.2]),
        ([-0.4, -0.4], [0.45, -0.3]),
    ])
    def test_arc_endpoints_and_span(self, pt0, pt1):
        arc = geodesic_arc(pt0, pt1)
        assert 0 < arc.span < math.pi
        endpoints = [arc.point_at(arc.start_angle), arc.point_at(arc.end_angle)]
        # either orientation is allowed
        if euclidean_distance(endpoints[0], pt0) > 1e-9:
            endpoints.reverse()
        np.testing.assert_allclose(endpoints[0], pt0, atol=1e-9)
        np.testing.assert_allclose(endpoints[1], pt1, atol=1e-9)

    def test_arc_is_geodesic(self):
        """Every point of the arc lies on the hyperbolic segment between the endpoints."""
        pt0, pt1 = [-0.7, 0.1], [0.6, 0.2]
        h0, h1 = disc_to_hyperboloid(pt0), disc_to_hyperboloid(pt1)
        total = hyperboloid_distance(h0, h1)
        for disc_pt in geodesic_arc(pt0, pt1).sample(9):
            assert is_in_disc(disc_pt)
            h = disc_to_hyperboloid(disc_pt)
            assert hyperboloid_distance(h0, h) + hyperboloid_distance(h, h1) == pytest.approx(
                total, rel=1e-6
            )

    def test_sample_shape(self):
        samples = geodesic_arc([0.5, 0], [0, 0.5]).sample(10)
        assert samples.shape == (10, 2)

    def test_collinear_with_origin(self):
        with pytest.raises(DegenerateInputError):
            geodesic_arc([0.1, 0.2], [0.2, 0.4])
        with pytest.raises(DegenerateInputError):
            geodesic_arc([0.3, 0], [-0.5, 0])
        with pytest.raises(DegenerateInputError):
            geodesic_arc([0, 0], [0.2, 0.1])

    def test_angle_about(self):
        assert angle_about([1, 1], [0, 1]) == pytest.approx(0)
        assert angle_about([0, 2], [0, 1]) == pytest.approx(math.pi / 2)
        assert angle_about([-1, 1], [0, 1]) == pytest.approx(math.pi)

    def test_arc_is_value_object(self):
        arc = GeodesicArc(np.array([1.0, 1.0]), 1.0, 0.0, 1.0)
        assert arc.span == 1.0
        with pytest.raises(AttributeError):
            arc.radius = 2.0
