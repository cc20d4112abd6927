import math

import numpy as np
import pytest

from polyrank.builders import (
    cross,
    cupola,
    cupolaic_blend,
    cuploid,
    dyad,
    grunbaumian_polygon,
    hypercube,
    nullitope,
    point,
    polygon,
    regular_polygon,
    semiregular_polygon,
    simplex,
    uniform_antiprism,
    vertex_figure_length,
)
from polyrank.construction import (
    Antiprism,
    Codename,
    Cross,
    Cupola,
    Hypercube,
    Polygon,
    Simplex,
)
from polyrank.diagnostics import dyadic_errors, edge_lengths, euler_characteristic
from polyrank.errors import UnsupportedConfigurationError
from polyrank.models import Point
from polyrank.visualize import vertex_array


def test_degenerate_builders():
    assert nullitope().rank == -1
    assert point().element_counts() == [1]
    assert point().construction == Codename("point")
    d = dyad(3.0)
    assert d.element_counts() == [2, 1]
    assert d.vertices == [Point((-1.5,)), Point((1.5,))]


class TestSimplex:
    @pytest.mark.parametrize("d", range(0, 7))
    def test_counts(self, d):
        counts = simplex(d).element_counts()
        assert counts == [math.comb(d + 1, k + 1) for k in range(d + 1)]

    def test_centred_unit_edges(self):
        s = simplex(5)
        assert np.allclose(vertex_array(s).mean(axis=0), 0.0)
        assert np.allclose(edge_lengths(s), 1.0)
        assert s.construction == Simplex(5)


class TestCross:
    @pytest.mark.parametrize("d", range(1, 7))
    def test_counts(self, d):
        counts = cross(d).element_counts()
        assert counts[0] == 2 * d
        for k in range(d):
            assert counts[k] == math.comb(d, k + 1) * 2 ** (k + 1)
        assert counts[d] == 1

    def test_cross_zero_is_point(self):
        c = cross(0)
        assert c.element_counts() == [1]
        assert c.construction == Cross(0)

    def test_unit_edges(self):
        assert np.allclose(edge_lengths(cross(4)), 1.0)


class TestHypercube:
    def test_low_ranks(self):
        assert hypercube(0).element_counts() == [1]
        assert hypercube(1).element_counts() == [2, 1]
        assert hypercube(2).element_counts() == [4, 4, 1]

    @pytest.mark.parametrize("d", range(1, 7))
    def test_counts(self, d):
        counts = hypercube(d).element_counts()
        expected = [math.comb(d, k) * 2 ** (d - k) for k in range(d)] + [1]
        assert counts == expected

    def test_geometry(self):
        cube = hypercube(3)
        assert cube.construction == Hypercube(3)
        assert Point((0.5, 0.5, 0.5)) in cube.vertices
        assert np.allclose(edge_lengths(cube), 1.0)

    def test_negative_rank(self):
        for builder in (hypercube, simplex, cross):
            with pytest.raises(ValueError):
                builder(-1)


class TestPolygons:
    def test_regular_pentagon(self):
        pentagon = regular_polygon(5)
        assert pentagon.element_counts() == [5, 5, 1]
        assert pentagon.construction == Polygon(5, 1)
        assert np.allclose(edge_lengths(pentagon), 1.0)

    def test_edge_length(self):
        assert np.allclose(edge_lengths(regular_polygon(7, 3, edge_length=2.5)), 2.5)

    def test_hexagram_compound(self):
        hexagram = regular_polygon(6, 2)
        assert len(hexagram.components) == 2
        assert hexagram.is_compound
        for component in hexagram.components:
            assert len(component) == 3
            vertices = {v for edge in component for v in hexagram.elements[1][edge]}
            assert len(vertices) == 3

    def test_coprime_star_is_single_component(self):
        assert len(regular_polygon(7, 2).components) == 1

    def test_grunbaumian_hexagram(self):
        hexagram = grunbaumian_polygon(6, 2)
        assert hexagram.element_counts() == [6, 6, 1]
        assert hexagram.vertices[0].equals(hexagram.vertices[3], eps=1e-9)
        assert np.allclose(edge_lengths(hexagram), 1.0)

    def test_polygon_from_points(self):
        triangle = polygon([Point((0.0, 0.0)), Point((1.0, 0.0)), Point((0.0, 1.0))])
        assert triangle.element_counts() == [3, 3, 1]
        with pytest.raises(ValueError):
            polygon([Point((0.0,))])

    @pytest.mark.parametrize("n, d", [(1, 1), (5, 0), (5, 5), (5, 7)])
    def test_bad_parameters(self, n, d):
        with pytest.raises(ValueError):
            regular_polygon(n, d)

    def test_semiregular_alternates_lengths(self):
        hexagon = semiregular_polygon(6, 1, a=1.0, b=2.0)
        assert hexagon.element_counts() == [6, 6, 1]
        assert np.allclose(edge_lengths(hexagon), [1.0, 2.0, 1.0, 2.0, 1.0, 2.0])

    def test_semiregular_with_equal_sides_is_regular(self):
        octagon = semiregular_polygon(8)
        assert np.allclose(edge_lengths(octagon), 1.0)
        radii = np.linalg.norm(vertex_array(octagon), axis=1)
        assert np.allclose(radii, radii[0])

    def test_bowtie(self):
        bowtie = semiregular_polygon(4, 0, a=2.0, b=1.0)
        assert bowtie.construction == Codename("bowtie")
        assert np.allclose(edge_lengths(bowtie), [1.0, 2.0, 1.0, 2.0])

    @pytest.mark.parametrize("n, d", [(5, 1), (6, 3), (2, 1)])
    def test_semiregular_bad_parameters(self, n, d):
        with pytest.raises(ValueError):
            semiregular_polygon(n, d)

    def test_vertex_figure_length(self):
        assert math.isclose(vertex_figure_length(4), math.sqrt(2))
        assert math.isclose(vertex_figure_length(6), math.sqrt(3))
        assert math.isclose(vertex_figure_length(3), 1.0)


class TestAntiprismFamily:
    def test_triangular_antiprism_is_octahedron(self):
        octahedron = uniform_antiprism(3)
        assert octahedron.element_counts() == [6, 12, 8, 1]
        assert octahedron.construction == Antiprism(Polygon(3, 1))

    def test_pentagrammic_antiprism(self):
        antiprism = uniform_antiprism(5, 2)
        assert antiprism.element_counts() == [10, 20, 12, 1]
        assert euler_characteristic(antiprism) == 2

    def test_square_cupola(self):
        c = cupola(4)
        assert c.element_counts() == [12, 20, 10, 1]
        assert c.construction == Cupola(Polygon(4, 1))

    def test_pentagrammic_cuploid(self):
        c = cuploid(5, 2)
        assert c.element_counts() == [10, 20, 11, 1]

    def test_cupolaic_blend(self):
        c = cupolaic_blend(5, 2)
        assert c.element_counts() == [20, 40, 22, 1]

    @pytest.mark.parametrize(
        "build",
        [
            lambda: uniform_antiprism(3),
            lambda: uniform_antiprism(7, 3),
            lambda: cupola(3),
            lambda: cupola(5),
            lambda: cupola(5, 3),
            lambda: cuploid(5, 2),
            lambda: cuploid(7, 4),
            lambda: cupolaic_blend(5, 2),
            lambda: cupolaic_blend(3),
        ],
    )
    def test_unit_edges_and_closed_surface(self, build):
        solid = build()
        assert solid.validate() == []
        assert dyadic_errors(solid) == []
        assert np.allclose(edge_lengths(solid), 1.0)
        assert len(solid.components) == 1
        assert len(solid.components[0]) == len(solid.elements[2])

    @pytest.mark.parametrize(
        "build",
        [
            lambda: uniform_antiprism(6, 2),
            lambda: cupola(4, 2),
            lambda: cuploid(6, 4),
            lambda: cupolaic_blend(9, 3),
        ],
    )
    def test_non_coprime_unsupported(self, build):
        with pytest.raises(UnsupportedConfigurationError, match="coprime"):
            build()

    def test_cuploid_needs_even_d(self):
        with pytest.raises(UnsupportedConfigurationError):
            cuploid(5, 1)

    def test_unsolvable_height(self):
        with pytest.raises(UnsupportedConfigurationError):
            uniform_antiprism(5, 4)
        with pytest.raises(UnsupportedConfigurationError):
            cupola(6)

    def test_unsupported_is_a_value_error(self):
        with pytest.raises(ValueError):
            uniform_antiprism(4, 2)


def test_builders_allocate_fresh_polytopes():
    a = hypercube(2)
    b = hypercube(2)
    a.elements[1].clear()
    assert b.element_counts() == [4, 4, 1]
