import numpy as np
import pytest

from polyrank.builders import (
    cross,
    dyad,
    hypercube,
    nullitope,
    point,
    regular_polygon,
    simplex,
)
from polyrank.construction import (
    Codename,
    Multiprism,
    Multipyramid,
    Multitegum,
    Polygon,
)
from polyrank.diagnostics import dyadic_errors, edge_lengths, euler_characteristic
from polyrank.errors import StructuralError
from polyrank.models import Point
from polyrank.polytope import Polytope
from polyrank.products import extrude_to_prism, prism, pyramid, tegum

DYAD = Codename("dyad")


def _broken_dyad():
    return Polytope([[Point((0.0,)), Point((1.0,))], [(0, 5)]])


class TestIdentityLaws:
    @pytest.mark.parametrize("build", [dyad, lambda: regular_polygon(5), lambda: hypercube(3)])
    def test_prism_with_point(self, build):
        p = build()
        assert prism(point(), p).elements == p.elements
        assert prism(p, point()).elements == p.elements

    def test_prism_with_nullitope(self):
        assert prism(nullitope(), hypercube(3)).is_nullitope
        assert prism(hypercube(3), nullitope()).is_nullitope

    @pytest.mark.parametrize("build", [dyad, lambda: regular_polygon(5), lambda: cross(3)])
    def test_tegum_with_nullitope_and_point(self, build):
        p = build()
        assert tegum(nullitope(), p).elements == p.elements
        assert tegum(p, nullitope()).elements == p.elements
        assert tegum(point(), p).elements == p.elements

    @pytest.mark.parametrize("build", [dyad, lambda: simplex(3)])
    def test_pyramid_with_nullitope(self, build):
        p = build()
        assert pyramid(nullitope(), p).elements == p.elements
        assert pyramid(p, nullitope()).elements == p.elements

    def test_identity_result_is_a_copy(self):
        p = hypercube(2)
        result = prism(point(), p)
        result.elements[1].clear()
        assert p.element_counts() == [4, 4, 1]


class TestSmallProducts:
    def test_prism_of_dyads_is_square(self):
        square = prism(dyad(), dyad())
        assert square.element_counts() == hypercube(2).element_counts() == [4, 4, 1]
        assert dyadic_errors(square) == []
        assert np.allclose(edge_lengths(square), 1.0)
        assert len(square.face_vertices(0)) == 4

    def test_tegum_of_dyads_is_rhombus(self):
        rhombus = tegum(dyad(), dyad())
        assert rhombus.element_counts() == cross(2).element_counts() == [4, 4, 1]
        assert dyadic_errors(rhombus) == []
        assert rhombus.vertices == [
            Point((0.0, -0.5)),
            Point((0.0, 0.5)),
            Point((-0.5, 0.0)),
            Point((0.5, 0.0)),
        ]

    def test_pyramid_of_point_and_dyad_is_triangle(self):
        triangle = pyramid(point(), dyad())
        assert triangle.element_counts() == [3, 3, 1]
        assert triangle.space_dimensions == 2
        assert dyadic_errors(triangle) == []

    def test_pyramid_of_two_points_is_dyad(self):
        segment = pyramid(point(), point(), offset=2.0)
        assert segment.element_counts() == [2, 1]
        assert segment.vertices == [Point((2.0,)), Point((-2.0,))]


class TestCountFormulas:
    def test_duoprism(self):
        duoprism = prism(regular_polygon(3), regular_polygon(5))
        assert duoprism.element_counts() == [15, 30, 23, 8, 1]
        assert duoprism.space_dimensions == 4
        assert euler_characteristic(duoprism) == 0
        assert dyadic_errors(duoprism) == []
        assert np.allclose(edge_lengths(duoprism), 1.0)

    def test_duotegum(self):
        duotegum = tegum(regular_polygon(3), regular_polygon(5))
        assert duotegum.element_counts() == [8, 23, 30, 15, 1]
        assert euler_characteristic(duotegum) == 0
        assert dyadic_errors(duotegum) == []

    def test_square_tegum_dyad_is_octahedron(self):
        octahedron = tegum(hypercube(2), dyad())
        assert octahedron.element_counts() == cross(3).element_counts() == [6, 12, 8, 1]
        assert dyadic_errors(octahedron) == []

    def test_pyramid_of_dyads_is_tetrahedron(self):
        tetrahedron = pyramid(dyad(), dyad())
        assert tetrahedron.element_counts() == simplex(3).element_counts() == [4, 6, 4, 1]
        assert tetrahedron.space_dimensions == 3
        assert dyadic_errors(tetrahedron) == []

    def test_square_pyramid(self):
        square_pyramid = pyramid(hypercube(2), point())
        assert square_pyramid.element_counts() == [5, 8, 5, 1]
        assert dyadic_errors(square_pyramid) == []

    def test_prism_of_square_and_dyad_is_cube(self):
        cube = prism(hypercube(2), dyad())
        assert cube.element_counts() == [8, 12, 6, 1]
        assert dyadic_errors(cube) == []
        assert np.allclose(edge_lengths(cube), 1.0)


class TestMultiOperand:
    def test_no_operands(self):
        assert prism().is_nullitope
        assert tegum().is_nullitope
        assert pyramid().is_nullitope

    def test_three_dyads(self):
        cube = prism(dyad(), dyad(), dyad())
        assert cube.element_counts() == [8, 12, 6, 1]
        assert cube.construction == Multiprism((DYAD, DYAD, DYAD))

    def test_nested_products_merge(self):
        nested = tegum(tegum(dyad(), dyad()), dyad())
        assert nested.construction == Multitegum((DYAD, DYAD, DYAD))
        assert nested.element_counts() == cross(3).element_counts()

    def test_mixed_products_do_not_merge(self):
        mixed = pyramid(prism(dyad(), dyad()), point())
        assert mixed.construction == Multipyramid((Multiprism((DYAD, DYAD)), Codename("point")))

    def test_pyramid_of_three_points_is_triangle(self):
        triangle = pyramid(point(), point(), point())
        assert triangle.element_counts() == [3, 3, 1]

    def test_single_operand_is_copied(self):
        square = regular_polygon(4)
        result = prism(square)
        assert result is not square
        assert result.elements == square.elements
        assert result.construction == Multiprism((Polygon(4, 1),))

    def test_operands_unchanged(self):
        square = hypercube(2)
        segment = dyad()
        prism(square, segment)
        tegum(square, segment)
        pyramid(square, segment)
        assert square.element_counts() == [4, 4, 1]
        assert segment.element_counts() == [2, 1]


class TestCompounds:
    def test_prism_of_compound(self):
        result = prism(regular_polygon(6, 2), dyad())
        assert len(result.components) == 2
        assert euler_characteristic(result) == 4

    def test_tegum_of_compound(self):
        result = tegum(regular_polygon(6, 2), dyad())
        assert len(result.components) == 2
        for component in result.components:
            assert len(component) == 6
        assert dyadic_errors(result) == []


class TestRejection:
    @pytest.mark.parametrize("product", [prism, tegum, pyramid])
    def test_malformed_operand(self, product):
        with pytest.raises(StructuralError):
            product(dyad(), _broken_dyad())


def test_extrude_to_prism():
    box = extrude_to_prism(hypercube(2), 2.0)
    assert box.element_counts() == [8, 12, 6, 1]
    assert sorted(set(np.round(edge_lengths(box), 9))) == [1.0, 2.0]
