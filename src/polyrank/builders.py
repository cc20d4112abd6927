"""Builders for canonical polytopes.

Every builder is a pure function returning a freshly allocated
:class:`Polytope` with its own points and a construction descriptor.

The bit-pattern builders (hypercube, simplex, cross-polytope) record where
each cell landed in fixed-size numpy arrays indexed by bit masks.  Cells are
enumerated so that their facets are always emitted first; reading a slot
that has not been filled yet means that ordering broke, and raises.

The antiprism and cupola family place vertices on two parallel circles
whose radii and separation are solved for unit edge length, then emit their
cells from modular index formulas.  They only exist for coprime ``(n, d)``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .algorithms import facet_components
from .construction import (
    Antiprism,
    Codename,
    CupolaicBlend,
    Cupola,
    Cuploid,
    Cross,
    Hypercube,
    Polygon,
    Simplex,
)
from .errors import UnsupportedConfigurationError
from .models import EPSILON, Cell, Point
from .polytope import Polytope

logger = logging.getLogger(__name__)


def vertex_figure_length(n: int, d: int = 1) -> float:
    """Edge length of the vertex figure of a unit-edge {n/d} polygon."""
    return 2 * math.cos(math.pi * d / n)


# ═══════════════════════════════════════════════════════════════════
# Degenerate and low-rank polytopes
# ═══════════════════════════════════════════════════════════════════

def nullitope() -> Polytope:
    return Polytope([], Codename("nullitope"), 0)


def point() -> Polytope:
    return Polytope([[Point(())]], Codename("point"), 0)


def dyad(length: float = 1.0) -> Polytope:
    """A line segment of the given length centred at the origin."""
    half = length / 2
    return Polytope([[Point((-half,)), Point((half,))], [(0, 1)]], Codename("dyad"))


# ═══════════════════════════════════════════════════════════════════
# Polygons
# ═══════════════════════════════════════════════════════════════════

def polygon(points: Sequence[Point]) -> Polytope:
    """Build a polygon through the given vertices, in order."""
    if len(points) < 2:
        raise ValueError("a polygon needs at least 2 vertices")
    n = len(points)
    edges = [(i, (i + 1) % n) for i in range(n)]
    return Polytope(
        [list(points), edges, [tuple(range(n))]],
        Polygon(n, 1),
    )


def regular_polygon(n: int, d: int = 1, edge_length: float = 1.0) -> Polytope:
    """Build the regular {n/d} polygon with the given edge length.

    Edges join vertex i to vertex (i + d) mod n.  When gcd(n, d) = g > 1 the
    edges form g disjoint cycles, so the result is a compound of g {n/g, d/g}
    polygons with one component each.
    """
    _require_polygon_parameters(n, d)
    inv_radius = 2 * math.sin(math.pi * d / n) / edge_length
    vertices = []
    for i in range(n):
        angle = 2 * math.pi * i / n
        vertices.append(Point((math.cos(angle) / inv_radius, math.sin(angle) / inv_radius)))

    g = math.gcd(n, d)
    edges: List[Cell] = []
    for start in range(g):
        for step in range(n // g):
            a = (start + step * d) % n
            edges.append((a, (a + d) % n))

    components = facet_components(edges)
    logger.debug("Built {%d/%d} with %d component(s)", n, d, len(components))
    return Polytope([vertices, edges, components], Polygon(n, d))


def grunbaumian_polygon(n: int, d: int = 1, edge_length: float = 1.0) -> Polytope:
    """Build a Grünbaumian {n/d}: one n-edge cycle, vertices may coincide."""
    _require_polygon_parameters(n, d)
    t = math.pi * d / n
    inv_radius = 2 * math.sin(t) / edge_length
    vertices = []
    for i in range(n):
        angle = 2 * t * i
        vertices.append(Point((math.cos(angle) / inv_radius, math.sin(angle) / inv_radius)))
    edges = [(i, (i + 1) % n) for i in range(n)]
    return Polytope([vertices, edges, [tuple(range(n))]], Polygon(n, d))


def semiregular_polygon(n: int, d: int = 1, a: float = 1.0, b: float = 1.0) -> Polytope:
    """Build an isogonal n-gon whose edges alternate between lengths *a* and *b*.

    *d* is the absolute turning number: the angles sum to pi * (n - 2d).
    ``n = 4, d = 0`` builds the bowtie.
    """
    if n == 4 and d == 0:
        a, b = min(a, b), max(a, b)
        half_height = math.sqrt(b * b - a * a) / 2
        half_width = a / 2
        vertices = [
            Point((-half_width, half_height)),
            Point((half_width, half_height)),
            Point((-half_width, -half_height)),
            Point((half_width, -half_height)),
        ]
        return Polytope(
            [vertices, [(0, 1), (1, 2), (2, 3), (3, 0)], [(0, 1, 2, 3)]],
            Codename("bowtie"),
        )

    if n < 4 or n % 2:
        raise ValueError("a semiregular polygon needs an even number of sides >= 4")
    if not 0 < 2 * d < n:
        raise ValueError(f"turning number {d} is out of range for {n} sides")

    gamma = math.pi * (1 - 2 * d / n)
    c = math.sqrt(a * a + b * b - 2 * a * b * math.cos(gamma))
    radius = c / math.sin(gamma) / 2
    # Twice the triangle angles; the sine rule is ambiguous here.
    alpha = 2 * math.acos((b * b + c * c - a * a) / (2 * b * c))
    beta = 2 * math.acos((a * a + c * c - b * b) / (2 * a * c))

    vertices = []
    angle = 0.0
    for _ in range(n // 2):
        vertices.append(Point((math.cos(angle) * radius, math.sin(angle) * radius)))
        angle += alpha
        vertices.append(Point((math.cos(angle) * radius, math.sin(angle) * radius)))
        angle += beta

    edges = [(i, (i + 1) % n) for i in range(n)]
    return Polytope([vertices, edges, [tuple(range(n))]], Polygon(n, d))


# ═══════════════════════════════════════════════════════════════════
# Bit-pattern families
# ═══════════════════════════════════════════════════════════════════

def hypercube(rank: int) -> Polytope:
    """Unit-edge hypercube centred at the origin.

    Cells are indexed by pairs of disjoint bit masks (i, j): i marks the
    free axes, j the axes fixed at -0.5.  popcount(i) is the cell's rank,
    and its facets fix one free axis at either end.  Removing a bit from i
    always yields a smaller i, so facets are located before their cells.
    """
    _require_rank(rank)
    size = 1 << rank
    locations = np.full((size, size), -1, dtype=np.int64)
    elements: list = [[] for _ in range(rank + 1)]

    for i in range(size):
        for j in range(size):
            if i == 0:
                coords = tuple(-0.5 if (j >> k) & 1 else 0.5 for k in range(rank))
                locations[j, 0] = len(elements[0])
                elements[0].append(Point(coords))
                continue
            if i & j:
                continue
            bits = _single_bits(i)
            facets = [_located(locations, j, i ^ bit) for bit in bits]
            facets += [_located(locations, j ^ bit, i ^ bit) for bit in bits]
            locations[j, i] = len(elements[len(bits)])
            elements[len(bits)].append(tuple(facets))

    logger.debug("Built hypercube(%d) with counts %s", rank, [len(e) for e in elements])
    return Polytope(elements, Hypercube(rank), rank)


def simplex(rank: int) -> Polytope:
    """Unit-edge regular simplex centred at the origin.

    Cells are the non-empty subsets of the rank + 1 vertices, encoded as bit
    masks; a subset of k + 1 vertices is a rank-k cell whose facets drop one
    vertex each.
    """
    _require_rank(rank)
    aux = [math.inf] + [1 / math.sqrt(2 * k * (k + 1)) for k in range(1, rank + 1)]
    vertices = []
    for i in range(rank + 1):
        coords = []
        for j in range(1, rank + 1):
            if j > i:
                coords.append(-aux[j])
            elif j == i:
                coords.append(j * aux[j])
            else:
                coords.append(0.0)
        vertices.append(Point(tuple(coords)))

    elements: list = [vertices] + [[] for _ in range(rank)]
    locations = np.full(1 << (rank + 1), -1, dtype=np.int64)
    for i in range(rank + 1):
        locations[1 << i] = i

    for mask in range(1, 1 << (rank + 1)):
        if not mask & (mask - 1):
            continue
        bits = _single_bits(mask)
        facets = tuple(_located(locations, mask ^ bit) for bit in bits)
        locations[mask] = len(elements[len(bits) - 1])
        elements[len(bits) - 1].append(facets)

    return Polytope(elements, Simplex(rank), rank)


def cross(rank: int) -> Polytope:
    """Cross-polytope with vertices at ±1/√2 on each axis.

    Proper cells are indexed by (i, j): i is the set of axes in use, j the
    subset of them taken with a negative sign.  The single top cell is made
    of every facet.
    """
    _require_rank(rank)
    if rank == 0:
        built = point()
        built.construction = Cross(0)
        return built

    size = 1 << rank
    locations = np.full((size, size), -1, dtype=np.int64)
    elements: list = [[] for _ in range(rank + 1)]

    for i in range(1, size):
        for j in range(size):
            if i & j != j:
                continue
            if not i & (i - 1):
                sign = -1.0 if j else 1.0
                coords = tuple(sign * math.sqrt(0.5) if (1 << k) == i else 0.0 for k in range(rank))
                locations[i, j] = len(elements[0])
                elements[0].append(Point(coords))
                continue
            bits = _single_bits(i)
            facets = tuple(_located(locations, i ^ bit, j & ~bit) for bit in bits)
            locations[i, j] = len(elements[len(bits) - 1])
            elements[len(bits) - 1].append(facets)

    elements[rank].append(tuple(range(len(elements[rank - 1]))))
    return Polytope(elements, Cross(rank), rank)


def _single_bits(mask: int) -> List[int]:
    """Split *mask* into its set bits, lowest first."""
    bits = []
    while mask:
        low = mask & -mask
        bits.append(low)
        mask ^= low
    return bits


def _located(locations: np.ndarray, *key: int) -> int:
    index = int(locations[key])
    if index < 0:
        raise RuntimeError(f"cell {key} was referenced before it was built")
    return index


# ═══════════════════════════════════════════════════════════════════
# Antiprism and cupola family
# ═══════════════════════════════════════════════════════════════════

def uniform_antiprism(n: int, d: int = 1) -> Polytope:
    """Unit-edge {n/d} antiprism.

    Vertices alternate between the top and bottom base.  Vertex i is joined
    to i + 1 (a side edge) and i + 2 (a base edge); faces are the two bases
    followed by one triangle per vertex.
    """
    _require_coprime(n, d, "antiprism")
    x = n / d
    scale = 2 * math.sin(math.pi / x)
    height_sq = (math.cos(math.pi / x) - math.cos(2 * math.pi / x)) / 2
    if height_sq < -EPSILON:
        raise UnsupportedConfigurationError(f"no uniform {{{n}/{d}}} antiprism exists")
    height = math.sqrt(max(height_sq, 0.0)) / scale

    m = 2 * n
    vertices = []
    edges: List[Cell] = []
    triangles: List[Cell] = []
    bases: Tuple[list, list] = ([], [])
    for i in range(m):
        angle = math.pi * i / x
        z = height if i % 2 == 0 else -height
        vertices.append(Point((math.cos(angle) / scale, math.sin(angle) / scale, z)))
        edges.append((i, (i + 1) % m))
        edges.append((i, (i + 2) % m))
        triangles.append((2 * i, 2 * i + 1, (2 * i + 2) % (2 * m)))
        bases[i % 2].append(2 * i + 1)

    faces = [tuple(bases[0]), tuple(bases[1])] + triangles
    return Polytope(
        [vertices, edges, faces, [tuple(range(len(faces)))]],
        Antiprism(Polygon(n, d)),
    )


def cupola(n: int, d: int = 1) -> Polytope:
    """Unit-edge {n/d} cupola: an {n/d} base over a {2n/d} base.

    Small vertex i is joined to i + 1 and to big vertices 2i, 2i + 1.
    Faces are the two bases, then a triangle and a square per small vertex.
    """
    _require_coprime(n, d, "cupola")
    x = n / d
    r1, r2, h1, h2 = _cupola_geometry(n, d, "cupola")

    vertices = [_circle_point(r1, 2 * math.pi * i / x, h1) for i in range(n)]
    vertices += [_circle_point(r2, math.pi * (k - 0.5) / x, h2) for k in range(2 * n)]

    edges: List[Cell] = []
    faces: List[Cell] = []
    small_base = []
    for i in range(n):
        edges.append((i, (i + 1) % n))
        edges.append((i, n + 2 * i))
        edges.append((i, n + 2 * i + 1))
        faces.append((3 * i + 1, 3 * i + 2, 3 * n + 2 * i))
        faces.append((3 * i + 2, 3 * n + 2 * i + 1, (3 * i + 4) % (3 * n), 3 * i))
        small_base.append(3 * i)
    edges += [(n + k, n + (k + 1) % (2 * n)) for k in range(2 * n)]
    big_base = tuple(3 * n + k for k in range(2 * n))

    faces = [tuple(small_base), big_base] + faces
    return Polytope(
        [vertices, edges, faces, [tuple(range(len(faces)))]],
        Cupola(Polygon(n, d)),
    )


def cuploid(n: int, d: int = 1) -> Polytope:
    """Unit-edge {n/d} cuploid.

    Like the cupola, but the larger base is a doubly covered {n/(d/2)}
    polygon with n vertices and no face of its own.  That base only closes
    up when d is even.
    """
    _require_coprime(n, d, "cuploid")
    if d % 2:
        raise UnsupportedConfigurationError(
            f"a {{{n}/{d}}} cuploid needs an even d for its larger base to close"
        )
    x = n / d
    r1, r2, h1, h2 = _cupola_geometry(n, d, "cuploid")

    vertices = [_circle_point(r1, 2 * math.pi * i / x, h1) for i in range(n)]
    vertices += [_circle_point(r2, math.pi * (k - 0.5) / x, h2) for k in range(n)]

    edges: List[Cell] = []
    faces: List[Cell] = []
    small_base = []
    for i in range(n):
        edges.append((i, (i + 1) % n))
        edges.append((i, n + (2 * i) % n))
        edges.append((i, n + (2 * i + 1) % n))
        faces.append((3 * i + 1, 3 * i + 2, 3 * n + (2 * i) % n))
        faces.append((3 * i + 2, 3 * n + (2 * i + 1) % n, (3 * i + 4) % (3 * n), 3 * i))
        small_base.append(3 * i)
    edges += [(n + k, n + (k + 1) % n) for k in range(n)]

    faces = [tuple(small_base)] + faces
    return Polytope(
        [vertices, edges, faces, [tuple(range(len(faces)))]],
        Cuploid(Polygon(n, d)),
    )


def cupolaic_blend(n: int, d: int = 1) -> Polytope:
    """Unit-edge {n/d} cupolaic blend: two interleaved {n/d} bases over a {2n/d}.

    Small vertex i is joined to i + 2 and to big vertices i, i + 1.  Even
    small vertices make up the first small base and odd ones the second.
    """
    _require_coprime(n, d, "cupolaic blend")
    x = n / d
    r1, r2, h1, h2 = _cupola_geometry(n, d, "cupolaic blend")

    m = 2 * n
    vertices = [_circle_point(r1, math.pi * i / x, h1) for i in range(m)]
    vertices += [_circle_point(r2, math.pi * (k - 0.5) / x, h2) for k in range(m)]

    edges: List[Cell] = []
    faces: List[Cell] = []
    bases: Tuple[list, list] = ([], [])
    for i in range(m):
        edges.append((i, (i + 2) % m))
        edges.append((i, m + i))
        edges.append((i, m + (i + 1) % m))
        faces.append((3 * i + 1, 3 * i + 2, 3 * m + i))
        faces.append((3 * i + 2, 3 * m + (i + 1) % m, (3 * i + 7) % (3 * m), 3 * i))
        bases[i % 2].append(3 * i)
    edges += [(m + k, m + (k + 1) % m) for k in range(m)]

    faces = [tuple(bases[0]), tuple(bases[1])] + faces
    return Polytope(
        [vertices, edges, faces, [tuple(range(len(faces)))]],
        CupolaicBlend(Polygon(n, d)),
    )


def _cupola_geometry(n: int, d: int, family: str) -> Tuple[float, float, float, float]:
    """Radii of both bases and their heights relative to the circumcentre.

    The base separation h0 comes from the right triangle formed by a unit
    side edge and the difference of the two base inradii.
    """
    x = n / d
    r1 = 1 / (2 * math.sin(math.pi / x))
    r2 = 1 / (2 * math.sin(math.pi / (2 * x)))
    t = 1 / (2 * math.tan(math.pi / x)) - 1 / (2 * math.tan(math.pi / (2 * x)))
    h0_sq = 1 - t * t
    if h0_sq <= EPSILON:
        raise UnsupportedConfigurationError(
            f"the {{{n}/{d}}} {family} has no separation between its bases"
        )
    h0 = math.sqrt(h0_sq)
    h1 = ((r2 * r2 - r1 * r1) / h0 + h0) / 2
    h2 = h1 - h0
    return r1, r2, h1, h2


def _circle_point(radius: float, angle: float, height: float) -> Point:
    return Point((radius * math.cos(angle), radius * math.sin(angle), height))


# ═══════════════════════════════════════════════════════════════════
# Parameter checks
# ═══════════════════════════════════════════════════════════════════

def _require_rank(rank: int) -> None:
    if rank < 0:
        raise ValueError("rank must be >= 0")


def _require_polygon_parameters(n: int, d: int) -> None:
    if n < 2:
        raise ValueError(f"a polygon needs at least 2 sides, got {n}")
    if not 1 <= d < n:
        raise ValueError(f"winding number {d} is out of range for {n} sides")


def _require_coprime(n: int, d: int, family: str) -> None:
    _require_polygon_parameters(n, d)
    if math.gcd(n, d) != 1:
        raise UnsupportedConfigurationError(
            f"a uniform {{{n}/{d}}} {family} needs n and d coprime "
            f"(gcd is {math.gcd(n, d)})"
        )
