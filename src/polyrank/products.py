"""Prism, tegum and pyramid products of polytopes.

Each binary product walks every pair of cells (an m-cell of P and an
n-cell of Q) in a fixed order: source ranks (m, n) with m outermost, then
source indices (i, j) lexicographically.  The facets of a product cell are
themselves product cells of a lower combined rank, so their indices have to
be recovered from that order without scanning what was already emitted.
:class:`_ProductIndex` holds the offsets that make this a constant-time
lookup.

For the tegum and pyramid products the nullitope takes part as a rank -1
cell with a count of one; it is the factor that leaves the other cell
unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

import numpy as np

from .builders import dyad, nullitope
from .construction import Multiprism, Multipyramid, Multitegum, merge_factors
from .models import Cell, Point
from .polytope import Polytope

logger = logging.getLogger(__name__)


class _ProductIndex:
    """Position of product cell (m, i) x (n, j) within its combined rank.

    ``skip[m, n]`` counts the cells of the same combined rank emitted by the
    rank pairs preceding (m, n); it follows
    ``skip[m, n] = skip[m - 1, n + 1] + |P_{m-1}| * |Q_{n+1}|`` and is zero
    when m is the lowest rank or n the highest.  Within one pair the cells
    are laid out row-major, so the position is ``i * |Q_n| + j``.

    The table depends on both operands' counts and is built per call.
    """

    def __init__(self, p_counts: Sequence[int], q_counts: Sequence[int], low: int, m_max: int, n_max: int) -> None:
        self.low = low
        self.q_counts = list(q_counts)
        rows = m_max - low + 1
        cols = n_max - low + 1
        self.skip = np.zeros((rows, cols), dtype=np.int64)
        for a in range(1, rows):
            for b in range(cols - 1):
                self.skip[a, b] = self.skip[a - 1, b + 1] + p_counts[a - 1] * q_counts[b + 1]

    def __call__(self, m: int, i: int, n: int, j: int) -> int:
        a = m - self.low
        b = n - self.low
        return int(self.skip[a, b]) + i * self.q_counts[b] + j


def _count(polytope: Polytope, rank: int) -> int:
    return 1 if rank == -1 else len(polytope.elements[rank])


def _subelements(polytope: Polytope, rank: int, index: int) -> Cell:
    """Facets of a cell, treating each vertex as bounded by the nullitope."""
    if rank == -1:
        return ()
    if rank == 0:
        return (0,)
    return polytope.elements[rank][index]


def _embedded(vertex: Point, space_dimensions: int) -> Point:
    return vertex.pad_right(space_dimensions - len(vertex))


# ═══════════════════════════════════════════════════════════════════
# Binary products
# ═══════════════════════════════════════════════════════════════════

def _prism(p: Polytope, q: Polytope) -> Polytope:
    if p.is_nullitope or q.is_nullitope or not p.vertices or not q.vertices:
        return nullitope()
    if p.is_point:
        return q.copy()
    if q.is_point:
        return p.copy()

    vertices = [
        _embedded(a, p.space_dimensions).product(_embedded(b, q.space_dimensions))
        for a in p.vertices
        for b in q.vertices
    ]
    elements: list = [vertices] + [[] for _ in range(p.rank + q.rank)]
    index = _ProductIndex(
        p.element_counts(), q.element_counts(), low=0, m_max=p.rank, n_max=q.rank
    )

    for m in range(p.rank + 1):
        for n in range(q.rank + 1):
            if m == 0 and n == 0:
                continue
            for i in range(_count(p, m)):
                p_cell = p.elements[m][i] if m else ()
                for j in range(_count(q, n)):
                    q_cell = q.elements[n][j] if n else ()
                    facets = [index(m - 1, f, n, j) for f in p_cell]
                    facets += [index(m, i, n - 1, g) for g in q_cell]
                    elements[m + n].append(tuple(facets))

    return Polytope(elements, space_dimensions=p.space_dimensions + q.space_dimensions)


def _tegum(p: Polytope, q: Polytope) -> Polytope:
    if p.rank <= 0 or not p.vertices:
        return q.copy()
    if q.rank <= 0 or not q.vertices:
        return p.copy()

    vertices = [_embedded(b, q.space_dimensions).pad_left(p.space_dimensions) for b in q.vertices]
    vertices += [_embedded(a, p.space_dimensions).pad_right(q.space_dimensions) for a in p.vertices]
    elements: list = [vertices] + [[] for _ in range(p.rank + q.rank)]
    index = _ProductIndex(
        [1] + p.element_counts(),
        [1] + q.element_counts(),
        low=-1,
        m_max=p.rank - 1,
        n_max=q.rank - 1,
    )
    _join_cells(p, q, index, elements, p.rank - 1, q.rank - 1)

    # Components pair up whole: each facet of the result is a ridge of P
    # joined with a ridge of Q.
    for i in range(len(p.components)):
        for j in range(len(q.components)):
            elements[p.rank + q.rank].append(
                tuple(
                    index(p.rank - 1, f, q.rank - 1, g)
                    for f in _subelements(p, p.rank, i)
                    for g in _subelements(q, q.rank, j)
                )
            )

    return Polytope(elements, space_dimensions=p.space_dimensions + q.space_dimensions)


def _pyramid(p: Polytope, q: Polytope, offset: float) -> Polytope:
    if p.is_nullitope or not p.vertices:
        return q.copy()
    if q.is_nullitope or not q.vertices:
        return p.copy()

    vertices = [
        _embedded(b, q.space_dimensions).pad_left(p.space_dimensions).add_coordinate(offset)
        for b in q.vertices
    ]
    vertices += [
        _embedded(a, p.space_dimensions).pad_right(q.space_dimensions).add_coordinate(-offset)
        for a in p.vertices
    ]
    elements: list = [vertices] + [[] for _ in range(p.rank + q.rank + 1)]
    index = _ProductIndex(
        [1] + p.element_counts(),
        [1] + q.element_counts(),
        low=-1,
        m_max=p.rank,
        n_max=q.rank,
    )
    _join_cells(p, q, index, elements, p.rank, q.rank)

    return Polytope(elements, space_dimensions=p.space_dimensions + q.space_dimensions + 1)


def _join_cells(
    p: Polytope,
    q: Polytope,
    index: _ProductIndex,
    elements: List[list],
    m_max: int,
    n_max: int,
) -> None:
    """Emit the join of every cell pair up to (m_max, n_max).

    The join of an m-cell and an n-cell has rank m + n + 1.  Pairs of
    combined rank 0 are the vertices, which are already in place.
    """
    for m in range(-1, m_max + 1):
        for n in range(-1, n_max + 1):
            if m + n < 0:
                continue
            for i in range(_count(p, m)):
                p_cell = _subelements(p, m, i)
                for j in range(_count(q, n)):
                    q_cell = _subelements(q, n, j)
                    facets = [index(m - 1, f, n, j) for f in p_cell]
                    facets += [index(m, i, n - 1, g) for g in q_cell]
                    elements[m + n + 1].append(tuple(facets))


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def prism(*polytopes: Polytope) -> Polytope:
    """Cartesian product of any number of polytopes."""
    return _product(polytopes, Multiprism, _prism)


def tegum(*polytopes: Polytope) -> Polytope:
    """Tegum (dual Cartesian) product of any number of polytopes."""
    return _product(polytopes, Multitegum, _tegum)


def pyramid(*polytopes: Polytope, offset: float = 1.0) -> Polytope:
    """Pyramid product of any number of polytopes.

    At each step the right-hand factor sits at ``+offset`` on a new axis and
    the left-hand factor at ``-offset``.
    """
    return _product(polytopes, Multipyramid, lambda p, q: _pyramid(p, q, offset))


def extrude_to_prism(polytope: Polytope, height: float = 1.0) -> Polytope:
    """Prism over *polytope* with the given height."""
    return prism(polytope, dyad(height))


def _product(
    polytopes: Sequence[Polytope],
    kind: type,
    combine: Callable[[Polytope, Polytope], Polytope],
) -> Polytope:
    """Fold *combine* over the operands from right to left."""
    if not polytopes:
        return nullitope()
    for operand in polytopes:
        operand.check()

    result = polytopes[-1].copy()
    for operand in reversed(polytopes[:-1]):
        result = combine(operand, result)

    result.construction = merge_factors(kind, [operand.construction for operand in polytopes])
    logger.debug(
        "%s of %d operand(s): rank %d, counts %s",
        kind.__name__,
        len(polytopes),
        result.rank,
        result.element_counts(),
    )
    return result
