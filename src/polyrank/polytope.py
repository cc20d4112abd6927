from __future__ import annotations

import json
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .algorithms import facet_components
from .construction import (
    Codename,
    Construction,
    Name,
    Pyramid,
    construction_from_dict,
    construction_to_dict,
)
from .errors import StructuralError
from .models import Cell, ElementList, Point

logger = logging.getLogger(__name__)


def _cell(rank: int, index: int, cell: Sequence[int]) -> Cell:
    # Floats and bools are refused rather than truncated.
    for sub in cell:
        if type(sub) is not int:
            raise StructuralError(
                f"Rank {rank} element {index} has non-integer facet index {sub!r}",
                rank=rank,
                index=index,
            )
    return tuple(cell)


class Polytope:
    """Ranked container for vertices and their incidence cells.

    ``elements[0]`` holds :class:`Point` vertices.  ``elements[k]`` for
    ``0 < k < rank`` holds cells, each a tuple of indices into
    ``elements[k - 1]``.  ``elements[rank]`` holds the components: maximal
    connected groupings of the facets.

    The nullitope (rank -1) has no element lists at all; the point (rank 0)
    has a single vertex with no coordinates.
    """

    VERSION = "1.0"

    def __init__(
        self,
        elements: Sequence[Sequence],
        construction: Optional[Construction] = None,
        space_dimensions: Optional[int] = None,
    ) -> None:
        self.elements: ElementList = []
        for rank, cells in enumerate(elements):
            if rank == 0:
                self.elements.append(list(cells))
            else:
                self.elements.append([_cell(rank, index, cell) for index, cell in enumerate(cells)])
        self.construction: Construction = construction or Name("polytope")
        if space_dimensions is None:
            space_dimensions = max((len(p) for p in self.vertices), default=0)
        self.space_dimensions = space_dimensions

    # ── Shape accessors ─────────────────────────────────────────────

    @property
    def rank(self) -> int:
        return len(self.elements) - 1

    @property
    def vertices(self) -> List[Point]:
        return self.elements[0] if self.elements else []

    @property
    def components(self) -> List:
        return self.elements[-1] if self.elements else []

    @property
    def is_nullitope(self) -> bool:
        return self.rank == -1

    @property
    def is_point(self) -> bool:
        return self.rank == 0

    @property
    def is_compound(self) -> bool:
        return self.rank > 0 and len(self.components) > 1

    def element_counts(self) -> List[int]:
        return [len(cells) for cells in self.elements]

    def copy(self) -> "Polytope":
        elements = [list(cells) for cells in self.elements]
        if elements:
            elements[0] = [Point(v.coordinates) for v in elements[0]]
        return Polytope(
            elements,
            self.construction,
            self.space_dimensions,
        )

    def __repr__(self) -> str:
        return f"Polytope(rank={self.rank}, counts={self.element_counts()})"

    # ── Validation ──────────────────────────────────────────────────

    def validate(self) -> list[str]:
        return [message for message, _, _ in self._structural_problems()]

    def check(self) -> "Polytope":
        """Raise :class:`StructuralError` on the first malformed cell."""
        for message, rank, index in self._structural_problems():
            raise StructuralError(message, rank=rank, index=index)
        return self

    def _structural_problems(self):
        for index, vertex in enumerate(self.vertices):
            if not isinstance(vertex, Point):
                yield f"Rank 0 element {index} is not a point", 0, index
            elif len(vertex) > self.space_dimensions:
                yield (
                    f"Rank 0 element {index} has {len(vertex)} coordinates "
                    f"but the ambient dimension is {self.space_dimensions}",
                    0,
                    index,
                )

        for rank in range(1, len(self.elements)):
            below = len(self.elements[rank - 1])
            for index, cell in enumerate(self.elements[rank]):
                if not cell:
                    yield f"Rank {rank} element {index} has no facets", rank, index
                    continue
                for facet in cell:
                    if facet < 0 or facet >= below:
                        yield (
                            f"Rank {rank} element {index} references missing "
                            f"rank {rank - 1} element {facet}",
                            rank,
                            index,
                        )
                if len(set(cell)) != len(cell):
                    yield f"Rank {rank} element {index} repeats a facet", rank, index

    # ── Derived structure ───────────────────────────────────────────

    def face_vertices(self, face: int) -> List[int]:
        """Return the ordered vertex cycle bounding 2-cell *face*.

        Edges are walked one at a time, so polygons that revisit a vertex
        (Grünbaumian polygons, bowties) still come out as a single cycle.
        """
        if self.rank < 2:
            raise StructuralError(f"A rank {self.rank} polytope has no faces", rank=2, index=face)
        faces = self.elements[2]
        if face < 0 or face >= len(faces):
            raise StructuralError(f"Face {face} does not exist", rank=2, index=face)
        edge_ids = faces[face]
        edges = self.elements[1]
        for edge_id in edge_ids:
            if edge_id < 0 or edge_id >= len(edges) or len(edges[edge_id]) != 2:
                raise StructuralError(
                    f"Face {face} references invalid edge {edge_id}", rank=2, index=face
                )

        incident: Dict[int, List[int]] = defaultdict(list)
        for edge_id in edge_ids:
            a, b = edges[edge_id]
            incident[a].append(edge_id)
            incident[b].append(edge_id)

        start = edges[edge_ids[0]][0]
        cycle = [start]
        used: set[int] = set()
        current = start
        for _ in range(len(edge_ids)):
            edge_id = next((e for e in incident[current] if e not in used), None)
            if edge_id is None:
                raise StructuralError(
                    f"Face {face} does not close into a cycle", rank=2, index=face
                )
            used.add(edge_id)
            a, b = edges[edge_id]
            current = b if a == current else a
            cycle.append(current)

        if current != start:
            raise StructuralError(f"Face {face} does not close into a cycle", rank=2, index=face)
        return cycle[:-1]

    def with_components(self) -> "Polytope":
        """Return a copy whose top rank is rebuilt by facet connectivity."""
        if self.rank < 1:
            return self.copy()
        elements = [list(cells) for cells in self.elements[:-1]]
        if self.rank == 1:
            elements.append([tuple(range(len(self.vertices)))])
        else:
            elements.append(facet_components(elements[-1]))
        return Polytope(elements, self.construction, self.space_dimensions)

    # ── In-place growth ─────────────────────────────────────────────

    def extrude_to_pyramid(self, apex: Union[Point, float] = 1.0) -> "Polytope":
        """Grow this polytope into a pyramid over itself, in place.

        *apex* is either the apex point or its height along a fresh axis.
        The k-th element of rank r is kept; the pyramid over it becomes
        element ``count[r + 1] + k`` of rank ``r + 1``.
        """
        if self.is_nullitope:
            self.elements = [[Point(())]]
            self.space_dimensions = 0
            self.construction = Codename("point")
            return self

        self.check()
        if not isinstance(apex, Point):
            apex = Point((0.0,) * self.space_dimensions + (float(apex),))

        old_counts = self.element_counts()
        self.elements.append([])
        self.elements[0].append(apex)
        self.space_dimensions = max(self.space_dimensions, len(apex))

        apex_index = old_counts[0]
        self.elements[1].extend((i, apex_index) for i in range(old_counts[0]))
        for rank in range(2, len(self.elements)):
            below = old_counts[rank - 1]
            self.elements[rank].extend(
                (i,) + tuple(f + below for f in self.elements[rank - 1][i])
                for i in range(below)
            )

        self.construction = Pyramid(self.construction)
        logger.debug("Extruded pyramid to rank %d, counts %s", self.rank, self.element_counts())
        return self

    # ── Codec boundary ──────────────────────────────────────────────

    @classmethod
    def from_elements(
        cls,
        points: Sequence[Point],
        cells: Sequence[Sequence[Sequence[int]]],
        components: Optional[Sequence[Sequence[int]]] = None,
        construction: Optional[Construction] = None,
        space_dimensions: Optional[int] = None,
    ) -> "Polytope":
        """Build a checked polytope from a vertex list and cell lists.

        *cells* lists ranks 1 .. rank-1.  When *components* is omitted the
        top rank is detected from facet connectivity.
        """
        elements: list = [list(points)] + [list(rank_cells) for rank_cells in cells]
        polytope = cls(elements, construction, space_dimensions)
        if components is not None:
            polytope.elements.append([tuple(c) for c in components])
            polytope.check()
            return polytope

        polytope.check()
        if not points:
            return polytope
        polytope.elements.append([])
        return polytope.with_components()

    def to_elements(self) -> Tuple[List[Point], List[List[Cell]]]:
        """Return ``(points, cells)`` with cells for ranks 1 .. rank, components included."""
        return list(self.vertices), [list(cells) for cells in self.elements[1:]]

    def to_dict(self) -> dict:
        return {
            "version": self.VERSION,
            "rank": self.rank,
            "space_dimensions": self.space_dimensions,
            "construction": construction_to_dict(self.construction),
            "vertices": [list(p.coordinates) for p in self.vertices],
            "elements": [[list(cell) for cell in cells] for cells in self.elements[1:]],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Polytope":
        rank = int(payload.get("rank", -1))
        construction = None
        if "construction" in payload:
            construction = construction_from_dict(payload["construction"])
        if rank < 0:
            return cls([], construction or Codename("nullitope"), 0)

        vertices = [Point.of(coords) for coords in payload.get("vertices", [])]
        cells = payload.get("elements", [])
        if len(cells) != rank:
            raise StructuralError(
                f"Payload declares rank {rank} but carries {len(cells) + 1} element ranks"
            )
        polytope = cls([vertices] + cells, construction, payload.get("space_dimensions"))
        return polytope.check()

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_data: str) -> "Polytope":
        return cls.from_dict(json.loads(json_data))
