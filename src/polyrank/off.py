"""OFF file codec.

Layout of an n-dimensional OFF file::

    nOFF                      (plain "OFF" when n = 3)
    V F E C4 ...              element counts: vertices, faces, edges, ranks 3 .. n-1
    x0 x1 ... x(n-1)          one line per vertex
    k v0 v1 ... v(k-1)        one line per face, as a vertex cycle
    k f0 f1 ... f(k-1)        one line per rank 3 .. n-1 element, as facet indices

A 2OFF file has no edges or faces; its counts line is ``V C`` and the
components are stored as vertex cycles in place of faces.  Edge counts are
never trusted: edges are rebuilt from the face cycles on read.  Components
of files of rank 3 and above are not stored and get recomputed.

``#`` starts a comment running to the end of the line.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .builders import nullitope, point
from .construction import Name
from .models import Cell, Point
from .polytope import Polytope

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_RANK_NAMES = ["Vertices", "Edges", "Faces", "Cells", "Tera"]


def _rank_name(rank: int) -> str:
    if rank < len(_RANK_NAMES):
        return _RANK_NAMES[rank]
    return f"{rank}-elements"


# ── Writing ─────────────────────────────────────────────────────────

def to_off(polytope: Polytope, comments: bool = False) -> str:
    """Serialise *polytope* as OFF text.

    Raises ``ValueError`` when the polytope lives in more dimensions than
    its own rank, which the format has no room for.
    """
    rank = polytope.rank
    if polytope.space_dimensions > max(rank, 0):
        raise ValueError(
            f"OFF cannot store a rank {rank} polytope in {polytope.space_dimensions} dimensions"
        )
    if rank <= 0:
        return f"{rank}OFF\n"

    counts = polytope.element_counts()
    lines: List[str] = ["OFF" if rank == 3 else f"{rank}OFF"]

    if rank == 1:
        header_ranks = [0]
    elif rank == 2:
        header_ranks = [0, 2]
    else:
        header_ranks = [0, 2, 1] + list(range(3, rank))
    if comments:
        names = [_rank_name(r) for r in header_ranks]
        if rank == 2:
            names[1] = "Components"
        lines.append("# " + ", ".join(names))
    lines.append(" ".join(str(counts[r]) for r in header_ranks))

    if comments:
        lines.append("")
        lines.append("# Vertices")
    for vertex in polytope.vertices:
        coords = list(vertex.coordinates) + [0.0] * (rank - len(vertex))
        lines.append(" ".join(repr(float(c)) for c in coords))

    if rank >= 2:
        if comments:
            lines.append("")
            lines.append("# Components" if rank == 2 else "# Faces")
        for face in range(counts[2]):
            cycle = polytope.face_vertices(face)
            lines.append(" ".join(str(v) for v in [len(cycle)] + cycle))

    for r in range(3, rank):
        if comments:
            lines.append("")
            lines.append(f"# {_rank_name(r)}")
        for cell in polytope.elements[r]:
            lines.append(" ".join(str(f) for f in (len(cell),) + tuple(cell)))

    return "\n".join(lines) + "\n"


# ── Reading ─────────────────────────────────────────────────────────

class _Tokens:
    """Whitespace-separated tokens of OFF text with comments removed."""

    def __init__(self, text: str) -> None:
        self._tokens: Iterator[str] = iter(
            token
            for line in text.splitlines()
            for token in line.split("#", 1)[0].split()
        )

    def word(self) -> str:
        token = next(self._tokens, None)
        if token is None:
            raise ValueError("Unexpected end of OFF data")
        return token

    def integer(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError as exc:
            raise ValueError(f"Expected an integer in OFF data, got {token!r}") from exc

    def number(self) -> float:
        token = self.word()
        try:
            return float(token)
        except ValueError as exc:
            raise ValueError(f"Expected a number in OFF data, got {token!r}") from exc


def _parse_header(header: str) -> int:
    if header == "OFF":
        return 3
    if not header.endswith("OFF"):
        raise ValueError(f"Not an OFF file: header is {header!r}")
    try:
        return int(header[: -len("OFF")])
    except ValueError as exc:
        raise ValueError(f"Not an OFF file: header is {header!r}") from exc


def from_off(text: str, name: Optional[str] = None) -> Polytope:
    """Parse OFF text into a checked :class:`Polytope`."""
    tokens = _Tokens(text)
    rank = _parse_header(tokens.word())
    if rank < -1:
        raise ValueError(f"Invalid OFF rank {rank}")
    if rank == -1:
        return nullitope()
    if rank == 0:
        return point()

    vertex_count = tokens.integer()
    face_count = 0
    higher_counts: List[int] = []
    if rank >= 2:
        face_count = tokens.integer()
    if rank >= 3:
        tokens.integer()  # edge count, rebuilt from the faces
        higher_counts = [tokens.integer() for _ in range(3, rank)]

    vertices = [Point(tuple(tokens.number() for _ in range(rank))) for _ in range(vertex_count)]

    edges: List[Cell] = []
    faces: List[Cell] = []
    # A face walking the same vertex pair twice (a digon) gets a second edge.
    edge_index: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for _ in range(face_count):
        size = tokens.integer()
        cycle = [tokens.integer() for _ in range(size)]
        face: List[int] = []
        for k, a in enumerate(cycle):
            b = cycle[(k + 1) % size]
            key = (min(a, b), max(a, b))
            edge_id = next((e for e in edge_index[key] if e not in face), None)
            if edge_id is None:
                edge_id = len(edges)
                edge_index[key].append(edge_id)
                edges.append(key)
            face.append(edge_id)
        faces.append(tuple(face))

    higher: List[List[Cell]] = []
    for count in higher_counts:
        cells = []
        for _ in range(count):
            size = tokens.integer()
            cells.append(tuple(tokens.integer() for _ in range(size)))
        higher.append(cells)

    construction = Name(name or "polytope")
    logger.debug("Read %dOFF with %d vertices and %d faces", rank, vertex_count, face_count)
    if rank == 1:
        return Polytope.from_elements(
            vertices, [], [tuple(range(vertex_count))], construction, space_dimensions=1
        )
    if rank == 2:
        return Polytope.from_elements(vertices, [edges], faces, construction, space_dimensions=2)
    return Polytope.from_elements(
        vertices, [edges, faces] + higher, None, construction, space_dimensions=rank
    )


# ── Files ───────────────────────────────────────────────────────────

def load_off(path: PathLike) -> Polytope:
    path = Path(path)
    return from_off(path.read_text(encoding="utf-8"), name=path.stem)


def save_off(polytope: Polytope, path: PathLike, comments: bool = False) -> None:
    Path(path).write_text(to_off(polytope, comments=comments), encoding="utf-8")
