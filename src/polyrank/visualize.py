"""Orthographic wireframe rendering.

Vertices are projected onto two coordinate axes and every edge is drawn as
a line segment.  Faces are not filled: star polygons, compounds and
polytopes of rank 4 and up all project to self-intersecting outlines.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import numpy as np

from .models import Cell
from .polytope import Polytope


def vertex_array(polytope: Polytope) -> np.ndarray:
    """Return vertex coordinates as a ``(V, space_dimensions)`` array.

    Vertices with fewer coordinates than the ambient space are zero-padded.
    """
    coords = np.zeros((len(polytope.vertices), polytope.space_dimensions), dtype=float)
    for row, vertex in enumerate(polytope.vertices):
        coords[row, : len(vertex)] = vertex.coordinates
    return coords


def wireframe_edges(polytope: Polytope) -> List[Cell]:
    """Vertex pairs to draw: the edges, or the component of a dyad."""
    if polytope.rank < 1:
        return []
    return [cell for cell in polytope.elements[1] if len(cell) == 2]


def _ensure_mpl():
    """Lazy-import matplotlib with a non-interactive backend."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc


def render_png(
    polytope: Polytope,
    output_path: str | Path,
    axes: Tuple[int, int] = (0, 1),
    edge_color: str = "#2b2b2b",
    vertex_color: str = "#5aa9e6",
    vertex_size: float = 12.0,
    linewidth: float = 1.0,
    padding: float = 0.25,
    dpi: int = 150,
) -> Path:
    """Render a wireframe projection of *polytope* onto two axes.

    Axes beyond the ambient dimension project to zero, so a dyad still
    renders as a horizontal segment.
    """
    if polytope.is_nullitope:
        raise ValueError("The nullitope has nothing to render.")
    x_axis, y_axis = axes
    if x_axis < 0 or y_axis < 0:
        raise ValueError(f"projection axes must be >= 0, got {axes}")

    plt = _ensure_mpl()

    coords = vertex_array(polytope)
    width = max(coords.shape[1], x_axis + 1, y_axis + 1)
    if width > coords.shape[1]:
        coords = np.pad(coords, ((0, 0), (0, width - coords.shape[1])))
    xs = coords[:, x_axis]
    ys = coords[:, y_axis]

    fig, ax = plt.subplots()
    for a, b in wireframe_edges(polytope):
        ax.plot([xs[a], xs[b]], [ys[a], ys[b]], color=edge_color, linewidth=linewidth, zorder=2)
    ax.scatter(xs, ys, s=vertex_size, c=vertex_color, zorder=3)

    ax.set_aspect("equal", "box")
    ax.set_xlim(xs.min() - padding, xs.max() + padding)
    ax.set_ylim(ys.min() - padding, ys.max() + padding)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)
    return output_path

