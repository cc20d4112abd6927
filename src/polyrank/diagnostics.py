from __future__ import annotations

from collections import Counter
from typing import Dict, List

import numpy as np

from .construction import describe
from .polytope import Polytope
from .visualize import vertex_array, wireframe_edges


def euler_characteristic(polytope: Polytope) -> int:
    """Alternating sum of element counts over ranks 0 .. rank-1.

    A convex polytope of rank d gives ``1 - (-1)**d``; a compound of k such
    pieces gives k times that.
    """
    counts = polytope.element_counts()
    return sum((-1) ** r * counts[r] for r in range(max(polytope.rank, 0)))


def dyadic_errors(polytope: Polytope) -> List[str]:
    """Check the diamond property on every cell of rank 2 and above.

    Each rank k-2 subelement of a rank k cell must lie in exactly two of
    that cell's facets.
    """
    errors: List[str] = []
    for rank in range(2, polytope.rank + 1):
        facets = polytope.elements[rank - 1]
        for index, cell in enumerate(polytope.elements[rank]):
            seen = Counter(sub for facet in cell for sub in facets[facet])
            for sub, count in sorted(seen.items()):
                if count != 2:
                    errors.append(
                        f"Rank {rank} element {index}: rank {rank - 2} element {sub} "
                        f"lies in {count} facets"
                    )
    return errors


def is_dyadic(polytope: Polytope) -> bool:
    return not dyadic_errors(polytope)


def edge_lengths(polytope: Polytope) -> np.ndarray:
    edges = wireframe_edges(polytope)
    if not edges:
        return np.zeros(0)
    coords = vertex_array(polytope)
    pairs = np.asarray(edges, dtype=np.int64)
    return np.linalg.norm(coords[pairs[:, 0]] - coords[pairs[:, 1]], axis=1)


def diagnostics_report(polytope: Polytope) -> Dict[str, object]:
    """Summarise a polytope as a JSON-friendly dict.

    Structural problems short-circuit the geometric checks, which would
    otherwise index past the end of an element list.
    """
    structural = polytope.validate()
    report: Dict[str, object] = {
        "rank": polytope.rank,
        "space_dimensions": polytope.space_dimensions,
        "construction": describe(polytope.construction),
        "element_counts": polytope.element_counts(),
        "structural_errors": structural,
    }
    if structural:
        return report

    lengths = edge_lengths(polytope)
    report.update(
        {
            "components": len(polytope.components) if polytope.rank > 0 else 0,
            "euler_characteristic": euler_characteristic(polytope),
            "dyadic": is_dyadic(polytope),
            "edge_length_min": float(lengths.min()) if lengths.size else None,
            "edge_length_max": float(lengths.max()) if lengths.size else None,
        }
    )
    return report
