from __future__ import annotations

from collections import defaultdict, deque
from typing import Dict, List, Sequence, Tuple


def share_subelement(a: Sequence[int], b: Sequence[int]) -> bool:
    """Return whether two facet index sets intersect.

    A presence map is filled from *a* and probed with *b*, so the cost is
    linear in ``len(a) + len(b)``.
    """
    present = set(a)
    return any(index in present for index in b)


def build_facet_adjacency(facets: Sequence[Sequence[int]]) -> Dict[int, List[int]]:
    """Return facet adjacency based purely on shared subelements.

    Two facets are neighbours iff their index sets intersect, i.e. iff
    :func:`share_subelement` holds for the pair.  The graph is built through
    an inverted index (subelement -> facets) instead of testing every pair,
    which yields the same edges.
    """
    subelement_to_facets: dict[int, list[int]] = defaultdict(list)
    for facet_id, facet in enumerate(facets):
        for sub in set(facet):
            subelement_to_facets[sub].append(facet_id)

    neighbors: dict[int, set[int]] = {facet_id: set() for facet_id in range(len(facets))}
    for facet_ids in subelement_to_facets.values():
        if len(facet_ids) < 2:
            continue
        for i, facet_id in enumerate(facet_ids):
            for other_id in facet_ids[i + 1 :]:
                neighbors[facet_id].add(other_id)
                neighbors[other_id].add(facet_id)

    return {facet_id: sorted(neigh) for facet_id, neigh in neighbors.items()}


def facet_components(facets: Sequence[Sequence[int]]) -> List[Tuple[int, ...]]:
    """Group facets into maximal connected pieces.

    Each facet is visited exactly once.  Components come back as ascending
    index tuples, ordered by their smallest facet index.
    """
    adjacency = build_facet_adjacency(facets)
    visited: set[int] = set()
    components: List[Tuple[int, ...]] = []

    for start in range(len(facets)):
        if start in visited:
            continue
        visited.add(start)
        frontier = deque([start])
        members = [start]
        while frontier:
            facet_id = frontier.popleft()
            for neighbor in adjacency[facet_id]:
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                members.append(neighbor)
                frontier.append(neighbor)
        components.append(tuple(sorted(members)))

    return components
