"""Construction descriptors: how a polytope was built.

A descriptor is one of a closed set of frozen dataclasses, each carrying
exactly the child data its kind needs:

- **pair of integers** — :class:`Plain`, :class:`Polygon`
- **tuple of descriptors** — :class:`Multiprism`, :class:`Multitegum`,
  :class:`Multipyramid`
- **single descriptor** — :class:`Antiprism`, :class:`Pyramid`,
  :class:`Cupola`, :class:`Cuploid`, :class:`CupolaicBlend`
- **raw string** — :class:`Codename`, :class:`Name`
- **dimension** — :class:`Hypercube`, :class:`Simplex`, :class:`Cross`

The core attaches descriptors and never renders them into natural-language
names; :func:`describe` only produces a structural, locale-free string for
logs and the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Plain:
    facets: int
    rank: int


@dataclass(frozen=True)
class Polygon:
    n: int
    d: int = 1


@dataclass(frozen=True)
class Multiprism:
    factors: Tuple["Construction", ...]


@dataclass(frozen=True)
class Multitegum:
    factors: Tuple["Construction", ...]


@dataclass(frozen=True)
class Multipyramid:
    factors: Tuple["Construction", ...]


@dataclass(frozen=True)
class Antiprism:
    base: "Construction"


@dataclass(frozen=True)
class Pyramid:
    base: "Construction"


@dataclass(frozen=True)
class Cupola:
    base: "Construction"


@dataclass(frozen=True)
class Cuploid:
    base: "Construction"


@dataclass(frozen=True)
class CupolaicBlend:
    base: "Construction"


@dataclass(frozen=True)
class Codename:
    code: str


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Hypercube:
    rank: int


@dataclass(frozen=True)
class Simplex:
    rank: int


@dataclass(frozen=True)
class Cross:
    rank: int


Construction = Union[
    Plain,
    Polygon,
    Multiprism,
    Multitegum,
    Multipyramid,
    Antiprism,
    Pyramid,
    Cupola,
    Cuploid,
    CupolaicBlend,
    Codename,
    Name,
    Hypercube,
    Simplex,
    Cross,
]

ProductNode = Union[Multiprism, Multitegum, Multipyramid]

_PRODUCT_KINDS = {
    "multiprism": Multiprism,
    "multitegum": Multitegum,
    "multipyramid": Multipyramid,
}

_FAMILY_KINDS = {
    "antiprism": Antiprism,
    "pyramid": Pyramid,
    "cupola": Cupola,
    "cuploid": Cuploid,
    "cupolaic_blend": CupolaicBlend,
}

_DIMENSION_KINDS = {
    "hypercube": Hypercube,
    "simplex": Simplex,
    "cross": Cross,
}


def merge_factors(kind: type, factors) -> ProductNode:
    """Build a product node of *kind*, flattening children of the same kind.

    A multiprism of multiprisms is just a larger multiprism, and likewise
    for tegums and pyramids.  The input sequence is only read.
    """
    if kind not in _PRODUCT_KINDS.values():
        raise ValueError(f"{kind.__name__} is not a product construction")
    merged = []
    for factor in factors:
        if type(factor) is kind:
            merged.extend(factor.factors)
        else:
            merged.append(factor)
    return kind(tuple(merged))


def describe(node: Construction) -> str:
    """Structural one-line rendering, e.g. ``multiprism(polygon(5/2), dyad)``."""
    match node:
        case Plain(facets=facets, rank=rank):
            return f"plain({facets}, {rank})"
        case Polygon(n=n, d=1):
            return f"polygon({n})"
        case Polygon(n=n, d=d):
            return f"polygon({n}/{d})"
        case Multiprism(factors=factors):
            return "multiprism(" + ", ".join(describe(f) for f in factors) + ")"
        case Multitegum(factors=factors):
            return "multitegum(" + ", ".join(describe(f) for f in factors) + ")"
        case Multipyramid(factors=factors):
            return "multipyramid(" + ", ".join(describe(f) for f in factors) + ")"
        case Antiprism(base=base):
            return f"antiprism({describe(base)})"
        case Pyramid(base=base):
            return f"pyramid({describe(base)})"
        case Cupola(base=base):
            return f"cupola({describe(base)})"
        case Cuploid(base=base):
            return f"cuploid({describe(base)})"
        case CupolaicBlend(base=base):
            return f"cupolaic_blend({describe(base)})"
        case Codename(code=code):
            return code
        case Name(name=name):
            return repr(name)
        case Hypercube(rank=rank):
            return f"hypercube({rank})"
        case Simplex(rank=rank):
            return f"simplex({rank})"
        case Cross(rank=rank):
            return f"cross({rank})"
    raise TypeError(f"not a construction descriptor: {node!r}")


def construction_to_dict(node: Construction) -> dict:
    match node:
        case Plain(facets=facets, rank=rank):
            return {"kind": "plain", "facets": facets, "rank": rank}
        case Polygon(n=n, d=d):
            return {"kind": "polygon", "n": n, "d": d}
        case Multiprism(factors=factors) | Multitegum(factors=factors) | Multipyramid(factors=factors):
            return {
                "kind": _kind_name(_PRODUCT_KINDS, node),
                "factors": [construction_to_dict(f) for f in factors],
            }
        case Antiprism(base=base) | Pyramid(base=base) | Cupola(base=base) | Cuploid(base=base) | CupolaicBlend(base=base):
            return {"kind": _kind_name(_FAMILY_KINDS, node), "base": construction_to_dict(base)}
        case Codename(code=code):
            return {"kind": "codename", "code": code}
        case Name(name=name):
            return {"kind": "name", "name": name}
        case Hypercube(rank=rank) | Simplex(rank=rank) | Cross(rank=rank):
            return {"kind": _kind_name(_DIMENSION_KINDS, node), "rank": rank}
    raise TypeError(f"not a construction descriptor: {node!r}")


def construction_from_dict(payload: dict) -> Construction:
    kind = payload.get("kind")
    match kind:
        case "plain":
            return Plain(int(payload["facets"]), int(payload["rank"]))
        case "polygon":
            return Polygon(int(payload["n"]), int(payload.get("d", 1)))
        case "multiprism" | "multitegum" | "multipyramid":
            factors = tuple(construction_from_dict(f) for f in payload.get("factors", []))
            return _PRODUCT_KINDS[kind](factors)
        case "antiprism" | "pyramid" | "cupola" | "cuploid" | "cupolaic_blend":
            return _FAMILY_KINDS[kind](construction_from_dict(payload["base"]))
        case "codename":
            return Codename(str(payload["code"]))
        case "name":
            return Name(str(payload["name"]))
        case "hypercube" | "simplex" | "cross":
            return _DIMENSION_KINDS[kind](int(payload["rank"]))
    raise ValueError(f"Unknown construction kind {kind!r}")


def _kind_name(table: dict, node: Construction) -> str:
    for name, cls in table.items():
        if type(node) is cls:
            return name
    raise TypeError(f"not a construction descriptor: {node!r}")
