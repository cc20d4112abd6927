"""Polyrank — ranked-element polytope toolkit.

Public API is organised into layers:

- **Core** — points, the ranked element container, construction descriptors,
  connectivity, errors
- **Building** — canonical builders and the prism/tegum/pyramid products
- **I/O** — JSON and OFF codecs
- **Diagnostics** — structural property checks and reports
- **Rendering** — wireframe projection (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import EPSILON, Point, distance, distance_sq
from .polytope import Polytope
from .errors import StructuralError, UnsupportedConfigurationError
from .algorithms import build_facet_adjacency, facet_components, share_subelement
from .construction import (
    Antiprism,
    Codename,
    Construction,
    Cross,
    Cupola,
    CupolaicBlend,
    Cuploid,
    Hypercube,
    Multiprism,
    Multipyramid,
    Multitegum,
    Name,
    Plain,
    Polygon,
    Pyramid,
    Simplex,
    construction_from_dict,
    construction_to_dict,
    describe,
    merge_factors,
)

# ── Building ────────────────────────────────────────────────────────
from .builders import (
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
from .products import extrude_to_prism, prism, pyramid, tegum

# ── I/O ─────────────────────────────────────────────────────────────
from .io import load_json, load_polytope, save_json, save_polytope
from .off import from_off, load_off, save_off, to_off

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    diagnostics_report,
    dyadic_errors,
    edge_lengths,
    euler_characteristic,
    is_dyadic,
)

# ── Rendering ───────────────────────────────────────────────────────
from .visualize import render_png, vertex_array

# ── Logging ─────────────────────────────────────────────────────────
from .logging_config import setup_logging

__all__ = [
    # Core
    "EPSILON",
    "Point",
    "distance",
    "distance_sq",
    "Polytope",
    "StructuralError",
    "UnsupportedConfigurationError",
    "build_facet_adjacency",
    "facet_components",
    "share_subelement",
    "Antiprism",
    "Codename",
    "Construction",
    "Cross",
    "Cupola",
    "CupolaicBlend",
    "Cuploid",
    "Hypercube",
    "Multiprism",
    "Multipyramid",
    "Multitegum",
    "Name",
    "Plain",
    "Polygon",
    "Pyramid",
    "Simplex",
    "construction_from_dict",
    "construction_to_dict",
    "describe",
    "merge_factors",
    # Building
    "cross",
    "cupola",
    "cupolaic_blend",
    "cuploid",
    "dyad",
    "grunbaumian_polygon",
    "hypercube",
    "nullitope",
    "point",
    "polygon",
    "regular_polygon",
    "semiregular_polygon",
    "simplex",
    "uniform_antiprism",
    "vertex_figure_length",
    "extrude_to_prism",
    "prism",
    "pyramid",
    "tegum",
    # I/O
    "load_json",
    "load_polytope",
    "save_json",
    "save_polytope",
    "from_off",
    "load_off",
    "save_off",
    "to_off",
    # Diagnostics
    "diagnostics_report",
    "dyadic_errors",
    "edge_lengths",
    "euler_characteristic",
    "is_dyadic",
    # Rendering
    "render_png",
    "vertex_array",
    # Logging
    "setup_logging",
]
