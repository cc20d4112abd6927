from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from .off import load_off, save_off
from .polytope import Polytope


PathLike = Union[str, Path]


def load_json(path: PathLike) -> Polytope:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Polytope.from_dict(data)


def save_json(polytope: Polytope, path: PathLike) -> None:
    Path(path).write_text(polytope.to_json(), encoding="utf-8")


def load_polytope(path: PathLike) -> Polytope:
    """Load a ``.json`` or ``.off`` file, chosen by extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_json(path)
    if suffix == ".off":
        return load_off(path)
    raise ValueError(f"Unsupported file type {suffix!r} (expected .json or .off)")


def save_polytope(polytope: Polytope, path: PathLike) -> None:
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        save_json(polytope, path)
    elif suffix == ".off":
        save_off(polytope, path)
    else:
        raise ValueError(f"Unsupported file type {suffix!r} (expected .json or .off)")
