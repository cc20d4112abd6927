import json
import tempfile
from pathlib import Path

import pytest

from polyrank.builders import cupola, hypercube, nullitope, regular_polygon
from polyrank.construction import Multiprism
from polyrank.io import load_json, load_polytope, save_json, save_polytope
from polyrank.polytope import Polytope
from polyrank.products import prism


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


def test_round_trip_json():
    solid = cupola(5, 2)
    loaded = Polytope.from_json(solid.to_json())
    assert loaded.elements == solid.elements
    assert loaded.construction == solid.construction


def test_json_is_deterministic():
    assert hypercube(3).to_json() == hypercube(3).to_json()


def test_product_construction_survives(tmp_dir):
    duoprism = prism(regular_polygon(3), regular_polygon(4))
    path = tmp_dir / "duoprism.json"
    save_json(duoprism, path)
    loaded = load_json(path)
    assert isinstance(loaded.construction, Multiprism)
    assert loaded.construction == duoprism.construction
    assert loaded.element_counts() == [12, 24, 19, 7, 1]


def test_payload_is_plain_json(tmp_dir):
    path = tmp_dir / "square.json"
    save_json(hypercube(2), path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["rank"] == 2
    assert payload["construction"] == {"kind": "hypercube", "rank": 2}


@pytest.mark.parametrize("suffix", [".json", ".off", ".OFF"])
def test_dispatch_by_extension(tmp_dir, suffix):
    path = tmp_dir / f"shape{suffix}"
    save_polytope(hypercube(3), path)
    assert load_polytope(path).element_counts() == [8, 12, 6, 1]


def test_nullitope_round_trip(tmp_dir):
    path = tmp_dir / "empty.json"
    save_polytope(nullitope(), path)
    assert load_polytope(path).is_nullitope


def test_unknown_extension(tmp_dir):
    with pytest.raises(ValueError):
        save_polytope(hypercube(2), tmp_dir / "square.stl")
    with pytest.raises(ValueError):
        load_polytope(tmp_dir / "square.stl")
