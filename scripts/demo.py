import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from polyrank.builders import cupola, hypercube, regular_polygon, uniform_antiprism
from polyrank.construction import describe
from polyrank.diagnostics import diagnostics_report
from polyrank.io import save_polytope
from polyrank.products import prism, tegum


def main() -> None:
    out_dir = ROOT / "exports"
    out_dir.mkdir(exist_ok=True)

    shapes = {
        "tesseract": hypercube(4),
        "pentagrammic_antiprism": uniform_antiprism(5, 2),
        "triangular_cupola": cupola(3),
        "hexagram": regular_polygon(6, 2),
        "duoprism_3_5": prism(regular_polygon(3), regular_polygon(5)),
        "octahedron": tegum(hypercube(2), hypercube(1)),
    }

    for name, polytope in shapes.items():
        report = diagnostics_report(polytope)
        print(f"{name}: {describe(polytope.construction)}")
        print("  counts:", report["element_counts"])
        print("  euler:", report["euler_characteristic"], " dyadic:", report["dyadic"])
        save_polytope(polytope, out_dir / f"{name}.off")

    from polyrank.visualize import render_png

    render_png(shapes["tesseract"], out_dir / "tesseract.png", axes=(0, 1))
    print(f"Saved {out_dir / 'tesseract.png'}")


if __name__ == "__main__":
    main()
