"""
Build the diet-selectivity figures for every size class.

Usage:
    python examples/diet_selectivity_report.py path/to/diet_vs_seagrass.csv

Writes one stacked figure per size class (panels A-C = seagrass species) into figures/.
"""

import sys
from zoodiet.pipeline import make_figures


def main(path=None):
    print("=== Diet vs. seagrass selectivity report ===\n")
    figures = make_figures(path, verbose=True)

    print("\nPanels per size class:")
    for size_class, (_, _, info) in figures.items():
        filled = [p["seagrass"] for p in info["panels"] if not p["empty"]]
        print(f"  {size_class} cm: {len(info['taxa'])} taxa, data for {', '.join(filled) or 'no species'}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
