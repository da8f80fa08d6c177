"""Demo script for timing2toggl."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timing2toggl.adapters import csv_adapter, json_adapter
from timing2toggl.writer import render_csv


def main() -> None:
    from_csv = csv_adapter.parse("examples/sample_export.csv", "demo@example.org")
    from_json = json_adapter.parse("examples/sample_export.json", "demo@example.org")
    print("CSV export (skipped rows: %s):" % from_csv.skipped)
    print(render_csv(from_csv.entries))
    print("JSON export:")
    print(render_csv(from_json.entries))


if __name__ == "__main__":
    main()
