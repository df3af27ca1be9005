from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path for `from avalanche_archive import ...` when executed as a script
sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.config import load_settings
from avalanche_archive.health import latest_pdf_dates, stale_stations


def main() -> int:
    settings = load_settings()

    for slug, date in latest_pdf_dates(settings).items():
        print(f"Latest PDF {slug}:", date or "none")

    problems = stale_stations(settings)
    if problems:
        print(f"Weather data older than {settings.stale_hours}h or missing:")
        for p in problems:
            print(" -", p)
        return 1
    print("Weather data fresh for all", len(settings.stations), "stations.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
