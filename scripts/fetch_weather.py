"""
Fetch the configured weather stations and merge the new samples into
data/weather_stations.json (rolling window of ~7 days per station).
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path for `from avalanche_archive import ...` when executed as a script
sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.config import load_settings
from avalanche_archive.weather import update_all_stations, write_station_records


def main() -> int:
    print("Fetching weather station data...")
    try:
        settings = load_settings()
        records = update_all_stations(settings)
        write_station_records(settings.weather_file, records)
        print(f"Successfully wrote data to {settings.weather_file}")
        return 0
    except Exception as e:
        print("Fatal error:", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
