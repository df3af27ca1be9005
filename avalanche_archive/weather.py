# avalanche_archive/weather.py
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd
import requests

from .config import DEFAULT_MAX_SAMPLES, Settings, Station


def fetch_station_data(url: str, timeout: int = 30) -> list:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    data = r.json()
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array from {url}, got {type(data).__name__}")
    return data


def merge_samples(existing: Iterable[dict], new: Iterable[dict],
                  limit: int = DEFAULT_MAX_SAMPLES) -> List[dict]:
    """Merge two sample lists keyed by `TS` (new wins), sort ascending, keep the last `limit`."""
    samples = [s for s in list(existing) + list(new) if isinstance(s, dict) and "TS" in s]
    if not samples:
        return []

    frame = pd.DataFrame({"TS": [s["TS"] for s in samples], "sample": samples})
    frame = frame.drop_duplicates(subset="TS", keep="last")
    frame["parsed"] = pd.to_datetime(frame["TS"], utc=True, errors="coerce", format="ISO8601")
    # unparsable timestamps sort first so they are trimmed first
    frame = frame.sort_values("parsed", kind="mergesort", na_position="first")
    return frame["sample"].tail(limit).tolist()


def load_station_records(path: Path) -> List[dict]:
    if not path.exists():
        return []
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        print("Could not read existing data, starting fresh.")
        return []
    if not isinstance(records, list):
        print("Could not read existing data, starting fresh.")
        return []
    return [r for r in records if isinstance(r, dict)]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def update_station(station: Station, existing: Optional[dict], timeout: int = 30,
                   limit: int = DEFAULT_MAX_SAMPLES) -> dict:
    """Fetch one station and merge it into its persisted record.

    On a failed fetch the persisted record is returned unchanged.
    """
    print(f"Fetching {station.name}...")
    try:
        new_data = fetch_station_data(station.api_url, timeout=timeout)
    except (requests.RequestException, ValueError) as e:
        print(f"Failed to fetch {station.name}: {e}")
        if existing is not None:
            return existing
        return {**station.to_record(), "error": str(e), "data": []}

    old_data = (existing or {}).get("data") or []
    return {
        **station.to_record(),
        "lastUpdated": _now_iso(),
        "data": merge_samples(old_data, new_data, limit=limit),
    }


def update_all_stations(settings: Settings) -> List[dict]:
    """Fetch all stations concurrently; result keeps the configured station order."""
    existing = {str(r.get("id")): r for r in load_station_records(settings.weather_file)}
    stations = settings.stations
    if not stations:
        return []

    with ThreadPoolExecutor(max_workers=len(stations)) as pool:
        futures = [
            pool.submit(update_station, s, existing.get(s.id),
                        settings.request_timeout, settings.max_samples)
            for s in stations
        ]
        return [f.result() for f in futures]


def write_station_records(path: Path, records: List[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
