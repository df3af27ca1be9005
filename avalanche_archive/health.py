# avalanche_archive/health.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from .archive import find_entries
from .config import Settings
from .weather import load_station_records


def latest_pdf_dates(settings: Settings) -> Dict[str, Optional[str]]:
    """Most recent bulletin date per configured region (None if it has no PDFs)."""
    latest = {}
    for region in settings.regions:
        entries = find_entries(settings.pdfs_dir / region.slug)
        latest[region.slug] = max((e.date for e in entries), default=None)
    return latest


def stale_stations(settings: Settings, now: Optional[datetime] = None) -> List[str]:
    """Describe every configured station whose persisted data is missing, failed or old."""
    now = now or datetime.now(timezone.utc)
    max_age = pd.Timedelta(hours=settings.stale_hours)
    records = {str(r.get("id")): r for r in load_station_records(settings.weather_file)}

    problems = []
    for station in settings.stations:
        record = records.get(station.id)
        if record is None:
            problems.append(f"{station.name}: no data")
            continue
        if record.get("error"):
            problems.append(f"{station.name}: last fetch failed ({record['error']})")
            continue
        updated = pd.to_datetime(record.get("lastUpdated"), errors="coerce", utc=True)
        if pd.isna(updated):
            problems.append(f"{station.name}: no lastUpdated")
        elif pd.Timestamp(now) - updated > max_age:
            problems.append(f"{station.name}: last updated {record['lastUpdated']}")
    return problems
