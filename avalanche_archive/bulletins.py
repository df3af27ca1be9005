# avalanche_archive/bulletins.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd


@dataclass(frozen=True)
class Bulletin:
    id: Optional[str]
    region_ids: Tuple[str, ...]
    publication_time: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, data: dict) -> "Bulletin":
        """Normalize an upstream bulletin; regions may be plain IDs or {regionID: ...} objects."""
        region_ids = []
        for r in data.get("regions") or []:
            rid = r if isinstance(r, str) else (r or {}).get("regionID")
            if rid:
                region_ids.append(str(rid))
        uuid = data.get("id") or data.get("bulletinID")
        return cls(
            id=str(uuid) if uuid else None,
            region_ids=tuple(region_ids),
            publication_time=data.get("publicationTime") or None,
            raw=data,
        )

    def covers(self, region_id: str) -> bool:
        return region_id in self.region_ids


def cache_path(cache_dir: Path, prefix: str, date_str: str) -> Path:
    return cache_dir / f"{prefix}_{date_str}.json"


def load_bulletins(path: Path) -> List[Bulletin]:
    """Read a bulletin cache file (a list, or an object with a `bulletins` list)."""
    if not path.exists():
        return []
    try:
        content = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error reading cache {path}: {e}")
        return []
    items = content if isinstance(content, list) else (content or {}).get("bulletins") or []
    return [Bulletin.from_json(b) for b in items if isinstance(b, dict)]


def find_publication_time(cache_dir: Path, prefix: str, region_id: str, date_str: str) -> Optional[str]:
    """Publication time of the first cached bulletin for `date_str` covering `region_id`."""
    for bulletin in load_bulletins(cache_path(cache_dir, prefix, date_str)):
        if bulletin.covers(region_id):
            return bulletin.publication_time
    return None


def publication_suffix(publication_time: Union[str, int, float, None]) -> Optional[str]:
    """Format a publication time as `_YYYYMMDD-HHMM` in UTC, None if unusable.

    Numbers are epoch milliseconds.
    """
    if not publication_time or isinstance(publication_time, bool):
        return None
    try:
        if isinstance(publication_time, (int, float)):
            ts = pd.Timestamp(publication_time, unit="ms")
        else:
            ts = pd.Timestamp(publication_time)
    except (TypeError, ValueError):
        return None
    if pd.isna(ts):
        return None
    # naive timestamps are taken as UTC
    ts = ts.tz_localize("UTC") if ts.tz is None else ts.tz_convert("UTC")
    return "_" + ts.strftime("%Y%m%d-%H%M")
