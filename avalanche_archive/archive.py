# avalanche_archive/archive.py
from __future__ import annotations

import re
from datetime import datetime
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .bulletins import find_publication_time, publication_suffix
from .config import Settings

RE_FILENAME = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:_(.+))?\.pdf$")
RE_LEGACY = re.compile(r"^(\d{4}-\d{2}-\d{2})_v2\.pdf$")
RE_TIMESTAMP = re.compile(r"^(\d{8}-\d{4})(_v2)?$")


@dataclass(frozen=True)
class ArchiveEntry:
    path: Path
    date: str              # YYYY-MM-DD
    suffix: Optional[str]  # "v2", "20250101-1600", "20250101-1600_v2" or None

    @property
    def key(self) -> str:
        return self.path.stem

    @property
    def month(self) -> str:
        return self.date[:7]

    @property
    def label(self) -> str:
        if self.suffix is None:
            return self.date
        m = RE_TIMESTAMP.match(self.suffix)
        if m:
            ts = datetime.strptime(m.group(1), "%Y%m%d-%H%M")
            return f"{self.date} (update {ts:%Y-%m-%d %H:%M} UTC)"
        return f"{self.date} (update)"


def find_entries(region_dir: Path) -> List[ArchiveEntry]:
    """PDF entries of one region directory, newest key first."""
    entries: List[ArchiveEntry] = []
    if not region_dir.is_dir():
        return entries
    for p in region_dir.glob("*.pdf"):
        m = RE_FILENAME.match(p.name)
        if not m:
            continue
        try:
            datetime.strptime(m.group(1), "%Y-%m-%d")
        except ValueError:
            print(f"Skipping {p.name}: invalid date")
            continue
        entries.append(ArchiveEntry(path=p, date=m.group(1), suffix=m.group(2)))
    entries.sort(key=lambda e: e.key, reverse=True)
    return entries


def cleanup_pdfs(pdfs_dir: Path, cutoff_date: str) -> Tuple[int, int]:
    """Delete PDFs whose name sorts before `cutoff_date`. Returns (deleted, kept)."""
    deleted = kept = 0
    for region_dir in sorted(p for p in pdfs_dir.iterdir() if p.is_dir()):
        for pdf in sorted(region_dir.glob("*.pdf")):
            # plain string comparison is enough for ISO dates
            if pdf.stem < cutoff_date:
                pdf.unlink()
                deleted += 1
            else:
                kept += 1
    return deleted, kept


def migrate_v2_pdfs(settings: Settings) -> List[Tuple[Path, Path]]:
    """Rename legacy `{date}_v2.pdf` files to their publication-time suffix."""
    renamed = []
    if not settings.pdfs_dir.exists():
        return renamed

    for slug_dir in sorted(p for p in settings.pdfs_dir.iterdir() if p.is_dir()):
        region = settings.region_by_slug(slug_dir.name)
        if region is None:
            continue
        for pdf in sorted(slug_dir.iterdir()):
            m = RE_LEGACY.match(pdf.name)
            if not m:
                continue
            date_str = m.group(1)
            pub_time = find_publication_time(settings.cache_dir, region.cache_prefix,
                                             region.region_id, date_str)
            if not pub_time:
                print(f"No cache/pubTime found for {slug_dir.name}/{pdf.name}")
                continue
            suffix = publication_suffix(pub_time)
            if not suffix:
                print(f"Could not format suffix for {pdf.name} (PubTime: {pub_time})")
                continue
            target = slug_dir / f"{date_str}{suffix}.pdf"
            if target.exists():
                print(f"Target {target.name} already exists, leaving {pdf.name}")
                continue
            print(f"Renaming {pdf.name} -> {target.name}")
            pdf.rename(target)
            renamed.append((pdf, target))
    return renamed
