# avalanche_archive/site.py
"""
Build the static archive from data/pdfs and data/incidents.json.

Output (under settings.site_dir):
  index.html                       landing page
  archive/{slug}/index.html        months of a region
  archive/{slug}/{YYYY-MM}/        day list + copied PDFs
  archive/incidents/               incident index + detail pages
"""

from __future__ import annotations

import json
import re
import shutil
from collections import defaultdict
from html import escape
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .archive import ArchiveEntry, find_entries
from .config import Region, Settings
from .pages import LinkItem, month_name, render_incident_page, render_index_page

INCIDENTS_TITLE = "Avalanche Incidents (Allgäu)"
WEATHER_HREF = "snow-depth/index.html"


def load_incidents(path: Path) -> List[dict]:
    if not path.exists():
        return []
    try:
        incidents = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Failed to load {path.name}: {e}")
        return []
    if not isinstance(incidents, list):
        print(f"Failed to load {path.name}: expected a list")
        return []
    print(f"Loaded {len(incidents)} incidents.")
    return [i for i in incidents if isinstance(i, dict)]


def sort_incidents(incidents: List[dict]) -> List[dict]:
    """Newest first; unparsable dates go last."""
    def _key(inc):
        ts = pd.to_datetime(inc.get("date"), errors="coerce", utc=True)
        return (0, 0) if pd.isna(ts) else (1, ts.value)
    return sorted(incidents, key=_key, reverse=True)


def incident_filename(incident: dict) -> str:
    safe_date = str(incident.get("date", "")).split(" ")[0]
    name = f"{safe_date}_{incident.get('id')}"
    # dates like 03/01/2025 must not create subdirectories
    return re.sub(r"[\\/]", "-", name) + ".html"


def group_by_month(entries: List[ArchiveEntry]) -> Dict[str, List[ArchiveEntry]]:
    months: Dict[str, List[ArchiveEntry]] = defaultdict(list)
    for e in entries:
        months[e.month].append(e)
    for month_entries in months.values():
        month_entries.sort(key=lambda e: e.key, reverse=True)
    return months


def build_region(region: Region, pdfs_dir: Path, archive_dir: Path) -> int:
    """Write one region's month and day pages; returns the number of PDFs copied."""
    region_dir = archive_dir / region.slug
    region_dir.mkdir(parents=True, exist_ok=True)

    months = group_by_month(find_entries(pdfs_dir / region.slug))
    sorted_months = sorted(months, reverse=True)

    months_html = render_index_page(
        f"{region.label} - Select Month",
        "../../",
        [LinkItem(month_name(m), f"{m}/index.html") for m in sorted_months],
        back_link="../../index.html",
    )
    (region_dir / "index.html").write_text(months_html, encoding="utf-8")

    copied = 0
    for month in sorted_months:
        month_dir = region_dir / month
        month_dir.mkdir(parents=True, exist_ok=True)
        entries = months[month]
        days_html = render_index_page(
            f"{region.label} - {month_name(month)}",
            "../../../",
            [LinkItem(e.label, f"{e.key}.pdf") for e in entries],
            back_link="../index.html",
        )
        (month_dir / "index.html").write_text(days_html, encoding="utf-8")
        for e in entries:
            shutil.copyfile(e.path, month_dir / f"{e.key}.pdf")
            copied += 1
    return copied


def build_incidents(incidents: List[dict], archive_dir: Path) -> None:
    incidents_dir = archive_dir / "incidents"
    incidents_dir.mkdir(parents=True, exist_ok=True)

    items = []
    for inc in sort_incidents(incidents):
        filename = incident_filename(inc)
        (incidents_dir / filename).write_text(render_incident_page(inc), encoding="utf-8")
        safe_date = escape(str(inc.get("date", "")).split(" ")[0])
        text = (f'<span class="inc-date">{safe_date}</span><br>'
                f'<span class="inc-loc">{escape(str(inc.get("location", "")))}</span>')
        items.append(LinkItem(text, filename, "incident-card"))

    html = render_index_page(INCIDENTS_TITLE, "../../", items, back_link="../../index.html")
    (incidents_dir / "index.html").write_text(html, encoding="utf-8")


def build_landing(settings: Settings, has_incidents: bool) -> str:
    items = [LinkItem(escape(r.label), f"archive/{r.slug}/index.html") for r in settings.regions]
    if has_incidents:
        items.append(LinkItem("⚠️ Avalanche Incidents", "archive/incidents/index.html",
                              "landing-incident-item"))
    items.append(LinkItem("🌨️ Weather (Snow Depth)", WEATHER_HREF))
    return render_index_page("Avalanche Bulletin Archive", "", items, is_main=True)


def build_site(settings: Settings) -> dict:
    """Rebuild archive/ and the landing page from scratch."""
    archive_dir = settings.archive_dir
    if archive_dir.exists():
        shutil.rmtree(archive_dir)
    archive_dir.mkdir(parents=True, exist_ok=True)

    incidents = load_incidents(settings.incidents_file)

    copied = 0
    for region in settings.regions:
        copied += build_region(region, settings.pdfs_dir, archive_dir)

    if incidents:
        build_incidents(incidents, archive_dir)

    settings.site_dir.mkdir(parents=True, exist_ok=True)
    (settings.site_dir / "index.html").write_text(build_landing(settings, bool(incidents)),
                                                  encoding="utf-8")
    return {"regions": len(settings.regions), "pdfs": copied, "incidents": len(incidents)}
