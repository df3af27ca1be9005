# avalanche_archive/pdfs.py
"""
Download bulletin PDFs into data/pdfs/{slug}/ and detect same-day re-issues.

Layout:
  {date}.pdf                  first bulletin seen for that day
  {date}_YYYYMMDD-HHMM.pdf    re-issue, suffix = publication time (UTC)
  {date}_v2.pdf               re-issue without a usable publication time
"""

from __future__ import annotations

import filecmp
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlencode

import requests

from .bulletins import Bulletin, cache_path, load_bulletins, publication_suffix
from .config import PdfSource, Settings

LEGACY_SUFFIX = "_v2"

DOWNLOADED = "downloaded"
UNCHANGED = "unchanged"
ARCHIVED = "archived"
FAILED = "failed"


@dataclass(frozen=True)
class PdfResult:
    slug: str
    status: str
    path: Optional[Path] = None


def resolve_pdf_url(bulletin: Bulletin, source: PdfSource) -> str:
    region = source.default_region
    for prefix, param in source.region_overrides:
        if any(rid.startswith(prefix) for rid in bulletin.region_ids):
            region = param
            break
    query = urlencode({"region": region, "lang": "en", "grayscale": "false"})
    return f"{source.base_url.format(id=bulletin.id)}?{query}"


def download_pdf(url: str, dest: Path, timeout: int = 30) -> None:
    """Fetch `url` into `dest`; a failed download leaves no file behind."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        r = requests.get(url, timeout=timeout)
        if r.status_code != 200:
            raise requests.HTTPError(f"Status {r.status_code}", response=r)
        dest.write_bytes(r.content)
    except (requests.RequestException, OSError):
        dest.unlink(missing_ok=True)
        raise


def _same_bytes(a: Path, b: Path) -> bool:
    return filecmp.cmp(a, b, shallow=False)


def reconcile_pdf(url: str, base_dest: Path, publication_time: Optional[str] = None,
                  timeout: int = 30) -> Tuple[str, Path]:
    """Download `url` for the day stored at `base_dest` and decide where it belongs.

    Returns (status, path) where status is DOWNLOADED, UNCHANGED or ARCHIVED.
    Network and filesystem errors propagate to the caller.
    """
    label = f"{base_dest.parent.name}/{base_dest.name}"
    if not base_dest.exists():
        print(f"  Downloading to: {label}")
        download_pdf(url, base_dest, timeout)
        return DOWNLOADED, base_dest

    temp_dest = base_dest.with_name(base_dest.name + ".tmp")
    try:
        download_pdf(url, temp_dest, timeout)

        # Same size counts as same bulletin: regenerated PDFs carry fresh
        # timestamps/IDs but keep their length. A same-length edit is missed.
        if base_dest.stat().st_size == temp_dest.stat().st_size:
            return UNCHANGED, base_dest
        if _same_bytes(base_dest, temp_dest):
            print(f"  Update matches existing {base_dest.name} (content check). Skipping.")
            return UNCHANGED, base_dest

        print(f"  Update detected for {label}!")
        date_str = base_dest.stem
        suffix = publication_suffix(publication_time) or LEGACY_SUFFIX
        version_dest = base_dest.with_name(f"{date_str}{suffix}.pdf")

        if version_dest.exists():
            if _same_bytes(version_dest, temp_dest):
                print(f"  Update matches existing {version_dest.name}. Skipping.")
                return UNCHANGED, version_dest
            # same publication time, different content
            suffix += LEGACY_SUFFIX
            version_dest = base_dest.with_name(f"{date_str}{suffix}.pdf")

        temp_dest.replace(version_dest)
        print(f"  Archived update as: {base_dest.parent.name}/{version_dest.name}")
        return ARCHIVED, version_dest
    finally:
        temp_dest.unlink(missing_ok=True)


def process_bulletin_for_pdfs(bulletin: Bulletin, date_str: str, source_type: str,
                              settings: Settings) -> List[PdfResult]:
    """Fetch the PDF of `bulletin` for every configured region it covers."""
    slugs = settings.slugs_for_region_ids(bulletin.region_ids)
    if not slugs or not bulletin.id:
        return []

    source = settings.pdf_sources.get(source_type)
    if source is None:
        print(f"Unknown PDF source type {source_type!r}, skipping bulletin {bulletin.id}")
        return []

    url = resolve_pdf_url(bulletin, source)
    print(f"Found relevant bulletin {bulletin.id} for regions: {', '.join(slugs)}")
    print(f"PDF URL: {url}")

    results = []
    for slug in slugs:
        base_dest = settings.pdfs_dir / slug / f"{date_str}.pdf"
        try:
            status, path = reconcile_pdf(url, base_dest, bulletin.publication_time,
                                         timeout=settings.request_timeout)
            results.append(PdfResult(slug, status, path))
        except (requests.RequestException, OSError) as e:
            print(f"  Failed to fetch PDF for {slug}/{date_str}: {e}")
            results.append(PdfResult(slug, FAILED))
    return results


def _cache_sources(settings: Settings) -> List[Tuple[str, str]]:
    """Distinct (cache prefix, source type) pairs in region order."""
    seen = []
    for region in settings.regions:
        pair = (region.cache_prefix, region.source_type)
        if pair not in seen:
            seen.append(pair)
    return seen


def fetch_cached_bulletins(settings: Settings, dates: Iterable[str]) -> List[PdfResult]:
    """Run the PDF fetcher over every cached bulletin for `dates`."""
    results: List[PdfResult] = []
    for date_str in dates:
        for prefix, source_type in _cache_sources(settings):
            path = cache_path(settings.cache_dir, prefix, date_str)
            bulletins = load_bulletins(path)
            if not bulletins:
                print(f"No cached bulletins in {path}")
                continue
            for bulletin in bulletins:
                results.extend(process_bulletin_for_pdfs(bulletin, date_str, source_type, settings))
    return results
