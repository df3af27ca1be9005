"""
Download bulletin PDFs for today and tomorrow from the bulletins cached in
data/bulletin_cache/ and store them under data/pdfs/{slug}/.
"""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.config import load_settings, local_dates
from avalanche_archive.pdfs import fetch_cached_bulletins


def main() -> None:
    settings = load_settings()
    results = fetch_cached_bulletins(settings, local_dates(days_ahead=1))
    counts = Counter(r.status for r in results)
    summary = ", ".join(f"{k}: {v}" for k, v in sorted(counts.items())) or "nothing to do"
    print(f"PDF fetch complete ({summary}).")


if __name__ == "__main__":
    main()
