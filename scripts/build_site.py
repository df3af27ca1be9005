"""Render index.html and archive/ from data/pdfs and data/incidents.json."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.config import load_settings
from avalanche_archive.site import build_site


def main() -> None:
    summary = build_site(load_settings())
    print(f"Copied {summary['pdfs']} PDFs for {summary['regions']} regions, "
          f"{summary['incidents']} incidents.")
    print("Site build complete.")


if __name__ == "__main__":
    main()
