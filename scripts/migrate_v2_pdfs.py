"""
One-off: rename legacy `{date}_v2.pdf` re-issues to `{date}_{YYYYMMDD-HHMM}.pdf`
using the publication time stored in data/bulletin_cache/.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.archive import migrate_v2_pdfs
from avalanche_archive.config import load_settings


def main() -> None:
    renamed = migrate_v2_pdfs(load_settings())
    print(f"Renamed {len(renamed)} file(s).")


if __name__ == "__main__":
    main()
