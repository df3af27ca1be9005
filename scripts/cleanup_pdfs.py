"""Delete archived PDFs dated before the cutoff (ARCHIVE_CUTOFF_DATE, default 2026-01-01)."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from avalanche_archive.archive import cleanup_pdfs
from avalanche_archive.config import load_settings


def main() -> None:
    settings = load_settings()
    if not settings.pdfs_dir.exists():
        print("PDFs directory not found.")
        return

    print(f"Cleaning up PDFs older than {settings.cutoff_date} in {settings.pdfs_dir}...")
    deleted, kept = cleanup_pdfs(settings.pdfs_dir, settings.cutoff_date)
    print("Cleanup complete.")
    print(f"Deleted: {deleted}")
    print(f"Kept: {kept}")


if __name__ == "__main__":
    main()
