from __future__ import annotations

import subprocess
import sys


def run(cmd: list[str]) -> None:
    print("$", " ".join(cmd))
    subprocess.check_call(cmd)


def main() -> None:
    # 1) Weather stations
    run([sys.executable, "scripts/fetch_weather.py"])  # data/weather_stations.json

    # 2) Bulletin PDFs for today/tomorrow
    run([sys.executable, "scripts/fetch_pdfs.py"])  # data/pdfs/{slug}/YYYY-MM-DD*.pdf

    # 3) Drop PDFs before the cutoff
    run([sys.executable, "scripts/cleanup_pdfs.py"])

    # 4) Rebuild index.html + archive/
    run([sys.executable, "scripts/build_site.py"])


if __name__ == "__main__":
    main()
