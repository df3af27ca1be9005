# avalanche_archive/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Tuple
from zoneinfo import ZoneInfo

from .util_env import get_env, get_env_int

TZ = ZoneInfo("Europe/Berlin")

DEFAULT_CUTOFF_DATE = "2026-01-01"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds
# 10-minute samples: 6/h * 24h * 7d = 1008, keep a little more for a full week
DEFAULT_MAX_SAMPLES = 1100
DEFAULT_STALE_HOURS = 6


@dataclass(frozen=True)
class Region:
    slug: str
    region_id: str
    label: str
    cache_prefix: str  # bulletin_cache/{prefix}_{date}.json
    source_type: str


@dataclass(frozen=True)
class Station:
    name: str
    id: str
    api_url: str
    original_url: str

    def to_record(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "apiUrl": self.api_url,
            "originalUrl": self.original_url,
        }


@dataclass(frozen=True)
class PdfSource:
    base_url: str  # formatted with bulletin id
    default_region: str
    # region ID prefix -> region query parameter
    region_overrides: Tuple[Tuple[str, str], ...] = ()


REGIONS: List[Region] = [
    Region("allgau-prealps", "DE-BY-11", "Allgäu Prealps (Sonthofen)", "DE-BY", "lawinen-warnung"),
    Region("allgau-alps-central", "DE-BY-12", "Allgäu Alps Central (Oberstdorf)", "DE-BY", "lawinen-warnung"),
    Region("allgau-alps-west", "AT-08-01", "Allgäu Alps West (Kleinwalsertal)", "AT-08", "lawinen-warnung"),
    Region("allgau-alps-east", "AT-07-01", "Allgäu Alps East (Tannheimer Tal)", "AT-07", "avalanche-report"),
]

_BAYERN_WEATHER_API = "https://api-la-dok.bayern.de/public/weatherWeb/{id}"
_BAYERN_WEATHER_PAGE = (
    "https://lawinenwarndienst.bayern.de/schnee-wetter-bayern/"
    "automatische-wetter-schnee-messstation/?weatherid={id}"
)


def _bayern_station(name: str, station_id: str) -> Station:
    return Station(
        name=name,
        id=station_id,
        api_url=_BAYERN_WEATHER_API.format(id=station_id),
        original_url=_BAYERN_WEATHER_PAGE.format(id=station_id),
    )


STATIONS: List[Station] = [
    _bayern_station("Hochgrat (1715m) / Hörmoos (1300m)", "7"),
    _bayern_station("Fellhorn (1967m)", "8"),
    _bayern_station("Nebelhorn (2075m)", "4"),
    _bayern_station("Schwarzenberg (1172m)", "19"),
]

PDF_SOURCES: Dict[str, PdfSource] = {
    # Bavaria (DE-BY) and Vorarlberg (AT-08)
    "lawinen-warnung": PdfSource(
        base_url="https://admin.lawinen-warnung.eu/albina/api/bulletins/{id}/pdf",
        default_region="DE-BY",
        region_overrides=(("AT-08", "AT-08"),),
    ),
    # Tyrol (AT-07) / Euregio
    "avalanche-report": PdfSource(
        base_url="https://api.avalanche.report/albina/api/bulletins/{id}/pdf",
        default_region="EUREGIO",
    ),
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    site_dir: Path = Path(".")
    cutoff_date: str = DEFAULT_CUTOFF_DATE
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    max_samples: int = DEFAULT_MAX_SAMPLES
    stale_hours: int = DEFAULT_STALE_HOURS
    regions: List[Region] = field(default_factory=lambda: list(REGIONS))
    stations: List[Station] = field(default_factory=lambda: list(STATIONS))
    pdf_sources: Dict[str, PdfSource] = field(default_factory=lambda: dict(PDF_SOURCES))

    @property
    def pdfs_dir(self) -> Path:
        return self.data_dir / "pdfs"

    @property
    def cache_dir(self) -> Path:
        return self.data_dir / "bulletin_cache"

    @property
    def weather_file(self) -> Path:
        return self.data_dir / "weather_stations.json"

    @property
    def incidents_file(self) -> Path:
        return self.data_dir / "incidents.json"

    @property
    def archive_dir(self) -> Path:
        return self.site_dir / "archive"

    def region_by_slug(self, slug: str) -> Region | None:
        for region in self.regions:
            if region.slug == slug:
                return region
        return None

    def slugs_for_region_ids(self, region_ids) -> List[str]:
        """Map bulletin region IDs to configured slugs, keeping bulletin order."""
        by_id = {r.region_id: r.slug for r in self.regions}
        return [by_id[rid] for rid in region_ids if rid in by_id]


def load_settings() -> Settings:
    """Build Settings from defaults plus ARCHIVE_* environment overrides."""
    return Settings(
        data_dir=Path(get_env("ARCHIVE_DATA_DIR") or "data"),
        site_dir=Path(get_env("ARCHIVE_SITE_DIR") or "."),
        cutoff_date=get_env("ARCHIVE_CUTOFF_DATE") or DEFAULT_CUTOFF_DATE,
        request_timeout=get_env_int("ARCHIVE_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        max_samples=get_env_int("ARCHIVE_MAX_SAMPLES", DEFAULT_MAX_SAMPLES),
        stale_hours=get_env_int("ARCHIVE_STALE_HOURS", DEFAULT_STALE_HOURS),
    )


def local_dates(days_ahead: int = 1) -> List[str]:
    """Today's date in local time plus the following `days_ahead` days."""
    today = datetime.now(TZ).date()
    return [str(today + timedelta(days=i)) for i in range(days_ahead + 1)]
