from __future__ import annotations

import json
import re

from avalanche_archive.pages import month_name, render_incident_page, translate_aspect
from avalanche_archive.site import build_site, incident_filename, sort_incidents

INCIDENTS = [
    {"id": 11, "date": "2025-01-03 14:20", "location": "Nebelhorn", "lat": 47.42, "lon": 10.34,
     "details": {"elevation": 1900, "incline": 38, "aspect_id": 2,
                 "comments": "Schneebrett ausgelöst", "comments_en": "Slab triggered",
                 "images": [{"url": "https://img.test/1.jpg", "caption": "Crown", "comment": "Fracture line"}]}},
    {"id": 12, "date": "2025-02-10 09:00", "location": "Fellhorn <north>", "lat": 47.35, "lon": 10.22,
     "details": {"comments": "Lockerschnee"}},
]


def _item_hrefs(html: str):
    return re.findall(r'<a href="([^"]+)" class="archive-item', html)


def _write_incidents(settings, incidents):
    settings.incidents_file.parent.mkdir(parents=True, exist_ok=True)
    settings.incidents_file.write_text(json.dumps(incidents), encoding="utf-8")


def test_month_page_lists_days_newest_first(settings, write_pdf):
    region_dir = settings.pdfs_dir / "allgau-prealps"
    write_pdf(region_dir / "2025-01-01.pdf", b"one")
    write_pdf(region_dir / "2025-01-02.pdf", b"two")

    build_site(settings)

    month_index = settings.archive_dir / "allgau-prealps" / "2025-01" / "index.html"
    html = month_index.read_text(encoding="utf-8")
    assert _item_hrefs(html) == ["2025-01-02.pdf", "2025-01-01.pdf"]
    assert html.index("2025-01-02") < html.index("2025-01-01")
    assert (month_index.parent / "2025-01-02.pdf").read_bytes() == b"two"
    assert "January 2025" in html
    assert 'href="../../../styles.css"' in html


def test_one_link_per_date_and_months_descending(settings, write_pdf):
    region_dir = settings.pdfs_dir / "allgau-alps-central"
    dates = ["2024-12-30", "2024-12-31", "2025-01-15", "2025-02-01", "2025-02-28"]
    for d in dates:
        write_pdf(region_dir / f"{d}.pdf")

    build_site(settings)

    region_html = (settings.archive_dir / "allgau-alps-central" / "index.html").read_text(encoding="utf-8")
    assert _item_hrefs(region_html) == ["2025-02/index.html", "2025-01/index.html", "2024-12/index.html"]

    linked = []
    for month in ["2025-02", "2025-01", "2024-12"]:
        html = (settings.archive_dir / "allgau-alps-central" / month / "index.html").read_text(encoding="utf-8")
        hrefs = _item_hrefs(html)
        assert hrefs == sorted(hrefs, reverse=True)
        linked.extend(hrefs)
    assert sorted(linked) == sorted(f"{d}.pdf" for d in dates)


def test_variants_are_listed_with_update_label(settings, write_pdf):
    region_dir = settings.pdfs_dir / "allgau-prealps"
    write_pdf(region_dir / "2025-01-01.pdf")
    write_pdf(region_dir / "2025-01-01_20250101-1600.pdf")

    build_site(settings)

    month_dir = settings.archive_dir / "allgau-prealps" / "2025-01"
    html = (month_dir / "index.html").read_text(encoding="utf-8")
    assert _item_hrefs(html) == ["2025-01-01_20250101-1600.pdf", "2025-01-01.pdf"]
    assert "update 2025-01-01 16:00 UTC" in html
    assert (month_dir / "2025-01-01_20250101-1600.pdf").exists()


def test_regions_without_pdfs_still_get_an_index(settings):
    build_site(settings)
    for slug in ["allgau-prealps", "allgau-alps-central", "allgau-alps-west", "allgau-alps-east"]:
        html = (settings.archive_dir / slug / "index.html").read_text(encoding="utf-8")
        assert _item_hrefs(html) == []


def test_rebuild_removes_stale_archive(settings, write_pdf):
    stale = settings.archive_dir / "allgau-prealps" / "2024-01" / "2024-01-01.pdf"
    write_pdf(stale)
    build_site(settings)
    assert not stale.exists()


def test_landing_page_without_incidents(settings):
    build_site(settings)
    html = (settings.site_dir / "index.html").read_text(encoding="utf-8")
    hrefs = _item_hrefs(html)
    assert hrefs[:4] == [
        "archive/allgau-prealps/index.html",
        "archive/allgau-alps-central/index.html",
        "archive/allgau-alps-west/index.html",
        "archive/allgau-alps-east/index.html",
    ]
    assert hrefs[-1] == "snow-depth/index.html"
    assert "archive/incidents/index.html" not in hrefs
    assert "&larr; Back" not in html
    assert not (settings.archive_dir / "incidents").exists()


def test_incidents_pages(settings):
    _write_incidents(settings, INCIDENTS)

    summary = build_site(settings)

    assert summary["incidents"] == 2
    landing = _item_hrefs((settings.site_dir / "index.html").read_text(encoding="utf-8"))
    assert landing[-2:] == ["archive/incidents/index.html", "snow-depth/index.html"]

    incidents_dir = settings.archive_dir / "incidents"
    index_html = (incidents_dir / "index.html").read_text(encoding="utf-8")
    assert _item_hrefs(index_html) == ["2025-02-10_12.html", "2025-01-03_11.html"]
    assert "Fellhorn &lt;north&gt;" in index_html

    detail = (incidents_dir / "2025-01-03_11.html").read_text(encoding="utf-8")
    assert "1900 m" in detail
    assert "38°" in detail
    assert "<strong>Aspect:</strong> NE" in detail
    assert "Slab triggered" in detail
    assert "Show Original (German)" in detail
    assert 'src="https://img.test/1.jpg"' in detail
    assert "Fracture line" in detail

    other = (incidents_dir / "2025-02-10_12.html").read_text(encoding="utf-8")
    assert "<strong>Elevation:</strong> N/A" in other
    assert "translate.google.com" in other
    assert "incident-gallery" not in other


def test_broken_incidents_file_is_ignored(settings):
    settings.incidents_file.parent.mkdir(parents=True)
    settings.incidents_file.write_text("[{", encoding="utf-8")
    assert build_site(settings)["incidents"] == 0


def test_sort_incidents_puts_unparsable_last():
    ordered = sort_incidents([{"date": "2024-12-01"}, {"date": "???"}, {"date": "2025-03-01 10:00"}])
    assert [i["date"] for i in ordered] == ["2025-03-01 10:00", "2024-12-01", "???"]


def test_helpers():
    assert month_name("2025-01") == "January 2025"
    assert translate_aspect(1) == "N"
    assert translate_aspect(8) == "NW"
    assert translate_aspect(9) == "9"


def test_incident_page_without_details():
    html = render_incident_page({"id": 1, "date": "2025-01-01", "location": "X", "lat": 1, "lon": 2})
    assert "No description available." in html
    assert "<strong>Aspect:</strong> N/A" in html


def test_invalid_pdf_date_does_not_abort_build(settings, write_pdf):
    region_dir = settings.pdfs_dir / "allgau-prealps"
    write_pdf(region_dir / "2025-13-01.pdf")
    write_pdf(region_dir / "2025-01-01.pdf")

    summary = build_site(settings)

    assert summary["pdfs"] == 1
    region_html = (settings.archive_dir / "allgau-prealps" / "index.html").read_text(encoding="utf-8")
    assert _item_hrefs(region_html) == ["2025-01/index.html"]
    assert (settings.site_dir / "index.html").exists()


def test_incident_filename_never_contains_path_separators(settings):
    assert incident_filename({"id": 1, "date": "03/01/2025 14:20"}) == "03-01-2025_1.html"
    assert incident_filename({"id": "a/b", "date": "2025-01-03"}) == "2025-01-03_a-b.html"

    _write_incidents(settings, [{"id": 1, "date": "03/01/2025 14:20", "location": "Iseler"}])
    build_site(settings)

    incidents_dir = settings.archive_dir / "incidents"
    assert (incidents_dir / "03-01-2025_1.html").exists()
    assert _item_hrefs((incidents_dir / "index.html").read_text(encoding="utf-8")) == ["03-01-2025_1.html"]
