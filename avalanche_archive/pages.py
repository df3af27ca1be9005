# avalanche_archive/pages.py
"""HTML pages of the static archive. All pages share styles.css at the site root."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import List
from urllib.parse import quote

ASPECTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]
SOURCE_URL = "https://lawis.at/incident/"


@dataclass(frozen=True)
class LinkItem:
    html: str  # already escaped
    href: str
    class_name: str = ""


def month_name(month: str) -> str:
    """'2025-01' -> 'January 2025'."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


def translate_aspect(aspect_id) -> str:
    try:
        idx = int(aspect_id)
    except (TypeError, ValueError):
        return str(aspect_id)
    if 1 <= idx <= 8:
        return ASPECTS[idx - 1]
    return str(aspect_id)


def _head(title: str, css_path: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <link rel="stylesheet" href="{css_path}">
</head>"""


def _header(home_href: str) -> str:
    return f"""        <header>
             <div class="header-content">
                <a href="{home_href}" class="logo">Avalanche Archive</a>
             </div>
        </header>"""


def _link(item: LinkItem) -> str:
    classes = " ".join(c for c in ("archive-item", item.class_name) if c)
    return f'            <a href="{escape(item.href)}" class="{classes}">{item.html}</a>'


def render_index_page(title: str, relative_root: str, items: List[LinkItem],
                      is_main: bool = False, back_link: str = "../index.html") -> str:
    links = "\n".join(_link(item) for item in items)
    home = "#" if is_main else f"{relative_root}index.html"
    back = "" if is_main else f'\n        <div style="margin-top:2rem"><a href="{back_link}">&larr; Back</a></div>'
    return f"""{_head(title, f"{relative_root}styles.css")}
<body>
    <div class="container">
{_header(home)}

        <h1>{escape(title)}</h1>
        <div class="archive-list">
{links}
        </div>{back}
    </div>
</body>
</html>
"""


def _or_na(value, unit: str = "") -> str:
    if value in (None, "", 0):
        return "N/A"
    return f"{escape(str(value))}{unit}"


def _description(details: dict) -> str:
    original = escape(str(details.get("comments") or "No description available."))
    english = details.get("comments_en")
    if english:
        return f"""
        <div class="incident-description">
            <h3>Description</h3>
            <p>{escape(str(english))}</p>
            <details style="margin-top:1rem; color:#666;">
                <summary style="cursor:pointer; font-size:0.9rem;">Show Original (German)</summary>
                <p style="margin-top:0.5rem; font-style:italic;">{original}</p>
            </details>
        </div>"""

    raw = str(details.get("comments") or "No description available.")
    translate_url = f"https://translate.google.com/?sl=auto&tl=en&text={quote(raw, safe='')}"
    return f"""
        <div class="incident-description">
            <div style="display:flex; justify-content:space-between; align-items:center; border-bottom: 2px solid #eee; margin-bottom:0.5rem;">
                <h3 style="border-bottom:none; margin:0; padding:0;">Description</h3>
                <a href="{escape(translate_url)}" target="_blank" style="font-size:0.9rem; color:#004481; text-decoration:none;">Translate to English &nearr;</a>
            </div>
            <p>{original}</p>
        </div>"""


def _gallery(images: list) -> str:
    if not images:
        return ""
    cells = []
    for img in images:
        url = escape(str(img.get("url", "")))
        alt = escape(str(img.get("caption") or "Incident Image"))
        caption = f'\n                    <p class="img-caption">{escape(str(img["comment"]))}</p>' if img.get("comment") else ""
        cells.append(f"""                <div class="gallery-item">
                    <a href="{url}" target="_blank">
                        <img src="{url}" alt="{alt}">
                    </a>{caption}
                </div>""")
    joined = "\n".join(cells)
    return f"""
        <div class="incident-gallery">
            <h3>Images</h3>
            <div class="gallery-grid">
{joined}
            </div>
        </div>"""


def render_incident_page(incident: dict) -> str:
    """Detail page for one incident, written to archive/incidents/."""
    details = incident.get("details") or {}
    date = escape(str(incident.get("date", "")))
    location = escape(str(incident.get("location", "")))
    aspect = translate_aspect(details["aspect_id"]) if details.get("aspect_id") else "N/A"

    info_grid = f"""
        <div class="incident-meta-grid">
            <div class="meta-item"><strong>Date:</strong> {date}</div>
            <div class="meta-item"><strong>Location:</strong> {location}</div>
            <div class="meta-item"><strong>Elevation:</strong> {_or_na(details.get("elevation"), " m")}</div>
            <div class="meta-item"><strong>Incline:</strong> {_or_na(details.get("incline"), "°")}</div>
            <div class="meta-item"><strong>Aspect:</strong> {escape(aspect)}</div>
            <div class="meta-item"><strong>Coordinates:</strong> {escape(str(incident.get("lat")))}, {escape(str(incident.get("lon")))}</div>
        </div>"""

    images = [img for img in details.get("images") or [] if isinstance(img, dict)]
    return f"""{_head(f"Incident: {incident.get('location', '')}", "../../styles.css")}
<body>
    <div class="container">
{_header("../../index.html")}

        <h1>Incident Report</h1>
        <h2 style="color: #d32f2f;">{location}</h2>
        <h4 style="color: #666;">{date}</h4>

        <div class="incident-detail-container">{info_grid}
{_description(details)}
{_gallery(images)}

            <div class="incident-links" style="text-align:center;">
                <a href="{SOURCE_URL}" target="_blank" style="color:#666; text-decoration:underline;">Original Source (Lawis Austria)</a>
            </div>
        </div>

        <div style="margin-top:2rem"><a href="index.html">&larr; Back to Incidents</a></div>
    </div>
</body>
</html>
"""
