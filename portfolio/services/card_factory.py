"""
Card Factory for Portfolio
==========================

Turns project records into board cards and renders the project detail page.

Every value coming from projects.json is HTML-escaped before it is put into
markup.
"""

import html
import logging
from typing import List

from ..models.board_models import Card, PlacementKind
from ..models.project_models import ProjectRecord

logger = logging.getLogger(__name__)

PROJECT_TAG = "projects"
IMAGE_FALLBACK = "https://via.placeholder.com/200x150?text=No+Image"
DETAIL_PAGE = "project_detail.html"


# Info cards shown on the home page when the page reports none of its own
STATIC_CARDS = [
    {
        "id": "intro",
        "kind": PlacementKind.FIXED,
        "tags": [],
        "x": 40,
        "y": 120,
        "width": 320,
        "height": 180,
        "html": "<h1>Hello!</h1><p>Drag the cards around, or pick a tag above.</p>",
    },
    {
        "id": "about",
        "kind": PlacementKind.RANDOM,
        "tags": ["about"],
        "html": '<a class="card-name card-link" href="aboutme.html"><span>About Me</span></a>',
        "link": "aboutme.html",
    },
    {
        "id": "contact",
        "kind": PlacementKind.RANDOM,
        "tags": ["about", "contact"],
        "html": '<span class="card-name">Contact</span>',
    },
]


def _escape(value: str) -> str:
    return html.escape(str(value), quote=True)


class CardFactory:
    """Builds board cards."""

    def detail_link(self, record: ProjectRecord) -> str:
        return f"{DETAIL_PAGE}?id={_escape(record.id)}"

    def from_project(self, record: ProjectRecord) -> Card:
        """Materialize one project as a random card tagged with its project tags."""
        link = self.detail_link(record)
        body = (
            f'<img src="{_escape(record.image)}" alt="{_escape(record.title)}" '
            f"onerror=\"this.src='{IMAGE_FALLBACK}'\">"
            f'<a class="card-name card-link" href="{link}"><span>{_escape(record.title)}</span></a>'
            f'<span class="card-name card-date">{_escape(record.date)}</span>'
        )
        return Card(
            id=f"project-{record.id}",
            kind=PlacementKind.RANDOM,
            tags={PROJECT_TAG, *record.tags},
            html=body,
            link=link
        )

    def from_projects(self, records: List[ProjectRecord]) -> List[Card]:
        cards = [self.from_project(r) for r in records]
        logger.info(f"[CARDS] Materialized {len(cards)} project cards")
        return cards

    def static_cards(self) -> List[Card]:
        return [Card(**entry) for entry in STATIC_CARDS]

    def render_detail(self, record: ProjectRecord) -> str:
        """Standalone detail page for one project."""
        tags = "".join(f'<span class="tag">{_escape(t)}</span>' for t in record.tags)
        paragraphs = "".join(
            f"<p>{_escape(line)}</p>" for line in record.content.splitlines() if line.strip()
        )
        github = ""
        if record.github and record.github != "#":
            github = f'<a class="github" href="{_escape(record.github)}" target="_blank" rel="noopener">Github</a>'

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_escape(record.title)}</title>
  <link rel="stylesheet" href="/css/style.css">
</head>
<body>
  <header><div class="header"><h2>Portfolio</h2><nav><a href="/">Home</a></nav></div></header>
  <main class="project-detail">
    <img src="{_escape(record.image)}" alt="{_escape(record.title)}">
    <h1>{_escape(record.title)}</h1>
    <p class="date">{_escape(record.date)}</p>
    <div class="tags">{tags}</div>
    <p class="description">{_escape(record.description)}</p>
    <section class="content">{paragraphs}</section>
    {github}
  </main>
</body>
</html>
"""
