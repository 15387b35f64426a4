"""Shared fixtures for the portfolio tests."""

import json
from typing import List

import pytest
from fastapi.testclient import TestClient

from portfolio.board.surface import BoardSurface
from portfolio.models.board_models import Band, Card, PlacementKind, Viewport


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self):
        return self.value


class SequenceRandom:
    """Random source that replays a list of values, cycling at the end."""

    def __init__(self, values: List[float]):
        self.values = list(values)
        self.index = 0

    def random(self):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


def make_surface(
    width=1024,
    height=768,
    header=None,
    footer=None,
    filter_bar=None,
    cards=None,
    filters=None
) -> BoardSurface:
    bands = {}
    if header is not None:
        bands[Band.HEADER] = header
    if footer is not None:
        bands[Band.FOOTER] = footer
    if filter_bar is not None:
        bands[Band.FILTER] = filter_bar
    return BoardSurface(Viewport(width=width, height=height), bands=bands, cards=cards, filters=filters)


def fixed_card(card_id, x, y, w, h, tags=()):
    return Card(id=card_id, kind=PlacementKind.FIXED, x=x, y=y, width=w, height=h, tags=set(tags))


def random_card(card_id, w=250, h=200, tags=()):
    return Card(id=card_id, kind=PlacementKind.RANDOM, width=w, height=h, tags=set(tags))


SAMPLE_PROJECTS = [
    {
        "id": "p1",
        "title": "Weather App",
        "tags": ["web"],
        "description": "Minimal weather webapp.",
        "date": "2024-03",
        "github": "https://github.com/example/weather",
        "image": "https://example.com/weather.png",
        "content": "Built with Flask.\nUses OpenWeatherMap."
    },
    {
        "id": "p2",
        "title": "Poster <Series>",
        "tags": ["design"],
        "description": "Print work.",
        "date": "2023-11",
        "github": "#",
        "image": "images/default.jpg",
        "content": ""
    }
]


@pytest.fixture
def projects_file(tmp_path):
    path = tmp_path / "projects.json"
    path.write_text(json.dumps(SAMPLE_PROJECTS), encoding="utf-8")
    return path


@pytest.fixture
def make_client(monkeypatch):
    """Build a TestClient whose server loads projects from the given path."""
    from portfolio.config import settings
    from portfolio.server import app

    def _make(path):
        monkeypatch.setattr(settings, "PROJECTS_FILE", path)
        return TestClient(app)

    return _make
