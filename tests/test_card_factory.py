"""Tests for project card materialization."""

from portfolio.models.board_models import PlacementKind
from portfolio.models.project_models import ProjectRecord
from portfolio.services.card_factory import IMAGE_FALLBACK, CardFactory


def test_project_card_is_random_and_tagged():
    card = CardFactory().from_project(ProjectRecord(id="abc", title="Timer", tags=["web", "tools"]))

    assert card.id == "project-abc"
    assert card.kind == PlacementKind.RANDOM
    assert card.tags == {"projects", "web", "tools"}
    assert card.link == "project_detail.html?id=abc"
    assert (card.width, card.height) == (0, 0)


def test_project_card_escapes_record_values():
    record = ProjectRecord(
        id="x",
        title='<script>alert("hi")</script>',
        image='javascript:"bad"',
        date="2024 & later"
    )
    card = CardFactory().from_project(record)

    assert "<script>" not in card.html
    assert "&lt;script&gt;" in card.html
    assert "2024 &amp; later" in card.html
    assert 'src="javascript:&quot;bad&quot;"' in card.html
    assert IMAGE_FALLBACK in card.html


def test_static_cards_include_a_fixed_intro():
    cards = CardFactory().static_cards()

    assert [c.id for c in cards] == ["intro", "about", "contact"]
    assert cards[0].kind == PlacementKind.FIXED
    assert all(c.kind == PlacementKind.RANDOM for c in cards[1:])


def test_detail_page_lists_content_and_github():
    record = ProjectRecord(
        id="p1",
        title="Weather <App>",
        tags=["web"],
        github="https://github.com/example/weather",
        content="First line\n\nSecond line"
    )
    page = CardFactory().render_detail(record)

    assert "<title>Weather &lt;App&gt;</title>" in page
    assert "<p>First line</p><p>Second line</p>" in page
    assert 'href="https://github.com/example/weather"' in page
    assert '<span class="tag">web</span>' in page


def test_detail_page_without_github_link():
    page = CardFactory().render_detail(ProjectRecord(id="p1", title="T"))

    assert 'class="github"' not in page
