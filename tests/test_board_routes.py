"""End-to-end tests for the board and project routes."""

import pytest


GEOMETRY = {
    "viewport": {"width": 1024, "height": 768},
    "header_height": 80,
    "footer_height": 60,
    "cards": [
        {"id": "intro", "kind": "fixed", "left": 10, "top": 10, "width": 200, "height": 100},
        {"id": "about", "kind": "random", "tags": ["about"], "width": 250, "height": 200},
    ],
    "filters": ["web", "design", "about"],
}


def _cards(payload):
    return {c["id"]: c for c in payload["cards"]}


class TestWithProjects:

    @pytest.fixture
    def client(self, make_client, projects_file):
        with make_client(projects_file) as client:
            yield client

    def test_projects_json_lists_loaded_records(self, client):
        response = client.get("/projects.json")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["p1", "p2"]

    def test_session_lays_out_reported_and_project_cards(self, client):
        response = client.post("/api/board/session", json=GEOMETRY)

        assert response.status_code == 200
        cards = _cards(response.json())
        assert list(cards) == ["intro", "about", "project-p1", "project-p2"]
        assert (cards["intro"]["x"], cards["intro"]["y"]) == (10, 10)
        assert cards["intro"]["rotation"] == 0
        for card_id in ("about", "project-p1", "project-p2"):
            assert -15 <= cards[card_id]["rotation"] <= 15
            assert cards[card_id]["visible"] is True
        assert sorted(cards["project-p1"]["tags"]) == ["projects", "web"]

    def test_filter_toggle_hides_non_matching_cards(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]

        response = client.post(f"/api/board/{session_id}/filters/web/toggle")

        body = response.json()
        assert body["active"] is True
        assert body["active_filters"] == ["web"]
        visible = {c["id"]: c["visible"] for c in body["cards"]}
        assert visible == {"intro": False, "about": False, "project-p1": True, "project-p2": False}

        body = client.post(f"/api/board/{session_id}/filters/web/toggle").json()
        assert body["active"] is False
        assert all(c["visible"] for c in body["cards"])

        state = client.get(f"/api/board/state/{session_id}").json()
        assert {f["tag"]: f["active"] for f in state["filters"]} == {"web": False, "design": False, "about": False}

    def test_drag_round_trip(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]

        down = client.post(
            f"/api/board/{session_id}/cards/intro/pointer-down",
            json={"client_x": 20, "client_y": 30, "source": "mouse"}
        ).json()
        assert down["cards"][0]["dragging"] is True
        assert down["cards"][0]["z_index"] == 101

        move = client.post(
            f"/api/board/{session_id}/pointer-move",
            json={"client_x": 120, "client_y": 80, "source": "mouse"}
        ).json()
        assert move["prevent_default"] is False
        assert (move["cards"][0]["x"], move["cards"][0]["y"]) == (110, 60)

        up = client.post(f"/api/board/{session_id}/pointer-up", json={"source": "mouse"}).json()
        assert [c["id"] for c in up["cards"]] == ["intro"]
        assert up["cards"][0]["dragging"] is False

    def test_touch_move_asks_to_prevent_scroll(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]
        touch = {"source": "touch", "touches": [{"client_x": 20, "client_y": 30}]}

        client.post(f"/api/board/{session_id}/cards/intro/pointer-down", json=touch)
        touch["touches"][0]["client_x"] = 40
        move = client.post(f"/api/board/{session_id}/pointer-move", json=touch).json()

        assert move["prevent_default"] is True
        assert move["cards"][0]["x"] == 30

    def test_press_arriving_after_its_release_does_not_stick(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]

        client.post(f"/api/board/{session_id}/pointer-up", json={"source": "mouse", "buttons": 0})
        client.post(
            f"/api/board/{session_id}/cards/intro/pointer-down",
            json={"client_x": 20, "client_y": 30, "source": "mouse", "buttons": 1}
        )
        move = client.post(
            f"/api/board/{session_id}/pointer-move",
            json={"client_x": 600, "client_y": 500, "source": "mouse", "buttons": 0}
        ).json()

        assert move["cards"][0]["dragging"] is False
        intro = _cards(client.get(f"/api/board/state/{session_id}").json())["intro"]
        assert (intro["x"], intro["y"], intro["dragging"]) == (10, 10, False)

    def test_resize_answers_with_the_relaid_out_board(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]

        response = client.post(f"/api/board/{session_id}/resize", json={"width": 600, "height": 500})

        assert response.status_code == 200
        body = response.json()
        assert body["viewport"] == {"width": 600, "height": 500}
        cards = _cards(body)
        assert (cards["intro"]["x"], cards["intro"]["y"]) == (10, 10)
        for card_id in ("about", "project-p1", "project-p2"):
            assert 0 <= cards[card_id]["x"] <= 600 - 250 - 20

    def test_explicit_layout(self, client):
        session_id = client.post("/api/board/session", json=GEOMETRY).json()["session_id"]

        response = client.post(f"/api/board/{session_id}/layout")

        assert response.status_code == 200
        assert _cards(response.json())["intro"]["x"] == 10

    def test_project_detail_pages(self, client):
        assert client.get("/api/projects/p1").json()["title"] == "Weather App"

        page = client.get("/project/p2")
        assert page.status_code == 200
        assert "Poster &lt;Series&gt;" in page.text

        linked = client.get("/project_detail.html", params={"id": "p1"})
        assert "<p>Built with Flask.</p>" in linked.text

        assert client.get("/api/projects/missing").status_code == 404


class TestWithoutProjects:

    @pytest.fixture
    def client(self, make_client, tmp_path):
        with make_client(tmp_path / "missing.json") as client:
            yield client

    def test_board_still_works_with_static_cards(self, client):
        assert client.get("/projects.json").json() == []

        snapshot = client.post("/api/board/session").json()
        session_id = snapshot["session_id"]
        cards = _cards(snapshot)
        assert list(cards) == ["intro", "about", "contact"]
        assert cards["intro"]["kind"] == "fixed"

        toggled = client.post(f"/api/board/{session_id}/filters/about/toggle").json()
        assert {c["id"]: c["visible"] for c in toggled["cards"]} == {"intro": False, "about": True, "contact": True}

        down = client.post(
            f"/api/board/{session_id}/cards/intro/pointer-down",
            json={"client_x": 50, "client_y": 130}
        )
        assert down.status_code == 200

    def test_unknown_session_and_card(self, client):
        assert client.get("/api/board/state/nope").status_code == 404
        assert client.post("/api/board/nope/layout").status_code == 404
        assert client.delete("/api/board/state/nope").status_code == 404

        session_id = client.post("/api/board/session").json()["session_id"]
        missing = client.post(f"/api/board/{session_id}/cards/ghost/pointer-down", json={})
        assert missing.status_code == 404

    def test_delete_session(self, client):
        session_id = client.post("/api/board/session").json()["session_id"]

        assert client.delete(f"/api/board/state/{session_id}").status_code == 200
        assert client.get(f"/api/board/state/{session_id}").status_code == 404

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestSessionLimit:

    def test_new_sessions_push_out_the_oldest(self, make_client, tmp_path, monkeypatch):
        from portfolio.config import settings
        monkeypatch.setattr(settings, "MAX_SESSIONS", 5)

        with make_client(tmp_path / "missing.json") as client:
            ids = [client.post("/api/board/session").json()["session_id"] for _ in range(50)]

            assert all(client.get(f"/api/board/state/{sid}").status_code == 404 for sid in ids[:45])
            assert all(client.get(f"/api/board/state/{sid}").status_code == 200 for sid in ids[45:])
