"""
Diagram API Tests

Round trips through the FastAPI app with TestClient.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app

LEASE_CONCEPTS = [
    {"name": "Rent Amount", "description": "monthly payment and increase rate"},
    {"name": "Deposit", "description": "security amount paid upfront"},
    {"name": "Contract Term", "description": "start and end dates"},
    {"name": "Termination", "description": "rules for ending early"},
    {"name": "Maintenance", "description": "repair responsibilities"},
]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


class TestAppEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestDiagramEndpoints:

    def test_themes(self, client):
        response = client.get("/diagram/themes")
        assert response.status_code == 200

        themes = {t["id"]: t for t in response.json()}
        assert set(themes) == {"Classic", "Modern", "Minimalist", "Colorful", "Flow", "Network", "Process"}
        assert themes["Minimalist"]["background"] is None
        assert themes["Colorful"]["corner"] == "pill"

    def test_synthesize_lease(self, client):
        response = client.post("/diagram/synthesize", json={
            "title": "Lease Agreement",
            "concepts": LEASE_CONCEPTS,
            "theme": "Classic",
        })
        assert response.status_code == 200

        body = response.json()
        assert body["layout"] == "radial"
        assert body["theme"] == "Classic"
        assert (body["width"], body["height"]) == (500, 300)
        assert body["concept_count"] == 5
        assert body["svg"].startswith("<svg")
        assert body["svg"].endswith("</svg>")

    def test_synthesize_unknown_theme_and_default(self, client):
        unknown = client.post("/diagram/synthesize", json={"title": "T", "concepts": LEASE_CONCEPTS, "theme": "NoSuchTheme"})
        lower = client.post("/diagram/synthesize", json={"title": "T", "concepts": LEASE_CONCEPTS, "theme": "modern"})
        missing = client.post("/diagram/synthesize", json={"title": "T", "concepts": LEASE_CONCEPTS})

        assert unknown.json()["theme"] == "Classic"
        assert lower.json()["theme"] == "Modern"
        assert missing.json()["theme"] == settings.default_theme

    def test_synthesize_empty(self, client):
        body = client.post("/diagram/synthesize", json={"title": "Nothing Yet"}).json()
        assert body["layout"] == "title_only"
        assert body["concept_count"] == 0

    def test_synthesize_caps_concepts(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_request_concepts", 3)
        body = client.post("/diagram/synthesize", json={"title": "T", "concepts": LEASE_CONCEPTS}).json()
        assert body["concept_count"] == 3

    def test_synthesize_rejects_nameless_concept(self, client):
        response = client.post("/diagram/synthesize", json={"title": "T", "concepts": [{"description": "no name"}]})
        assert response.status_code == 422

    def test_render_returns_svg_document(self, client):
        response = client.post("/diagram/render", json={"title": "Lease Agreement", "concepts": LEASE_CONCEPTS})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")

    def test_keywords(self, client):
        response = client.post("/diagram/keywords", json={"text": "rent rent rent deposit deposit contract", "max": 2})
        assert response.json() == {"keywords": ["Rent", "Deposit"]}

    def test_keywords_rejects_zero_max(self, client):
        response = client.post("/diagram/keywords", json={"text": "rent", "max": 0})
        assert response.status_code == 422

    def test_from_text(self, client):
        response = client.post("/diagram/from-text", json={
            "title": "Lease",
            "text": "rent rent rent deposit deposit contract maintenance termination",
            "theme": "Flow",
        })
        body = response.json()

        assert response.status_code == 200
        assert body["concept_count"] == 5
        assert body["layout"] == "radial"
        assert body["theme"] == "Flow"
        assert settings.keyword_filler_description[:10] in body["svg"]

    def test_from_text_respects_max_concepts(self, client):
        text = "alpha beta gamma delta epsilon zeta theta iota kappa lambda sigma omega"
        body = client.post("/diagram/from-text", json={"title": "Greek", "text": text, "max_concepts": 10}).json()
        assert body["concept_count"] == 10
        assert body["layout"] == "grid"

    def test_validate_accepts_model_output(self, client):
        svg = '<svg viewBox="0 0 10 10"><circle r="4"/></svg>'
        body = client.post("/diagram/validate", json={"content": f"Here: {svg} done"}).json()
        assert body == {"valid": True, "svg": svg}

    def test_validate_substitutes_placeholder(self, client):
        body = client.post("/diagram/validate", json={
            "content": "I cannot draw that.",
            "description": "court ruling",
            "kind": "illustration",
        }).json()

        assert body["valid"] is False
        assert "Legal Process" in body["svg"]

    def test_validate_logs_fallback(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="services.asset_fallback"):
            client.post("/diagram/validate", json={"content": "<svg><text>no shapes</text></svg>", "kind": "diagram"})
        assert "[Fallback] diagram svg" in caplog.text

    def test_validate_scenes_keeps_order(self, client):
        good = '<svg viewBox="0 0 10 10"><rect width="4" height="4"/></svg>'
        response = client.post("/diagram/validate-scenes", json={
            "scenes": [f"scene one: {good}", "model refused", good],
            "description": "planet orbits",
        })
        body = response.json()

        assert response.status_code == 200
        assert body["valid"] == [True, False, True]
        assert body["svgs"][0] == good
        assert "Space and Planets" in body["svgs"][1]
        assert body["svgs"][2] == good

    def test_validate_scenes_empty(self, client):
        assert client.post("/diagram/validate-scenes", json={}).json() == {"valid": [], "svgs": []}
