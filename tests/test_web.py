"""Tests for the HTTP binding."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from morph_service.analyser import PymorphyAnalyser
from morph_service.orchestrator import MorphOrchestrator
from morph_service.tokenizer import SpacyTokenizer
from morph_service.web import MORPH_PATH, create_app

from conftest import FailingAnalyser


@pytest.fixture
def client(orchestrator):
    return TestClient(create_app(orchestrator))


class TestMorphEndpoint:
    def test_single_word(self, client):
        response = client.post(MORPH_PATH, json={"input": "books"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "items": [
                {
                    "form": "books",
                    "entries": [
                        {"lemma": "book", "tagSet": {"pos": "NOUN", "tags": ["PLURAL"]}}
                    ],
                }
            ]
        }

    def test_empty_input(self, client):
        response = client.post(MORPH_PATH, json={"input": ""})

        assert response.status_code == 200
        assert response.json() == {"items": []}

    def test_per_token_error_keeps_other_items(self, client):
        response = client.post(MORPH_PATH, json={"input": "She xyzzy сова"})

        items = response.json()["items"]
        assert [item["form"] for item in items] == ["She", "xyzzy", "сова"]
        assert "error" not in items[0]
        assert items[1] == {"form": "xyzzy", "error": "unknown form: 'xyzzy'"}
        assert items[2]["entries"][0]["lemma"] == "сова"

    def test_malformed_body_is_400_and_not_processed(self, client, tokenizer, analyser):
        response = client.post(
            MORPH_PATH,
            content=b'{"input": ',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text
        assert tokenizer.calls == []
        assert analyser.calls == []

    def test_wrong_input_type_is_400(self, client):
        response = client.post(MORPH_PATH, json={"input": ["books"]})

        assert response.status_code == 400

    def test_tokenizer_failure_is_500(self, client):
        response = client.post(MORPH_PATH, json={"input": "bad\x00input"})

        assert response.status_code == 500
        assert "NUL byte" in response.text

    def test_only_post_is_routed(self, client):
        assert client.get(MORPH_PATH).status_code == 405

    def test_unexpected_analyser_error_keeps_request_alive(self, tokenizer):
        analyser = FailingAnalyser({"bad": KeyError("bad")})
        client = TestClient(create_app(MorphOrchestrator(tokenizer, analyser)))

        response = client.post(MORPH_PATH, json={"input": "books bad she"})

        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["form"] for item in items] == ["books", "bad", "she"]
        assert items[0]["entries"][0]["lemma"] == "book"
        assert items[1] == {"form": "bad", "error": "'bad'"}
        assert items[2]["entries"][0]["lemma"] == "she"

    def test_null_input_is_empty(self, client):
        response = client.post(MORPH_PATH, json={"input": None})

        assert response.status_code == 200
        assert response.json() == {"items": []}


class TestWithRealEngines:
    @pytest.fixture(scope="class")
    def client(self):
        orchestrator = MorphOrchestrator(
            SpacyTokenizer(lang="ru"), PymorphyAnalyser(lang="ru")
        )
        return TestClient(create_app(orchestrator))

    def test_sentence(self, client):
        response = client.post(MORPH_PATH, json={"input": "Мама мыла раму."})

        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["form"] for item in items] == ["Мама", "мыла", "раму", "."]
        assert all("error" not in item for item in items)
        assert "мама" in [e["lemma"] for e in items[0]["entries"]]
        assert "рама" in [e["lemma"] for e in items[2]["entries"]]
        assert items[3]["entries"][0]["tagSet"]["pos"] == "PNCT"
