import uuid

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


def _error_code(response):
    return response.json()["error"]["code"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Correlation-ID" in response.headers


class TestCatalog:
    def test_dictionaries(self, client):
        data = client.get("/api/catalog/dictionaries").json()
        assert [d["id"] for d in data] == ["A1", "A2"]
        assert all(d["size"] > 0 for d in data)

    def test_topics(self, client):
        topics = client.get("/api/catalog/topics").json()["topics"]
        assert "Food" in topics
        assert topics == sorted(topics)

    def test_topic_counts_follow_enabled(self, client):
        a1 = client.get("/api/catalog/topic-counts", params={"enabled": ["A1"]}).json()["counts"]
        both = client.get("/api/catalog/topic-counts", params={"enabled": ["A1", "A2"]}).json()["counts"]
        assert a1["Work"] == 0
        assert both["Work"] > 0
        assert both["Food"] >= a1["Food"] > 0


class TestLanguages:
    def test_list(self, client):
        assert client.get("/api/languages/").json() == [{"code": "de", "name": "German", "nativeName": "Deutsch"}]

    def test_grammar(self, client):
        grammar = client.get("/api/languages/de/grammar").json()
        assert grammar["hasDeclension"] is True
        assert [c["id"] for c in grammar["cases"]] == ["nominativ", "akkusativ", "dativ", "genitiv"]

    def test_unknown_language(self, client):
        response = client.get("/api/languages/xx")
        assert response.status_code == 404
        assert _error_code(response) == "E4010_NOT_FOUND"

    def test_determiners(self, client):
        data = client.get("/api/languages/de/determiners").json()
        assert data["cases"] == ["nominativ", "akkusativ", "dativ", "genitiv"]
        assert data["tables"]["def"]["genitiv"]["m"] == "des"
        assert data["tables"]["euer"]["dativ"]["f"] == "eurer"

    def test_resolve(self, client):
        data = client.get("/api/languages/de/resolve", params={"article": "der", "case": "dativ"}).json()
        assert data == {"correct": "dem", "accepted": ["dem"]}

    def test_resolve_with_alternative(self, client):
        data = client.get(
            "/api/languages/de/resolve", params={"article": "der", "alternative": ["das"]}
        ).json()
        assert data["accepted"] == ["das", "der"]

    def test_sentences(self, client):
        response = client.get(
            "/api/languages/de/sentences", params={"noun": "Hund", "article": "der", "case": "dativ"}
        )
        sentences = response.json()["sentences"]
        assert sentences
        assert all("dem hund" in s["sentence"].lower() for s in sentences)
        assert {s["case"] for s in sentences} == {"dativ"}


class TestDictionaries:
    def test_create_fetch_update(self, client):
        created = client.post(
            "/api/dictionaries/",
            json={
                "name": "Kitchen",
                "words": [
                    {"noun": "Topf", "article": "der", "exampleSentence": "Der Topf ist heiß."},
                    {"noun": "Pfanne", "article": "die", "translation_en": "pan"},
                ],
            },
        )
        assert created.status_code == 200
        dictionary_id = created.json()["id"]

        fetched = client.get(f"/api/dictionaries/{dictionary_id}").json()
        assert fetched["name"] == "Kitchen"
        assert [w["noun"] for w in fetched["words"]] == ["Topf", "Pfanne"]
        assert fetched["words"][0]["exampleSentence"] == "Der Topf ist heiß."

        patched = client.patch(
            f"/api/dictionaries/{dictionary_id}",
            json={"name": "Küche", "words": [{"noun": "Herd", "article": "der"}]},
        )
        assert patched.json() == {"ok": True}
        fetched = client.get(f"/api/dictionaries/{dictionary_id}").json()
        assert fetched["name"] == "Küche"
        assert [w["noun"] for w in fetched["words"]] == ["Herd"]

    def test_rename_keeps_words(self, client):
        dictionary_id = client.post(
            "/api/dictionaries/", json={"name": "Zoo", "words": [{"noun": "Löwe", "article": "der"}]}
        ).json()["id"]
        client.patch(f"/api/dictionaries/{dictionary_id}", json={"name": "Tiere"})
        fetched = client.get(f"/api/dictionaries/{dictionary_id}").json()
        assert [w["noun"] for w in fetched["words"]] == ["Löwe"]

    def test_create_requires_words(self, client):
        response = client.post("/api/dictionaries/", json={"name": "Empty", "words": []})
        assert response.status_code == 400
        assert _error_code(response) == "E2001_REQUIRED_FIELD_MISSING"

    def test_create_rejects_bad_article(self, client):
        response = client.post(
            "/api/dictionaries/", json={"name": "Bad", "words": [{"noun": "Hund", "article": "den"}]}
        )
        assert response.status_code == 400

    def test_unknown_dictionary(self, client):
        assert client.get(f"/api/dictionaries/{uuid.uuid4()}").status_code == 404
        assert client.get("/api/dictionaries/user-1").status_code == 404


class TestTraining:
    def _start(self, client, **body):
        response = client.post("/api/training/sessions", json=body or None)
        assert response.status_code == 200
        return response.json()

    def test_create_session(self, client):
        data = self._start(client)
        assert data["session_id"]
        assert data["state"] == "awaiting-input"
        assert data["word"]["noun"]
        assert data["correctAnswer"] is None
        assert data["stats"]["total"] == 0

    def test_correct_answer_is_scored(self, client):
        data = self._start(client)
        sid = data["session_id"]
        client.post(f"/api/training/sessions/{sid}/input", json={"text": data["word"]["article"].upper()})
        result = client.post(f"/api/training/sessions/{sid}/submit", json={"source": "enter"}).json()
        assert result["scored"] is True
        assert result["correct"] is True
        assert result["snapshot"]["feedback"] == "correct"
        assert result["snapshot"]["stats"]["streak"] == 1

    def test_invalid_answer_is_not_scored(self, client):
        sid = self._start(client)["session_id"]
        client.post(f"/api/training/sessions/{sid}/input", json={"text": "xyz"})
        result = client.post(f"/api/training/sessions/{sid}/submit").json()
        assert result["scored"] is False
        assert result["snapshot"]["feedback"] == "invalid"
        assert result["snapshot"]["stats"]["total"] == 0

    def test_next_word(self, client):
        sid = self._start(client)["session_id"]
        data = client.post(f"/api/training/sessions/{sid}/next").json()
        assert data["state"] == "awaiting-input"

    def test_settings(self, client):
        sid = self._start(client)["session_id"]
        data = client.patch(
            f"/api/training/sessions/{sid}/settings", json={"mode": "sentence", "cases": ["akkusativ"]}
        ).json()
        assert data["settings"]["mode"] == "sentence"
        assert data["case"] == "akkusativ"
        assert "___" in data["sentence"]

    def test_invalid_settings(self, client):
        sid = self._start(client)["session_id"]
        response = client.patch(f"/api/training/sessions/{sid}/settings", json={"mode": "quiz"})
        assert response.status_code == 400
        assert _error_code(response) == "E2002_INVALID_FORMAT"

    def test_create_with_settings(self, client):
        data = self._start(client, settings={"enabled_dictionaries": ["A2"], "topics": ["Work"]})
        assert data["settings"]["enabled_dictionaries"] == ["A2"]
        assert data["word"]["topic"] == "Work"
        assert data["progress"]["hasTopics"] is True

    def test_user_dictionary_and_toggle(self, client):
        sid = self._start(client)["session_id"]
        added = client.post(
            f"/api/training/sessions/{sid}/dictionaries",
            json={"name": "Space", "words": [{"noun": "Mond", "article": "der", "topic": "Space"}]},
        ).json()
        assert added["dictionary_id"] == "user-1"
        assert added["snapshot"]["userDictionaries"][0]["enabled"] is True

        data = client.patch(
            f"/api/training/sessions/{sid}/dictionaries/user-1", json={"enabled": False}
        ).json()
        assert data["userDictionaries"][0]["enabled"] is False

        missing = client.patch(f"/api/training/sessions/{sid}/dictionaries/user-7", json={"enabled": True})
        assert missing.status_code == 404

    def test_import(self, client):
        sid = self._start(client)["session_id"]
        data = client.post(
            f"/api/training/sessions/{sid}/import", json={"text": "der Mond - луна\ndie Sonne - солнце"}
        ).json()
        assert data["added"] == 2
        assert data["created_id"] == "user-1"
        assert data["snapshot"]["userDictionaries"][0]["size"] == 2

    def test_import_nothing(self, client):
        sid = self._start(client)["session_id"]
        response = client.post(f"/api/training/sessions/{sid}/import", json={"text": "nothing here"})
        assert response.status_code == 400

    def test_close_session(self, client):
        sid = self._start(client)["session_id"]
        assert client.delete(f"/api/training/sessions/{sid}").json() == {"ok": True}
        response = client.get(f"/api/training/sessions/{sid}")
        assert response.status_code == 404
        assert _error_code(response) == "E4010_NOT_FOUND"
