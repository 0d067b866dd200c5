import json

from engines.types import Dictionary, TrainingSettings, Word
from persistence import LocalStore


def test_missing_file_gives_defaults(tmp_path):
    store = LocalStore(tmp_path / "missing.json")
    assert store.load_settings() == TrainingSettings()
    assert store.load_user_dictionaries() == []


def test_settings_round_trip(tmp_path):
    store = LocalStore(tmp_path / "store.json")
    settings = TrainingSettings(mode="sentence", cases=["dativ", "genitiv"], topics=["Food"])
    assert store.save_settings(settings)
    assert LocalStore(store.path).load_settings() == settings


def test_keys_are_written_independently(tmp_path):
    store = LocalStore(tmp_path / "store.json")
    store.save_settings(TrainingSettings(language="English"))
    store.save_user_dictionaries([Dictionary(id="user-1", name="Mine", words=[Word(noun="Haus", article="das")])])

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert set(data) == {"settings", "user_dictionaries"}
    assert store.load_settings().language == "English"
    [loaded] = store.load_user_dictionaries()
    assert loaded.words[0].noun == "Haus"


def test_corrupt_file_is_swallowed(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(path)
    assert store.load_settings() == TrainingSettings()
    assert store.load_user_dictionaries() == []


def test_bad_entries_are_skipped(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps({
            "settings": {"mode": "sentence", "unknown": 1},
            "user_dictionaries": [{"name": "no id"}, {"id": "user-2", "name": "Ok", "words": []}],
        }),
        encoding="utf-8",
    )
    store = LocalStore(path)
    assert store.load_settings().mode == "sentence"
    assert [d.id for d in store.load_user_dictionaries()] == ["user-2"]


def test_write_failure_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    store = LocalStore(blocker / "store.json")
    assert store.save_settings(TrainingSettings()) is False
