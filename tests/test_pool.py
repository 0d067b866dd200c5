from engines.pool import (
    filter_topics_with_words,
    get_all_topics,
    get_enabled_words,
    get_topic_word_count,
    get_words_in_topics,
    has_custom_dictionary_enabled,
    resolve_enabled_dictionaries,
)
from engines.types import Dictionary, Word
from languages.german.catalog import get_built_in


def test_built_in_levels_load():
    a1 = get_built_in("A1")
    assert a1
    assert all(w.level == "A1" for w in a1)
    assert get_built_in("C2") == ()


def test_enabled_set_decides_membership(user_dictionary):
    user_dictionary.enabled = False
    words = get_enabled_words(["user-1"], [], [user_dictionary])
    assert [w.noun for w in words] == ["Haus", "Rakete"]
    assert get_enabled_words([], [], [user_dictionary]) == []


def test_duplicate_identity_contributes_once():
    haus = {"noun": "Haus", "article": "das", "topic": "Rooms"}
    first = Dictionary(id="u1", name="One", words=[Word.from_dict(haus)])
    second = Dictionary(id="u2", name="Two", words=[Word.from_dict({**haus, "translation": "house"})])
    words = get_enabled_words(["u1", "u2"], [], [first, second])
    assert len(words) == 1
    assert words[0].translation is None


def test_built_ins_come_first_in_dedup():
    own = Dictionary(id="u1", name="Own", words=[Word(noun="Haus", article="das", topic="Rooms", translation="mine")])
    words = get_enabled_words(["u1", "A1"], [], [own])
    haus = [w for w in words if w.noun == "Haus"]
    assert len(haus) == 1
    assert haus[0].level == "A1"


def test_same_noun_in_other_topic_is_distinct():
    own = Dictionary(id="u1", name="Own", words=[Word(noun="Haus", article="das", topic="City")])
    words = get_enabled_words(["A1", "u1"], [], [own])
    assert len([w for w in words if w.noun == "Haus"]) == 2


def test_pool_builder_is_idempotent(user_dictionary):
    args = (["A1", "user-1"], ["Rooms"], [user_dictionary])
    first = get_enabled_words(*args)
    second = get_enabled_words(*args)
    assert {w.identity for w in first} == {w.identity for w in second}


def test_topic_filter(user_dictionary):
    words = get_enabled_words(["A1", "user-1"], ["Rooms"], [user_dictionary])
    assert words
    assert {w.topic for w in words} == {"Rooms"}


def test_words_in_topics_requires_topics(user_dictionary):
    assert get_words_in_topics(["A1"], [], [user_dictionary]) == []
    assert get_words_in_topics(["user-1"], ["Space"], [user_dictionary])[0].noun == "Rakete"


def test_topic_word_count(user_dictionary):
    a1_rooms = sum(1 for w in get_built_in("A1") if w.topic == "Rooms")
    assert get_topic_word_count("Rooms", ["A1"], [user_dictionary]) == a1_rooms
    # Haus is already in A1 under Rooms
    assert get_topic_word_count("Rooms", ["A1", "user-1"], [user_dictionary]) == a1_rooms


def test_all_topics_sorted_and_merged(user_dictionary):
    topics = get_all_topics([user_dictionary])
    assert topics == sorted(topics)
    assert "Space" in topics
    assert "Food" in topics
    assert len(topics) == len(set(topics))


def test_filter_topics_with_words(user_dictionary):
    assert filter_topics_with_words(["Space", "Food"], ["A1"], [user_dictionary]) == ["Food"]
    assert filter_topics_with_words(["Space"], ["user-1"], [user_dictionary]) == ["Space"]


def test_has_custom_dictionary_enabled():
    assert not has_custom_dictionary_enabled(["A1", "A2"])
    assert has_custom_dictionary_enabled(["A1", "user-1"])


def test_empty_custom_dictionary_falls_back():
    empty = Dictionary(id="user-9", name="Empty", words=[])
    assert resolve_enabled_dictionaries(["user-9"], [], [empty], ["A1"]) == ["A1"]


def test_non_empty_enabled_set_is_kept(user_dictionary):
    assert resolve_enabled_dictionaries(["user-1"], [], [user_dictionary], ["A1"]) == ["user-1"]
    # topic filter alone does not replace the dictionaries
    assert resolve_enabled_dictionaries(["user-1"], ["Food"], [user_dictionary], ["A1"]) == ["user-1"]
