import pytest

from engines.importer import dedupe_words_by_noun, merge_imported_words, parse_import_text
from engines.types import Dictionary, Word


@pytest.mark.parametrize(
    "line,noun,article,translation",
    [
        ("der Hund собака", "Hund", "der", "собака"),
        ("der Hund - собака", "Hund", "der", "собака"),
        ("die Katze – кошка", "Katze", "die", "кошка"),
        ("das Buch — книга", "Buch", "das", "книга"),
        ("der Apfel -> яблоко", "Apfel", "der", "яблоко"),
        ("die Lampe: лампа", "Lampe", "die", "лампа"),
        ("das Kind = ребёнок", "Kind", "das", "ребёнок"),
        ("- die Banane — банан", "Banane", "die", "банан"),
        ("• der Tisch\tстол", "Tisch", "der", "стол"),
        ("Der Baum", "Baum", "der", None),
    ],
)
def test_line_formats(line, noun, article, translation):
    [word] = parse_import_text(line)
    assert (word.noun, word.article, word.translation) == (noun, article, translation)


def test_skips_non_article_lines():
    text = "Hund\nein Hund\n\n   \nder\nder Hund"
    assert [w.noun for w in parse_import_text(text)] == ["Hund"]


def test_dedupe_keeps_first():
    words = [Word(noun="Hund", article="der", translation="a"), Word(noun="Hund", article="der", translation="b")]
    assert [w.translation for w in dedupe_words_by_noun(words)] == ["a"]


def test_merge_creates_default_dictionary():
    result = merge_imported_words([], parse_import_text("der Hund\ndie Katze"), "Imported")
    assert result.created_id == "user-1"
    assert result.added == 2
    [created] = result.dictionaries
    assert created.name == "Imported"
    assert created.enabled


def test_merge_into_first_dictionary():
    first = Dictionary(id="user-1", name="One", words=[Word(noun="Hund", article="der")])
    second = Dictionary(id="user-2", name="Two")
    result = merge_imported_words([first, second], parse_import_text("der Hund\ndie Katze"), "Imported")

    assert result.created_id is None
    assert result.added == 1
    assert [w.noun for w in result.dictionaries[0].words] == ["Hund", "Katze"]
    assert result.dictionaries[1] is second
    assert [w.noun for w in first.words] == ["Hund"]


def test_merge_nothing_new():
    first = Dictionary(id="user-1", name="One", words=[Word(noun="Hund", article="der")])
    result = merge_imported_words([first], parse_import_text("der Hund"), "Imported")
    assert result.added == 0
    assert result.dictionaries == [first]
