import pytest

from languages.german.declension import (
    DETERMINER_TABLES,
    article_by_case,
    determiner_vocabulary,
    is_determiner,
    resolve,
)


@pytest.mark.parametrize(
    "article,case,expected",
    [
        ("der", "nominativ", "der"),
        ("der", "akkusativ", "den"),
        ("der", "dativ", "dem"),
        ("der", "genitiv", "des"),
        ("die", "nominativ", "die"),
        ("die", "akkusativ", "die"),
        ("die", "dativ", "der"),
        ("die", "genitiv", "der"),
        ("das", "nominativ", "das"),
        ("das", "akkusativ", "das"),
        ("das", "dativ", "dem"),
        ("das", "genitiv", "des"),
    ],
)
def test_definite_table(article, case, expected):
    assert article_by_case(article, case) == expected
    assert resolve(article, case).correct == expected


@pytest.mark.parametrize(
    "article,case,expected",
    [
        ("der", "nominativ", "ein"),
        ("der", "akkusativ", "einen"),
        ("die", "nominativ", "eine"),
        ("die", "akkusativ", "eine"),
        ("das", "akkusativ", "ein"),
        ("der", "dativ", "einem"),
        ("die", "dativ", "einer"),
        ("das", "genitiv", "eines"),
    ],
)
def test_indefinite_table(article, case, expected):
    assert resolve(article, case, "indefinite").correct == expected


def test_unknown_article_passes_through():
    assert article_by_case("xyz", "dativ") == "xyz"


def test_masculine_nominative_definite_accepts_only_der():
    resolution = resolve("der", "nominativ", "definite", "none")
    assert resolution.correct == "der"
    assert resolution.accepted == frozenset({"der"})


def test_feminine_dative_possessive_family():
    resolution = resolve("die", "dativ", "definite", "possessive")
    assert resolution.correct == "meiner"
    assert {"meiner", "deiner", "seiner", "ihrer", "unserer", "eurer"} <= resolution.accepted
    assert "meinem" not in resolution.accepted


def test_demonstrative_family():
    resolution = resolve("das", "nominativ", "definite", "demonstrative")
    assert resolution.correct == "dieses"
    assert resolution.accepted == frozenset({"dieses", "jenes"})


def test_euer_drops_the_e_when_declined():
    table = DETERMINER_TABLES["euer"]
    assert table["nominativ"]["m"] == "euer"
    assert table["nominativ"]["f"] == "eure"
    assert table["akkusativ"]["m"] == "euren"
    assert table["genitiv"]["n"] == "eures"


def test_alternative_articles_widen_accepted_set():
    resolution = resolve("der", "nominativ", alternative_articles=("das",))
    assert resolution.correct == "der"
    assert resolution.accepted == frozenset({"der", "das"})


def test_resolution_accepts_untrimmed_input():
    assert resolve("die", "akkusativ").accepts("  DIE ")


def test_vocabulary_grows_with_pronoun_type():
    base = determiner_vocabulary("none")
    assert {"der", "den", "ein", "einem"} <= base
    assert "mein" not in base
    assert "meinem" in determiner_vocabulary("possessive")
    assert "jener" in determiner_vocabulary("demonstrative")
    assert "mein" not in determiner_vocabulary("demonstrative")


@pytest.mark.parametrize(
    "text,pronoun_type,expected",
    [
        ("der", "none", True),
        (" Die ", "none", True),
        ("xyz", "none", False),
        ("", "none", False),
        ("meine", "none", False),
        ("meine", "possessive", True),
        ("diesem", "demonstrative", True),
    ],
)
def test_is_determiner(text, pronoun_type, expected):
    assert is_determiner(text, pronoun_type) is expected
