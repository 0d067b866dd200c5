import random

from engines.types import Word
from languages.german.templates import (
    BLANK,
    TEMPLATES,
    expand_sentences,
    generate_sentence,
    templates_for,
)


def test_every_template_has_blank_and_noun_slot():
    for template in TEMPLATES:
        assert BLANK in template.text
        assert "{noun}" in template.text


def test_pronoun_variants_only_for_nominativ_and_akkusativ():
    assert all(t.pronouns for t in templates_for("nominativ", True))
    assert not any(t.pronouns for t in templates_for("nominativ", False))
    assert templates_for("dativ", True) == templates_for("dativ", False)
    assert {t.case for t in TEMPLATES if t.pronouns} == {"nominativ", "akkusativ"}


def test_unknown_case_falls_back_to_nominativ():
    assert templates_for("vokativ") == templates_for("nominativ")


def test_generate_sentence_uses_genitive_form():
    word = Word(noun="Hund", article="der", genitive_singular="Hundes")
    sentence = generate_sentence(word, "genitiv", rng=random.Random(3))
    assert "Hundes" in sentence
    assert BLANK in sentence


def test_generate_sentence_is_deterministic_for_seed():
    word = Word(noun="Tisch", article="der")
    first = generate_sentence(word, "akkusativ", rng=random.Random(42))
    second = generate_sentence(word, "akkusativ", rng=random.Random(42))
    assert first == second
    assert "Tisch" in first


def test_expand_sentences_fills_resolved_determiner():
    word = Word(noun="Hund", article="der", genitive_singular="Hundes")
    sentences = expand_sentences(word, "dativ")
    assert sentences
    assert all(s.determiner == "dem" for s in sentences)
    assert "Ich helfe dem Hund." in [s.sentence for s in sentences]


def test_expand_sentences_capitalises_leading_determiner():
    word = Word(noun="Lampe", article="die")
    sentences = {s.template_id: s.sentence for s in expand_sentences(word, "nominativ")}
    assert sentences["nom-3"] == "Die Lampe ist schön."


def test_expand_sentences_all_cases_with_possessive():
    word = Word(noun="Buch", article="das", genitive_singular="Buches")
    sentences = expand_sentences(word, pronoun_type="possessive")
    assert len(sentences) == len(TEMPLATES)
    by_id = {s.template_id: s for s in sentences}
    assert by_id["gen-1"].sentence == "Das ist das Buch meines Buches."
