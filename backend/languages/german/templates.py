"""Sentence templates for sentence-mode training.

Each template has a ``___`` blank where the determiner goes and a ``{noun}``
slot. Nominativ and akkusativ carry extra variants with personal-pronoun
subjects, selected when the learner turns pronouns on.
"""
import random
from dataclasses import dataclass

from .declension import resolve

BLANK = "___"


@dataclass(frozen=True, slots=True)
class SentenceTemplate:
    id: str
    case: str
    text: str
    pronouns: bool = False

    def fill(self, noun: str, determiner: str = BLANK) -> str:
        return self.text.replace("{noun}", noun, 1).replace(BLANK, determiner, 1)


@dataclass(frozen=True, slots=True)
class GeneratedSentence:
    template_id: str
    case: str
    determiner: str
    sentence: str

    def to_dict(self) -> dict:
        return {
            "templateId": self.template_id,
            "case": self.case,
            "determiner": self.determiner,
            "sentence": self.sentence,
        }


TEMPLATES: tuple[SentenceTemplate, ...] = (
    SentenceTemplate("nom-1", "nominativ", "Das ist ___ {noun}."),
    SentenceTemplate("nom-2", "nominativ", "Hier ist ___ {noun}."),
    SentenceTemplate("nom-3", "nominativ", "___ {noun} ist schön."),
    SentenceTemplate("nom-p1", "nominativ", "Ich glaube, ___ {noun} ist neu.", pronouns=True),
    SentenceTemplate("nom-p2", "nominativ", "Du weißt, ___ {noun} ist hier.", pronouns=True),
    SentenceTemplate("nom-p3", "nominativ", "Er sagt, ___ {noun} ist schön.", pronouns=True),
    SentenceTemplate("nom-p4", "nominativ", "Wir finden, ___ {noun} ist gut.", pronouns=True),
    SentenceTemplate("akk-1", "akkusativ", "Ich sehe ___ {noun}."),
    SentenceTemplate("akk-2", "akkusativ", "Ich kaufe ___ {noun}."),
    SentenceTemplate("akk-3", "akkusativ", "Ich finde ___ {noun}."),
    SentenceTemplate("akk-4", "akkusativ", "Ich mag ___ {noun}."),
    SentenceTemplate("akk-p1", "akkusativ", "Du siehst ___ {noun}.", pronouns=True),
    SentenceTemplate("akk-p2", "akkusativ", "Er sieht ___ {noun}.", pronouns=True),
    SentenceTemplate("akk-p3", "akkusativ", "Sie sieht ___ {noun}.", pronouns=True),
    SentenceTemplate("akk-p4", "akkusativ", "Wir sehen ___ {noun}.", pronouns=True),
    SentenceTemplate("akk-p5", "akkusativ", "Ihr seht ___ {noun}.", pronouns=True),
    SentenceTemplate("dat-1", "dativ", "Ich helfe ___ {noun}."),
    SentenceTemplate("dat-2", "dativ", "Ich folge ___ {noun}."),
    SentenceTemplate("dat-3", "dativ", "Ich danke ___ {noun}."),
    SentenceTemplate("dat-4", "dativ", "Ich antworte ___ {noun}."),
    SentenceTemplate("gen-1", "genitiv", "Das ist das Buch ___ {noun}."),
    SentenceTemplate("gen-2", "genitiv", "Die Farbe ___ {noun} ist schön."),
    SentenceTemplate("gen-3", "genitiv", "Der Freund ___ {noun} kommt."),
    SentenceTemplate("gen-4", "genitiv", "Wegen ___ {noun} bleibe ich zu Hause."),
)

# Cases with a separate pronoun-subject template set
_PRONOUN_CASES = frozenset({"nominativ", "akkusativ"})


def templates_for(case: str, use_pronouns: bool = False) -> list[SentenceTemplate]:
    """Templates valid for a case. Unknown cases fall back to nominativ."""
    if not any(t.case == case for t in TEMPLATES):
        case = "nominativ"
    if case in _PRONOUN_CASES:
        return [t for t in TEMPLATES if t.case == case and t.pronouns == use_pronouns]
    return [t for t in TEMPLATES if t.case == case]


def noun_form(word, case: str) -> str:
    """Noun as it appears in the sentence; genitiv uses the supplied genitive form."""
    if case == "genitiv" and getattr(word, "genitive_singular", None):
        return word.genitive_singular
    return word.noun


def generate_sentence(
    word,
    case: str,
    use_pronouns: bool = False,
    rng: random.Random | None = None,
) -> str:
    """Pick a template uniformly at random and fill in the noun, leaving the blank."""
    rng = rng or random.Random()
    template = rng.choice(templates_for(case, use_pronouns))
    return template.fill(noun_form(word, case))


def expand_sentences(
    word,
    case: str | None = None,
    article_type: str = "definite",
    pronoun_type: str = "none",
) -> list[GeneratedSentence]:
    """Every template, optionally restricted to one case, with the blank filled in."""
    results = []
    for template in TEMPLATES:
        if case is not None and template.case != case:
            continue
        determiner = resolve(
            word.article,
            template.case,
            article_type,
            pronoun_type,
            word.alternative_articles,
        ).correct
        sentence = template.fill(noun_form(word, template.case), determiner)
        if sentence[0].islower():
            sentence = sentence[0].upper() + sentence[1:]
        results.append(GeneratedSentence(template.id, template.case, determiner, sentence))
    return results
