"""German: determiner declension, sentence templates and built-in dictionaries."""
from .module import GermanModule
from .declension import Resolution, resolve, article_by_case, is_determiner, determiner_vocabulary
from .templates import generate_sentence, expand_sentences, templates_for

__all__ = [
    "GermanModule",
    "Resolution",
    "resolve",
    "article_by_case",
    "is_determiner",
    "determiner_vocabulary",
    "generate_sentence",
    "expand_sentences",
    "templates_for",
]
