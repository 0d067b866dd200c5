from models.dictionary import UserDictionary, UserDictionaryWord, word_to_row, row_to_word

__all__ = [
    "UserDictionary",
    "UserDictionaryWord",
    "word_to_row",
    "row_to_word",
]
