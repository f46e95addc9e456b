# lambda/colmena/normalize.py
from typing import FrozenSet

from unidecode import unidecode


def normalize(word: str) -> str:
    """Fold accents and other diacritics to plain ASCII (á -> a, ñ -> n). Case is kept."""
    return unidecode(word or "")


def distinct_letters(word: str) -> FrozenSet[str]:
    return frozenset(normalize(word))


def is_lowercase_ascii(word: str) -> bool:
    # str.islower() accepts non-ASCII letters and ignores digits, so check explicitly
    return bool(word) and all("a" <= c <= "z" for c in word)
