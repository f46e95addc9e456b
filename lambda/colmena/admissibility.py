# lambda/colmena/admissibility.py
"""
Admissibility rules for the word pool.

check() is a pure predicate. In short-circuit mode it stops at the first failed
rule; in diagnostic mode it evaluates every rule and reports all failures in
Verdict.failures so a caller can print or ignore them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .corpus import Category
from .normalize import is_lowercase_ascii, normalize

# Bump whenever a rule or threshold changes: compiled pools record it.
RULES_VERSION = 1

MIN_FREQUENCY = 50          # commonness floor
MIN_LENGTH = 4
MAX_LETTERS = 7
PANGRAM_FREQUENCY = 1000    # a seed pangram must be strictly more common than this


class Rule(str, Enum):
    TOO_INFREQUENT = "too_infrequent"
    FOREIGN = "foreign"
    NUMERAL = "numeral"
    PUNCTUATION = "punctuation"
    TOO_SHORT = "too_short"
    NOT_LOWERCASE_LETTERS = "not_lowercase_letters"
    TOO_MANY_LETTERS = "too_many_letters"


_EXCLUDED_CATEGORIES = {
    Category.FOREIGN: Rule.FOREIGN,
    Category.NUMERAL: Rule.NUMERAL,
    Category.PUNCTUATION: Rule.PUNCTUATION,
}


@dataclass(frozen=True)
class Verdict:
    admissible: bool
    common_pangram: bool
    failures: Tuple[Rule, ...] = ()

    def as_tuple(self) -> Tuple[bool, bool]:
        return self.admissible, self.common_pangram


def check(
    word: str,
    lemma: Optional[str] = None,
    category: Optional[Category] = None,
    frequency: int = 0,
    short_circuit: bool = True,
) -> Verdict:
    # lemma is accepted for parity with the corpus record; no rule reads it yet
    failures: List[Rule] = []

    def fail(rule: Rule) -> bool:
        failures.append(rule)
        return short_circuit

    if frequency < MIN_FREQUENCY and fail(Rule.TOO_INFREQUENT):
        return Verdict(False, False, tuple(failures))

    excluded = _EXCLUDED_CATEGORIES.get(category) if category is not None else None
    if excluded is not None and fail(excluded):
        return Verdict(False, False, tuple(failures))

    stripped = normalize(word)
    if len(stripped) < MIN_LENGTH and fail(Rule.TOO_SHORT):
        return Verdict(False, False, tuple(failures))

    if not is_lowercase_ascii(stripped) and fail(Rule.NOT_LOWERCASE_LETTERS):
        return Verdict(False, False, tuple(failures))

    common_pangram = False
    uniques = len(set(stripped))
    if uniques > MAX_LETTERS:
        if fail(Rule.TOO_MANY_LETTERS):
            return Verdict(False, False, tuple(failures))
    elif uniques == MAX_LETTERS and frequency > PANGRAM_FREQUENCY:
        common_pangram = True

    return Verdict(not failures, common_pangram, tuple(failures))


def is_admissible(
    word: str,
    lemma: Optional[str] = None,
    category: Optional[Category] = None,
    frequency: int = 0,
    short_circuit: bool = True,
) -> Tuple[bool, bool]:
    """Tuple form of check(): (admissible, is_pangram_candidate)."""
    return check(word, lemma, category, frequency, short_circuit).as_tuple()
