# lambda/colmena/corpus.py
"""
Corpus ingest and the in-memory lexicon store.

The corpus ships as three tab-delimited tables:

  elements: word, lemma, category, raw_freq, norm_freq_no_marks, norm_freq
  forms:    word, raw_freq, norm_freq
  lemmas:   lemma, category, raw_freq, norm_freq_no_marks, norm_freq

Rows that do not parse (headers, wrong column count, bad numbers, unknown
category tags) are skipped.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence


class Category(str, Enum):
    ADJECTIVE = "A"
    ADVERB = "R"
    AFFIX = "J"
    ARTICLE = "T"
    CONJUNCTION = "C"
    CONTRACTION = "E"
    QUANTIFIER = "Q"
    DEMONSTRATIVE = "D"
    UNKNOWN = "U"
    FOREIGN = "F"
    INTERJECTION = "I"
    INTERROGATIVE = "W"
    NUMERAL = "M"
    POSSESSIVE = "X"
    PREPOSITION = "P"
    PERSONAL_PRONOUN = "L"
    PUNCTUATION = "Y"
    RELATIVE = "H"
    NOUN = "N"
    VERB = "V"


@dataclass(frozen=True)
class LexiconEntry:
    """
    One distinct corpus word.
    - lemma / category: None for tables that do not carry them (forms)
    - the two normalized frequencies are carried through for diagnostics only
    """
    word: str
    lemma: Optional[str]
    category: Optional[Category]
    raw_frequency: int
    norm_frequency_no_marks: float = 0.0
    norm_frequency: float = 0.0

    def merged(self, other: "LexiconEntry") -> "LexiconEntry":
        # frequencies add up, everything else stays from the first occurrence
        return replace(
            self,
            raw_frequency=self.raw_frequency + other.raw_frequency,
            norm_frequency_no_marks=self.norm_frequency_no_marks + other.norm_frequency_no_marks,
            norm_frequency=self.norm_frequency + other.norm_frequency,
        )


class LexiconStore:
    """Entries keyed by word; duplicates are merged on insert."""

    def __init__(self, entries: Iterable[LexiconEntry] = ()):
        self._entries: Dict[str, LexiconEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: LexiconEntry) -> None:
        current = self._entries.get(entry.word)
        self._entries[entry.word] = entry if current is None else current.merged(entry)

    def get(self, word: str) -> Optional[LexiconEntry]:
        return self._entries.get(word)

    def frequency(self, word: str) -> Optional[int]:
        entry = self._entries.get(word)
        return entry.raw_frequency if entry is not None else None

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __iter__(self) -> Iterator[LexiconEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


# -------------------- Row parsers --------------------
def _fields(row: Sequence[str], width: int) -> List[str]:
    if len(row) != width:
        raise ValueError(f"expected {width} columns, got {len(row)}")
    return [f.strip() for f in row]


def _element_row(row: Sequence[str]) -> LexiconEntry:
    word, lemma, cat, raw, nfnm, nf = _fields(row, 6)
    return LexiconEntry(word, lemma, Category(cat), int(raw), float(nfnm), float(nf))


def _form_row(row: Sequence[str]) -> LexiconEntry:
    word, raw, nf = _fields(row, 3)
    return LexiconEntry(word, None, None, int(raw), 0.0, float(nf))


def _lemma_row(row: Sequence[str]) -> LexiconEntry:
    lemma, cat, raw, nfnm, nf = _fields(row, 5)
    return LexiconEntry(lemma, lemma, Category(cat), int(raw), float(nfnm), float(nf))


def _parse(lines: Iterable[str], row_parser: Callable[[Sequence[str]], LexiconEntry]) -> LexiconStore:
    store = LexiconStore()
    reader = csv.reader(lines, delimiter="\t", quoting=csv.QUOTE_NONE)
    while True:
        # the reader itself rejects some lines (oversized fields, NUL bytes)
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error:
            continue
        if not row:
            continue
        try:
            entry = row_parser(row)
        except ValueError:
            continue
        if entry.word and entry.raw_frequency >= 0:
            store.add(entry)
    return store


def parse_elements(lines: Iterable[str]) -> LexiconStore:
    return _parse(lines, _element_row)


def parse_forms(lines: Iterable[str]) -> LexiconStore:
    return _parse(lines, _form_row)


def parse_lemmas(lines: Iterable[str]) -> LexiconStore:
    return _parse(lines, _lemma_row)


def _load(path: Path, parser: Callable[[Iterable[str]], LexiconStore]) -> LexiconStore:
    with Path(path).open("r", encoding="utf-8", errors="replace", newline="") as fh:
        return parser(fh)


def load_elements(path: Path) -> LexiconStore:
    return _load(path, parse_elements)


def load_forms(path: Path) -> LexiconStore:
    return _load(path, parse_forms)


def load_lemmas(path: Path) -> LexiconStore:
    return _load(path, parse_lemmas)
