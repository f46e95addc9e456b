# lambda/colmena/model.py
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from .normalize import normalize

MIN_GUESS_LENGTH = 4

WordMap = Mapping[str, FrozenSet[str]]


@dataclass(frozen=True)
class Guess:
    """
    Outcome of checking one entered word.
    - forms:  accented surface forms it matches, e.g. ('papa', 'papá'); empty if rejected
    - reason: None when accepted, else too_short | missing_center | not_in_list
    """
    forms: Tuple[str, ...]
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None


@dataclass(frozen=True)
class Puzzle:
    """
    One generated puzzle.
    - letters:     7 distinct letters, letters[0] is the center letter
    - word_index:  normalized form -> surface forms seen in the pool
    - lemma_index: lemma -> surface forms sharing it
    - pangrams:    surface forms using all 7 letters
    """
    letters: Tuple[str, ...]
    word_index: WordMap
    lemma_index: WordMap
    pangrams: Tuple[str, ...]

    @classmethod
    def from_words(cls, letters: Iterable[str], words: Iterable[Tuple[str, str]],
                   pangrams: Iterable[str]) -> "Puzzle":
        """Build both indices from kept (surface form, lemma) pairs."""
        accents: Dict[str, set] = defaultdict(set)
        forms: Dict[str, set] = defaultdict(set)
        for word, lemma in words:
            accents[normalize(word)].add(word)
            forms[lemma].add(word)
        return cls(
            letters=tuple(letters),
            word_index={k: frozenset(v) for k, v in accents.items()},
            lemma_index={k: frozenset(v) for k, v in forms.items()},
            pangrams=tuple(sorted(set(pangrams))),
        )

    @property
    def center(self) -> str:
        return self.letters[0]

    @property
    def words(self) -> FrozenSet[str]:
        return frozenset(w for forms in self.word_index.values() for w in forms)

    def check(self, guess: str) -> Guess:
        entered = normalize((guess or "").strip()).lower()
        if entered in self.word_index:
            return Guess(tuple(sorted(self.word_index[entered])))
        if len(entered) < MIN_GUESS_LENGTH:
            return Guess((), "too_short")
        if self.center not in entered:
            return Guess((), "missing_center")
        return Guess((), "not_in_list")

    def hints(self) -> Dict[str, Any]:
        """
        Counts used by the hints grid:
          pangrams: how many pangrams there are
          lengths:  first letter -> {word length -> count}
          starts:   first two letters -> count
        """
        lengths: Dict[str, Counter] = defaultdict(Counter)
        starts: Counter = Counter()
        for word in self.words:
            stripped = normalize(word)
            lengths[stripped[0]][len(stripped)] += 1
            starts[stripped[:2]] += 1
        return {
            "pangrams": len(self.pangrams),
            "lengths": {k: dict(sorted(v.items())) for k, v in sorted(lengths.items())},
            "starts": dict(sorted(starts.items())),
        }

    def to_dict(self) -> Dict[str, Any]:
        # lists and sorted keys only, so equal puzzles serialize identically
        return {
            "letters": list(self.letters),
            "word_index": {k: sorted(v) for k, v in sorted(self.word_index.items())},
            "lemma_index": {k: sorted(v) for k, v in sorted(self.lemma_index.items())},
            "pangrams": list(self.pangrams),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Puzzle":
        return cls(
            letters=tuple(data["letters"]),
            word_index={k: frozenset(v) for k, v in data["word_index"].items()},
            lemma_index={k: frozenset(v) for k, v in data["lemma_index"].items()},
            pangrams=tuple(data["pangrams"]),
        )
