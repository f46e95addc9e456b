# lambda/colmena/pool.py
from __future__ import annotations

import gzip
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from .admissibility import RULES_VERSION, Rule, check
from .corpus import LexiconEntry, LexiconStore
from .errors import StaleWordPool
from .normalize import distinct_letters, is_lowercase_ascii, normalize
from .observability import logger

ARTIFACT_FORMAT = "colmena-word-pool"
# Corpus placeholder for "lemma not known"; it can never anchor a fallback.
UNKNOWN_LEMMA = "*"


# -------------------- Data types --------------------
@dataclass(frozen=True)
class WordPool:
    """
    Compiled word pool, shared read-only by every generator call.
    - words:    sorted (surface word, governing lemma) pairs
    - pangrams: sorted normalized words usable as puzzle seeds
    """
    words: Tuple[Tuple[str, str], ...]
    pangrams: Tuple[str, ...]
    rules_version: int = RULES_VERSION
    # distinct normalized letters -> words spelled with exactly those letters
    by_letters: Mapping[FrozenSet[str], Tuple[Tuple[str, str], ...]] = field(
        init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[FrozenSet[str], List[Tuple[str, str]]] = {}
        for word, lemma in self.words:
            index.setdefault(distinct_letters(word), []).append((word, lemma))
        object.__setattr__(self, "by_letters", {k: tuple(v) for k, v in index.items()})

    @classmethod
    def from_iterables(cls, words: Iterable[Tuple[str, str]], pangrams: Iterable[str],
                       rules_version: int = RULES_VERSION) -> "WordPool":
        return cls(tuple(sorted(set(words))), tuple(sorted(set(pangrams))), rules_version)

    def __len__(self) -> int:
        return len(self.words)


# -------------------- Builder --------------------
def can_anchor(lemma: Optional[str]) -> bool:
    """A lemma may only anchor a fallback if it is a plain lowercase word."""
    if not lemma or lemma == UNKNOWN_LEMMA:
        return False
    return is_lowercase_ascii(normalize(lemma))


def _lemma_frequency(lemma: str, store: LexiconStore, lemmas: Optional[LexiconStore]) -> Optional[int]:
    if lemmas is not None and lemma in lemmas:
        return lemmas.frequency(lemma)
    return store.frequency(lemma)


def _admit(entry: LexiconEntry, store: LexiconStore,
           lemmas: Optional[LexiconStore]) -> Tuple[bool, bool, bool]:
    """(admissible, common pangram, admitted through the lemma)"""
    admissible, pangram = check(entry.word, entry.lemma, entry.category,
                                entry.raw_frequency).as_tuple()
    if admissible:
        return True, pangram, False
    if not can_anchor(entry.lemma):
        return False, False, False
    freq = _lemma_frequency(entry.lemma, store, lemmas)
    if freq is None:
        return False, False, False
    # inflected forms ride on their lemma's frequency but never seed a puzzle
    admissible, _ = check(entry.word, entry.lemma, entry.category, freq).as_tuple()
    return admissible, False, admissible


def build_pool(store: LexiconStore, lemmas: Optional[LexiconStore] = None) -> WordPool:
    """
    Filter every entry of the store into the word pool.

    Entries failing the direct check get a second chance with their lemma's
    frequency (looked up in the lemma table when one is given, else in the
    store itself), so rare conjugations of common verbs still make it in.
    """
    words: Set[Tuple[str, str]] = set()
    pangrams: Set[str] = set()
    fallback = 0
    for entry in store:
        admissible, pangram, via_lemma = _admit(entry, store, lemmas)
        if not admissible:
            continue
        fallback += via_lemma
        governing = entry.lemma if can_anchor(entry.lemma) else entry.word
        words.add((entry.word, governing))
        if pangram:
            pangrams.add(normalize(entry.word))

    pool = WordPool.from_iterables(words, pangrams)
    logger.info("Word pool built", extra={
        "entries": len(store), "words": len(pool.words),
        "via_lemma": fallback, "pangrams": len(pool.pangrams),
    })
    return pool


def omitted_words(store: LexiconStore, pool: WordPool, below: int,
                  limit: int = 10) -> List[LexiconEntry]:
    """
    Words held out only by the frequency floor: they pass every other rule,
    are not in the pool (not even through their lemma) and are rarer than `below`.
    Most frequent first, to help choosing the floor.
    """
    included = {w for w, _ in pool.words}
    out = []
    for entry in store:
        if entry.word in included or entry.raw_frequency >= below:
            continue
        verdict = check(entry.word, entry.lemma, entry.category, entry.raw_frequency,
                        short_circuit=False)
        if verdict.failures == (Rule.TOO_INFREQUENT,):
            out.append(entry)
    out.sort(key=lambda e: (-e.raw_frequency, e.word))
    return out[:limit]


# -------------------- Compiled artifact --------------------
def _open(path: Path, mode: str) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, mode + "t", encoding="utf-8")
    return path.open(mode, encoding="utf-8")


def save_pool(pool: WordPool, path: Path) -> None:
    """Write the pool as JSON lines: a header, then word lines, then pangram lines."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    header = {
        "format": ARTIFACT_FORMAT,
        "rules_version": pool.rules_version,
        "words": len(pool.words),
        "pangrams": len(pool.pangrams),
    }
    with _open(path, "w") as fh:
        fh.write(json.dumps(header) + "\n")
        for word, lemma in pool.words:
            fh.write(json.dumps({"word": word, "lemma": lemma}, ensure_ascii=False) + "\n")
        for pangram in pool.pangrams:
            fh.write(json.dumps({"pangram": pangram}) + "\n")


def load_pool(path: Path) -> WordPool:
    path = Path(path)
    words: List[Tuple[str, str]] = []
    pangrams: List[str] = []
    with _open(path, "r") as fh:
        first = fh.readline()
        try:
            header = json.loads(first) if first.strip() else {}
        except json.JSONDecodeError:
            header = {}
        if header.get("format") != ARTIFACT_FORMAT:
            raise StaleWordPool(f"{path} is not a compiled word pool")
        if header.get("rules_version") != RULES_VERSION:
            raise StaleWordPool(
                f"{path} was built with rules v{header.get('rules_version')}, "
                f"expected v{RULES_VERSION}; rebuild it")
        for line in fh:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            if "pangram" in obj:
                pangrams.append(obj["pangram"])
            else:
                words.append((obj["word"], obj["lemma"]))
    return WordPool.from_iterables(words, pangrams)


# -------------------- Shared default pool --------------------
# Looked up in order: $COLMENA_WORD_POOL, the compiled artifact, the small dev pool.
_POOL_CACHE: Optional[WordPool] = None


def _candidates() -> List[Path]:
    here = Path(__file__).parent / "data"
    env = os.getenv("COLMENA_WORD_POOL")
    paths = [Path(env)] if env else []
    return paths + [here / "word_pool.jsonl.gz", here / "word_pool_small.jsonl"]


def default_pool() -> WordPool:
    """Load the compiled pool once and hand out the same instance afterwards."""
    global _POOL_CACHE
    if _POOL_CACHE is not None:
        return _POOL_CACHE

    for path in _candidates():
        if path.exists():
            _POOL_CACHE = load_pool(path)
            logger.info("Word pool loaded", extra={
                "path": str(path), "words": len(_POOL_CACHE.words),
                "pangrams": len(_POOL_CACHE.pangrams),
            })
            return _POOL_CACHE

    # no artifact at all: generation will fail with NoPangrams
    logger.warning("No compiled word pool found", extra={"searched": [str(p) for p in _candidates()]})
    _POOL_CACHE = WordPool((), ())
    return _POOL_CACHE


def set_default_pool(pool: Optional[WordPool]) -> None:
    """Swap the shared pool (fixtures, warm starts). None forces a reload."""
    global _POOL_CACHE
    _POOL_CACHE = pool
