# lambda/colmena/puzzles.py
"""
Puzzle generation.

generate_from_letters() filters the word pool against a 7-letter alphabet;
daily_puzzle() derives that alphabet from a pangram drawn with a generator
seeded by the day index, retrying until a puzzle of acceptable size comes out.
"""
from __future__ import annotations

import random
from datetime import datetime, timezone
from enum import Enum
from itertools import combinations
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .errors import BadPuzzle, ExhaustedRetries, NoPangrams, PuzzleError, TooFewWords, TooManyWords
from .model import Puzzle
from .normalize import distinct_letters, is_lowercase_ascii, normalize
from .observability import logger
from .pool import WordPool, default_pool

PUZZLE_LETTERS = 7
MIN_WORDS = 25
MAX_WORDS = 100
MAX_ATTEMPTS = 100

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def today_index(now: Optional[datetime] = None) -> int:
    """Days since the Unix epoch (UTC)."""
    now = now or datetime.now(timezone.utc)
    return (now - _EPOCH).days


def _letters(letters: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    out = tuple(normalize(ch).lower() for ch in letters)
    if len(out) != PUZZLE_LETTERS or len(set(out)) != PUZZLE_LETTERS:
        raise ValueError(f"need {PUZZLE_LETTERS} distinct letters, got {list(letters)!r}")
    if not all(len(ch) == 1 and is_lowercase_ascii(ch) for ch in out):
        raise ValueError(f"letters must be plain a-z, got {list(letters)!r}")
    return out


# -------------------- Generator --------------------
def generate_from_letters(
    letters: Union[str, Sequence[str]],
    pool: Optional[WordPool] = None,
    min_words: int = MIN_WORDS,
    max_words: int = MAX_WORDS,
) -> Puzzle:
    """
    Build the puzzle for `letters` (letters[0] is the center).

    A pool word is kept iff its accent-stripped form contains the center and
    uses nothing outside the letter set. Raises TooFewWords / TooManyWords
    when the kept count falls outside [min_words, max_words].
    """
    letters = _letters(letters)
    pool = pool if pool is not None else default_pool()
    center, others = letters[0], letters[1:]

    # every subset of the letters that holds the center, looked up in the pool's index
    kept: List[Tuple[str, str]] = []
    pangrams: List[str] = []
    for size in range(len(others) + 1):
        for combo in combinations(others, size):
            matches = pool.by_letters.get(frozenset((center,) + combo), ())
            kept.extend(matches)
            if size == len(others):
                pangrams.extend(word for word, _ in matches)

    if len(kept) < min_words:
        logger.debug("Too few words", extra={"letters": letters, "count": len(kept)})
        raise TooFewWords(f"only found {len(kept)} words from {''.join(letters)}",
                          len(kept), letters)
    if len(kept) > max_words:
        logger.debug("Too many words", extra={"letters": letters, "count": len(kept)})
        raise TooManyWords(f"found too many words ({len(kept)}) from {''.join(letters)}",
                           len(kept), letters)

    logger.debug("Puzzle created", extra={
        "letters": letters, "words": len(kept), "pangrams": len(pangrams)})
    return Puzzle.from_words(letters, kept, pangrams)


# -------------------- Daily scheduler --------------------
class Decision(str, Enum):
    ACCEPT = "accept"
    RETRY = "retry"
    FAIL = "fail"


def decide(attempt: int, error: Optional[Exception], max_attempts: int = MAX_ATTEMPTS) -> Decision:
    """Transition after attempt number `attempt` (1-based) ended with `error` (None on success)."""
    if error is None:
        return Decision.ACCEPT
    if isinstance(error, BadPuzzle) and attempt < max_attempts:
        return Decision.RETRY
    return Decision.FAIL


def arrange_letters(pangram: str, rng: random.Random) -> Tuple[str, ...]:
    """Distinct letters of the pangram, shuffled; position 0 becomes the center."""
    # sort before shuffling, set iteration order must not leak into the result
    letters = sorted(distinct_letters(pangram))
    rng.shuffle(letters)
    return tuple(letters)


def daily_puzzle(
    day_index: int,
    pool: Optional[WordPool] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_ATTEMPTS,
    generate: Callable[..., Puzzle] = generate_from_letters,
) -> Puzzle:
    """
    The puzzle for a given day. Same day and same pool, same puzzle.

    The generator is seeded with the day index (pass `rng` to inject another
    one) and its state carries over between attempts.
    """
    if isinstance(day_index, bool) or not isinstance(day_index, int) or day_index < 0:
        raise ValueError(f"day_index must be a non-negative integer, got {day_index!r}")
    pool = pool if pool is not None else default_pool()
    if not pool.pangrams:
        raise NoPangrams("no pangrams to choose from; the word pool is empty or stale")
    rng = rng if rng is not None else random.Random(day_index)

    attempt = 0
    while True:
        attempt += 1
        pangram = rng.choice(pool.pangrams)
        letters = arrange_letters(pangram, rng)
        puzzle, error = None, None
        try:
            puzzle = generate(letters, pool=pool)
        except (PuzzleError, ValueError) as exc:
            error = exc

        decision = decide(attempt, error, max_attempts)
        if decision is Decision.ACCEPT:
            logger.info("Daily puzzle created", extra={
                "day": day_index, "attempts": attempt, "pangram": pangram,
                "letters": letters, "words": len(puzzle.words)})
            return puzzle
        if decision is Decision.FAIL:
            logger.warning("Daily puzzle failed", extra={
                "day": day_index, "attempts": attempt, "error": str(error)})
            raise ExhaustedRetries(
                f"failed to find a puzzle for day {day_index} after {attempt} tries",
                day_index=day_index, attempts=attempt) from error
        logger.debug("Bad puzzle, retrying", extra={
            "day": day_index, "attempt": attempt, "pangram": pangram, "error": str(error)})
