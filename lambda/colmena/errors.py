# lambda/colmena/errors.py
from typing import Optional, Sequence


class PuzzleError(Exception):
    """Base for every typed failure surfaced to callers."""
    kind = "PuzzleError"


class BadPuzzle(PuzzleError):
    """The letters produced a puzzle outside the size bounds; another letter set may work."""
    kind = "BadPuzzle"

    def __init__(self, message: str, count: int, letters: Sequence[str]):
        super().__init__(message)
        self.count = count
        self.letters = tuple(letters)


class TooFewWords(BadPuzzle):
    kind = "TooFewWords"


class TooManyWords(BadPuzzle):
    kind = "TooManyWords"


class NoPangrams(PuzzleError):
    kind = "NoPangrams"


class ExhaustedRetries(PuzzleError):
    kind = "ExhaustedRetries"

    def __init__(self, message: str, day_index: Optional[int] = None, attempts: int = 0):
        super().__init__(message)
        self.day_index = day_index
        self.attempts = attempts


class StaleWordPool(PuzzleError):
    """Compiled pool was built with different admissibility rules (or is not a pool at all)."""
    kind = "StaleWordPool"
