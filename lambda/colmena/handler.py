# lambda/colmena/handler.py
from typing import Any, Dict, Optional

from .archive import DynamoArchive
from .errors import PuzzleError
from .model import Puzzle
from .observability import ENV, logger, metrics, record_archive_failure, record_error, record_success, tracer
from .puzzles import daily_puzzle, generate_from_letters, today_index

archive = DynamoArchive()


def _error(kind: str, message: str) -> Dict[str, Any]:
    return {"ok": False, "error": kind, "message": message}


def _parse_day(raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return today_index()
    try:
        day = int(raw)
    except (TypeError, ValueError):
        return None
    return day if day >= 0 else None


@tracer.capture_method
def _daily(day: int) -> Puzzle:
    # Archived puzzles win; a missing day is generated and stored for next time
    try:
        cached = archive.get(day)
    except Exception:
        logger.exception("Failed to read archive", extra={"day": day})
        cached = None
    if cached is not None:
        logger.debug("Archive hit", extra={"day": day})
        return cached

    puzzle = daily_puzzle(day)
    try:
        archive.put(day, puzzle)
    except Exception:
        logger.exception("Failed to persist puzzle", extra={"day": day})
        record_archive_failure(ENV)
    return puzzle


@tracer.capture_method
def _from_letters(letters: str) -> Puzzle:
    return generate_from_letters(letters)


@tracer.capture_lambda_handler
@logger.inject_lambda_context
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event: Dict[str, Any], context):
    """
    {"letters": "acdegor"} -> puzzle for those letters (first one is the center)
    {"day": 20000}         -> daily puzzle for that day index (defaults to today)
    """
    event = event or {}
    try:
        if event.get("letters"):
            kind = "letters"
            try:
                puzzle = _from_letters(str(event["letters"]))
            except ValueError as exc:
                logger.warning("Invalid letters", extra={"letters": event["letters"]})
                record_error("InvalidLetters", ENV)
                return _error("InvalidLetters", str(exc))
            body: Dict[str, Any] = {"ok": True, "puzzle": puzzle.to_dict()}
        else:
            kind = "daily"
            day = _parse_day(event.get("day"))
            if day is None:
                logger.warning("Invalid day", extra={"day": event.get("day")})
                record_error("InvalidDay", ENV)
                return _error("InvalidDay", f"bad day index {event.get('day')!r}")
            puzzle = _daily(day)
            body = {"ok": True, "day": day, "puzzle": puzzle.to_dict()}

        record_success(kind, len(puzzle.words), len(puzzle.pangrams), ENV)
        logger.info("Puzzle served", extra={"kind": kind, "letters": "".join(puzzle.letters)})
        return body

    except PuzzleError as exc:
        logger.warning("Puzzle generation failed", extra={"error": exc.kind, "detail": str(exc)})
        record_error(exc.kind, ENV)
        return _error(exc.kind, str(exc))
    except Exception:
        logger.exception("Unhandled error")
        record_error("Internal", ENV)
        return _error("Internal", "internal error")
