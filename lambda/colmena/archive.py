# lambda/colmena/archive.py
"""
Persisted puzzles keyed by day index.

Two backends: a JSON file for batch generation and a DynamoDB table the
Lambda handlers read and fill. Both store the puzzle's to_dict() payload.
"""
from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import boto3

from .errors import PuzzleError
from .model import Puzzle
from .observability import logger

Puzzles = Dict[int, Puzzle]

DDB_TABLE_NAME = os.getenv("DDB_TABLE", "colmena-Puzzles")


# -------------------- JSON file --------------------
def load_archive(path: Path) -> Puzzles:
    """Read the archive; a missing file is an empty archive."""
    path = Path(path)
    if not path.exists():
        logger.info("No archive yet", extra={"path": str(path)})
        return {}
    with path.open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    return {int(day): Puzzle.from_dict(p) for day, p in raw.items()}


def save_archive(path: Path, puzzles: Puzzles) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {str(day): puzzles[day].to_dict() for day in sorted(puzzles)}
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, ensure_ascii=False, sort_keys=True)
    tmp.replace(path)


def fill_archive(
    puzzles: Puzzles,
    days: Iterable[int],
    generate: Callable[[int], Puzzle],
) -> Tuple[Puzzles, List[int], Dict[int, str]]:
    """
    Merge newly generated days into `puzzles` without touching existing ones.

    Returns (merged archive, days generated, failed day -> error kind).
    A day that fails does not stop the batch.
    """
    merged = dict(puzzles)
    generated: List[int] = []
    failed: Dict[int, str] = {}
    for day in days:
        if day in merged:
            continue
        try:
            merged[day] = generate(day)
        except PuzzleError as exc:
            logger.warning("Day not generated", extra={"day": day, "error": exc.kind})
            failed[day] = exc.kind
            continue
        generated.append(day)
    return merged, generated, failed


# -------------------- DynamoDB --------------------
class DynamoArchive:
    """
    One item per day:
      pk = DAY#<day>, sk = PUZZLE, payload = puzzle JSON string
    """

    def __init__(self, table=None, table_name: str = DDB_TABLE_NAME):
        self._table = table
        self.table_name = table_name

    @property
    def table(self):
        # resolved lazily so importing the module needs no AWS region/credentials
        if self._table is None:
            self._table = boto3.resource("dynamodb").Table(self.table_name)
        return self._table

    @staticmethod
    def key(day: int) -> Dict[str, str]:
        return {"pk": f"DAY#{day}", "sk": "PUZZLE"}

    def get(self, day: int) -> Optional[Puzzle]:
        resp = self.table.get_item(Key=self.key(day), ConsistentRead=True)
        item = resp.get("Item")
        if not item:
            return None
        return Puzzle.from_dict(json.loads(item["payload"]))

    def put(self, day: int, puzzle: Puzzle) -> None:
        ts = datetime.now(timezone.utc).isoformat()
        self.table.put_item(
            Item={
                **self.key(day),
                "day": day,
                "created_at": ts,
                "letters": "".join(puzzle.letters),
                "word_count": len(puzzle.words),
                "payload": json.dumps(puzzle.to_dict(), ensure_ascii=False, sort_keys=True),
            }
        )
