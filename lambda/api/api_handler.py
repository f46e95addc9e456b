# api_handler.py
import json

from aws_lambda_powertools import Logger

from colmena.archive import DynamoArchive

logger = Logger(service="colmena-api")
archive = DynamoArchive()


def _response(event, status: int, body: dict) -> dict:
    return {
        "statusCode": status,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": (event.get("headers") or {}).get("origin", "*"),
            "Access-Control-Allow-Credentials": "true",
        },
        "body": json.dumps(body, ensure_ascii=False),
    }


def handler(event, context):
    """GET ?day=N -> archived puzzle for day index N."""
    event = event or {}
    raw = (event.get("queryStringParameters") or {}).get("day")
    try:
        day = int(raw)
        if day < 0:
            raise ValueError(raw)
    except (TypeError, ValueError):
        return _response(event, 400, {"message": "day must be a non-negative integer"})

    try:
        puzzle = archive.get(day)
    except Exception:
        logger.exception("API error")
        return _response(event, 500, {"message": "Internal Server Error"})

    if puzzle is None:
        return _response(event, 404, {"message": f"no puzzle for day {day}"})
    return _response(event, 200, {"day": day, "puzzle": puzzle.to_dict()})
