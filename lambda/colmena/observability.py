# lambda/colmena/observability.py
import os

from aws_lambda_powertools import Logger, Tracer, Metrics
from aws_lambda_powertools.metrics import MetricUnit

SERVICE = "colmena"
ENV = os.getenv("ENV", "dev")

# Service names show up in logs/traces/metrics
logger  = Logger(service=SERVICE)
tracer  = Tracer(service=SERVICE)
metrics = Metrics(namespace="Colmena")


def _dimensions(env: str) -> None:
    metrics.add_dimension(name="service", value=SERVICE)
    metrics.add_dimension(name="env", value=env or "dev")


def record_success(kind: str, word_count: int, pangram_count: int, env: str = ENV):
    """
    Emit business KPIs for a served puzzle:
      - PuzzlesServed: one per successful request, per request kind (daily/letters)
      - PuzzleWords:   size of the served puzzle
      - PuzzlePangrams: how many pangrams it holds
    """
    _dimensions(env)
    metrics.add_metadata(key="kind", value=kind)
    metrics.add_metric(name="PuzzlesServed", value=1, unit=MetricUnit.Count)
    metrics.add_metric(name="PuzzleWords", value=word_count, unit=MetricUnit.Count)
    metrics.add_metric(name="PuzzlePangrams", value=pangram_count, unit=MetricUnit.Count)


def record_error(error_kind: str, env: str = ENV):
    """Emit an error counter for failed generation paths."""
    _dimensions(env)
    metrics.add_metadata(key="error", value=error_kind)
    metrics.add_metric(name="Errors", value=1, unit=MetricUnit.Count)


def record_archive_failure(env: str = ENV):
    _dimensions(env)
    metrics.add_metric(name="ArchiveWriteErrors", value=1, unit=MetricUnit.Count)
