"""Central registry for Prometheus metrics used across the game engine."""

from __future__ import annotations

from prometheus_client import Counter

QUESTION_ACQUISITIONS = Counter(
	"quizquest_question_acquisitions_total",
	"Question sets handed to game sessions",
	["source"],
)

QUESTION_FETCH_FAILURES = Counter(
	"quizquest_question_fetch_failures_total",
	"Live question fetches that degraded to the fallback bank",
	["reason"],
)

THROTTLE_DECISIONS = Counter(
	"quizquest_throttle_decisions_total",
	"Outcomes of the outbound request throttle",
	["outcome"],
)

STORE_ERRORS = Counter(
	"quizquest_store_errors_total",
	"Key-value store operations that failed and were absorbed",
	["op"],
)


def inc_acquisition(source: str) -> None:
	QUESTION_ACQUISITIONS.labels(source=source).inc()


def inc_fetch_failure(reason: str) -> None:
	QUESTION_FETCH_FAILURES.labels(reason=reason).inc()


def inc_throttle(outcome: str) -> None:
	THROTTLE_DECISIONS.labels(outcome=outcome).inc()


def inc_store_error(op: str) -> None:
	STORE_ERRORS.labels(op=op).inc()
