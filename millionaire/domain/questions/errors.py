"""Failure taxonomy for question acquisition."""

from __future__ import annotations


class QuestionSourceError(RuntimeError):
	"""Base error for anything that prevents a live question set."""

	reason = "error"

	def __init__(self, message: str | None = None) -> None:
		super().__init__(message or self.reason)


class InvalidRecord(QuestionSourceError):
	"""Raised when a raw trivia record cannot be normalised."""

	reason = "invalid_record"


class RateLimited(QuestionSourceError):
	"""Raised when the remote source signals a rate limit."""

	reason = "rate_limited"


class NetworkFailure(QuestionSourceError):
	reason = "network"

	def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
		super().__init__(message)
		self.status_code = status_code


class FetchTimeout(NetworkFailure):
	reason = "timeout"


class BadResponse(QuestionSourceError):
	"""Raised for non-zero response codes, short batches or unparsable bodies."""

	reason = "bad_response"


class StorageUnavailable(QuestionSourceError):
	"""Raised by the key-value store layer; absorbed by cache and throttle."""

	reason = "storage_unavailable"


class FallbackExhausted(ValueError):
	"""Raised when a fallback bucket holds fewer questions than requested."""
