"""Open Trivia Database client."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

import httpx
from pydantic import ValidationError

from millionaire.domain.questions.errors import BadResponse, FetchTimeout, NetworkFailure, RateLimited
from millionaire.domain.questions.models import DIFFICULTIES
from millionaire.domain.questions.schemas import TriviaRecord, TriviaResponse
from millionaire.settings import settings


class TriviaSource(Protocol):
	"""Anything that can hand back one batch of raw records per difficulty."""

	async def fetch_batch(self, difficulty: str, amount: int) -> List[TriviaRecord]:
		...


@dataclass
class OpenTriviaClient(TriviaSource):
	"""Fetches multiple-choice batches; every failure maps onto the error taxonomy."""

	http: httpx.AsyncClient
	base_url: str = field(default_factory=lambda: settings.opentdb_url)
	request_timeout: float = field(default_factory=lambda: settings.request_timeout_seconds)

	async def fetch_batch(self, difficulty: str, amount: int) -> List[TriviaRecord]:
		params = {"amount": amount, "difficulty": difficulty, "type": "multiple"}
		try:
			response = await self.http.get(self.base_url, params=params, timeout=self.request_timeout)
		except httpx.TimeoutException as exc:
			raise FetchTimeout(f"{difficulty} batch timed out") from exc
		except httpx.HTTPError as exc:
			raise NetworkFailure(f"{difficulty} batch failed: {exc}") from exc

		if response.status_code == 429:
			raise RateLimited(f"{difficulty} batch rate limited")
		if response.is_error:
			raise NetworkFailure(
				f"{difficulty} batch returned HTTP {response.status_code}",
				status_code=response.status_code,
			)
		try:
			body = TriviaResponse.model_validate(response.json())
		except (ValueError, ValidationError) as exc:
			raise BadResponse(f"{difficulty} batch body unreadable") from exc
		if not body.ok:
			raise BadResponse(f"{difficulty} batch response_code {body.response_code}")
		if len(body.results) != amount:
			raise BadResponse(f"{difficulty} batch has {len(body.results)} records, expected {amount}")
		return body.results


async def fetch_all(
	source: TriviaSource,
	amount: int,
	difficulties: Sequence[str] = DIFFICULTIES,
) -> List[List[TriviaRecord]]:
	"""Fetch one batch per difficulty concurrently.

	A rate limit on any batch wins over other failures so the caller can arm
	its cooldown.
	"""
	results = await asyncio.gather(
		*(source.fetch_batch(difficulty, amount) for difficulty in difficulties),
		return_exceptions=True,
	)
	errors = [r for r in results if isinstance(r, BaseException)]
	for error in errors:
		if isinstance(error, RateLimited):
			raise error
	if errors:
		raise errors[0]
	return [list(batch) for batch in results]  # type: ignore[arg-type]
