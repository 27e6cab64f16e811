"""Question acquisition: cache, throttle, live fetch, fallback."""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from typing import Awaitable, Callable, List, Optional

import httpx

from millionaire import obs
from millionaire.domain.questions import normalizer
from millionaire.domain.questions.cache import QuestionCache
from millionaire.domain.questions.errors import QuestionSourceError, RateLimited
from millionaire.domain.questions.fallback_bank import FallbackBank, get_bank
from millionaire.domain.questions.models import Acquisition, Question, sort_by_value
from millionaire.domain.questions.opentdb import OpenTriviaClient, TriviaSource, fetch_all
from millionaire.domain.questions.throttle import RequestThrottle
from millionaire.infra.store import KeyValueStore, build_store
from millionaire.obs import logging as obs_logging
from millionaire.obs import metrics as obs_metrics
from millionaire.settings import settings

logger = logging.getLogger(__name__)

DEFAULT_AMOUNT = 15

Sleeper = Callable[[float], Awaitable[None]]


class QuestionProvider:
	"""Always hands back a playable question set; never raises to its caller."""

	def __init__(
		self,
		*,
		cache: QuestionCache,
		throttle: RequestThrottle,
		source: TriviaSource,
		bank: FallbackBank | None = None,
		rng: random.Random | None = None,
		sleep: Sleeper = asyncio.sleep,
		batch_size: int | None = None,
		jitter_ms: tuple[int, int] | None = None,
		http: httpx.AsyncClient | None = None,
	) -> None:
		self._cache = cache
		self._throttle = throttle
		self._source = source
		self._bank = bank or get_bank()
		self._rng = rng or random.Random()
		self._sleep = sleep
		self.batch_size = settings.batch_size if batch_size is None else batch_size
		self.jitter_ms = jitter_ms or (settings.fetch_jitter_ms_min, settings.fetch_jitter_ms_max)
		# Only a client handed over here is closed by aclose()
		self._http = http

	async def aclose(self) -> None:
		if self._http is not None:
			await self._http.aclose()

	async def acquire(self, amount: int = DEFAULT_AMOUNT) -> Acquisition:
		tokens = obs_logging.bind_context(acquisition_id=uuid.uuid4().hex[:12])
		try:
			result = await self._acquire(amount)
		finally:
			obs_logging.reset_context(tokens)
		obs_metrics.inc_acquisition(result.source)
		return result

	async def _acquire(self, amount: int) -> Acquisition:
		cached = await self._cache.read()
		if cached:
			logger.info("using cached questions", extra={"count": len(cached)})
			return Acquisition(questions=cached, source="cache")

		# Cache strictly first: a hit must not consume a request slot.
		if not await self._throttle.may_fetch():
			return self._fallback(amount, "throttled")

		try:
			questions = await self._fetch_live()
		except RateLimited:
			await self._throttle.enter_cooldown()
			return self._fallback(amount, RateLimited.reason)
		except QuestionSourceError as exc:
			logger.info("live questions unavailable", extra={"reason": exc.reason, "detail": str(exc)})
			return self._fallback(amount, exc.reason)
		except Exception:
			logger.exception("unexpected error fetching questions")
			return self._fallback(amount, "unexpected")

		await self._cache.write(questions)
		logger.info("fetched live questions", extra={"count": len(questions)})
		return Acquisition(questions=questions, source="live")

	async def _fetch_live(self) -> List[Question]:
		low, high = self.jitter_ms
		# Desynchronise clients that start at the same moment
		await self._sleep(self._rng.uniform(low, high) / 1000.0)
		batches = await fetch_all(self._source, self.batch_size)
		questions = normalizer.normalize_batches(batches, self._rng)
		return sort_by_value(questions)

	def _fallback(self, amount: int, reason: str) -> Acquisition:
		obs_metrics.inc_fetch_failure(reason)
		logger.info("using fallback questions", extra={"reason": reason, "count": amount})
		return Acquisition(
			questions=self._bank.draw(amount, rng=self._rng),
			source="fallback",
			reason=reason,
		)


_PROVIDER: Optional[QuestionProvider] = None


def build_provider(
	http: httpx.AsyncClient | None = None,
	store: KeyValueStore | None = None,
) -> QuestionProvider:
	"""Wire a provider from settings; one per process."""
	store = store or build_store()
	owned = httpx.AsyncClient() if http is None else None
	return QuestionProvider(
		cache=QuestionCache(store),
		throttle=RequestThrottle(store),
		source=OpenTriviaClient(http=http or owned),
		http=owned,
	)


def get_provider() -> QuestionProvider:
	global _PROVIDER
	if _PROVIDER is None:
		obs.init()
		_PROVIDER = build_provider()
	return _PROVIDER


def set_provider(provider: Optional[QuestionProvider]) -> None:
	global _PROVIDER
	_PROVIDER = provider
