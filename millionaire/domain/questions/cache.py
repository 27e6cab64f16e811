"""Expiring cache for the last live question set."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from millionaire.domain.questions.errors import StorageUnavailable
from millionaire.domain.questions.models import Question
from millionaire.infra.clock import Clock, now_ms
from millionaire.infra.store import KeyValueStore, StoreKeys
from millionaire.obs import metrics as obs_metrics
from millionaire.settings import settings

logger = logging.getLogger(__name__)


class QuestionCache:
	def __init__(
		self,
		store: KeyValueStore,
		*,
		keys: StoreKeys | None = None,
		clock: Clock = now_ms,
		ttl_ms: int | None = None,
	) -> None:
		self._store = store
		self._keys = keys or StoreKeys()
		self._clock = clock
		self.ttl_ms = settings.cache_ttl_seconds * 1000 if ttl_ms is None else ttl_ms

	async def read(self) -> Optional[List[Question]]:
		"""Return the cached set, or None when absent, expired or unreadable."""
		try:
			raw = await self._store.get(self._keys.questions)
			stamp = await self._store.get(self._keys.cache_timestamp)
		except StorageUnavailable:
			logger.warning("question cache unavailable", exc_info=True)
			obs_metrics.inc_store_error("cache_read")
			return None
		if not raw or not stamp:
			return None
		try:
			stored_at = int(stamp)
		except ValueError:
			logger.info("discarding cache with corrupt timestamp")
			return None
		if self._clock() - stored_at > self.ttl_ms:
			return None
		try:
			payload = json.loads(raw)
			if not isinstance(payload, list):
				raise ValueError("cached payload is not a list")
			return [Question.from_payload(item) for item in payload]
		except (ValueError, KeyError, TypeError):
			logger.info("discarding unreadable question cache", exc_info=True)
			return None

	async def write(self, questions: List[Question]) -> None:
		"""Best effort; a failed write is logged and otherwise ignored."""
		payload = json.dumps([q.to_payload() for q in questions], separators=(",", ":"))
		try:
			await self._store.set_many(
				{
					self._keys.questions: payload,
					self._keys.cache_timestamp: str(self._clock()),
				}
			)
		except StorageUnavailable:
			logger.warning("could not cache questions", exc_info=True)
			obs_metrics.inc_store_error("cache_write")
