"""Outbound request throttle for the remote trivia source.

Two guards decide whether a live fetch may be attempted: a cooldown deadline
armed after the source rate-limits us, and a request counter that resets once
no request has been made for a full window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from millionaire.domain.questions.errors import StorageUnavailable
from millionaire.infra.clock import Clock, now_ms
from millionaire.infra.store import KeyValueStore, StoreKeys
from millionaire.obs import metrics as obs_metrics
from millionaire.settings import settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ThrottleState:
	cooldown_until_ms: Optional[int]
	request_count: int
	last_request_ms: Optional[int]


def _parse_int(value: Optional[str]) -> Optional[int]:
	if value is None:
		return None
	try:
		return int(value)
	except (TypeError, ValueError):
		return None


class RequestThrottle:
	def __init__(
		self,
		store: KeyValueStore,
		*,
		keys: StoreKeys | None = None,
		clock: Clock = now_ms,
		max_requests: int | None = None,
		window_ms: int | None = None,
		cooldown_ms: int | None = None,
	) -> None:
		self._store = store
		self._keys = keys or StoreKeys()
		self._clock = clock
		self.max_requests = settings.throttle_max_requests if max_requests is None else max_requests
		self.window_ms = settings.throttle_window_seconds * 1000 if window_ms is None else window_ms
		self.cooldown_ms = settings.cooldown_seconds * 1000 if cooldown_ms is None else cooldown_ms

	async def snapshot(self) -> ThrottleState:
		cooldown = await self._store.get(self._keys.cooldown_until)
		count = await self._store.get(self._keys.request_count)
		last = await self._store.get(self._keys.last_request)
		return ThrottleState(
			cooldown_until_ms=_parse_int(cooldown),
			request_count=_parse_int(count) or 0,
			last_request_ms=_parse_int(last),
		)

	async def may_fetch(self) -> bool:
		"""Return True and consume a request slot when a live fetch is allowed."""
		now = self._clock()
		try:
			state = await self.snapshot()
			if state.cooldown_until_ms is not None and state.cooldown_until_ms > now:
				logger.info("remote source in cooldown", extra={"cooldown_until_ms": state.cooldown_until_ms})
				obs_metrics.inc_throttle("cooldown")
				return False

			count = state.request_count
			if state.last_request_ms is not None and now - state.last_request_ms > self.window_ms:
				count = 0

			if count >= self.max_requests:
				logger.info("request budget exhausted", extra={"request_count": count})
				obs_metrics.inc_throttle("budget")
				return False

			await self._store.set_many(
				{
					self._keys.request_count: str(count + 1),
					self._keys.last_request: str(now),
				}
			)
		except StorageUnavailable:
			# Without counters we cannot throttle; let the request through.
			logger.warning("throttle state unavailable, allowing fetch", exc_info=True)
			obs_metrics.inc_store_error("throttle")
			obs_metrics.inc_throttle("unknown")
			return True
		obs_metrics.inc_throttle("allowed")
		return True

	async def enter_cooldown(self) -> None:
		until = self._clock() + self.cooldown_ms
		try:
			await self._store.set(self._keys.cooldown_until, str(until))
		except StorageUnavailable:
			logger.warning("could not persist cooldown", exc_info=True)
			obs_metrics.inc_store_error("cooldown")
			return
		logger.warning("rate limit detected, cooling down", extra={"cooldown_until_ms": until})
