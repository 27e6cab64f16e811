from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS


def now_ms() -> int:
	"""Wall-clock epoch milliseconds."""
	return int(time.time() * 1000)


class FrozenClock:
	"""Manually advanced clock for deterministic tests and replays."""

	def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
		self.now = start_ms

	def __call__(self) -> int:
		return self.now

	def advance(self, *, ms: int = 0, minutes: float = 0, hours: float = 0) -> int:
		self.now += int(ms + minutes * MINUTE_MS + hours * HOUR_MS)
		return self.now
