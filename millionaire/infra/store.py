"""Key-value stores backing the question cache and request throttle."""

from __future__ import annotations

import asyncio
from typing import Dict, Mapping, Optional, Protocol

from redis.exceptions import RedisError

from millionaire.domain.questions.errors import StorageUnavailable
from millionaire.settings import settings


class KeyValueStore(Protocol):
	"""String-to-string store addressed by fixed keys."""

	async def get(self, key: str) -> Optional[str]:
		...

	async def set(self, key: str, value: str) -> None:
		...

	async def set_many(self, values: Mapping[str, str]) -> None:
		...


class MemoryStore:
	"""Process-local store; the default when no Redis is configured."""

	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self._data: Dict[str, str] = {}

	async def get(self, key: str) -> Optional[str]:
		async with self._lock:
			return self._data.get(key)

	async def set(self, key: str, value: str) -> None:
		async with self._lock:
			self._data[key] = value

	async def set_many(self, values: Mapping[str, str]) -> None:
		async with self._lock:
			self._data.update(values)

	async def reset(self) -> None:
		async with self._lock:
			self._data.clear()


class RedisStore:
	"""Store on top of redis.asyncio; failures surface as StorageUnavailable."""

	def __init__(self, client) -> None:
		self._client = client

	async def get(self, key: str) -> Optional[str]:
		try:
			value = await self._client.get(key)
		except (RedisError, OSError) as exc:
			raise StorageUnavailable(f"redis get {key} failed: {exc}") from exc
		if isinstance(value, bytes):
			return value.decode("utf-8", errors="replace")
		return value

	async def set(self, key: str, value: str) -> None:
		try:
			await self._client.set(key, value)
		except (RedisError, OSError) as exc:
			raise StorageUnavailable(f"redis set {key} failed: {exc}") from exc

	async def set_many(self, values: Mapping[str, str]) -> None:
		try:
			async with self._client.pipeline(transaction=True) as pipe:
				for key, value in values.items():
					pipe.set(key, value)
				await pipe.execute()
		except (RedisError, OSError) as exc:
			raise StorageUnavailable(f"redis pipeline set failed: {exc}") from exc


class StoreKeys:
	"""The five fixed keys, namespaced by a configurable prefix."""

	def __init__(self, prefix: str | None = None) -> None:
		prefix = settings.store_key_prefix if prefix is None else prefix
		self.questions = f"{prefix}questions_cache"
		self.cache_timestamp = f"{prefix}cache_timestamp"
		self.cooldown_until = f"{prefix}api_cooldown"
		self.request_count = f"{prefix}request_count"
		self.last_request = f"{prefix}last_request"


def build_store(backend: str | None = None) -> KeyValueStore:
	backend = backend or settings.store_backend
	if backend == "redis":
		from millionaire.infra.redis import redis_client

		return RedisStore(redis_client)
	if backend == "memory":
		return MemoryStore()
	raise ValueError(f"unknown store backend {backend!r}")
