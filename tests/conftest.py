import logging
import random
from typing import Dict, List

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

from millionaire.domain.questions.errors import StorageUnavailable
from millionaire.domain.questions.schemas import TriviaRecord
from millionaire.infra.clock import FrozenClock
from millionaire.infra.store import MemoryStore, StoreKeys


def make_record(
	difficulty: str = "easy",
	*,
	question: str = "What is 2 + 2?",
	correct: str = "4",
	incorrect: List[str] | None = None,
	category: str = "Math",
) -> TriviaRecord:
	return TriviaRecord(
		category=category,
		type="multiple",
		difficulty=difficulty,
		question=question,
		correct_answer=correct,
		incorrect_answers=["3", "5", "22"] if incorrect is None else incorrect,
	)


def make_batch(difficulty: str, size: int = 5) -> List[TriviaRecord]:
	return [
		make_record(
			difficulty,
			question=f"{difficulty} question {i} &amp; more",
			correct=f"right {difficulty} {i}",
			incorrect=[f"wrong {difficulty} {i}.{n}" for n in range(3)],
		)
		for i in range(size)
	]


def opentdb_payload(difficulty: str, size: int = 5, response_code: int = 0) -> Dict[str, object]:
	return {
		"response_code": response_code,
		"results": [record.model_dump() for record in make_batch(difficulty, size)],
	}


class FakeSource:
	"""Scripted trivia source; difficulties mapped to batches or exceptions."""

	def __init__(self, script: Dict[str, object] | None = None) -> None:
		self.script = script or {d: make_batch(d) for d in ("easy", "medium", "hard")}
		self.calls: List[tuple[str, int]] = []

	async def fetch_batch(self, difficulty: str, amount: int) -> List[TriviaRecord]:
		self.calls.append((difficulty, amount))
		outcome = self.script[difficulty]
		if isinstance(outcome, BaseException):
			raise outcome
		return list(outcome)  # type: ignore[arg-type]


class BrokenStore:
	"""Store whose every operation fails like an unreachable backend."""

	async def get(self, key: str):
		raise StorageUnavailable("store offline")

	async def set(self, key: str, value: str) -> None:
		raise StorageUnavailable("store offline")

	async def set_many(self, values) -> None:
		raise StorageUnavailable("store offline")


@pytest.fixture
def clock() -> FrozenClock:
	return FrozenClock()


@pytest.fixture
def rng() -> random.Random:
	return random.Random(1234)


@pytest.fixture
def store() -> MemoryStore:
	return MemoryStore()


@pytest.fixture
def keys() -> StoreKeys:
	return StoreKeys("test:")


@pytest_asyncio.fixture
async def fake_redis():
	from millionaire.infra.redis import redis_client, set_redis_client

	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture
def no_sleep():
	delays: List[float] = []

	async def _sleep(seconds: float) -> None:
		delays.append(seconds)

	_sleep.delays = delays  # type: ignore[attr-defined]
	return _sleep


@pytest.fixture(name="make_record")
def make_record_fixture():
	return make_record


@pytest.fixture(name="make_batch")
def make_batch_fixture():
	return make_batch


@pytest.fixture(name="opentdb_payload")
def opentdb_payload_fixture():
	return opentdb_payload


@pytest.fixture
def source_factory():
	return FakeSource


@pytest.fixture
def broken_store() -> BrokenStore:
	return BrokenStore()


@pytest.fixture
def restore_root_logging():
	root = logging.getLogger()
	handlers, level = list(root.handlers), root.level
	yield root
	root.handlers[:] = handlers
	root.setLevel(level)
