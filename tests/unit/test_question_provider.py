import httpx
import pytest

from millionaire.domain.questions.cache import QuestionCache
from millionaire.domain.questions.errors import BadResponse, FetchTimeout, RateLimited
from millionaire.domain.questions.fallback_bank import get_bank, get_random_questions
from millionaire.domain.questions.opentdb import OpenTriviaClient
from millionaire.domain.questions.provider import QuestionProvider, build_provider
from millionaire.domain.questions.throttle import RequestThrottle


@pytest.fixture
def cache(store, keys, clock):
	return QuestionCache(store, keys=keys, clock=clock)


@pytest.fixture
def throttle(store, keys, clock):
	return RequestThrottle(store, keys=keys, clock=clock)


@pytest.fixture
def make_provider(cache, throttle, rng, no_sleep):
	def _make(source) -> QuestionProvider:
		return QuestionProvider(cache=cache, throttle=throttle, source=source, rng=rng, sleep=no_sleep)

	return _make


def _assert_fallback_set(questions):
	assert len(questions) == 15
	bank_ids = {q.id for q in get_bank().all()}
	assert {q.id for q in questions} <= bank_ids
	assert len({q.id for q in questions}) == 15
	values = [q.value for q in questions]
	assert values == sorted(values)


@pytest.mark.asyncio
async def test_live_fetch_is_normalised_sorted_and_cached(make_provider, source_factory, cache, throttle, no_sleep):
	source = source_factory()
	result = await make_provider(source).acquire()

	assert result.source == "live"
	assert len(result.questions) == 15
	values = [q.value for q in result.questions]
	assert values == sorted(values)
	assert values[0] == 100 and values[-1] == 1000000
	assert all(q.options[q.correct_idx].startswith("right") for q in result.questions)
	assert "&amp;" not in result.questions[0].text
	assert sorted(call[0] for call in source.calls) == ["easy", "hard", "medium"]
	assert await cache.read() == result.questions
	assert (await throttle.snapshot()).request_count == 1
	assert len(no_sleep.delays) == 1
	assert 0.1 <= no_sleep.delays[0] <= 0.7


@pytest.mark.asyncio
async def test_rate_limit_falls_back_and_cools_down(make_provider, source_factory, make_batch, throttle, cache, clock):
	source = source_factory({"easy": make_batch("easy"), "medium": RateLimited(), "hard": make_batch("hard")})
	result = await make_provider(source).acquire()

	assert result.source == "fallback"
	assert result.reason == "rate_limited"
	_assert_fallback_set(result.questions)
	assert await cache.read() is None

	clock.advance(minutes=29)
	assert not await throttle.may_fetch()
	clock.advance(minutes=1, ms=1)
	assert await throttle.may_fetch()


@pytest.mark.asyncio
async def test_fresh_cache_is_returned_without_network(make_provider, source_factory, cache, throttle, clock):
	cached = get_random_questions(15, seed=11)
	await cache.write(cached)
	clock.advance(hours=1)
	source = source_factory()

	result = await make_provider(source).acquire()

	assert result.source == "cache"
	assert result.questions == cached
	assert source.calls == []
	assert (await throttle.snapshot()).request_count == 0


@pytest.mark.asyncio
async def test_expired_cache_triggers_live_fetch(make_provider, source_factory, cache, clock):
	await cache.write(get_random_questions(15, seed=11))
	clock.advance(hours=25)
	source = source_factory()

	result = await make_provider(source).acquire()

	assert result.source == "live"
	assert len(source.calls) == 3


@pytest.mark.asyncio
async def test_throttled_requests_use_fallback_without_network(make_provider, source_factory, store, keys, clock):
	await store.set_many({keys.request_count: "5", keys.last_request: str(clock())})
	source = source_factory()

	result = await make_provider(source).acquire()

	assert result.source == "fallback"
	assert result.reason == "throttled"
	assert source.calls == []
	_assert_fallback_set(result.questions)


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [BadResponse("response_code 1"), FetchTimeout("slow")])
async def test_source_failures_fall_back_without_cooldown(make_provider, source_factory, make_batch, throttle, error):
	source = source_factory({"easy": make_batch("easy"), "medium": make_batch("medium"), "hard": error})
	result = await make_provider(source).acquire()

	assert result.source == "fallback"
	assert result.reason == error.reason
	_assert_fallback_set(result.questions)
	assert (await throttle.snapshot()).cooldown_until_ms is None


@pytest.mark.asyncio
async def test_one_bad_record_abandons_live_set(make_provider, source_factory, make_batch, make_record, cache):
	hard = make_batch("hard")
	hard[4] = make_record("hard", incorrect=["a", "b"])
	source = source_factory({"easy": make_batch("easy"), "medium": make_batch("medium"), "hard": hard})

	result = await make_provider(source).acquire()

	assert result.source == "fallback"
	assert result.reason == "invalid_record"
	assert all(not q.text.startswith("easy question") for q in result.questions)
	assert await cache.read() is None


@pytest.mark.asyncio
async def test_unexpected_errors_never_escape(make_provider, source_factory, make_batch):
	source = source_factory({"easy": make_batch("easy"), "medium": KeyError("boom"), "hard": make_batch("hard")})
	result = await make_provider(source).acquire()
	assert result.source == "fallback"
	assert result.reason == "unexpected"
	_assert_fallback_set(result.questions)


@pytest.mark.asyncio
async def test_unavailable_store_still_serves_live_questions(broken_store, keys, clock, rng, no_sleep, source_factory):
	provider = QuestionProvider(
		cache=QuestionCache(broken_store, keys=keys, clock=clock),
		throttle=RequestThrottle(broken_store, keys=keys, clock=clock),
		source=source_factory(),
		rng=rng,
		sleep=no_sleep,
	)
	result = await provider.acquire()
	assert result.source == "live"
	assert len(result) == 15


@pytest.mark.asyncio
async def test_http_429_end_to_end(store, keys, clock, rng, no_sleep, opentdb_payload):
	def handler(request: httpx.Request) -> httpx.Response:
		if request.url.params["difficulty"] == "hard":
			return httpx.Response(429)
		return httpx.Response(200, json=opentdb_payload(request.url.params["difficulty"]))

	http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
	throttle = RequestThrottle(store, keys=keys, clock=clock)
	provider = QuestionProvider(
		cache=QuestionCache(store, keys=keys, clock=clock),
		throttle=throttle,
		source=OpenTriviaClient(http=http, base_url="https://trivia.test/api.php"),
		rng=rng,
		sleep=no_sleep,
	)

	result = await provider.acquire()

	assert result.source == "fallback"
	assert len(result) == 15
	assert not await throttle.may_fetch()
	await http.aclose()


@pytest.mark.asyncio
async def test_build_provider_wires_redis_store(fake_redis, opentdb_payload, monkeypatch):
	from millionaire.infra.store import RedisStore, StoreKeys

	def handler(request: httpx.Request) -> httpx.Response:
		return httpx.Response(200, json=opentdb_payload(request.url.params["difficulty"]))

	http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
	provider = build_provider(http=http, store=RedisStore(fake_redis))

	async def _no_sleep(_seconds: float) -> None:
		return None

	monkeypatch.setattr(provider, "_sleep", _no_sleep)
	result = await provider.acquire()

	assert result.source == "live"
	assert await fake_redis.get(StoreKeys().request_count) == "1"
	assert (await provider.acquire()).source == "cache"
	await http.aclose()


def test_provider_singleton_can_be_swapped(make_provider, source_factory):
	from millionaire.domain.questions.provider import get_provider, set_provider

	custom = make_provider(source_factory())
	set_provider(custom)
	try:
		assert get_provider() is custom
	finally:
		set_provider(None)


@pytest.mark.asyncio
async def test_oversized_fallback_request_is_capped(make_provider, source_factory, store, keys, clock):
	await store.set_many({keys.request_count: "5", keys.last_request: str(clock())})
	provider = make_provider(source_factory())

	result = await provider.acquire(100)

	assert result.source == "fallback"
	assert result.reason == "throttled"
	# 33 easy, 29 of the 33 medium asked for, 34 hard
	assert len(result) == 96
	assert len({q.id for q in result.questions}) == 96
	assert (await provider.acquire(-3)).questions == []


@pytest.mark.asyncio
async def test_aclose_closes_only_the_owned_client(store):
	provider = build_provider(store=store)
	owned = provider._http
	assert owned is not None
	await provider.aclose()
	assert owned.is_closed

	external = httpx.AsyncClient()
	shared = build_provider(http=external, store=store)
	await shared.aclose()
	assert not external.is_closed
	await external.aclose()


@pytest.mark.asyncio
async def test_default_provider_bootstraps_logging(monkeypatch, restore_root_logging):
	import logging

	from millionaire import obs
	from millionaire.domain.questions.provider import get_provider, set_provider
	from millionaire.obs.logging import JSONLogFormatter

	monkeypatch.setattr(obs, "_initialised", False)
	set_provider(None)
	try:
		provider = get_provider()
		assert get_provider() is provider
		assert any(isinstance(h.formatter, JSONLogFormatter) for h in logging.getLogger().handlers)
		await provider.aclose()
	finally:
		set_provider(None)
