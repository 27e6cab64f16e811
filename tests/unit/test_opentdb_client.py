import httpx
import pytest

from millionaire.domain.questions.errors import BadResponse, FetchTimeout, NetworkFailure, RateLimited
from millionaire.domain.questions.opentdb import OpenTriviaClient, fetch_all

BASE_URL = "https://trivia.test/api.php"


def _client(handler) -> OpenTriviaClient:
	http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
	return OpenTriviaClient(http=http, base_url=BASE_URL, request_timeout=1.0)


@pytest.mark.asyncio
async def test_fetch_batch_sends_expected_query(opentdb_payload):
	seen = []

	def handler(request: httpx.Request) -> httpx.Response:
		seen.append(dict(request.url.params))
		return httpx.Response(200, json=opentdb_payload(request.url.params["difficulty"]))

	records = await _client(handler).fetch_batch("medium", 5)
	assert len(records) == 5
	assert records[0].difficulty == "medium"
	assert seen == [{"amount": "5", "difficulty": "medium", "type": "multiple"}]


@pytest.mark.asyncio
async def test_http_429_is_rate_limited():
	client = _client(lambda request: httpx.Response(429))
	with pytest.raises(RateLimited):
		await client.fetch_batch("easy", 5)


@pytest.mark.asyncio
async def test_server_error_is_network_failure():
	client = _client(lambda request: httpx.Response(503))
	with pytest.raises(NetworkFailure) as excinfo:
		await client.fetch_batch("easy", 5)
	assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_non_zero_response_code_is_bad_response(opentdb_payload):
	client = _client(lambda request: httpx.Response(200, json=opentdb_payload("easy", response_code=1)))
	with pytest.raises(BadResponse):
		await client.fetch_batch("easy", 5)


@pytest.mark.asyncio
async def test_short_batch_is_bad_response(opentdb_payload):
	client = _client(lambda request: httpx.Response(200, json=opentdb_payload("easy", size=4)))
	with pytest.raises(BadResponse):
		await client.fetch_batch("easy", 5)


@pytest.mark.asyncio
async def test_unparsable_body_is_bad_response():
	client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
	with pytest.raises(BadResponse):
		await client.fetch_batch("easy", 5)


@pytest.mark.asyncio
async def test_timeout_maps_to_fetch_timeout():
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ReadTimeout("slow", request=request)

	with pytest.raises(FetchTimeout):
		await _client(handler).fetch_batch("hard", 5)


@pytest.mark.asyncio
async def test_connection_error_maps_to_network_failure():
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ConnectError("refused", request=request)

	with pytest.raises(NetworkFailure):
		await _client(handler).fetch_batch("hard", 5)


@pytest.mark.asyncio
async def test_fetch_all_prefers_rate_limit_over_other_errors(source_factory, make_batch):
	source = source_factory(
		{
			"easy": NetworkFailure("down"),
			"medium": make_batch("medium"),
			"hard": RateLimited(),
		}
	)
	with pytest.raises(RateLimited):
		await fetch_all(source, 5)
	assert sorted(call[0] for call in source.calls) == ["easy", "hard", "medium"]


@pytest.mark.asyncio
async def test_fetch_all_keeps_difficulty_order(source_factory):
	batches = await fetch_all(source_factory(), 5)
	assert [batch[0].difficulty for batch in batches] == ["easy", "medium", "hard"]
