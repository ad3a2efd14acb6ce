import pytest
import requests

from football_form import sofascore_client
from football_form.constants import SOFASCORE_HEADERS
from football_form.errors import APIError
from football_form.sofascore_client import FetchResult, SofascoreClient, create_session


class MockResponse:
    def __init__(self, status_code=200, json_data=None, raise_json=False):
        self.status_code = status_code
        self._json_data = json_data
        self._raise_json = raise_json

    def json(self):
        if self._raise_json:
            raise ValueError("No JSON object could be decoded")
        return self._json_data


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.urls = []
        self.timeouts = []

    def get(self, url, timeout=None, **kwargs):
        self.urls.append(url)
        self.timeouts.append(timeout)
        if not self._responses:
            raise AssertionError("No more responses configured")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(*responses):
    session = FakeSession(responses)
    client = SofascoreClient("https://api.test/api/v1/", timeout=3.0, session=session)
    return client, session


def test_get_json_success_returns_payload():
    client, session = _client(MockResponse(200, {"events": []}))

    result = client.get_json("team/1/events/last/0")

    assert result.ok
    assert result.data == {"events": []}
    assert session.urls == ["https://api.test/api/v1/team/1/events/last/0"]
    assert session.timeouts == [3.0]


def test_non_2xx_is_failure_with_status():
    client, _ = _client(MockResponse(403, {"error": "forbidden"}))

    result = client.get_json("search/x")

    assert not result.ok
    assert result.reason == "http_403"
    assert result.status_code == 403


def test_network_error_is_failure_not_exception():
    client, _ = _client(requests.exceptions.ConnectionError("boom"))

    result = client.get_json("search/x")

    assert not result.ok
    assert result.reason == "network"


def test_timeout_is_failure():
    client, _ = _client(requests.exceptions.Timeout("slow"))

    assert client.get_json("event/9/statistics").reason == "network"


@pytest.mark.parametrize(
    "response",
    [MockResponse(200, raise_json=True), MockResponse(200, json_data=["not", "an", "object"])],
)
def test_malformed_body_is_parse_failure(response):
    client, _ = _client(response)

    result = client.get_json("search/x")

    assert not result.ok
    assert result.reason == "parse"


def test_search_encodes_team_name():
    client, session = _client(MockResponse(200, {"results": []}))

    client.search("Brighton & Hove/Albion")

    assert session.urls == ["https://api.test/api/v1/search/Brighton%20%26%20Hove%2FAlbion"]


def test_endpoint_paths():
    client, session = _client(MockResponse(200, {}), MockResponse(200, {}))

    client.team_last_events(42)
    client.event_statistics(777)

    assert session.urls == [
        "https://api.test/api/v1/team/42/events/last/0",
        "https://api.test/api/v1/event/777/statistics",
    ]


def test_unwrap_raises_api_error_on_failure():
    client, _ = _client(MockResponse(429, {}))

    with pytest.raises(APIError) as excinfo:
        client.event_statistics(55).unwrap()

    assert excinfo.value.code == "429"
    assert excinfo.value.status_code == 429
    assert excinfo.value.to_dict() == {
        "source": "SofaScore",
        "code": "429",
        "path": "event/55/statistics",
        "details": "http_429",
    }


def test_unwrap_network_failure_has_no_status():
    with pytest.raises(APIError) as excinfo:
        FetchResult.failure("network", path="search/x").unwrap()

    assert excinfo.value.code == "NETWORK"
    assert excinfo.value.status_code is None
    assert "search/x" in str(excinfo.value)


def test_unwrap_returns_data_on_success():
    assert FetchResult.success({"a": 1}).unwrap() == {"a": 1}


def test_session_carries_browser_headers_and_no_retries():
    session = create_session()

    for key, value in SOFASCORE_HEADERS.items():
        assert session.headers[key] == value
    adapter = session.get_adapter("https://api.sofascore.com/api/v1/search/x")
    assert adapter.max_retries.total == 0


def test_default_timeout_comes_from_settings(monkeypatch):
    monkeypatch.setattr(sofascore_client, "SOFASCORE_TIMEOUT_MS", 2500)

    client = SofascoreClient(session=FakeSession([]))

    assert client.timeout == 2.5
