"""Tests for the classify-query endpoint — status codes, bodies, CORS headers."""

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import FakeClassifier, RecordingTransport, chat_completion
from querydesk.adapters.llm.gateway_adapter import GatewayClassifierAdapter
from querydesk.infrastructure.api.dependencies import get_classifier
from querydesk.main import create_app

URL = "/functions/classify-query"


def _client(classifier) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_classifier] = lambda: classifier
    return TestClient(app)


def _gateway_client(transport: RecordingTransport, api_key: str = "test-key") -> TestClient:
    adapter = GatewayClassifierAdapter(
        api_key=api_key,
        base_url="https://gateway.test/v1",
        http_client=transport.client(),
    )
    return _client(adapter)


def _assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == (
        "authorization, x-client-info, apikey, content-type"
    )


# ─── Preflight ──────────────────────────────────────────────────────


def test_options_returns_cors_without_classifying():
    classifier = FakeClassifier()
    response = _client(classifier).options(URL)
    assert response.status_code == 204
    assert response.content == b""
    _assert_cors(response)
    assert classifier.calls == []


@pytest.mark.parametrize(
    "requested_headers",
    ["content-type", "authorization, x-client-info, apikey, content-type, x-supabase-api-version"],
)
def test_browser_preflight_is_answered_by_route(requested_headers):
    classifier = FakeClassifier()
    response = _client(classifier).options(URL, headers={
        "Origin": "https://dashboard.example.com",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": requested_headers,
    })
    assert response.status_code == 204
    assert response.content == b""
    _assert_cors(response)
    assert classifier.calls == []


def test_post_with_origin_keeps_fixed_cors_headers():
    response = _client(FakeClassifier()).post(
        URL, json={"queryText": "hello"}, headers={"Origin": "https://dashboard.example.com"},
    )
    assert response.status_code == 200
    _assert_cors(response)


# ─── Success ────────────────────────────────────────────────────────


def test_fenced_reply_returns_unwrapped_object():
    transport = RecordingTransport(httpx.Response(200, json=chat_completion(
        '```json\n{"category":"Billing","priority":"High","sentiment":"Negative","keyPhrases":["refund"]}\n```'
    )))
    response = _gateway_client(transport).post(URL, json={"queryText": "Refund my double charge"})
    assert response.status_code == 200
    assert response.json() == {
        "category": "Billing",
        "priority": "High",
        "sentiment": "Negative",
        "keyPhrases": ["refund"],
    }
    _assert_cors(response)


# ─── Input validation ───────────────────────────────────────────────


@pytest.mark.parametrize(
    "payload",
    [{}, {"queryText": ""}, {"queryText": "   "}, {"queryText": 12}, {"queryText": None}, ["x"]],
)
def test_bad_input_is_400_without_upstream_call(payload):
    transport = RecordingTransport(httpx.Response(200, json=chat_completion("{}")))
    response = _gateway_client(transport).post(URL, json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Query text is required"}
    _assert_cors(response)
    assert transport.requests == []


def test_non_json_body_is_400():
    classifier = FakeClassifier()
    response = _client(classifier).post(
        URL, content=b"queryText=hello", headers={"content-type": "text/plain"},
    )
    assert response.status_code == 400
    assert classifier.calls == []


def test_missing_api_key_makes_no_network_call():
    transport = RecordingTransport(httpx.Response(200, json=chat_completion("{}")))
    response = _gateway_client(transport, api_key="").post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI service not configured"}
    assert transport.requests == []


# ─── Upstream failures ──────────────────────────────────────────────


@pytest.mark.parametrize("body", [{"error": "slow"}, {}, {"choices": []}])
def test_upstream_429_passes_through(body):
    transport = RecordingTransport(httpx.Response(429, json=body))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again later."}
    _assert_cors(response)


def test_upstream_402_passes_through():
    transport = RecordingTransport(httpx.Response(402, json={"error": "credits"}))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 402
    assert response.json() == {"error": "AI service payment required. Please add credits."}


def test_upstream_other_error_is_500():
    transport = RecordingTransport(httpx.Response(503, json={"error": "down"}))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI classification failed"}


def test_upstream_unreachable_is_500():
    transport = RecordingTransport(error=httpx.ConnectError("connection refused"))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI service unavailable"}


def test_no_content_is_invalid_ai_response():
    transport = RecordingTransport(httpx.Response(200, json=chat_completion(None)))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Invalid AI response"}


def test_prose_reply_is_malformed():
    transport = RecordingTransport(httpx.Response(200, json=chat_completion("Sure, here it is: not json")))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse classification result"}


def test_unexpected_error_message_is_returned():
    classifier = FakeClassifier(error=RuntimeError("something odd"))
    response = _client(classifier).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "something odd"}
    _assert_cors(response)


def test_nan_reply_is_malformed_json_error():
    transport = RecordingTransport(httpx.Response(200, json=chat_completion('{"category": NaN}')))
    response = _gateway_client(transport).post(URL, json={"queryText": "hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse classification result"}
    _assert_cors(response)
