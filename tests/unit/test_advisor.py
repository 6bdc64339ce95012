"""Unit tests for advice payloads and the advice service client"""

import asyncio
import json
import httpx
import pytest
from finsim_engine.domain.advisor import build_advisor_payload, to_plain
from finsim_engine.domain.exceptions import AdvisorServiceError
from finsim_engine.domain.scenario import add_simulated_loan, branch
from finsim_engine.infrastructure.clients.advisor import AdvisorClient

ANALYSIS = {
    "summary": "Healthy cash buffer, modest debt.",
    "recommendations": ["Raise 401(k) contribution", "Keep cash at 6 months"],
    "score": 78,
}


def _client(handler, max_retries: int = 3) -> AdvisorClient:
    return AdvisorClient(
        base_url="http://advisor.test",
        max_retries=max_retries,
        backoff_base=0,
        transport=httpx.MockTransport(handler),
    )


def test_payload_analysis_mode_is_serializable(sample_state):
    payload = build_advisor_payload(sample_state)

    assert payload["mode"] == "analysis"
    assert "simulated" not in payload
    assert payload["current"]["risk"]["credit_score"] == 743
    assert payload["current"]["state"]["transactions"][0]["date"] == "2023-10-01"
    assert payload["current"]["state"]["transactions"][0]["type"] == "income"
    assert payload["prompt"].startswith("Analyze this current financial state")
    # Round-trips through JSON without custom encoders
    assert json.loads(json.dumps(payload)) == payload


def test_payload_comparison_mode(sample_state):
    simulated = branch(sample_state)
    add_simulated_loan(simulated, 10000, 5.5)

    payload = build_advisor_payload(sample_state, simulated, horizon_months=12)

    assert payload["mode"] == "comparison"
    assert payload["impact"]["total_new_debt_principal"] == 10000
    assert payload["impact"]["net_worth_trend"] == "Down"
    assert len(payload["simulated"]["state"]["loans"]) == 2
    assert "Compare these two financial states." in payload["prompt"]
    json.dumps(payload)


def test_to_plain_leaves_builtins_alone():
    assert to_plain({"a": [1, 2.5, "x", None]}) == {"a": [1, 2.5, "x", None]}


def test_client_returns_analysis():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=ANALYSIS)

    analysis = asyncio.run(_client(handler).analyze({"mode": "analysis"}))

    assert analysis.summary == ANALYSIS["summary"]
    assert analysis.recommendations == ANALYSIS["recommendations"]
    assert analysis.score == 78.0
    assert seen[0].url == "http://advisor.test/analyze"
    assert json.loads(seen[0].content) == {"mode": "analysis"}


def test_client_retries_server_errors():
    responses = [httpx.Response(503), httpx.Response(502), httpx.Response(200, json=ANALYSIS)]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    analysis = asyncio.run(_client(handler).analyze({}))

    assert analysis.score == 78.0
    assert responses == []


def test_client_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500)

    with pytest.raises(AdvisorServiceError):
        asyncio.run(_client(handler, max_retries=3).analyze({}))

    assert len(calls) == 3


def test_client_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, json={"error": "bad payload"})

    with pytest.raises(AdvisorServiceError):
        asyncio.run(_client(handler).analyze({}))

    assert len(calls) == 1


def test_client_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AdvisorServiceError):
        asyncio.run(_client(handler, max_retries=2).analyze({}))


def test_client_malformed_reply():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"summary": "missing fields"})

    with pytest.raises(AdvisorServiceError):
        asyncio.run(_client(handler).analyze({}))
