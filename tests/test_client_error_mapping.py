from datetime import datetime, timedelta, timezone

import httpx
import pytest

from bankless_mcp.bankless_api.client import BanklessApiClient
from bankless_mcp.bankless_api.errors import (
    BanklessAuthenticationError,
    BanklessGenericError,
    BanklessRateLimitError,
    BanklessResourceNotFoundError,
    BanklessValidationError,
)
from bankless_mcp.config import BanklessConfig

from _bankless_helpers import TEST_TOKEN, MockResponse, make_client


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_statuses_map_to_authentication(status):
    client, _ = make_client([MockResponse(status, {"message": "bad token"})])
    with pytest.raises(BanklessAuthenticationError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert excinfo.value.message == "bad token"
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_not_found_uses_remote_message_by_default():
    client, _ = make_client([MockResponse(404, {"message": "contract not found"})])
    with pytest.raises(BanklessResourceNotFoundError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert str(excinfo.value) == "contract not found"


@pytest.mark.asyncio
async def test_not_found_prefers_handler_message():
    client, _ = make_client([MockResponse(404, {"message": "nope"})])
    with pytest.raises(BanklessResourceNotFoundError) as excinfo:
        await client.call("GET", "/mcp/chains/base/balance/0xabc", not_found_message="Address not found: 0xabc")
    assert str(excinfo.value) == "Address not found: 0xabc"


@pytest.mark.asyncio
async def test_unprocessable_carries_response_body():
    body = {"message": "unknown method", "errors": [{"field": "method"}]}
    client, _ = make_client([MockResponse(422, body)])
    with pytest.raises(BanklessValidationError) as excinfo:
        await client.call("POST", "/internal/chains/ethereum/contract/read", {"method": "x"})
    assert excinfo.value.detail == body
    assert excinfo.value.message == "unknown method"


@pytest.mark.asyncio
async def test_rate_limit_defaults_to_sixty_second_reset():
    client, _ = make_client([MockResponse(429, {"message": "slow down"})])
    before = datetime.now(timezone.utc)
    with pytest.raises(BanklessRateLimitError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    after = datetime.now(timezone.utc)
    reset_at = excinfo.value.reset_at
    assert reset_at.tzinfo is not None
    assert before + timedelta(seconds=60) <= reset_at <= after + timedelta(seconds=60)


@pytest.mark.asyncio
async def test_rate_limit_honours_numeric_retry_after():
    client, _ = make_client([MockResponse(429, {}, headers={"Retry-After": "5"})])
    before = datetime.now(timezone.utc)
    with pytest.raises(BanklessRateLimitError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    after = datetime.now(timezone.utc)
    assert before + timedelta(seconds=5) <= excinfo.value.reset_at <= after + timedelta(seconds=5)


@pytest.mark.asyncio
@pytest.mark.parametrize("retry_after", ["3600", "99999999999999"])
async def test_rate_limit_caps_large_retry_after(retry_after):
    client, _ = make_client([MockResponse(429, {"message": "slow down"}, headers={"Retry-After": retry_after})])
    before = datetime.now(timezone.utc)
    with pytest.raises(BanklessRateLimitError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    after = datetime.now(timezone.utc)
    assert before <= excinfo.value.reset_at <= after + timedelta(seconds=60)
    assert excinfo.value.message == "slow down"


@pytest.mark.asyncio
async def test_rate_limit_ignores_unparseable_retry_after():
    client, _ = make_client(
        [MockResponse(429, {}, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})]
    )
    before = datetime.now(timezone.utc)
    with pytest.raises(BanklessRateLimitError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert excinfo.value.reset_at >= before + timedelta(seconds=60)


@pytest.mark.asyncio
async def test_server_error_maps_to_generic_with_status():
    client, _ = make_client([MockResponse(500, {"message": "boom"})])
    with pytest.raises(BanklessGenericError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert excinfo.value.status_code == 500
    assert "(500)" in str(excinfo.value)
    assert "boom" in str(excinfo.value)


@pytest.mark.asyncio
async def test_error_without_json_body_uses_reason_phrase():
    client, _ = make_client([MockResponse(502, text="<html>", reason_phrase="Bad Gateway")])
    with pytest.raises(BanklessGenericError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert str(excinfo.value) == "Bankless API Error (502): Bad Gateway"


@pytest.mark.asyncio
async def test_transport_failure_maps_to_generic_with_action():
    client, mock = make_client([httpx.ConnectTimeout("timed out")])
    with pytest.raises(BanklessGenericError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1", action="get contract ABI")
    assert str(excinfo.value) == "Failed to get contract ABI: timed out"
    assert excinfo.value.status_code is None
    assert len(mock.calls) == 1


@pytest.mark.asyncio
async def test_missing_token_fails_before_network(no_env_token):
    client, mock = make_client([MockResponse(200, {})], token=None)
    with pytest.raises(BanklessAuthenticationError) as excinfo:
        await client.call("GET", "/internal/chains/ethereum/get_abi/0x1")
    assert "BANKLESS_API_TOKEN" in str(excinfo.value)
    assert mock.calls == []


@pytest.mark.asyncio
async def test_env_token_is_read_on_every_call(monkeypatch):
    client, mock = make_client([MockResponse(200, {}), MockResponse(200, {})], token=None)
    monkeypatch.setenv("BANKLESS_API_TOKEN", "first")
    await client.call("GET", "/a")
    monkeypatch.setenv("BANKLESS_API_TOKEN", "second")
    await client.call("GET", "/b")
    assert mock.calls[0]["headers"]["X-BANKLESS-TOKEN"] == "first"
    assert mock.calls[1]["headers"]["X-BANKLESS-TOKEN"] == "second"


@pytest.mark.asyncio
async def test_headers_and_body_handling():
    client, mock = make_client([MockResponse(200, {"ok": True}), MockResponse(200, [1, 2])])
    assert await client.call("POST", "/post", {"a": 1}) == {"ok": True}
    assert await client.call("GET", "/get", {"ignored": True}) == [1, 2]

    post_call, get_call = mock.calls
    assert post_call["method"] == "POST"
    assert post_call["json"] == {"a": 1}
    assert post_call["headers"] == {"Content-Type": "application/json", "X-BANKLESS-TOKEN": TEST_TOKEN}
    assert get_call["method"] == "GET"
    assert get_call["json"] is None


@pytest.mark.asyncio
async def test_non_json_success_body_returned_as_text():
    client, _ = make_client([MockResponse(200, text="0xddf252ad")])
    assert await client.call("POST", "/internal/chains/ethereum/contract/build-event-topic", {}) == "0xddf252ad"


@pytest.mark.asyncio
async def test_unsupported_method_rejected():
    client, mock = make_client([])
    with pytest.raises(ValueError):
        await client.call("DELETE", "/x")
    assert mock.calls == []


@pytest.mark.asyncio
async def test_aclose_closes_owned_client_only():
    client, mock = make_client([])
    await client.aclose()
    assert mock.closed is False

    owned = BanklessApiClient(BanklessConfig(api_token=TEST_TOKEN))
    await owned._get_client()
    await owned.aclose()
    assert owned._client is None
