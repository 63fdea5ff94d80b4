import httpx
import pytest

from platsync.api.client import ManagementClient, decode_json, extract_error_message
from platsync.exceptions import AuthError, NetworkError, RemoteStateError

ENDPOINT = "/v1/projects/ref/config/auth"


def test_requires_access_token():
    with pytest.raises(ValueError):
        ManagementClient("")


def test_sends_bearer_token_and_json_body(fake_api, management_client):
    fake_api.add("PATCH", ENDPOINT, {"ok": True})

    response = management_client.request("PATCH", ENDPOINT, json_body={"jwt_exp": 3600})

    sent = fake_api.requests[0]
    assert response.status_code == 200
    assert sent["headers"]["authorization"] == "Bearer sbp_test_token"
    assert sent["json"] == {"jwt_exp": 3600}


@pytest.mark.parametrize("status", [401, 403])
def test_auth_failures_raise_auth_error(fake_api, management_client, status):
    fake_api.add("GET", ENDPOINT, {"message": "denied"}, status=status)

    with pytest.raises(AuthError) as exc_info:
        management_client.get(ENDPOINT)
    assert exc_info.value.status_code == status
    assert "denied" in str(exc_info.value)


def test_other_errors_raise_remote_state_error_with_body(fake_api, management_client):
    fake_api.add("GET", ENDPOINT, {"error": "kaput"}, status=503)

    with pytest.raises(RemoteStateError) as exc_info:
        management_client.get(ENDPOINT)
    assert exc_info.value.status_code == 503
    assert "kaput" in exc_info.value.body


def test_allowed_statuses_are_returned(fake_api, management_client):
    response = management_client.get(ENDPOINT, allowed_statuses=(404, 406))
    assert response.status_code == 404


def test_transport_failure_raises_network_error(fake_api, management_client):
    fake_api.add("GET", ENDPOINT, httpx.ConnectTimeout("timed out"))

    with pytest.raises(NetworkError):
        management_client.get(ENDPOINT)


def test_base_url_with_v1_prefix_is_not_doubled(fake_api):
    client = ManagementClient("t", base_url="https://api.test/v1", transport=fake_api.transport)
    fake_api.add("GET", ENDPOINT, {})

    client.get(ENDPOINT)

    assert fake_api.requests[0]["path"] == ENDPOINT


def test_list_api_keys_rejects_non_list(fake_api, management_client):
    fake_api.add("GET", "/v1/projects/ref/api-keys", {"keys": []})

    with pytest.raises(RemoteStateError):
        management_client.list_api_keys("ref")


def test_extract_error_message_falls_back_to_text():
    assert extract_error_message(httpx.Response(500, text="plain failure")) == "plain failure"
    assert extract_error_message(httpx.Response(400, json={"message": "bad"})) == "bad"


def test_decode_json():
    assert decode_json(httpx.Response(204)) == {}
    with pytest.raises(RemoteStateError):
        decode_json(httpx.Response(200, text="<html>"))
