"""Tests for the HTTP transport."""

import pytest
import requests

from upvest import Client, request
from upvest.clients import delete, get, patch, post
from upvest.errors import APIError, MissingCredentialField, NetworkError

BASE = "https://api.example.test/1.0"


class TestRequest:
    """Tests for authenticated requests."""

    def test_signed_post(self, key_client, mock_session, make_response):
        """Test a POST carries base headers overridden by auth headers and a canonical body."""
        mock_session.request.return_value = make_response(201, {"id": "tx-1"})

        result = request("post", "/kms/wallets/abc/transactions/", {"b": 1, "a": 2}, key_client)

        assert result == {"id": "tx-1"}
        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{BASE}/kms/wallets/abc/transactions/"
        assert kwargs["data"] == b'{"a":2,"b":1}'
        assert kwargs["timeout"] == 30
        headers = kwargs["headers"]
        assert headers["User-Agent"] == "upvest-python"
        assert headers["Content-Type"] == "application/json"
        assert headers["X-UP-API-Signed-Path"] == "/1.0/kms/wallets/abc/transactions/"

    def test_get_sends_query_params(self, key_client, mock_session):
        """Test GET bodies go into the query string."""
        get("/kms/wallets/", key_client, params={"page_size": 10})

        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["params"] == {"page_size": 10}
        assert "data" not in kwargs

    def test_get_without_params(self, key_client, mock_session):
        """Test GET without a body sends neither params nor data."""
        get("/kms/wallets/", key_client)

        kwargs = mock_session.request.call_args.kwargs
        assert "params" not in kwargs
        assert "data" not in kwargs

    @pytest.mark.parametrize("helper,method", [(post, "POST"), (patch, "PATCH"), (delete, "DELETE")])
    def test_method_helpers(self, key_client, mock_session, helper, method):
        """Test the verb helpers send the matching method."""
        helper("/tenancy/users/bob", key_client, {"x": 1})

        assert mock_session.request.call_args.kwargs["method"] == method

    def test_unauthenticated_client(self, mock_session):
        """Test a client without credential sends only its base headers."""
        client = Client(session=mock_session, headers={"Accept": "application/json"})

        request("GET", "/status", {}, client)

        assert mock_session.request.call_args.kwargs["headers"] == {"Accept": "application/json"}

    def test_empty_response_body(self, key_client, mock_session, make_response):
        """Test an empty success body decodes to an empty dict."""
        mock_session.request.return_value = make_response(204, text="")

        assert request("DELETE", "/kms/wallets/abc", {}, key_client) == {}

    def test_metrics_recorded(self, key_client, mock_session, make_response):
        """Test requests are counted in the client's metrics."""
        mock_session.request.side_effect = [
            make_response(200, {}),
            make_response(500, {"error": "boom"}),
        ]

        request("GET", "/kms/wallets/", {}, key_client)
        with pytest.raises(APIError):
            request("GET", "/kms/wallets/", {}, key_client)

        metrics = key_client.metrics.to_dict()
        assert metrics["total_requests"] == 2
        assert metrics["successful_requests"] == 1
        assert metrics["failed_requests"] == 1

    def test_metrics_stay_constant_size(self, key_client):
        """Test many requests only update counters on the metrics record."""
        fields = dict(vars(key_client.metrics))

        for _ in range(1000):
            request("GET", "/kms/wallets/", {}, key_client)

        assert vars(key_client.metrics).keys() == fields.keys()
        assert not any(isinstance(value, (list, dict)) for value in vars(key_client.metrics).values())
        assert key_client.metrics.total_requests == 1000
        assert key_client.metrics.avg_duration_ms == key_client.metrics.total_duration_ms / 1000


class TestRequestErrors:
    """Tests for transport error mapping."""

    def test_api_error_with_json_body(self, key_client, mock_session, make_response):
        """Test non-2xx responses raise APIError with the decoded body."""
        mock_session.request.return_value = make_response(404, {"error": "not found"})

        with pytest.raises(APIError) as exc_info:
            request("GET", "/kms/wallets/missing", {}, key_client)

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"error": "not found"}
        assert exc_info.value.url == f"{BASE}/kms/wallets/missing"

    def test_api_error_with_text_body(self, key_client, mock_session, make_response):
        """Test a non-JSON error body is kept as text."""
        mock_session.request.return_value = make_response(502, text="Bad Gateway")

        with pytest.raises(APIError) as exc_info:
            request("GET", "/kms/wallets/", {}, key_client)

        assert exc_info.value.body == "Bad Gateway"

    def test_network_error(self, key_client, mock_session):
        """Test connection failures raise NetworkError."""
        cause = requests.exceptions.ConnectionError("refused")
        mock_session.request.side_effect = cause

        with pytest.raises(NetworkError) as exc_info:
            request("GET", "/kms/wallets/", {}, key_client)

        assert exc_info.value.cause is cause

    def test_auth_failure_aborts_request(self, mock_session):
        """Test nothing is sent when auth headers cannot be computed."""
        from upvest import KeyAuth

        client = Client(auth=KeyAuth("k", "", "p"), session=mock_session)

        with pytest.raises(MissingCredentialField):
            request("POST", "/kms/wallets/", {}, client)

        mock_session.request.assert_not_called()
