"""Tests for core.salesforce_client.SalesforceRESTClient.

Covers URL construction, the bearer header, outcome classification
(ConfigurationMissing, ConnectivityError, AuthenticationError, RemoteApiError)
and the query/describe/detail request shapes.
"""

from unittest.mock import MagicMock
from urllib.parse import unquote

import pytest
import requests

from core.auth_gateway import AuthGateway
from core.errors import (
    AuthenticationError,
    AuthUnavailable,
    ConfigurationMissing,
    ConnectivityError,
    RemoteApiError,
)
from core.salesforce_client import RemoteQueryResult, SalesforceRESTClient, encode_query
from core.soql_queries import LIST_VIEW_QUERY, list_view_query

from conftest import load_fixture, mock_response


def _called_url(session):
    return session.get.call_args[0][0]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def test_missing_domain_fails_before_any_call(session, credential_source):
    client = SalesforceRESTClient("", AuthGateway(credential_source), session=session)
    with pytest.raises(ConfigurationMissing) as exc_info:
        client.request("/query/?q=x")
    assert exc_info.value.setting == "SALESFORCE_DOMAIN"
    credential_source.assert_not_called()
    session.get.assert_not_called()


def test_whitespace_domain_counts_as_missing(session, credential_source):
    client = SalesforceRESTClient("   ", AuthGateway(credential_source), session=session)
    with pytest.raises(ConfigurationMissing):
        client.query("SELECT Id FROM Case")
    session.get.assert_not_called()


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def test_request_uses_default_base_path_and_bearer(client, session):
    session.get.return_value = mock_response(200, {"ok": True})
    assert client.request("/sobjects/Case/describe") == {"ok": True}

    assert _called_url(session) == (
        "https://acme.my.salesforce.com/services/data/v54.0/sobjects/Case/describe"
    )
    kwargs = session.get.call_args[1]
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert kwargs["timeout"] == 30


def test_request_with_empty_base_path(client, session):
    session.get.return_value = mock_response(200, {})
    client.request("/services/data/v54.0/sobjects/Case/500x", base_path="")
    assert _called_url(session) == "https://acme.my.salesforce.com/services/data/v54.0/sobjects/Case/500x"


def test_api_version_is_configurable(session, credential_source):
    client = SalesforceRESTClient(
        "acme", AuthGateway(credential_source), api_version="v59.0", session=session
    )
    session.get.return_value = mock_response(200, {})
    client.request("/limits")
    assert _called_url(session).endswith("/services/data/v59.0/limits")


def test_credential_requested_in_cached_retry_mode(client, session, credential_source):
    session.get.return_value = mock_response(200, {})
    client.request("/limits")
    credential_source.assert_called_once_with("salesforce", cached_retry=True)


# ---------------------------------------------------------------------------
# Outcome classification
# ---------------------------------------------------------------------------

def test_network_failure_raises_connectivity_error(client, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(ConnectivityError) as exc_info:
        client.request("/limits")

    err = exc_info.value
    assert len(err.remediation) == 3
    assert "acme" in err.remediation[0]
    assert "https://acme.aha.io" in err.remediation[1]
    assert "CORS" in err.display_error()
    assert isinstance(err.__cause__, requests.ConnectionError)


def test_timeout_raises_connectivity_error(client, session):
    session.get.side_effect = requests.Timeout("read timed out")
    with pytest.raises(ConnectivityError):
        client.request("/limits")


def test_401_raises_authentication_error_tagged_with_service(client, session):
    session.get.return_value = mock_response(401, [{"message": "Session expired", "errorCode": "INVALID_SESSION_ID"}])
    with pytest.raises(AuthenticationError) as exc_info:
        client.request("/limits")
    assert exc_info.value.service == "salesforce"
    assert "401" in str(exc_info.value)


def test_401_invalidates_cached_credential(session):
    source = MagicMock(return_value={"token": "stale"})
    client = SalesforceRESTClient("acme", AuthGateway(source), session=session)
    session.get.return_value = mock_response(401, [])
    with pytest.raises(AuthenticationError):
        client.request("/limits")
    source.invalidate.assert_called_once()


def test_other_status_raises_remote_api_error(client, session):
    session.get.return_value = mock_response(
        400, [{"message": "unexpected token: FORM", "errorCode": "MALFORMED_QUERY"}]
    )
    with pytest.raises(RemoteApiError) as exc_info:
        client.request("/query/?q=bad")
    assert exc_info.value.status_code == 400
    assert "unexpected token: FORM" in str(exc_info.value)


def test_server_error_without_json_body(client, session):
    session.get.return_value = mock_response(503, ValueError("not json"))
    with pytest.raises(RemoteApiError) as exc_info:
        client.request("/limits")
    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "Salesforce API error: 503"


def test_success_with_non_json_body(client, session):
    session.get.return_value = mock_response(200, ValueError("not json"))
    with pytest.raises(RemoteApiError) as exc_info:
        client.request("/limits")
    assert exc_info.value.status_code == 200


def test_auth_unavailable_propagates_without_http(session):
    source = MagicMock(side_effect=AuthUnavailable("user cancelled"))
    client = SalesforceRESTClient("acme", AuthGateway(source), session=session)
    with pytest.raises(AuthUnavailable, match="user cancelled"):
        client.request("/limits")
    session.get.assert_not_called()


# ---------------------------------------------------------------------------
# Request shapes
# ---------------------------------------------------------------------------

def test_encode_query_collapses_whitespace():
    assert encode_query("  SELECT Id,\n   Name\tFROM  Case ") == "SELECT%20Id%2C%20Name%20FROM%20Case"


def test_encode_query_matches_normalized_builder_text():
    soql = list_view_query("Case")
    assert encode_query(LIST_VIEW_QUERY.format(sobject="Case")) == encode_query(soql)
    assert unquote(encode_query(soql)) == soql


def test_encode_query_escapes_quotes_and_equals():
    assert encode_query("WHERE SobjectType = 'Case'") == "WHERE%20SobjectType%20%3D%20%27Case%27"


def test_query_returns_first_page(client, session):
    session.get.return_value = mock_response(200, load_fixture("query_cases.json"))
    result = client.query("SELECT Id FROM Case")

    assert _called_url(session).endswith("/services/data/v54.0/query/?q=SELECT%20Id%20FROM%20Case")
    assert isinstance(result, RemoteQueryResult)
    assert result.done is True
    assert result.total_size == 3
    assert len(result.records) == 3


def test_describe_list_view_path(client, session):
    session.get.return_value = mock_response(200, load_fixture("listview_describe.json"))
    describe = client.describe_list_view("00B5e00000Open1")
    assert _called_url(session).endswith("/sobjects/Case/listviews/00B5e00000Open1/describe")
    assert describe["query"].startswith("SELECT CaseNumber")


def test_fetch_detail_uses_reference_url(client, session):
    session.get.return_value = mock_response(200, load_fixture("case_detail.json"))
    detail = client.fetch_detail("/services/data/v54.0/sobjects/Case/5005e00000GhiJKL")
    assert _called_url(session) == (
        "https://acme.my.salesforce.com/services/data/v54.0/sobjects/Case/5005e00000GhiJKL"
    )
    assert detail["CaseNumber"] == "00001027"


# ---------------------------------------------------------------------------
# RemoteQueryResult
# ---------------------------------------------------------------------------

def test_query_result_partial_page():
    result = RemoteQueryResult.from_api(load_fixture("query_cases_partial.json"))
    assert result.done is False
    assert result.total_size == 2500
    assert result.next_records_url.endswith("-2000")


def test_query_result_defaults_for_empty_payload():
    result = RemoteQueryResult.from_api({})
    assert result.done is True
    assert result.total_size == 0
    assert result.records == []
    assert result.next_records_url is None
