"""Shared fixtures: recorded Salesforce responses and mocked HTTP plumbing.

All tests mock the requests.Session so no real HTTP calls are made.
"""

import json
import os
from unittest.mock import MagicMock

import pytest

from core.auth_gateway import AuthGateway
from core.salesforce_client import SalesforceRESTClient

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures", "rest_responses")


def load_fixture(filename):
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path) as f:
        return json.load(f)


def mock_response(status_code=200, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


@pytest.fixture
def credential_source():
    source = MagicMock(return_value={"token": "test-token"})
    return source


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session, credential_source):
    return SalesforceRESTClient(
        "acme",
        AuthGateway(credential_source),
        session=session,
        timeout=30,
        origin="https://acme.aha.io",
    )
