"""
Shared fixtures for the OpenShock client tests.

The transport is replaced by patching ``requests.request`` as seen from
openshock_api; tests queue real ``requests.Response`` objects built by
``make_response``.
"""

import json
import sys
from pathlib import Path
from unittest import mock

import pytest
import requests

# Ensure project root is on sys.path for direct imports like `openshock_api`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from openshock_api import OpenShockClient  # noqa: E402

API_KEY = "test-api-key"


def make_response(status_code=200, body=None, text=None):
    """Build a requests.Response carrying ``body`` as JSON (or raw ``text``)."""
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def mock_request():
    with mock.patch("openshock_api.requests.request") as patched:
        yield patched


@pytest.fixture
def client():
    return OpenShockClient(API_KEY)
