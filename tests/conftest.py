import json
import os

import httpx
import pytest

# Set env vars for testing
os.environ["OPENTOK_API_KEY"] = "123456"
os.environ["OPENTOK_API_SECRET"] = "1234567890abcdef1234567890abcdef1234567890"
os.environ["OPENTOK_API_URL"] = "http://localhost:8080"

API_KEY = 123456
API_SECRET = "1234567890abcdef1234567890abcdef1234567890"
API_URL = "http://localhost:8080"
SESSION_ID = "1_MX4xMjM0NTZ-abc"

SESSION_CREATE_XML = (
    "<?xml version=\"1.0\" encoding=\"UTF-8\" standalone=\"yes\"?><sessions><Session><"
    "session_id>1_MX4xMjM0NTZ-fk1vbiBNYXIgMTcgMDA6NDE6MzEgUERUIDIwMTR-MC42ODM3ODk1MzQ0OT"
    "QyODA4fg</session_id><partner_id>123456</partner_id><create_dt>Mon Mar 17 00:41:31 "
    "PDT 2014</create_dt></Session></sessions>"
)


def archive_json(**overrides):
    doc = {
        "createdAt": 1395183243556,
        "duration": 0,
        "id": "30b3ebf1-ba36-4f5b-8def-6f70d9986fe9",
        "name": "",
        "partnerId": API_KEY,
        "reason": "",
        "sessionId": "SESSIONID",
        "size": 0,
        "status": "started",
        "url": None,
    }
    doc.update(overrides)
    return doc


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, responder):
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)


def json_response(status_code, payload):
    return httpx.Response(status_code, content=json.dumps(payload), headers={"Content-Type": "application/json"})


@pytest.fixture
def session():
    from opentok_sdk.domain.session import Session
    return Session(session_id=SESSION_ID, api_key=API_KEY, api_secret=API_SECRET)


@pytest.fixture
def make_client():
    from opentok_sdk.client import OpenTok

    def _make(responder):
        transport = RecordingTransport(responder)
        client = OpenTok(API_KEY, API_SECRET, API_URL, transport=transport)
        return client, transport

    return _make
