import json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, text="", json_data=None):
        if json_data is not None:
            text = json.dumps(json_data)
        self.status_code = status_code
        self.text = text
        self.content = (text or "").encode()
        self.headers = {}
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession(requests.Session):
    """Session that records prepared requests instead of hitting the network."""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.responses = []
        self.error = None

    def reply(self, status_code=200, text="", json_data=None):
        response = FakeResponse(status_code=status_code, text=text, json_data=json_data)
        self.responses.append(response)
        return response

    def send(self, request, **kwargs):
        self.sent.append((request, kwargs))
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    @property
    def last_request(self):
        return self.sent[-1][0]

    def last_json(self):
        return json.loads(self.last_request.body)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    from mautic_client import Client, ClientConfig

    config = ClientConfig(base_url="https://mautic.example.com", user="admin", password="secret")
    return Client(config, session=session)
