import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from config import Settings
from context import AppContext
from server import create_app
from services import NotificationError

ADMIN_KEY = "letmein"
JWT_SECRET = "test-signing-secret"


class RecordingChannel:
    def __init__(self, name):
        self.name = name
        self.sent = []

    async def send(self, message):
        self.sent.append(message)


class FailingChannel:
    def __init__(self, name):
        self.name = name
        self.attempts = 0

    async def send(self, message):
        self.attempts += 1
        raise NotificationError(self.name, "provider unavailable")


class BrokenCollection:
    """Collection whose writes fail as if MongoDB were unreachable."""

    async def insert_one(self, doc):
        raise ServerSelectionTimeoutError("no servers available")


def donor_payload(**overrides):
    payload = {
        "name": "Asha Verma",
        "age": 30,
        "bloodGroup": "O+",
        "phone": "9876543210",
        "email": "asha@example.com",
        "location": "Mumbai Central",
    }
    payload.update(overrides)
    return payload


def request_payload(**overrides):
    payload = {
        "patientName": "Ravi Kumar",
        "bloodGroup": "O+",
        "unitsRequired": 2,
        "hospitalName": "City Hospital",
        "hospitalAddress": "12 MG Road",
        "city": "mumbai",
        "requiredDate": "2030-01-15",
        "requesterPhone": "9123456780",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(admin_key=ADMIN_KEY, jwt_secret=JWT_SECRET, db_name="bloodlink_test")


@pytest.fixture
def channels():
    return [RecordingChannel("email"), RecordingChannel("sms")]


@pytest.fixture
def ctx(settings, channels):
    return AppContext.build(settings, client=AsyncMongoMockClient(), channels=channels)


@pytest.fixture
def client(ctx):
    with TestClient(create_app(context=ctx)) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(ctx):
    return {"Authorization": f"Bearer {ctx.admin_gate.issue_token()}"}


def run(client, func, *args):
    """Run a coroutine function on the test client's event loop."""
    return client.portal.call(func, *args)
