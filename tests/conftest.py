import json
from typing import Callable
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio

from epson_connect.config import get_settings
from epson_connect.utils.token_manager import AuthContext

BASE_URL = "https://api.example.com"
PRINTER_EMAIL = "e@x.com"
CLIENT_ID = "id"
CLIENT_SECRET = "secret"
SUBJECT_ID = "S"

TOKEN_PATH = "/api/1/printing/oauth2/auth/token"
PRINTER_PATH = f"/api/1/printing/printers/{SUBJECT_ID}"
DESTINATIONS_PATH = f"/api/1/scanning/scanners/{SUBJECT_ID}/destinations"


class FakeEpsonConnect:
    """In-memory stand-in for the cloud service, records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_payloads: list[dict] = []
        self.default_token_payload = {
            "token_type": "Bearer",
            "access_token": "A",
            "expires_in": 3600,
            "refresh_token": "R",
            "subject_id": SUBJECT_ID,
        }
        self.destinations: dict[str, dict] = {}
        self.job_status = "pending"
        self.overrides: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self._next_id = 1

    # helpers used by tests
    def add_destination(self, alias_name: str, destination: str, type_: str = "mail") -> dict:
        dest = {
            "id": f"dest-{self._next_id}",
            "alias_name": alias_name,
            "destination": destination,
            "type": type_,
        }
        self._next_id += 1
        self.destinations[dest["id"]] = dest
        return dest

    def requests_to(self, path: str, method: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.path == path and (method is None or r.method == method)
        ]

    @property
    def token_requests(self) -> list[httpx.Request]:
        return self.requests_to(TOKEN_PATH, "POST")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.overrides:
            return self.overrides[key](request)

        path = request.url.path
        if key == ("POST", TOKEN_PATH):
            payload = self.token_payloads.pop(0) if self.token_payloads else self.default_token_payload
            return httpx.Response(200, json=payload)

        if path == DESTINATIONS_PATH:
            return self._destinations(request)

        if key == ("GET", PRINTER_PATH):
            return httpx.Response(200, json={"printer_name": "EP-879A", "connection": True})
        if key == ("DELETE", PRINTER_PATH):
            return httpx.Response(200)
        if key == ("POST", f"{PRINTER_PATH}/jobs"):
            return httpx.Response(200, json={
                "id": "job-1",
                "upload_uri": "https://upload.example.com/upload?Key=abc",
            })
        if key == ("GET", f"{PRINTER_PATH}/jobs/job-1"):
            return httpx.Response(200, json={"status": self.job_status})
        if request.method == "POST" and path.startswith(f"{PRINTER_PATH}/"):
            return httpx.Response(200)
        if key == ("POST", "/upload"):
            return httpx.Response(200)
        if request.method == "GET" and path.startswith(f"{PRINTER_PATH}/capability/"):
            return httpx.Response(200, json={"color_modes": ["color", "mono"]})

        return httpx.Response(404, json={"code": "not_found"})

    def _destinations(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"destinations": list(self.destinations.values())})

        body = json.loads(request.content)
        if request.method == "POST":
            self.add_destination(body["alias_name"], body["destination"], body["type"])
        elif request.method == "PUT":
            self.destinations[body["id"]] = body
        elif request.method == "DELETE":
            self.destinations.pop(body["id"], None)
        return httpx.Response(200)


def form_body(request: httpx.Request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode(), keep_blank_values=True)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for name in ("EPSON_CONNECT_API_PRINTER_EMAIL",
                 "EPSON_CONNECT_API_CLIENT_ID",
                 "EPSON_CONNECT_API_CLIENT_SECRET"):
        monkeypatch.setenv(name, "")
    monkeypatch.delenv("EPSON_CONNECT_API_BASE_URL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_service() -> FakeEpsonConnect:
    return FakeEpsonConnect()


@pytest_asyncio.fixture
async def http_client(fake_service):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_service.handler)) as client:
        yield client


@pytest.fixture
def auth_context(http_client) -> AuthContext:
    return AuthContext(BASE_URL, PRINTER_EMAIL, CLIENT_ID, CLIENT_SECRET,
                       http_client=http_client)


@pytest_asyncio.fixture
async def authenticated_context(auth_context) -> AuthContext:
    await auth_context.ensure_authenticated()
    return auth_context
