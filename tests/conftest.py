"""
Shared fixtures: an in-memory Alertmanager served through httpx.MockTransport.

The fake implements the v1 silences endpoints used by am-silence:
- GET    /api/v1/silences?filter=a=1,b=2   (label-equality filter, subset semantics)
- POST   /api/v1/silences
- DELETE /api/v1/silence/{id}

Per-silence delays and status overrides let tests exercise timeouts and
partial failures without a real server.
"""

from __future__ import annotations

import asyncio
import json
import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest

from adapters.http_client import HttpxTransport
from core.config import AppSettings


def silence_payload(
    silence_id: str,
    labels: Dict[str, str],
    *,
    state: str = "active",
    creator: str = "bot",
    comment: str = "maint",
) -> Dict[str, Any]:
    """Silence as Alertmanager serialises it."""
    return {
        "id": silence_id,
        "status": {"state": state},
        "comment": comment,
        "createdBy": creator,
        "updatedAt": "2026-10-19T10:00:00.123456789Z",
        "startsAt": "2026-10-19T10:00:00.123456789Z",
        "endsAt": "2026-10-19T12:00:00Z",
        "matchers": [{"name": k, "value": v, "isRegex": False} for k, v in labels.items()],
    }


class FakeAlertmanager:
    """Mock Alertmanager v1 silences API."""

    def __init__(self) -> None:
        self.silences: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.delays: Dict[str, float] = {}
        self.status_overrides: Dict[str, int] = {}
        self.raw_get_body: Optional[str] = None
        self.get_delay: float = 0.0

    def add(self, silence_id: str, labels: Dict[str, str], **kwargs: Any) -> Dict[str, Any]:
        payload = silence_payload(silence_id, labels, **kwargs)
        self.silences[silence_id] = payload
        return payload

    def requests_for(self, method: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    @staticmethod
    def _matches(silence: Dict[str, Any], filter_expr: str) -> bool:
        wanted = dict(pair.split("=", 1) for pair in filter_expr.split(",") if "=" in pair)
        have = {m["name"]: m["value"] for m in silence["matchers"]}
        return all(have.get(k) == v for k, v in wanted.items())

    @staticmethod
    async def _respond_after(request: httpx.Request, delay: float) -> None:
        """Sleep like a slow server, honouring the client read timeout as a socket would."""
        read_timeout = request.extensions.get("timeout", {}).get("read")
        if read_timeout is not None and read_timeout < delay:
            await asyncio.sleep(read_timeout)
            raise httpx.ReadTimeout("timed out", request=request)
        await asyncio.sleep(delay)

    async def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/v1/silences" and request.method == "GET":
            if "GET" in self.status_overrides:
                return httpx.Response(self.status_overrides["GET"])
            if self.get_delay:
                await self._respond_after(request, self.get_delay)
            if self.raw_get_body is not None:
                return httpx.Response(200, text=self.raw_get_body)
            filter_expr = request.url.params.get("filter", "")
            data = [s for s in self.silences.values() if self._matches(s, filter_expr)]
            return httpx.Response(200, json={"status": "success", "data": data})

        if path == "/api/v1/silences" and request.method == "POST":
            if "POST" in self.status_overrides:
                return httpx.Response(self.status_overrides["POST"])
            if "POST" in self.delays:
                await self._respond_after(request, self.delays["POST"])
            body = json.loads(request.content)
            silence_id = str(uuid.uuid4())
            body.update({"id": silence_id, "status": {"state": "active"}})
            self.silences[silence_id] = body
            return httpx.Response(200, json={"status": "success", "data": {"silenceId": silence_id}})

        if path.startswith("/api/v1/silence/") and request.method == "DELETE":
            silence_id = path.rsplit("/", 1)[-1]
            if silence_id in self.delays:
                await self._respond_after(request, self.delays[silence_id])
            if silence_id in self.status_overrides:
                return httpx.Response(self.status_overrides[silence_id])
            if silence_id not in self.silences:
                return httpx.Response(404, json={"status": "error"})
            self.silences[silence_id]["status"]["state"] = "expired"
            return httpx.Response(200, json={"status": "success"})

        return httpx.Response(404, json={"status": "error", "error": "Not found"})

    def get_transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle_request)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, alertmanager_url="http://alertmanager.test", timeout_seconds=1.0)


@pytest.fixture
def alertmanager() -> FakeAlertmanager:
    return FakeAlertmanager()


@pytest.fixture
def transport(settings: AppSettings, alertmanager: FakeAlertmanager) -> HttpxTransport:
    return HttpxTransport(settings, transport=alertmanager.get_transport())
