from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from src.time_tracking.time_tracking.core.enums import ClockEventType
from src.time_tracking.time_tracking.core.exceptions import ClockServiceError
from src.time_tracking.time_tracking.tracking.client import TimeTrackingClient

BASE_URL = "http://testserver/api/time-tracking"

EVENT = {"id": 5, "userId": 1, "type": "IN", "timestamp": "2026-02-04T09:00:00", "createdAt": "2026-02-04T09:00:00"}


def make_client(handler) -> TimeTrackingClient:
    return TimeTrackingClient(client=httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler)))


def test_reads_status_and_events():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.url.params.get("date")))
        if request.url.path.endswith("/status"):
            return httpx.Response(200, json={"status": "IN"})
        return httpx.Response(200, json=[EVENT])

    async def scenario():
        async with make_client(handler) as client:
            status = await client.get_status()
            events = await client.get_events()
            day_events = await client.get_day_events()
            return status, events, day_events

    status, events, day_events = asyncio.run(scenario())

    assert status == ClockEventType.IN
    assert events[0].event_id == 5
    assert events[0].timestamp.hour == 9
    assert len(day_events) == 1
    assert seen == [
        ("GET", "/api/time-tracking/status", None),
        ("GET", "/api/time-tracking/events", None),
        ("GET", "/api/time-tracking/events/day", None),
    ]


def test_clock_posts_type_and_returns_event():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"message": "Successfully clocked in", "event": EVENT})

    event = asyncio.run(make_client(handler).clock(ClockEventType.IN))

    assert bodies == [{"type": "IN"}]
    assert event.type == ClockEventType.IN


def test_server_error_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "You are already clocked in"})

    with pytest.raises(ClockServiceError) as exc:
        asyncio.run(make_client(handler).clock(ClockEventType.IN))

    assert exc.value.message == "You are already clocked in"
    assert exc.value.status_code == 400


def test_transport_failure_uses_fallback_message():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ClockServiceError) as exc:
        asyncio.run(make_client(handler).clock(ClockEventType.OUT))

    assert exc.value.message == "Unable to perform clock operation."
    assert exc.value.status_code is None


def test_non_json_success_body_is_a_clock_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>")

    with pytest.raises(ClockServiceError) as exc:
        asyncio.run(make_client(handler).get_events())

    assert exc.value.message == "Unable to load clock events."
    assert exc.value.status_code == 200


@pytest.mark.parametrize(
    "path, body",
    [
        ("/status", {"state": "IN"}),
        ("/events", [{"id": 1}]),
        ("/events", {"events": []}),
    ],
)
def test_wrongly_shaped_body_is_a_clock_service_error(path, body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    async def call(client: TimeTrackingClient):
        return await (client.get_status() if path == "/status" else client.get_events())

    with pytest.raises(ClockServiceError):
        asyncio.run(call(make_client(handler)))


def test_clock_without_event_in_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json={"message": "Successfully clocked in"})

    with pytest.raises(ClockServiceError) as exc:
        asyncio.run(make_client(handler).clock(ClockEventType.IN))

    assert exc.value.message == "Unable to perform clock operation."
