from __future__ import annotations

import contextlib
import logging
from datetime import date
from typing import Any, Iterator, Optional, Sequence

import httpx

from ..core.constants import DEFAULT_API_BASE_URL, DEFAULT_HTTP_TIMEOUT
from ..core.enums import ClockEventType
from ..core.exceptions import ClockServiceError
from ..events.model import ClockEvent

logger = logging.getLogger(__name__)


class TimeTrackingClient:
    """httpx client for the time-tracking endpoints.

    Transport failures and non-2xx responses are raised as `ClockServiceError`
    carrying the server's message when it sent one.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "TimeTrackingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_status(self) -> ClockEventType:
        fallback = "Unable to load clock status."
        data = await self._request("GET", "/status", fallback=fallback)
        with self._payload_errors(fallback):
            return ClockEventType(data["status"])

    async def get_day_events(self, day: Optional[date] = None) -> Sequence[ClockEvent]:
        fallback = "Unable to load today's events."
        params = {"date": day.isoformat()} if day else None
        data = await self._request("GET", "/events/day", params=params, fallback=fallback)
        with self._payload_errors(fallback):
            return [ClockEvent.from_payload(item) for item in data]

    async def get_events(self) -> Sequence[ClockEvent]:
        fallback = "Unable to load clock events."
        data = await self._request("GET", "/events", fallback=fallback)
        with self._payload_errors(fallback):
            return [ClockEvent.from_payload(item) for item in data]

    async def clock(self, event_type: ClockEventType) -> ClockEvent:
        fallback = "Unable to perform clock operation."
        data = await self._request("POST", "/clock", json={"type": event_type.value}, fallback=fallback)
        with self._payload_errors(fallback):
            event = ClockEvent.from_payload(data["event"])
        logger.info("clock %s accepted: %s", event_type.value, data.get("message"))
        return event

    async def _request(self, method: str, url: str, *, fallback: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ClockServiceError(fallback) from e

        if resp.is_error:
            message = _error_message(resp) or fallback
            logger.warning("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise ClockServiceError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            logger.warning("%s %s -> %s: response is not JSON", method, url, resp.status_code)
            raise ClockServiceError(fallback, status_code=resp.status_code) from e

    @staticmethod
    @contextlib.contextmanager
    def _payload_errors(fallback: str) -> Iterator[None]:
        """Turn a response body of the wrong shape into `ClockServiceError`."""
        try:
            yield
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("unexpected response payload: %r", e)
            raise ClockServiceError(fallback) from e


def _error_message(resp: httpx.Response) -> Optional[str]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload.get("message")
    return None
