"""Example: drive the dashboard service against a running API (no Flask involved).

Shows the layering: the client fetches, the service keeps one snapshot, the
pipeline derives every view from that snapshot.
"""

import asyncio
import importlib

from config import get_settings_module

from src.time_tracking.time_tracking.core.enums import AnalyticsPeriod
from src.time_tracking.time_tracking.timesheet.pipeline import TimesheetPipeline
from src.time_tracking.time_tracking.tracking.client import TimeTrackingClient
from src.time_tracking.time_tracking.tracking.live_tracker import LiveElapsedTracker
from src.time_tracking.time_tracking.tracking.service import TimeTrackingService


async def main():
    settings = importlib.import_module(get_settings_module())
    async with TimeTrackingClient(settings.API_BASE_URL) as client:
        tracker = LiveElapsedTracker(tick_seconds=settings.LIVE_TICK_SECONDS, on_tick=print)
        service = TimeTrackingService(client, pipeline=TimesheetPipeline.from_settings(settings), tracker=tracker)

        await service.open()
        print(service.status.value, service.summary().to_dict())
        print([b.to_dict() for b in service.analytics(AnalyticsPeriod.WEEK)])
        await asyncio.sleep(3)
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
