from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .clock.mysql_clock_event_repository import MySQLClockEventRepository
from .clock.repository import ClockEventRepository
from .clock.service import ClockService
from .database.connection import DatabaseConnection, DBConfig
from .timesheet.pipeline import TimesheetPipeline


@dataclass(frozen=True)
class Container:
    clock_events_repo: ClockEventRepository

    clock_service: ClockService
    timesheet_pipeline: TimesheetPipeline


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_container_for(MySQLClockEventRepository(conn), settings=settings)


def build_container_for(clock_events_repo: ClockEventRepository, *, settings: Any = None) -> Container:
    """Wire services around an already constructed repository."""
    pipeline = TimesheetPipeline.from_settings(settings) if settings is not None else TimesheetPipeline()
    return Container(
        clock_events_repo=clock_events_repo,
        clock_service=ClockService(clock_events_repo),
        timesheet_pipeline=pipeline,
    )
