"""Trace flag management so test runs produce a replayable debug log."""

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from apex_quick_launch.connection import Connection
from apex_quick_launch.models.tooling import TraceFlagRecord

log = logging.getLogger(__name__)

LOG_TIMER_LENGTH = timedelta(minutes=30)

DEBUG_LEVEL_NAME_PREFIX = "ReplayDebuggerLevels"

REPLAY_DEBUG_LEVELS: Mapping[str, str] = {
    "ApexCode": "FINEST",
    "Visualforce": "FINER",
}


def calculate_expiration(expiration_date: datetime, now: datetime) -> datetime:
    """Extend an expiration date so that it lasts at least the log timer."""
    return max(expiration_date, now + LOG_TIMER_LENGTH)


def format_datetime(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds")


@dataclass(frozen=True, kw_only=True)
class TraceFlags:
    """Enables developer debug logs for the connected user."""

    connection: Connection

    async def ensure_trace_flags(self) -> bool:
        """Make sure the next test run emits a debug log.

        Safe to call before every run. Never raises: failures are logged
        and reported as ``False``.
        """
        try:
            await self._ensure_trace_flags()
        except Exception:
            log.exception(
                "Failed to enable trace flags for user %s", self.connection.user_id
            )
            return False
        return True

    async def _ensure_trace_flags(self) -> None:
        user_id = self.connection.user_id
        now = datetime.now(timezone.utc)
        trace_flag = await self.get_trace_flag_for_user(user_id)

        if trace_flag is not None:
            log.info("Updating trace flag %s for user %s", trace_flag.id, user_id)
            await self.update_debug_level(trace_flag.debug_level_id)
            await self.update_trace_flag(
                trace_flag.id, calculate_expiration(trace_flag.expiration_date, now)
            )
            return

        debug_level_name = f"{DEBUG_LEVEL_NAME_PREFIX}{int(time.time() * 1000)}"
        debug_level_id = await self.create_debug_level(debug_level_name)
        trace_flag_id = await self.create_trace_flag(
            user_id, debug_level_id, now + LOG_TIMER_LENGTH
        )
        log.info("Created trace flag %s for user %s", trace_flag_id, user_id)

    async def get_trace_flag_for_user(self, user_id: str) -> TraceFlagRecord | None:
        """Find the developer log trace flag of a user, if any."""
        records = await self.connection.query(
            "SELECT Id, LogType, StartDate, ExpirationDate, DebugLevelId "
            "FROM TraceFlag "
            f"WHERE LogType = 'DEVELOPER_LOG' AND TracedEntityId = '{user_id}'",
            tooling=True,
        )
        if not records:
            return None
        return TraceFlagRecord.model_validate(records[0])

    async def update_debug_level(self, debug_level_id: str) -> None:
        await self.connection.update_tooling_record(
            "DebugLevel", debug_level_id, REPLAY_DEBUG_LEVELS
        )

    async def update_trace_flag(
        self, trace_flag_id: str, expiration_date: datetime
    ) -> None:
        await self.connection.update_tooling_record(
            "TraceFlag",
            trace_flag_id,
            {"StartDate": "", "ExpirationDate": format_datetime(expiration_date)},
        )

    async def create_debug_level(self, name: str) -> str:
        return await self.connection.create_tooling_record(
            "DebugLevel",
            {"DeveloperName": name, "MasterLabel": name, **REPLAY_DEBUG_LEVELS},
        )

    async def create_trace_flag(
        self, user_id: str, debug_level_id: str, expiration_date: datetime
    ) -> str:
        return await self.connection.create_tooling_record(
            "TraceFlag",
            {
                "TracedEntityId": user_id,
                "LogType": "DEVELOPER_LOG",
                "DebugLevelId": debug_level_id,
                "StartDate": "",
                "ExpirationDate": format_datetime(expiration_date),
            },
        )
