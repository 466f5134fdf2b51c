"""Command execution lifecycle for debugging tests."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from apex_quick_launch.messages import localize
from apex_quick_launch.models.target import TestTarget
from apex_quick_launch.notifications import NotificationService
from apex_quick_launch.quick_launch import QuickLaunch

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, kw_only=True)
class CommandletExecutor(ABC, Generic[T]):
    """Runs a command and reports its outcome to the user.

    Generic type T is the input the command works on.
    """

    notifications: NotificationService

    @property
    @abstractmethod
    def execution_name(self) -> str:
        """Name of the command as shown to the user."""

    @abstractmethod
    async def run(self, data: T | None) -> bool:
        """Run the command and return whether it succeeded."""

    async def execute(self, data: T | None) -> bool:
        """Run the command, reporting success or failure.

        Errors escaping ``run`` are logged and reported as a failed
        execution instead of being raised.
        """
        log.info("Starting %s", self.execution_name)
        start = time.monotonic()

        try:
            success = await self.run(data)
        except Exception as e:
            log.error("%s failed: %s", self.execution_name, e, exc_info=e)
            success = False

        log.info(
            "%s finished: success=%s duration=%.2fs",
            self.execution_name,
            success,
            time.monotonic() - start,
        )

        if success:
            self.notifications.show_info_message(
                localize("notification_successful_execution_text", self.execution_name)
            )
        else:
            self.notifications.show_error_message(
                localize(
                    "notification_unsuccessful_execution_text", self.execution_name
                )
            )
        return success


@dataclass(frozen=True, kw_only=True)
class TestDebuggerExecutor(CommandletExecutor[TestTarget]):
    """Debugs a test through the replay debugger."""

    __test__ = False

    quick_launch: QuickLaunch

    @property
    def execution_name(self) -> str:
        return localize("debug_test_exec_name")

    async def run(self, data: TestTarget | None) -> bool:
        if data is None:
            return False
        return await self.quick_launch.debug_test(data)


async def setup_and_debug_tests(
    quick_launch: QuickLaunch,
    class_name: str,
    method_name: str | None = None,
) -> bool:
    """Debug a test class, or a single method of it, in the replay debugger."""
    executor = TestDebuggerExecutor(
        notifications=quick_launch.notifications,
        quick_launch=quick_launch,
    )
    target = TestTarget(class_name=class_name, method_name=method_name)
    return await executor.execute(target)
