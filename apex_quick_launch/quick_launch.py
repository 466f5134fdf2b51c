"""Run a single Apex test and replay its debug log."""

import logging
from dataclasses import dataclass

from apex_quick_launch.connection import Connection, ConnectionAcquisitionError
from apex_quick_launch.launcher import ReplayLauncher
from apex_quick_launch.messages import localize
from apex_quick_launch.models.apex import SyncTestConfiguration
from apex_quick_launch.models.result import LogAcquisitionOutcome, TestRunOutcome
from apex_quick_launch.models.target import TestTarget
from apex_quick_launch.notifications import NotificationService
from apex_quick_launch.services.log_service import LogService
from apex_quick_launch.services.test_service import TestService
from apex_quick_launch.services.trace_flags import TraceFlags
from apex_quick_launch.workspace import WorkspaceContext

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class QuickLaunch:
    """Runs a test with debug logging and opens its log in the replay debugger.

    Some failures are shown to the user and others abort silently: only a
    test run that fails with a message is reported.
    """

    workspace: WorkspaceContext
    notifications: NotificationService
    launcher: ReplayLauncher

    async def debug_test(self, target: TestTarget) -> bool:
        """Debug a test and return whether the replay debugger was launched."""
        try:
            async with self.workspace.get_connection() as connection:
                return await self._debug_test(connection, target)
        except ConnectionAcquisitionError as e:
            log.error("Could not connect to the org: %s", e)
            return False

    async def _debug_test(self, connection: Connection, target: TestTarget) -> bool:
        flags = TraceFlags(connection=connection)
        if not await flags.ensure_trace_flags():
            return False

        test_result = await self.run_single_test(connection, target)

        if test_result.succeeded and test_result.log_reference:
            log_file = await self.retrieve_log_file(
                connection, test_result.log_reference
            )
            if log_file.succeeded and log_file.local_path:
                self.launcher.launch(log_file.local_path, stop_on_entry=False)
                return True
        elif test_result.message:
            self.notifications.show_error_message(test_result.message)
        return False

    async def run_single_test(
        self, connection: Connection, target: TestTarget
    ) -> TestRunOutcome:
        """Run one test class or method and pick up the debug log it produced."""
        options = SyncTestConfiguration(
            tests=[target.to_test_item()],
            test_level="RunSpecifiedTests",
        )

        test_service = TestService(connection=connection)
        try:
            result = await test_service.run_test_synchronous(options)
        except Exception as e:
            log.warning("Test run for %s failed: %s", target.class_name, e)
            return TestRunOutcome.failure(str(e))

        if not result.tests:
            return TestRunOutcome.failure(localize("debug_test_no_results_found"))

        apex_log_id = result.tests[0].apex_log_id
        if not apex_log_id:
            return TestRunOutcome.failure(localize("debug_test_no_debug_log"))

        return TestRunOutcome.success(apex_log_id)

    async def retrieve_log_file(
        self, connection: Connection, log_id: str
    ) -> LogAcquisitionOutcome:
        """Download a debug log into the workspace log directory."""
        log_service = LogService(connection=connection)
        output_dir = self.workspace.log_dir_path

        await log_service.get_logs(log_id, output_dir)
        log_path = output_dir / f"{log_id}.log"
        return LogAcquisitionOutcome(succeeded=True, local_path=log_path)
