"""End-to-end tests of debugging a test against a mocked org."""

import io
import json
import re
from pathlib import Path

import pytest
from aioresponses import aioresponses as aioresponses_cls

from apex_quick_launch.config import OrgConfig
from apex_quick_launch.executor import setup_and_debug_tests
from apex_quick_launch.launcher import LaunchConfigPrinter
from apex_quick_launch.notifications import LoggingNotificationService
from apex_quick_launch.quick_launch import QuickLaunch
from apex_quick_launch.testing.payloads import (
    INSTANCE_URL,
    TOOLING_URL,
    query_response,
    run_tests_result,
    success_entry,
    trace_flag,
    userinfo,
)
from apex_quick_launch.workspace import WorkspaceContext

LOG_ID = "07L000000000001AAA"
LOG_BODY = "60.0 APEX_CODE,FINEST;VISUALFORCE,FINER\n"


@pytest.fixture
def stream() -> io.StringIO:
    """Capture launch configurations."""
    return io.StringIO()


@pytest.fixture
def quick_launch(
    config: OrgConfig, tmp_path: Path, stream: io.StringIO
) -> QuickLaunch:
    """Create quick launch on a temporary project."""
    return QuickLaunch(
        workspace=WorkspaceContext(workspace_path=tmp_path, org_config=config),
        notifications=LoggingNotificationService(),
        launcher=LaunchConfigPrinter(stream=stream),
    )


@pytest.fixture
def org(aioresponses: aioresponses_cls) -> aioresponses_cls:
    """Mock an org where the user already has a trace flag."""
    aioresponses.get(f"{INSTANCE_URL}/services/oauth2/userinfo", payload=userinfo())
    aioresponses.get(
        re.compile(rf"{TOOLING_URL}/query/.*"),
        payload=query_response([trace_flag(debug_level_id="7dl000000000001AAA")]),
    )
    aioresponses.patch(
        f"{TOOLING_URL}/sobjects/DebugLevel/7dl000000000001AAA", status=204
    )
    aioresponses.patch(
        f"{TOOLING_URL}/sobjects/TraceFlag/7tf000000000001AAA", status=204
    )
    return aioresponses


async def test_debugs_test_in_replay_debugger(
    quick_launch: QuickLaunch,
    org: aioresponses_cls,
    stream: io.StringIO,
    tmp_path: Path,
) -> None:
    """Runs the test, downloads its log and emits the launch configuration."""
    org.post(
        f"{TOOLING_URL}/runTestsSynchronous/",
        payload=run_tests_result(apex_log_id=LOG_ID, successes=[success_entry()]),
    )
    org.get(
        f"{TOOLING_URL}/sobjects/ApexLog/{LOG_ID}/Body",
        body=LOG_BODY,
        content_type="text/plain",
    )

    result = await setup_and_debug_tests(
        quick_launch, "AccountServiceTest", "testCreate"
    )

    log_path = tmp_path / ".sfdx" / "tools" / "debug" / "logs" / f"{LOG_ID}.log"
    assert result is True
    assert log_path.read_text(encoding="utf-8") == LOG_BODY
    launch_config = json.loads(stream.getvalue())
    assert launch_config["logFile"] == str(log_path)
    assert launch_config["stopOnEntry"] is False


async def test_reports_run_without_results(
    quick_launch: QuickLaunch,
    org: aioresponses_cls,
    stream: io.StringIO,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Reports an empty run and does not launch the debugger."""
    org.post(f"{TOOLING_URL}/runTestsSynchronous/", payload=run_tests_result())

    result = await setup_and_debug_tests(quick_launch, "AccountServiceTest")

    assert result is False
    assert "No test results were found" in caplog.text
    assert stream.getvalue() == ""


async def test_reports_failed_log_download(
    quick_launch: QuickLaunch,
    org: aioresponses_cls,
    stream: io.StringIO,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A failed download ends the command as failed without raising."""
    org.post(
        f"{TOOLING_URL}/runTestsSynchronous/",
        payload=run_tests_result(apex_log_id=LOG_ID, successes=[success_entry()]),
    )
    org.get(f"{TOOLING_URL}/sobjects/ApexLog/{LOG_ID}/Body", status=404, body="")

    result = await setup_and_debug_tests(quick_launch, "AccountServiceTest")

    assert result is False
    assert f"Failed to retrieve log {LOG_ID}: 404" in caplog.text
    assert "Debug Test(s) failed to run" in caplog.text
    assert stream.getvalue() == ""
