"""User facing message catalog."""

from collections.abc import Mapping

MESSAGES: Mapping[str, str] = {
    "debug_test_exec_name": "Debug Test(s)",
    "debug_test_no_results_found": "No test results were found",
    "debug_test_no_debug_log": (
        "No debug log was found for the test run. "
        "Make sure a trace flag is enabled for the current user."
    ),
    "notification_successful_execution_text": "%s successfully ran",
    "notification_unsuccessful_execution_text": "%s failed to run",
}


def localize(key: str, *args: object) -> str:
    """Look up a message by key and interpolate its arguments."""
    message = MESSAGES[key]
    return message % args if args else message
