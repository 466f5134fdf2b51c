"""CLI entry point for debugging an Apex test in the replay debugger."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from apex_quick_launch.config import OrgConfig
from apex_quick_launch.executor import setup_and_debug_tests
from apex_quick_launch.launcher import LaunchConfigPrinter
from apex_quick_launch.notifications import LoggingNotificationService
from apex_quick_launch.quick_launch import QuickLaunch
from apex_quick_launch.workspace import WorkspaceContext


async def run(
    org_config_json: str,
    workspace_path: Path,
    class_name: str,
    method_name: str | None = None,
) -> int:
    """Debug the given test and return exit code."""
    log = logging.getLogger("apex_quick_launch")

    config = OrgConfig(**json.loads(org_config_json))
    workspace = WorkspaceContext(workspace_path=workspace_path, org_config=config)

    if method_name:
        log.info("Debugging test %s.%s", class_name, method_name)
    else:
        log.info("Debugging all tests in %s", class_name)

    quick_launch = QuickLaunch(
        workspace=workspace,
        notifications=LoggingNotificationService(),
        launcher=LaunchConfigPrinter(),
    )
    success = await setup_and_debug_tests(quick_launch, class_name, method_name)

    return 0 if success else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run an Apex test and replay its debug log"
    )
    parser.add_argument(
        "--org-config",
        required=True,
        help="JSON configuration for the org (instance_url, access_token)",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=Path.cwd(),
        help="Path to the Salesforce project (default: current directory)",
    )
    parser.add_argument(
        "--class-name",
        required=True,
        help="Apex test class to run",
    )
    parser.add_argument(
        "--method-name",
        default=None,
        help="Test method to run (default: every method of the class)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            org_config_json=args.org_config,
            workspace_path=args.workspace,
            class_name=args.class_name,
            method_name=args.method_name,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
