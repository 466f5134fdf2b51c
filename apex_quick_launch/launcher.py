"""Hand-off of a downloaded debug log to the Apex Replay Debugger."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Protocol, TextIO

from pydantic import Field

from apex_quick_launch.models.base import Model

log = logging.getLogger(__name__)

DEBUGGER_LAUNCH_NAME = "Launch Apex Replay Debugger"


class ReplayLaunchConfig(Model):
    """Launch configuration understood by the Apex Replay Debugger."""

    type: Literal["apex-replay"] = "apex-replay"
    request: Literal["launch"] = "launch"
    name: str = DEBUGGER_LAUNCH_NAME
    log_file: str = Field(..., description="Local path of the debug log")
    stop_on_entry: bool = Field(..., description="Pause on the first log line")
    trace: bool = True


class ReplayLauncher(Protocol):
    """Starts a replay debugging session from a local log file."""

    def launch(self, log_path: Path, stop_on_entry: bool) -> None:
        """Start replaying the given log."""


@dataclass(frozen=True, kw_only=True)
class LaunchConfigPrinter:
    """Replay launcher writing the launch configuration as JSON.

    The editor or debug adapter reading the stream starts the session.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def launch(self, log_path: Path, stop_on_entry: bool) -> None:
        config = ReplayLaunchConfig(
            log_file=str(log_path), stop_on_entry=stop_on_entry
        )
        log.info("Launching replay debugger for %s", log_path)
        print(config.model_dump_json(by_alias=True, indent=2), file=self.stream)
