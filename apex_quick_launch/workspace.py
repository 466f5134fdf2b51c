"""Workspace context supplying the org connection and log directory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from apex_quick_launch.config import OrgConfig
from apex_quick_launch.connection import Connection


@dataclass(frozen=True, kw_only=True)
class WorkspaceContext:
    """A local Salesforce project linked to an org."""

    workspace_path: Path
    org_config: OrgConfig

    @property
    def log_dir_path(self) -> Path:
        """Directory where debug logs are downloaded."""
        return self.workspace_path / ".sfdx" / "tools" / "debug" / "logs"

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[Connection, None]:
        """Open a connection to the workspace org for the duration of a call."""
        async with Connection.from_config(self.org_config) as connection:
            yield connection
