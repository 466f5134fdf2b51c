"""Download of Apex debug logs."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from apex_quick_launch.connection import Connection, describe_error

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class LogService:
    """Retrieves debug logs from the org of a connection."""

    connection: Connection

    async def get_logs(self, log_id: str, output_dir: Path) -> Sequence[Path]:
        """Download a debug log into the output directory as ``<log_id>.log``."""
        url = self.connection.tooling_path(f"sobjects/ApexLog/{log_id}/Body")

        async with self.connection.session.get(url) as response:
            if response.status != 200:
                detail = await describe_error(response)
                raise RuntimeError(
                    f"Failed to retrieve log {log_id}: {response.status} {detail}"
                )
            body = await response.read()

        output_dir.mkdir(parents=True, exist_ok=True)
        log_path = output_dir / f"{log_id}.log"
        log_path.write_bytes(body)

        log.info("Saved debug log %s to %s", log_id, log_path)
        return [log_path]
