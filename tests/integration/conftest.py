"""Fixtures for integration tests against a mocked org."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from apex_quick_launch.config import OrgConfig
from apex_quick_launch.connection import Connection
from apex_quick_launch.testing.payloads import INSTANCE_URL, USER_ID, userinfo


@pytest.fixture
def config() -> OrgConfig:
    """Create test configuration."""
    return OrgConfig(
        instance_url=INSTANCE_URL,
        access_token=SecretStr("test-token"),
    )


@pytest.fixture
async def connection(
    config: OrgConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[Connection, None]:
    """Create connection with managed session."""
    aioresponses.get(
        f"{INSTANCE_URL}/services/oauth2/userinfo", payload=userinfo(user_id=USER_ID)
    )
    async with Connection.from_config(config) as impl:
        yield impl
