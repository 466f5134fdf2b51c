"""Authenticated REST session against a Salesforce org."""

import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from yarl import URL

from apex_quick_launch.config import OrgConfig
from apex_quick_launch.models.tooling import QueryResult, SaveResult

log = logging.getLogger(__name__)


class ConnectionAcquisitionError(Exception):
    """Raised when an authenticated org session cannot be established."""


async def describe_error(response: aiohttp.ClientResponse) -> str:
    """Extract the first Salesforce error message from a failed response."""
    text = await response.text(errors="replace")
    try:
        data = await response.json(content_type=None)
    except ValueError:
        return text

    if isinstance(data, list) and data and isinstance(data[0], Mapping):
        message = data[0].get("message")
        if isinstance(message, str):
            return message
    return text


@dataclass(frozen=True, kw_only=True)
class Connection:
    """Session on a Salesforce org, scoped to one authenticated user."""

    config: OrgConfig
    user_id: str
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: OrgConfig
    ) -> AsyncGenerator["Connection", None]:
        """Open a session and resolve the user it is authenticated as.

        Raises:
            ConnectionAcquisitionError: If the instance URL is invalid, or the
                org rejects the credentials or cannot be reached

        """
        headers = {
            "Authorization": f"Bearer {config.access_token.get_secret_value()}",
            "Accept": "application/json",
        }
        try:
            base_url = URL(config.instance_url)
        except ValueError as e:
            raise ConnectionAcquisitionError(
                f"Invalid instance URL {config.instance_url}: {e}"
            ) from e
        if not base_url.absolute or base_url.origin() != base_url:
            raise ConnectionAcquisitionError(
                f"Invalid instance URL {config.instance_url}: "
                "expected an absolute URL without a path"
            )

        async with aiohttp.ClientSession(
            base_url=base_url, headers=headers
        ) as session:
            user_id = await cls.resolve_user_id(session)
            log.info("Connected to %s as user %s", config.instance_url, user_id)
            yield cls(config=config, user_id=user_id, session=session)

    @staticmethod
    async def resolve_user_id(session: aiohttp.ClientSession) -> str:
        """Look up the id of the user owning the access token."""
        try:
            async with session.get("/services/oauth2/userinfo") as response:
                if response.status != 200:
                    detail = await describe_error(response)
                    raise ConnectionAcquisitionError(
                        f"Failed to authenticate: {response.status} {detail}"
                    )
                data = await response.json()
        except aiohttp.ClientError as e:
            raise ConnectionAcquisitionError(f"Failed to reach org: {e}") from e

        user_id = data.get("user_id")
        if not isinstance(user_id, str):
            raise ConnectionAcquisitionError("User ID not found in userinfo response")
        return user_id

    def data_path(self, path: str) -> str:
        """Build the REST API path for the configured API version."""
        return f"/services/data/v{self.config.api_version}/{path}"

    def tooling_path(self, path: str) -> str:
        """Build the Tooling API path for the configured API version."""
        return self.data_path(f"tooling/{path}")

    async def query(
        self, soql: str, *, tooling: bool = False
    ) -> Sequence[Mapping[str, Any]]:
        """Run a SOQL query and return its records."""
        url = self.tooling_path("query/") if tooling else self.data_path("query/")

        async with self.session.get(url, params={"q": soql}) as response:
            if response.status != 200:
                detail = await describe_error(response)
                raise RuntimeError(f"Failed to run query: {response.status} {detail}")
            data = await response.json()

        return QueryResult.model_validate(data).records

    async def create_tooling_record(
        self, sobject: str, fields: Mapping[str, Any]
    ) -> str:
        """Create a Tooling API record and return its ID."""
        url = self.tooling_path(f"sobjects/{sobject}/")

        async with self.session.post(url, json=fields) as response:
            if response.status != 201:
                detail = await describe_error(response)
                raise RuntimeError(
                    f"Failed to create {sobject}: {response.status} {detail}"
                )
            data = await response.json()

        result = SaveResult.model_validate(data)
        if not result.success:
            raise RuntimeError(f"Failed to create {sobject}: {result.errors}")
        return result.id

    async def update_tooling_record(
        self, sobject: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        """Update fields of an existing Tooling API record."""
        url = self.tooling_path(f"sobjects/{sobject}/{record_id}")

        async with self.session.patch(url, json=fields) as response:
            if response.status != 204:
                detail = await describe_error(response)
                raise RuntimeError(
                    f"Failed to update {sobject} {record_id}: "
                    f"{response.status} {detail}"
                )
