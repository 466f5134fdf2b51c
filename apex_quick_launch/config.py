"""Configuration for the Salesforce org connection."""

from pydantic import BaseModel, SecretStr


class OrgConfig(BaseModel):
    """Configuration for connecting to a Salesforce org."""

    instance_url: str
    access_token: SecretStr
    api_version: str = "60.0"
