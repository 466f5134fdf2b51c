"""Base model configuration for Salesforce API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_pascal


class Model(BaseModel):
    """Base model for REST payloads using camelCase field names."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class SObjectModel(BaseModel):
    """Base model for sObject records using PascalCase field names."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_pascal, populate_by_name=True
    )
