"""Shared model configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model stored with camelCase field names.

    Records written to the store use the same field names as other clients
    of the key space (``totalTurns``, ``tokenUsage``...). Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
