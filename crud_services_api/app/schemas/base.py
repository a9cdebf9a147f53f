"""
Base model for payloads exchanged in camelCase.

Database columns are snake_case while clients send and receive
camelCase keys (``districtName``, ``jerseyNumber``).  Models derived
from ``CamelModel`` accept either spelling on input and serialise by
alias, which FastAPI does for ``response_model`` by default.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
