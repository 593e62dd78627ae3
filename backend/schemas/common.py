from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    # Request bodies arrive in camelCase from the web client
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(BaseModel):
    success: bool
    id: Optional[str] = None


class StatusUpdate(BaseModel):
    status: Optional[str] = None
