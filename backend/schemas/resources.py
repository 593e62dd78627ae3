from pydantic import BaseModel, ConfigDict
from typing import Optional


class ResourceInput(BaseModel):
    # Resources are free-form; unknown keys are stored as sent
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
