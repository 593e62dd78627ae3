from pydantic import BaseModel

CLIENT_STATUSES = ("active", "inactive")


class ClientInput(BaseModel):
    name: str
    email: str
