"""Response bodies shared by several routers."""

from pydantic import BaseModel


class Message(BaseModel):
    """Plain acknowledgement such as ``{"msg": "contact removed"}``."""

    msg: str
