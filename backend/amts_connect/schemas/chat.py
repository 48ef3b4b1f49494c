from typing import Annotated

from pydantic import StringConstraints

from .common import CamelModel


class ChatRequest(CamelModel):
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ChatReply(CamelModel):
    success: bool = True
    reply: str
