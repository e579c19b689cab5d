"""JsonReply <-> FastAPI."""

from __future__ import annotations

from fastapi.responses import JSONResponse
from storefront_manager.replies import JsonReply


class ReplyError(Exception):
    """Raised by dependencies to short-circuit a route with a ready reply."""

    def __init__(self, reply: JsonReply) -> None:
        super().__init__(reply.body)
        self.reply = reply


def to_response(reply: JsonReply) -> JSONResponse:
    return JSONResponse(status_code=reply.status, content=reply.body)
