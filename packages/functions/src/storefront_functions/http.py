"""JsonReply <-> Azure Functions HTTP types, plus CORS preflight."""

from __future__ import annotations

import json
from typing import TypeVar

import azure.functions as func
from pydantic import BaseModel, ValidationError
from storefront_manager.replies import CORS_HEADERS, JsonReply, invalid_body_reply

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_http_response(reply: JsonReply) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(reply.body),
        status_code=reply.status,
        headers=dict(CORS_HEADERS),
        mimetype="application/json",
    )


def handle_options() -> func.HttpResponse:
    return func.HttpResponse(status_code=204, headers=dict(CORS_HEADERS))


def parse_body(req: func.HttpRequest, model: type[ModelT]) -> ModelT | JsonReply:
    """Validate the JSON body into `model`, or return the 400 reply."""
    try:
        return model.model_validate(req.get_json())
    except (ValueError, ValidationError):
        return invalid_body_reply()
