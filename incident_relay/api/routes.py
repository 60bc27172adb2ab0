"""
Incident Relay — Inbound webhook route
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..config import Settings
from ..relay import NotificationRelay
from ..validation import validate_request

router = APIRouter()

# Every method is routed here so a non-POST gets the relay's 400, not a 405.
RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def first_query_value(request: Request, name: str) -> str | None:
    # A repeated parameter resolves to its first occurrence.
    values = request.query_params.getlist(name)
    return values[0] if values else None


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_relay(request: Request) -> NotificationRelay:
    return request.app.state.relay


@router.api_route("/", methods=RELAY_METHODS, response_class=PlainTextResponse)
async def receive_incident(
    request: Request,
    settings: Settings = Depends(get_settings),
    relay: NotificationRelay = Depends(get_relay),
):
    destination = validate_request(
        settings,
        method=request.method,
        content_type=request.headers.get("content-type"),
        auth_token=first_query_value(request, "auth_token"),
    )
    body = await request.body()
    await relay.relay(body, destination)
    return PlainTextResponse("OK")
