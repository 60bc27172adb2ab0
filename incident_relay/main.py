"""
Incident Relay runtime
======================
Receives incident notifications from the alerting system and forwards them
to a Discord webhook as a single embed.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .config import Settings, settings as default_settings
from .notifications.discord import DiscordWebhookDelivery
from .relay import NotificationRelay
from .utils.errors import RelayError
from .utils.logging_utils import clear_request_id, configure_logging, set_request_id, structured_log

logger = logging.getLogger("incident_relay")


def create_app(settings: Settings | None = None, http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the ASGI app.

    ``settings`` and ``http_client`` are injected by tests; when omitted the
    process-wide settings are used and a client is created for the app's
    lifetime.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_client = http_client is None
        client = http_client or httpx.AsyncClient(timeout=settings.delivery_timeout_s)
        app.state.relay = NotificationRelay(DiscordWebhookDelivery(client, settings.delivery_timeout_s))
        logger.info("%s v%s ready (env=%s).", settings.app_name, settings.app_version, settings.app_env)
        if not settings.auth_token:
            logger.warning("AUTH_TOKEN is not set; every request will be rejected with 500")
        if not settings.destination_webhook_url:
            logger.warning("DESTINATION_WEBHOOK_URL is not set; every request will be rejected with 500")
        try:
            yield
        finally:
            if owns_client:
                await client.aclose()
            logger.info("%s shutdown complete.", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Relays alerting-system incident notifications to a Discord webhook.",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.monotonic()
        request.state.request_id = request_id
        token = set_request_id(request_id)
        try:
            response = await call_next(request)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            response.headers["x-request-id"] = request_id
            structured_log(
                logger, logging.INFO, "http_request",
                method=request.method, path=request.url.path, status_code=response.status_code, elapsed_ms=elapsed_ms,
            )
            return response
        finally:
            clear_request_id(token)

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        logger.warning(
            "relay failed: %s status=%s reason=%s request_id=%s",
            type(exc).__name__, exc.status_code, exc.reason, getattr(request.state, "request_id", "-"),
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled request error: path=%s request_id=%s", request.url.path, getattr(request.state, "request_id", "-"))
        return PlainTextResponse("Internal Server Error", status_code=500)

    from .api.routes import router as relay_router
    app.include_router(relay_router)

    @app.get("/healthz", include_in_schema=False)
    async def healthz():
        return {"status": "ok", "system": settings.app_name, "version": settings.app_version}

    return app


app = create_app()
