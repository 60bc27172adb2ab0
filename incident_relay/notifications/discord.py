"""
Incident Relay — Discord Webhook Delivery
=========================================
POSTs one ``ChatMessage`` as JSON to the configured Discord webhook.

* One attempt per call, no retry.
* 2xx is success; any other status or a transport error raises DeliveryError.
* The ``httpx.AsyncClient`` is created once by the app and shared across
  requests. Its timeout bounds each connect/read/write step; ``timeout_s``
  bounds the whole call, response body included.
"""
from __future__ import annotations

import asyncio
import logging

import httpx

from ..models import ChatMessage
from ..utils.errors import DeliveryError, SerializationError
from ..utils.logging_utils import structured_log
from .base import DeliveryBase

logger = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json"}


def serialize_message(message: ChatMessage) -> bytes:
    try:
        return message.model_dump_json().encode("utf-8")
    except (ValueError, TypeError) as exc:
        structured_log(logger, logging.ERROR, "serialize_failed", error=str(exc))
        raise SerializationError(f"could not encode chat message: {exc}") from exc


class DiscordWebhookDelivery(DeliveryBase):
    """Delivers embeds through a Discord incoming webhook."""

    def __init__(self, client: httpx.AsyncClient, timeout_s: float = 10.0):
        self._client = client
        self._timeout_s = timeout_s

    async def deliver(self, message: ChatMessage, destination: httpx.URL) -> None:
        body = serialize_message(message)

        try:
            resp = await asyncio.wait_for(
                self._client.post(destination, content=body, headers=_HEADERS),
                timeout=self._timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            structured_log(logger, logging.ERROR, "delivery_timeout", error=str(exc) or type(exc).__name__)
            raise DeliveryError("request to destination timed out") from exc
        except httpx.HTTPError as exc:
            structured_log(logger, logging.ERROR, "delivery_transport_error", error=str(exc) or type(exc).__name__)
            raise DeliveryError(f"transport error: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            structured_log(
                logger, logging.ERROR, "delivery_rejected",
                status_code=resp.status_code,
                payload=body.decode("utf-8"),
                response=resp.text[:200],
            )
            raise DeliveryError(f"destination returned HTTP {resp.status_code}", upstream_status=resp.status_code)

        logger.info("[DiscordWebhookDelivery] Delivered (HTTP %s)", resp.status_code)
