"""
Incident Relay — Pipeline
=========================
Decode → Transform → Deliver for one already-validated request.
Each stage raises a RelayError subclass and stops the pipeline.
"""
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .models import ChatMessage, IncidentNotification
from .notifications.base import DeliveryBase
from .transform import to_chat_message
from .utils.errors import DecodeError
from .utils.logging_utils import clear_incident_id, set_incident_id, structured_log

logger = logging.getLogger("incident_relay.relay")


def decode_notification(body: bytes) -> IncidentNotification:
    try:
        return IncidentNotification.model_validate_json(body)
    except ValidationError as exc:
        structured_log(
            logger, logging.WARNING, "decode_failed",
            errors=exc.error_count(), first_error=exc.errors(include_url=False)[0]["msg"],
        )
        raise DecodeError(f"notification payload rejected: {exc.error_count()} error(s)") from exc


class NotificationRelay:
    """Stateless relay; holds only the delivery channel it was built with."""

    def __init__(self, delivery: DeliveryBase):
        self.delivery = delivery

    async def relay(self, body: bytes, destination: httpx.URL) -> ChatMessage:
        notification = decode_notification(body)
        token = set_incident_id(notification.incident.incident_id)
        try:
            message = to_chat_message(notification)
            await self.delivery.deliver(message, destination)
            structured_log(
                logger, logging.INFO, "incident_relayed",
                state=notification.incident.state,
                channel=self.delivery.name,
            )
            return message
        finally:
            clear_incident_id(token)
