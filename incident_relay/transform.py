"""
Incident Relay — Incident → Discord embed mapping
=================================================
Pure functions only: no I/O, no clock reads, no shared state.
"""
from __future__ import annotations

from datetime import datetime

from .models import ChatMessage, Embed, Field, IncidentNotification

# Discord embed colours (decimal RGB)
COLOR_RED = 15158332    # open
COLOR_GREEN = 3066993   # closed
COLOR_GREY = 9807270    # anything else

_STATE_COLORS = {
    "open": COLOR_RED,
    "closed": COLOR_GREEN,
}

PLACEHOLDER = "-"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z %Z"


def state_color(state: str) -> int:
    return _STATE_COLORS.get(state, COLOR_GREY)


def format_timestamp(epoch_s: int) -> str:
    """Render epoch seconds in the local timezone, or ``-`` when unset."""
    if epoch_s <= 0:
        return PLACEHOLDER
    try:
        return datetime.fromtimestamp(epoch_s).astimezone().strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        # Beyond what the platform clock can represent.
        return str(epoch_s)


def or_placeholder(value: str) -> str:
    return value if value else PLACEHOLDER


def to_chat_message(notification: IncidentNotification) -> ChatMessage:
    incident = notification.incident
    return ChatMessage(
        embeds=[
            Embed(
                title=incident.summary,
                url=incident.url,
                color=state_color(incident.state),
                fields=[
                    Field(name="Incident ID", value=incident.incident_id),
                    Field(name="Policy", value=or_placeholder(incident.policy_name), inline=True),
                    Field(name="Condition", value=or_placeholder(incident.condition_name), inline=True),
                    Field(name="Started At", value=format_timestamp(incident.started_at)),
                    Field(name="Ended At", value=format_timestamp(incident.ended_at)),
                ],
            )
        ]
    )
