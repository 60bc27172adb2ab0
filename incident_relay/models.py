"""
Incident Relay — Schemas
========================
Inbound: the alerting system's incident notification (``IncidentNotification``).
Outbound: the chat webhook body (``ChatMessage`` → ``Embed`` → ``Field``).

Every model is frozen; a request builds fresh instances and never mutates them.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, model_validator


class _Inbound(BaseModel):
    # JSON types must match exactly; unknown keys are dropped.
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # An explicit null behaves like an absent key; a null document like {}.
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Incident(_Inbound):
    incident_id: str = ""
    resource_id: str = ""
    resource_name: str = ""
    state: str = ""
    started_at: int = 0
    ended_at: int = 0
    policy_name: str = ""
    condition_name: str = ""
    url: str = ""
    summary: str = ""


class IncidentNotification(_Inbound):
    incident: Incident = Incident()
    version: str = ""


class Field(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    description: str = ""
    color: int
    fields: List[Field] = []


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    embeds: List[Embed] = []
