"""
Incident Relay — Delivery channel interface
"""
from abc import ABC, abstractmethod

import httpx

from ..models import ChatMessage


class DeliveryBase(ABC):
    """Outbound channel that hands one chat message to its destination."""

    @abstractmethod
    async def deliver(self, message: ChatMessage, destination: httpx.URL) -> None:
        """
        Send ``message`` once.
        Raises SerializationError or DeliveryError; returns None on success.
        """
        ...

    @property
    def name(self) -> str:
        return self.__class__.__name__
