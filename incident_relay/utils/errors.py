from __future__ import annotations


class RelayError(Exception):
    """Base for every failure the relay reports to its caller.

    ``message`` is the only text the caller sees; ``reason`` is diagnostic
    detail for the server log.
    """

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, reason: str = ""):
        super().__init__(reason or self.message)
        self.reason = reason or self.message


class ConfigurationError(RelayError):
    status_code = 500
    message = "Internal Server Error"


class AuthError(RelayError):
    status_code = 400
    message = "Invalid Request"


class ShapeError(RelayError):
    status_code = 400
    message = "Invalid Request"


class DecodeError(RelayError):
    status_code = 400
    message = "Bad Request"


class SerializationError(RelayError):
    status_code = 500
    message = "Internal Server Error"


class DeliveryError(RelayError):
    status_code = 502
    message = "Failed to send to Discord"

    def __init__(self, reason: str = "", upstream_status: int | None = None):
        super().__init__(reason)
        self.upstream_status = upstream_status
