"""
Incident Relay — Inbound request checks
=======================================
Runs before the body is read. Checks in order, first failure wins:

  1. AUTH_TOKEN configured                 → ConfigurationError (500)
  2. ?auth_token matches                   → AuthError (400)
  3. DESTINATION_WEBHOOK_URL configured    → ConfigurationError (500)
  4. destination URL parses                → ConfigurationError (500)
  5. POST + Content-Type: application/json → ShapeError (400)
"""
from __future__ import annotations

import hmac
import logging

import httpx

from .config import Settings
from .utils.errors import AuthError, ConfigurationError, ShapeError
from .utils.logging_utils import structured_log

logger = logging.getLogger("incident_relay.validation")

JSON_CONTENT_TYPE = "application/json"


def token_matches(supplied: str | None, expected: str) -> bool:
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def parse_destination(raw: str) -> httpx.URL:
    """Parse the destination webhook URL; raises ConfigurationError when unusable."""
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise ConfigurationError(f"DESTINATION_WEBHOOK_URL does not parse: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError("DESTINATION_WEBHOOK_URL must be an absolute http(s) URL")
    return url


def validate_request(
    settings: Settings,
    *,
    method: str,
    content_type: str | None,
    auth_token: str | None,
) -> httpx.URL:
    """Return the parsed destination URL when the request may proceed."""
    if not settings.auth_token:
        structured_log(logger, logging.ERROR, "config_missing", setting="AUTH_TOKEN")
        raise ConfigurationError("AUTH_TOKEN is not set")

    if not token_matches(auth_token, settings.auth_token):
        structured_log(
            logger, logging.WARNING, "auth_failed",
            reason="missing" if auth_token is None else "mismatch",
        )
        raise AuthError("invalid auth_token")

    if not settings.destination_webhook_url:
        structured_log(logger, logging.ERROR, "config_missing", setting="DESTINATION_WEBHOOK_URL")
        raise ConfigurationError("DESTINATION_WEBHOOK_URL is not set")

    try:
        destination = parse_destination(settings.destination_webhook_url)
    except ConfigurationError as exc:
        structured_log(logger, logging.ERROR, "config_invalid", setting="DESTINATION_WEBHOOK_URL", reason=exc.reason)
        raise

    if method != "POST" or content_type != JSON_CONTENT_TYPE:
        structured_log(
            logger, logging.WARNING, "invalid_request_shape",
            method=method, content_type=content_type,
        )
        raise ShapeError(f"method={method} content_type={content_type}")

    return destination
