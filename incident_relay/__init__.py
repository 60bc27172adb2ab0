"""Incident Relay: forwards alerting-system incident callbacks to a Discord webhook."""
