"""Shared identifiers for the client package."""
SERVICE_NAME = "oneshot"
