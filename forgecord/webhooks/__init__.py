"""Webhook sending by URL."""

from forgecord.webhooks.sender import WebhookSender

__all__ = ["WebhookSender"]
