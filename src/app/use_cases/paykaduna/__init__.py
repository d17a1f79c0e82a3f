"""Use cases específicos do PayKaduna."""

from .process_webhook_event import ProcessWebhookEventUseCase, WebhookProcessingResult

__all__ = [
    "ProcessWebhookEventUseCase",
    "WebhookProcessingResult",
]
