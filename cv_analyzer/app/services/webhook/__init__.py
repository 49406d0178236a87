from .client import Upload, WebhookClient

__all__ = ["Upload", "WebhookClient"]
