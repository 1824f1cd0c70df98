from __future__ import annotations

from typing import Optional

from loguru import logger

from src.config import Settings, get_settings
from src.notifications.formatter import with_link
from src.notifications.whatsapp import WhatsAppSender


class NotificationDispatcher:
    """Sends alert messages to every configured recipient."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def dispatch(self, message: str, url: Optional[str] = None) -> int:
        """Send a message, with ``url`` as a trailing link line.

        Returns:
            Number of recipients reached; 0 when notifications are disabled,
            not configured, or every send failed.
        """
        if not self.settings.notification_enabled:
            logger.info("Notifications are disabled, skipping dispatch")
            return 0

        if not WhatsAppSender.is_configured(self.settings):
            logger.warning("WhatsApp config missing, alert not sent")
            return 0

        sender = WhatsAppSender(self.settings)
        try:
            sent = sender.send(with_link(message, url))
        except Exception as e:
            logger.error(f"WhatsApp alert failed: {e}")
            return 0

        if sent:
            logger.info(f"WhatsApp alert sent to {sent} recipient(s)")
        else:
            logger.error("WhatsApp alert failed for every recipient")
        return sent
