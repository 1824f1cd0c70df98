from __future__ import annotations

from typing import List, Optional

import httpx
from loguru import logger

from src.config import Settings, get_settings

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"
SEND_MESSAGE_TIMEOUT = 10  # seconds


def whatsapp_address(number: str) -> str:
    """Twilio expects WhatsApp endpoints as ``whatsapp:+<number>``."""
    number = number.strip()
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


class WhatsAppSender:
    """Send WhatsApp messages through the Twilio Messages API."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.account_sid = settings.twilio_account_sid
        self.auth_token = settings.twilio_auth_token
        self.from_number = settings.twilio_whatsapp_number
        self.recipients: List[str] = settings.recipients

    @classmethod
    def is_configured(cls, settings: Optional[Settings] = None) -> bool:
        """Check that credentials, a sender and at least one recipient are set."""
        settings = settings or get_settings()
        return bool(
            settings.twilio_account_sid
            and settings.twilio_auth_token
            and settings.twilio_whatsapp_number
            and settings.recipients
        )

    def send(self, text: str) -> int:
        """Send ``text`` to every recipient.

        Returns:
            Number of recipients the message was delivered to.
        """
        url = f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json"
        sent = 0
        with httpx.Client(
            timeout=SEND_MESSAGE_TIMEOUT, auth=(self.account_sid, self.auth_token)
        ) as client:
            for to in self.recipients:
                payload = {
                    "From": whatsapp_address(self.from_number),
                    "To": whatsapp_address(to),
                    "Body": text,
                }
                try:
                    response = client.post(url, data=payload)
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    logger.error(
                        f"Twilio API error for {to}: "
                        f"{e.response.status_code} - {e.response.text}"
                    )
                    continue
                except httpx.RequestError as e:
                    logger.error(f"Twilio request failed for {to}: {e}")
                    continue
                sent += 1

        return sent
