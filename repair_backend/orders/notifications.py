# orders/notifications.py

"""
MESSAGING COLLABORATOR

The system never sends messages itself. A notifier turns (phone, message) into
something the portal UI opens, here a WhatsApp deep link, and returns
immediately; delivery is never awaited or confirmed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    phone: str
    message: str
    url: str

    def as_dict(self) -> dict:
        return {"phone": self.phone, "message": self.message, "url": self.url}


class WhatsAppLinkNotifier:
    def __init__(self, base_url: str | None = None):
        base = base_url or getattr(settings, "WHATSAPP_BASE_URL", "https://wa.me")
        self.base_url = base.rstrip("/")

    def notify(self, phone: str, message: str) -> Notification:
        digits = re.sub(r"\D", "", phone or "")
        url = f"{self.base_url}/{digits}?text={quote(message)}"
        logger.debug("WhatsApp link built", extra={"phone": digits})
        return Notification(phone=digits, message=message, url=url)
