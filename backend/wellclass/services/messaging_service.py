"""WhatsApp deep links for contacting a teacher or student."""

import logging
import re
from typing import Optional
from urllib.parse import quote

from ..core.config import settings
from ..core.exceptions import ValidationException

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: str) -> str:
    return _NON_DIGITS.sub("", phone or "")


def build_whatsapp_link(phone: str, message: str, *, pattern: Optional[str] = None) -> str:
    """
    Build a ``wa.me`` link that opens a chat with ``message`` prefilled.

    The phone is reduced to digits and must then match the configured
    pattern (country code, area code and number).

    Raises:
        ValidationException: Phone does not match or message is empty
    """
    digits = normalize_phone(phone)
    if not digits or not re.fullmatch(pattern or settings.whatsapp_phone_pattern, digits):
        raise ValidationException("Invalid phone number", code="INVALID_PHONE", details={"phone": phone})
    if not message or not message.strip():
        raise ValidationException("Message is required", code="EMPTY_MESSAGE")

    # Unreserved marks stay literal
    text = quote(message, safe="!'()*")
    url = f"{settings.whatsapp_base_url.rstrip('/')}/{digits}?text={text}"
    logger.debug(f"Built WhatsApp link for {digits[:4]}****")
    return url
