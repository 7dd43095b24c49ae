# backend/wellclass/schemas/messaging.py
from pydantic import Field

from ._strict_base import StrictModel, StrictRequestModel


class WhatsAppLinkRequest(StrictRequestModel):
    phone: str = Field(..., min_length=1, max_length=40)
    message: str = Field(..., max_length=2000)


class WhatsAppLinkResponse(StrictModel):
    url: str
