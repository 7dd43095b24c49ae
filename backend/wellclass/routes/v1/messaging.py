# backend/wellclass/routes/v1/messaging.py
"""
Messaging routes - API v1

Endpoints:
    POST /whatsapp-link → Build a WhatsApp chat link (authenticated)
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.auth import get_current_principal
from ...core.exceptions import DomainException, handle_domain_exception
from ...principal import UserPrincipal
from ...schemas.messaging import WhatsAppLinkRequest, WhatsAppLinkResponse
from ...services.messaging_service import build_whatsapp_link

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messaging-v1"])


@router.post("/whatsapp-link", response_model=WhatsAppLinkResponse)
def create_whatsapp_link(
    payload: WhatsAppLinkRequest,
    principal: UserPrincipal = Depends(get_current_principal),
) -> WhatsAppLinkResponse:
    try:
        return WhatsAppLinkResponse(url=build_whatsapp_link(payload.phone, payload.message))
    except DomainException as e:
        handle_domain_exception(e)
