"""Celery tasks for lead notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from apps.site_settings.models import SiteSetting

from .models import CustomerRequest

logger = logging.getLogger(__name__)


def notification_recipient() -> str:
    return settings.LEADS_NOTIFICATION_EMAIL or SiteSetting.load().support_email


@shared_task
def notify_new_customer_request(request_id: int) -> bool:
    """E-mail the office about a new customer request."""
    try:
        request = CustomerRequest.objects.select_related("city", "district", "neighborhood").get(pk=request_id)
    except CustomerRequest.DoesNotExist:
        logger.warning("Customer request %s vanished before notification", request_id)
        return False

    recipient = notification_recipient()
    if not recipient:
        logger.warning("No recipient configured for customer request %s", request_id)
        return False

    location = " / ".join(
        place.name for place in (request.city, request.district, request.neighborhood) if place is not None
    )
    lines = [
        f"Talep türü: {request.get_type_display()}",
        f"Ad Soyad: {request.full_name}",
        f"Telefon: {request.phone}",
    ]
    if request.email:
        lines.append(f"E-posta: {request.email}")
    if location:
        lines.append(f"Konum: {location}")
    if request.notes:
        lines.append(f"Notlar: {request.notes}")

    send_mail(
        subject=f"Yeni müşteri talebi: {request.full_name}",
        message="\n".join(lines),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient],
    )
    logger.info("Customer request %s notification sent to %s", request_id, recipient)
    return True
