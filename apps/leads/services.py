"""Lead services."""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction  # type: ignore
from kombu.exceptions import OperationalError  # type: ignore

from .models import ConsultantRequest, CustomerRequest, RequestStatus
from .tasks import notify_new_customer_request

logger = logging.getLogger(__name__)


class RequestNotFound(Exception):
    pass


def status_filter(value: str | None) -> str | None:
    """Known status values filter the list, anything else is ignored."""
    return value if value in RequestStatus.values else None


def _enqueue_customer_notification(pk) -> None:
    try:
        notify_new_customer_request.delay(pk)
    except OperationalError as exc:
        logger.error("Notification for customer request %s could not be queued: %s", pk, exc)


@transaction.atomic
def create_customer_request(data: dict[str, Any]) -> CustomerRequest:
    request = CustomerRequest.objects.create(**data)
    logger.info("Customer request %s created (%s)", request.pk, request.type)
    transaction.on_commit(lambda: _enqueue_customer_notification(request.pk))
    return request


def create_consultant_request(user, data: dict[str, Any]) -> ConsultantRequest:
    request = ConsultantRequest.objects.create(created_by=user, **data)
    logger.info("Consultant request %s created for consultant %s", request.pk, request.consultant_id)
    return request


def update_status(model, pk, status: str):
    instance = model.objects.filter(pk=pk).first()
    if instance is None:
        raise RequestNotFound(f"{model.__name__} {pk} not found")
    previous = instance.status
    instance.status = status
    instance.save(update_fields=["status", "updated_at"])
    logger.info("%s %s status %s -> %s", model.__name__, pk, previous, status)
    return instance
