"""Consultant account management.

Creating a consultant creates the login account too; removing one
detaches their listings before deleting the account.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore

from .models import Consultant

logger = logging.getLogger(__name__)

User = get_user_model()

ACCOUNT_FIELDS = ("name", "email", "password")


class ConsultantEmailTakenError(Exception):
    pass


def _ensure_email_free(email: str, exclude_user_id=None) -> None:
    qs = User.objects.filter(email__iexact=email)
    if exclude_user_id is not None:
        qs = qs.exclude(pk=exclude_user_id)
    if qs.exists():
        raise ConsultantEmailTakenError("Email already exists")


@transaction.atomic
def create_consultant(data: dict[str, Any]) -> Consultant:
    _ensure_email_free(data["email"])
    user = User.objects.create_user(
        email=data.pop("email"),
        password=data.pop("password"),
        name=data.pop("name"),
        role=User.RoleChoices.CONSULTANT,
    )
    consultant = Consultant.objects.create(user=user, **data)
    logger.info("Consultant %s created for user %s", consultant.pk, user.pk)
    return consultant


@transaction.atomic
def update_consultant(consultant: Consultant, data: dict[str, Any]) -> Consultant:
    user = consultant.user
    email = data.pop("email", None)
    if email and email.lower() != user.email.lower():
        _ensure_email_free(email, exclude_user_id=user.pk)
        user.email = email
    name = data.pop("name", None)
    if name is not None:
        user.name = name
    password = data.pop("password", None)
    if password:
        user.set_password(password)
    user.save()

    for field, value in data.items():
        setattr(consultant, field, value)
    consultant.save()
    return consultant


@transaction.atomic
def delete_consultant(consultant: Consultant) -> None:
    consultant_id = consultant.pk
    detached = consultant.listings.update(consultant=None)
    user = consultant.user
    consultant.delete()
    user.delete()
    logger.info("Consultant %s deleted, %s listings detached", consultant_id, detached)
