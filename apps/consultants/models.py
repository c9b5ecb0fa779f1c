"""Consultant model."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Consultant(models.Model):
    """Danışman profili (kullanıcı + şube + iletişim bilgileri)."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="consultant_profile",
    )
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="consultants",
    )
    title = models.CharField(_("Unvan"), max_length=255, blank=True)
    whatsapp_number = models.CharField(_("WhatsApp"), max_length=30, blank=True)
    contact_phone = models.CharField(_("Telefon"), max_length=30, blank=True)
    bio = models.TextField(_("Hakkında"), blank=True)
    photo_url = models.CharField(_("Fotoğraf"), max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Danışman")
        verbose_name_plural = _("Danışmanlar")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.user.get_full_name()
