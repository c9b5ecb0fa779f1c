"""Lead capture: requests from site visitors and consultants."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RequestStatus(models.TextChoices):
    NEW = "NEW", _("Yeni")
    IN_PROGRESS = "IN_PROGRESS", _("İşlemde")
    CLOSED = "CLOSED", _("Kapandı")


class CustomerRequest(models.Model):
    """Submitted from the public "sell / rent / valuation" form."""

    class Type(models.TextChoices):
        SELL = "SELL", _("Satmak istiyorum")
        RENT = "RENT", _("Kiraya vermek istiyorum")
        VALUATION = "VALUATION", _("Değerleme")

    full_name = models.CharField(_("Ad Soyad"), max_length=255)
    phone = models.CharField(_("Telefon"), max_length=40)
    email = models.EmailField(_("E-posta"), blank=True)
    type = models.CharField(_("Talep türü"), max_length=20, choices=Type.choices)
    criteria = models.JSONField(_("Kriterler"), null=True, blank=True)
    notes = models.TextField(_("Notlar"), blank=True)
    city = models.ForeignKey(
        "locations.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    district = models.ForeignKey(
        "locations.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    neighborhood = models.ForeignKey(
        "locations.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    status = models.CharField(_("Durum"), max_length=20, choices=RequestStatus.choices, default=RequestStatus.NEW)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Müşteri talebi")
        verbose_name_plural = _("Müşteri talepleri")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.get_type_display()})"


class ConsultantRequest(models.Model):
    """A customer demand recorded by a logged-in team member for a consultant."""

    consultant = models.ForeignKey(
        "consultants.Consultant", on_delete=models.CASCADE, related_name="customer_requests"
    )
    customer_name = models.CharField(_("Müşteri adı"), max_length=255)
    customer_phone = models.CharField(_("Müşteri telefonu"), max_length=40)
    customer_email = models.EmailField(_("Müşteri e-postası"), blank=True)
    request_text = models.TextField(_("Talep"), blank=True)
    criteria = models.JSONField(_("Kriterler"), null=True, blank=True)
    status = models.CharField(_("Durum"), max_length=20, choices=RequestStatus.choices, default=RequestStatus.NEW)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="consultant_requests",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Danışman talebi")
        verbose_name_plural = _("Danışman talepleri")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.customer_name} -> {self.consultant}"
