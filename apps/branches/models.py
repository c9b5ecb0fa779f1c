"""Branch model."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.locations.models import Location


class Branch(models.Model):
    """Şube: il/ilçe bazlı ofis ve hizmet verdiği mahalleler."""

    name = models.CharField(_("Ad"), max_length=255)
    slug = models.SlugField(_("Slug"), max_length=255, unique=True)
    city = models.ForeignKey(
        Location,
        on_delete=models.PROTECT,
        related_name="city_branches",
        limit_choices_to={"kind": Location.Kind.CITY},
    )
    district = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="district_branches",
        limit_choices_to={"kind": Location.Kind.DISTRICT},
        help_text=_("Şube ilçe bazlıysa doldurulur."),
    )
    neighborhoods = models.ManyToManyField(
        Location,
        blank=True,
        related_name="serving_branches",
        limit_choices_to={"kind": Location.Kind.NEIGHBORHOOD},
    )
    address = models.CharField(_("Adres"), max_length=500, blank=True)
    phone = models.CharField(_("Telefon"), max_length=30, blank=True)
    whatsapp_number = models.CharField(_("WhatsApp"), max_length=30, blank=True)
    email = models.EmailField(_("E-posta"), blank=True)
    map_url = models.URLField(_("Harita bağlantısı"), max_length=1000, blank=True)
    working_hours = models.CharField(_("Çalışma saatleri"), max_length=255, blank=True)
    photo_url = models.CharField(_("Fotoğraf"), max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Şube")
        verbose_name_plural = _("Şubeler")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
