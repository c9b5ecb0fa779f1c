"""Site-wide design and contact settings."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

DEFAULT_ID = "default"

DEFAULTS = {
    "site_name": "Emlaknomi",
    "owner_name": "Özcan Aktaş",
    "owner_title": "Danışman",
    "phone_number": "0543 306 14 99",
    "whatsapp_number": "0543 306 14 99",
    "email": "emlaknomiozcan@gmail.com",
    "support_email": "destek@ozcanaktas.com",
    "primary_color": "#1a436e",
    "accent_color": "#e20b0b",
    "background_color": "#e9e9f0",
    "text_color": "#122033",
    "font_family": "Inter",
}


class SiteSetting(models.Model):
    """Singleton row (``id="default"``) read by every page for theming."""

    id = models.CharField(primary_key=True, max_length=20, default=DEFAULT_ID, editable=False)
    site_name = models.CharField(_("Site adı"), max_length=120, default=DEFAULTS["site_name"])
    logo_url = models.CharField(_("Logo"), max_length=500, blank=True)
    favicon_url = models.CharField(_("Favicon"), max_length=500, blank=True)
    owner_name = models.CharField(_("Sahip adı"), max_length=120, default=DEFAULTS["owner_name"])
    owner_title = models.CharField(_("Sahip unvanı"), max_length=120, default=DEFAULTS["owner_title"])
    show_owner_title = models.BooleanField(_("Unvanı göster"), default=True)
    phone_number = models.CharField(_("Telefon"), max_length=40, default=DEFAULTS["phone_number"])
    whatsapp_number = models.CharField(_("WhatsApp"), max_length=40, default=DEFAULTS["whatsapp_number"])
    email = models.CharField(_("E-posta"), max_length=120, default=DEFAULTS["email"])
    support_email = models.CharField(_("Destek e-postası"), max_length=120, default=DEFAULTS["support_email"])
    address = models.CharField(_("Adres"), max_length=500, blank=True)
    primary_color = models.CharField(_("Ana renk"), max_length=20, default=DEFAULTS["primary_color"])
    accent_color = models.CharField(_("Vurgu rengi"), max_length=20, default=DEFAULTS["accent_color"])
    background_color = models.CharField(_("Arka plan rengi"), max_length=20, default=DEFAULTS["background_color"])
    text_color = models.CharField(_("Yazı rengi"), max_length=20, default=DEFAULTS["text_color"])
    font_family = models.CharField(_("Yazı tipi"), max_length=60, default=DEFAULTS["font_family"])
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Site ayarı")
        verbose_name_plural = _("Site ayarları")

    def __str__(self) -> str:
        return self.site_name

    @classmethod
    def load(cls) -> "SiteSetting":
        setting, _created = cls.objects.get_or_create(pk=DEFAULT_ID)
        return setting
