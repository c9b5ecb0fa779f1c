"""CMS pages made of content blocks."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PageSetting(models.Model):
    """A static page (``/sayfa/<slug>``) with an ordered list of blocks.

    ``content`` holds dicts such as
    ``{"id": "block-1", "type": "html", "content": "<p>...</p>"}``.
    """

    slug = models.SlugField(_("Slug"), max_length=255, unique=True)
    title = models.CharField(_("Başlık"), max_length=255)
    meta_title = models.CharField(_("Meta başlık"), max_length=255, blank=True)
    meta_description = models.CharField(_("Meta açıklama"), max_length=500, blank=True)
    meta_keywords = models.CharField(_("Meta anahtar kelimeler"), max_length=500, blank=True)
    og_image = models.CharField(_("Paylaşım görseli"), max_length=500, blank=True)
    content = models.JSONField(_("İçerik blokları"), default=list, blank=True)
    is_published = models.BooleanField(_("Yayında"), default=False)
    show_in_menu = models.BooleanField(_("Menüde göster"), default=False)
    menu_order = models.PositiveIntegerField(_("Menü sırası"), default=0)
    template = models.CharField(_("Şablon"), max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Sayfa")
        verbose_name_plural = _("Sayfalar")
        ordering = ["menu_order", "title"]

    def __str__(self) -> str:
        return self.title
