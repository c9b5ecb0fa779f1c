"""Listing domain models for Emlaknomi.

İlanlar, ilan görselleri, ilan numarası sayacı ve kategori bazlı ilan
özellik tanımları. Kategoriye özgü değerler (oda sayısı, ısıtma, bina yaşı,
olanaklar) ``Listing.attributes`` JSON alanında tutulur; hangi alanların
gösterileceğini ``ListingAttributeDefinition`` belirler.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models, transaction  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.locations.models import Location
from shared.domain.value_objects import Money, to_decimal
from shared.text import turkish_slugify

from . import constants


class Listing(models.Model):
    """Satılık veya kiralık gayrimenkul ilanı."""

    class Status(models.TextChoices):
        FOR_SALE = constants.FOR_SALE, _("Satılık")
        FOR_RENT = constants.FOR_RENT, _("Kiralık")

    class Category(models.TextChoices):
        HOUSING = "HOUSING", _("Konut")
        LAND = "LAND", _("Arsa")
        COMMERCIAL = "COMMERCIAL", _("Ticari")
        TRANSFER = "TRANSFER", _("Devren")
        FIELD = "FIELD", _("Tarla")
        GARDEN = "GARDEN", _("Bahçe")
        HOBBY_GARDEN = "HOBBY_GARDEN", _("Hobi Bahçesi")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    listing_no = models.CharField(
        _("İlan no"),
        max_length=constants.LISTING_NO_LENGTH,
        unique=True,
        blank=True,
        help_text=_("Boş bırakılırsa otomatik üretilir (00001, 00002, ...)."),
    )
    title = models.CharField(_("Başlık"), max_length=255)
    slug = models.SlugField(_("Slug"), max_length=300, unique=True, blank=True)
    description = models.TextField(_("Açıklama"), blank=True)
    price = models.DecimalField(
        _("Fiyat"),
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    currency = models.CharField(_("Para birimi"), max_length=3, default="TRY")
    status = models.CharField(_("Durum"), max_length=20, choices=Status.choices)
    category = models.CharField(_("Kategori"), max_length=20, choices=Category.choices)
    sub_property_type = models.CharField(_("Alt tür"), max_length=50, blank=True)
    area_gross = models.DecimalField(_("Brüt m²"), max_digits=10, decimal_places=2, null=True, blank=True)
    area_net = models.DecimalField(_("Net m²"), max_digits=10, decimal_places=2, null=True, blank=True)
    city = models.ForeignKey(
        Location,
        on_delete=models.PROTECT,
        related_name="city_listings",
        limit_choices_to={"kind": Location.Kind.CITY},
    )
    district = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="district_listings",
        limit_choices_to={"kind": Location.Kind.DISTRICT},
    )
    neighborhood = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="neighborhood_listings",
        limit_choices_to={"kind": Location.Kind.NEIGHBORHOOD},
    )
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.PROTECT,
        related_name="listings",
    )
    consultant = models.ForeignKey(
        "consultants.Consultant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="listings",
    )
    attributes = models.JSONField(
        _("Özellikler"),
        default=dict,
        blank=True,
        help_text=_("Kategoriye özgü alanlar: roomCount, heatingType, hasElevator..."),
    )
    is_opportunity = models.BooleanField(_("Fırsat ilanı"), default=False)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    google_maps_url = models.URLField(_("Google Maps bağlantısı"), max_length=1000, blank=True)
    hide_location = models.BooleanField(_("Konumu gizle"), default=False)
    meta_title = models.CharField(max_length=255, blank=True)
    meta_description = models.CharField(max_length=500, blank=True)
    meta_keywords = models.CharField(max_length=500, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_listings",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("İlan")
        verbose_name_plural = _("İlanlar")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "category"]),
            models.Index(fields=["branch", "-created_at"]),
            models.Index(fields=["is_opportunity"]),
        ]

    def __str__(self) -> str:
        return f"{self.listing_no} {self.title}".strip()

    def save(self, *args, **kwargs):  # type: ignore
        if not self.listing_no:
            self.listing_no = ListingCounter.next_listing_no()
        if not self.slug:
            self.slug = f"{turkish_slugify(self.title)}-{self.listing_no}"
        super().save(*args, **kwargs)

    @property
    def money(self) -> Money:
        return Money(to_decimal(self.price) or Decimal("0"), self.currency)

    @property
    def cover_image(self) -> "ListingImage | None":
        images = list(self.images.all())
        for image in images:
            if image.is_cover:
                return image
        return images[0] if images else None


class ListingImage(models.Model):
    """İlan görseli. Bir ilanın en fazla bir kapak görseli olur."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    listing = models.ForeignKey(Listing, on_delete=models.CASCADE, related_name="images")
    url = models.CharField(max_length=1000, blank=True)
    image = models.ImageField(upload_to="listings/", blank=True)
    is_cover = models.BooleanField(default=False)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("İlan görseli")
        verbose_name_plural = _("İlan görselleri")
        ordering = ["-is_cover", "sort_order", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["listing"],
                condition=models.Q(is_cover=True),
                name="single_cover_image_per_listing",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.listing_id} [{self.sort_order}]"

    @property
    def public_url(self) -> str:
        if self.url:
            return self.url
        return self.image.url if self.image else ""


class ListingCounter(models.Model):
    """Tek satırlık ilan numarası sayacı."""

    id = models.CharField(primary_key=True, max_length=20, default="default")
    last_number = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("İlan sayacı")
        verbose_name_plural = _("İlan sayaçları")

    def __str__(self) -> str:
        return f"{self.id}: {self.last_number}"

    @classmethod
    def next_listing_no(cls) -> str:
        """Next free 5-digit listing number (``00001``, ``00002``, ...)."""
        with transaction.atomic():
            cls.objects.get_or_create(id="default")
            counter = cls.objects.select_for_update().get(id="default")
            while True:
                counter.last_number += 1
                listing_no = str(counter.last_number).zfill(constants.LISTING_NO_LENGTH)
                if not Listing.objects.filter(listing_no=listing_no).exists():
                    break
            counter.save(update_fields=["last_number"])
        return listing_no


class ListingAttributeDefinition(models.Model):
    """Kategori (ve isteğe bağlı durum/alt tür) için ilan özellik tanımı."""

    class AttributeType(models.TextChoices):
        TEXT = "TEXT", _("Metin")
        NUMBER = "NUMBER", _("Sayı")
        SELECT = "SELECT", _("Seçim")
        BOOLEAN = "BOOLEAN", _("Evet/Hayır")

    category = models.CharField(_("Kategori"), max_length=20, choices=Listing.Category.choices)
    status = models.CharField(
        _("Durum"),
        max_length=20,
        choices=Listing.Status.choices,
        blank=True,
        help_text=_("Boşsa her iki durumda da gösterilir."),
    )
    sub_property_type = models.CharField(_("Alt tür"), max_length=50, blank=True)
    key = models.CharField(_("Anahtar"), max_length=100)
    label = models.CharField(_("Etiket"), max_length=255)
    type = models.CharField(_("Tür"), max_length=20, choices=AttributeType.choices, default=AttributeType.TEXT)
    options = models.JSONField(_("Seçenekler"), default=list, blank=True)
    allows_multiple = models.BooleanField(default=False)
    is_required = models.BooleanField(default=False)
    sort_order = models.IntegerField(default=0)
    group_name = models.CharField(_("Grup"), max_length=100, blank=True)
    suffix = models.CharField(_("Birim"), max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("İlan özellik tanımı")
        verbose_name_plural = _("İlan özellik tanımları")
        ordering = ["category", "sort_order", "label"]
        constraints = [
            models.UniqueConstraint(
                fields=["category", "status", "sub_property_type", "key"],
                name="unique_listing_attribute_key",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.category}: {self.label}"
