"""Location models with MPTT tree structure for cities, districts and neighborhoods."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore
from mptt.managers import TreeManager  # type: ignore
from mptt.models import MPTTModel, TreeForeignKey  # type: ignore
from mptt.querysets import TreeQuerySet  # type: ignore

from shared.text import turkish_slugify


class LocationQuerySet(TreeQuerySet):
    def cities(self):
        return self.filter(kind=Location.Kind.CITY)

    def districts(self, city_id=None):
        qs = self.filter(kind=Location.Kind.DISTRICT)
        if city_id:
            qs = qs.filter(parent_id=city_id)
        return qs

    def neighborhoods(self):
        return self.filter(kind=Location.Kind.NEIGHBORHOOD)


class Location(MPTTModel):
    """Hierarchical location: city -> district -> neighborhood."""

    class Kind(models.TextChoices):
        CITY = "CITY", _("İl")
        DISTRICT = "DISTRICT", _("İlçe")
        NEIGHBORHOOD = "NEIGHBORHOOD", _("Mahalle")

    kind = models.CharField(_("Tür"), max_length=20, choices=Kind.choices, default=Kind.CITY)
    name = models.CharField(_("Ad"), max_length=255)
    parent = TreeForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
        verbose_name=_("Üst konum"),
        help_text=_("İlçe için il, mahalle için ilçe; il için boş."),
    )
    slug = models.SlugField(_("Slug"), max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    is_active = models.BooleanField(_("Aktif"), default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TreeManager.from_queryset(LocationQuerySet)()

    class MPTTMeta:
        order_insertion_by = ["name"]

    class Meta:
        verbose_name = _("Konum")
        verbose_name_plural = _("Konumlar")
        ordering = ["tree_id", "lft"]
        constraints = [
            models.UniqueConstraint(fields=["kind", "parent", "slug"], name="unique_location_slug_per_parent"),
        ]
        indexes = [
            models.Index(fields=["kind", "name"]),
            models.Index(fields=["slug"]),
        ]

    def __str__(self) -> str:
        if self.parent_id:
            return f"{self.parent.name} - {self.name}"
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = turkish_slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def is_city(self) -> bool:
        return self.kind == self.Kind.CITY

    @property
    def city(self) -> "Location | None":
        """The root city of this location."""
        if self.is_city:
            return self
        return self.get_root()

    @property
    def district(self) -> "Location | None":
        if self.kind == self.Kind.NEIGHBORHOOD:
            return self.parent
        if self.kind == self.Kind.DISTRICT:
            return self
        return None


class NeighborhoodNeighbor(models.Model):
    """Distance in kilometres between two neighborhoods."""

    neighborhood = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="neighbor_links",
        limit_choices_to={"kind": Location.Kind.NEIGHBORHOOD},
    )
    neighbor = models.ForeignKey(
        Location,
        on_delete=models.CASCADE,
        related_name="+",
        limit_choices_to={"kind": Location.Kind.NEIGHBORHOOD},
    )
    distance = models.DecimalField(_("Mesafe (km)"), max_digits=6, decimal_places=2)

    class Meta:
        verbose_name = _("Komşu mahalle")
        verbose_name_plural = _("Komşu mahalleler")
        ordering = ["neighborhood", "distance"]
        constraints = [
            models.UniqueConstraint(fields=["neighborhood", "neighbor"], name="unique_neighborhood_neighbor"),
        ]

    def __str__(self) -> str:
        return f"{self.neighborhood.name} -> {self.neighbor.name} ({self.distance} km)"
