"""FilterSet for the public listing search (``GET /listings``).

Query parameter names are the camelCase names the site sends. Values kept
in ``Listing.attributes`` (room count, heating, amenities...) are filtered
with JSON key lookups.
"""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from . import constants
from .models import Listing

TRUE_VALUES = {"true", "1"}
FALSE_VALUES = {"false", "0"}


def _csv(value) -> list[str]:
    return [part.strip() for part in str(value or "").split(",") if part.strip()]


class ListingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Listing.Status.choices)
    category = django_filters.ChoiceFilter(choices=Listing.Category.choices)
    subPropertyType = django_filters.CharFilter(field_name="sub_property_type")

    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    minArea = django_filters.NumberFilter(field_name="area_gross", lookup_expr="gte")
    maxArea = django_filters.NumberFilter(field_name="area_gross", lookup_expr="lte")

    # CSV, any of the selected room counts
    roomCount = django_filters.CharFilter(method="filter_room_count")
    buildingAge = django_filters.CharFilter(field_name="buildingAge", method="filter_attribute")
    floor = django_filters.CharFilter(field_name="floor", method="filter_attribute")
    totalFloors = django_filters.CharFilter(field_name="totalFloors", method="filter_attribute")
    heatingType = django_filters.CharFilter(field_name="heatingType", method="filter_attribute")
    landType = django_filters.CharFilter(field_name="landType", method="filter_attribute")
    gardenType = django_filters.CharFilter(field_name="gardenType", method="filter_attribute")
    fieldType = django_filters.CharFilter(field_name="fieldType", method="filter_attribute")
    paymentType = django_filters.CharFilter(field_name="paymentType", method="filter_attribute")
    waterType = django_filters.CharFilter(field_name="waterType", method="filter_attribute")

    cityId = django_filters.NumberFilter(field_name="city_id")
    citySlug = django_filters.CharFilter(field_name="city__slug")
    districtId = django_filters.NumberFilter(field_name="district_id")
    neighborhoodId = django_filters.NumberFilter(field_name="neighborhood_id")
    neighborhoodIds = django_filters.CharFilter(method="filter_neighborhood_ids")
    branchId = django_filters.NumberFilter(field_name="branch_id")
    branchSlug = django_filters.CharFilter(field_name="branch__slug")
    consultantId = django_filters.NumberFilter(field_name="consultant_id")
    isOpportunity = django_filters.BooleanFilter(field_name="is_opportunity")
    q = django_filters.CharFilter(method="filter_q")

    class Meta:
        model = Listing
        fields: list[str] = []

    def filter_room_count(self, queryset, name, value):  # type: ignore
        rooms = _csv(value)
        if not rooms:
            return queryset
        return queryset.filter(attributes__roomCount__in=rooms)

    def filter_attribute(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(**{f"attributes__{name}": value})

    def filter_neighborhood_ids(self, queryset, name, value):  # type: ignore
        ids = [pk for pk in _csv(value) if pk.isdigit()]
        if not ids:
            return queryset
        return queryset.filter(neighborhood_id__in=ids)

    def filter_q(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(description__icontains=value) | Q(listing_no__icontains=value)
        )

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        # Amenities: "true" requires the flag, "false" excludes listings that have it
        for key, _label in constants.AMENITIES:
            raw = str(self.data.get(key, "")).strip().lower()
            if raw in TRUE_VALUES:
                queryset = queryset.filter(**{f"attributes__{key}": True})
            elif raw in FALSE_VALUES:
                # Missing keys count as "no"
                with_flag = Listing.objects.filter(**{f"attributes__{key}": True}).values("pk")
                queryset = queryset.exclude(pk__in=with_flag)
        return queryset
