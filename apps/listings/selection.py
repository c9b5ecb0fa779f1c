"""Client-side filtering and sorting of listing payloads.

The search, opportunities and branch pages all narrow and order the
listing dicts returned by the API with ``select_listings``. Items use the
API's camelCase keys; category-specific values live under ``attributes``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from django.utils.dateparse import parse_datetime  # type: ignore

from shared.domain.value_objects import NumericRange, to_decimal
from shared.text import turkish_lower

from .filter_state import FilterState

ENUM_ATTRIBUTES = (
    ("building_age", "buildingAge"),
    ("floor", "floor"),
    ("total_floors", "totalFloors"),
    ("heating_type", "heatingType"),
    ("land_type", "landType"),
    ("payment_type", "paymentType"),
    ("garden_type", "gardenType"),
    ("water_type", "waterType"),
    ("field_type", "fieldType"),
)


def _attribute(item: dict, key: str) -> Any:
    attributes = item.get("attributes") or {}
    if key in attributes:
        return attributes[key]
    return item.get(key)


def _matches_enum(value: Any, selected: str) -> bool:
    if isinstance(value, (list, tuple)):
        return selected in [str(v) for v in value]
    return value is not None and str(value) == selected


def _text_blob(item: dict) -> str:
    parts = [item.get("title"), item.get("description"), item.get("listingNo")]
    for relation in ("city", "district", "neighborhood"):
        related = item.get(relation) or {}
        parts.append(related.get("name"))
    return turkish_lower(" ".join(str(p) for p in parts if p))


def matches(item: dict, state: FilterState) -> bool:
    """True when ``item`` satisfies every constraint set on ``state``."""
    if state.status and item.get("status") != state.status:
        return False
    if state.category and item.get("category") != state.category:
        return False
    if state.sub_property_type and item.get("subPropertyType") != state.sub_property_type:
        return False
    if state.is_opportunity and not item.get("isOpportunity"):
        return False

    if not NumericRange.from_strings(state.min_price, state.max_price).contains(item.get("price")):
        return False
    if not NumericRange.from_strings(state.min_area, state.max_area).contains(item.get("areaGross")):
        return False

    if state.room_count:
        room = _attribute(item, "roomCount")
        if not any(_matches_enum(room, r) for r in state.room_count):
            return False
    for field_name, key in ENUM_ATTRIBUTES:
        selected = getattr(state, field_name)
        if selected and not _matches_enum(_attribute(item, key), selected):
            return False
    for key, wanted in state.amenity_values().items():
        if bool(_attribute(item, key)) != wanted:
            return False

    if state.city_id and str(item.get("cityId")) != state.city_id:
        return False
    if state.district_id and str(item.get("districtId")) != state.district_id:
        return False
    if state.neighborhood_ids and str(item.get("neighborhoodId")) not in state.neighborhood_ids:
        return False

    if state.q:
        blob = _text_blob(item)
        if not all(word in blob for word in turkish_lower(state.q).split()):
            return False
    return True


def _sort_value(item: dict, sort_by: str) -> Decimal | float:
    if sort_by == "createdAt":
        raw = item.get("createdAt")
        if isinstance(raw, datetime):
            return raw.timestamp()
        parsed = parse_datetime(raw) if raw else None
        return parsed.timestamp() if parsed else 0.0
    return to_decimal(item.get(sort_by)) or Decimal(0)


def select_listings(items: Iterable[dict], state: FilterState) -> list[dict]:
    """Filter ``items`` by ``state`` and order them by its sort key.

    Missing prices, areas and dates sort as zero. The sort is stable, so
    equal values keep the API's order.
    """
    selected = [item for item in items if matches(item, state)]
    selected.sort(
        key=lambda item: _sort_value(item, state.sort_by),
        reverse=state.sort_order == "desc",
    )
    return selected
