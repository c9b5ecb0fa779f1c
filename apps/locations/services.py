"""Domain services for locations: delete guards and neighbor expansion."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from .models import Location, NeighborhoodNeighbor

logger = logging.getLogger(__name__)

DEFAULT_NEIGHBOR_DISTANCE_KM = 3


class LocationInUseError(Exception):
    """Raised when a city still has listings, branches or sub-locations."""


def ensure_city_can_be_deleted(city: Location) -> None:
    related = {
        "listings": city.city_listings.count(),
        "branches": city.city_branches.count(),
        "districts": city.get_descendant_count(),
    }
    if any(related.values()):
        logger.warning("Refusing to delete city %s: %s", city.pk, related)
        raise LocationInUseError("City has related data. Remove listings/branches first.")


def expand_with_neighbors(
    neighborhood_ids: Iterable,
    max_distance: Decimal | int | float | None = None,
) -> list:
    """Return the given neighborhood ids plus neighbors within ``max_distance`` km.

    Order is preserved: the selected ids first, then newly found neighbors.
    """
    selected = [str(pk) for pk in neighborhood_ids]
    if not selected:
        return []
    distance = Decimal(str(max_distance or DEFAULT_NEIGHBOR_DISTANCE_KM))
    neighbor_ids = NeighborhoodNeighbor.objects.filter(
        neighborhood_id__in=selected,
        distance__lte=distance,
    ).values_list("neighbor_id", flat=True)

    result = list(dict.fromkeys(selected))
    for neighbor_id in neighbor_ids:
        if str(neighbor_id) not in result:
            result.append(str(neighbor_id))
    return result


def neighbors_of(neighborhood: Location, max_distance=None):
    links = NeighborhoodNeighbor.objects.filter(neighborhood=neighborhood).select_related(
        "neighbor", "neighbor__parent"
    )
    if max_distance:
        links = links.filter(distance__lte=Decimal(str(max_distance)))
    return links.order_by("distance")
