"""Reference data for filter forms (locations, branches, attribute schema).

A failed load degrades to an empty option list and a warning in the log.
"""

from __future__ import annotations

import logging
from typing import Any

from .api import ApiError, fetch_json

logger = logging.getLogger(__name__)


def _load(path: str, params: dict[str, Any] | None = None) -> list[dict]:
    try:
        data = fetch_json(path, params=params)
    except ApiError as exc:
        logger.warning("Reference data %s could not be loaded: %s", path, exc)
        return []
    return data if isinstance(data, list) else []


def load_cities() -> list[dict]:
    return _load("/cities")


def load_districts(city_id) -> list[dict]:
    if not city_id:
        return []
    return _load("/districts", {"cityId": city_id})


def load_neighborhoods(district_id) -> list[dict]:
    """Neighborhoods are only offered once a district is chosen."""
    if not district_id:
        return []
    return _load("/neighborhoods", {"districtId": district_id})


def load_branch_neighborhoods(branch_id) -> list[dict]:
    return _load(f"/branches/{branch_id}/neighborhoods")


def load_branches() -> list[dict]:
    return _load("/branches")


def load_consultants() -> list[dict]:
    return _load("/consultants")


def load_attribute_definitions(category: str | None, status: str | None = None) -> list[dict]:
    if not category:
        return []
    params = {"category": category}
    if status:
        params["status"] = status
    return _load("/listing-attributes", params)
