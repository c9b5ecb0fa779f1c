"""Template context shared by every page."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.core.cache import cache  # type: ignore

from apps.site_settings.models import DEFAULTS

from .api import ApiError, fetch_json

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


DEFAULT_DESIGN = {_camel(key): value for key, value in DEFAULTS.items()}
DEFAULT_DESIGN.update({"logoUrl": "", "faviconUrl": "", "address": "", "showOwnerTitle": True})


def load_design() -> dict:
    """Settings from ``GET /settings``, cached for the process lifetime.

    Built-in defaults are used (and not cached) while the API is unreachable.
    """
    design = cache.get(settings.SITE_SETTINGS_CACHE_KEY)
    if design is not None:
        return design
    try:
        fetched = fetch_json("/settings")
    except ApiError as exc:
        logger.warning("Site settings could not be loaded, using defaults: %s", exc)
        return dict(DEFAULT_DESIGN)
    design = {**DEFAULT_DESIGN, **{key: value for key, value in (fetched or {}).items() if value is not None}}
    cache.set(settings.SITE_SETTINGS_CACHE_KEY, design, settings.SITE_SETTINGS_CACHE_TIMEOUT)
    return design


def invalidate_design() -> None:
    cache.delete(settings.SITE_SETTINGS_CACHE_KEY)


def design(request) -> dict:
    return {
        "design": load_design(),
        "auth_session": getattr(request, "auth_session", None),
    }
