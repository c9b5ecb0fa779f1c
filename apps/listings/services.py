"""Listing services: numbering, SEO defaults, lookup, branch search and images."""

from __future__ import annotations

import logging
import re
import uuid
from decimal import Decimal
from io import BytesIO
from typing import Any

from django.conf import settings  # type: ignore
from django.core.files.base import ContentFile  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from PIL import Image, UnidentifiedImageError  # type: ignore

from apps.locations.services import expand_with_neighbors
from shared.text import turkish_lower, turkish_slugify

from . import constants
from .models import Listing, ListingCounter, ListingImage

logger = logging.getLogger(__name__)

LISTING_NO_RE = re.compile(r"^\d{%d}$" % constants.LISTING_NO_LENGTH)

# q=lat,lng  @lat,lng  ll=lat,lng
GOOGLE_MAPS_COORD_PATTERNS = (
    re.compile(r"[?&]q=(-?\d+\.?\d*),(-?\d+\.?\d*)"),
    re.compile(r"@(-?\d+\.?\d*),(-?\d+\.?\d*)"),
    re.compile(r"[?&]ll=(-?\d+\.?\d*),(-?\d+\.?\d*)"),
)

META_DESCRIPTION_LENGTH = 160
DEFAULT_TAKE = 20


class ListingNotFound(Exception):
    pass


class ListingImageNotFound(Exception):
    pass


class ListingImageTooLarge(Exception):
    pass


# --- Numbering and SEO -------------------------------------------------------
def generate_listing_no() -> str:
    return ListingCounter.next_listing_no()


def extract_coords_from_google_maps_url(url: str | None) -> tuple[float, float] | None:
    if not url:
        return None
    for pattern in GOOGLE_MAPS_COORD_PATTERNS:
        match = pattern.search(url)
        if match:
            try:
                return float(match.group(1)), float(match.group(2))
            except ValueError:
                continue
    return None


def build_seo_data(data: dict[str, Any], listing_no: str) -> dict[str, str]:
    status_text = constants.status_label(data.get("status")) or "Kiralık"
    title = data.get("title", "")
    description = data.get("description") or ""
    category = turkish_lower(data.get("category") or "")
    return {
        "slug": f"{turkish_slugify(title)}-{listing_no}",
        "meta_title": f"{status_text} {title} - İlan No: {listing_no}",
        "meta_description": (
            description[:META_DESCRIPTION_LENGTH]
            if description
            else f"{status_text} gayrimenkul ilanı. İlan no: {listing_no}"
        ),
        "meta_keywords": f"{turkish_lower(status_text)}, gayrimenkul, emlak, {category}, ilan {listing_no}",
    }


def prepare_listing_data(data: dict[str, Any]) -> dict[str, Any]:
    """Fill listing number, coordinates and SEO fields left blank on creation."""
    data = dict(data)
    listing_no = data.get("listing_no") or generate_listing_no()
    data["listing_no"] = listing_no

    if data.get("google_maps_url") and (data.get("latitude") is None or data.get("longitude") is None):
        coords = extract_coords_from_google_maps_url(data["google_maps_url"])
        if coords:
            data["latitude"], data["longitude"] = coords

    for field, value in build_seo_data(data, listing_no).items():
        if not data.get(field):
            data[field] = value
    return data


@transaction.atomic
def create_listing(user, data: dict[str, Any]) -> Listing:
    listing = Listing.objects.create(created_by=user, **prepare_listing_data(data))
    logger.info("Listing %s created by user %s", listing.listing_no, getattr(user, "pk", None))
    return listing


# --- Lookup ------------------------------------------------------------------
def listing_queryset():
    return Listing.objects.select_related(
        "city", "district", "neighborhood", "branch", "consultant", "consultant__user"
    ).prefetch_related("images")


def find_by_identifier(identifier: str, queryset=None) -> Listing:
    """Resolve a listing by id, then slug, then 5-digit listing number."""
    qs = queryset if queryset is not None else listing_queryset()
    try:
        return qs.get(pk=uuid.UUID(str(identifier)))
    except (ValueError, Listing.DoesNotExist):
        pass
    listing = qs.filter(slug=identifier).first()
    if listing is None and LISTING_NO_RE.match(identifier or ""):
        listing = qs.filter(listing_no=identifier).first()
    if listing is None:
        raise ListingNotFound("Listing not found")
    return listing


def transfer_listing(listing: Listing, consultant, branch=None) -> Listing:
    """Hand a listing over to another consultant, and optionally another branch."""
    previous = listing.consultant_id
    listing.consultant = consultant
    listing.created_by = consultant.user
    update_fields = ["consultant", "created_by", "updated_at"]
    if branch is not None:
        listing.branch = branch
        update_fields.append("branch")
    listing.save(update_fields=update_fields)
    logger.info("Listing %s transferred from consultant %s to %s", listing.listing_no, previous, consultant.pk)
    return listing


# --- Branch search -----------------------------------------------------------
def search_words(q: str) -> list[str]:
    return [
        word
        for word in turkish_lower(q).split()
        if len(word) > 1 and word not in constants.SEARCH_STOP_WORDS
    ]


def _int_or(value: Any, default: int) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return default


def branch_search(branch_slug: str, params: dict[str, Any]) -> dict[str, Any]:
    """Branch-scoped listing search.

    A 5-digit ``q`` is tried as a listing number first, across all branches.
    Otherwise each remaining word of ``q`` is matched against title,
    description, neighborhood and district names; one matching word is
    enough. Returns ``{"items": queryset-slice, "total": int}`` plus
    ``isListingNoSearch``/``branchSlug`` on a listing number hit.
    """
    qs = listing_queryset()
    q = (params.get("q") or "").strip()

    if LISTING_NO_RE.match(q):
        listing = qs.filter(listing_no=q).first()
        if listing is not None:
            return {
                "items": [listing],
                "total": 1,
                "isListingNoSearch": True,
                "branchSlug": listing.branch.slug,
            }

    qs = qs.filter(branch__slug=branch_slug)

    words = search_words(q)
    if words:
        condition = Q()
        for word in words:
            condition |= (
                Q(title__icontains=word)
                | Q(description__icontains=word)
                | Q(neighborhood__name__icontains=word)
                | Q(district__name__icontains=word)
            )
        qs = qs.filter(condition)

    neighborhood_ids = params.get("neighborhood_ids") or []
    if neighborhood_ids:
        if params.get("include_neighbors"):
            neighborhood_ids = expand_with_neighbors(
                neighborhood_ids, params.get("max_neighbor_distance") or constants.DEFAULT_NEIGHBOR_DISTANCE
            )
        qs = qs.filter(neighborhood_id__in=neighborhood_ids)

    for field in ("status", "category", "district_id", "sub_property_type"):
        value = params.get(field)
        if value:
            qs = qs.filter(**{field: value})

    if params.get("min_price") not in (None, ""):
        qs = qs.filter(price__gte=Decimal(params["min_price"]))
    if params.get("max_price") not in (None, ""):
        qs = qs.filter(price__lte=Decimal(params["max_price"]))

    room_counts = params.get("room_count") or []
    if room_counts:
        qs = qs.filter(attributes__roomCount__in=list(room_counts))
    if params.get("building_age"):
        qs = qs.filter(attributes__buildingAge=params["building_age"])

    qs = qs.order_by(ordering_for(params.get("sort"), params.get("order")))

    take = _int_or(params.get("take"), DEFAULT_TAKE)
    skip = _int_or(params.get("skip"), 0)
    total = qs.count()
    return {"items": list(qs[skip : skip + take]), "total": total}


SORT_COLUMNS = {
    "createdAt": "created_at",
    "price": "price",
    "areaGross": "area_gross",
}


def ordering_for(sort: str | None, order: str | None) -> str:
    column = SORT_COLUMNS.get(sort or "", SORT_COLUMNS[constants.DEFAULT_SORT_BY])
    direction = order if order in constants.SORT_ORDERS else constants.DEFAULT_SORT_ORDER
    return f"-{column}" if direction == "desc" else column


# --- Images ------------------------------------------------------------------
def optimize_image(upload):
    """Downscale an uploaded image to ``LISTING_IMAGE_MAX_WIDTH``.

    Returns the original upload when it is already small enough or cannot
    be processed; optimization failures are logged, never raised.
    """
    max_width = getattr(settings, "LISTING_IMAGE_MAX_WIDTH", 1600)
    try:
        upload.seek(0)
        with Image.open(upload) as img:
            if img.width <= max_width:
                upload.seek(0)
                return upload
            image_format = img.format or "JPEG"
            height = round(img.height * max_width / img.width)
            resized = img.resize((max_width, height), Image.LANCZOS)
            if image_format == "JPEG" and resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")
            buffer = BytesIO()
            resized.save(buffer, format=image_format, optimize=True)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        logger.warning("Image optimization skipped for %s: %s", getattr(upload, "name", "upload"), exc)
        upload.seek(0)
        return upload
    return ContentFile(buffer.getvalue(), name=upload.name)


def check_upload_size(upload) -> None:
    max_bytes = getattr(settings, "LISTING_IMAGE_MAX_BYTES", None)
    if max_bytes and upload.size > max_bytes:
        raise ListingImageTooLarge(f"{upload.name} exceeds {max_bytes} bytes")


def _clear_cover(listing: Listing) -> None:
    listing.images.filter(is_cover=True).update(is_cover=False)


@transaction.atomic
def add_image(listing: Listing, *, url: str = "", upload=None, is_cover: bool = False, sort_order: int = 0) -> ListingImage:
    if upload is not None:
        check_upload_size(upload)
    if is_cover:
        _clear_cover(listing)
    image = ListingImage(listing=listing, url=url, is_cover=is_cover, sort_order=sort_order)
    if upload is not None:
        optimized = optimize_image(upload)
        image.image.save(optimized.name, optimized, save=False)
        image.url = image.image.url
    image.save()
    return image


@transaction.atomic
def add_uploaded_images(listing: Listing, uploads, *, set_first_as_cover: bool = False, sort_order_start: int = 0) -> list[ListingImage]:
    if set_first_as_cover:
        _clear_cover(listing)
    return [
        add_image(
            listing,
            upload=upload,
            is_cover=set_first_as_cover and index == 0,
            sort_order=sort_order_start + index,
        )
        for index, upload in enumerate(uploads)
    ]


@transaction.atomic
def set_cover_image(listing: Listing, image_id) -> ListingImage:
    image = listing.images.filter(pk=image_id).first()
    if image is None:
        raise ListingImageNotFound("Listing image not found")
    _clear_cover(listing)
    image.is_cover = True
    image.save(update_fields=["is_cover"])
    return image


def remove_image(listing: Listing, image_id) -> int:
    image = listing.images.filter(pk=image_id).first()
    if image is None:
        return 0
    if image.image:
        image.image.delete(save=False)
    image.delete()
    return 1


@transaction.atomic
def delete_listing(listing: Listing) -> None:
    listing_no = listing.listing_no
    for image in listing.images.all():
        if image.image:
            image.image.delete(save=False)
    listing.delete()
    logger.info("Listing %s deleted", listing_no)
