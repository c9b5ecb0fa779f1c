"""Public site views.

Every page reads from the JSON API through :mod:`apps.web.api`. Listing
pages build a :class:`FilterState` from the query string, ask the API for
matching listings and narrow/sort the result with ``select_listings``.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from django.contrib import messages  # type: ignore
from django.http import Http404, HttpResponseRedirect, QueryDict  # type: ignore
from django.shortcuts import redirect, render  # type: ignore
from django.urls import reverse  # type: ignore
from django.views.decorators.http import require_http_methods  # type: ignore

from apps.listings import constants
from apps.listings.filter_state import FilterState
from apps.listings.selection import select_listings
from apps.pages.blocks import render_blocks

from . import references
from .api import ApiError, fetch_json, fetch_json_optional, post_json
from .forms import CustomerRequestForm, choices_from

logger = logging.getLogger(__name__)

HOME_LISTING_COUNT = 12
SEARCH_TAKE = 100
COMMITTED_PARAM = "committed"


def _fetch_listings(request, path: str, params: dict) -> list[dict]:
    try:
        data = fetch_json(path, params=params)
    except ApiError:
        messages.error(request, "İlanlar yüklenemedi.")
        return []
    if isinstance(data, dict):
        return data.get("items", [])
    return data or []


def _resolve_state(request) -> tuple[FilterState, HttpResponseRedirect | None]:
    """The filter state of the request.

    A submitted filter form carries the state it was rendered with in
    ``committed``. The submission is merged into it and the browser is sent
    to the canonical URL of the result.
    """
    submitted = FilterState.from_query_params(request.GET)
    if COMMITTED_PARAM not in request.GET:
        return submitted, None
    committed = FilterState.from_query_params(QueryDict(request.GET[COMMITTED_PARAM]))
    state = committed.apply_submission(submitted)
    return state, redirect(state.url(request.path))


def _amenity_choices(state: FilterState, definitions: list[dict]) -> list[tuple[str, str, bool | None]]:
    """Amenity toggles for the category; all of them when it defines no schema."""
    defined = {definition.get("key") for definition in definitions}
    values = state.amenity_values()
    return [
        (key, label, values.get(key))
        for key, label in constants.AMENITIES
        if not defined or key in defined or key in values
    ]


def _filter_context(state: FilterState, path: str) -> dict:
    """Options and links shared by the search, opportunity and branch pages."""
    definitions = references.load_attribute_definitions(state.category, state.status)
    return {
        "state": state,
        "page_path": path,
        "committed_param": COMMITTED_PARAM,
        "statuses": constants.STATUSES,
        "category_options": [(key, constants.category_label(key)) for key in state.categories],
        "room_counts": constants.ROOM_COUNTS,
        "building_ages": constants.BUILDING_AGES,
        "heating_types": constants.HEATING_TYPES,
        "sort_options": constants.SORT_OPTIONS,
        "neighbor_distances": constants.NEIGHBOR_DISTANCES,
        "amenities": _amenity_choices(state, definitions) if state.category else [],
        "active_filters": [
            (label, state.remove_filter(param).url(path)) for param, label in state.active_filters()
        ],
        "clear_url": state.cleared().url(path),
    }


def home(request):
    listings = _fetch_listings(request, "/listings", FilterState().to_api_params(take=HOME_LISTING_COUNT))
    opportunities = _fetch_listings(
        request, "/listings", FilterState(is_opportunity=True).to_api_params(take=HOME_LISTING_COUNT)
    )
    return render(
        request,
        "web/home.html",
        {
            "listings": listings,
            "opportunities": opportunities,
            "cities": references.load_cities(),
            "statuses": constants.STATUSES,
        },
    )


def listing_search(request):
    """``/arama``: the full filter panel over ``GET /listings``."""
    state, canonical = _resolve_state(request)
    if canonical is not None:
        return canonical
    items = _fetch_listings(request, "/listings", state.to_api_params(take=SEARCH_TAKE))
    context = _filter_context(state, request.path)
    context.update(
        {
            "listings": select_listings(items, state),
            "cities": references.load_cities(),
            "districts": references.load_districts(state.city_id),
            "neighborhoods": references.load_neighborhoods(state.district_id) if state.neighborhoods_enabled else [],
            "page_title": "İlan Ara",
        }
    )
    return render(request, "web/search.html", context)


def opportunities(request):
    """``/firsatlar``: same panel, opportunity listings only."""
    state, canonical = _resolve_state(request)
    if canonical is not None:
        return canonical
    state = replace(state, is_opportunity=True)
    items = _fetch_listings(request, "/listings", state.to_api_params(take=SEARCH_TAKE))
    context = _filter_context(state, request.path)
    context.update(
        {
            "listings": select_listings(items, state),
            "cities": references.load_cities(),
            "districts": references.load_districts(state.city_id),
            "neighborhoods": references.load_neighborhoods(state.district_id) if state.neighborhoods_enabled else [],
            "page_title": "Fırsat İlanları",
        }
    )
    return render(request, "web/search.html", context)


def branch_detail(request, slug: str):
    """``/subeler/<slug>``: branch-scoped search with listing number lookup."""
    state, canonical = _resolve_state(request)
    if canonical is not None:
        return canonical
    try:
        branch = fetch_json_optional(f"/branches/by-slug/{slug}")
    except ApiError:
        messages.error(request, "Şube yüklenemedi.")
        branch = None
    if branch is None:
        raise Http404("Şube bulunamadı")

    state = replace(state, branch_slug=slug)
    try:
        result = fetch_json("/listings/search", params=state.to_api_params(take=SEARCH_TAKE))
    except ApiError:
        messages.error(request, "İlanlar yüklenemedi.")
        result = {"items": [], "total": 0}

    if result.get("isListingNoSearch") and result.get("items"):
        listing = result["items"][0]
        return redirect("web:listing-detail", identifier=listing.get("slug") or listing["listingNo"])

    # Words and neighbor expansion were already applied by the API
    local = replace(state, q=None)
    if state.include_neighbors:
        local = replace(local, neighborhood_ids=())
    listings = select_listings(result.get("items", []), local)
    context = _filter_context(state, request.path)
    context.update(
        {
            "branch": branch,
            "listings": listings,
            "total": result.get("total", len(listings)),
            "neighborhoods": references.load_branch_neighborhoods(branch["id"]),
        }
    )
    return render(request, "web/branch.html", context)


def listing_detail(request, identifier: str):
    try:
        listing = fetch_json_optional(f"/listings/{identifier}")
    except ApiError:
        messages.error(request, "İlan yüklenemedi.")
        listing = None
    if listing is None:
        raise Http404("İlan bulunamadı")
    attributes = listing.get("attributes") or {}
    amenity_labels = dict(constants.AMENITIES)
    labels = {
        definition.get("key"): definition.get("label")
        for definition in references.load_attribute_definitions(listing.get("category"))
    }
    return render(
        request,
        "web/listing_detail.html",
        {
            "listing": listing,
            "amenities": [label for key, label in amenity_labels.items() if attributes.get(key) is True],
            "details": [
                (labels.get(key) or key, value) for key, value in attributes.items() if key not in amenity_labels
            ],
            "status_label": constants.status_label(listing.get("status")),
            "category_label": constants.category_label(listing.get("category")),
        },
    )


def _customer_request_options(data) -> dict:
    city_id = data.get("city_id") if data else None
    district_id = data.get("district_id") if data else None
    return {
        "city_id": choices_from(references.load_cities()),
        "district_id": choices_from(references.load_districts(city_id)),
        "neighborhood_id": choices_from(references.load_neighborhoods(district_id)),
    }


@require_http_methods(["GET", "POST"])
def customer_request(request):
    """``/satilik-kiralik-talep``: sell/rent/valuation lead form."""
    if request.method == "POST":
        form = CustomerRequestForm(request.POST, options=_customer_request_options(request.POST))
        if form.is_valid():
            try:
                post_json("/requests/customer", form.to_payload())
            except ApiError as exc:
                logger.warning("Customer request could not be saved: %s", exc)
                messages.error(request, "Talebiniz kaydedilemedi. Lütfen daha sonra tekrar deneyin.")
            else:
                messages.success(request, "Talebiniz alındı. En kısa sürede sizinle iletişime geçeceğiz.")
                return redirect("web:customer-request")
    else:
        initial = {"type": request.GET.get("type")} if request.GET.get("type") else None
        form = CustomerRequestForm(initial=initial, options=_customer_request_options(None))
    return render(request, "web/customer_request.html", {"form": form})


def page_detail(request, slug: str):
    try:
        page = fetch_json_optional(f"/pages/slug/{slug}")
    except ApiError:
        messages.error(request, "Sayfa yüklenemedi.")
        page = None
    if page is None or not page.get("isPublished"):
        raise Http404("Sayfa bulunamadı")
    return render(request, "web/page.html", {"page": page, "content": render_blocks(page.get("content"))})


def search_redirect(request):
    """Quick search box: a 5-digit number opens the listing, anything else searches."""
    q = (request.GET.get("q") or "").strip()
    if q.isdigit() and len(q) == constants.LISTING_NO_LENGTH:
        return redirect("web:listing-detail", identifier=q)
    return redirect(FilterState().search(q).url(reverse("web:search")))
