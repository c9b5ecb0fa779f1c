"""Back office: login and the per-resource CRUD pages.

All resources share :class:`ResourceView`: list via GET, bind a form,
submit with POST/PATCH/DELETE using the session's bearer token and reload
the list. Validation beyond required fields, and all authorization, is
left to the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Callable

from django.contrib import messages  # type: ignore
from django.http import Http404  # type: ignore
from django.shortcuts import redirect, render  # type: ignore
from django.urls import reverse  # type: ignore
from django.utils.http import url_has_allowed_host_and_scheme  # type: ignore
from django.views import View  # type: ignore
from django.views.decorators.http import require_POST  # type: ignore

from . import references
from .api import ApiError, delete, fetch_json, patch_json, post_json
from .context_processors import invalidate_design
from .forms import (
    ApiForm,
    BranchForm,
    CityForm,
    ConsultantForm,
    CustomerRequestForm,
    LeadStatusForm,
    ListingAttributeForm,
    ListingForm,
    LoginForm,
    PageForm,
    SiteSettingsForm,
    choices_from,
)
from .middleware import AuthSession

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.auth_session.is_authenticated:
            return redirect(f"{reverse('web:login')}?next={request.path}")
        return view(request, *args, **kwargs)

    return wrapper


@dataclass(frozen=True)
class Resource:
    slug: str
    title: str
    endpoint: str
    form_class: type[ApiForm]
    columns: tuple[tuple[str, str], ...] = ()
    list_endpoint: str | None = None
    singleton: bool = False
    options: Callable[[dict | None], dict] = field(default=lambda data: {})
    # Called with the view, the saved API object and the bound form
    after_save: Callable[..., None] | None = None

    @property
    def listing_path(self) -> str:
        return self.list_endpoint or self.endpoint


def _branch_options(data) -> dict:
    city_id = data.get("city_id") if data else None
    return {
        "city_id": choices_from(references.load_cities()),
        "district_id": choices_from(references.load_districts(city_id), blank="-"),
    }


def _consultant_options(data) -> dict:
    return {"branch_id": choices_from(references.load_branches())}


def _listing_options(data) -> dict:
    city_id = data.get("city_id") if data else None
    district_id = data.get("district_id") if data else None
    return {
        "city_id": choices_from(references.load_cities()),
        "district_id": choices_from(references.load_districts(city_id), blank="-"),
        "neighborhood_id": choices_from(references.load_neighborhoods(district_id), blank="-"),
        "branch_id": choices_from(references.load_branches()),
        "consultant_id": choices_from(references.load_consultants(), blank="-"),
    }


def _add_listing_images(view, listing: dict, form) -> None:
    """Attach the image URLs of the form; the first one is the cover on a listing without images."""
    urls = form.cleaned_data.get("image_urls") or []
    has_images = bool(listing.get("images"))
    for index, url in enumerate(urls):
        body = {"url": url, "isCover": index == 0 and not has_images, "sortOrder": index}
        try:
            post_json(f"/listings/{listing['id']}/images", body, token=view.token)
        except ApiError as exc:
            logger.warning("Adding image %s to listing %s failed with status %s", url, listing.get("id"), exc.status)
            messages.warning(view.request, "Bazı görseller eklenemedi.")
            return


RESOURCES = {
    resource.slug: resource
    for resource in (
        Resource(
            slug="ilanlar",
            title="İlanlar",
            endpoint="/listings",
            form_class=ListingForm,
            columns=(("listingNo", "İlan No"), ("title", "Başlık"), ("status", "Durum"), ("priceDisplay", "Fiyat")),
            options=_listing_options,
            after_save=_add_listing_images,
        ),
        Resource(
            slug="subeler",
            title="Şubeler",
            endpoint="/branches",
            form_class=BranchForm,
            columns=(("name", "Ad"), ("slug", "Slug"), ("phone", "Telefon")),
            options=_branch_options,
        ),
        Resource(
            slug="sehirler",
            title="Şehirler",
            endpoint="/cities",
            form_class=CityForm,
            columns=(("name", "Ad"), ("slug", "Slug")),
        ),
        Resource(
            slug="danismanlar",
            title="Danışmanlar",
            endpoint="/consultants",
            form_class=ConsultantForm,
            columns=(("name", "Ad Soyad"), ("email", "E-posta"), ("title", "Unvan")),
            options=_consultant_options,
        ),
        Resource(
            slug="ilan-ozellikleri",
            title="İlan Özellikleri",
            endpoint="/listing-attributes",
            form_class=ListingAttributeForm,
            columns=(("category", "Kategori"), ("key", "Anahtar"), ("label", "Etiket"), ("type", "Tür")),
        ),
        Resource(
            slug="sayfalar",
            title="Sayfalar",
            endpoint="/pages",
            list_endpoint="/pages/admin/all",
            form_class=PageForm,
            columns=(("title", "Başlık"), ("slug", "Slug"), ("isPublished", "Yayında")),
        ),
        Resource(
            slug="ayarlar",
            title="Site Ayarları",
            endpoint="/settings",
            form_class=SiteSettingsForm,
            singleton=True,
        ),
    )
}


class ResourceView(View):
    resource: Resource | None = None
    template_name = "web/backoffice/resource.html"

    def dispatch(self, request, *args, **kwargs):  # type: ignore
        if not request.auth_session.is_authenticated:
            return redirect(f"{reverse('web:login')}?next={request.path}")
        return super().dispatch(request, *args, **kwargs)

    @property
    def token(self) -> str | None:
        return self.request.auth_session.token

    def load(self):
        """The resource list, or the single object for singletons."""
        try:
            data = fetch_json(self.resource.listing_path, token=self.token)
        except ApiError:
            messages.error(self.request, f"{self.resource.title} yüklenemedi.")
            return {} if self.resource.singleton else []
        if self.resource.singleton:
            return data or {}
        return data or []

    def render_page(self, data, form, editing_id=None, status=200):
        resource = self.resource
        rows = []
        if not resource.singleton:
            rows = [
                {"id": item.get("id"), "cells": [item.get(key) for key, _label in resource.columns]}
                for item in data
            ]
        return render(
            self.request,
            self.template_name,
            {
                "resource": resource,
                "resources": RESOURCES.values(),
                "columns": [label for _key, label in resource.columns],
                "rows": rows,
                "form": form,
                "editing_id": editing_id,
            },
            status=status,
        )

    def get(self, request):  # type: ignore
        data = self.load()
        editing_id = request.GET.get("edit")
        if self.resource.singleton:
            item = data
        else:
            item = next((row for row in data if str(row.get("id")) == editing_id), None) if editing_id else None
            if item is None:
                editing_id = None
        initial = self.resource.form_class.initial_from(item)
        form = self.resource.form_class(
            initial=initial, options=self.resource.options(initial), editing=bool(editing_id or self.resource.singleton)
        )
        return self.render_page(data, form, editing_id)

    def post(self, request):  # type: ignore
        resource = self.resource
        object_id = request.POST.get("id") or None
        if "delete" in request.POST and object_id and not resource.singleton:
            return self.delete_object(object_id)

        editing = bool(object_id) or resource.singleton
        form = resource.form_class(request.POST, options=resource.options(request.POST), editing=editing)
        if not form.is_valid():
            return self.render_page(self.load(), form, object_id, status=400)

        payload = form.to_payload(include_blank=editing)
        try:
            if resource.singleton:
                saved = patch_json(resource.endpoint, payload, token=self.token)
            elif object_id:
                saved = patch_json(f"{resource.endpoint}/{object_id}", payload, token=self.token)
            else:
                saved = post_json(resource.endpoint, payload, token=self.token)
        except ApiError as exc:
            logger.warning("Saving %s failed with status %s", resource.slug, exc.status)
            messages.error(request, f"{resource.title} kaydedilemedi.")
            return self.render_page(self.load(), form, object_id, status=400)

        if resource.after_save is not None and saved:
            resource.after_save(self, saved, form)
        if resource.singleton:
            invalidate_design()
        messages.success(request, f"{resource.title} kaydedildi.")
        return redirect("web:backoffice-resource", resource=resource.slug)

    def delete_object(self, object_id: str):
        try:
            delete(f"{self.resource.endpoint}/{object_id}", token=self.token)
        except ApiError as exc:
            logger.warning("Deleting %s %s failed with status %s", self.resource.slug, object_id, exc.status)
            messages.error(self.request, f"{self.resource.title} silinemedi.")
        else:
            messages.success(self.request, f"{self.resource.title} silindi.")
        return redirect("web:backoffice-resource", resource=self.resource.slug)


def resource_view(request, resource: str):
    config = RESOURCES.get(resource)
    if config is None:
        raise Http404(resource)
    return ResourceView.as_view(resource=config)(request)


@login_required
def dashboard(request):
    return render(request, "web/backoffice/dashboard.html", {"resources": RESOURCES.values()})


LEAD_KINDS = {"customer": "Müşteri Talepleri", "consultant": "Danışman Talepleri"}


@login_required
def leads(request, kind: str = "customer"):
    if kind not in LEAD_KINDS:
        kind = "customer"
    token = request.auth_session.token
    if request.method == "POST":
        form = LeadStatusForm(request.POST)
        lead_id = request.POST.get("id")
        if form.is_valid() and lead_id:
            try:
                patch_json(f"/requests/{kind}/{lead_id}/status", form.cleaned_data, token=token)
            except ApiError:
                messages.error(request, "Durum kaydedilemedi.")
            else:
                messages.success(request, "Durum güncellendi.")
        return redirect("web:backoffice-leads", kind=kind)

    params = {"status": request.GET["status"]} if request.GET.get("status") else None
    try:
        items = fetch_json(f"/requests/{kind}", token=token, params=params) or []
    except ApiError:
        messages.error(request, "Talepler yüklenemedi.")
        items = []
    return render(
        request,
        "web/backoffice/leads.html",
        {
            "kind": kind,
            "title": LEAD_KINDS[kind],
            "lead_kinds": LEAD_KINDS.items(),
            "items": items,
            "status_form": LeadStatusForm(),
            "resources": RESOURCES.values(),
            "request_types": dict(CustomerRequestForm.base_fields["type"].choices),
        },
    )


def login(request):
    next_url = request.POST.get("next") or request.GET.get("next") or ""
    if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        next_url = ""
    form = LoginForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            data = post_json("/auth/login", form.cleaned_data)
        except ApiError as exc:
            if exc.status == 401:
                messages.error(request, "E-posta veya şifre hatalı.")
            else:
                messages.error(request, "Giriş yapılamadı. Lütfen daha sonra tekrar deneyin.")
        else:
            AuthSession(token=data["accessToken"], user=data.get("user") or {}).store(request.session)
            logger.info("Back-office login for %s", form.cleaned_data["email"])
            return redirect(next_url or "web:backoffice")
    return render(request, "web/backoffice/login.html", {"form": form, "next": next_url})


@require_POST
def logout(request):
    AuthSession.clear(request.session)
    messages.success(request, "Çıkış yapıldı.")
    return redirect("web:login")
