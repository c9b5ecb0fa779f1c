"""Forms of the public site and the back office.

Form field names are snake_case; ``api_fields`` maps each one to the
camelCase key the API expects. :meth:`ApiForm.to_payload` builds the JSON
body from cleaned data.
"""

from __future__ import annotations

from typing import Any

from django import forms  # type: ignore

from apps.listings import constants

EMPTY = (None, "")


def choices_from(items, *, label: str = "name", blank: str | None = "Seçiniz") -> list[tuple[Any, str]]:
    choices = [(item["id"], item.get(label, item["id"])) for item in items or []]
    if blank is not None:
        choices.insert(0, ("", blank))
    return choices


class ApiForm(forms.Form):
    api_fields: dict[str, str] = {}
    # Sent as null on edit so the API clears the relation
    nullable_fields: tuple[str, ...] = ()

    def __init__(self, *args, options: dict[str, list] | None = None, editing: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing
        for name, choices in (options or {}).items():
            if name in self.fields:
                self.fields[name].choices = choices

    @classmethod
    def initial_from(cls, item: dict | None) -> dict[str, Any]:
        """Form initial values from an API representation."""
        if not item:
            return {}
        return {name: item.get(key) for name, key in cls.api_fields.items() if key in item}

    def to_payload(self, *, include_blank: bool = False) -> dict[str, Any]:
        """API body; empty fields are left out unless ``include_blank``."""
        payload = {}
        for name, key in self.api_fields.items():
            value = self.cleaned_data.get(name)
            if value is None and not (include_blank and name in self.nullable_fields):
                continue
            if value == "" and not include_blank:
                continue
            payload[key] = value
        return payload


class CustomerRequestForm(ApiForm):
    full_name = forms.CharField(label="Ad Soyad", min_length=2, max_length=255)
    phone = forms.CharField(label="Telefon", max_length=40)
    type = forms.ChoiceField(
        label="Talep türü",
        choices=[("SELL", "Satmak istiyorum"), ("RENT", "Kiraya vermek istiyorum"), ("VALUATION", "Evim ne kadar eder?")],
    )
    email = forms.EmailField(label="E-posta", required=False)
    city_id = forms.TypedChoiceField(label="İl", required=False, coerce=int, empty_value=None, choices=[("", "Seçiniz")])
    district_id = forms.TypedChoiceField(
        label="İlçe", required=False, coerce=int, empty_value=None, choices=[("", "Seçiniz")]
    )
    neighborhood_id = forms.TypedChoiceField(
        label="Mahalle", required=False, coerce=int, empty_value=None, choices=[("", "Seçiniz")]
    )
    notes = forms.CharField(label="Notlar", required=False, widget=forms.Textarea(attrs={"rows": 4}))

    api_fields = {
        "full_name": "fullName",
        "phone": "phone",
        "type": "type",
        "email": "email",
        "city_id": "cityId",
        "district_id": "districtId",
        "neighborhood_id": "neighborhoodId",
        "notes": "notes",
    }


class LoginForm(forms.Form):
    email = forms.EmailField(label="E-posta")
    password = forms.CharField(label="Şifre", widget=forms.PasswordInput)


class BranchForm(ApiForm):
    nullable_fields = ("district_id",)

    name = forms.CharField(label="Ad", min_length=2)
    slug = forms.SlugField(label="Slug")
    city_id = forms.TypedChoiceField(label="İl", coerce=int, choices=[])
    district_id = forms.TypedChoiceField(label="İlçe", required=False, coerce=int, empty_value=None, choices=[])
    address = forms.CharField(label="Adres", required=False)
    phone = forms.CharField(label="Telefon", required=False)
    whatsapp_number = forms.CharField(label="WhatsApp", required=False)
    email = forms.EmailField(label="E-posta", required=False)
    map_url = forms.URLField(label="Harita bağlantısı", required=False)
    working_hours = forms.CharField(label="Çalışma saatleri", required=False)
    photo_url = forms.CharField(label="Fotoğraf", required=False)

    api_fields = {
        "name": "name",
        "slug": "slug",
        "city_id": "cityId",
        "district_id": "districtId",
        "address": "address",
        "phone": "phone",
        "whatsapp_number": "whatsappNumber",
        "email": "email",
        "map_url": "mapUrl",
        "working_hours": "workingHours",
        "photo_url": "photoUrl",
    }


class CityForm(ApiForm):
    name = forms.CharField(label="Ad", min_length=2)
    slug = forms.SlugField(label="Slug", required=False)

    api_fields = {"name": "name", "slug": "slug"}


class ConsultantForm(ApiForm):
    name = forms.CharField(label="Ad Soyad", min_length=2)
    email = forms.EmailField(label="E-posta")
    password = forms.CharField(label="Şifre", min_length=6, required=False, widget=forms.PasswordInput)
    branch_id = forms.TypedChoiceField(label="Şube", coerce=int, choices=[])
    title = forms.CharField(label="Unvan", required=False)
    whatsapp_number = forms.CharField(label="WhatsApp", required=False)
    contact_phone = forms.CharField(label="Telefon", required=False)
    bio = forms.CharField(label="Hakkında", required=False, widget=forms.Textarea(attrs={"rows": 3}))
    photo_url = forms.CharField(label="Fotoğraf", required=False)

    api_fields = {
        "name": "name",
        "email": "email",
        "password": "password",
        "branch_id": "branchId",
        "title": "title",
        "whatsapp_number": "whatsappNumber",
        "contact_phone": "contactPhone",
        "bio": "bio",
        "photo_url": "photoUrl",
    }

    def clean_password(self):
        password = self.cleaned_data.get("password")
        if not password and not self.editing:
            raise forms.ValidationError("Yeni danışman için şifre gerekli.")
        return password

    def to_payload(self, *, include_blank: bool = False) -> dict[str, Any]:
        payload = super().to_payload(include_blank=include_blank)
        # Blank password on edit keeps the current one
        if not payload.get("password"):
            payload.pop("password", None)
        return payload


class ListingAttributeForm(ApiForm):
    category = forms.ChoiceField(label="Kategori", choices=list(constants.CATEGORY_LABELS.items()))
    status = forms.ChoiceField(label="Durum", required=False, choices=[("", "Tümü"), *constants.STATUSES])
    sub_property_type = forms.CharField(label="Alt tür", required=False)
    key = forms.CharField(label="Anahtar", max_length=100)
    label = forms.CharField(label="Etiket", max_length=255)
    type = forms.ChoiceField(
        label="Tür",
        choices=[("TEXT", "Metin"), ("NUMBER", "Sayı"), ("SELECT", "Seçim"), ("BOOLEAN", "Evet/Hayır")],
    )
    options = forms.CharField(
        label="Seçenekler",
        required=False,
        widget=forms.Textarea(attrs={"rows": 3}),
        help_text="Her satıra bir seçenek.",
    )
    allows_multiple = forms.BooleanField(label="Çoklu seçim", required=False)
    is_required = forms.BooleanField(label="Zorunlu", required=False)
    sort_order = forms.IntegerField(label="Sıra", required=False, min_value=0)
    group_name = forms.CharField(label="Grup", required=False)
    suffix = forms.CharField(label="Birim", required=False)

    api_fields = {
        "category": "category",
        "status": "status",
        "sub_property_type": "subPropertyType",
        "key": "key",
        "label": "label",
        "type": "type",
        "options": "options",
        "allows_multiple": "allowsMultiple",
        "is_required": "isRequired",
        "sort_order": "sortOrder",
        "group_name": "groupName",
        "suffix": "suffix",
    }

    @classmethod
    def initial_from(cls, item: dict | None) -> dict[str, Any]:
        initial = super().initial_from(item)
        if isinstance(initial.get("options"), list):
            initial["options"] = "\n".join(initial["options"])
        return initial

    def clean_options(self) -> list[str]:
        raw = self.cleaned_data.get("options") or ""
        return [line.strip() for line in raw.replace(",", "\n").splitlines() if line.strip()]


class SiteSettingsForm(ApiForm):
    site_name = forms.CharField(label="Site adı", max_length=120)
    logo_url = forms.CharField(label="Logo", required=False)
    favicon_url = forms.CharField(label="Favicon", required=False)
    owner_name = forms.CharField(label="Sahip adı", max_length=120)
    owner_title = forms.CharField(label="Sahip unvanı", required=False, max_length=120)
    show_owner_title = forms.BooleanField(label="Unvanı göster", required=False)
    phone_number = forms.CharField(label="Telefon", required=False, max_length=40)
    whatsapp_number = forms.CharField(label="WhatsApp", required=False, max_length=40)
    email = forms.CharField(label="E-posta", required=False, max_length=120)
    support_email = forms.CharField(label="Destek e-postası", required=False, max_length=120)
    address = forms.CharField(label="Adres", required=False)
    primary_color = forms.CharField(label="Ana renk", max_length=20, widget=forms.TextInput(attrs={"type": "color"}))
    accent_color = forms.CharField(label="Vurgu rengi", max_length=20, widget=forms.TextInput(attrs={"type": "color"}))
    background_color = forms.CharField(
        label="Arka plan rengi", max_length=20, widget=forms.TextInput(attrs={"type": "color"})
    )
    text_color = forms.CharField(label="Yazı rengi", max_length=20, widget=forms.TextInput(attrs={"type": "color"}))
    font_family = forms.CharField(label="Yazı tipi", max_length=60)

    api_fields = {
        "site_name": "siteName",
        "logo_url": "logoUrl",
        "favicon_url": "faviconUrl",
        "owner_name": "ownerName",
        "owner_title": "ownerTitle",
        "show_owner_title": "showOwnerTitle",
        "phone_number": "phoneNumber",
        "whatsapp_number": "whatsappNumber",
        "email": "email",
        "support_email": "supportEmail",
        "address": "address",
        "primary_color": "primaryColor",
        "accent_color": "accentColor",
        "background_color": "backgroundColor",
        "text_color": "textColor",
        "font_family": "fontFamily",
    }


class PageForm(ApiForm):
    slug = forms.SlugField(label="Slug")
    title = forms.CharField(label="Başlık", max_length=255)
    meta_title = forms.CharField(label="Meta başlık", required=False)
    meta_description = forms.CharField(label="Meta açıklama", required=False)
    content = forms.JSONField(
        label="İçerik blokları",
        required=False,
        widget=forms.Textarea(attrs={"rows": 8}),
        help_text='Örnek: [{"type": "html", "content": "<p>Merhaba</p>"}]',
    )
    is_published = forms.BooleanField(label="Yayında", required=False)
    show_in_menu = forms.BooleanField(label="Menüde göster", required=False)
    menu_order = forms.IntegerField(label="Menü sırası", required=False, min_value=0)

    api_fields = {
        "slug": "slug",
        "title": "title",
        "meta_title": "metaTitle",
        "meta_description": "metaDescription",
        "content": "content",
        "is_published": "isPublished",
        "show_in_menu": "showInMenu",
        "menu_order": "menuOrder",
    }

    def clean_content(self):
        content = self.cleaned_data.get("content")
        if content in (None, ""):
            return []
        if not isinstance(content, list):
            raise forms.ValidationError("İçerik bir blok listesi olmalı.")
        return content


class LeadStatusForm(forms.Form):
    status = forms.ChoiceField(
        label="Durum",
        choices=[("NEW", "Yeni"), ("IN_PROGRESS", "İşlemde"), ("CLOSED", "Kapandı")],
    )


def _sub_property_choices() -> list[tuple[str, str]]:
    choices = [("", "-")]
    for category, options in constants.SUB_PROPERTY_TYPES.items():
        label = constants.category_label(category)
        choices.extend((key, f"{label}: {name}") for key, name in options)
    return choices


class ListingForm(ApiForm):
    nullable_fields = ("district_id", "neighborhood_id", "consultant_id", "area_gross", "area_net")

    title = forms.CharField(label="Başlık", min_length=2, max_length=255)
    description = forms.CharField(label="Açıklama", required=False, widget=forms.Textarea(attrs={"rows": 5}))
    price = forms.DecimalField(label="Fiyat", min_value=0, max_digits=14, decimal_places=2)
    currency = forms.ChoiceField(label="Para birimi", choices=[("TRY", "TL"), ("USD", "$"), ("EUR", "€"), ("GBP", "£")])
    status = forms.ChoiceField(label="Durum", choices=constants.STATUSES)
    category = forms.ChoiceField(label="Kategori", choices=list(constants.CATEGORY_LABELS.items()))
    sub_property_type = forms.ChoiceField(label="Alt tür", required=False, choices=_sub_property_choices())
    area_gross = forms.DecimalField(label="Brüt m²", required=False, min_value=0, max_digits=10, decimal_places=2)
    area_net = forms.DecimalField(label="Net m²", required=False, min_value=0, max_digits=10, decimal_places=2)
    city_id = forms.TypedChoiceField(label="İl", coerce=int, choices=[])
    district_id = forms.TypedChoiceField(label="İlçe", required=False, coerce=int, empty_value=None, choices=[])
    neighborhood_id = forms.TypedChoiceField(label="Mahalle", required=False, coerce=int, empty_value=None, choices=[])
    branch_id = forms.TypedChoiceField(label="Şube", coerce=int, choices=[])
    consultant_id = forms.TypedChoiceField(label="Danışman", required=False, coerce=int, empty_value=None, choices=[])
    attributes = forms.JSONField(
        label="Özellikler",
        required=False,
        widget=forms.Textarea(attrs={"rows": 4}),
        help_text='Örnek: {"roomCount": "3+1", "hasElevator": true}',
    )
    is_opportunity = forms.BooleanField(label="Fırsat", required=False)
    google_maps_url = forms.URLField(label="Google Maps bağlantısı", required=False, max_length=1000)
    hide_location = forms.BooleanField(label="Konumu gizle", required=False)
    meta_title = forms.CharField(label="Meta başlık", required=False, max_length=255)
    meta_description = forms.CharField(label="Meta açıklama", required=False, max_length=500)
    image_urls = forms.CharField(
        label="Görseller",
        required=False,
        widget=forms.Textarea(attrs={"rows": 3}),
        help_text="Her satıra bir görsel adresi. İlk görsel kapak olur.",
    )

    api_fields = {
        "title": "title",
        "description": "description",
        "price": "price",
        "currency": "currency",
        "status": "status",
        "category": "category",
        "sub_property_type": "subPropertyType",
        "area_gross": "areaGross",
        "area_net": "areaNet",
        "city_id": "cityId",
        "district_id": "districtId",
        "neighborhood_id": "neighborhoodId",
        "branch_id": "branchId",
        "consultant_id": "consultantId",
        "attributes": "attributes",
        "is_opportunity": "isOpportunity",
        "google_maps_url": "googleMapsUrl",
        "hide_location": "hideLocation",
        "meta_title": "metaTitle",
        "meta_description": "metaDescription",
    }

    def clean_attributes(self):
        attributes = self.cleaned_data.get("attributes")
        if attributes in (None, ""):
            return {}
        if not isinstance(attributes, dict):
            raise forms.ValidationError("Özellikler bir nesne olmalı.")
        return attributes

    def clean_image_urls(self) -> list[str]:
        raw = self.cleaned_data.get("image_urls") or ""
        return [line.strip() for line in raw.splitlines() if line.strip()]

    def to_payload(self, *, include_blank: bool = False) -> dict[str, Any]:
        payload = super().to_payload(include_blank=include_blank)
        # Decimals go over the wire as strings
        for key in ("price", "areaGross", "areaNet"):
            if payload.get(key) is not None:
                payload[key] = str(payload[key])
        return payload
