"""Filter state behind the listing search pages.

``FilterState`` is an immutable value object. It is built from the page's
query string, changed through the transition methods below (each returns
a new state), and serialized back into the page URL and the parameters of
``GET /listings``.

Transition rules:

* a new status clears the category and every category-specific sub-filter;
* a new category clears the sub-filters only (price, area and location stay);
* room counts and neighborhoods are sets, toggling a member twice is a no-op;
* a new city clears district and neighborhoods, a new district clears
  neighborhoods;
* neighbor expansion only exists while neighborhoods are selected;
* only non-empty fields are serialized, so a cleared state serializes to an
  empty string and the page URL is the bare path.

Price and area inputs may arrive formatted (``1.000.000``); the state keeps
the bare digits (``1000000``) and ``display_*`` properties format them back.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from shared.domain.base import ValueObject
from shared.domain.value_objects import format_thousands, parse_thousands

from . import constants

TEXT = "text"
NUMBER = "number"
MULTI = "multi"
FLAG = "flag"

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def _param(name: str, kind: str = TEXT, *, sub: bool = False, options: Iterable[str] | None = None):
    default: Any = () if kind == MULTI else None
    metadata = {
        "param": name,
        "kind": kind,
        "sub": sub,
        "options": tuple(options) if options is not None else None,
    }
    return field(default=default, metadata=metadata)


def _keys(options) -> tuple[str, ...]:
    return tuple(key for key, _label in options)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == ()


def _clean_number(value: Any) -> str | None:
    digits = parse_thousands(value)
    return digits if digits.isdigit() else None


def _clean_flag(value: Any) -> bool | None:
    if isinstance(value, bool) or value is None:
        return value
    lowered = str(value).strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def _flag_param(value: bool) -> str:
    return "true" if value else "false"


def _toggled(members: tuple[str, ...], member: str) -> tuple[str, ...]:
    member = str(member)
    if member in members:
        return tuple(m for m in members if m != member)
    return members + (member,)


def _read(params: Mapping[str, Any], name: str, multi: bool) -> Any:
    if hasattr(params, "getlist"):
        values = params.getlist(name)
    else:
        raw = params.get(name)
        if raw is None:
            values = []
        elif isinstance(raw, (list, tuple)):
            values = list(raw)
        else:
            values = [raw]
    if not multi:
        return values[-1] if values else None
    members: list[str] = []
    for value in values:
        for part in str(value).split(","):
            part = part.strip()
            if part and part not in members:
                members.append(part)
    return tuple(members)


@dataclass(frozen=True)
class FilterState(ValueObject):
    status: str | None = _param("status", options=_keys(constants.STATUSES))
    category: str | None = _param("category")
    sub_property_type: str | None = _param("subPropertyType", sub=True)
    min_price: str | None = _param("minPrice", NUMBER)
    max_price: str | None = _param("maxPrice", NUMBER)
    min_area: str | None = _param("minArea", NUMBER)
    max_area: str | None = _param("maxArea", NUMBER)
    room_count: tuple[str, ...] = _param("roomCount", MULTI, sub=True, options=constants.ROOM_COUNTS)
    building_age: str | None = _param("buildingAge", sub=True, options=_keys(constants.BUILDING_AGES))
    floor: str | None = _param("floor", sub=True, options=_keys(constants.FLOORS))
    total_floors: str | None = _param("totalFloors", sub=True, options=_keys(constants.TOTAL_FLOORS))
    heating_type: str | None = _param("heatingType", sub=True, options=_keys(constants.HEATING_TYPES))
    land_type: str | None = _param("landType", sub=True, options=_keys(constants.LAND_TYPES))
    payment_type: str | None = _param("paymentType", sub=True, options=_keys(constants.PAYMENT_TYPES))
    garden_type: str | None = _param("gardenType", sub=True, options=_keys(constants.GARDEN_TYPES))
    water_type: str | None = _param("waterType", sub=True, options=_keys(constants.WATER_TYPES))
    field_type: str | None = _param("fieldType", sub=True, options=_keys(constants.FIELD_TYPES))
    furnished: bool | None = _param("furnished", FLAG, sub=True)
    has_elevator: bool | None = _param("hasElevator", FLAG, sub=True)
    has_garage: bool | None = _param("hasGarage", FLAG, sub=True)
    has_storage: bool | None = _param("hasStorage", FLAG, sub=True)
    has_parent_bathroom: bool | None = _param("hasParentBathroom", FLAG, sub=True)
    is_site_inside: bool | None = _param("isSiteInside", FLAG, sub=True)
    has_security: bool | None = _param("hasSecurity", FLAG, sub=True)
    is_credit_eligible: bool | None = _param("isCreditEligible", FLAG, sub=True)
    is_swap_eligible: bool | None = _param("isSwapEligible", FLAG, sub=True)
    has_electricity: bool | None = _param("hasElectricity", FLAG, sub=True)
    has_road_access: bool | None = _param("hasRoadAccess", FLAG, sub=True)
    has_pool: bool | None = _param("hasPool", FLAG, sub=True)
    near_school: bool | None = _param("nearSchool", FLAG, sub=True)
    near_hospital: bool | None = _param("nearHospital", FLAG, sub=True)
    near_transport: bool | None = _param("nearTransport", FLAG, sub=True)
    near_sea: bool | None = _param("nearSea", FLAG, sub=True)
    is_opportunity: bool | None = _param("isOpportunity", FLAG)
    city_id: str | None = _param("cityId")
    district_id: str | None = _param("districtId")
    neighborhood_ids: tuple[str, ...] = _param("neighborhoodIds", MULTI)
    include_neighbors: bool = False
    neighbor_distance: int = constants.DEFAULT_NEIGHBOR_DISTANCE
    q: str | None = _param("q")
    # Set from the branch page path, sent to the API but not to the page URL
    branch_slug: str | None = None
    sort_by: str = constants.DEFAULT_SORT_BY
    sort_order: str = constants.DEFAULT_SORT_ORDER

    # --- Parsing -------------------------------------------------------------
    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "FilterState":
        """Build a state from a query dict, dropping unknown or invalid values."""
        values: dict[str, Any] = {}
        for f in fields(cls):
            meta = f.metadata
            if "param" not in meta:
                continue
            kind = meta["kind"]
            raw = _read(params, meta["param"], multi=kind == MULTI)
            if kind == MULTI:
                value: Any = raw
            elif kind == NUMBER:
                value = _clean_number(raw)
            elif kind == FLAG:
                value = _clean_flag(raw)
            else:
                value = str(raw).strip() if raw is not None else None
                value = value or None
            options = meta["options"]
            if options is not None and not _is_empty(value):
                if kind == MULTI:
                    value = tuple(v for v in value if v in options)
                elif value not in options:
                    value = None
            values[f.name] = value

        values["include_neighbors"] = bool(_clean_flag(_read(params, "includeNeighbors", False)))
        distance = _read(params, "maxNeighborDistance", False)
        if distance is not None and str(distance).isdigit() and int(distance) in constants.NEIGHBOR_DISTANCES:
            values["neighbor_distance"] = int(distance)

        sort_by, sort_order = cls._parse_sort(
            _read(params, "sort", False), _read(params, "order", False)
        )
        values["sort_by"] = sort_by
        values["sort_order"] = sort_order
        return cls(**values)._consistent()

    @staticmethod
    def _parse_sort(sort: Any, order: Any) -> tuple[str, str]:
        sort = str(sort or "")
        if "-" in sort:
            sort, _, compound_order = sort.partition("-")
            order = order or compound_order
        if sort not in constants.SORT_FIELDS:
            sort = constants.DEFAULT_SORT_BY
        order = str(order or "")
        if order not in constants.SORT_ORDERS:
            order = constants.DEFAULT_SORT_ORDER
        return sort, order

    def _consistent(self) -> "FilterState":
        """Drop values that would not survive serialization.

        A category the status does not offer, a sub-type the category does
        not offer, and neighbor expansion without neighborhoods are dropped.
        The distance falls back to the default while expansion is off.
        """
        category = self.category
        if category and category not in self.categories:
            category = None
        sub_type = self.sub_property_type
        if sub_type and sub_type not in _keys(constants.SUB_PROPERTY_TYPES.get(category or "", ())):
            sub_type = None
        include_neighbors = self.include_neighbors and bool(self.neighborhood_ids)
        distance = self.neighbor_distance if include_neighbors else constants.DEFAULT_NEIGHBOR_DISTANCE
        changes = {
            "category": category,
            "sub_property_type": sub_type,
            "include_neighbors": include_neighbors,
            "neighbor_distance": distance,
        }
        if all(getattr(self, name) == value for name, value in changes.items()):
            return self
        return replace(self, **changes)

    def apply_submission(self, submitted: "FilterState") -> "FilterState":
        """Merge a submitted filter form into this committed state.

        The form posts every field at once, so the cascades are replayed here.
        A changed status or category clears the sub-filters, which were
        rendered for the old category. A category left untouched while the
        status changed is cleared as well. A changed city or district clears
        the locations below it.
        """
        state = submitted
        if submitted.status != self.status:
            category = submitted.category if submitted.category != self.category else None
            state = state.select_status(submitted.status).select_category(category)
        elif submitted.category != self.category:
            state = state.select_category(submitted.category)
        if submitted.city_id != self.city_id:
            state = state.select_city(submitted.city_id)
        elif submitted.district_id != self.district_id:
            state = state.select_district(submitted.district_id)
        return state._consistent()

    # --- Transitions ---------------------------------------------------------
    @classmethod
    def _sub_filter_defaults(cls) -> dict[str, Any]:
        return {f.name: f.default for f in fields(cls) if f.metadata.get("sub")}

    def select_status(self, status: str | None) -> "FilterState":
        return replace(self, status=status or None, category=None, **self._sub_filter_defaults())

    def select_category(self, category: str | None) -> "FilterState":
        if category and category not in self.categories:
            category = None
        return replace(self, category=category or None, **self._sub_filter_defaults())

    def select_sub_property_type(self, sub_property_type: str | None) -> "FilterState":
        return replace(self, sub_property_type=sub_property_type or None)._consistent()

    def set_value(self, name: str, value: Any) -> "FilterState":
        """Set a single-value sub-filter or flag by field name."""
        f = self._field(name)
        kind = f.metadata.get("kind")
        if kind == MULTI:
            raise ValueError(f"{name} is a set; use the toggle methods")
        if kind == NUMBER:
            value = _clean_number(value)
        elif kind == FLAG:
            value = _clean_flag(value)
        elif _is_empty(value):
            value = None
        return replace(self, **{name: value})

    def set_price_range(self, minimum: Any = None, maximum: Any = None) -> "FilterState":
        return replace(self, min_price=_clean_number(minimum), max_price=_clean_number(maximum))

    def set_area_range(self, minimum: Any = None, maximum: Any = None) -> "FilterState":
        return replace(self, min_area=_clean_number(minimum), max_area=_clean_number(maximum))

    def toggle_room_count(self, room: str) -> "FilterState":
        return replace(self, room_count=_toggled(self.room_count, room))

    def toggle_neighborhood(self, neighborhood_id: Any) -> "FilterState":
        neighborhood_ids = _toggled(self.neighborhood_ids, str(neighborhood_id))
        include_neighbors = self.include_neighbors and bool(neighborhood_ids)
        return replace(self, neighborhood_ids=neighborhood_ids, include_neighbors=include_neighbors)._consistent()

    def set_include_neighbors(self, enabled: bool, distance: int | None = None) -> "FilterState":
        distance = distance if distance in constants.NEIGHBOR_DISTANCES else self.neighbor_distance
        return replace(self, include_neighbors=bool(enabled), neighbor_distance=distance)._consistent()

    def select_city(self, city_id: Any) -> "FilterState":
        return replace(
            self,
            city_id=str(city_id) if not _is_empty(city_id) else None,
            district_id=None,
            neighborhood_ids=(),
            include_neighbors=False,
        )._consistent()

    def select_district(self, district_id: Any) -> "FilterState":
        return replace(
            self,
            district_id=str(district_id) if not _is_empty(district_id) else None,
            neighborhood_ids=(),
            include_neighbors=False,
        )._consistent()

    def select_sort(self, compound_key: str) -> "FilterState":
        """Apply a ``field-direction`` key such as ``price-asc``."""
        sort_by, sort_order = self._parse_sort(compound_key, None)
        return replace(self, sort_by=sort_by, sort_order=sort_order)

    def search(self, q: str | None) -> "FilterState":
        return replace(self, q=(q or "").strip() or None)

    def remove_filter(self, key: str) -> "FilterState":
        """Remove one active-filter chip, identified by its query parameter name."""
        if key == "status":
            return self.select_status(None)
        if key == "category":
            return self.select_category(None)
        if key == "neighborhoodIds":
            return replace(self, neighborhood_ids=(), include_neighbors=False)._consistent()
        if key == "includeNeighbors":
            return replace(self, include_neighbors=False)._consistent()
        if key == "cityId":
            return self.select_city(None)
        if key == "districtId":
            return self.select_district(None)
        for f in fields(self):
            if f.metadata.get("param") == key:
                return replace(self, **{f.name: f.default})
        return self

    def cleared(self) -> "FilterState":
        return type(self)(branch_slug=self.branch_slug)

    # --- Derived views -------------------------------------------------------
    @classmethod
    def _field(cls, name: str):
        for f in fields(cls):
            if f.name == name:
                return f
        raise AttributeError(name)

    @property
    def categories(self) -> tuple[str, ...]:
        """Categories offered for the selected status (all filterable ones when unset)."""
        if self.status:
            return constants.CATEGORIES.get(self.status, ())
        seen: list[str] = []
        for categories in constants.CATEGORIES.values():
            seen.extend(c for c in categories if c not in seen)
        return tuple(seen)

    @property
    def sub_property_options(self) -> tuple[tuple[str, str], ...]:
        return constants.SUB_PROPERTY_TYPES.get(self.category or "", ())

    @property
    def neighborhoods_enabled(self) -> bool:
        """Neighborhood choices are loaded only once a district is chosen."""
        return bool(self.district_id)

    @property
    def sort_key(self) -> str:
        return f"{self.sort_by}-{self.sort_order}"

    @property
    def has_default_sort(self) -> bool:
        return (self.sort_by, self.sort_order) == (
            constants.DEFAULT_SORT_BY,
            constants.DEFAULT_SORT_ORDER,
        )

    @property
    def display_min_price(self) -> str:
        return format_thousands(self.min_price)

    @property
    def display_max_price(self) -> str:
        return format_thousands(self.max_price)

    @property
    def display_min_area(self) -> str:
        return format_thousands(self.min_area)

    @property
    def display_max_area(self) -> str:
        return format_thousands(self.max_area)

    @property
    def is_empty(self) -> bool:
        return not self.to_query_params()

    def active_filters(self) -> list[tuple[str, str]]:
        """``(param, label)`` chips for every active constraint."""
        chips: list[tuple[str, str]] = []
        if self.status:
            chips.append(("status", constants.status_label(self.status)))
        if self.category:
            chips.append(("category", constants.category_label(self.category)))
        if self.sub_property_type:
            chips.append(
                ("subPropertyType", constants.label_for(self.sub_property_options, self.sub_property_type))
            )
        if self.min_price or self.max_price:
            low = self.display_min_price or "0"
            high = self.display_max_price or "∞"
            chips.append(("minPrice", f"Fiyat: {low} - {high} TL"))
        if self.min_area or self.max_area:
            chips.append(("minArea", f"m²: {self.display_min_area or '0'} - {self.display_max_area or '∞'}"))
        if self.room_count:
            chips.append(("roomCount", f"Oda: {', '.join(self.room_count)}"))
        if self.building_age:
            chips.append(
                ("buildingAge", f"Bina Yaşı: {constants.label_for(constants.BUILDING_AGES, self.building_age)}")
            )
        enumerations = (
            ("floor", self.floor, constants.FLOORS),
            ("totalFloors", self.total_floors, constants.TOTAL_FLOORS),
            ("heatingType", self.heating_type, constants.HEATING_TYPES),
            ("landType", self.land_type, constants.LAND_TYPES),
            ("paymentType", self.payment_type, constants.PAYMENT_TYPES),
            ("gardenType", self.garden_type, constants.GARDEN_TYPES),
            ("waterType", self.water_type, constants.WATER_TYPES),
            ("fieldType", self.field_type, constants.FIELD_TYPES),
        )
        for param, value, options in enumerations:
            if value:
                chips.append((param, constants.label_for(options, value)))
        amenity_labels = dict(constants.AMENITIES)
        for param, value in self.amenity_values().items():
            label = amenity_labels.get(param, param)
            chips.append((param, label if value else f"{label} yok"))
        if self.is_opportunity:
            chips.append(("isOpportunity", "Fırsat"))
        if self.neighborhood_ids:
            chips.append(("neighborhoodIds", f"Mahalle: {len(self.neighborhood_ids)}"))
            if self.include_neighbors:
                chips.append(("includeNeighbors", f"+{self.neighbor_distance}km komşu"))
        if self.q:
            chips.append(("q", f'"{self.q}"'))
        return chips

    def amenity_values(self) -> dict[str, bool]:
        return {
            f.metadata["param"]: getattr(self, f.name)
            for f in fields(self)
            if f.metadata.get("kind") == FLAG
            and f.metadata.get("sub")
            and getattr(self, f.name) is not None
        }

    # --- Serialization -------------------------------------------------------
    def to_query_params(self, *, include_sort: bool = False) -> list[tuple[str, str]]:
        """Ordered ``(name, value)`` pairs for every non-empty field.

        Sets are comma-joined. Sort is emitted when ``include_sort`` is set or
        when it differs from the default.
        """
        pairs: list[tuple[str, str]] = []
        for f in fields(self):
            meta = f.metadata
            if "param" not in meta:
                continue
            value = getattr(self, f.name)
            if _is_empty(value):
                continue
            if meta["kind"] == MULTI:
                pairs.append((meta["param"], ",".join(value)))
            elif meta["kind"] == FLAG:
                pairs.append((meta["param"], _flag_param(value)))
            else:
                pairs.append((meta["param"], str(value)))
            if f.name == "neighborhood_ids" and self.include_neighbors:
                pairs.append(("includeNeighbors", "true"))
                pairs.append(("maxNeighborDistance", str(self.neighbor_distance)))
        if include_sort or not self.has_default_sort:
            pairs.append(("sort", self.sort_by))
            pairs.append(("order", self.sort_order))
        return pairs

    def to_query_string(self) -> str:
        """Page query string without the leading ``?``; empty for a cleared state."""
        return urlencode(self.to_query_params(), safe=",")

    def url(self, path: str) -> str:
        query = self.to_query_string()
        return f"{path}?{query}" if query else path

    def to_api_params(self, **extra: Any) -> dict[str, str]:
        """Parameters for ``GET /listings`` (sort and order always present)."""
        params = dict(self.to_query_params(include_sort=True))
        if self.branch_slug:
            params["branchSlug"] = self.branch_slug
        for key, value in extra.items():
            if not _is_empty(value):
                params[key] = str(value)
        return params
