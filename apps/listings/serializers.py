"""Serializers for listings, listing images and attribute definitions."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.branches.models import Branch
from apps.consultants.models import Consultant
from apps.locations.models import Location
from apps.locations.serializers import DistrictShortSerializer
from shared.domain.value_objects import CURRENCY_SYMBOLS

from . import constants
from .models import Listing, ListingAttributeDefinition, ListingImage


class ListingImageSerializer(serializers.ModelSerializer):
    url = serializers.CharField(source="public_url", read_only=True)
    isCover = serializers.BooleanField(source="is_cover", read_only=True)
    sortOrder = serializers.IntegerField(source="sort_order", read_only=True)

    class Meta:
        model = ListingImage
        fields = ["id", "url", "isCover", "sortOrder"]


class ListingImageCreateSerializer(serializers.Serializer):
    """``url`` for an already hosted image, or ``file`` for an upload."""

    url = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    file = serializers.ImageField(required=False)
    isCover = serializers.BooleanField(source="is_cover", required=False, default=False)
    sortOrder = serializers.IntegerField(source="sort_order", required=False, default=0, min_value=0)

    def validate(self, attrs):  # type: ignore
        if not attrs.get("url") and not attrs.get("file"):
            raise serializers.ValidationError("Image url or file is required")
        return attrs


class ListingBranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = ["id", "name", "slug"]


class ListingConsultantSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="user.name", read_only=True)
    whatsappNumber = serializers.CharField(source="whatsapp_number", read_only=True)
    contactPhone = serializers.CharField(source="contact_phone", read_only=True)
    photoUrl = serializers.CharField(source="photo_url", read_only=True)

    class Meta:
        model = Consultant
        fields = ["id", "name", "title", "whatsappNumber", "contactPhone", "photoUrl"]


class ListingSerializer(serializers.ModelSerializer):
    """Read representation used by every listing endpoint.

    Coordinates are withheld when ``hideLocation`` is set.
    """

    listingNo = serializers.CharField(source="listing_no", read_only=True)
    price = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False, read_only=True)
    priceDisplay = serializers.CharField(source="money.display", read_only=True)
    subPropertyType = serializers.CharField(source="sub_property_type", read_only=True)
    areaGross = serializers.DecimalField(
        source="area_gross", max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True
    )
    areaNet = serializers.DecimalField(
        source="area_net", max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True
    )
    cityId = serializers.IntegerField(source="city_id", read_only=True)
    city = DistrictShortSerializer(read_only=True)
    districtId = serializers.IntegerField(source="district_id", read_only=True)
    district = DistrictShortSerializer(read_only=True)
    neighborhoodId = serializers.IntegerField(source="neighborhood_id", read_only=True)
    neighborhood = DistrictShortSerializer(read_only=True)
    branchId = serializers.IntegerField(source="branch_id", read_only=True)
    branch = ListingBranchSerializer(read_only=True)
    consultantId = serializers.IntegerField(source="consultant_id", read_only=True)
    consultant = ListingConsultantSerializer(read_only=True)
    isOpportunity = serializers.BooleanField(source="is_opportunity", read_only=True)
    googleMapsUrl = serializers.CharField(source="google_maps_url", read_only=True)
    hideLocation = serializers.BooleanField(source="hide_location", read_only=True)
    metaTitle = serializers.CharField(source="meta_title", read_only=True)
    metaDescription = serializers.CharField(source="meta_description", read_only=True)
    metaKeywords = serializers.CharField(source="meta_keywords", read_only=True)
    images = ListingImageSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    createdById = serializers.IntegerField(source="created_by_id", read_only=True)

    class Meta:
        model = Listing
        fields = [
            "id",
            "listingNo",
            "title",
            "slug",
            "description",
            "price",
            "currency",
            "priceDisplay",
            "status",
            "category",
            "subPropertyType",
            "areaGross",
            "areaNet",
            "cityId",
            "city",
            "districtId",
            "district",
            "neighborhoodId",
            "neighborhood",
            "branchId",
            "branch",
            "consultantId",
            "consultant",
            "attributes",
            "isOpportunity",
            "latitude",
            "longitude",
            "googleMapsUrl",
            "hideLocation",
            "metaTitle",
            "metaDescription",
            "metaKeywords",
            "images",
            "createdAt",
            "createdById",
        ]

    def to_representation(self, instance):  # type: ignore
        data = super().to_representation(instance)
        if instance.hide_location:
            data["latitude"] = None
            data["longitude"] = None
            data["googleMapsUrl"] = ""
        return data


class ListingWriteSerializer(serializers.ModelSerializer):
    listingNo = serializers.RegexField(
        source="listing_no",
        regex=r"^\d{%d}$" % constants.LISTING_NO_LENGTH,
        required=False,
        allow_blank=True,
    )
    title = serializers.CharField(min_length=2, max_length=255)
    currency = serializers.ChoiceField(choices=sorted(CURRENCY_SYMBOLS), required=False)
    slug = serializers.SlugField(required=False, allow_blank=True, max_length=300)
    subPropertyType = serializers.CharField(source="sub_property_type", required=False, allow_blank=True)
    areaGross = serializers.DecimalField(
        source="area_gross", max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    areaNet = serializers.DecimalField(
        source="area_net", max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    cityId = serializers.PrimaryKeyRelatedField(source="city", queryset=Location.objects.cities())
    districtId = serializers.PrimaryKeyRelatedField(
        source="district", queryset=Location.objects.districts(), required=False, allow_null=True
    )
    neighborhoodId = serializers.PrimaryKeyRelatedField(
        source="neighborhood", queryset=Location.objects.neighborhoods(), required=False, allow_null=True
    )
    branchId = serializers.PrimaryKeyRelatedField(source="branch", queryset=Branch.objects.all())
    consultantId = serializers.PrimaryKeyRelatedField(
        source="consultant", queryset=Consultant.objects.all(), required=False, allow_null=True
    )
    attributes = serializers.DictField(required=False)
    isOpportunity = serializers.BooleanField(source="is_opportunity", required=False)
    googleMapsUrl = serializers.URLField(source="google_maps_url", required=False, allow_blank=True, max_length=1000)
    hideLocation = serializers.BooleanField(source="hide_location", required=False)
    metaTitle = serializers.CharField(source="meta_title", required=False, allow_blank=True, max_length=255)
    metaDescription = serializers.CharField(
        source="meta_description", required=False, allow_blank=True, max_length=500
    )
    metaKeywords = serializers.CharField(source="meta_keywords", required=False, allow_blank=True, max_length=500)

    class Meta:
        model = Listing
        fields = [
            "listingNo",
            "title",
            "slug",
            "description",
            "price",
            "currency",
            "status",
            "category",
            "subPropertyType",
            "areaGross",
            "areaNet",
            "cityId",
            "districtId",
            "neighborhoodId",
            "branchId",
            "consultantId",
            "attributes",
            "isOpportunity",
            "latitude",
            "longitude",
            "googleMapsUrl",
            "hideLocation",
            "metaTitle",
            "metaDescription",
            "metaKeywords",
        ]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
        }

    def validate_slug(self, value):  # type: ignore
        if not value:
            return value
        qs = Listing.objects.filter(slug=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Slug already in use")
        return value

    def validate_listingNo(self, value):  # type: ignore
        if not value:
            return value
        qs = Listing.objects.filter(listing_no=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Listing number already in use")
        return value

    def validate(self, attrs):  # type: ignore
        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, None)

        city, district, neighborhood = current("city"), current("district"), current("neighborhood")
        if district is not None and city is not None and district.parent_id != city.id:
            raise serializers.ValidationError({"districtId": "İlçe seçilen ile ait değil."})
        if neighborhood is not None and district is not None and neighborhood.parent_id != district.id:
            raise serializers.ValidationError({"neighborhoodId": "Mahalle seçilen ilçeye ait değil."})

        sub_type = current("sub_property_type")
        category = current("category")
        allowed = [key for key, _label in constants.SUB_PROPERTY_TYPES.get(category or "", ())]
        if sub_type and allowed and sub_type not in allowed:
            raise serializers.ValidationError({"subPropertyType": "Alt tür kategoriye uygun değil."})
        return attrs

    def to_representation(self, instance):  # type: ignore
        return ListingSerializer(instance, context=self.context).data


class ListingTransferSerializer(serializers.Serializer):
    consultantId = serializers.PrimaryKeyRelatedField(
        source="consultant", queryset=Consultant.objects.select_related("user")
    )
    branchId = serializers.PrimaryKeyRelatedField(
        source="branch", queryset=Branch.objects.all(), required=False
    )


class ListingAttributeDefinitionSerializer(serializers.ModelSerializer):
    status = serializers.ChoiceField(
        choices=Listing.Status.choices, required=False, default="", allow_blank=True, allow_null=True
    )
    subPropertyType = serializers.CharField(
        source="sub_property_type", required=False, default="", allow_blank=True, allow_null=True
    )
    options = serializers.ListField(child=serializers.CharField(), required=False)
    allowsMultiple = serializers.BooleanField(source="allows_multiple", required=False)
    isRequired = serializers.BooleanField(source="is_required", required=False)
    sortOrder = serializers.IntegerField(source="sort_order", required=False)
    groupName = serializers.CharField(source="group_name", required=False, allow_blank=True, allow_null=True)
    suffix = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = ListingAttributeDefinition
        fields = [
            "id",
            "category",
            "status",
            "subPropertyType",
            "key",
            "label",
            "type",
            "options",
            "allowsMultiple",
            "isRequired",
            "sortOrder",
            "groupName",
            "suffix",
        ]

    def validate(self, attrs):  # type: ignore
        # Nullable inputs are stored as empty strings
        for field in ("status", "sub_property_type", "group_name", "suffix"):
            if field in attrs and attrs[field] is None:
                attrs[field] = ""
        attr_type = attrs.get("type", getattr(self.instance, "type", None))
        options = attrs.get("options", getattr(self.instance, "options", None))
        if attr_type == ListingAttributeDefinition.AttributeType.SELECT and not options:
            raise serializers.ValidationError({"options": "SELECT alanları için seçenek gerekli."})
        return attrs


class CommaSeparatedField(serializers.ListField):
    """Accepts ``a,b,c`` or repeated query parameters."""

    def get_value(self, dictionary):  # type: ignore
        if hasattr(dictionary, "getlist"):
            values = dictionary.getlist(self.field_name)
        else:
            values = dictionary.get(self.field_name, [])
            values = values if isinstance(values, list) else [values]
        if not values:
            return serializers.empty
        return [part.strip() for value in values for part in str(value).split(",") if part.strip()]


class BranchSearchQuerySerializer(serializers.Serializer):
    branchSlug = serializers.SlugField(source="branch_slug")
    q = serializers.CharField(required=False, allow_blank=True)
    neighborhoodIds = CommaSeparatedField(source="neighborhood_ids", child=serializers.IntegerField(), required=False)
    includeNeighbors = serializers.BooleanField(source="include_neighbors", required=False, default=False)
    maxNeighborDistance = serializers.DecimalField(
        source="max_neighbor_distance", max_digits=6, decimal_places=2, required=False, min_value=0
    )
    status = serializers.ChoiceField(choices=Listing.Status.choices, required=False)
    category = serializers.ChoiceField(choices=Listing.Category.choices, required=False)
    districtId = serializers.IntegerField(source="district_id", required=False)
    subPropertyType = serializers.CharField(source="sub_property_type", required=False)
    minPrice = serializers.DecimalField(source="min_price", max_digits=14, decimal_places=2, required=False)
    maxPrice = serializers.DecimalField(source="max_price", max_digits=14, decimal_places=2, required=False)
    roomCount = CommaSeparatedField(source="room_count", child=serializers.CharField(), required=False)
    buildingAge = serializers.CharField(source="building_age", required=False)
    take = serializers.IntegerField(required=False, min_value=1, max_value=100)
    skip = serializers.IntegerField(required=False, min_value=0)
    sort = serializers.ChoiceField(choices=constants.SORT_FIELDS, required=False)
    order = serializers.ChoiceField(choices=constants.SORT_ORDERS, required=False)
