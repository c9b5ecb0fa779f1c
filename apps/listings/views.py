"""Listing API views."""

from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.exceptions import NotFound, ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import (
    IsAdminOrManager,
    IsAdminOrManagerOrReadOnly,
    IsStaffMemberOrReadOnly,
)

from .filters import ListingFilterSet
from .models import ListingAttributeDefinition
from .serializers import (
    BranchSearchQuerySerializer,
    ListingAttributeDefinitionSerializer,
    ListingImageCreateSerializer,
    ListingImageSerializer,
    ListingSerializer,
    ListingTransferSerializer,
    ListingWriteSerializer,
)
from .services import (
    ListingImageNotFound,
    ListingImageTooLarge,
    ListingNotFound,
    add_image,
    add_uploaded_images,
    branch_search,
    create_listing,
    delete_listing,
    find_by_identifier,
    listing_queryset,
    ordering_for,
    remove_image,
    set_cover_image,
    transfer_listing,
)

logger = logging.getLogger(__name__)


def _non_negative_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


class ListingViewSet(viewsets.GenericViewSet):
    """İlanlar: arama ve detay herkese açık, yazma giriş yapmış ekip için."""

    permission_classes = [IsStaffMemberOrReadOnly]
    filterset_class = ListingFilterSet
    pagination_class = None

    def get_queryset(self):  # type: ignore
        return listing_queryset()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "partial_update"}:
            return ListingWriteSerializer
        return ListingSerializer

    def get_permissions(self):  # type: ignore
        if self.action == "transfer":
            return [IsAdminOrManager()]
        return super().get_permissions()

    def get_object(self):  # type: ignore
        identifier = self.kwargs.get("identifier") or str(self.kwargs.get("pk", ""))
        try:
            listing = find_by_identifier(identifier, self.get_queryset())
        except ListingNotFound as exc:
            raise NotFound(str(exc))
        self.check_object_permissions(self.request, listing)
        return listing

    def list(self, request):  # type: ignore
        qs = self.filter_queryset(self.get_queryset())
        params = request.query_params
        qs = qs.order_by(ordering_for(params.get("sort"), params.get("order")))
        skip = _non_negative_int(params.get("skip")) or 0
        take = _non_negative_int(params.get("take"))
        qs = qs[skip : skip + take] if take is not None else qs[skip:]
        return Response(ListingSerializer(qs, many=True, context=self.get_serializer_context()).data)

    def retrieve(self, request, identifier=None):  # type: ignore
        return Response(ListingSerializer(self.get_object(), context=self.get_serializer_context()).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing = create_listing(request.user, dict(serializer.validated_data))
        listing = self.get_queryset().get(pk=listing.pk)
        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, identifier=None):  # type: ignore
        listing = self.get_object()
        serializer = self.get_serializer(listing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        # Blank slug/number on update keeps the generated ones
        for field in ("slug", "listing_no"):
            if field in serializer.validated_data and not serializer.validated_data[field]:
                serializer.validated_data.pop(field)
        serializer.save()
        return Response(ListingSerializer(self.get_object()).data)

    def destroy(self, request, identifier=None):  # type: ignore
        delete_listing(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    def images(self, request, pk=None):  # type: ignore
        """Attach one image (``url`` or ``file``) or several uploads (``files``)."""
        listing = self.get_object()
        files = request.FILES.getlist("files")
        try:
            if files:
                created = add_uploaded_images(
                    listing,
                    files,
                    set_first_as_cover=str(request.data.get("setFirstAsCover", "")).lower() == "true",
                    sort_order_start=_non_negative_int(request.data.get("sortOrderStart")) or 0,
                )
                return Response(ListingImageSerializer(created, many=True).data, status=status.HTTP_201_CREATED)

            serializer = ListingImageCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            image = add_image(
                listing,
                url=data.get("url") or "",
                upload=data.get("file"),
                is_cover=data["is_cover"],
                sort_order=data["sort_order"],
            )
        except ListingImageTooLarge as exc:
            raise ValidationError({"file": str(exc)})
        return Response(ListingImageSerializer(image).data, status=status.HTTP_201_CREATED)

    def cover_image(self, request, pk=None, image_id=None):  # type: ignore
        listing = self.get_object()
        try:
            image = set_cover_image(listing, image_id)
        except ListingImageNotFound as exc:
            raise NotFound(str(exc))
        return Response(ListingImageSerializer(image).data)

    def delete_image(self, request, pk=None, image_id=None):  # type: ignore
        deleted = remove_image(self.get_object(), image_id)
        return Response({"deleted": deleted})

    def transfer(self, request, pk=None):  # type: ignore
        listing = self.get_object()
        serializer = ListingTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing = transfer_listing(
            listing, serializer.validated_data["consultant"], serializer.validated_data.get("branch")
        )
        return Response(ListingSerializer(self.get_object()).data)


class BranchListingSearchView(APIView):
    """Şube sayfası araması: ilan no, kelime ve komşu mahalle desteği."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        query = BranchSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = dict(query.validated_data)
        result = branch_search(params.pop("branch_slug"), params)
        result["items"] = ListingSerializer(result["items"], many=True).data
        logger.debug("Branch search %s returned %s listings", request.query_params.get("branchSlug"), result["total"])
        return Response(result)


class ListingAttributeViewSet(viewsets.ModelViewSet):
    """Kategori bazlı ilan özellik şeması."""

    queryset = ListingAttributeDefinition.objects.all()
    serializer_class = ListingAttributeDefinitionSerializer
    permission_classes = [IsAdminOrManagerOrReadOnly]
    pagination_class = None
    filter_backends: list = []

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        params = self.request.query_params
        category = params.get("category")
        if category:
            qs = qs.filter(category=category)
        listing_status = params.get("status")
        if listing_status:
            qs = qs.filter(status__in=[listing_status, ""])
        sub_type = params.get("subPropertyType")
        if sub_type:
            qs = qs.filter(sub_property_type__in=[sub_type, ""])
        return qs.order_by("category", "sort_order", "label")
