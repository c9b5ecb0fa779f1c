"""Location API views: cities, districts and neighborhoods."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import generics, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdminOrManagerOrReadOnly

from .models import Location
from .serializers import (
    CitySerializer,
    DistrictSerializer,
    NeighborSerializer,
    NeighborhoodSerializer,
)
from .services import LocationInUseError, ensure_city_can_be_deleted, neighbors_of


class CityViewSet(viewsets.ModelViewSet):
    """Cities: public list, ADMIN/MANAGER writes."""

    serializer_class = CitySerializer
    permission_classes = [IsAdminOrManagerOrReadOnly]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        return Location.objects.cities().order_by("name")

    def destroy(self, request, *args, **kwargs):  # type: ignore
        city = self.get_object()
        try:
            ensure_city_can_be_deleted(city)
        except LocationInUseError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        city.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class DistrictListView(generics.ListAPIView):
    """GET /districts?cityId= ordered by name."""

    serializer_class = DistrictSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        return Location.objects.districts(self.request.query_params.get("cityId")).order_by("name")


class NeighborhoodListView(generics.ListAPIView):
    """GET /neighborhoods?districtId=|cityId=|branchId= ordered by name."""

    serializer_class = NeighborhoodSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        params = self.request.query_params
        qs = Location.objects.neighborhoods().select_related("parent")
        if params.get("districtId"):
            qs = qs.filter(parent_id=params["districtId"])
        if params.get("cityId"):
            qs = qs.filter(parent__parent_id=params["cityId"])
        if params.get("branchId"):
            qs = qs.filter(serving_branches__id=params["branchId"])
        return qs.order_by("name")


class NeighborhoodNeighborsView(generics.GenericAPIView):
    """GET /neighborhoods/<id>/neighbors?maxDistance= nearest first."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):  # type: ignore
        neighborhood = get_object_or_404(Location.objects.neighborhoods(), pk=pk)
        links = neighbors_of(neighborhood, request.query_params.get("maxDistance"))
        return Response(NeighborSerializer(links, many=True).data)
