"""Branch API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.locations.serializers import NeighborhoodSerializer
from apps.users.api.permissions import IsAdminOrManagerOrReadOnly

from .models import Branch
from .serializers import BranchSerializer, BranchWriteSerializer
from .services import BranchInUseError, delete_branch


class BranchViewSet(viewsets.ModelViewSet):
    """Şubeler: herkese açık liste, ADMIN/MANAGER için yazma."""

    queryset = Branch.objects.select_related("city", "district")
    permission_classes = [IsAdminOrManagerOrReadOnly]
    pagination_class = None

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        city_slug = self.request.query_params.get("citySlug")
        if city_slug:
            qs = qs.filter(city__slug=city_slug)
        return qs.order_by("name")

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return BranchWriteSerializer
        return BranchSerializer

    def destroy(self, request, *args, **kwargs):  # type: ignore
        branch = self.get_object()
        try:
            delete_branch(branch)
        except BranchInUseError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"by-slug/(?P<slug>[-\w]+)")
    def by_slug(self, request, slug=None):  # type: ignore
        branch = get_object_or_404(self.get_queryset(), slug=slug)
        return Response(BranchSerializer(branch).data)

    @action(detail=True, methods=["get"])
    def neighborhoods(self, request, pk=None):  # type: ignore
        branch = self.get_object()
        qs = branch.neighborhoods.select_related("parent").order_by("name")
        return Response(NeighborhoodSerializer(qs, many=True).data)
