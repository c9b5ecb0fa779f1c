"""CMS page API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdminOrManager, IsAdminOrManagerOrReadOnly

from .models import PageSetting
from .serializers import PageSettingSerializer


class PageSettingViewSet(viewsets.ModelViewSet):
    """Yayındaki sayfalar herkese açık; taslaklar ve yazma ADMIN/MANAGER için."""

    queryset = PageSetting.objects.all()
    serializer_class = PageSettingSerializer
    permission_classes = [IsAdminOrManagerOrReadOnly]
    pagination_class = None
    filter_backends: list = []

    def get_permissions(self):  # type: ignore
        if self.action == "admin_list":
            return [IsAdminOrManager()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        return super().get_queryset().order_by("menu_order", "title")

    def list(self, request):  # type: ignore
        qs = self.get_queryset().filter(is_published=True)
        if request.query_params.get("menu") == "true":
            qs = qs.filter(show_in_menu=True)
        return Response(self.get_serializer(qs, many=True).data)

    def admin_list(self, request):  # type: ignore
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    def by_slug(self, request, slug=None):  # type: ignore
        page = get_object_or_404(self.get_queryset(), slug=slug)
        return Response(self.get_serializer(page).data)
