"""Site settings API: public read, ADMIN/MANAGER update."""

from __future__ import annotations

import logging

from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import IsAdminOrManager

from .models import SiteSetting
from .serializers import SiteSettingSerializer

logger = logging.getLogger(__name__)


class SiteSettingView(APIView):
    def get_permissions(self):  # type: ignore
        if self.request.method == "PATCH":
            return [IsAdminOrManager()]
        return [permissions.AllowAny()]

    def get(self, request):  # type: ignore
        return Response(SiteSettingSerializer(SiteSetting.load()).data)

    def patch(self, request):  # type: ignore
        setting = SiteSetting.load()
        serializer = SiteSettingSerializer(setting, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Site settings updated by user %s: %s", request.user.pk, sorted(serializer.validated_data))
        return Response(serializer.data)
