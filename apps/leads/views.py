"""Lead capture API views."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdminOrManager

from .models import ConsultantRequest, CustomerRequest
from .serializers import ConsultantRequestSerializer, CustomerRequestSerializer, RequestStatusSerializer
from .services import (
    RequestNotFound,
    create_consultant_request,
    create_customer_request,
    status_filter,
    update_status,
)


class LeadViewSetMixin:
    """List filtered by ``?status=`` and the ADMIN/MANAGER status change."""

    pagination_class = None
    filter_backends: list = []

    def get_permissions(self):  # type: ignore
        if self.action == "set_status":
            return [IsAdminOrManager()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        wanted = status_filter(self.request.query_params.get("status"))
        if wanted:
            qs = qs.filter(status=wanted)
        return qs.order_by("-created_at")

    def set_status(self, request, pk=None):  # type: ignore
        serializer = RequestStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        model = self.get_serializer_class().Meta.model
        try:
            instance = update_status(model, pk, serializer.validated_data["status"])
        except RequestNotFound as exc:
            raise NotFound(str(exc))
        return Response(self.get_serializer(instance).data)


class CustomerRequestViewSet(LeadViewSetMixin, viewsets.GenericViewSet):
    queryset = CustomerRequest.objects.all()
    serializer_class = CustomerRequestSerializer

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.AllowAny()]
        if self.action == "list":
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    def list(self, request):  # type: ignore
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = create_customer_request(dict(serializer.validated_data))
        return Response(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)


class ConsultantRequestViewSet(LeadViewSetMixin, viewsets.GenericViewSet):
    queryset = ConsultantRequest.objects.select_related("consultant__user")
    serializer_class = ConsultantRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    def list(self, request):  # type: ignore
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = create_consultant_request(request.user, dict(serializer.validated_data))
        return Response(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)
