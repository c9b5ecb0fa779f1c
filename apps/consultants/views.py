"""Consultant API views."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsAdminOrManagerOrReadOnly

from .models import Consultant
from .serializers import ConsultantSerializer, ConsultantWriteSerializer
from .services import (
    ConsultantEmailTakenError,
    create_consultant,
    delete_consultant,
    update_consultant,
)


class ConsultantViewSet(viewsets.GenericViewSet):
    """Danışmanlar: liste herkese açık, yazma ADMIN/MANAGER."""

    queryset = Consultant.objects.select_related("user", "branch", "branch__city").order_by("-created_at")
    permission_classes = [IsAdminOrManagerOrReadOnly]
    pagination_class = None

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "partial_update"}:
            return ConsultantWriteSerializer
        return ConsultantSerializer

    def list(self, request):  # type: ignore
        qs = self.get_queryset()
        branch_id = request.query_params.get("branchId")
        if branch_id:
            qs = qs.filter(branch_id=branch_id)
        return Response(ConsultantSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(ConsultantSerializer(self.get_object()).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            consultant = create_consultant(dict(serializer.validated_data))
        except ConsultantEmailTakenError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ConsultantSerializer(consultant).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        consultant = self.get_object()
        serializer = self.get_serializer(consultant, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            consultant = update_consultant(consultant, dict(serializer.validated_data))
        except ConsultantEmailTakenError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ConsultantSerializer(consultant).data)

    def destroy(self, request, pk=None):  # type: ignore
        delete_consultant(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)
