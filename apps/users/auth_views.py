"""Views for authentication (login and current profile)."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import AccessToken  # type: ignore

from .auth_serializers import LoginSerializer
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


def _access_token_for_user(user) -> str:
    token = AccessToken.for_user(user)
    token["role"] = user.role
    token["email"] = user.email
    return str(token)


class LoginView(APIView):
    """POST {email, password} -> {accessToken, user}; 401 on bad credentials."""

    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        logger.info("User %s logged in", user.pk)
        data = {
            "accessToken": _access_token_for_user(user),
            "user": UserSerializer(user).data,
        }
        return Response(data, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)
