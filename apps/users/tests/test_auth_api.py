"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="admin@example.com",
            password="StrongPass123",
            name="Özcan Aktaş",
            role=User.RoleChoices.ADMIN,
        )

    def test_login_returns_access_token_and_profile(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("accessToken", response.data)
        self.assertEqual(
            response.data["user"],
            {"id": self.user.id, "name": "Özcan Aktaş", "email": "admin@example.com", "role": "ADMIN"},
        )

    def test_login_with_wrong_password_is_unauthorized(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_unknown_email_is_unauthorized(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "nobody@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_authenticates_me_endpoint(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": "admin@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['accessToken']}")
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["email"], "admin@example.com")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
