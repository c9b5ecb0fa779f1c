"""API tests for CMS pages and block rendering."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.pages.blocks import render_blocks
from apps.pages.models import PageSetting
from apps.users.models import User


class PageAPITests(APITestCase):
    def setUp(self) -> None:
        self.about = PageSetting.objects.create(
            slug="hakkimizda",
            title="Hakkımızda",
            is_published=True,
            show_in_menu=True,
            menu_order=1,
            content=[{"id": "block-1", "type": "html", "content": "<h2>Emlaknomi</h2>"}],
        )
        self.draft = PageSetting.objects.create(slug="taslak", title="Taslak", is_published=False)
        self.manager = User.objects.create_user(
            email="manager@example.com", password="StrongPass123", role=User.RoleChoices.MANAGER
        )

    def test_public_list_contains_published_pages_only(self) -> None:
        response = self.client.get(reverse("pages:list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([page["slug"] for page in response.data], ["hakkimizda"])
        self.assertEqual(response.data[0]["content"][0]["type"], "html")

    def test_admin_list_includes_drafts(self) -> None:
        response = self.client.get(reverse("pages:admin-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.client.force_authenticate(self.manager)
        response = self.client.get(reverse("pages:admin-list"))
        self.assertEqual({page["slug"] for page in response.data}, {"hakkimizda", "taslak"})

    def test_by_slug(self) -> None:
        response = self.client.get(reverse("pages:by-slug", args=["hakkimizda"]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["title"], "Hakkımızda")
        missing = self.client.get(reverse("pages:by-slug", args=["yok"]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_manager_creates_page_with_blocks(self) -> None:
        self.client.force_authenticate(self.manager)
        payload = {
            "slug": "iletisim",
            "title": "İletişim",
            "isPublished": True,
            "content": [
                {"id": "b1", "type": "text", "content": "Bize ulaşın"},
                {"id": "b2", "type": "button", "content": "Ara", "linkUrl": "tel:05433061499"},
            ],
        }
        response = self.client.post(reverse("pages:list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        page = PageSetting.objects.get(slug="iletisim")
        self.assertEqual(page.content[1]["linkUrl"], "tel:05433061499")

    def test_unknown_block_type_is_rejected(self) -> None:
        self.client.force_authenticate(self.manager)
        response = self.client.patch(
            reverse("pages:detail", args=[self.about.id]),
            {"content": [{"type": "script", "content": "x"}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_anonymous_cannot_delete(self) -> None:
        response = self.client.delete(reverse("pages:detail", args=[self.about.id]))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


def test_only_html_blocks_are_rendered_unescaped() -> None:
    html = render_blocks(
        [
            {"type": "text", "content": "<b>kalın</b>"},
            {"type": "html", "content": "<b>kalın</b>"},
            {"type": "image", "imageUrl": "/uploads/ofis.jpg", "alt": "Ofis"},
            {"type": "button", "content": "Ara", "linkUrl": "tel:0543"},
            {"type": "video", "content": "x"},
        ]
    )
    assert "&lt;b&gt;kalın&lt;/b&gt;" in html
    assert '<div class="page-block page-block--html"><b>kalın</b></div>' in html
    assert '<img src="/uploads/ofis.jpg" alt="Ofis">' in html
    assert 'href="tel:0543"' in html
    assert "video" not in html
