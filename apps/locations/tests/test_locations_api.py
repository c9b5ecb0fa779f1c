"""API tests for cities, districts and neighborhoods."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.locations.models import Location, NeighborhoodNeighbor
from apps.locations.services import expand_with_neighbors
from apps.users.models import User


class LocationAPITests(APITestCase):
    def setUp(self) -> None:
        self.konya = Location.objects.create(kind=Location.Kind.CITY, name="Konya")
        self.ankara = Location.objects.create(kind=Location.Kind.CITY, name="Ankara")
        self.meram = Location.objects.create(kind=Location.Kind.DISTRICT, name="Meram", parent=self.konya)
        self.selcuklu = Location.objects.create(kind=Location.Kind.DISTRICT, name="Selçuklu", parent=self.konya)
        self.yeni = Location.objects.create(
            kind=Location.Kind.NEIGHBORHOOD, name="Yenişehir", parent=self.meram
        )
        self.alavardi = Location.objects.create(
            kind=Location.Kind.NEIGHBORHOOD, name="Alavardı", parent=self.meram
        )
        self.bosna = Location.objects.create(
            kind=Location.Kind.NEIGHBORHOOD, name="Bosna Hersek", parent=self.selcuklu
        )
        self.admin = User.objects.create_user(
            email="admin@example.com", password="StrongPass123", role=User.RoleChoices.ADMIN
        )

    def test_list_cities_sorted_by_name(self) -> None:
        response = self.client.get(reverse("locations:city-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([c["name"] for c in response.data], ["Ankara", "Konya"])

    def test_city_slug_is_generated(self) -> None:
        self.assertEqual(self.konya.slug, "konya")
        self.assertEqual(self.selcuklu.slug, "selcuklu")

    def test_districts_filtered_by_city(self) -> None:
        response = self.client.get(reverse("locations:district-list"), {"cityId": self.konya.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([d["name"] for d in response.data], ["Meram", "Selçuklu"])
        self.assertEqual(response.data[0]["cityId"], self.konya.id)

    def test_neighborhoods_filtered_by_district(self) -> None:
        response = self.client.get(reverse("locations:neighborhood-list"), {"districtId": self.meram.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["name"] for n in response.data], ["Alavardı", "Yenişehir"])
        self.assertEqual(response.data[0]["district"]["name"], "Meram")

    def test_neighborhoods_filtered_by_city(self) -> None:
        response = self.client.get(reverse("locations:neighborhood-list"), {"cityId": self.konya.id})
        self.assertEqual(len(response.data), 3)

    def test_create_city_requires_admin(self) -> None:
        response = self.client.post(reverse("locations:city-list"), {"name": "İzmir"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("locations:city-list"), {"name": "İzmir"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["slug"], "izmir")
        self.assertTrue(Location.objects.cities().filter(name="İzmir").exists())

    def test_consultant_cannot_create_city(self) -> None:
        consultant = User.objects.create_user(email="c@example.com", password="StrongPass123")
        self.client.force_authenticate(consultant)
        response = self.client.post(reverse("locations:city-list"), {"name": "İzmir"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_city_with_districts_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("locations:city-detail", args=[self.konya.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Location.objects.filter(pk=self.konya.pk).exists())

    def test_delete_empty_city(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("locations:city-detail", args=[self.ankara.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Location.objects.filter(pk=self.ankara.pk).exists())

    def test_neighbors_sorted_by_distance(self) -> None:
        NeighborhoodNeighbor.objects.create(neighborhood=self.yeni, neighbor=self.bosna, distance=Decimal("4.5"))
        NeighborhoodNeighbor.objects.create(neighborhood=self.yeni, neighbor=self.alavardi, distance=Decimal("1.2"))
        response = self.client.get(reverse("locations:neighborhood-neighbors", args=[self.yeni.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["name"] for n in response.data], ["Alavardı", "Bosna Hersek"])
        self.assertEqual(response.data[0]["distance"], Decimal("1.20"))


class ExpandWithNeighborsTests(APITestCase):
    def test_neighbors_within_distance_are_added_once(self) -> None:
        city = Location.objects.create(kind=Location.Kind.CITY, name="Konya")
        district = Location.objects.create(kind=Location.Kind.DISTRICT, name="Meram", parent=city)
        a, b, c = (
            Location.objects.create(kind=Location.Kind.NEIGHBORHOOD, name=name, parent=district)
            for name in ("A", "B", "C")
        )
        NeighborhoodNeighbor.objects.create(neighborhood=a, neighbor=b, distance=Decimal("2"))
        NeighborhoodNeighbor.objects.create(neighborhood=a, neighbor=c, distance=Decimal("8"))

        self.assertEqual(expand_with_neighbors([a.id]), [str(a.id), str(b.id)])
        self.assertEqual(expand_with_neighbors([a.id], 10), [str(a.id), str(b.id), str(c.id)])
        self.assertEqual(expand_with_neighbors([a.id, b.id]), [str(a.id), str(b.id)])
        self.assertEqual(expand_with_neighbors([]), [])
