"""API tests for listings: CRUD, search, branch search, images and transfer."""

from __future__ import annotations

from io import BytesIO

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from apps.branches.models import Branch
from apps.consultants.models import Consultant
from apps.listings.models import Listing, ListingAttributeDefinition, ListingImage
from apps.locations.models import Location, NeighborhoodNeighbor
from apps.users.models import User


class ListingAPITestBase(APITestCase):
    def setUp(self) -> None:
        self.konya = Location.objects.create(kind=Location.Kind.CITY, name="Konya")
        self.meram = Location.objects.create(kind=Location.Kind.DISTRICT, name="Meram", parent=self.konya)
        self.selcuklu = Location.objects.create(kind=Location.Kind.DISTRICT, name="Selçuklu", parent=self.konya)
        self.yenisehir = Location.objects.create(
            kind=Location.Kind.NEIGHBORHOOD, name="Yenişehir", parent=self.meram
        )
        self.kozagac = Location.objects.create(kind=Location.Kind.NEIGHBORHOOD, name="Kozağaç", parent=self.meram)
        self.bosna = Location.objects.create(kind=Location.Kind.NEIGHBORHOOD, name="Bosna", parent=self.selcuklu)

        self.meram_branch = Branch.objects.create(name="Meram Şube", slug="meram", city=self.konya)
        self.selcuklu_branch = Branch.objects.create(name="Selçuklu Şube", slug="selcuklu", city=self.konya)

        self.manager = User.objects.create_user(
            email="manager@example.com", password="StrongPass123", role=User.RoleChoices.MANAGER
        )
        self.consultant_user = User.objects.create_user(
            email="ayse@example.com", password="StrongPass123", name="Ayşe Yılmaz"
        )
        self.consultant = Consultant.objects.create(user=self.consultant_user, branch=self.meram_branch)
        self.other_user = User.objects.create_user(email="mehmet@example.com", password="StrongPass123")
        self.other_consultant = Consultant.objects.create(user=self.other_user, branch=self.meram_branch)

    def make_listing(self, **overrides) -> Listing:
        data = {
            "title": "Satılık daire",
            "price": 1000000,
            "status": Listing.Status.FOR_SALE,
            "category": Listing.Category.HOUSING,
            "city": self.konya,
            "district": self.meram,
            "neighborhood": self.yenisehir,
            "branch": self.meram_branch,
            "consultant": self.consultant,
            "created_by": self.consultant_user,
        }
        data.update(overrides)
        return Listing.objects.create(**data)


class ListingCrudTests(ListingAPITestBase):
    def test_create_generates_number_slug_seo_and_coordinates(self) -> None:
        self.client.force_authenticate(self.consultant_user)
        payload = {
            "title": "Meram Yenişehir'de 3+1 Daire",
            "description": "Güney cephe, asansörlü.",
            "price": "2500000",
            "status": "FOR_SALE",
            "category": "HOUSING",
            "subPropertyType": "DAIRE",
            "cityId": self.konya.id,
            "districtId": self.meram.id,
            "neighborhoodId": self.yenisehir.id,
            "branchId": self.meram_branch.id,
            "consultantId": self.consultant.id,
            "attributes": {"roomCount": "3+1", "hasElevator": True},
            "googleMapsUrl": "https://www.google.com/maps/place/Meram/@37.8749,32.4932,15z",
        }
        response = self.client.post(reverse("listings:list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["listingNo"], "00001")
        self.assertEqual(response.data["slug"], "meram-yenisehirde-31-daire-00001")
        self.assertEqual(response.data["metaTitle"], "Satılık Meram Yenişehir'de 3+1 Daire - İlan No: 00001")
        self.assertEqual(response.data["metaDescription"], "Güney cephe, asansörlü.")
        self.assertAlmostEqual(response.data["latitude"], 37.8749)
        self.assertAlmostEqual(response.data["longitude"], 32.4932)
        self.assertEqual(response.data["createdById"], self.consultant_user.id)

        second = self.client.post(
            reverse("listings:list"), {**payload, "googleMapsUrl": ""}, format="json"
        )
        self.assertEqual(second.data["listingNo"], "00002")

    def test_create_requires_authentication(self) -> None:
        response = self.client.post(reverse("listings:list"), {"title": "X"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_sub_property_type_must_match_category(self) -> None:
        self.client.force_authenticate(self.consultant_user)
        payload = {
            "title": "Arsa",
            "price": "100",
            "status": "FOR_SALE",
            "category": "LAND",
            "subPropertyType": "VILLA",
            "cityId": self.konya.id,
            "branchId": self.meram_branch.id,
        }
        response = self.client.post(reverse("listings:list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("subPropertyType", response.data)

    def test_retrieve_by_id_slug_or_listing_number(self) -> None:
        listing = self.make_listing(title="Bahçeli villa")
        for identifier in (str(listing.id), listing.slug, listing.listing_no):
            response = self.client.get(reverse("listings:detail", args=[identifier]))
            self.assertEqual(response.status_code, status.HTTP_200_OK, identifier)
            self.assertEqual(response.data["id"], str(listing.id))
        missing = self.client.get(reverse("listings:detail", args=["99999"]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_hidden_location_is_not_exposed(self) -> None:
        listing = self.make_listing(latitude=37.1, longitude=32.1, hide_location=True)
        response = self.client.get(reverse("listings:detail", args=[listing.slug]))
        self.assertIsNone(response.data["latitude"])
        self.assertIsNone(response.data["longitude"])

    def test_consultant_edits_only_own_listings(self) -> None:
        own = self.make_listing()
        foreign = self.make_listing(consultant=self.other_consultant, created_by=self.other_user)
        self.client.force_authenticate(self.consultant_user)

        response = self.client.patch(reverse("listings:detail", args=[own.id]), {"price": "1200000"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["price"], 1200000)

        response = self.client.patch(reverse("listings:detail", args=[foreign.id]), {"price": "1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_blank_slug_on_update_keeps_existing(self) -> None:
        listing = self.make_listing()
        self.client.force_authenticate(self.manager)
        response = self.client.patch(reverse("listings:detail", args=[listing.id]), {"slug": ""}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["slug"], listing.slug)

    def test_manager_deletes_listing(self) -> None:
        listing = self.make_listing()
        self.client.force_authenticate(self.manager)
        response = self.client.delete(reverse("listings:detail", args=[listing.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Listing.objects.exists())

    def test_manager_transfers_listing(self) -> None:
        listing = self.make_listing()
        self.client.force_authenticate(self.manager)
        response = self.client.patch(
            reverse("listings:transfer", args=[listing.id]),
            {"consultantId": self.other_consultant.id, "branchId": self.selcuklu_branch.id},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        listing.refresh_from_db()
        self.assertEqual(listing.consultant, self.other_consultant)
        self.assertEqual(listing.created_by, self.other_user)
        self.assertEqual(listing.branch, self.selcuklu_branch)
        self.assertEqual(response.data["branchId"], self.selcuklu_branch.id)

    def test_transfer_without_branch_keeps_branch(self) -> None:
        listing = self.make_listing()
        self.client.force_authenticate(self.manager)
        response = self.client.patch(
            reverse("listings:transfer", args=[listing.id]),
            {"consultantId": self.other_consultant.id},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        listing.refresh_from_db()
        self.assertEqual(listing.branch, self.meram_branch)

    def test_consultant_cannot_transfer(self) -> None:
        listing = self.make_listing()
        self.client.force_authenticate(self.consultant_user)
        response = self.client.patch(
            reverse("listings:transfer", args=[listing.id]),
            {"consultantId": self.other_consultant.id},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_price_is_displayed_with_currency_symbol(self) -> None:
        listing = self.make_listing(price=2500000, currency="TRY")
        response = self.client.get(reverse("listings:detail", args=[listing.listing_no]))
        self.assertEqual(response.data["priceDisplay"], "2.500.000 TL")

    def test_unknown_currency_is_rejected(self) -> None:
        self.client.force_authenticate(self.consultant_user)
        payload = {
            "title": "Daire",
            "price": "100",
            "currency": "XYZ",
            "status": "FOR_SALE",
            "category": "HOUSING",
            "cityId": self.konya.id,
            "branchId": self.meram_branch.id,
        }
        response = self.client.post(reverse("listings:list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("currency", response.data)


class ListingSearchTests(ListingAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.flat = self.make_listing(
            title="3+1 daire",
            price=2000000,
            area_gross=140,
            attributes={"roomCount": "3+1", "hasElevator": True},
            is_opportunity=True,
        )
        self.rental = self.make_listing(
            title="Kiralık 2+1",
            price=15000,
            area_gross=90,
            status=Listing.Status.FOR_RENT,
            neighborhood=self.kozagac,
            attributes={"roomCount": "2+1"},
        )
        self.land = self.make_listing(
            title="Ticari arsa",
            price=900000,
            category=Listing.Category.LAND,
            sub_property_type="TICARI_ARSA",
            district=self.selcuklu,
            neighborhood=self.bosna,
            branch=self.selcuklu_branch,
        )

    def get_ids(self, params) -> list[str]:
        response = self.client.get(reverse("listings:list"), params)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return [item["id"] for item in response.data]

    def test_status_category_and_price(self) -> None:
        self.assertEqual(self.get_ids({"status": "FOR_SALE", "category": "HOUSING"}), [str(self.flat.id)])
        self.assertEqual(
            self.get_ids({"minPrice": "100000", "maxPrice": "1000000"}), [str(self.land.id)]
        )

    def test_room_count_csv_and_amenities(self) -> None:
        ids = self.get_ids({"roomCount": "2+1,3+1", "sort": "price", "order": "asc"})
        self.assertEqual(ids, [str(self.rental.id), str(self.flat.id)])
        self.assertEqual(self.get_ids({"hasElevator": "true"}), [str(self.flat.id)])
        self.assertNotIn(str(self.flat.id), self.get_ids({"hasElevator": "false"}))

    def test_location_branch_and_opportunity(self) -> None:
        self.assertEqual(self.get_ids({"districtId": self.selcuklu.id}), [str(self.land.id)])
        self.assertEqual(
            set(self.get_ids({"neighborhoodIds": f"{self.yenisehir.id},{self.kozagac.id}"})),
            {str(self.flat.id), str(self.rental.id)},
        )
        self.assertEqual(self.get_ids({"branchSlug": "selcuklu"}), [str(self.land.id)])
        self.assertEqual(self.get_ids({"isOpportunity": "true"}), [str(self.flat.id)])

    def test_take_and_skip(self) -> None:
        ids = self.get_ids({"sort": "price", "order": "desc", "take": 1, "skip": 1})
        self.assertEqual(ids, [str(self.land.id)])

    def test_invalid_choice_is_rejected(self) -> None:
        response = self.client.get(reverse("listings:list"), {"status": "SOLD"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BranchSearchTests(ListingAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.yenisehir_flat = self.make_listing(title="Asansörlü daire", description="Merkezi konum")
        self.kozagac_flat = self.make_listing(title="Bahçeli ev", neighborhood=self.kozagac)
        self.other_branch = self.make_listing(
            title="Selçuklu arsası",
            category=Listing.Category.LAND,
            district=self.selcuklu,
            neighborhood=self.bosna,
            branch=self.selcuklu_branch,
        )
        NeighborhoodNeighbor.objects.create(neighborhood=self.yenisehir, neighbor=self.kozagac, distance=2)

    def search(self, **params):
        response = self.client.get(reverse("listings:search"), {"branchSlug": "meram", **params})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return response.data

    def test_listing_number_matches_across_branches(self) -> None:
        data = self.search(q=self.other_branch.listing_no)
        self.assertTrue(data["isListingNoSearch"])
        self.assertEqual(data["branchSlug"], "selcuklu")
        self.assertEqual(data["total"], 1)
        self.assertEqual(data["items"][0]["id"], str(self.other_branch.id))

    def test_words_match_any_field_and_skip_stop_words(self) -> None:
        data = self.search(q="kozağaç mahallesi")
        self.assertEqual([item["id"] for item in data["items"]], [str(self.kozagac_flat.id)])
        data = self.search(q="merkezi a")
        self.assertEqual([item["id"] for item in data["items"]], [str(self.yenisehir_flat.id)])

    def test_branch_scope(self) -> None:
        data = self.search()
        self.assertEqual(data["total"], 2)
        self.assertNotIn("isListingNoSearch", data)

    def test_neighbor_expansion(self) -> None:
        data = self.search(neighborhoodIds=str(self.yenisehir.id))
        self.assertEqual(data["total"], 1)
        data = self.search(neighborhoodIds=str(self.yenisehir.id), includeNeighbors="true")
        self.assertEqual(data["total"], 2)
        data = self.search(neighborhoodIds=str(self.yenisehir.id), includeNeighbors="true", maxNeighborDistance="1")
        self.assertEqual(data["total"], 1)

    def test_take_defaults_and_paging(self) -> None:
        data = self.search(take=1)
        self.assertEqual(data["total"], 2)
        self.assertEqual(len(data["items"]), 1)

    def test_branch_slug_is_required(self) -> None:
        response = self.client.get(reverse("listings:search"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


@override_settings(LISTING_IMAGE_MAX_WIDTH=100)
class ListingImageTests(ListingAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.listing = self.make_listing()
        self.client.force_authenticate(self.consultant_user)

    def test_add_url_images_and_switch_cover(self) -> None:
        url = reverse("listings:images", args=[self.listing.id])
        first = self.client.post(url, {"url": "/uploads/a.jpg", "isCover": True}, format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        second = self.client.post(url, {"url": "/uploads/b.jpg", "sortOrder": 1}, format="json")
        self.assertFalse(second.data["isCover"])

        response = self.client.patch(
            reverse("listings:image-cover", args=[self.listing.id, second.data["id"]])
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        covers = ListingImage.objects.filter(listing=self.listing, is_cover=True)
        self.assertEqual([str(image.id) for image in covers], [second.data["id"]])

    def test_upload_is_downscaled(self) -> None:
        buffer = BytesIO()
        Image.new("RGB", (400, 200), "white").save(buffer, format="JPEG")
        upload = SimpleUploadedFile("photo.jpg", buffer.getvalue(), content_type="image/jpeg")
        response = self.client.post(
            reverse("listings:images", args=[self.listing.id]), {"file": upload}, format="multipart"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        image = ListingImage.objects.get(listing=self.listing)
        with Image.open(image.image) as stored:
            self.assertEqual(stored.size, (100, 50))

    @override_settings(LISTING_IMAGE_MAX_BYTES=100)
    def test_oversized_upload_is_rejected(self) -> None:
        upload = SimpleUploadedFile("photo.jpg", b"x" * 101, content_type="image/jpeg")
        response = self.client.post(
            reverse("listings:images", args=[self.listing.id]), {"files": [upload]}, format="multipart"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("file", response.data)
        self.assertFalse(ListingImage.objects.exists())

    def test_image_requires_url_or_file(self) -> None:
        response = self.client.post(reverse("listings:images", args=[self.listing.id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_remove_image(self) -> None:
        image = ListingImage.objects.create(listing=self.listing, url="/uploads/a.jpg")
        response = self.client.delete(reverse("listings:image-detail", args=[self.listing.id, image.id]))
        self.assertEqual(response.data, {"deleted": 1})
        self.assertFalse(ListingImage.objects.exists())

    def test_cover_for_unknown_image_is_404(self) -> None:
        response = self.client.patch(
            reverse("listings:image-cover", args=[self.listing.id, "6f1c1d7e-8b4f-4c55-9a4e-2a6f8a1f0c11"])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ListingAttributeTests(APITestCase):
    def setUp(self) -> None:
        self.manager = User.objects.create_user(
            email="manager@example.com", password="StrongPass123", role=User.RoleChoices.MANAGER
        )
        ListingAttributeDefinition.objects.create(
            category="HOUSING", key="roomCount", label="Oda Sayısı", type="SELECT", options=["2+1", "3+1"], sort_order=1
        )
        ListingAttributeDefinition.objects.create(
            category="HOUSING", status="FOR_RENT", key="deposit", label="Depozito", type="NUMBER", sort_order=2
        )
        ListingAttributeDefinition.objects.create(
            category="HOUSING", status="FOR_SALE", key="hasElevator", label="Asansör", type="BOOLEAN", sort_order=3
        )
        ListingAttributeDefinition.objects.create(category="LAND", key="zoning", label="İmar Durumu")

    def test_list_by_category_and_status(self) -> None:
        response = self.client.get(reverse("listings:attribute-list"), {"category": "HOUSING", "status": "FOR_SALE"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["key"] for item in response.data], ["roomCount", "hasElevator"])
        self.assertEqual(response.data[0]["options"], ["2+1", "3+1"])

    def test_create_requires_manager(self) -> None:
        payload = {"category": "HOUSING", "key": "floor", "label": "Kat", "type": "TEXT"}
        response = self.client.post(reverse("listings:attribute-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.manager)
        response = self.client.post(reverse("listings:attribute-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "")

    def test_select_requires_options(self) -> None:
        self.client.force_authenticate(self.manager)
        payload = {"category": "HOUSING", "key": "view", "label": "Manzara", "type": "SELECT", "options": []}
        response = self.client.post(reverse("listings:attribute-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("options", response.data)

    def test_update_and_delete(self) -> None:
        self.client.force_authenticate(self.manager)
        definition = ListingAttributeDefinition.objects.get(key="zoning")
        url = reverse("listings:attribute-detail", kwargs={"pk": definition.pk})
        response = self.client.patch(url, {"label": "İmar", "groupName": None}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["label"], "İmar")
        self.assertEqual(response.data["groupName"], "")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ListingAttributeDefinition.objects.filter(pk=definition.pk).exists())
