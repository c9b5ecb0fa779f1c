"""Tests for the public site views against a fake API."""

from __future__ import annotations

from django.urls import reverse

from apps.listings.filter_state import FilterState

from .fakes import WebTestCase

HOUSE = {
    "id": "6d1e",
    "listingNo": "00001",
    "slug": "meram-yenisehirde-31-daire-00001",
    "title": "Meram Yenişehir 3+1 daire",
    "status": "FOR_SALE",
    "category": "HOUSING",
    "subPropertyType": "DAIRE",
    "price": 2500000,
    "priceDisplay": "2.500.000 TL",
    "currency": "TRY",
    "areaGross": 140,
    "cityId": 1,
    "districtId": 10,
    "neighborhoodId": 100,
    "district": {"id": 10, "name": "Meram"},
    "attributes": {"roomCount": "3+1", "hasElevator": True},
    "images": [],
    "isOpportunity": False,
    "createdAt": "2024-03-01T10:00:00Z",
}
FLAT = {
    **HOUSE,
    "id": "7a2f",
    "listingNo": "00002",
    "slug": "meram-21-daire-00002",
    "title": "Meram 2+1 daire",
    "price": 1800000,
    "attributes": {"roomCount": "2+1"},
}


class CustomerRequestPageTests(WebTestCase):
    routes = {("POST", "/requests/customer"): (201, {"id": 1, "status": "NEW"})}

    def test_submission_posts_camel_case_body(self) -> None:
        response = self.client.post(
            reverse("web:customer-request"),
            {"full_name": "Ali Veli", "phone": "05551234567", "type": "SELL"},
            follow=True,
        )

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Talebiniz alındı")
        calls = self.api.calls_to("POST", "/requests/customer")
        self.assertEqual(len(calls), 1)
        self.assertEqual(calls[0]["url"], "http://api.test/api/v1/requests/customer")
        self.assertEqual(calls[0]["json"], {"fullName": "Ali Veli", "phone": "05551234567", "type": "SELL"})

    def test_invalid_form_does_not_call_api(self) -> None:
        response = self.client.post(reverse("web:customer-request"), {"full_name": "Ali Veli", "type": "SELL"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.api.calls_to("POST", "/requests/customer"), [])
        self.assertIn("phone", response.context["form"].errors)

    def test_api_failure_keeps_form_and_shows_error(self) -> None:
        self.api.routes[("POST", "/requests/customer")] = (500, {"detail": "boom"})
        response = self.client.post(
            reverse("web:customer-request"),
            {"full_name": "Ali Veli", "phone": "05551234567", "type": "RENT"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Talebiniz kaydedilemedi")
        self.assertEqual(response.context["form"].cleaned_data["full_name"], "Ali Veli")

    def test_get_preselects_type(self) -> None:
        response = self.client.get(reverse("web:customer-request"), {"type": "VALUATION"})
        self.assertEqual(response.context["form"].initial["type"], "VALUATION")


class SearchPageTests(WebTestCase):
    routes = {("GET", "/listings"): (200, [FLAT, HOUSE])}

    def test_query_string_drives_api_params_and_selection(self) -> None:
        response = self.client.get(
            reverse("web:search"),
            {"status": "FOR_SALE", "category": "HOUSING", "roomCount": "3+1", "sort": "price-asc"},
        )

        self.assertEqual(response.status_code, 200)
        params = self.api.calls_to("GET", "/listings")[0]["params"]
        self.assertEqual(params["status"], "FOR_SALE")
        self.assertEqual(params["category"], "HOUSING")
        self.assertEqual(params["roomCount"], "3+1")
        self.assertEqual((params["sort"], params["order"]), ("price", "asc"))
        self.assertEqual(params["take"], "100")
        self.assertEqual([item["listingNo"] for item in response.context["listings"]], ["00001"])
        self.assertContains(response, "Oda: 3+1")

    def test_invalid_values_are_dropped(self) -> None:
        response = self.client.get(reverse("web:search"), {"status": "SOLD", "minPrice": "abc"})
        params = self.api.calls_to("GET", "/listings")[0]["params"]
        self.assertNotIn("status", params)
        self.assertNotIn("minPrice", params)
        self.assertEqual(len(response.context["listings"]), 2)

    def test_opportunities_force_flag(self) -> None:
        self.client.get(reverse("web:opportunities"))
        params = self.api.calls_to("GET", "/listings")[0]["params"]
        self.assertEqual(params["isOpportunity"], "true")

    def test_listing_failure_shows_message(self) -> None:
        self.api.routes[("GET", "/listings")] = (502, None)
        response = self.client.get(reverse("web:search"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "İlanlar yüklenemedi.")
        self.assertEqual(response.context["listings"], [])

    def test_form_carries_committed_state_and_formatted_prices(self) -> None:
        response = self.client.get(
            reverse("web:search"), {"status": "FOR_SALE", "category": "HOUSING", "minPrice": "1500000"}
        )
        self.assertContains(
            response, 'name="committed" value="status=FOR_SALE&amp;category=HOUSING&amp;minPrice=1500000"'
        )
        self.assertContains(response, 'name="minPrice" value="1.500.000"')

    def test_status_change_clears_category_sub_filters_and_stale_district(self) -> None:
        committed = FilterState(
            status="FOR_SALE",
            category="HOUSING",
            room_count=("3+1",),
            building_age="0-5",
            city_id="1",
            district_id="10",
        )
        response = self.client.get(
            reverse("web:search"),
            {
                "committed": committed.to_query_string(),
                "status": "FOR_RENT",
                "category": "HOUSING",
                "roomCount": "3+1",
                "buildingAge": "0-5",
                "cityId": "2",
                "districtId": "10",
            },
        )
        self.assertRedirects(response, "/arama?status=FOR_RENT&cityId=2", fetch_redirect_response=False)

        self.client.get(response.url)
        params = self.api.calls_to("GET", "/listings")[0]["params"]
        self.assertEqual(params["status"], "FOR_RENT")
        self.assertEqual(params["cityId"], "2")
        for stale in ("category", "roomCount", "buildingAge", "districtId"):
            self.assertNotIn(stale, params)

    def test_status_and_category_changed_together_keep_new_category(self) -> None:
        committed = FilterState(status="FOR_SALE", category="HOUSING", room_count=("2+1",))
        response = self.client.get(
            reverse("web:search"),
            {
                "committed": committed.to_query_string(),
                "status": "FOR_RENT",
                "category": "COMMERCIAL",
                "roomCount": "2+1",
            },
        )
        self.assertRedirects(
            response, "/arama?status=FOR_RENT&category=COMMERCIAL", fetch_redirect_response=False
        )

    def test_category_change_clears_sub_filters_only(self) -> None:
        committed = FilterState(status="FOR_SALE", category="HOUSING", room_count=("3+1",))
        response = self.client.get(
            reverse("web:search"),
            {
                "committed": committed.to_query_string(),
                "status": "FOR_SALE",
                "category": "LAND",
                "roomCount": "3+1",
                "minPrice": "1.000.000",
            },
        )
        self.assertRedirects(
            response, "/arama?status=FOR_SALE&category=LAND&minPrice=1000000", fetch_redirect_response=False
        )

    def test_district_change_clears_neighborhoods(self) -> None:
        committed = FilterState(city_id="1", district_id="10", neighborhood_ids=("100",))
        response = self.client.get(
            reverse("web:search"),
            {"committed": committed.to_query_string(), "cityId": "1", "districtId": "11", "neighborhoodIds": "100"},
        )
        self.assertRedirects(response, "/arama?cityId=1&districtId=11", fetch_redirect_response=False)

    def test_opportunities_form_submission_keeps_page(self) -> None:
        committed = FilterState(status="FOR_SALE", category="HOUSING", is_opportunity=True)
        response = self.client.get(
            reverse("web:opportunities"),
            {"committed": committed.to_query_string(), "status": "FOR_RENT", "category": "HOUSING"},
        )
        self.assertRedirects(response, "/firsatlar?status=FOR_RENT", fetch_redirect_response=False)


class BranchPageTests(WebTestCase):
    routes = {
        ("GET", "/branches/by-slug/meram"): (200, {"id": 3, "name": "Meram Şubesi", "slug": "meram"}),
        ("GET", "/branches/3/neighborhoods"): (200, [{"id": 100, "name": "Yenişehir"}]),
        ("GET", "/listings/search"): (200, {"items": [HOUSE, FLAT], "total": 2, "isListingNoSearch": False}),
    }

    def test_branch_search_sends_branch_slug(self) -> None:
        response = self.client.get(reverse("web:branch", kwargs={"slug": "meram"}), {"q": "yenişehir daire"})

        self.assertEqual(response.status_code, 200)
        params = self.api.calls_to("GET", "/listings/search")[0]["params"]
        self.assertEqual(params["branchSlug"], "meram")
        self.assertEqual(params["q"], "yenişehir daire")
        # any-word matching happened on the API; both results stay
        self.assertEqual(len(response.context["listings"]), 2)
        self.assertContains(response, "Meram Şubesi")

    def test_neighbor_expansion_results_are_kept(self) -> None:
        neighbor = {**FLAT, "neighborhoodId": 101}
        self.api.routes[("GET", "/listings/search")] = (200, {"items": [HOUSE, neighbor], "total": 2})
        response = self.client.get(
            reverse("web:branch", kwargs={"slug": "meram"}),
            {"districtId": "10", "neighborhoodIds": "100", "includeNeighbors": "true", "maxNeighborDistance": "5"},
        )
        params = self.api.calls_to("GET", "/listings/search")[0]["params"]
        self.assertEqual(params["includeNeighbors"], "true")
        self.assertEqual(params["maxNeighborDistance"], "5")
        self.assertEqual(len(response.context["listings"]), 2)

    def test_listing_number_redirects_to_detail(self) -> None:
        self.api.routes[("GET", "/listings/search")] = (
            200,
            {"items": [HOUSE], "total": 1, "isListingNoSearch": True},
        )
        response = self.client.get(reverse("web:branch", kwargs={"slug": "meram"}), {"q": "00001"})
        self.assertRedirects(
            response,
            reverse("web:listing-detail", kwargs={"identifier": HOUSE["slug"]}),
            fetch_redirect_response=False,
        )

    def test_form_submission_is_merged_before_search(self) -> None:
        committed = FilterState(status="FOR_SALE", category="HOUSING", room_count=("3+1",))
        response = self.client.get(
            reverse("web:branch", kwargs={"slug": "meram"}),
            {
                "committed": committed.to_query_string(),
                "status": "FOR_RENT",
                "category": "HOUSING",
                "roomCount": "3+1",
            },
        )
        self.assertRedirects(response, "/subeler/meram?status=FOR_RENT", fetch_redirect_response=False)
        self.assertEqual(self.api.calls_to("GET", "/listings/search"), [])

    def test_unknown_branch_is_404(self) -> None:
        response = self.client.get(reverse("web:branch", kwargs={"slug": "yok"}))
        self.assertEqual(response.status_code, 404)


class DetailPageTests(WebTestCase):
    routes = {
        ("GET", f"/listings/{HOUSE['slug']}"): (200, HOUSE),
        ("GET", "/pages/slug/hakkimizda"): (
            200,
            {
                "slug": "hakkimizda",
                "title": "Hakkımızda",
                "isPublished": True,
                "content": [{"type": "html", "content": "<p>Konya'nın emlak ofisi</p>"}],
            },
        ),
        ("GET", "/pages/slug/taslak"): (200, {"slug": "taslak", "title": "Taslak", "isPublished": False}),
        ("GET", "/listing-attributes"): (200, [{"key": "roomCount", "label": "Oda Sayısı"}]),
    }

    def test_listing_detail(self) -> None:
        response = self.client.get(reverse("web:listing-detail", kwargs={"identifier": HOUSE["slug"]}))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, HOUSE["title"])
        self.assertContains(response, "2.500.000 TL")
        self.assertEqual(response.context["details"], [("Oda Sayısı", "3+1")])
        self.assertEqual(self.api.calls_to("GET", "/listing-attributes")[0]["params"], {"category": "HOUSING"})
        self.assertEqual(response.context["amenities"], ["Asansör"])
        self.assertEqual(response.context["status_label"], "Satılık")

    def test_missing_listing_is_404(self) -> None:
        response = self.client.get(reverse("web:listing-detail", kwargs={"identifier": "99999"}))
        self.assertEqual(response.status_code, 404)

    def test_page_renders_blocks(self) -> None:
        response = self.client.get(reverse("web:page", kwargs={"slug": "hakkimizda"}))
        self.assertContains(response, "emlak ofisi</p>")

    def test_unpublished_page_is_404(self) -> None:
        response = self.client.get(reverse("web:page", kwargs={"slug": "taslak"}))
        self.assertEqual(response.status_code, 404)


class QuickSearchTests(WebTestCase):
    def test_listing_number_opens_listing(self) -> None:
        response = self.client.get(reverse("web:search-redirect"), {"q": " 12345 "})
        self.assertRedirects(
            response, reverse("web:listing-detail", kwargs={"identifier": "12345"}), fetch_redirect_response=False
        )

    def test_words_open_search(self) -> None:
        response = self.client.get(reverse("web:search-redirect"), {"q": "meram daire"})
        self.assertRedirects(response, f"{reverse('web:search')}?q=meram+daire", fetch_redirect_response=False)
