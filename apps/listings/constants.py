"""Catalog vocabulary: statuses, categories, sub-types and filter options.

Each option list is a sequence of ``(key, label)`` pairs; keys travel in
query strings and ``Listing.attributes``, labels are shown on the site.
"""

from __future__ import annotations

FOR_SALE = "FOR_SALE"
FOR_RENT = "FOR_RENT"

STATUSES = (
    (FOR_SALE, "Satılık"),
    (FOR_RENT, "Kiralık"),
)

CATEGORY_LABELS = {
    "HOUSING": "Konut",
    "LAND": "Arsa",
    "COMMERCIAL": "Ticari",
    "TRANSFER": "Devren",
    "FIELD": "Tarla",
    "GARDEN": "Bahçe",
    "HOBBY_GARDEN": "Hobi Bahçesi",
}

# Categories offered by the filter per status
CATEGORIES = {
    FOR_SALE: ("HOUSING", "LAND", "COMMERCIAL", "TRANSFER", "FIELD", "GARDEN"),
    FOR_RENT: ("HOUSING", "COMMERCIAL"),
}

SUB_PROPERTY_TYPES = {
    "HOUSING": (
        ("DAIRE", "Daire"),
        ("APART", "Apart"),
        ("DUBLEX", "Dublex"),
        ("TRIPLEX", "Triplex"),
        ("VILLA", "Villa"),
        ("MUSTAKIL_EV", "Müstakil Ev"),
        ("DEVREMULK", "Devremülk"),
    ),
    "LAND": (
        ("KONUT_ARSASI", "Konut Arsası"),
        ("TICARI_ARSA", "Ticari Arsa"),
        ("KONUT_TICARI_ARSA", "Konut + Ticari Arsa"),
        ("SANAYI_ARSASI", "Sanayi Arsası"),
        ("TURIZM_ARSASI", "Turizm Arsası"),
        ("AVM_ARSASI", "AVM Arsası"),
    ),
    "COMMERCIAL": (
        ("DUKKAN", "Dükkan"),
        ("OFIS", "Ofis"),
        ("DEPO", "Depo"),
        ("SANAYI_DUKKANI", "Sanayi Dükkanı"),
        ("OTEL", "Otel"),
        ("FABRIKA", "Fabrika"),
    ),
    "TRANSFER": (
        ("DUKKAN", "Dükkan"),
        ("OFIS", "Ofis"),
        ("DEPO", "Depo"),
    ),
    "FIELD": (
        ("SULU", "Sulu"),
        ("KIRAC", "Kıraç"),
        ("VERIMLI", "Verimli"),
        ("TASLIK", "Taşlık"),
        ("MARJINAL", "Marjinal"),
    ),
    "GARDEN": (
        ("ELMA", "Elma Bahçesi"),
        ("CEVIZ", "Ceviz Bahçesi"),
        ("ZEYTIN", "Zeytin Bahçesi"),
        ("BADEM", "Badem Bahçesi"),
        ("ERIK", "Erik Bahçesi"),
        ("KIRAZ", "Kiraz Bahçesi"),
        ("UZUM_BAGI", "Üzüm Bağı"),
        ("KARISIK", "Karışık"),
    ),
}

ROOM_COUNTS = ("1+0", "1+1", "2+1", "3+1", "4+1", "5+1", "6+")

BUILDING_AGES = (
    ("0", "Sıfır Bina"),
    ("0-5", "1-5 Yıl"),
    ("5-10", "5-10 Yıl"),
    ("10-20", "10-20 Yıl"),
    ("20+", "20+ Yıl"),
)

FLOORS = (
    ("BODRUM", "Bodrum"),
    ("ZEMIN", "Zemin Kat"),
    ("1", "1. Kat"),
    ("2", "2. Kat"),
    ("3", "3. Kat"),
    ("4", "4. Kat"),
    ("5", "5. Kat"),
    ("6+", "6+ Kat"),
    ("CATI", "Çatı Katı"),
)

TOTAL_FLOORS = (
    ("1", "1 Katlı"),
    ("2", "2 Katlı"),
    ("3", "3 Katlı"),
    ("4", "4 Katlı"),
    ("5", "5 Katlı"),
    ("6-10", "6-10 Katlı"),
    ("10+", "10+ Katlı"),
)

HEATING_TYPES = (
    ("DOGALGAZ_KOMBI", "Doğalgaz (Kombi)"),
    ("DOGALGAZ_MERKEZI", "Doğalgaz (Merkezi)"),
    ("MERKEZI_PAY_OLCER", "Merkezi (Pay Ölçer)"),
    ("SOBA", "Soba"),
    ("KLIMA", "Klima"),
    ("YERDEN_ISITMA", "Yerden Isıtma"),
    ("GUNES_ENERJISI", "Güneş Enerjisi"),
    ("YOK", "Yok"),
)

LAND_TYPES = (
    ("KONUT_ARSASI", "Konut Arsası"),
    ("TICARI_ARSA", "Ticari Arsa"),
    ("TICARI_KONUT_ARSASI", "Ticari-Konut"),
    ("SANAYI_ARSASI", "Sanayi Arsası"),
    ("TURIZM_ARSASI", "Turizm Arsası"),
    ("AVM_ARSASI", "AVM Arsası"),
)

PAYMENT_TYPES = (
    ("NAKIT", "Nakit"),
    ("KAT_KARSILIGI", "Kat Karşılığı"),
    ("TAKAS", "Takas"),
)

GARDEN_TYPES = (
    ("ELMA", "Elma Bahçesi"),
    ("CEVIZ", "Ceviz Bahçesi"),
    ("ZEYTIN", "Zeytin Bahçesi"),
    ("BADEM", "Badem Bahçesi"),
    ("ERIK", "Erik Bahçesi"),
    ("KIRAZ", "Kiraz Bahçesi"),
    ("UZUM", "Üzüm Bağı"),
    ("KARISIK", "Meyve Bahçesi (Karışık)"),
    ("DIGER", "Diğer"),
)

WATER_TYPES = (
    ("SULU", "Sulu"),
    ("SUSUZ", "Susuz"),
    ("KUYU", "Kuyu Suyu"),
)

FIELD_TYPES = (
    ("SULU", "Sulu"),
    ("KIRAC", "Kıraç"),
    ("VERIMLI", "Verimli"),
    ("TASLIK", "Taşlık"),
    ("MARJINAL", "Marjinal"),
)

# Boolean amenities stored in Listing.attributes under the same key
AMENITIES = (
    ("furnished", "Eşyalı"),
    ("hasElevator", "Asansör"),
    ("hasGarage", "Garaj"),
    ("hasStorage", "Depo"),
    ("hasParentBathroom", "Ebeveyn Banyosu"),
    ("isSiteInside", "Site İçerisinde"),
    ("hasSecurity", "Güvenlik"),
    ("isCreditEligible", "Krediye Uygun"),
    ("isSwapEligible", "Takasa Uygun"),
    ("hasElectricity", "Elektrik"),
    ("hasRoadAccess", "Yol"),
    ("hasPool", "Havuz"),
    ("nearSchool", "Okula Yakın"),
    ("nearHospital", "Hastaneye Yakın"),
    ("nearTransport", "Ulaşıma Yakın"),
    ("nearSea", "Denize Yakın"),
)

SORT_FIELDS = ("createdAt", "price", "areaGross")
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

SORT_OPTIONS = (
    ("createdAt-desc", "En Yeni"),
    ("createdAt-asc", "En Eski"),
    ("price-asc", "Fiyat (Artan)"),
    ("price-desc", "Fiyat (Azalan)"),
    ("areaGross-desc", "m² (Büyükten Küçüğe)"),
    ("areaGross-asc", "m² (Küçükten Büyüğe)"),
)

NEIGHBOR_DISTANCES = (3, 5, 10, 15)
DEFAULT_NEIGHBOR_DISTANCE = 3

# Words ignored by branch free-text search
SEARCH_STOP_WORDS = frozenset({"mahalle", "mahallesi", "mah", "mah."})

LISTING_NO_LENGTH = 5


def label_for(options, key) -> str:
    """Label of ``key`` in an option list, or the key itself."""
    for option_key, label in options:
        if option_key == key:
            return label
    return key


def status_label(status: str | None) -> str:
    return label_for(STATUSES, status) if status else ""


def category_label(category: str | None) -> str:
    return CATEGORY_LABELS.get(category or "", category or "")
