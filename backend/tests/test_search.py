import pytest

from pharmatwin.services.search import (
    filter_medicines, categorize, display_name, CATEGORIES,
)
from tests.factories import make_med


def test_empty_query_returns_catalog_unchanged(catalog):
    assert filter_medicines("", catalog) == catalog


def test_search_is_case_insensitive_on_english_name(catalog):
    result = filter_medicines("asp", catalog)
    assert [m.name_en for m in result] == ["Aspirin Cardio"]

    assert filter_medicines("PANADOL", catalog)[0].id == "1"


def test_search_matches_ingredient(catalog):
    assert [m.id for m in filter_medicines("diclofenac", catalog)] == ["10"]


def test_search_matches_arabic_fields_regardless_of_language(catalog):
    assert [m.id for m in filter_medicines("بنادول", catalog)] == ["1"]
    assert [m.id for m in filter_medicines("إيبوبروفين", catalog)] == ["4"]


@pytest.mark.parametrize("substring", ["Extra", "l E", "caffeine", "إكسترا", "كافيين"])
def test_any_substring_of_name_or_ingredient_matches(panadol, substring):
    assert panadol in filter_medicines(substring, [panadol])


def test_order_is_preserved(catalog):
    result = filter_medicines("in", catalog)
    ids = [m.id for m in catalog]
    assert [m.id for m in result] == [i for i in ids if i in {m.id for m in result}]


def test_no_match_returns_empty_list(catalog):
    assert filter_medicines("zzz-not-a-drug", catalog) == []


def test_missing_fields_are_treated_as_empty():
    bare = make_med("x", None, None)
    assert bare.name_en == ""
    assert filter_medicines("", [bare]) == [bare]
    assert filter_medicines("a", [bare]) == []
    assert categorize(bare) == "General"


@pytest.mark.parametrize("name, ingredient, expected", [
    ("Panadol Extra", "Paracetamol + Caffeine", "Analgesics"),
    ("Brufen", "Ibuprofen", "Analgesics"),
    ("Amoclan", "Amoxicillin", "Antibiotics"),
    ("Cipro", "Ciprofloxacin", "Antibiotics"),
    ("Vitamin C Plus Zinc", "Ascorbic Acid + Zinc", "Vitamins"),
    ("Tusskan Cough Syrup", "Dextromethorphan", "Cough & Cold"),
    ("Voltaren", "Diclofenac", "General"),
])
def test_categorize(name, ingredient, expected):
    assert categorize(make_med("x", name, ingredient)) == expected


def test_category_first_match_wins():
    # "aspirin" (Analgesics) beats "vitamin" (Vitamins)
    med = make_med("x", "Aspirin Vitamin Pack", "Aspirin")
    assert categorize(med) == "Analgesics"


def test_category_filter(catalog):
    result = filter_medicines("", catalog, "Analgesics")
    assert [m.id for m in result] == ["1", "2", "4"]
    assert filter_medicines("asp", catalog, "Antibiotics") == []
    assert filter_medicines("", catalog, "All") == catalog


def test_categories_listing_starts_with_all():
    assert CATEGORIES[0] == "All"
    assert CATEGORIES[-1] == "General"
    assert "Cough & Cold" in CATEGORIES


def test_display_name_falls_back_to_english():
    med = make_med("x", "Adol", "Paracetamol")
    assert display_name(med, "ar") == "Adol"
    med = make_med("y", "Adol", "Paracetamol", name_ar="أدول")
    assert display_name(med, "ar") == "أدول"
    assert display_name(med, "en") == "Adol"
