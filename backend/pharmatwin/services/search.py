# backend/pharmatwin/services/search.py
from typing import List, Sequence

from pharmatwin.schemas import MedicineRecord
from pharmatwin.services.rules import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, ALL_CATEGORIES

CATEGORIES = [ALL_CATEGORIES] + [name for name, _ in CATEGORY_KEYWORDS] + [DEFAULT_CATEGORY]


def display_name(med: MedicineRecord, lang: str = "en") -> str:
    if lang == "ar" and med.name_ar:
        return med.name_ar
    return med.name_en or med.name_ar


def display_ingredient(med: MedicineRecord, lang: str = "en") -> str:
    if lang == "ar" and med.active_ingredient_ar:
        return med.active_ingredient_ar
    return med.active_ingredient_en or med.active_ingredient_ar


def categorize(med: MedicineRecord) -> str:
    """Guess a shelf category from the English name and ingredient."""
    haystack = f"{med.name_en} {med.active_ingredient_en}".lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in haystack for k in keywords):
            return category
    return DEFAULT_CATEGORY


def matches_query(med: MedicineRecord, query: str) -> bool:
    if not query:
        return True
    q = query.lower()
    fields = (med.name_en, med.name_ar, med.active_ingredient_en, med.active_ingredient_ar)
    return any(q in (f or "").lower() for f in fields)


def filter_medicines(query: str, catalog: Sequence[MedicineRecord],
                     category: str = ALL_CATEGORIES) -> List[MedicineRecord]:
    """
    Free-text + category filter over the catalog.
    Both languages are always searched; catalog order is kept.
    """
    query = query or ""
    category = category or ALL_CATEGORIES
    return [
        m for m in catalog
        if matches_query(m, query) and (category == ALL_CATEGORIES or categorize(m) == category)
    ]
