from pharmatwin.services.interactions import check_interactions
from tests.factories import make_med


def test_empty_cart_has_no_conflicts():
    report = check_interactions([])
    assert report.conflicts == []
    assert report.has_conflict is False


def test_duplicate_ingredient_names_both_medicines():
    a = make_med("a", "Panadol", "Paracetamol")
    b = make_med("b", "Adol", "Paracetamol")
    report = check_interactions([a, b])
    assert report.has_conflict is True
    assert len(report.conflicts) == 1
    assert "Panadol, Adol" in report.conflicts[0]
    assert "paracetamol" in report.conflicts[0]


def test_duplicate_match_is_on_exact_lowercased_string():
    a = make_med("a", "Panadol", "Paracetamol")
    b = make_med("b", "Adol", "PARACETAMOL")
    c = make_med("c", "Panadol Extra", "Paracetamol + Caffeine")
    report = check_interactions([a, b, c])
    assert len(report.conflicts) == 1
    assert "Panadol Extra" not in report.conflicts[0]


def test_aspirin_and_ibuprofen(aspirin, ibuprofen):
    report = check_interactions([aspirin, ibuprofen])
    assert report.has_conflict is True
    assert len(report.conflicts) == 1
    assert "bleeding" in report.conflicts[0]


def test_aspirin_alone_is_fine(panadol, aspirin):
    report = check_interactions([panadol, aspirin])
    assert report.conflicts == []
    assert report.has_conflict is False


def test_duplicates_and_pair_together(aspirin, ibuprofen):
    other = make_med("9", "Advil", "Ibuprofen")
    report = check_interactions([aspirin, ibuprofen, other])
    assert len(report.conflicts) == 2
    assert "Brufen, Advil" in report.conflicts[0]
    assert "bleeding" in report.conflicts[1]


def test_empty_ingredients_are_not_duplicates():
    report = check_interactions([make_med("a", "A", None), make_med("b", "B", "")])
    assert report.conflicts == []


def test_arabic_messages_use_arabic_names(aspirin, ibuprofen):
    other = make_med("9", "Advil", "Ibuprofen", name_ar="أدفيل")
    report = check_interactions([ibuprofen, other], lang="ar")
    assert "بروفين, أدفيل" in report.conflicts[0]
