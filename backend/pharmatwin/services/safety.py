# backend/pharmatwin/services/safety.py
import logging
from datetime import datetime, timezone
from typing import Sequence

from pharmatwin.schemas import MedicineRecord, UserProfile, SafetyReport, SafetyDetails
from pharmatwin.services.profile import DEFAULT_PROFILE
from pharmatwin.services.rules import SAFETY_RULES

log = logging.getLogger("safety")


class MedicineNotFound(LookupError):
    pass


def _field_text(med: MedicineRecord, field: str) -> str:
    if field == "ingredient":
        return (med.active_ingredient_en or "").lower()
    if field == "contraindications":
        return (med.contraindications or "").lower()
    if field == "dosage":
        return med.dosage or ""
    raise ValueError(f"Unknown rule field: {field}")


def _profile_applies(profile: UserProfile, requires) -> bool:
    kind, name = requires
    if kind == "allergy":
        return profile.has_allergy(name)
    return profile.has_condition(name)


def evaluate_safety(med: MedicineRecord, profile: UserProfile = DEFAULT_PROFILE,
                    lang: str = "en") -> SafetyReport:
    """
    Run every safety rule against one medicine for the given profile.

    Rules never short-circuit each other, so one medicine can collect several
    warnings. A rule without "blocks" (the diabetes/syrup notice) adds a
    warning but leaves the medicine purchasable.
    """
    is_safe = True
    warnings = []
    details = SafetyDetails()

    for rule in SAFETY_RULES:
        if not _profile_applies(profile, rule["requires"]):
            continue
        text = _field_text(med, rule["field"])
        if not any(k in text for k in rule["keywords"]):
            continue

        message = rule["messages"].get(lang) or rule["messages"]["en"]
        warnings.append(message)
        if rule["bucket"] == "allergy":
            details.allergy_conflicts.append(message)
        elif rule["bucket"] == "contraindication":
            details.contraindication_conflicts.append(message)
        if rule["blocks"]:
            is_safe = False
        log.debug("Rule %s matched medicine %s", rule["name"], med.id)

    return SafetyReport(
        is_safe=is_safe,
        warnings=warnings,
        block_transaction=not is_safe,
        details=details,
        timestamp=datetime.now(timezone.utc),
    )


def find_medicine(medicine_id: str, catalog: Sequence[MedicineRecord]) -> MedicineRecord:
    for m in catalog:
        if m.id == medicine_id:
            return m
    raise MedicineNotFound(f"Medicine not found: {medicine_id}")


def check_medicine_safety(medicine_id: str, catalog: Sequence[MedicineRecord],
                          profile: UserProfile = DEFAULT_PROFILE, lang: str = "en") -> SafetyReport:
    """Look a medicine up by id and evaluate it. Raises MedicineNotFound."""
    med = find_medicine(medicine_id, catalog)
    return evaluate_safety(med, profile, lang)
