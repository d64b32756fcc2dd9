# backend/pharmatwin/services/interactions.py
import logging
from typing import Dict, List, Sequence

from pharmatwin.schemas import MedicineRecord, InteractionReport
from pharmatwin.services.rules import BLEEDING_RISK_PAIR, INTERACTION_MESSAGES
from pharmatwin.services.search import display_name

log = logging.getLogger("interactions")


def _message(key: str, lang: str, **kwargs) -> str:
    templates = INTERACTION_MESSAGES[key]
    return (templates.get(lang) or templates["en"]).format(**kwargs)


def check_interactions(meds: Sequence[MedicineRecord], lang: str = "en") -> InteractionReport:
    """
    Flag duplicate active ingredients and the aspirin + ibuprofen pair.
    Quantities play no part; pass each cart line's medicine once.
    """
    ingredients = [(m.active_ingredient_en or "").lower() for m in meds]

    groups: Dict[str, List[MedicineRecord]] = {}
    for ing, m in zip(ingredients, meds):
        if not ing:
            continue
        groups.setdefault(ing, []).append(m)

    conflicts = []
    for ing, group in groups.items():
        if len(group) > 1:
            names = ", ".join(display_name(m, lang) for m in group)
            conflicts.append(_message("duplicate", lang, ingredient=ing, names=names))

    first, second = BLEEDING_RISK_PAIR
    if any(first in i for i in ingredients) and any(second in i for i in ingredients):
        conflicts.append(_message("bleeding", lang))

    if conflicts:
        log.info("Found %d interaction conflict(s) across %d medicine(s)", len(conflicts), len(meds))
    return InteractionReport(conflicts=conflicts, has_conflict=bool(conflicts))
