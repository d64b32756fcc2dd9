# backend/pharmatwin/schemas.py
from datetime import datetime
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Language = Literal["en", "ar"]
Theme = Literal["light", "dark"]


class MedicineRecord(BaseModel):
    """One catalog row in the canonical bilingual shape."""

    model_config = ConfigDict(frozen=True)

    id: str
    name_en: str = ""
    name_ar: str = ""
    active_ingredient_en: str = ""
    active_ingredient_ar: str = ""
    dosage: str = ""
    contraindications: str = ""
    price: float = 0.0
    image_url: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return "" if v is None else str(v)

    @field_validator(
        "name_en", "name_ar", "active_ingredient_en", "active_ingredient_ar",
        "dosage", "contraindications", mode="before",
    )
    @classmethod
    def _missing_text_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("price", mode="before")
    @classmethod
    def _missing_price_is_zero(cls, v):
        return 0.0 if v in (None, "") else v


class BioData(BaseModel):
    heart_rate_avg: Optional[int] = None
    oxygen_saturation: Optional[int] = None
    body_temperature_c: Optional[float] = None


class UserProfile(BaseModel):
    id: str
    full_name: str = ""
    conditions: List[str] = []
    allergies: List[str] = []
    bio_data: BioData = BioData()

    def has_condition(self, name: str) -> bool:
        return name.lower() in {c.lower() for c in self.conditions}

    def has_allergy(self, name: str) -> bool:
        return name.lower() in {a.lower() for a in self.allergies}


class SafetyDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    allergy_conflicts: List[str] = Field(default_factory=list, alias="allergyConflicts")
    contraindication_conflicts: List[str] = Field(
        default_factory=list, alias="contraindicationConflicts"
    )


class SafetyReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_safe: bool = Field(True, alias="isSafe")
    warnings: List[str] = []
    block_transaction: bool = Field(False, alias="blockTransaction")
    details: SafetyDetails = Field(default_factory=SafetyDetails)
    timestamp: datetime


class InteractionReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conflicts: List[str] = []
    has_conflict: bool = Field(False, alias="hasConflict")


class CartLine(BaseModel):
    medicine: MedicineRecord
    quantity: int = Field(1, ge=1)


class CartView(BaseModel):
    session_id: str
    lines: List[CartLine] = []
    total: float = 0.0
    item_count: int = 0
    interactions: InteractionReport = InteractionReport()


class Preferences(BaseModel):
    language: Language = "en"
    theme: Theme = "light"


class PreferencesUpdate(BaseModel):
    language: Optional[Language] = None
    theme: Optional[Theme] = None


# Request / response envelopes

class SafetyCheckRequest(BaseModel):
    medicine: MedicineRecord
    lang: Language = "en"


class SafetyCheckResponse(BaseModel):
    report: Optional[SafetyReport] = None
    error: Optional[str] = None


class InteractionCheckRequest(BaseModel):
    medicines: List[MedicineRecord] = []
    lang: Language = "en"


class CartAddRequest(BaseModel):
    medicine: MedicineRecord


class CartQuantityUpdate(BaseModel):
    delta: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=1)
