# backend/pharmatwin/services/rules.py
"""
Keyword tables for the storefront's rule-based checks.

Each safety rule is matched against one field of a medicine:
  - "ingredient": lowercased English active ingredient
  - "dosage": dosage string as stored (case-sensitive)
  - "contraindications": lowercased contraindications text
and only applies when the profile has the given condition or allergy.
"""

# Evaluated in order. "blocks" rules flip isSafe to False; "bucket" says which
# detail list the warning is also recorded under.
SAFETY_RULES = [
    {
        "name": "penicillin_allergy",
        "requires": ("allergy", "Penicillin"),
        "field": "ingredient",
        "keywords": ["penicillin", "amoxicillin"],
        "blocks": True,
        "bucket": "allergy",
        "messages": {
            "en": "Allergy alert: contains a Penicillin-class antibiotic and you are allergic to Penicillin.",
            "ar": "تنبيه حساسية: يحتوي على مضاد حيوي من فئة البنسلين ولديك حساسية من البنسلين.",
        },
    },
    {
        "name": "hypertension_ingredient",
        "requires": ("condition", "Hypertension"),
        "field": "ingredient",
        "keywords": ["ibuprofen", "pseudoephedrine"],
        "blocks": True,
        "bucket": "contraindication",
        "messages": {
            "en": "Hypertension warning: this ingredient may raise your blood pressure.",
            "ar": "تحذير ارتفاع الضغط: هذه المادة قد ترفع ضغط الدم لديك.",
        },
    },
    {
        "name": "diabetes_syrup",
        "requires": ("condition", "Diabetes"),
        "field": "dosage",
        "keywords": ["Syrup"],
        "blocks": False,
        "bucket": None,
        "messages": {
            "en": "Diabetes notice: syrups may contain sugar. Check the label or ask for a sugar-free option.",
            "ar": "تنبيه السكري: الأشربة قد تحتوي على سكر. راجع النشرة أو اطلب بديلاً خالياً من السكر.",
        },
    },
    {
        "name": "asthma_nsaid",
        "requires": ("condition", "Asthma"),
        "field": "ingredient",
        "keywords": ["aspirin", "ibuprofen", "diclofenac"],
        "blocks": True,
        "bucket": "contraindication",
        "messages": {
            "en": "Asthma warning: NSAIDs can trigger bronchospasm in asthmatic patients.",
            "ar": "تحذير الربو: مضادات الالتهاب غير الستيرويدية قد تسبب تشنج القصبات لمرضى الربو.",
        },
    },
    {
        "name": "pressure_contraindication",
        "requires": ("condition", "Hypertension"),
        "field": "contraindications",
        "keywords": ["pressure", "ضغط"],
        "blocks": True,
        "bucket": "contraindication",
        "messages": {
            "en": "Contraindication: the leaflet warns against use with blood pressure conditions.",
            "ar": "مانع استعمال: النشرة تحذر من الاستخدام مع أمراض ضغط الدم.",
        },
    },
    {
        "name": "high_blood_pressure_contraindication",
        "requires": ("condition", "Hypertension"),
        "field": "contraindications",
        "keywords": ["high blood pressure", "ارتفاع ضغط الدم"],
        "blocks": True,
        "bucket": "contraindication",
        "messages": {
            "en": "Contraindicated in high blood pressure.",
            "ar": "يُمنع استعماله في حالات ارتفاع ضغط الدم.",
        },
    },
]

# First match wins; matched against lowercased English name + ingredient.
CATEGORY_KEYWORDS = [
    ("Analgesics", ["panadol", "paracetamol", "aspirin", "profen"]),
    ("Antibiotics", ["antibiotic", "illin", "cin"]),
    ("Vitamins", ["vitamin", "zinc"]),
    ("Cough & Cold", ["syrup", "cough"]),
]
DEFAULT_CATEGORY = "General"
ALL_CATEGORIES = "All"

BLEEDING_RISK_PAIR = ("aspirin", "ibuprofen")

INTERACTION_MESSAGES = {
    "duplicate": {
        "en": "Duplicate active ingredient '{ingredient}' in: {names}",
        "ar": "تكرار المادة الفعالة '{ingredient}' في: {names}",
    },
    "bleeding": {
        "en": "Aspirin + Ibuprofen: taking both increases the risk of stomach bleeding.",
        "ar": "الأسبرين + الإيبوبروفين: تناولهما معاً يزيد خطر نزيف المعدة.",
    },
}
