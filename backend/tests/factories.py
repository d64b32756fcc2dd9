from pharmatwin.schemas import MedicineRecord


def make_med(id, name_en, ingredient_en, dosage="Tablet", contraindications="", price=10.0,
             name_ar="", ingredient_ar=""):
    return MedicineRecord(
        id=id, name_en=name_en, name_ar=name_ar,
        active_ingredient_en=ingredient_en, active_ingredient_ar=ingredient_ar,
        dosage=dosage, contraindications=contraindications, price=price,
    )
