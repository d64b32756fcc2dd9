# backend/pharmatwin/services/profile.py
from pharmatwin.schemas import UserProfile, BioData

# Mock "digital twin" standing in for a real patient record.
DEFAULT_PROFILE = UserProfile(
    id="user-123",
    full_name="John Doe",
    conditions=["Diabetes", "Hypertension", "Asthma"],
    allergies=["Penicillin", "Sulfa"],
    bio_data=BioData(heart_rate_avg=72, oxygen_saturation=98, body_temperature_c=36.6),
)


def get_profile() -> UserProfile:
    return DEFAULT_PROFILE
