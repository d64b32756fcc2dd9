import os
import tempfile

_tmpdir = tempfile.mkdtemp(prefix="pharmatwin-tests-")
os.environ["PHARMATWIN_DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["SUPABASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from pharmatwin.services import cart as cart_service
from tests.factories import make_med


@pytest.fixture
def panadol():
    return make_med("1", "Panadol Extra", "Paracetamol + Caffeine", price=12.5,
                    name_ar="بنادول إكسترا", ingredient_ar="باراسيتامول + كافيين")


@pytest.fixture
def aspirin():
    return make_med("2", "Aspirin Cardio", "Aspirin", price=8.9,
                    name_ar="أسبرين كارديو", ingredient_ar="أسبرين")


@pytest.fixture
def ibuprofen():
    return make_med("4", "Brufen", "Ibuprofen", dosage="400mg Tablet", price=9.75,
                    name_ar="بروفين", ingredient_ar="إيبوبروفين")


@pytest.fixture
def catalog(panadol, aspirin, ibuprofen):
    return [
        panadol,
        aspirin,
        make_med("3", "Amoclan", "Amoxicillin", price=24.0),
        ibuprofen,
        make_med("6", "Tusskan Cough Syrup", "Dextromethorphan", dosage="120ml Syrup"),
        make_med("7", "Vitamin C Plus Zinc", "Ascorbic Acid + Zinc"),
        make_med("10", "Voltaren", "Diclofenac"),
    ]


@pytest.fixture(autouse=True)
def reset_carts():
    cart_service.carts.clear()
    yield
    cart_service.carts.clear()


@pytest.fixture
def client():
    from pharmatwin.main import app
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
