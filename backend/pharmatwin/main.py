# backend/pharmatwin/main.py
import logging
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharmatwin.db import SessionLocal, read_preferences, write_preferences
from pharmatwin.schemas import (
    MedicineRecord, UserProfile, InteractionReport, CartView, Language,
    Preferences, PreferencesUpdate, SafetyCheckRequest, SafetyCheckResponse,
    InteractionCheckRequest, CartAddRequest, CartQuantityUpdate,
)
from pharmatwin.services import catalog, safety, interactions, search
from pharmatwin.services.cart import get_or_create_cart, find_cart, empty_view, CartLineNotFound
from pharmatwin.services.profile import get_profile

log = logging.getLogger("uvicorn.error")

app = FastAPI(title="PharmaTwin Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_catalog(limit: Optional[int] = Query(None, ge=1)) -> List[MedicineRecord]:
    try:
        return catalog.fetch_medicines(limit)
    except catalog.CatalogError as e:
        raise HTTPException(status_code=502, detail=f"System error: {e}")


# -----------------
# Catalog
# -----------------
@app.get("/categories", response_model=List[str])
def list_categories():
    return search.CATEGORIES


@app.get("/medicines", response_model=List[MedicineRecord])
def list_medicines(q: str = "", category: str = search.ALL_CATEGORIES,
                   meds: List[MedicineRecord] = Depends(get_catalog)):
    return search.filter_medicines(q, meds, category)


@app.get("/medicines/{medicine_id}", response_model=MedicineRecord)
def get_medicine(medicine_id: str, meds: List[MedicineRecord] = Depends(get_catalog)):
    try:
        return safety.find_medicine(medicine_id, meds)
    except safety.MedicineNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


# -----------------
# Safety
# -----------------
@app.get("/profile", response_model=UserProfile)
def read_profile(profile: UserProfile = Depends(get_profile)):
    return profile


@app.post("/safety/check", response_model=SafetyCheckResponse)
def route_safety_check(payload: SafetyCheckRequest, profile: UserProfile = Depends(get_profile)):
    try:
        report = safety.evaluate_safety(payload.medicine, profile, payload.lang)
    except Exception as e:
        log.exception("Safety check failed for medicine %s", payload.medicine.id)
        return SafetyCheckResponse(report=None, error=f"Safety check failed: {e}")
    return SafetyCheckResponse(report=report)


@app.get("/medicines/{medicine_id}/safety", response_model=SafetyCheckResponse)
def route_medicine_safety(medicine_id: str, lang: Language = "en",
                          meds: List[MedicineRecord] = Depends(get_catalog),
                          profile: UserProfile = Depends(get_profile)):
    try:
        report = safety.check_medicine_safety(medicine_id, meds, profile, lang)
    except safety.MedicineNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        log.exception("Safety check failed for medicine %s", medicine_id)
        return SafetyCheckResponse(report=None, error=f"Safety check failed: {e}")
    return SafetyCheckResponse(report=report)


@app.post("/interactions/check", response_model=InteractionReport)
def route_interactions(payload: InteractionCheckRequest):
    return interactions.check_interactions(payload.medicines, payload.lang)


# -----------------
# Cart
# -----------------
@app.get("/cart/{session_id}", response_model=CartView)
def read_cart(session_id: str, lang: Language = "en"):
    cart = find_cart(session_id)
    if cart is None:
        return empty_view(session_id, lang)
    return cart.view(lang)


def _existing_cart(session_id: str):
    cart = find_cart(session_id)
    if cart is None:
        raise HTTPException(status_code=404, detail=f"No cart for session {session_id}")
    return cart


@app.post("/cart/{session_id}/items", response_model=CartView)
def add_to_cart(session_id: str, payload: CartAddRequest, lang: Language = "en"):
    cart = get_or_create_cart(session_id)
    cart.add(payload.medicine)
    return cart.view(lang)


@app.patch("/cart/{session_id}/items/{medicine_id}", response_model=CartView)
def update_cart_line(session_id: str, medicine_id: str, payload: CartQuantityUpdate,
                     lang: Language = "en"):
    cart = _existing_cart(session_id)
    try:
        if payload.quantity is not None:
            cart.set_quantity(medicine_id, payload.quantity)
        elif payload.delta is not None:
            cart.adjust(medicine_id, payload.delta)
        else:
            raise HTTPException(status_code=400, detail="Provide either 'quantity' or 'delta'")
    except CartLineNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return cart.view(lang)


@app.delete("/cart/{session_id}/items/{medicine_id}", response_model=CartView)
def remove_cart_line(session_id: str, medicine_id: str, lang: Language = "en"):
    cart = _existing_cart(session_id)
    try:
        cart.remove(medicine_id)
    except CartLineNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return cart.view(lang)


@app.delete("/cart/{session_id}", response_model=CartView)
def clear_cart(session_id: str, lang: Language = "en"):
    cart = find_cart(session_id)
    if cart is not None:
        cart.clear()
    return empty_view(session_id, lang)


# -----------------
# Preferences
# -----------------
@app.get("/preferences/{client_id}", response_model=Preferences)
def get_preferences(client_id: str, db: Session = Depends(get_db)):
    return read_preferences(db, client_id)


@app.put("/preferences/{client_id}", response_model=Preferences)
def put_preferences(client_id: str, payload: PreferencesUpdate, db: Session = Depends(get_db)):
    values = payload.model_dump(exclude_none=True)
    try:
        prefs = write_preferences(db, client_id, values)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Failed to save preferences for %s: %s", client_id, e)
        raise HTTPException(status_code=500, detail="Could not save preferences")
    return prefs
