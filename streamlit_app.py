# streamlit_app.py
import time

import pandas as pd
import streamlit as st

from pharmatwin.client import StorefrontClient, ApiError, resolve_client_id, theme_css

API_BASE = st.secrets.get("api_base", "http://localhost:8000")
api = StorefrontClient(API_BASE)
SAFETY_CHECK_DELAY = 1.5  # seconds; only drives the spinner

LABELS = {
    "en": {
        "title": "PharmaTwin — Smart Pharmacy",
        "search": "Search medicines",
        "category": "Category",
        "check": "AI safety check",
        "add": "Add to cart",
        "cart": "Your cart",
        "empty_cart": "Your cart is empty.",
        "total": "Total",
        "remove": "Remove",
        "safe": "✅ Safe for your profile.",
        "unsafe": "⛔ Not recommended for your profile.",
        "checking": "Scanning your digital twin profile...",
        "system_error": "System error",
        "no_results": "No medicines match your search.",
        "interactions_ok": "✅ No interactions detected.",
        "profile": "Digital twin",
    },
    "ar": {
        "title": "فارما توين — الصيدلية الذكية",
        "search": "ابحث عن دواء",
        "category": "الفئة",
        "check": "فحص الأمان الذكي",
        "add": "أضف إلى السلة",
        "cart": "سلة المشتريات",
        "empty_cart": "السلة فارغة.",
        "total": "المجموع",
        "remove": "إزالة",
        "safe": "✅ آمن لملفك الصحي.",
        "unsafe": "⛔ غير موصى به لملفك الصحي.",
        "checking": "جارٍ فحص ملفك الصحي...",
        "system_error": "خطأ في النظام",
        "no_results": "لا توجد أدوية مطابقة.",
        "interactions_ok": "✅ لا توجد تداخلات دوائية.",
        "profile": "التوأم الرقمي",
    },
}

st.set_page_config(page_title="PharmaTwin", layout="wide")

# The id lives in the URL so preferences and the cart survive a reload.
client_id = resolve_client_id(st.query_params)

if "prefs" not in st.session_state:
    st.session_state["prefs"] = api.load_preferences(client_id)
prefs = st.session_state["prefs"]

# Sidebar: language, theme, profile
with st.sidebar:
    lang = st.radio("Language / اللغة", ["en", "ar"], index=0 if prefs["language"] == "en" else 1,
                    format_func=lambda x: "English" if x == "en" else "العربية", horizontal=True)
    theme = st.radio("Theme", ["light", "dark"], index=0 if prefs["theme"] == "light" else 1, horizontal=True)
    if lang != prefs["language"] or theme != prefs["theme"]:
        prefs.update(language=lang, theme=theme)
        try:
            api.save_preferences(client_id, language=lang, theme=theme)
        except ApiError as e:
            st.warning("Could not save preferences: " + str(e))

    L = LABELS[lang]
    st.markdown("---")
    st.subheader(L["profile"])
    try:
        profile = api.profile()
        st.write(", ".join(profile.get("conditions", [])))
        st.caption("Allergies: " + ", ".join(profile.get("allergies", [])))
        bio = profile.get("bio_data") or {}
        c1, c2, c3 = st.columns(3)
        c1.metric("BPM", bio.get("heart_rate_avg"))
        c2.metric("SpO2", f"{bio.get('oxygen_saturation')}%")
        c3.metric("°C", bio.get("body_temperature_c"))
    except ApiError:
        st.caption("Profile unavailable.")

if theme_css(theme):
    st.markdown(theme_css(theme), unsafe_allow_html=True)

L = LABELS[lang]
st.title(L["title"])


def name_of(med):
    if lang == "ar" and med.get("name_ar"):
        return med["name_ar"]
    return med.get("name_en") or med.get("name_ar") or ""


def run_action(action, *args):
    """Run a cart/safety call; on failure show the system error panel."""
    try:
        return action(*args)
    except ApiError as e:
        st.error(f"{L['system_error']}: {e}")
        return None


def render_cart(view):
    st.subheader(L["cart"])
    lines = view.get("lines", [])
    if not lines:
        st.info(L["empty_cart"])
        return
    for line in lines:
        med = line["medicine"]
        c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
        c1.markdown(f"**{name_of(med)}** — {med['price']:.2f} × {line['quantity']}")
        if c2.button("−", key=f"dec-{med['id']}"):
            if run_action(api.adjust_line, client_id, med["id"], -1, lang) is not None:
                st.rerun()
        if c3.button("+", key=f"inc-{med['id']}"):
            if run_action(api.adjust_line, client_id, med["id"], 1, lang) is not None:
                st.rerun()
        if c4.button(L["remove"], key=f"rm-{med['id']}"):
            if run_action(api.remove_line, client_id, med["id"], lang) is not None:
                st.rerun()
    st.markdown(f"**{L['total']}: {view.get('total', 0):.2f}**")
    inter = view.get("interactions") or {}
    if inter.get("hasConflict"):
        for c in inter.get("conflicts", []):
            st.warning(c)
    else:
        st.success(L["interactions_ok"])


col1, col2 = st.columns([2, 1])

with col1:
    try:
        categories = api.categories()
    except ApiError:
        categories = ["All"]
    q = st.text_input(L["search"], value="")
    category = st.selectbox(L["category"], categories)

    meds = run_action(api.medicines, q, category)

    if meds is not None:
        if not meds:
            st.info(L["no_results"])
        else:
            df = pd.DataFrame([{
                "name": name_of(m),
                "ingredient": m.get("active_ingredient_ar") if lang == "ar" and m.get("active_ingredient_ar")
                else m.get("active_ingredient_en"),
                "dosage": m.get("dosage"),
                "price": m.get("price"),
            } for m in meds])
            st.dataframe(df, use_container_width=True, hide_index=True)

        for m in meds:
            with st.expander(name_of(m)):
                st.write(m.get("contraindications") or "—")
                b1, b2 = st.columns(2)
                if b1.button(L["check"], key=f"check-{m['id']}"):
                    with st.spinner(L["checking"]):
                        time.sleep(SAFETY_CHECK_DELAY)
                        resp = run_action(api.safety_check, m, lang)
                    report = (resp or {}).get("report")
                    if report:
                        (st.success if report["isSafe"] else st.error)(
                            L["safe"] if report["isSafe"] else L["unsafe"])
                        for w in report.get("warnings", []):
                            st.warning(w)
                if b2.button(L["add"], key=f"add-{m['id']}"):
                    if run_action(api.add_to_cart, client_id, m, lang) is not None:
                        st.rerun()

with col2:
    view = run_action(api.cart, client_id, lang)
    if view is not None:
        render_cart(view)
