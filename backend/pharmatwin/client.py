# backend/pharmatwin/client.py
"""HTTP client used by the Streamlit storefront."""
import logging
import uuid

import requests

log = logging.getLogger("storefront")

CLIENT_ID_PARAM = "cid"
DEFAULT_PREFERENCES = {"language": "en", "theme": "light"}


class ApiError(RuntimeError):
    """The backend could not be reached or answered with an error."""


def resolve_client_id(query_params) -> str:
    """
    Return the client id carried in the page URL, minting one if missing.

    The id is written back into ``query_params`` so a browser reload keeps it
    and the saved preferences and cart are found again.
    """
    cid = query_params.get(CLIENT_ID_PARAM)
    if not cid:
        cid = str(uuid.uuid4())
        query_params[CLIENT_ID_PARAM] = cid
    return cid


DARK_THEME_CSS = """
<style>
.stApp, [data-testid="stSidebar"] { background-color: #0e1117; color: #fafafa; }
.stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label { color: #fafafa; }
</style>
"""


def theme_css(theme: str) -> str:
    """Page style override for the saved theme; light uses Streamlit's default."""
    return DARK_THEME_CSS if theme == "dark" else ""


class StorefrontClient:
    def __init__(self, api_base: str, http=requests, timeout: float = 15):
        self.api_base = api_base.rstrip("/")
        self.http = http
        self.timeout = timeout

    def _call(self, method: str, path: str, **kwargs):
        try:
            r = getattr(self.http, method)(f"{self.api_base}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.error("%s %s failed: %s", method.upper(), path, e)
            raise ApiError(str(e)) from e
        if r.status_code >= 400:
            try:
                detail = r.json().get("detail", r.text)
            except ValueError:
                detail = r.text
            raise ApiError(str(detail))
        return r.json()

    def load_preferences(self, client_id: str) -> dict:
        try:
            return self._call("get", f"/preferences/{client_id}")
        except ApiError:
            return dict(DEFAULT_PREFERENCES)

    def save_preferences(self, client_id: str, **values) -> dict:
        return self._call("put", f"/preferences/{client_id}", json=values)

    def profile(self) -> dict:
        return self._call("get", "/profile")

    def categories(self) -> list:
        return self._call("get", "/categories")

    def medicines(self, q: str = "", category: str = "All") -> list:
        return self._call("get", "/medicines", params={"q": q, "category": category})

    def safety_check(self, medicine: dict, lang: str) -> dict:
        return self._call("post", "/safety/check", json={"medicine": medicine, "lang": lang})

    def cart(self, client_id: str, lang: str) -> dict:
        return self._call("get", f"/cart/{client_id}", params={"lang": lang})

    def add_to_cart(self, client_id: str, medicine: dict, lang: str) -> dict:
        return self._call("post", f"/cart/{client_id}/items", json={"medicine": medicine},
                          params={"lang": lang})

    def adjust_line(self, client_id: str, medicine_id: str, delta: int, lang: str) -> dict:
        return self._call("patch", f"/cart/{client_id}/items/{medicine_id}", json={"delta": delta},
                          params={"lang": lang})

    def remove_line(self, client_id: str, medicine_id: str, lang: str) -> dict:
        return self._call("delete", f"/cart/{client_id}/items/{medicine_id}", params={"lang": lang})
