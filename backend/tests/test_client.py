import pytest
import requests

from pharmatwin.client import StorefrontClient, ApiError, resolve_client_id, theme_css, CLIENT_ID_PARAM


@pytest.fixture
def api(client):
    return StorefrontClient("http://testserver", http=client)


def test_client_id_is_minted_once_and_kept_in_url():
    params = {}
    cid = resolve_client_id(params)
    assert params[CLIENT_ID_PARAM] == cid
    assert resolve_client_id(params) == cid


def test_saved_language_is_read_back_on_next_startup(api):
    first_page = {}
    cid = resolve_client_id(first_page)
    assert api.load_preferences(cid) == {"language": "en", "theme": "light"}
    api.save_preferences(cid, language="ar")

    # browser reload: session state is gone, the URL still carries the id
    reloaded_page = {CLIENT_ID_PARAM: first_page[CLIENT_ID_PARAM]}
    assert resolve_client_id(reloaded_page) == cid
    assert api.load_preferences(cid)["language"] == "ar"


def test_cart_survives_reload(api, panadol):
    cid = resolve_client_id({})
    api.add_to_cart(cid, panadol.model_dump(), "en")
    view = api.cart(resolve_client_id({CLIENT_ID_PARAM: cid}), "en")
    assert view["lines"][0]["medicine"]["id"] == "1"


def test_http_errors_become_api_errors(api):
    with pytest.raises(ApiError, match="No cart"):
        api.adjust_line("ghost", "1", 1, "en")


class DownBackend:
    def __getattr__(self, method):
        def call(*args, **kwargs):
            raise requests.ConnectionError("connection refused")
        return call


def test_unreachable_backend_raises_api_error():
    api = StorefrontClient("http://localhost:1", http=DownBackend())
    with pytest.raises(ApiError, match="connection refused"):
        api.safety_check({"id": "1"}, "en")
    with pytest.raises(ApiError):
        api.add_to_cart("cid", {"id": "1"}, "en")


def test_unreachable_backend_falls_back_to_default_preferences():
    api = StorefrontClient("http://localhost:1", http=DownBackend())
    assert api.load_preferences("cid") == {"language": "en", "theme": "light"}


def test_saved_theme_selects_page_style(api):
    cid = resolve_client_id({})
    api.save_preferences(cid, theme="dark")
    theme = api.load_preferences(cid)["theme"]
    assert "background-color" in theme_css(theme)
    assert theme_css("light") == ""
