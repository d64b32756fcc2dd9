# backend/pharmatwin/services/catalog.py
import json
import logging
import os
from typing import List, Optional

import requests
from pydantic import ValidationError

from pharmatwin import config
from pharmatwin.schemas import MedicineRecord

log = logging.getLogger("catalog")

HERE = os.path.dirname(__file__)
DEMO_CATALOG_PATH = os.path.join(HERE, "..", "data", "medicines.json")


class CatalogError(RuntimeError):
    """The medicine table could not be read."""


def _rows_to_records(rows) -> List[MedicineRecord]:
    if not isinstance(rows, list):
        raise CatalogError(f"Unexpected catalog payload: {type(rows).__name__}")
    try:
        return [MedicineRecord(**row) for row in rows]
    except (TypeError, ValidationError) as e:
        raise CatalogError(f"Malformed catalog row: {e}") from e


def load_demo_catalog(limit: Optional[int] = None) -> List[MedicineRecord]:
    try:
        with open(DEMO_CATALOG_PATH, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogError(f"Could not read demo catalog: {e}") from e
    records = _rows_to_records(rows)
    return records[:limit] if limit else records


def fetch_medicines(limit: Optional[int] = None) -> List[MedicineRecord]:
    """
    Read the medicines table from the remote store.

    One unauthenticated (anon key) GET, no retry. Falls back to the bundled
    demo catalog when SUPABASE_URL is not set. Raises CatalogError on any
    transport, HTTP or decoding failure.
    """
    limit = limit or config.CATALOG_LIMIT
    if not config.SUPABASE_URL:
        return load_demo_catalog(limit)

    url = f"{config.SUPABASE_URL}/rest/v1/{config.CATALOG_TABLE}"
    params = {"select": "*"}
    if limit:
        params["limit"] = limit
    headers = {
        "apikey": config.SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {config.SUPABASE_ANON_KEY}",
    }
    try:
        r = requests.get(url, params=params, headers=headers, timeout=config.CATALOG_TIMEOUT)
        r.raise_for_status()
        rows = r.json()
    except requests.RequestException as e:
        log.error("Catalog fetch failed: %s", e)
        raise CatalogError(str(e)) from e
    except ValueError as e:
        log.error("Catalog response was not JSON: %s", e)
        raise CatalogError(f"Invalid JSON from catalog: {e}") from e

    records = _rows_to_records(rows)
    log.info("Fetched %d medicines from %s", len(records), url)
    return records
