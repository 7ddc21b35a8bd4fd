import logging
from typing import NamedTuple, Optional

import requests

from . import settings
from .schemas import InventoryRecord

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/api/inventory"


class FetchResult(NamedTuple):
    records: list[InventoryRecord]
    error: Optional[str] = None


def fetch_inventory(
    base_url: str, session: Optional[requests.Session] = None
) -> FetchResult:
    """
    Fetches the full inventory from a running dashboard service.
    Any failure leaves the list empty and carries one generic error message.
    """
    http = session or requests
    url = base_url.rstrip("/") + INVENTORY_PATH

    try:
        response = http.get(url)
        response.raise_for_status()
        payload = response.json()
        records = [
            InventoryRecord.from_payload(row) for row in payload.get("data") or []
        ]
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error fetching inventory from {url}: {e}")
        return FetchResult([], settings.FETCH_ERROR_MESSAGE)
    except (ValueError, AttributeError, TypeError) as e:
        # Malformed JSON, or rows failing validation (pydantic ValidationError is a ValueError)
        logger.error(f"❌ Unexpected inventory payload from {url}: {e}")
        return FetchResult([], settings.FETCH_ERROR_MESSAGE)

    logger.info(f"✅ Loaded {len(records)} inventory items from {url}")
    return FetchResult(records)
