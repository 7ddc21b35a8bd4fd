import logging
import math
import re
from typing import Any, Sequence

from . import settings
from .schemas import InventoryRecord

logger = logging.getLogger(__name__)

ITEM_HEADER = "ITEM"
WEIGHT_HEADERS = ("KG", "WEIGHT")  # WEIGHT is the old column name
# Computed columns: whatever the sheet says here is ignored.
COMPUTED_HEADERS = ("UNIT", "SRP")

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_FLOAT = re.compile(r"\d*\.?\d*")


def parse_numeric(value: Any) -> float:
    """
    Cleans and parses a noisy numeric cell.
    Handles values like "PHP 2,290.20" or "2,290.20 kg" by dropping every
    character that is not a digit or a dot. Anything unparsable is 0.
    """
    if value is None or value == "" or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        # Only the leading number counts, so "1.2.3" reads as 1.2
        prefix = _LEADING_FLOAT.match(cleaned).group()
        if not prefix.strip("."):
            return 0.0
        number = float(prefix)
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0

    # Overlong digit strings overflow to inf
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def rewrite_item_name(name: str) -> str:
    """Maps a legacy product name to its current name (exact match only)."""
    return settings.LEGACY_ITEM_NAMES.get(name, name)


def lookup_unit_price(name: str) -> float:
    """Fixed price per kg for a product; unknown products are priced at 0."""
    return float(settings.PRODUCT_PRICING.get(name, 0))


def _normalize_row(headers: list[str], row: Sequence[Any]) -> InventoryRecord:
    item = ""
    kg = 0.0
    extra: dict[str, str] = {}

    # Short rows simply miss their trailing cells
    for header, value in zip(headers, row):
        if header == ITEM_HEADER:
            item = value or ""
        elif header in WEIGHT_HEADERS:
            kg = parse_numeric(value)
        elif header in COMPUTED_HEADERS:
            continue
        else:
            extra[header] = value or ""

    item = rewrite_item_name(str(item))
    unit_price = lookup_unit_price(item)
    srp = kg * unit_price if kg and unit_price else 0.0
    if not math.isfinite(srp):
        srp = 0.0

    return InventoryRecord(
        item=item,
        kg=kg,
        unit_price=unit_price,
        srp=srp,
        extra={key: str(value) for key, value in extra.items()},
    )


def normalize(raw_rows: Sequence[Sequence[Any]]) -> list[InventoryRecord]:
    """
    Turns raw sheet rows (header row first) into priced inventory records.
    No row is ever dropped; bad cells degrade to zero/empty values.
    """
    if not raw_rows or len(raw_rows) < 2:
        return []

    headers = [str(header).strip() for header in raw_rows[0]]
    logger.debug(f"Headers found: {headers}")

    records = [_normalize_row(headers, row) for row in raw_rows[1:]]
    logger.info(f"✅ Normalized {len(records)} inventory rows.")
    return records
