import json
import logging
from pathlib import Path

import pandas as pd

from . import settings
from . import utils
from .schemas import InventoryRecord

logger = logging.getLogger(__name__)


def records_to_frame(records: list[InventoryRecord]) -> pd.DataFrame:
    """
    One row per record, sheet columns first and the computed ITEM/KG/UNIT/SRP
    columns last. Missing pass-through cells are blank.
    """
    df = pd.DataFrame([record.to_payload() for record in records])
    computed_columns = [
        info.alias for field, info in InventoryRecord.model_fields.items() if info.alias
    ]
    extra_columns = [col for col in df.columns if col not in computed_columns]
    return df.reindex(columns=extra_columns + computed_columns).fillna("")


def save_outputs(records: list[InventoryRecord]) -> tuple[Path, Path]:
    """Saves a dated CSV and JSON snapshot of the normalized inventory."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{settings.SNAPSHOT_FILENAME_BASE}_{date_suffix}.csv"
    json_path = (
        settings.OUTPUT_DIR / f"{settings.SNAPSHOT_FILENAME_BASE}_{date_suffix}.json"
    )

    records_to_frame(records).to_csv(csv_path, index=False)
    logger.info(f"✅ Inventory snapshot saved to: {csv_path}")

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump({"data": [record.to_payload() for record in records]}, f, indent=2)
    logger.info(f"✅ JSON snapshot saved to: {json_path}")

    return csv_path, json_path
