import logging

from . import data_handler
from .normalizer import normalize
from .schemas import InventoryRecord
from .sheets import RowSource

logger = logging.getLogger(__name__)


class InventoryPipeline:
    """
    Pulls the sheet, normalizes it and optionally saves a snapshot.
    Follows an Extract -> Transform -> Load (ETL) pattern. The record list is
    rebuilt from scratch on every run.
    """

    def __init__(self, source: RowSource, export: bool = False):
        self.source = source
        self.export = export

    def run(self) -> list[InventoryRecord]:
        """
        Orchestrates the pipeline execution.
        Fetch errors are logged and re-raised; they are fatal for this run.
        """
        logger.info("🚀 STEP: INVENTORY FETCH")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        try:
            raw_rows = self.extract()
        except Exception:
            logger.exception("❌ Error fetching inventory data.")
            raise

        if not raw_rows:
            logger.warning("⚠️ No rows extracted. Returning an empty inventory.")
            return []

        # --- 2. TRANSFORM ---
        records = self.transform(raw_rows)

        # --- 3. LOAD ---
        self.load(records)

        logger.info(f"✅ Inventory pipeline finished with {len(records)} records.")
        return records

    def extract(self) -> list[list[str]]:
        return self.source.fetch_rows()

    def transform(self, raw_rows: list[list[str]]) -> list[InventoryRecord]:
        logger.info(f"Normalizing {max(len(raw_rows) - 1, 0)} data rows...")
        return normalize(raw_rows)

    def load(self, records: list[InventoryRecord]) -> None:
        if not self.export:
            return
        if records:
            data_handler.save_outputs(records)
        else:
            logger.warning("No data to save to disk.")
