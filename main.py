import argparse
import sys

import pandas as pd

from inventory_dashboard import settings
from inventory_dashboard.client import fetch_inventory
from inventory_dashboard.data_handler import save_outputs
from inventory_dashboard.logger import setup_logger
from inventory_dashboard.pipeline import InventoryPipeline
from inventory_dashboard.schemas import (
    CategoryFilter,
    InventoryRecord,
    InventoryView,
    SortOrder,
    ViewState,
)
from inventory_dashboard.sheets import GoogleSheetSource
from inventory_dashboard.utils import format_currency, format_weight
from inventory_dashboard.view import compute_view, empty_message, group_item_srp

logger = setup_logger("inventory_dashboard")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the smoked-beef inventory grid from the stock spreadsheet."
    )
    parser.add_argument("--search", default="", help="Search text (name, weight, price or SRP)")
    parser.add_argument(
        "--sort",
        default=SortOrder.DESCENDING.value,
        choices=[o.value for o in SortOrder],
        help="Sort by weight: desc (largest first) or asc",
    )
    parser.add_argument(
        "--filter",
        default=CategoryFilter.ALL.value,
        choices=[f.value for f in CategoryFilter],
        help="Only show one product type",
    )
    parser.add_argument(
        "--url",
        default="",
        help=f"Read from a running dashboard service instead of the sheet (e.g. {settings.DASHBOARD_URL})",
    )
    parser.add_argument(
        "--export", action="store_true", help="Save CSV/JSON snapshots to OUTPUT_DIR"
    )
    return parser.parse_args(argv)


def load_records(args: argparse.Namespace) -> list[InventoryRecord] | None:
    """Returns None when the fetch failed; the error has already been logged."""
    if args.url:
        result = fetch_inventory(args.url)
        if result.error:
            return None
        if args.export and result.records:
            save_outputs(result.records)
        return result.records

    try:
        source = GoogleSheetSource.from_settings()
        return InventoryPipeline(source, export=args.export).run()
    except Exception as e:
        logger.error(f"❌ Inventory fetch failed: {e}")
        return None


def render_view(view: InventoryView, state: ViewState) -> str:
    """Text rendering of the grid: one table per non-empty group."""
    blocks = []
    for group in view.groups:
        if not group.items:
            continue
        table = pd.DataFrame(
            {
                "Item": [record.item for record in group.items],
                "Weight": [format_weight(record.kg) for record in group.items],
                "SRP": [
                    format_currency(group_item_srp(record, group))
                    for record in group.items
                ],
            }
        )
        blocks.append(
            f"--- {group.category} (Price per KG: {format_currency(group.price_per_kg)}) ---\n"
            + table.to_string(index=False)
        )

    if view.others:
        table = pd.DataFrame(
            {
                "Item": [record.item for record in view.others],
                "Weight": [format_weight(record.kg) for record in view.others],
                "Price per KG": [format_currency(record.unit_price) for record in view.others],
                "SRP": [format_currency(record.srp) for record in view.others],
            }
        )
        blocks.append("--- Other Items ---\n" + table.to_string(index=False))

    if view.total_shown == 0:
        blocks.append(f"No items found. {empty_message(state)}")

    blocks.append(f"Showing {view.total_shown} of {view.total_records} items")
    return "\n\n".join(blocks)


def run_dashboard(argv=None) -> int:
    args = parse_args(argv)
    state = ViewState(
        search_term=args.search,
        sort_order=SortOrder(args.sort),
        active_filter=CategoryFilter(args.filter),
    )

    records = load_records(args)
    if records is None:
        print(settings.FETCH_ERROR_MESSAGE)
        return 1

    print(render_view(compute_view(records, state), state))
    return 0


if __name__ == "__main__":
    sys.exit(run_dashboard())
