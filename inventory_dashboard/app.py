from __future__ import annotations
import logging
from html import escape
from typing import Dict

from fastapi import Depends, FastAPI, Query
from fastapi.responses import HTMLResponse, JSONResponse

from . import settings
from .logger import setup_logger
from .pipeline import InventoryPipeline
from .schemas import (
    CategoryFilter,
    CategoryGroup,
    InventoryRecord,
    SortOrder,
    ViewState,
)
from .sheets import GoogleSheetSource, RowSource
from .utils import format_currency, format_weight
from .view import compute_view, empty_message, group_item_srp

setup_logger("inventory_dashboard")
logger = logging.getLogger(__name__)

app = FastAPI(title="Inventory Dashboard", version="0.1.0")


class SettingsSheetSource:
    # Credentials are validated at fetch time so config errors take the fetch error path
    def fetch_rows(self) -> list[list[str]]:
        return GoogleSheetSource.from_settings().fetch_rows()


def get_row_source() -> RowSource:
    return SettingsSheetSource()


def load_inventory(source: RowSource) -> list[InventoryRecord]:
    return InventoryPipeline(source).run()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/inventory")
def api_inventory(source: RowSource = Depends(get_row_source)):
    try:
        records = load_inventory(source)
        response = JSONResponse(
            {"data": [record.to_payload() for record in records]}
        )
    except Exception:
        logger.exception("API route error")
        return JSONResponse(
            {"error": "Failed to fetch inventory data"}, status_code=500
        )
    return response


# --- Minimal HTML UI ---
def _layout(body: str) -> str:
    return f"""
<!doctype html>
<html>
  <head>
    <meta charset='utf-8'/>
    <meta name='viewport' content='width=device-width, initial-scale=1'/>
    <title>Inventory Dashboard</title>
    <style>
      body{{font-family:system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif;max-width:1100px;margin:24px auto;padding:0 16px;}}
      h1,h2{{margin:12px 0}}
      form{{display:flex;gap:8px;flex-wrap:wrap;margin:16px 0}}
      input,select{{padding:8px}}
      .grid{{display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));gap:16px}}
      .card{{border:1px solid #eee;border-radius:12px;padding:16px}}
      .row{{display:flex;justify-content:space-between;font-size:90%}}
      .head{{display:flex;justify-content:space-between;align-items:center}}
      .muted{{color:#666;font-size:90%}}
      .err{{color:#b10000;background:#fef2f2;border:1px solid #fee2e2;padding:12px;border-radius:8px}}
    </style>
  </head>
  <body>
    <h1>Inventory</h1>
    {body}
  </body>
 </html>
"""


def _option(value: str, label: str, selected: str) -> str:
    mark = " selected" if value == selected else ""
    return f"<option value='{value}'{mark}>{label}</option>"


def _controls(state: ViewState) -> str:
    sort_options = _option("desc", "Largest first", state.sort_order.value) + _option(
        "asc", "Smallest first", state.sort_order.value
    )
    filter_options = "".join(
        _option(f.value, f.value.capitalize(), state.active_filter.value)
        for f in CategoryFilter
    )
    return f"""
<form method='get' action='/'>
  <input type='search' name='search' placeholder='Search inventory' value='{escape(state.search_term, quote=True)}'/>
  <select name='sort'>{sort_options}</select>
  <select name='filter'>{filter_options}</select>
  <button type='submit'>Apply</button>
</form>
"""


def _card(record: InventoryRecord, group: CategoryGroup | None = None) -> str:
    rows = [("Weight", format_weight(record.kg))]
    if group is None:
        rows.append(("Price per KG", format_currency(record.unit_price)))
        rows.append(("SRP", format_currency(record.srp)))
    else:
        rows.append(("SRP", format_currency(group_item_srp(record, group))))
    body = "".join(
        f"<div class='row'><span>{label}</span><span>{escape(value)}</span></div>"
        for label, value in rows
    )
    return f"<div class='card'><h3>{escape(record.item)}</h3>{body}</div>"


def render_dashboard(
    records: list[InventoryRecord], state: ViewState, error: str | None = None
) -> str:
    view = compute_view(records, state)
    parts = []
    if error:
        parts.append(f"<div class='err'><p>{escape(error)}</p></div>")
    parts.append(_controls(state))

    for group in view.groups:
        if not group.items:
            continue
        cards = "".join(_card(record, group) for record in group.items)
        parts.append(
            f"<section><div class='head'><h2>{escape(group.category)}</h2>"
            f"<span class='muted'>Price per KG: {format_currency(group.price_per_kg)}</span></div>"
            f"<div class='grid'>{cards}</div></section>"
        )

    if view.others:
        cards = "".join(_card(record) for record in view.others)
        parts.append(f"<section><h2>Other Items</h2><div class='grid'>{cards}</div></section>")

    if view.total_shown == 0:
        parts.append(
            f"<div><h3>No items found</h3><p class='muted'>{escape(empty_message(state))}</p></div>"
        )

    parts.append(
        f"<p class='muted'>Showing {view.total_shown} of {view.total_records} items</p>"
    )
    return _layout("".join(parts))


@app.get("/", response_class=HTMLResponse)
def ui_dashboard(
    search: str = "",
    sort: SortOrder = Query(SortOrder.DESCENDING),
    filter: CategoryFilter = Query(CategoryFilter.ALL),
    source: RowSource = Depends(get_row_source),
):
    state = ViewState(search_term=search, sort_order=sort, active_filter=filter)
    try:
        records = load_inventory(source)
        error = None
    except Exception:
        logger.exception("Error fetching inventory")
        records, error = [], settings.FETCH_ERROR_MESSAGE
    return HTMLResponse(render_dashboard(records, state, error))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "inventory_dashboard.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
