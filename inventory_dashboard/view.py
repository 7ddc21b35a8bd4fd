from typing import Iterable

from . import settings
from .schemas import (
    CategoryFilter,
    CategoryGroup,
    InventoryRecord,
    InventoryView,
    SortOrder,
    ViewState,
)
from .utils import number_to_text

# Substrings a lowercased item name must contain for each product filter.
FILTER_KEYWORDS = {
    CategoryFilter.BRISKET: ("brisket",),
    CategoryFilter.ANGUS: ("angus", "bri-steak"),
    CategoryFilter.BELLY: ("belly",),
}


def matches_search(record: InventoryRecord, search_term: str) -> bool:
    """Case-insensitive match on the product name or any of the numeric columns."""
    if not search_term.strip():
        return True

    needle = search_term.lower()
    haystacks = [
        record.item.lower(),
        number_to_text(record.kg),
        number_to_text(record.unit_price),
        number_to_text(record.srp),
    ]
    return any(needle in text for text in haystacks)


def matches_filter(record: InventoryRecord, active_filter: CategoryFilter) -> bool:
    if active_filter == CategoryFilter.ALL:
        return True
    item_name = record.item.lower()
    return any(keyword in item_name for keyword in FILTER_KEYWORDS[active_filter])


def sort_by_weight(
    records: Iterable[InventoryRecord], sort_order: SortOrder
) -> list[InventoryRecord]:
    # sorted() is stable in both directions, ties keep their input order
    return sorted(
        records,
        key=lambda record: record.kg or 0,
        reverse=sort_order == SortOrder.DESCENDING,
    )


def compute_view(records: list[InventoryRecord], state: ViewState) -> InventoryView:
    """
    Groups the visible records into the fixed product categories plus an
    'others' bucket, each sorted by weight. Pure: the inputs are never touched.
    """
    visible = [
        record
        for record in records
        if matches_search(record, state.search_term)
        and matches_filter(record, state.active_filter)
    ]

    groups = [
        CategoryGroup(
            category=category,
            items=sort_by_weight(
                (record for record in visible if record.item == category),
                state.sort_order,
            ),
            price_per_kg=settings.CATEGORY_DISPLAY_PRICES.get(category, 0),
        )
        for category in settings.CATEGORY_ORDER
    ]
    others = sort_by_weight(
        (record for record in visible if record.item not in settings.CATEGORY_ORDER),
        state.sort_order,
    )

    return InventoryView(
        groups=groups,
        others=others,
        total_shown=sum(len(group.items) for group in groups) + len(others),
        total_records=len(records),
    )


def group_item_srp(record: InventoryRecord, group: CategoryGroup) -> float:
    """SRP shown on a category card: weight times the category's display price."""
    if record.kg and group.price_per_kg:
        return record.kg * group.price_per_kg
    return 0.0


def empty_message(state: ViewState) -> str:
    if state.search_term or state.active_filter != CategoryFilter.ALL:
        return "Try adjusting your search or filter criteria"
    return "Your inventory appears to be empty."
