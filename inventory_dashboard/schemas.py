from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class InventoryRecord(BaseModel):
    """
    Defines the data contract for a single, normalized sheet row.
    Known columns are typed fields; every other column is kept in `extra`
    as an opaque string.
    """

    model_config = ConfigDict(populate_by_name=True)

    item: str = Field(default="", alias="ITEM")
    kg: float = Field(default=0, ge=0, alias="KG")
    unit_price: float = Field(default=0, ge=0, alias="UNIT")
    srp: float = Field(default=0, ge=0, alias="SRP")
    extra: dict[str, str] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Flat wire form: pass-through columns first, computed columns win."""
        payload: dict[str, Any] = dict(self.extra)
        payload.update(self.model_dump(by_alias=True, exclude={"extra"}))
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "InventoryRecord":
        """Rebuilds a record from the flat wire form served by /api/inventory."""
        known = {
            field.alias: payload[field.alias]
            for field in cls.model_fields.values()
            if field.alias and field.alias in payload
        }
        extra = {
            key: "" if value is None else str(value)
            for key, value in payload.items()
            if key not in known
        }
        return cls(**known, extra=extra)


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class CategoryFilter(str, Enum):
    ALL = "all"
    BRISKET = "brisket"
    ANGUS = "angus"
    BELLY = "belly"


class ViewState(BaseModel):
    """Ephemeral UI state; defaults match a fresh page load."""

    search_term: str = ""
    sort_order: SortOrder = SortOrder.DESCENDING
    active_filter: CategoryFilter = CategoryFilter.ALL


class CategoryGroup(BaseModel):
    category: str
    items: list[InventoryRecord] = Field(default_factory=list)
    price_per_kg: float = 0


class InventoryView(BaseModel):
    groups: list[CategoryGroup]
    others: list[InventoryRecord]
    total_shown: int
    total_records: int
