"""Typed views of JTL API records and the stock aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional


DEFAULT_WAREHOUSE_ID = "0"


def _as_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Item:
    """A JTL item as returned by GET /items.

    Only id and sku are used by the connector; the full upstream record is
    kept unmodified in data.
    """

    id: Optional[int]
    sku: Optional[str]
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Item":
        sku = payload.get("sku")
        return cls(
            id=_as_int(payload.get("id")),
            sku=str(sku) if sku is not None else None,
            data=dict(payload),
        )


@dataclass(frozen=True)
class StockRow:
    """One per-warehouse row from GET /stocks.

    Missing or non-numeric quantities count as 0. A row that is not an
    object counts as an empty row.
    """

    warehouse_id: str = DEFAULT_WAREHOUSE_ID
    quantity_total: float = 0.0
    quantity_locked_for_availability: float = 0.0
    quantity_in_picking_lists: float = 0.0

    @classmethod
    def from_payload(cls, payload: Any) -> "StockRow":
        if not isinstance(payload, Mapping):
            payload = {}
        warehouse_id = payload.get("WarehouseId")
        return cls(
            warehouse_id=DEFAULT_WAREHOUSE_ID if warehouse_id is None else str(warehouse_id),
            quantity_total=_as_float(payload.get("QuantityTotal")),
            quantity_locked_for_availability=_as_float(payload.get("QuantityLockedForAvailability")),
            quantity_in_picking_lists=_as_float(payload.get("QuantityInPickingLists")),
        )

    @property
    def free(self) -> float:
        return max(
            0.0,
            self.quantity_total
            - self.quantity_locked_for_availability
            - self.quantity_in_picking_lists,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "WarehouseId": self.warehouse_id,
            "QuantityTotal": self.quantity_total,
            "QuantityLockedForAvailability": self.quantity_locked_for_availability,
            "QuantityInPickingLists": self.quantity_in_picking_lists,
        }


@dataclass(frozen=True)
class StockAggregate:
    total: float
    free: float
    by_warehouse: Dict[str, float]
    raw: List[StockRow]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "free": self.free,
            "by_warehouse": dict(self.by_warehouse),
            "raw": [row.to_dict() for row in self.raw],
        }


def aggregate_stock(rows: Iterable[Any]) -> StockAggregate:
    """Sum total and free stock over all rows, and free stock per warehouse.

    Plain float accumulation without rounding: good enough for display, not
    for accounting.
    """
    parsed = [StockRow.from_payload(row) for row in rows]

    sum_total = 0.0
    sum_free = 0.0
    by_warehouse: Dict[str, float] = {}
    for row in parsed:
        free = row.free
        sum_total += row.quantity_total
        sum_free += free
        by_warehouse[row.warehouse_id] = by_warehouse.get(row.warehouse_id, 0.0) + free

    return StockAggregate(total=sum_total, free=sum_free, by_warehouse=by_warehouse, raw=parsed)
