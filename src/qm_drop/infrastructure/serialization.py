"""DropState <-> JSON for stores that keep state out of process."""

import json
from datetime import datetime
from typing import Any

from src.qm_drop.domain.models import DropState


def state_to_dict(state: DropState) -> dict[str, Any]:
    return {
        "product_id": state.product_id,
        "current_price": state.current_price,
        "is_sold": state.is_sold,
        "buyer_id": state.buyer_id,
        "sold_price": state.sold_price,
        "sold_at": _iso(state.sold_at),
        "active_viewer_id": state.active_viewer_id,
        "active_view_expires_at": _iso(state.active_view_expires_at),
        "queue": list(state.queue),
        "total_views": state.total_views,
        "total_platform_revenue": state.total_platform_revenue,
        "total_supplier_platform_revenue": state.total_supplier_platform_revenue,
        "total_qomo_revenue": state.total_qomo_revenue,
    }


def state_from_dict(data: dict[str, Any]) -> DropState:
    return DropState(
        product_id=data["product_id"],
        current_price=data["current_price"],
        is_sold=data["is_sold"],
        buyer_id=data.get("buyer_id"),
        sold_price=data.get("sold_price"),
        sold_at=_parse(data.get("sold_at")),
        active_viewer_id=data.get("active_viewer_id"),
        active_view_expires_at=_parse(data.get("active_view_expires_at")),
        queue=tuple(data.get("queue", ())),
        total_views=data["total_views"],
        total_platform_revenue=data["total_platform_revenue"],
        total_supplier_platform_revenue=data["total_supplier_platform_revenue"],
        total_qomo_revenue=data["total_qomo_revenue"],
    )


def state_to_json(state: DropState) -> str:
    return json.dumps(state_to_dict(state))


def state_from_json(raw: str) -> DropState:
    return state_from_dict(json.loads(raw))


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
