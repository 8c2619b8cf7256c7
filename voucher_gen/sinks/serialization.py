"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from voucher_gen.models.batch import PrintedBatch


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization.

    Uses ``dataclasses.fields()`` + ``getattr`` instead of ``asdict()``
    so frozen card tuples are not deep-copied.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def printed_batch_to_dict(printed: PrintedBatch) -> dict:
    """Batch header, print summary and cards in one document."""
    summary = printed.summary()
    return {
        "batch_id": printed.batch_id,
        "agent_id": printed.agent_id,
        "network": printed.network.value,
        "idempotency_token": printed.idempotency_token,
        "generated_at": printed.generated_at.isoformat(),
        "printed_at": printed.printed_at.isoformat(),
        "summary": {
            "cards_by_denomination": {str(k): v for k, v in summary.cards_by_denomination.items()},
            "total_cards": summary.total_cards,
            "total_value": summary.total_value,
            "commission": str(summary.commission),
        },
        "cards": [dataclass_to_dict(card) for card in printed.cards],
    }
