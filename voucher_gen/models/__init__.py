"""Domain models for recharge card vending."""

from voucher_gen.models.base import Event, epoch_millis, utc_now
from voucher_gen.models.batch import BatchSummary, CardBatch, PrintedBatch
from voucher_gen.models.card import RechargeCard, advance_status
from voucher_gen.models.enums import (
    CARD_LIFECYCLE,
    CardStatus,
    LedgerEntryType,
    Network,
    next_status,
    parse_network,
)
from voucher_gen.models.ledger import LedgerAck, WalletEntry

__all__ = [
    "BatchSummary",
    "CARD_LIFECYCLE",
    "CardBatch",
    "CardStatus",
    "Event",
    "LedgerAck",
    "LedgerEntryType",
    "Network",
    "PrintedBatch",
    "RechargeCard",
    "WalletEntry",
    "advance_status",
    "epoch_millis",
    "next_status",
    "parse_network",
    "utc_now",
]
