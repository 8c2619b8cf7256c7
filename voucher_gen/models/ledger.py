"""Ledger records returned by inventory and wallet collaborators."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from voucher_gen.models.enums import LedgerEntryType


@dataclass(frozen=True)
class LedgerAck:
    """Acknowledgement of a ledger write."""

    reference: str
    count: int
    duplicate: bool = False  # True when the reference was already applied


@dataclass(frozen=True)
class WalletEntry:
    """A single wallet movement for an agent."""

    entry_id: str
    agent_id: str
    amount: Decimal
    entry_type: LedgerEntryType
    reference: str
    description: str
    created_at: datetime
