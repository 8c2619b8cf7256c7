"""Collaborator contracts the print workflow writes through."""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from voucher_gen.models.card import RechargeCard
from voucher_gen.models.enums import CardStatus
from voucher_gen.models.ledger import LedgerAck, WalletEntry


class InventoryLedger(Protocol):
    """Durable store of printed cards and their status."""

    def append(self, cards: Sequence[RechargeCard], token: str) -> LedgerAck:
        """Store ``cards``; a token seen before must not append again."""
        ...

    def update_status(
        self,
        card_id: str,
        new_status: CardStatus,
        timestamp: datetime | None = None,
    ) -> LedgerAck:
        """Advance one card, enforcing the forward-only lifecycle."""
        ...


class WalletLedger(Protocol):
    """Agent wallet accepting commission credits."""

    def credit(
        self,
        agent_id: str,
        amount: Decimal,
        reference: str,
        description: str = "",
    ) -> WalletEntry:
        """Credit ``amount``; a reference seen before must not credit again."""
        ...
