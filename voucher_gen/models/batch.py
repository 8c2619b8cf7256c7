"""Batch models for one generation/print cycle."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from voucher_gen.models.card import RechargeCard
from voucher_gen.models.enums import Network


@dataclass(frozen=True)
class CardBatch:
    """Cards produced by one generation action, awaiting review."""

    batch_id: str
    agent_id: str
    network: Network
    cards: tuple[RechargeCard, ...]
    generated_at: datetime
    idempotency_token: str

    @property
    def total_cards(self) -> int:
        return len(self.cards)

    @property
    def total_value(self) -> int:
        return sum(card.denomination for card in self.cards)

    def quantities(self) -> dict[int, int]:
        """Card count per denomination, ascending by face value."""
        return dict(sorted(Counter(card.denomination for card in self.cards).items()))


@dataclass(frozen=True)
class BatchSummary:
    """Totals shown once a batch has been printed."""

    cards_by_denomination: dict[int, int]
    total_cards: int
    total_value: int
    commission: Decimal


@dataclass(frozen=True)
class PrintedBatch:
    """A batch acknowledged by the ledgers and marked as printed."""

    batch_id: str
    agent_id: str
    network: Network
    cards: tuple[RechargeCard, ...]
    commission: Decimal
    idempotency_token: str
    generated_at: datetime
    printed_at: datetime

    @property
    def total_value(self) -> int:
        return sum(card.denomination for card in self.cards)

    def summary(self) -> BatchSummary:
        """Summarize cards per denomination with value and commission."""
        counts = Counter(card.denomination for card in self.cards)
        return BatchSummary(
            cards_by_denomination=dict(sorted(counts.items())),
            total_cards=len(self.cards),
            total_value=self.total_value,
            commission=self.commission,
        )
