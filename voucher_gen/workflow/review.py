"""Operator review gate between generation and printing."""

import logging
from decimal import Decimal
from enum import Enum

from voucher_gen.commission import calculate_commission
from voucher_gen.exceptions import WorkflowStateError
from voucher_gen.formatting import mask_pin_short
from voucher_gen.models.batch import CardBatch
from voucher_gen.models.card import RechargeCard

logger = logging.getLogger(__name__)


class ReviewDecision(str, Enum):
    DISCARD = "discard"
    PRINT = "print"


class ReviewStage:
    """Hold a generated batch until the operator approves or discards it.

    The stage never changes card records; it only records which way the
    batch goes. A decision is final.
    """

    def __init__(self, batch: CardBatch) -> None:
        self.batch = batch
        self.decision: ReviewDecision | None = None

    @property
    def cards(self) -> tuple[RechargeCard, ...]:
        return self.batch.cards

    @property
    def total_value(self) -> int:
        return self.batch.total_value

    def commission_preview(self) -> Decimal:
        """Commission the batch would earn if printed."""
        return calculate_commission(self.batch.total_value, self.batch.network)

    def preview(self) -> list[dict[str, object]]:
        """Rows for display, with PINs masked."""
        return [
            {
                "serial_number": card.serial_number,
                "pin": mask_pin_short(card.pin),
                "denomination": card.denomination,
                "status": card.status.value,
            }
            for card in self.batch.cards
        ]

    def back(self) -> None:
        """Abandon the batch; nothing was persisted, so this always succeeds."""
        if self.decision is ReviewDecision.PRINT:
            raise WorkflowStateError(f"Batch {self.batch.batch_id} was already confirmed for printing")
        self.decision = ReviewDecision.DISCARD
        logger.info("Discarded batch %s (%d cards)", self.batch.batch_id, self.batch.total_cards)

    def confirm_print(self) -> CardBatch:
        """Approve the batch and return it for the print commit."""
        if self.decision is ReviewDecision.DISCARD:
            raise WorkflowStateError(f"Batch {self.batch.batch_id} was discarded")
        self.decision = ReviewDecision.PRINT
        logger.info("Batch %s confirmed for printing", self.batch.batch_id)
        return self.batch
