"""Tests for the review gate."""

import pytest

from voucher_gen.exceptions import WorkflowStateError
from voucher_gen.models import CardBatch, CardStatus
from voucher_gen.store import InMemoryInventoryLedger
from voucher_gen.workflow import ReviewDecision, ReviewStage


class TestReviewStage:
    """Tests for ReviewStage."""

    def test_exposes_batch(self, batch: CardBatch) -> None:
        review = ReviewStage(batch)

        assert review.cards == batch.cards
        assert review.total_value == 2500
        assert review.commission_preview() == 50
        assert review.decision is None

    def test_preview_masks_pins(self, batch: CardBatch) -> None:
        rows = ReviewStage(batch).preview()

        assert len(rows) == 3
        for row, card in zip(rows, batch.cards):
            assert row["pin"] == card.pin[:4] + "***"
            assert row["serial_number"] == card.serial_number
            assert row["status"] == "generated"

    def test_back_discards_without_persisting(
        self, batch: CardBatch, inventory: InMemoryInventoryLedger
    ) -> None:
        """Generating then discarding leaves the inventory untouched."""
        review = ReviewStage(batch)

        review.back()

        assert review.decision is ReviewDecision.DISCARD
        assert inventory.cards == {}
        assert inventory.stats().total == 0

    def test_back_does_not_touch_cards(self, batch: CardBatch) -> None:
        ReviewStage(batch).back()

        assert all(card.status is CardStatus.GENERATED for card in batch.cards)

    def test_confirm_returns_batch(self, batch: CardBatch) -> None:
        review = ReviewStage(batch)

        assert review.confirm_print() is batch
        assert review.decision is ReviewDecision.PRINT

    def test_confirm_after_back_rejected(self, batch: CardBatch) -> None:
        review = ReviewStage(batch)
        review.back()

        with pytest.raises(WorkflowStateError, match="discarded"):
            review.confirm_print()

    def test_back_after_confirm_rejected(self, batch: CardBatch) -> None:
        review = ReviewStage(batch)
        review.confirm_print()

        with pytest.raises(WorkflowStateError, match="already confirmed"):
            review.back()

    def test_back_twice_is_safe(self, batch: CardBatch) -> None:
        review = ReviewStage(batch)
        review.back()
        review.back()

        assert review.decision is ReviewDecision.DISCARD
