"""Print session controller: select, generate, review, commit."""

from __future__ import annotations

import logging
from enum import Enum

from voucher_gen.exceptions import InvalidSelectionError, PrintCommitError, WorkflowStateError
from voucher_gen.generators.batch import CardBatchGenerator
from voucher_gen.models.batch import CardBatch, PrintedBatch
from voucher_gen.models.enums import Network
from voucher_gen.workflow.commit import PrintCommitter
from voucher_gen.workflow.review import ReviewStage
from voucher_gen.workflow.selection import DenominationSelection

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    SELECT = "select"
    REVIEW = "review"
    PRINTING = "printing"
    PRINTED = "printed"


class PrintSession:
    """One operator's card printing session.

    Owns the current selection and at most one in-flight batch. Each
    operation is valid only in certain stages and raises
    :class:`WorkflowStateError` otherwise.

    Parameters
    ----------
    network : Network | str
        Network the cards are issued on.
    generator : CardBatchGenerator
        Produces batches from the selection.
    committer : PrintCommitter
        Persists confirmed batches.
    agent_id : str
        Operator identifier, carried into idempotency tokens.
    """

    def __init__(
        self,
        network: Network | str,
        generator: CardBatchGenerator,
        committer: PrintCommitter,
        agent_id: str = "agent-local",
    ) -> None:
        self.generator = generator
        self.committer = committer
        self.agent_id = agent_id
        self.stage = Stage.SELECT
        self.selection = DenominationSelection(network=network)
        self.review: ReviewStage | None = None
        self.printed: PrintedBatch | None = None

    @property
    def batch(self) -> CardBatch | None:
        return self.review.batch if self.review else None

    def _require(self, *stages: Stage) -> None:
        if self.stage not in stages:
            allowed = ", ".join(s.value for s in stages)
            raise WorkflowStateError(f"Session is in {self.stage.value}; expected {allowed}")

    # Selection
    def set_network(self, network: Network | str) -> DenominationSelection:
        self._require(Stage.SELECT)
        self.selection = self.selection.with_network(network)
        return self.selection

    def update_quantity(self, denomination: int, delta: int) -> DenominationSelection:
        self._require(Stage.SELECT)
        self.selection = self.selection.update_quantity(denomination, delta)
        return self.selection

    def increment(self, denomination: int) -> DenominationSelection:
        return self.update_quantity(denomination, 1)

    def decrement(self, denomination: int) -> DenominationSelection:
        return self.update_quantity(denomination, -1)

    # Transitions
    def generate(self) -> CardBatch:
        """Generate cards for the current selection and move to review."""
        self._require(Stage.SELECT)
        if self.selection.total_cards() == 0:
            raise InvalidSelectionError("Select at least one card before generating")

        batch = self.generator.generate_batch(self.selection, agent_id=self.agent_id)
        self.review = ReviewStage(batch)
        self.stage = Stage.REVIEW
        return batch

    def back(self) -> None:
        """Discard the batch under review and return to selection."""
        self._require(Stage.REVIEW)
        self.review.back()
        self.review = None
        self.stage = Stage.SELECT

    def confirm_print(self) -> PrintedBatch:
        """Approve the reviewed batch and commit it.

        On any commit failure the session returns to review with the same
        batch so the operator can retry or discard it.
        """
        self._require(Stage.REVIEW)
        batch = self.review.confirm_print()
        self.stage = Stage.PRINTING
        try:
            printed = self.committer.commit_print(batch)
        except PrintCommitError:
            logger.warning("Batch %s not printed; back to review for retry", batch.batch_id)
            self.review = ReviewStage(batch)
            self.stage = Stage.REVIEW
            raise
        except Exception:
            logger.exception("Unexpected error committing batch %s; back to review", batch.batch_id)
            self.review = ReviewStage(batch)
            self.stage = Stage.REVIEW
            raise

        self.printed = printed
        self.stage = Stage.PRINTED
        return printed

    def reset(self) -> None:
        """Start over with an empty selection on the same network."""
        self._require(Stage.SELECT, Stage.REVIEW, Stage.PRINTED)
        if self.stage is Stage.REVIEW:
            self.review.back()
        self.selection = DenominationSelection(network=self.selection.network)
        self.review = None
        self.printed = None
        self.stage = Stage.SELECT
