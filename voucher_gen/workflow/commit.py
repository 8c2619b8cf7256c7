"""Print commit: persist a reviewed batch, then mark it printed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from voucher_gen.commission import DEFAULT_COMMISSION_RATE, calculate_commission
from voucher_gen.exceptions import InvalidSelectionError, InvalidStatusTransitionError, PrintCommitError
from voucher_gen.models.base import utc_now
from voucher_gen.models.batch import CardBatch, PrintedBatch
from voucher_gen.models.card import advance_status
from voucher_gen.models.enums import CardStatus
from voucher_gen.store.base import InventoryLedger, WalletLedger

logger = logging.getLogger(__name__)


class PrintCommitter:
    """Commit confirmed batches to the inventory and wallet ledgers.

    Ledgers are written before any card is reported as printed: a failed
    write leaves the caller holding the unchanged ``generated`` batch, and
    retrying with the same batch is safe because both ledgers key their
    writes on the batch's idempotency token. A token that already
    committed returns the original result without touching the ledgers.

    Parameters
    ----------
    inventory : InventoryLedger
        Receives one record per printed card.
    wallet : WalletLedger
        Receives one commission credit per batch.
    sinks : Iterable[Any]
        Printer/receipt collaborators with ``write_printed_batch``.
    default_commission_rate : Decimal
        Rate used for networks without a configured rate.
    clock : Callable[[], datetime] | None
        Time source for ``printed_at``.
    """

    def __init__(
        self,
        inventory: InventoryLedger,
        wallet: WalletLedger,
        sinks: Iterable[Any] = (),
        default_commission_rate: Decimal = DEFAULT_COMMISSION_RATE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.inventory = inventory
        self.wallet = wallet
        self.sinks = list(sinks)
        self.default_commission_rate = default_commission_rate
        self.clock = clock or utc_now
        self._committed: dict[str, PrintedBatch] = {}

    def is_committed(self, token: str) -> bool:
        return token in self._committed

    def commit_print(self, batch: CardBatch) -> PrintedBatch:
        """Persist ``batch`` and return it as printed.

        Raises
        ------
        InvalidSelectionError
            The batch holds no cards.
        InvalidStatusTransitionError
            A card is not in ``generated`` status.
        PrintCommitError
            A ledger write failed; the batch may be retried.
        """
        token = batch.idempotency_token
        if token in self._committed:
            logger.info("Batch %s already committed (token=%s)", batch.batch_id, token)
            return self._committed[token]

        if not batch.cards:
            raise InvalidSelectionError(f"Batch {batch.batch_id} has no cards to print")
        for card in batch.cards:
            if card.status is not CardStatus.GENERATED:
                raise InvalidStatusTransitionError(
                    f"Card {card.card_id} is {card.status.value}, expected generated"
                )

        commission = calculate_commission(
            batch.total_value, batch.network, self.default_commission_rate
        )
        printed_cards = tuple(advance_status(card, CardStatus.PRINTED) for card in batch.cards)

        logger.info(
            "Committing batch %s: %d cards, value=%d, commission=%s",
            batch.batch_id,
            len(printed_cards),
            batch.total_value,
            commission,
            extra={"batch_id": batch.batch_id, "idempotency_token": token},
        )
        try:
            self.inventory.append(printed_cards, token)
            self.wallet.credit(
                batch.agent_id,
                commission,
                token,
                f"Commission on {len(printed_cards)} {batch.network.value} cards",
            )
        except Exception as exc:
            logger.error(
                "Print commit failed for batch %s: %s",
                batch.batch_id,
                exc,
                exc_info=True,
                extra={"batch_id": batch.batch_id, "agent_id": batch.agent_id},
            )
            raise PrintCommitError(f"Could not commit batch {batch.batch_id}: {exc}") from exc

        printed = PrintedBatch(
            batch_id=batch.batch_id,
            agent_id=batch.agent_id,
            network=batch.network,
            cards=printed_cards,
            commission=commission,
            idempotency_token=token,
            generated_at=batch.generated_at,
            printed_at=self.clock(),
        )
        self._committed[token] = printed
        self._emit(printed)
        return printed

    def _emit(self, printed: PrintedBatch) -> None:
        """Hand the printed batch to each sink; failures do not undo the commit."""
        for sink in self.sinks:
            try:
                sink.write_printed_batch(printed)
            except Exception:
                logger.exception(
                    "Sink %s failed for batch %s", type(sink).__name__, printed.batch_id
                )
