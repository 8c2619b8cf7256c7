"""In-memory recharge card inventory with lifecycle enforcement."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from voucher_gen.exceptions import CardNotFoundError, LedgerError
from voucher_gen.models.base import utc_now
from voucher_gen.models.card import RechargeCard, advance_status
from voucher_gen.models.enums import CardStatus, Network, parse_network
from voucher_gen.models.ledger import LedgerAck

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryStats:
    """Inventory counts by status."""

    total: int
    printed: int
    sold: int
    used: int
    printed_value: int  # face value of cards still waiting to be sold


@dataclass
class InMemoryInventoryLedger:
    """In-memory store for printed cards with relationship tracking."""

    cards: dict[str, RechargeCard] = field(default_factory=dict)

    # Relationship indexes
    _batch_cards: dict[str, list[str]] = field(default_factory=dict)
    _serial_index: dict[str, str] = field(default_factory=dict)
    _token_acks: dict[str, LedgerAck] = field(default_factory=dict)

    def append(self, cards: Sequence[RechargeCard], token: str) -> LedgerAck:
        """Add printed cards under an idempotency token.

        A token that was already applied is acknowledged again without
        storing anything.
        """
        if token in self._token_acks:
            logger.info("Inventory append for token %s already applied", token)
            previous = self._token_acks[token]
            return LedgerAck(reference=token, count=previous.count, duplicate=True)

        seen_ids: set[str] = set()
        seen_serials: set[str] = set()
        for card in cards:
            if card.card_id in self.cards or card.card_id in seen_ids:
                raise LedgerError(f"Card {card.card_id} is already in the inventory")
            if card.serial_number in self._serial_index or card.serial_number in seen_serials:
                raise LedgerError(f"Serial number {card.serial_number} is already in the inventory")
            seen_ids.add(card.card_id)
            seen_serials.add(card.serial_number)

        for card in cards:
            self.cards[card.card_id] = card
            self._batch_cards.setdefault(card.batch_id, []).append(card.card_id)
            self._serial_index[card.serial_number] = card.card_id

        ack = LedgerAck(reference=token, count=len(cards))
        self._token_acks[token] = ack
        logger.info("Inventory appended %d cards (token=%s)", len(cards), token)
        return ack

    def update_status(
        self,
        card_id: str,
        new_status: CardStatus,
        timestamp: datetime | None = None,
    ) -> LedgerAck:
        """Move a card one step forward in its lifecycle."""
        card = self.get_card(card_id)
        self.cards[card_id] = advance_status(card, new_status, timestamp)
        logger.debug("Card %s: %s -> %s", card_id, card.status.value, CardStatus(new_status).value)
        return LedgerAck(reference=card_id, count=1)

    def mark_sold(self, card_id: str, timestamp: datetime | None = None) -> RechargeCard:
        """Record a point-of-sale for a printed card."""
        self.update_status(card_id, CardStatus.SOLD, timestamp or utc_now())
        return self.cards[card_id]

    def mark_used(self, card_id: str) -> RechargeCard:
        """Record redemption of a sold card."""
        self.update_status(card_id, CardStatus.USED)
        return self.cards[card_id]

    # Query methods
    def get_card(self, card_id: str) -> RechargeCard:
        """Get a card by id."""
        try:
            return self.cards[card_id]
        except KeyError:
            raise CardNotFoundError(f"Card {card_id} not found") from None

    def get_by_serial(self, serial_number: str) -> RechargeCard:
        """Get a card by its printed serial number."""
        card_id = self._serial_index.get(serial_number)
        if card_id is None:
            raise CardNotFoundError(f"Serial number {serial_number} not found")
        return self.cards[card_id]

    def get_batch_cards(self, batch_id: str) -> list[RechargeCard]:
        """Get all cards printed in one batch."""
        card_ids = self._batch_cards.get(batch_id, [])
        return [self.cards[cid] for cid in card_ids]

    def search(
        self,
        term: str = "",
        network: Network | str | None = None,
        status: CardStatus | str | None = None,
    ) -> list[RechargeCard]:
        """Filter cards by serial/PIN text, network and status.

        The term matches serial numbers case-insensitively and PINs as a
        plain substring. ``None`` filters match everything.
        """
        wanted_network = parse_network(network) if network is not None else None
        wanted_status = CardStatus(status) if status is not None else None
        needle = term.lower()

        return [
            card
            for card in self.cards.values()
            if (needle in card.serial_number.lower() or term in card.pin)
            and (wanted_network is None or card.network is wanted_network)
            and (wanted_status is None or card.status is wanted_status)
        ]

    def stats(self) -> InventoryStats:
        """Return counts per status and the value of unsold printed cards."""
        by_status = {status: 0 for status in CardStatus}
        printed_value = 0
        for card in self.cards.values():
            by_status[card.status] += 1
            if card.status is CardStatus.PRINTED:
                printed_value += card.denomination

        return InventoryStats(
            total=len(self.cards),
            printed=by_status[CardStatus.PRINTED],
            sold=by_status[CardStatus.SOLD],
            used=by_status[CardStatus.USED],
            printed_value=printed_value,
        )
