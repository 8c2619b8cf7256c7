"""Tests for InMemoryInventoryLedger."""

from datetime import datetime, timezone

import pytest

from voucher_gen.exceptions import CardNotFoundError, InvalidStatusTransitionError, LedgerError
from voucher_gen.models import CardStatus, Network
from voucher_gen.store import InMemoryInventoryLedger


@pytest.fixture
def stocked(inventory: InMemoryInventoryLedger, make_card) -> InMemoryInventoryLedger:
    """Inventory with three printed cards across two networks."""
    inventory.append(
        [
            make_card("card-001", 1000, pin="111122223333", serial_number="MTN4000001001"),
            make_card("card-002", 500, pin="444455556666", serial_number="MTN4000001002"),
            make_card(
                "card-003",
                200,
                pin="777788889999",
                serial_number="GLO4000001003",
                network=Network.GLO,
                batch_id="batch-002",
            ),
        ],
        "token-1",
    )
    return inventory


class TestAppend:
    """Tests for appending printed cards."""

    def test_append_stores_cards(self, inventory: InMemoryInventoryLedger, make_card) -> None:
        ack = inventory.append([make_card()], "token-1")

        assert ack.reference == "token-1"
        assert ack.count == 1
        assert ack.duplicate is False
        assert inventory.get_card("card-001").denomination == 1000

    def test_repeated_token_is_acknowledged(self, stocked: InMemoryInventoryLedger, make_card) -> None:
        """Replaying a token stores nothing new."""
        ack = stocked.append([make_card("card-999", serial_number="MTN4000009999")], "token-1")

        assert ack.duplicate is True
        assert ack.count == 3
        assert len(stocked.cards) == 3

    def test_duplicate_card_id_rejected(self, stocked: InMemoryInventoryLedger, make_card) -> None:
        with pytest.raises(LedgerError, match="already in the inventory"):
            stocked.append([make_card("card-001", serial_number="MTN4000009999")], "token-2")

    def test_duplicate_serial_rejected(self, stocked: InMemoryInventoryLedger, make_card) -> None:
        with pytest.raises(LedgerError, match="Serial number"):
            stocked.append([make_card("card-100", serial_number="MTN4000001001")], "token-2")

    def test_rejected_append_stores_nothing(self, stocked: InMemoryInventoryLedger, make_card) -> None:
        """A batch with one bad card is refused as a whole."""
        cards = [
            make_card("card-100", serial_number="MTN4000007777"),
            make_card("card-001", serial_number="MTN4000008888"),
        ]

        with pytest.raises(LedgerError):
            stocked.append(cards, "token-2")

        assert "card-100" not in stocked.cards
        assert len(stocked.cards) == 3

    def test_repeated_card_id_within_append_rejected(
        self, inventory: InMemoryInventoryLedger, make_card
    ) -> None:
        """Two cards with one id in the same call refuse the whole append."""
        cards = [
            make_card("c1", serial_number="MTN0000001111"),
            make_card("c1", serial_number="MTN0000002222"),
        ]

        with pytest.raises(LedgerError, match="Card c1"):
            inventory.append(cards, "token-1")

        assert inventory.cards == {}
        assert inventory.stats().total == 0

    def test_repeated_serial_within_append_rejected(
        self, inventory: InMemoryInventoryLedger, make_card
    ) -> None:
        cards = [
            make_card("c1", serial_number="MTN0000001111"),
            make_card("c2", serial_number="MTN0000001111"),
        ]

        with pytest.raises(LedgerError, match="MTN0000001111"):
            inventory.append(cards, "token-1")

        assert inventory.cards == {}
        with pytest.raises(CardNotFoundError):
            inventory.get_by_serial("MTN0000001111")

    def test_token_not_burned_by_rejected_append(
        self, inventory: InMemoryInventoryLedger, make_card
    ) -> None:
        """A refused append can be retried under the same token."""
        with pytest.raises(LedgerError):
            inventory.append([make_card("c1"), make_card("c1")], "token-1")

        ack = inventory.append([make_card("c1")], "token-1")

        assert ack.duplicate is False
        assert ack.count == 1

    def test_batch_index(self, stocked: InMemoryInventoryLedger) -> None:
        assert [c.card_id for c in stocked.get_batch_cards("batch-001")] == ["card-001", "card-002"]
        assert stocked.get_batch_cards("missing") == []


class TestStatusUpdates:
    """Tests for the forward-only lifecycle."""

    def test_sold_then_used(self, stocked: InMemoryInventoryLedger) -> None:
        sold_at = datetime(2024, 1, 13, 9, 0, tzinfo=timezone.utc)

        sold = stocked.mark_sold("card-001", sold_at)
        used = stocked.mark_used("card-001")

        assert sold.status is CardStatus.SOLD
        assert sold.sold_at == sold_at
        assert used.status is CardStatus.USED
        assert used.sold_at == sold_at

    def test_mark_sold_stamps_now(self, stocked: InMemoryInventoryLedger) -> None:
        sold = stocked.mark_sold("card-002")

        assert sold.sold_at is not None
        assert sold.sold_at.tzinfo is not None

    def test_cannot_skip_to_used(self, stocked: InMemoryInventoryLedger) -> None:
        with pytest.raises(InvalidStatusTransitionError, match="printed to used"):
            stocked.mark_used("card-001")
        assert stocked.get_card("card-001").status is CardStatus.PRINTED

    def test_cannot_go_back(self, stocked: InMemoryInventoryLedger) -> None:
        stocked.mark_sold("card-001")

        with pytest.raises(InvalidStatusTransitionError):
            stocked.update_status("card-001", CardStatus.PRINTED)

    def test_update_status_accepts_string(self, stocked: InMemoryInventoryLedger) -> None:
        ack = stocked.update_status("card-003", "sold")

        assert ack.reference == "card-003"
        assert stocked.get_card("card-003").status is CardStatus.SOLD

    def test_unknown_card(self, stocked: InMemoryInventoryLedger) -> None:
        with pytest.raises(CardNotFoundError):
            stocked.mark_sold("nope")


class TestQueries:
    """Tests for lookups, search and stats."""

    def test_get_by_serial(self, stocked: InMemoryInventoryLedger) -> None:
        assert stocked.get_by_serial("GLO4000001003").card_id == "card-003"
        with pytest.raises(CardNotFoundError):
            stocked.get_by_serial("MTN0000000000")

    def test_search_serial_case_insensitive(self, stocked: InMemoryInventoryLedger) -> None:
        results = stocked.search("glo4000")

        assert [c.card_id for c in results] == ["card-003"]

    def test_search_pin_substring(self, stocked: InMemoryInventoryLedger) -> None:
        results = stocked.search("5555")

        assert [c.card_id for c in results] == ["card-002"]

    def test_search_filters(self, stocked: InMemoryInventoryLedger) -> None:
        stocked.mark_sold("card-002")

        assert len(stocked.search()) == 3
        assert [c.card_id for c in stocked.search(network="mtn")] == ["card-001", "card-002"]
        assert [c.card_id for c in stocked.search(status=CardStatus.SOLD)] == ["card-002"]
        assert stocked.search("MTN", network=Network.GLO) == []

    def test_stats(self, stocked: InMemoryInventoryLedger) -> None:
        stocked.mark_sold("card-002")
        stocked.mark_sold("card-003")
        stocked.mark_used("card-003")

        stats = stocked.stats()

        assert stats.total == 3
        assert stats.printed == 1
        assert stats.sold == 1
        assert stats.used == 1
        assert stats.printed_value == 1000
