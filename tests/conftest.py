"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from voucher_gen.generators import CardBatchGenerator, CodeGenerator
from voucher_gen.models import CardBatch, CardStatus, Network, PrintedBatch, RechargeCard
from voucher_gen.store import InMemoryInventoryLedger, InMemoryWalletLedger
from voucher_gen.workflow import DenominationSelection, PrintCommitter


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> FixedClock:
    """2024-01-12 10:30 UTC, epoch millis 1705055400000."""
    return FixedClock(datetime(2024, 1, 12, 10, 30, tzinfo=timezone.utc))


@pytest.fixture
def code_generator(seed: int, clock: FixedClock) -> CodeGenerator:
    return CodeGenerator(seed=seed, clock=clock)


@pytest.fixture
def batch_generator(seed: int, clock: FixedClock) -> CardBatchGenerator:
    return CardBatchGenerator(seed=seed, clock=clock)


@pytest.fixture
def selection() -> DenominationSelection:
    """Two 1000 cards and one 500 card on MTN."""
    return DenominationSelection(network=Network.MTN, quantities={1000: 2, 500: 1})


@pytest.fixture
def batch(batch_generator: CardBatchGenerator, selection: DenominationSelection) -> CardBatch:
    return batch_generator.generate_batch(selection, agent_id="agent-001")


@pytest.fixture
def inventory() -> InMemoryInventoryLedger:
    return InMemoryInventoryLedger()


@pytest.fixture
def wallet() -> InMemoryWalletLedger:
    return InMemoryWalletLedger()


@pytest.fixture
def committer(
    inventory: InMemoryInventoryLedger,
    wallet: InMemoryWalletLedger,
    clock: FixedClock,
) -> PrintCommitter:
    return PrintCommitter(inventory, wallet, clock=clock)


@pytest.fixture
def make_card(clock: FixedClock) -> Callable[..., RechargeCard]:
    """Factory for cards with sensible defaults."""

    def _make(
        card_id: str = "card-001",
        denomination: int = 1000,
        pin: str = "123456789012",
        serial_number: str = "MTN4000001234",
        network: Network = Network.MTN,
        status: CardStatus = CardStatus.PRINTED,
        batch_id: str = "batch-001",
    ) -> RechargeCard:
        return RechargeCard(
            card_id=card_id,
            batch_id=batch_id,
            denomination=denomination,
            pin=pin,
            serial_number=serial_number,
            network=network,
            status=status,
            generated_at=clock(),
        )

    return _make


@pytest.fixture
def printed_batch(committer: PrintCommitter, batch: CardBatch) -> PrintedBatch:
    """The two 1000 / one 500 MTN batch after a successful commit."""
    return committer.commit_print(batch)
