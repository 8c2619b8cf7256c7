"""In-memory agent wallet ledger."""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from voucher_gen.exceptions import LedgerError
from voucher_gen.models.base import utc_now
from voucher_gen.models.enums import LedgerEntryType
from voucher_gen.models.ledger import WalletEntry

logger = logging.getLogger(__name__)


@dataclass
class InMemoryWalletLedger:
    """Append-only wallet entries with per-agent balances."""

    entries: list[WalletEntry] = field(default_factory=list)
    _balances: dict[str, Decimal] = field(default_factory=dict)
    _by_reference: dict[str, WalletEntry] = field(default_factory=dict)

    def credit(
        self,
        agent_id: str,
        amount: Decimal,
        reference: str,
        description: str = "",
    ) -> WalletEntry:
        """Credit an agent once per reference.

        Repeating a reference returns the original entry and leaves the
        balance unchanged.
        """
        amount = Decimal(str(amount))
        if amount < 0:
            raise LedgerError(f"Credit amount cannot be negative: {amount}")

        existing = self._by_reference.get(reference)
        if existing is not None:
            if existing.agent_id != agent_id:
                raise LedgerError(f"Reference {reference} belongs to agent {existing.agent_id}")
            logger.info("Wallet credit %s already applied", reference)
            return existing

        entry = WalletEntry(
            entry_id=uuid.uuid4().hex,
            agent_id=agent_id,
            amount=amount,
            entry_type=LedgerEntryType.CREDIT,
            reference=reference,
            description=description,
            created_at=utc_now(),
        )
        self.entries.append(entry)
        self._by_reference[reference] = entry
        self._balances[agent_id] = self._balances.get(agent_id, Decimal("0")) + amount
        logger.info("Credited %s to agent %s (ref=%s)", amount, agent_id, reference)
        return entry

    def balance(self, agent_id: str) -> Decimal:
        """Current balance for an agent."""
        return self._balances.get(agent_id, Decimal("0"))

    def agent_entries(self, agent_id: str) -> list[WalletEntry]:
        """All entries for an agent, oldest first."""
        return [entry for entry in self.entries if entry.agent_id == agent_id]

    def get_by_reference(self, reference: str) -> WalletEntry | None:
        return self._by_reference.get(reference)
