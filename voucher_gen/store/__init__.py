"""In-memory ledgers and the contracts they implement."""

from voucher_gen.store.base import InventoryLedger, WalletLedger
from voucher_gen.store.inventory import InMemoryInventoryLedger, InventoryStats
from voucher_gen.store.wallet import InMemoryWalletLedger

__all__ = [
    "InMemoryInventoryLedger",
    "InMemoryWalletLedger",
    "InventoryLedger",
    "InventoryStats",
    "WalletLedger",
]
