"""Console sink: voucher printout on stdout."""

from typing import Any

from voucher_gen.commission import network_name
from voucher_gen.formatting import CURRENCY_SYMBOL, format_currency, mask_pin
from voucher_gen.models.batch import PrintedBatch


class ConsoleSink:
    """Print voucher slips and batch summaries to stdout."""

    def __init__(
        self,
        max_records: int | None = None,
        mask_pins: bool = False,
        currency_symbol: str = CURRENCY_SYMBOL,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        max_records : int | None
            Maximum slips to print per batch (None for all).
        mask_pins : bool
            Print ``1234****9012`` instead of the full PIN on vouchers.
        currency_symbol : str
            Symbol used for amounts on slips and in the summary.
        """
        self.max_records = max_records
        self.mask_pins = mask_pins
        self.currency_symbol = currency_symbol
        self._counts: dict[str, int] = {}

    def write_printed_batch(self, printed: PrintedBatch) -> None:
        """Print one voucher slip per card followed by the batch summary."""
        name = network_name(printed.network)
        cards = list(printed.cards)

        for card in self._limit(cards):
            pin = mask_pin(card.pin) if self.mask_pins else " ".join(
                card.pin[i : i + 4] for i in range(0, len(card.pin), 4)
            )
            print("-" * 32)
            print(f"{name} {format_currency(card.denomination, self.currency_symbol)}")
            print(f"PIN: {pin}")
            print(f"S/N: {card.serial_number}")
        print("-" * 32)

        if self.max_records and len(cards) > self.max_records:
            print(f"... and {len(cards) - self.max_records} more cards")

        summary = printed.summary()
        print(f"\n{len(cards)} recharge cards printed and ready for sale")
        for denomination, count in summary.cards_by_denomination.items():
            print(f"  {format_currency(denomination, self.currency_symbol)} Cards: {count} pieces")
        print(f"  Total Value: {format_currency(summary.total_value, self.currency_symbol)}")
        print(f"  Commission: +{format_currency(summary.commission, self.currency_symbol)}")

        self._counts["recharge_cards"] = self._counts.get("recharge_cards", 0) + len(cards)

    def _limit(self, records: list[Any]) -> list[Any]:
        return records[: self.max_records] if self.max_records else records

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
