"""Denomination selection state for a print session."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from voucher_gen.commission import calculate_commission
from voucher_gen.exceptions import InvalidSelectionError
from voucher_gen.models.enums import Network, parse_network


@dataclass(frozen=True)
class DenominationSelection(Mapping[int, int]):
    """Requested quantity per face value, read-only.

    Zero quantities are never stored, so ``len(selection)`` is the number
    of distinct denominations actually selected. Every update returns a
    new selection.
    """

    network: Network = Network.MTN
    quantities: dict[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "network", parse_network(self.network))
        cleaned: dict[int, int] = {}
        for denomination, quantity in self.quantities.items():
            _check_int("Denomination", denomination)
            _check_int("Quantity", quantity)
            if denomination <= 0:
                raise InvalidSelectionError(f"Denomination must be positive: {denomination}")
            if quantity < 0:
                raise InvalidSelectionError(f"Quantity for {denomination} cannot be negative: {quantity}")
            if quantity:
                cleaned[denomination] = quantity
        object.__setattr__(self, "quantities", cleaned)

    def __getitem__(self, denomination: int) -> int:
        return self.quantities[denomination]

    def __iter__(self) -> Iterator[int]:
        return iter(self.quantities)

    def __len__(self) -> int:
        return len(self.quantities)

    def update_quantity(self, denomination: int, delta: int) -> DenominationSelection:
        """Apply ``delta`` to one denomination, flooring the result at zero.

        A result of zero removes the denomination entirely.
        """
        _check_int("Denomination", denomination)
        _check_int("Delta", delta)
        new_quantity = max(0, self.quantities.get(denomination, 0) + delta)

        quantities = dict(self.quantities)
        if new_quantity == 0:
            quantities.pop(denomination, None)
        else:
            quantities[denomination] = new_quantity
        return DenominationSelection(network=self.network, quantities=quantities)

    def increment(self, denomination: int) -> DenominationSelection:
        return self.update_quantity(denomination, 1)

    def decrement(self, denomination: int) -> DenominationSelection:
        return self.update_quantity(denomination, -1)

    def with_network(self, network: Network | str) -> DenominationSelection:
        return DenominationSelection(network=parse_network(network), quantities=dict(self.quantities))

    def total_cards(self) -> int:
        return sum(self.quantities.values())

    def total_value(self) -> int:
        return sum(denomination * quantity for denomination, quantity in self.quantities.items())

    def commission(self) -> Decimal:
        return calculate_commission(self.total_value(), self.network)


def _check_int(label: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSelectionError(f"{label} must be an integer: {value!r}")
