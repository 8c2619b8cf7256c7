"""PIN, serial number and reference generation for recharge cards."""

from __future__ import annotations

from voucher_gen.generators.base import BaseGenerator
from voucher_gen.models.base import epoch_millis
from voucher_gen.models.enums import Network, parse_network


class CodeGenerator(BaseGenerator):
    """Generate redemption codes for single recharge cards.

    Every call is independent: there is no shared counter, so uniqueness
    is probabilistic. Two serials drawn in the same millisecond collide
    with probability 1/9000.
    """

    PIN_LENGTH = 12
    # Faker numerify: "%" is a digit 1-9, "#" is a digit 0-9
    PIN_PATTERN = "%" + "#" * (PIN_LENGTH - 1)
    SERIAL_RANDOM_PATTERN = "%###"
    SERIAL_TIME_DIGITS = 6
    REFERENCE_PREFIX = "BX"
    REFERENCE_TIME_DIGITS = 8

    def generate_pin(self) -> str:
        """Return a 12-digit PIN in [100000000000, 999999999999]."""
        return self.fake.numerify(self.PIN_PATTERN)

    def generate_serial_number(self, network: Network | str) -> str:
        """Return ``<PFX><6 time digits><4 random digits>`` for ``network``.

        The prefix is the first three characters of the network id,
        upper-cased (``MTN``, ``GLO``, ``AIR``, ``9MO``).
        """
        network = parse_network(network)
        prefix = network.value.upper()[:3]
        millis = epoch_millis(self.clock()) % 10**self.SERIAL_TIME_DIGITS
        suffix = self.fake.numerify(self.SERIAL_RANDOM_PATTERN)
        return f"{prefix}{millis:0{self.SERIAL_TIME_DIGITS}d}{suffix}"

    def generate_reference(self) -> str:
        """Return a transaction reference such as ``BX12345678``."""
        millis = epoch_millis(self.clock()) % 10**self.REFERENCE_TIME_DIGITS
        return f"{self.REFERENCE_PREFIX}{millis:0{self.REFERENCE_TIME_DIGITS}d}"

    def generate_card_id(self) -> str:
        """Return an opaque unique card identifier."""
        return self.fake.uuid4()
