"""Recharge card batch generator."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Callable

from voucher_gen.config import DEFAULT_DENOMINATIONS
from voucher_gen.exceptions import GenerationError, InvalidSelectionError
from voucher_gen.generators.base import BaseGenerator
from voucher_gen.generators.codes import CodeGenerator
from voucher_gen.models.base import epoch_millis
from voucher_gen.models.batch import CardBatch
from voucher_gen.models.card import RechargeCard
from voucher_gen.models.enums import CardStatus, Network, parse_network

logger = logging.getLogger(__name__)


class CardBatchGenerator(BaseGenerator):
    """Materialize a denomination selection into ``generated`` cards.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducible PINs, serials and ids.
    denominations : Iterable[int]
        Face values that may be requested.
    max_attempts : int
        Draws allowed per card before a PIN/serial collision is fatal.
    clock : Callable[[], datetime] | None
        Time source shared with the code generator.
    codes : CodeGenerator | None
        Code generator to use instead of a seeded default.
    """

    def __init__(
        self,
        seed: int | None = None,
        denominations: Iterable[int] = DEFAULT_DENOMINATIONS,
        max_attempts: int = 10,
        clock: Callable[[], datetime] | None = None,
        codes: CodeGenerator | None = None,
    ) -> None:
        super().__init__(seed=seed, clock=clock)
        self.denominations = frozenset(denominations)
        self.max_attempts = max_attempts
        self.codes = codes or CodeGenerator(seed=seed, clock=self.clock)

    def generate_batch(
        self,
        selection: Mapping[int, int],
        network: Network | str | None = None,
        agent_id: str = "agent-local",
    ) -> CardBatch:
        """Generate one card per requested unit of each denomination.

        Parameters
        ----------
        selection : Mapping[int, int]
            Denomination to quantity. A ``DenominationSelection`` also
            supplies the network when ``network`` is omitted.
        network : Network | str | None
            Network the cards are issued on.
        agent_id : str
            Operator the batch belongs to; part of the idempotency token.

        Returns
        -------
        CardBatch
            Cards in ``generated`` status sharing one generation instant.
            An all-zero selection yields an empty batch.

        Raises
        ------
        InvalidSelectionError
            Unknown network or denomination, or a quantity that is not a
            non-negative integer.
        GenerationError
            A unique PIN/serial could not be drawn within ``max_attempts``.
        """
        if network is None:
            network = getattr(selection, "network", None)
        if network is None:
            raise InvalidSelectionError("A network is required to generate cards")
        network = parse_network(network)
        quantities = self._validate(selection)

        batch_id = self.fake.uuid4()
        generated_at = self.clock()
        token = f"{agent_id}-{epoch_millis(generated_at)}-{batch_id[:8]}"

        seen_pins: set[str] = set()
        seen_serials: set[str] = set()
        cards: list[RechargeCard] = []

        for denomination, quantity in sorted(quantities.items()):
            for _ in range(quantity):
                pin, serial = self._draw_unique(network, seen_pins, seen_serials)
                cards.append(
                    RechargeCard(
                        card_id=self.codes.generate_card_id(),
                        batch_id=batch_id,
                        denomination=denomination,
                        pin=pin,
                        serial_number=serial,
                        network=network,
                        status=CardStatus.GENERATED,
                        generated_at=generated_at,
                    )
                )

        logger.info(
            "Generated batch %s: %d cards on %s (value=%d)",
            batch_id,
            len(cards),
            network.value,
            sum(card.denomination for card in cards),
            extra={"batch_id": batch_id, "agent_id": agent_id, "network": network.value},
        )

        return CardBatch(
            batch_id=batch_id,
            agent_id=agent_id,
            network=network,
            cards=tuple(cards),
            generated_at=generated_at,
            idempotency_token=token,
        )

    def _validate(self, selection: Mapping[int, int]) -> dict[int, int]:
        """Reject malformed selections before any card is produced."""
        quantities: dict[int, int] = {}
        for denomination, quantity in selection.items():
            if isinstance(denomination, bool) or not isinstance(denomination, int):
                raise InvalidSelectionError(f"Denomination must be an integer: {denomination!r}")
            if denomination not in self.denominations:
                raise InvalidSelectionError(f"Unsupported denomination: {denomination}")
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                raise InvalidSelectionError(f"Quantity must be an integer: {quantity!r}")
            if quantity < 0:
                raise InvalidSelectionError(f"Quantity for {denomination} cannot be negative: {quantity}")
            if quantity:
                quantities[denomination] = quantity
        return quantities

    def _draw_unique(
        self,
        network: Network,
        seen_pins: set[str],
        seen_serials: set[str],
    ) -> tuple[str, str]:
        """Draw a PIN and serial not yet used in this batch."""
        for attempt in range(1, self.max_attempts + 1):
            pin = self.codes.generate_pin()
            serial = self.codes.generate_serial_number(network)
            if pin not in seen_pins and serial not in seen_serials:
                seen_pins.add(pin)
                seen_serials.add(serial)
                return pin, serial
            logger.debug("Code collision on attempt %d (serial=%s), redrawing", attempt, serial)

        raise GenerationError(
            f"Could not draw a unique PIN/serial after {self.max_attempts} attempts"
        )
