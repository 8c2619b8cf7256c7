"""Recharge card model and its status lifecycle."""

from dataclasses import dataclass, replace
from datetime import datetime

from voucher_gen.exceptions import InvalidStatusTransitionError
from voucher_gen.models.base import utc_now
from voucher_gen.models.enums import CardStatus, Network, next_status


@dataclass(frozen=True)
class RechargeCard:
    """A single printable recharge voucher."""

    card_id: str
    batch_id: str
    denomination: int
    pin: str  # 12 digits, never starts with 0
    serial_number: str  # network prefix + 6 time digits + 4 random digits
    network: Network
    status: CardStatus
    generated_at: datetime
    sold_at: datetime | None = None


def advance_status(
    card: RechargeCard,
    new_status: CardStatus,
    timestamp: datetime | None = None,
) -> RechargeCard:
    """Return a copy of ``card`` moved one step forward to ``new_status``.

    Only ``generated -> printed -> sold -> used`` is allowed; going back,
    staying put, or skipping a step raises
    :class:`InvalidStatusTransitionError`. ``sold_at`` is stamped on the
    move to ``sold``.
    """
    new_status = CardStatus(new_status)
    expected = next_status(card.status)
    if new_status is not expected:
        raise InvalidStatusTransitionError(
            f"Card {card.card_id} cannot move from {card.status.value} to {new_status.value}"
        )

    if new_status is CardStatus.SOLD:
        return replace(card, status=new_status, sold_at=timestamp or utc_now())
    return replace(card, status=new_status)
