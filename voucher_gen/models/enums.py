"""Enumeration types for recharge card vending."""

from enum import Enum

from voucher_gen.exceptions import InvalidSelectionError


class Network(str, Enum):
    MTN = "mtn"
    GLO = "glo"
    AIRTEL = "airtel"
    NINE_MOBILE = "9mobile"


class CardStatus(str, Enum):
    GENERATED = "generated"
    PRINTED = "printed"
    SOLD = "sold"
    USED = "used"


class LedgerEntryType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


# Forward-only card lifecycle; each status may only advance to the next one.
CARD_LIFECYCLE: tuple[CardStatus, ...] = (
    CardStatus.GENERATED,
    CardStatus.PRINTED,
    CardStatus.SOLD,
    CardStatus.USED,
)


def parse_network(value: "Network | str") -> Network:
    """Coerce a network identifier, rejecting anything outside the known set."""
    if isinstance(value, Network):
        return value
    try:
        return Network(str(value).strip().lower())
    except ValueError:
        raise InvalidSelectionError(f"Unknown network: {value!r}") from None


def next_status(status: CardStatus) -> CardStatus | None:
    """Return the status that follows ``status``, or None for ``used``."""
    idx = CARD_LIFECYCLE.index(status)
    return CARD_LIFECYCLE[idx + 1] if idx + 1 < len(CARD_LIFECYCLE) else None
