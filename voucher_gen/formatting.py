"""Display helpers for amounts and voucher PINs."""

from decimal import Decimal

CURRENCY_SYMBOL = "₦"
CENTS = Decimal("0.01")


def format_currency(amount: int | float | Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format ``amount`` with up to two decimals: ``₦1,000``, ``₦12.5``, ``₦5.99``."""
    value = Decimal(str(amount)).quantize(CENTS)
    if value == value.to_integral_value():
        return f"{symbol}{int(value):,}"
    # At least one non-zero cent digit remains, so the point is kept
    return f"{symbol}{value:,.2f}".rstrip("0")


def mask_pin(pin: str) -> str:
    """Keep the first and last four digits: ``1234****9012``."""
    if len(pin) <= 4:
        return pin
    return f"{pin[:4]}****{pin[-4:]}"


def mask_pin_short(pin: str) -> str:
    """Keep only the first four digits: ``1234***``."""
    if len(pin) <= 4:
        return pin
    return f"{pin[:4]}***"
