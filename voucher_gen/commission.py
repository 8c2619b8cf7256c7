"""Agent commission rates per network."""

from dataclasses import dataclass
from decimal import Decimal

from voucher_gen.models.enums import Network

DEFAULT_COMMISSION_RATE = Decimal("0.02")


@dataclass(frozen=True)
class NetworkInfo:
    """Display metadata for a mobile network."""

    network: Network
    name: str
    commission_rate: Decimal


NETWORKS: dict[Network, NetworkInfo] = {
    Network.MTN: NetworkInfo(Network.MTN, "MTN", Decimal("0.02")),
    Network.GLO: NetworkInfo(Network.GLO, "GLO", Decimal("0.025")),
    Network.AIRTEL: NetworkInfo(Network.AIRTEL, "AIRTEL", Decimal("0.02")),
    Network.NINE_MOBILE: NetworkInfo(Network.NINE_MOBILE, "9MOBILE", Decimal("0.018")),
}


def _lookup(network: Network | str | None) -> NetworkInfo | None:
    if isinstance(network, Network):
        return NETWORKS[network]
    try:
        return NETWORKS[Network(str(network).strip().lower())]
    except ValueError:
        return None


def commission_rate(
    network: Network | str | None,
    default_rate: Decimal = DEFAULT_COMMISSION_RATE,
) -> Decimal:
    """Rate for ``network``; unknown identifiers get ``default_rate``."""
    info = _lookup(network)
    return info.commission_rate if info else default_rate


def calculate_commission(
    amount: int | float | Decimal,
    network: Network | str | None,
    default_rate: Decimal = DEFAULT_COMMISSION_RATE,
) -> Decimal:
    """Commission owed to the agent on ``amount`` sold on ``network``.

    The result is ``amount * rate`` without rounding. An unrecognized
    network degrades to ``default_rate`` instead of failing.
    """
    return Decimal(str(amount)) * commission_rate(network, default_rate)


def network_name(network: Network | str) -> str:
    """Upper-case display name, falling back to the raw identifier."""
    info = _lookup(network)
    return info.name if info else str(network).upper()
