"""voucher-gen: recharge card generation and print accounting."""

__version__ = "0.1.0"
