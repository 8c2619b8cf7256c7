"""Output sinks for printed recharge card batches."""

from voucher_gen.sinks.console import ConsoleSink
from voucher_gen.sinks.json_file import JsonFileSink
from voucher_gen.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
