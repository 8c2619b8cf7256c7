"""Configuration management for voucher-gen."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from voucher_gen.exceptions import ConfigurationError

DEFAULT_DENOMINATIONS: tuple[int, ...] = (100, 200, 500, 1000, 2000, 5000)


@dataclass
class KafkaConfig:
    """Kafka producer configuration for card lifecycle events."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic: str = "vending.recharge-cards"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration for exported batches."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class PrintConfig:
    """Recharge card printing rules."""

    denominations: tuple[int, ...] = DEFAULT_DENOMINATIONS
    default_commission_rate: Decimal = Decimal("0.02")
    max_generation_attempts: int = 10
    currency_symbol: str = "₦"

    def __post_init__(self) -> None:
        if not self.denominations:
            raise ConfigurationError("At least one denomination is required")
        if any(d <= 0 for d in self.denominations):
            raise ConfigurationError(f"Denominations must be positive: {self.denominations}")
        if self.max_generation_attempts < 1:
            raise ConfigurationError("max_generation_attempts must be at least 1")


@dataclass
class VoucherGenConfig:
    """Main configuration for voucher-gen."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    printing: PrintConfig = field(default_factory=PrintConfig)
    agent_id: str = "agent-local"
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "VoucherGenConfig":
        """Create config from environment variables."""
        import os

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic=os.getenv("KAFKA_TOPIC", "vending.recharge-cards"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        denominations_str = os.getenv("DENOMINATIONS")
        try:
            denominations = (
                tuple(int(d) for d in denominations_str.split(",") if d.strip())
                if denominations_str
                else DEFAULT_DENOMINATIONS
            )
            max_attempts = int(os.getenv("MAX_GENERATION_ATTEMPTS", "10"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        printing = PrintConfig(
            denominations=denominations,
            max_generation_attempts=max_attempts,
        )

        return cls(
            kafka=kafka,
            output=output,
            printing=printing,
            agent_id=os.getenv("AGENT_ID", "agent-local"),
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
