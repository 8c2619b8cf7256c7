"""Kafka sink for publishing recharge card lifecycle events."""

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any

from confluent_kafka import Producer

from voucher_gen.config import KafkaConfig
from voucher_gen.formatting import mask_pin
from voucher_gen.models.base import Event, utc_now
from voucher_gen.models.batch import PrintedBatch
from voucher_gen.models.card import RechargeCard
from voucher_gen.sinks.serialization import dataclass_to_dict, to_dict

logger = logging.getLogger(__name__)

EVENT_SOURCE = "voucher-gen"
CARD_PRINTED = "card.printed"


@dataclass
class ProducerStats:
    """Delivery counts for one sink."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        settled = self.delivered + self.failed
        return self.delivered / settled if settled > 0 else 0.0


class KafkaSink:
    """Publish one event per printed card, keyed by card id.

    PINs are masked in every event; the full PIN only ever leaves the
    process on the printed voucher.

    Parameters
    ----------
    config : KafkaConfig | str
        Producer settings, or just the bootstrap servers.
    topic : str | None
        Overrides ``config.topic``.
    """

    def __init__(self, config: KafkaConfig | str, topic: str | None = None) -> None:
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.topic = topic or config.topic
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        if err:
            self.stats.failed += 1
            logger.error("Card event delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, record: Any, key: str | None = None) -> None:
        """Produce ``record`` as JSON; events default to their subject as key."""
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")
        if key is None and isinstance(record, Event):
            key = record.subject

        self.producer.produce(
            topic=self.topic,
            key=key.encode("utf-8") if key else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_printed_batch(self, printed: PrintedBatch) -> None:
        """Publish a ``card.printed`` event for every card, then flush."""
        for card in printed.cards:
            self.send(
                self.card_event(
                    card,
                    CARD_PRINTED,
                    batch_id=printed.batch_id,
                    agent_id=printed.agent_id,
                )
            )
        self.flush()
        logger.info(
            "Published %d %s events for batch %s",
            len(printed.cards),
            CARD_PRINTED,
            printed.batch_id,
        )

    @staticmethod
    def card_event(card: RechargeCard, event_type: str, **metadata: Any) -> Event:
        """Wrap ``card`` in an event envelope with its PIN masked."""
        data = dataclass_to_dict(card)
        data["pin"] = mask_pin(card.pin)
        return Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            event_time=utc_now(),
            source=EVENT_SOURCE,
            subject=card.card_id,
            data=data,
            metadata=metadata,
        )

    def flush(self, timeout: float = 30.0) -> None:
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush outstanding events and log delivery counts."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
