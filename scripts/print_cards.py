#!/usr/bin/env python3
"""Run one recharge card print session from the command line.

Example::

    python scripts/print_cards.py --network mtn --cards 1000=2 --cards 500=1

Generated cards are shown with masked PINs and nothing is persisted
until the operator answers ``y`` at the review prompt.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from voucher_gen.config import VoucherGenConfig
from voucher_gen.exceptions import ConfigurationError, VoucherGenError
from voucher_gen.formatting import format_currency
from voucher_gen.generators import CardBatchGenerator
from voucher_gen.logging import setup_logging
from voucher_gen.sinks import ConsoleSink, JsonFileSink, KafkaSink
from voucher_gen.store import InMemoryInventoryLedger, InMemoryWalletLedger
from voucher_gen.workflow import PrintCommitter, PrintSession

logger = logging.getLogger(__name__)


def parse_card_arg(value: str) -> tuple[int, int]:
    """Parse ``DENOMINATION=QUANTITY``; the quantity must not be negative."""
    try:
        denomination, quantity = value.split("=", 1)
        denomination, quantity = int(denomination), int(quantity)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected DENOMINATION=QUANTITY, got {value!r}") from None
    if quantity < 0:
        raise argparse.ArgumentTypeError(f"Quantity cannot be negative, got {value!r}")
    return denomination, quantity


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and print recharge cards")
    parser.add_argument(
        "--network",
        type=str,
        default="mtn",
        help="Network: mtn, glo, airtel or 9mobile (default: mtn)",
    )
    parser.add_argument(
        "--cards",
        type=parse_card_arg,
        action="append",
        required=True,
        help="Denomination and quantity, e.g. 1000=5 (repeatable)",
    )
    parser.add_argument(
        "--agent-id",
        type=str,
        default=None,
        help="Agent identifier (default: AGENT_ID env or agent-local)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible codes",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for printed batch JSON files (default: OUTPUT_DIR env or output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Publish card.printed events to this Kafka cluster",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = VoucherGenConfig.from_env()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    setup_logging(config.log_level, config.log_format)

    agent_id = args.agent_id or config.agent_id
    seed = args.seed if args.seed is not None else config.seed

    symbol = config.printing.currency_symbol
    sinks: list = [ConsoleSink(currency_symbol=symbol)]
    output_dir = args.output_dir or config.output.json_output_dir
    sinks.append(JsonFileSink(output_dir, pretty=config.output.pretty_json))
    if args.kafka_bootstrap:
        sinks.append(KafkaSink(replace(config.kafka, bootstrap_servers=args.kafka_bootstrap)))

    generator = CardBatchGenerator(
        seed=seed,
        denominations=config.printing.denominations,
        max_attempts=config.printing.max_generation_attempts,
    )
    committer = PrintCommitter(
        InMemoryInventoryLedger(),
        InMemoryWalletLedger(),
        sinks=sinks,
        default_commission_rate=config.printing.default_commission_rate,
    )
    try:
        session = PrintSession(args.network, generator, committer, agent_id=agent_id)
        for denomination, quantity in args.cards:
            session.update_quantity(denomination, quantity)

        selection = session.selection
        print(f"Total Cards: {selection.total_cards()}")
        print(f"Total Value: {format_currency(selection.total_value(), symbol)}")
        print(f"Your Commission: +{format_currency(selection.commission(), symbol)}")

        session.generate()
        for row in session.review.preview():
            print(f"  {row['serial_number']}  {row['pin']}  {format_currency(row['denomination'], symbol)}")

        try:
            answer = input(f"Print {selection.total_cards()} cards? [y/N] ").strip().lower()
        except EOFError:
            answer = ""
        if answer != "y":
            session.back()
            print("Batch discarded")
            return 0

        session.confirm_print()
    except VoucherGenError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        for sink in sinks:
            sink.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
