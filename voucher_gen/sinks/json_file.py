"""JSON file sink for exporting printed batches."""

import json
import logging
from pathlib import Path
from typing import Any

from voucher_gen.exceptions import SinkError
from voucher_gen.models.batch import PrintedBatch
from voucher_gen.sinks.serialization import printed_batch_to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Export printed batches as JSON documents."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_printed_batch(self, printed: PrintedBatch) -> Path:
        """Write a printed batch to ``batch_<batch_id>.json``."""
        file_path = self.output_dir / f"batch_{printed.batch_id}.json"
        self._dump(file_path, printed_batch_to_dict(printed))
        self._counts[f"batch_{printed.batch_id}"] = len(printed.cards)
        logger.info("Wrote %d cards to %s", len(printed.cards), file_path)
        return file_path

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Could not write {file_path}: {exc}") from exc

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
