"""Tests for the print_cards command line script."""

import argparse
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from scripts.print_cards import main, parse_card_arg


@pytest.fixture
def cli_env():
    """Environment without voucher-gen settings, logging setup stubbed out."""
    env = {
        k: v
        for k, v in os.environ.items()
        if k not in ("SEED", "DENOMINATIONS", "MAX_GENERATION_ATTEMPTS", "OUTPUT_DIR", "AGENT_ID")
    }
    with patch.dict(os.environ, env, clear=True), patch("scripts.print_cards.setup_logging"):
        yield


class TestParseCardArg:
    """Tests for the --cards argument type."""

    def test_valid(self) -> None:
        assert parse_card_arg("1000=5") == (1000, 5)
        assert parse_card_arg("500=0") == (500, 0)

    @pytest.mark.parametrize("value", ["1000", "abc=1", "1000=x"])
    def test_malformed(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="DENOMINATION=QUANTITY"):
            parse_card_arg(value)

    def test_negative_quantity_rejected(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="cannot be negative"):
            parse_card_arg("500=-3")


class TestMain:
    """Tests for main()."""

    def test_negative_quantity_exits(self, cli_env, capsys: pytest.CaptureFixture) -> None:
        """argparse refuses the run instead of clamping the quantity."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--cards", "1000=2", "--cards", "500=-3"])

        assert exc_info.value.code == 2
        assert "cannot be negative" in capsys.readouterr().err

    def test_bad_environment_reports_error(self, cli_env, capsys: pytest.CaptureFixture) -> None:
        with patch.dict(os.environ, {"SEED": "abc"}):
            assert main(["--cards", "1000=1"]) == 1

        assert "Configuration error" in capsys.readouterr().err

    def test_eof_at_prompt_discards(self, cli_env, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Closed stdin counts as a no at the review prompt."""
        with patch("builtins.input", side_effect=EOFError):
            code = main(["--cards", "1000=2", "--seed", "42", "--output-dir", str(tmp_path)])

        assert code == 0
        assert "Batch discarded" in capsys.readouterr().out
        assert list(tmp_path.glob("batch_*.json")) == []

    def test_confirm_writes_batch(self, cli_env, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        with patch("builtins.input", return_value="y"):
            code = main(["--cards", "1000=2", "--cards", "500=1", "--seed", "42", "--output-dir", str(tmp_path)])

        assert code == 0
        assert len(list(tmp_path.glob("batch_*.json"))) == 1
        assert "3 recharge cards printed and ready for sale" in capsys.readouterr().out
