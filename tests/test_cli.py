import io
import json
from pathlib import Path

import pytest

from receiptparse.cli.main import main


def test_parse_prints_summary(tmp_path: Path, costco_discount_receipt: str, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_file = tmp_path / "receipt.txt"
    receipt_file.write_text(costco_discount_receipt, encoding="utf-8")

    exit_code = main(["parse", str(receipt_file)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "; @store: Costco Wholesale" in out
    assert "; @total: 63.97" in out


def test_parse_json(tmp_path: Path, costco_discount_receipt: str, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_file = tmp_path / "receipt.txt"
    receipt_file.write_text(costco_discount_receipt, encoding="utf-8")

    exit_code = main(["parse", str(receipt_file), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["totalAmount"] == 63.97
    assert len(payload["items"]) == 2


def test_parse_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, costco_discount_receipt: str, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(costco_discount_receipt))

    exit_code = main(["parse", "-", "--json"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["storeName"] == "Costco Wholesale"


def test_parse_with_store_rules_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules_file = tmp_path / "rules.toml"
    rules_file.write_text('[[rules]]\nname = "Corner Deli"\npattern = "CORNER\\\\s+DELI"\n', encoding="utf-8")
    receipt_file = tmp_path / "receipt.txt"
    receipt_file.write_text("CORNER DELI\n1234567 PASTRAMI SUB 11.50 A\n", encoding="utf-8")

    exit_code = main(["parse", str(receipt_file), "--json", "--store-rules", str(rules_file)])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["storeName"] == "Corner Deli"
    assert payload["totalAmount"] == 11.5


def test_parse_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["parse", str(tmp_path / "missing.txt")])

    assert exit_code == 1
    assert "file not found" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "parse" in capsys.readouterr().out


def test_verbose_flag_enables_debug_logging(tmp_path: Path) -> None:
    import logging

    from receiptparse.runtime.logging import LOGGER_NAMESPACE, set_log_level

    receipt_file = tmp_path / "receipt.txt"
    receipt_file.write_text("1234567 PAPER TOWEL 21.99 A\n", encoding="utf-8")
    try:
        assert main(["-v", "parse", str(receipt_file)]) == 0
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG
    finally:
        set_log_level(logging.INFO)
