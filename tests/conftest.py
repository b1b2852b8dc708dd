"""Shared pytest fixtures for receiptparse tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from receiptparse.runtime.paths import CONFIG_DIR_ENV, reset_paths
from receiptparse.runtime.store_rules import load_store_rules

COSTCO_DISCOUNT_RECEIPT = """COSTCO
WHOLESALE
Oak Brook
#388
1901 West 22nd Street
Oak Brook, IL 60523
4K Member 111855127510
1935001 HUG PU 3T-4T
0000366341 / 1935001
1954841 IRIS BIN
39.99 A
8.00-A
11.99 A
1954841 IRIS BIN
11.99 A
SUBTOTAL
63.97
TAX
0.00
**** TOTAL
63.97"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the config directory at an empty temp dir and drop cached rules."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    reset_paths()
    load_store_rules.cache_clear()
    yield config_dir
    reset_paths()
    load_store_rules.cache_clear()


@pytest.fixture
def costco_discount_receipt() -> str:
    return COSTCO_DISCOUNT_RECEIPT
