"""Tests for bpp.stores.validate module."""

from __future__ import annotations

from pathlib import Path

import pytest

from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName
from bpp.stores.validate import validate_options

REQUIRED = {
    "extId": "No extension ID provided",
    "clientId": "No client ID provided",
}


def test_valid_options_pass(make_bundle, tmp_path: Path) -> None:
    make_bundle("ext.zip")
    options = {"extId": "abc", "clientId": "id", "zip": "ext.zip"}
    validate_options(BrowserName.CHROME, options, REQUIRED, cwd=tmp_path)


def test_first_missing_field_is_reported(tmp_path: Path) -> None:
    with pytest.raises(StoreError) as exc:
        validate_options(BrowserName.CHROME, {}, REQUIRED, cwd=tmp_path)
    assert str(exc.value) == "chrome: No extension ID provided"


def test_later_missing_field_after_present_one(tmp_path: Path) -> None:
    with pytest.raises(StoreError) as exc:
        validate_options(BrowserName.EDGE, {"extId": "abc"}, REQUIRED, cwd=tmp_path)
    assert str(exc.value) == "edge: No client ID provided"


def test_missing_bundle(tmp_path: Path) -> None:
    options = {"extId": "abc", "clientId": "id"}
    with pytest.raises(StoreError, match="chrome: No extension bundle provided"):
        validate_options(BrowserName.CHROME, options, REQUIRED, cwd=tmp_path)


def test_bundle_file_must_exist(tmp_path: Path) -> None:
    options = {"extId": "abc", "clientId": "id", "file": "missing.zip"}
    with pytest.raises(StoreError) as exc:
        validate_options(BrowserName.FIREFOX, options, REQUIRED, cwd=tmp_path)
    expected = (tmp_path / "missing.zip").resolve()
    assert str(exc.value) == f"firefox: Extension bundle file doesn't exist: {expected}"
