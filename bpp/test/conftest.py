from __future__ import annotations

import json
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from bpp.stores.verbose import VERBOSE_ENV

MakeBundle = Callable[..., Path]


@pytest.fixture
def make_bundle(tmp_path: Path) -> MakeBundle:
    """Write an extension zip with a manifest.json into tmp_path."""

    def _make(name: str = "ext.zip", *, ext_name: str = "My Extension", version: str = "1.2.3") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("manifest.json", json.dumps({"name": ext_name, "version": version}))
            archive.writestr("background.js", "// noop\n")
        return path

    return _make


@pytest.fixture(autouse=True)
def _isolate_verbose_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # StepLogger.enable() writes VERBOSE=true; setenv registers the original for teardown.
    for name in (VERBOSE_ENV, "GITHUB_ACTIONS", "BPP_ENV"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
