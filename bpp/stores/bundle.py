"""Bundle path resolution and manifest access.

Paths in store options are relative to the working directory. A bundle path
may contain ``{version}``, which is replaced by the ``version`` field of the
version file (``package.json`` unless ``versionFile`` says otherwise).
"""

from __future__ import annotations

import json
import zipfile
from collections.abc import Mapping
from pathlib import Path

from bpp.core.structured import as_str_dict, get_str
from bpp.stores.errors import BundleManifestError

__all__ = [
    "VERSION_PLACEHOLDER",
    "DEFAULT_VERSION_FILE",
    "bundle_file",
    "has_bundle_file",
    "full_path",
    "correct_zip",
    "read_manifest",
]

VERSION_PLACEHOLDER = "{version}"
DEFAULT_VERSION_FILE = "package.json"


def bundle_file(options: Mapping[str, object]) -> str | None:
    """Return the bundle path from ``zip`` or its alias ``file``."""
    return get_str(options, "zip") or get_str(options, "file")


def has_bundle_file(options: Mapping[str, object]) -> bool:
    return bundle_file(options) is not None


def full_path(path: str, cwd: Path | None = None) -> Path:
    base = cwd if cwd is not None else Path.cwd()
    return (base / path).resolve()


def correct_zip(options: Mapping[str, object], *, cwd: Path | None = None) -> str:
    """Return the bundle path with ``{version}`` substituted.

    Only the first placeholder is replaced. The path is returned unchanged when
    it has no placeholder or the version file does not exist. An invalid
    version file raises ``json.JSONDecodeError``.
    """
    output = bundle_file(options) or ""
    version_file = get_str(options, "versionFile") or DEFAULT_VERSION_FILE
    version_path = full_path(version_file, cwd)

    if VERSION_PLACEHOLDER not in output or not version_path.exists():
        return output

    data = as_str_dict(json.loads(version_path.read_text(encoding="utf-8"))) or {}
    version = data.get("version") or ""
    return output.replace(VERSION_PLACEHOLDER, str(version), 1)


def read_manifest(zip_path: str, *, cwd: Path | None = None) -> dict[str, object]:
    """Decode ``manifest.json`` from the root of the bundle archive."""
    path = full_path(zip_path, cwd)
    try:
        with zipfile.ZipFile(path) as archive:
            raw = archive.read("manifest.json")
    except KeyError:
        raise BundleManifestError(f"manifest.json not found in {path}") from None
    except (OSError, zipfile.BadZipFile) as e:
        raise BundleManifestError(f"cannot open bundle {path}: {e}") from e

    try:
        manifest = as_str_dict(json.loads(raw.decode("utf-8-sig")))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BundleManifestError(f"invalid manifest.json in {path}: {e}") from e
    if manifest is None:
        raise BundleManifestError(f"manifest.json in {path} is not an object")
    return manifest
