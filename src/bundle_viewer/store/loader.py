"""Loads the gzip-compressed support bundle into a JSON tree."""

from __future__ import annotations

import gzip
import json
import zlib
from pathlib import Path
from typing import Any

from bundle_viewer.errors import BundleLoadError
from bundle_viewer.obs.log import get_logger

logger = get_logger("loader")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON.
    raise ValueError(f"non-standard JSON constant {name}")


def load_bundle(path: str | Path) -> dict[str, Any]:
    """Decompress and parse a `.json.gz` bundle.

    The root of the bundle must be a JSON object. Any I/O, decompression or
    parse failure is raised as `BundleLoadError`.
    """

    bundle_path = Path(path)
    logger.info("loading bundle", extra={"bundle_path": str(bundle_path)})

    try:
        with gzip.open(bundle_path, "rb") as handle:
            raw = handle.read()
    except (OSError, EOFError, zlib.error) as exc:
        logger.error("bundle decompression failed: %s", exc, extra={"bundle_path": str(bundle_path)})
        raise BundleLoadError(f"Cannot read bundle {bundle_path}: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("bundle is not UTF-8: %s", exc, extra={"bundle_path": str(bundle_path)})
        raise BundleLoadError(f"Bundle {bundle_path} is not UTF-8: {exc}") from exc
    logger.info("bundle decompressed", extra={"size_chars": len(text)})

    try:
        document: Any = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.error("bundle JSON parse failed: %s", exc, extra={"bundle_path": str(bundle_path)})
        raise BundleLoadError(f"Bundle {bundle_path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise BundleLoadError(
            f"Bundle {bundle_path} root must be an object, got {type(document).__name__}"
        )

    logger.info("bundle parsed", extra={"size_chars": len(text)})
    return document
