"""Process entry point: load the bundle, then serve the API."""

from __future__ import annotations

import sys

import uvicorn

from bundle_viewer.api.main import create_app
from bundle_viewer.config import ViewerConfig, load_config
from bundle_viewer.errors import BundleLoadError
from bundle_viewer.obs.log import configure_logging
from bundle_viewer.store.document_store import DocumentStore
from bundle_viewer.store.loader import load_bundle

VERSION = "0.1.0"


def build_store(config: ViewerConfig) -> DocumentStore:
    """Load the configured bundle into a fresh store; raises `BundleLoadError`."""
    return DocumentStore(load_bundle(config.bundle_path))


def main() -> int:
    config = load_config()
    logger = configure_logging(config.log_level)
    logger.info("support bundle viewer %s starting", VERSION)

    try:
        store = build_store(config)
    except BundleLoadError as exc:
        logger.critical("failed to load bundle, exiting: %s", exc, extra={"bundle_path": config.bundle_path})
        return 1

    app = create_app(store, config)
    logger.info("listening on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
