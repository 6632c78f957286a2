"""Configuration models for the support bundle viewer."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field


class ViewerConfig(BaseModel):
    """Configures bundle location, asset directory and listener."""

    bundle_path: str = Field(default="nvsupport.json.gz", min_length=1)
    frontend_dir: str = Field(default="frontend", min_length=1)
    host: str = Field(default="0.0.0.0", min_length=1)
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_config() -> ViewerConfig:
    return ViewerConfig(
        bundle_path=os.getenv("BUNDLE_PATH", "nvsupport.json.gz"),
        frontend_dir=os.getenv("FRONTEND_DIR", "frontend"),
        host=os.getenv("VIEWER_HOST", "0.0.0.0"),
        port=os.getenv("VIEWER_PORT", "8080"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
