"""Support bundle viewer package."""

from .config import ViewerConfig, load_config

__all__ = ["ViewerConfig", "load_config"]
