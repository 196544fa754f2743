"""Core module - Shared configuration."""

from flatsync.core.config import (
    DEFAULT_FREQUENCY,
    DEFAULT_OPERATIONS,
    SyncConfig,
    load_config,
)

__all__ = [
    "DEFAULT_FREQUENCY",
    "DEFAULT_OPERATIONS",
    "SyncConfig",
    "load_config",
]
