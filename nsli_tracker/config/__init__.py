"""
Configuration Management

Centralized configuration for:
- Default goal thresholds
- Storage collaborator paths
- Logging level
"""

from .settings import (
    Settings,
    GoalsConfig,
    StorageConfig,
    get_settings
)

__all__ = [
    "Settings",
    "GoalsConfig",
    "StorageConfig",
    "get_settings"
]
