"""Core data models."""

from intercom.core.models.config import ConfigLike, ConfigOverrides, IntercomConfig

__all__ = [
    "ConfigLike",
    "ConfigOverrides",
    "IntercomConfig",
]
