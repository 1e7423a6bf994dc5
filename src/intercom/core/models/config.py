"""Configuration models using Pydantic."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigOverrides(BaseModel):
    """Partial configuration supplied per dispatcher or per call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    prevent_duplicated_event_listeners: bool | None = None
    throw_error_if_no_event_handler_found: bool | None = None
    throw_error_if_no_method_handler_found: bool | None = None


class IntercomConfig(BaseSettings):
    """Dispatcher policy, fixed at construction time."""

    model_config = SettingsConfigDict(
        env_prefix="INTERCOM_",
        extra="forbid",
        frozen=True,
    )

    # Refuse a second listener for an event name
    prevent_duplicated_event_listeners: bool = False

    # Raise when emitting an event nobody listens to
    throw_error_if_no_event_handler_found: bool = False

    # Raise when requesting a method nobody answers
    throw_error_if_no_method_handler_found: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntercomConfig:
        """Create configuration from dictionary."""
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump()

    def merge(self, overrides: ConfigLike | None) -> IntercomConfig:
        """
        Merge overrides over this config, overrides take precedence.

        Args:
            overrides: Another config, a ConfigOverrides or a partial mapping.
                None values count as not supplied.

        Returns:
            A new config; self is left untouched

        Raises:
            pydantic.ValidationError: On unknown keys or non-boolean values
        """
        if overrides is None:
            return self

        if isinstance(overrides, IntercomConfig):
            update = overrides.model_dump()
        elif isinstance(overrides, ConfigOverrides):
            update = overrides.model_dump(exclude_none=True)
        else:
            update = ConfigOverrides(**dict(overrides)).model_dump(exclude_none=True)

        if not update:
            return self
        return self.model_copy(update=update)


ConfigLike = IntercomConfig | ConfigOverrides | Mapping[str, Any]
