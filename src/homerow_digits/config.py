"""Configuration model for an installation.

:class:`DigitsConfig` is the fully-resolved option set consumed by the
layout resolver and the key registry.  It is validated by pydantic;
:func:`build_config` is the boundary that turns a pydantic
``ValidationError`` into :class:`~homerow_digits.exceptions.ConfigError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from homerow_digits.exceptions import ConfigError


class DigitsConfig(BaseModel):
    """Options for one installation.

    Field names are snake_case; camelCase aliases (``digitOrder``,
    ``commitKeys`` …) are accepted as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    layout: str | list[str] = Field(
        "qwerty", description="Key preset name or explicit list of keys"
    )
    digit_order: str | list[str] = Field(
        "traditional", description="Digit order preset name or explicit digit list"
    )
    show_status_message: bool = Field(
        True, description="Report the number being composed after each key"
    )
    prefix_indicator: str = Field(
        "C-u ", description="Text shown before the number in status messages"
    )
    negative_keys: list[str] = Field(
        default_factory=lambda: ["-"], description="Keys acting as a minus sign"
    )
    commit_keys: list[str] = Field(
        default_factory=list, description="Keys that insert the number and stop"
    )
    commit_and_continue_keys: list[str] = Field(
        default_factory=list,
        description="Keys that insert the number plus a space and keep collecting",
    )
    decimal_keys: list[str] = Field(
        default_factory=list,
        description="Keys that insert the number plus the decimal text and keep collecting",
    )
    decimal_text: str = Field(".", description="Decimal separator text")
    auto_compile: bool = Field(
        False, description="Accepted for compatibility; has no effect"
    )

    @field_validator("digit_order", mode="before")
    @classmethod
    def _coerce_digit_list(cls, value: Any) -> Any:
        # YAML reads ``[1, 2, 3]`` as integers.
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return value

    @field_validator("layout", mode="before")
    @classmethod
    def _coerce_key_list(cls, value: Any) -> Any:
        if isinstance(value, tuple):
            return list(value)
        return value

    @field_validator(
        "negative_keys",
        "commit_keys",
        "commit_and_continue_keys",
        "decimal_keys",
    )
    @classmethod
    def _keys_not_empty(cls, value: list[str]) -> list[str]:
        if any(not key for key in value):
            raise ValueError("keys must be non-empty strings")
        return value


_FIELD_BY_ALIAS: dict[str, str] = {to_camel(name): name for name in DigitsConfig.model_fields}


def build_config(data: Mapping[str, Any] | None = None, **overrides: Any) -> DigitsConfig:
    """Validate *data* (plus keyword *overrides*) into a :class:`DigitsConfig`.

    ``None`` values in *overrides* are ignored so that unset CLI flags
    leave the file value in place.

    Raises
    ------
    ConfigError
        When validation fails.
    """
    merged: dict[str, Any] = {
        _FIELD_BY_ALIAS.get(name, name): value for name, value in (data or {}).items()
    }
    merged.update({name: value for name, value in overrides.items() if value is not None})
    try:
        return DigitsConfig.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(
            f"Invalid configuration: {problems}",
            hint="See `homerow-digits layouts` for the available presets.",
        ) from exc


def override_config(config: DigitsConfig, **overrides: Any) -> DigitsConfig:
    """Return a validated copy of *config* with *overrides* applied."""
    return build_config(config.model_dump(), **overrides)
