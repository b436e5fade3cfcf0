"""Decoder configuration.

Settings are validated with Pydantic, resolved once into an immutable
``DecoderConfig`` and then passed to the decoders. A context-local scope lets
callers (and tests) swap the ambient configuration without touching the
environment.

Precedence: programmatic > environment (``GEMINI_RESPONSE_*``) > defaults.
"""

from collections.abc import Generator, Mapping
from contextlib import contextmanager
import contextvars
import functools
import logging
import os
from typing import Any, Literal, NamedTuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "GEMINI_RESPONSE_"

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

log = logging.getLogger(__name__)

_LEVELS = logging.getLevelNamesMapping()


class DecoderSettings(BaseSettings):
    """Pydantic settings schema for response decoding.

    Log levels accept either a level name (case-insensitive) or its numeric
    value and are normalized to the upper-case name.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    unknown_enum_log_level: str = Field(
        default="ERROR",
        description="Level used when an unrecognized enum value is replaced by UNKNOWN",
    )

    missing_text_log_level: str = Field(
        default="ERROR",
        description="Level used when GenerateContentResponse.text finds no text",
    )

    accept_enum_names: bool = Field(
        default=True,
        description="Accept FinishReason wire names (e.g. 'STOP') as well as integers",
    )

    @field_validator("unknown_enum_log_level", "missing_text_log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> str:
        """Normalize a level name or number to a known level name."""
        if isinstance(v, int) and not isinstance(v, bool):
            for name, number in _LEVELS.items():
                if number == v:
                    return name
        elif isinstance(v, str):
            normalized = v.strip().upper()
            if normalized in _LEVELS:
                return normalized

        raise ValueError(
            f"Invalid log level: {v!r}. Must be one of: {', '.join(sorted(_LEVELS))}"
        )


_SETTING_FIELDS = tuple(DecoderSettings.model_fields)


class DecoderConfig(NamedTuple):
    """Resolved, immutable decoder configuration.

    Log levels are stored as numbers, ready for ``Logger.log``.
    """

    unknown_enum_log_level: int
    missing_text_log_level: int
    accept_enum_names: bool

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def with_overrides(self, **overrides: Any) -> "DecoderConfig":
        """Return a copy with programmatic overrides applied.

        Unknown fields are ignored. Values are re-validated.
        """
        known = {k: v for k, v in overrides.items() if k in _SETTING_FIELDS}
        values = {name: getattr(self, name) for name in _SETTING_FIELDS}
        values.update(known)
        origin = dict(self.origin)
        origin.update(dict.fromkeys(known, "programmatic"))
        return _from_settings(DecoderSettings(**values), origin)


def _from_settings(settings: DecoderSettings, origin: SourceMap) -> DecoderConfig:
    return DecoderConfig(
        unknown_enum_log_level=_LEVELS[settings.unknown_enum_log_level],
        missing_text_log_level=_LEVELS[settings.missing_text_log_level],
        accept_enum_names=settings.accept_enum_names,
        origin=origin,
    )


def _env_keys() -> set[str]:
    return {key.upper() for key in os.environ if key.upper().startswith(ENV_PREFIX)}


def resolve_config(programmatic: dict[str, Any] | None = None) -> DecoderConfig:
    """Resolve configuration from programmatic values, environment and defaults.

    Args:
        programmatic: Field overrides with the highest precedence.

    Returns:
        DecoderConfig with per-field origin tracking.

    Raises:
        pydantic.ValidationError: If a value fails validation.
    """
    programmatic = {
        k: v for k, v in (programmatic or {}).items() if k in _SETTING_FIELDS
    }
    settings = DecoderSettings(**programmatic)

    env_keys = _env_keys()
    origin: dict[str, ConfigOrigin] = {}
    for name in _SETTING_FIELDS:
        if name in programmatic:
            origin[name] = "programmatic"
        elif f"{ENV_PREFIX}{name.upper()}" in env_keys:
            origin[name] = "env"
        else:
            origin[name] = "default"

    return _from_settings(settings, origin)


# Context variable for ambient configuration
_ambient_config: contextvars.ContextVar[DecoderConfig] = contextvars.ContextVar(
    "gemini_response_config"
)


@functools.lru_cache(maxsize=1)
def _environment_config() -> DecoderConfig:
    """Resolve the environment once; invalid values fall back to defaults.

    Decoding must not fail because of configuration, so a bad
    ``GEMINI_RESPONSE_*`` value is reported here and defaults are used.
    Call ``resolve_config()`` directly to get the ``ValidationError``.
    """
    try:
        return resolve_config()
    except ValidationError as e:
        log.warning(
            "Ignoring invalid %s* configuration, using defaults: %s",
            ENV_PREFIX,
            e,
        )
        return _from_settings(
            DecoderSettings.model_construct(), dict.fromkeys(_SETTING_FIELDS, "default")
        )


def clear_config_cache() -> None:
    """Forget the cached environment configuration (e.g. after changing env)."""
    _environment_config.cache_clear()


def get_config() -> DecoderConfig:
    """Return the scoped configuration, or the cached environment one.

    Never raises.
    """
    try:
        return _ambient_config.get()
    except LookupError:
        return _environment_config()


@contextmanager
def config_scope(config: DecoderConfig) -> Generator[None]:
    """Temporarily use ``config`` for decoders not given one explicitly.

    The scope is context-local, so concurrent threads and tasks are unaffected.
    """
    token = _ambient_config.set(config)
    try:
        yield
    finally:
        _ambient_config.reset(token)


@contextmanager
def config_override(**overrides: Any) -> Generator[None]:
    """Convenience wrapper around ``config_scope`` for a few field overrides.

    Example:
        with config_override(unknown_enum_log_level="WARNING"):
            response = decode_response(document)
    """
    with config_scope(get_config().with_overrides(**overrides)):
        yield
