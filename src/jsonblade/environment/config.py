"""Template configuration and the error policy.

A process-wide ``TemplateConfig`` backs the module-level convenience API.
``JSONBlade`` instances may hold a private config instead, so the global
one is only read by code that was not handed an explicit config.

Configuration:
    strict_mode: Stricter-checking flag; raising still needs ``throw_on_error``
    throw_on_error: Raise ``TemplateException`` instead of warning
    allow_filter_override: Global registry entries win over built-ins
        when a ``JSONBlade`` seeds its filter map
    delimiters: Marker pair used by the lexer (default ``{{`` / ``}}``)
    debug: Log every structured error at DEBUG level

Example:
    >>> set_template_config(throw_on_error=True)
    >>> get_template_config().throw_on_error
    True
    >>> set_template_config(delimiters={"start": "[[", "end": "]]"})
    >>> get_template_config().delimiters.start
    '[['

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from jsonblade.environment.exceptions import TemplateError, TemplateException
from jsonblade.utils.constants import DEFAULT_END_DELIMITER, DEFAULT_START_DELIMITER

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Delimiters:
    """Start/end marker pair surrounding expressions and directives."""

    start: str
    end: str

    def __post_init__(self) -> None:
        if not self.start or not self.end:
            raise ValueError("Delimiters must be non-empty strings")


@dataclass(slots=True)
class TemplateConfig:
    """Settings consulted by the evaluator, lexer and error policy."""

    strict_mode: bool = False
    throw_on_error: bool = False
    allow_filter_override: bool = True
    delimiters: Delimiters = field(
        default_factory=lambda: Delimiters(DEFAULT_START_DELIMITER, DEFAULT_END_DELIMITER)
    )
    debug: bool = False

    def copy(self) -> TemplateConfig:
        return replace(self)

    def merged(self, overrides: Mapping[str, Any]) -> TemplateConfig:
        """Return a copy with top-level keys replaced.

        ``delimiters`` is replaced as a whole; a mapping must provide both
        ``start`` and ``end``.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown template config option(s): {', '.join(sorted(unknown))}")
        values = dict(overrides)
        if "delimiters" in values:
            values["delimiters"] = _coerce_delimiters(values["delimiters"])
        return replace(self, **values)


def _coerce_delimiters(value: Delimiters | Mapping[str, str]) -> Delimiters:
    if isinstance(value, Delimiters):
        return value
    if isinstance(value, Mapping):
        try:
            return Delimiters(start=value["start"], end=value["end"])
        except KeyError as e:
            raise TypeError(f"delimiters requires both 'start' and 'end' (missing {e})") from e
    raise TypeError(f"delimiters must be a Delimiters or a mapping, got {type(value).__name__}")


DEFAULT_CONFIG = TemplateConfig()

_global_config = TemplateConfig()


def _collect_overrides(
    config: TemplateConfig | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if isinstance(config, TemplateConfig):
        values.update({f.name: getattr(config, f.name) for f in fields(config)})
    elif config is not None:
        values.update(config)
    values.update(overrides)
    return values


def set_template_config(
    config: TemplateConfig | Mapping[str, Any] | None = None, /, **overrides: Any
) -> None:
    """Merge settings into the global configuration.

    Accepts a full ``TemplateConfig``, a partial mapping, keyword overrides,
    or a combination (keywords win).
    """
    global _global_config
    _global_config = _global_config.merged(_collect_overrides(config, overrides))
    logger.debug("Template config updated: %s", _global_config)


def get_template_config() -> TemplateConfig:
    """Return a defensive copy of the global configuration."""
    return _global_config.copy()


def reset_template_config() -> None:
    """Restore the global configuration to its defaults."""
    global _global_config
    _global_config = TemplateConfig()


def resolve_config(
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> TemplateConfig:
    """Effective config for one call: explicit config, else the global one."""
    if config is None:
        return get_template_config()
    if isinstance(config, TemplateConfig):
        return config
    return TemplateConfig().merged(config)


def handle_template_error(
    error: TemplateError,
    config: TemplateConfig,
    template: str | None = None,
) -> None:
    """Apply the error policy to a structured error.

    Logs the error at DEBUG when ``debug`` is set. Raises
    ``TemplateException`` when ``throw_on_error`` is set; otherwise logs a
    warning and returns so evaluation can continue. ``strict_mode`` alone
    does not raise.
    """
    if config.debug:
        logger.debug("Template Error: %s", error.to_dict())

    if config.throw_on_error:
        raise TemplateException(error, template)

    logger.warning("Template Warning [%s]: %s", error.type.value, error.message)


__all__ = [
    "DEFAULT_CONFIG",
    "Delimiters",
    "TemplateConfig",
    "get_template_config",
    "handle_template_error",
    "reset_template_config",
    "resolve_config",
    "set_template_config",
]
