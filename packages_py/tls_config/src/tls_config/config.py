"""
Loading StaticConfig from arguments, environment variables and config files.
"""
import os
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .constants import (
    DEFAULT_SECTION,
    ENV_TLS_ENABLED,
    ENV_TLS_OPTIONAL,
    FALSE_STRINGS,
    KEY_BASE_OPTIONS,
    KEY_CONFIGURE,
    KEY_ENABLED,
    KEY_OPTIONAL,
    KEY_OPTIONS,
    KEY_PROVIDER,
    RESERVED_KEYS,
    TRUE_STRINGS,
)
from .errors import TlsConfigError
from .options import OptionList, OptionsLike
from .provider import coerce_provider
from .schemas import TlsConfigValidator
from .types import StaticConfig

logger = logging.getLogger(__name__)


def _resolve(arg: Any, env_keys: List[str], config: Mapping[str, Any], config_key: str, default: Any) -> Any:
    # 1. Argument
    if arg is not None:
        return arg

    # 2. Env vars
    for key in env_keys:
        val = os.getenv(key)
        if val is not None:
            logger.debug(f"Using {key} env var for '{config_key}'")
            return val

    # 3. Config mapping
    if config_key in config:
        return config[config_key]

    # 4. Default
    return default


def _resolve_bool(arg: Any, env_keys: List[str], config: Mapping[str, Any], config_key: str, default: bool) -> bool:
    """Resolve a boolean; unrecognised strings are an error rather than False."""
    val = _resolve(arg, env_keys, config, config_key, default)

    if val is None:
        return default
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        lowered = val.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    if isinstance(val, int) and val in (0, 1):
        return bool(val)

    raise TlsConfigError(f"TLS setting '{config_key}' must be a boolean, got {val!r}")


def _base_options(config: Mapping[str, Any]) -> OptionList:
    """Explicit ``base_options``/``options`` entries, then the remaining loose keys."""
    explicit = config.get(KEY_BASE_OPTIONS)
    if explicit is None:
        explicit = config.get(KEY_OPTIONS)
    loose = [(k, v) for k, v in config.items() if k not in RESERVED_KEYS]
    try:
        return OptionList.coerce(explicit) + loose
    except TypeError as e:
        raise TlsConfigError(f"Invalid TLS base options: {e}")


def load_tls_config(
    config: Optional[Mapping[str, Any]] = None,
    *,
    enabled: Optional[Union[bool, str]] = None,
    optional: Optional[Union[bool, str]] = None,
    provider: Any = None,
    base_options: Optional[OptionsLike] = None,
) -> StaticConfig:
    """Build a StaticConfig.

    Each setting resolves from, in order:
    1. Direct keyword argument
    2. Environment variable (TLS_ENABLED, TLS_OPTIONAL)
    3. Config mapping
    4. Default (disabled, required, no provider, no options)
    """
    raw: Dict[str, Any] = dict(config or {})

    resolved_enabled = _resolve_bool(enabled, ENV_TLS_ENABLED, raw, KEY_ENABLED, False)
    resolved_optional = _resolve_bool(optional, ENV_TLS_OPTIONAL, raw, KEY_OPTIONAL, False)

    provider_value = provider
    if provider_value is None:
        provider_value = raw.get(KEY_PROVIDER, raw.get(KEY_CONFIGURE))

    if base_options is not None:
        try:
            options = OptionList.coerce(base_options)
        except TypeError as e:
            raise TlsConfigError(f"Invalid TLS base options: {e}")
    else:
        options = _base_options(raw)

    try:
        TlsConfigValidator(
            enabled=resolved_enabled,
            optional=resolved_optional,
            provider=provider_value,
            base_options=list(options),
        )
    except ValidationError as e:
        raise TlsConfigError(f"TLS configuration validation failed: {str(e)}")

    static_config = StaticConfig(
        enabled=resolved_enabled,
        optional=resolved_optional,
        provider=coerce_provider(provider_value),
        base_options=options,
    )
    logger.debug(
        f"Loaded TLS config: enabled={static_config.enabled}, optional={static_config.optional}, "
        f"provider={static_config.provider is not None}, options={static_config.base_options.keys()}"
    )
    return static_config


def _select_section(data: Any, section: Optional[str]) -> Mapping[str, Any]:
    if not section:
        node = data
    else:
        node = data
        for part in section.split("."):
            if not isinstance(node, Mapping) or part not in node:
                if section != DEFAULT_SECTION:
                    raise TlsConfigError(f"TLS config section '{section}' not found")
                logger.warning(f"Section '{section}' not found, TLS disabled by default")
                return {}
            node = node[part]
    if node is None:
        return {}
    if not isinstance(node, Mapping):
        raise TlsConfigError(f"TLS config section '{section}' must be a mapping")
    return node


def load_tls_config_file(path: str, section: Optional[str] = DEFAULT_SECTION, **overrides: Any) -> StaticConfig:
    """Load a StaticConfig from a section of a YAML file (e.g. ``global.network.tls``)."""
    if not os.path.exists(path):
        raise TlsConfigError(f"TLS config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TlsConfigError(f"Invalid YAML in {path}: {e}")

    logger.debug(f"Loading TLS config from {path} section '{section}'")
    return load_tls_config(_select_section(data, section), **overrides)
