"""
TLS connection policy resolution package.
"""
from .options import OptionList
from .provider import (
    DynamicCall,
    Closure,
    Provider,
    ProviderOk,
    ProviderError,
    ProviderResult,
    coerce_provider,
    invoke_provider,
    invoke_provider_async,
)
from .types import TlsMode, StaticConfig, Decision
from .resolver import ConfigResolver, resolve_tls_config, resolve_tls_config_async
from .config import load_tls_config, load_tls_config_file
from .ssl_context import build_ssl_context
from .errors import (
    TlsConfigError,
    ProviderInvocationError,
    InvalidProviderResultError,
    ProviderTargetNotFoundError,
)

__all__ = [
    "OptionList",
    "DynamicCall",
    "Closure",
    "Provider",
    "ProviderOk",
    "ProviderError",
    "ProviderResult",
    "coerce_provider",
    "invoke_provider",
    "invoke_provider_async",
    "TlsMode",
    "StaticConfig",
    "Decision",
    "ConfigResolver",
    "resolve_tls_config",
    "resolve_tls_config_async",
    "load_tls_config",
    "load_tls_config_file",
    "build_ssl_context",
    "TlsConfigError",
    "ProviderInvocationError",
    "InvalidProviderResultError",
    "ProviderTargetNotFoundError",
]
