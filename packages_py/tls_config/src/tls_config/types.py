"""
Data models for TLS connection policy resolution.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from .constants import KEY_CONFIGURE, KEY_ENABLED, KEY_OPTIONAL
from .errors import ProviderInvocationError, TlsConfigError
from .options import OptionList, OptionPair
from .provider import Provider, coerce_provider


class TlsMode(str, Enum):
    """How a transport must treat TLS for one connection attempt."""
    DISABLED = 'disabled'
    REQUIRED = 'required'
    OPTIONAL = 'optional'
    FAILED = 'failed'


@dataclass(frozen=True)
class StaticConfig:
    """Static TLS settings for a client or server.

    ``base_options`` are passed through to the TLS engine untouched; the
    resolver only reads ``enabled``, ``optional`` and ``provider``.
    """
    enabled: bool = False
    optional: bool = False
    provider: Optional[Provider] = None
    base_options: OptionList = ()

    def __post_init__(self):
        for key, value in ((KEY_ENABLED, self.enabled), (KEY_OPTIONAL, self.optional)):
            if not isinstance(value, bool):
                raise TlsConfigError(f"TLS option '{key}' must be a boolean, got {value!r}")
        object.__setattr__(self, "base_options", OptionList.coerce(self.base_options))

    @classmethod
    def from_options(cls, options: Iterable[OptionPair]) -> "StaticConfig":
        """Build from one flat keyword list.

        ``enabled``, ``optional`` and ``configure`` are popped from the list
        (every occurrence removed, the first one used); what remains becomes
        the base options.
        """
        opts = OptionList.coerce(options)
        enabled, opts = opts.pop(KEY_ENABLED, False)
        optional, opts = opts.pop(KEY_OPTIONAL, False)
        configure, opts = opts.pop(KEY_CONFIGURE, None)
        return cls(
            enabled=enabled,
            optional=optional,
            provider=coerce_provider(configure),
            base_options=opts,
        )


@dataclass(frozen=True)
class Decision:
    """Outcome of resolving a StaticConfig for one connection attempt.

    - ``DISABLED``: plaintext connection.
    - ``REQUIRED``: TLS handshake with ``options``; no plaintext fallback.
    - ``OPTIONAL``: TLS with ``options`` when negotiated, plaintext accepted.
    - ``FAILED``: abort the attempt and surface ``cause``.
    """
    mode: TlsMode
    options: Optional[OptionList] = None
    cause: Optional[BaseException] = None

    def __post_init__(self):
        if self.mode in (TlsMode.REQUIRED, TlsMode.OPTIONAL):
            if self.cause is not None:
                raise ValueError(f"{self.mode.value} decision cannot carry a cause")
            object.__setattr__(self, "options", OptionList.coerce(self.options))
        elif self.mode == TlsMode.FAILED:
            if not isinstance(self.cause, BaseException):
                raise ValueError("failed decision requires an exception cause")
            if self.options is not None:
                raise ValueError("failed decision cannot carry options")
        elif self.options is not None or self.cause is not None:
            raise ValueError("disabled decision carries neither options nor cause")

    @classmethod
    def disabled(cls) -> "Decision":
        return cls(TlsMode.DISABLED)

    @classmethod
    def required(cls, options: Any = ()) -> "Decision":
        return cls(TlsMode.REQUIRED, options=OptionList.coerce(options))

    @classmethod
    def optional_tls(cls, options: Any = ()) -> "Decision":
        return cls(TlsMode.OPTIONAL, options=OptionList.coerce(options))

    @classmethod
    def failed(cls, cause: BaseException) -> "Decision":
        return cls(TlsMode.FAILED, cause=cause)

    @property
    def is_tls(self) -> bool:
        return self.mode in (TlsMode.REQUIRED, TlsMode.OPTIONAL)

    @property
    def allows_plaintext(self) -> bool:
        return self.mode in (TlsMode.DISABLED, TlsMode.OPTIONAL)

    @property
    def is_failed(self) -> bool:
        return self.mode == TlsMode.FAILED

    def raise_for_failure(self) -> "Decision":
        """Raise ProviderInvocationError for a failed decision, else return self."""
        if self.mode == TlsMode.FAILED:
            raise ProviderInvocationError(self.cause) from self.cause
        return self

    def as_tuple(self) -> Tuple[str, Any]:
        """``(mode, options)``, ``(mode, cause)`` or ``(mode, None)``."""
        if self.is_tls:
            return self.mode.value, self.options
        if self.is_failed:
            return self.mode.value, self.cause
        return self.mode.value, None
