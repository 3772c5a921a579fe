"""
Build a standard library ``ssl.SSLContext`` from resolved TLS options.

Transports that use the ``ssl`` module can hand a Decision straight to
build_ssl_context(). Keys it does not know are ignored so the same option
list can carry settings for other TLS engines.
"""
import ssl
import logging
from typing import Any, Optional, Union

from .errors import TlsConfigError
from .options import OptionList, OptionsLike
from .types import Decision, TlsMode

logger = logging.getLogger(__name__)

_VERIFY_MODES = {
    "none": ssl.CERT_NONE,
    "verify_none": ssl.CERT_NONE,
    "optional": ssl.CERT_OPTIONAL,
    "required": ssl.CERT_REQUIRED,
    "verify_peer": ssl.CERT_REQUIRED,
}

_PURPOSES = {
    "client": ssl.Purpose.SERVER_AUTH,
    "server": ssl.Purpose.CLIENT_AUTH,
}


def _verify_mode(value: Any) -> ssl.VerifyMode:
    if isinstance(value, ssl.VerifyMode):
        return value
    if isinstance(value, bool):
        return ssl.CERT_REQUIRED if value else ssl.CERT_NONE
    if isinstance(value, str) and value.lower() in _VERIFY_MODES:
        return _VERIFY_MODES[value.lower()]
    raise TlsConfigError(f"Invalid TLS 'verify' option {value!r}")


def _tls_version(name: str, value: Any) -> ssl.TLSVersion:
    if isinstance(value, ssl.TLSVersion):
        return value
    if isinstance(value, str):
        normalized = value.replace(".", "_").replace("TLSV", "TLSv").replace("tlsv", "TLSv")
        if not normalized.startswith("TLSv") and normalized[:1].isdigit():
            normalized = f"TLSv{normalized}"
        version = getattr(ssl.TLSVersion, normalized, None)
        if version is not None:
            return version
    raise TlsConfigError(f"Invalid TLS '{name}' option {value!r}")


def build_ssl_context(
    source: Union[Decision, OptionsLike],
    *,
    purpose: str = "client",
) -> Optional[ssl.SSLContext]:
    """Create an SSLContext from a Decision or a plain option list.

    Returns None for a DISABLED decision. A FAILED decision raises
    ProviderInvocationError. The first occurrence of each key is used.
    """
    if isinstance(source, Decision):
        if source.mode == TlsMode.DISABLED:
            return None
        source.raise_for_failure()
        options = source.options
    else:
        options = OptionList.coerce(source)

    if purpose not in _PURPOSES:
        raise TlsConfigError(f"Invalid SSL context purpose '{purpose}', expected 'client' or 'server'")

    cafile = options.get_first("cafile", "ca_bundle")
    capath = options.get("capath")
    cadata = options.get("cadata")

    try:
        context = ssl.create_default_context(_PURPOSES[purpose], cafile=cafile, capath=capath, cadata=cadata)

        certfile = options.get_first("certfile", "cert")
        if certfile:
            context.load_cert_chain(
                certfile=certfile,
                keyfile=options.get_first("keyfile", "key"),
                password=options.get("password"),
            )

        # check_hostname must be relaxed before verify_mode can drop to CERT_NONE
        check_hostname = options.get("check_hostname")
        if "verify" in options:
            mode = _verify_mode(options.get("verify"))
            if mode == ssl.CERT_NONE:
                context.check_hostname = False
            context.verify_mode = mode
        if check_hostname is not None:
            context.check_hostname = bool(check_hostname)

        if "minimum_version" in options:
            context.minimum_version = _tls_version("minimum_version", options.get("minimum_version"))
        if "maximum_version" in options:
            context.maximum_version = _tls_version("maximum_version", options.get("maximum_version"))

        ciphers = options.get("ciphers")
        if ciphers:
            context.set_ciphers(ciphers if isinstance(ciphers, str) else ":".join(ciphers))

        alpn = options.get("alpn_protocols")
        if alpn:
            context.set_alpn_protocols(list(alpn))
    except (ssl.SSLError, ValueError, OSError) as e:
        raise TlsConfigError(f"Could not build SSL context: {e}") from e

    logger.debug(f"Built {purpose} SSL context from options {options.keys()}")
    return context
